"""
Assembler Encoding Oracle
=========================

Wraps an external assembler (NASM) that is trusted to produce the exact
byte encoding of a single instruction.

Each call runs in its own freshly created temporary directory:

    <tmp>/jitgen_XXXX/
        instruction.asm     ; "bits 64" + the instruction
        instruction.bin     ; flat binary written by nasm

The directory is removed when the call returns, whether the assembler
succeeded or not, so concurrent calls never share a path.

The result of a run is returned as an OracleResult rather than raised;
deciding whether a failure is fatal is up to the caller.

Copyright (c) 2026 jitgen Contributors
"""

from dataclasses import dataclass
from pathlib import Path
import logging
import subprocess
import tempfile

from jitgen.errors import OracleError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OracleResult:
    """
    Outcome of assembling one instruction.

    Attributes:
        instruction: The assembly text that was assembled
        returncode: Assembler exit status
        output: Raw bytes of the flat binary (empty on failure)
        stderr: Assembler diagnostics
    """
    instruction: str
    returncode: int
    output: bytes
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """True if the assembler exited successfully."""
        return self.returncode == 0


class NasmOracle:
    """
    Encoding oracle backed by the ``nasm`` assembler.

    Usage:
        oracle = NasmOracle()
        result = oracle.assemble("ret")
        result.output  # b"\\xc3"

    Attributes:
        executable: Assembler command
        directive: Processor-mode directive written before the instruction
    """

    SOURCE_NAME = "instruction.asm"
    OUTPUT_NAME = "instruction.bin"

    def __init__(self, executable: str = "nasm", directive: str = "bits 64"):
        self.executable = executable
        self.directive = directive

    def source_text(self, instruction: str) -> str:
        """Return the complete assembly source for one instruction."""
        return f"{self.directive}\n{instruction}\n"

    def assemble(self, instruction: str) -> OracleResult:
        """
        Assemble a single instruction to flat binary.

        Args:
            instruction: One line of assembly with no placeholders left

        Returns:
            OracleResult with the raw output bytes and exit status

        Raises:
            OracleError: If the assembler executable cannot be started
        """
        with tempfile.TemporaryDirectory(prefix="jitgen_") as temp_dir:
            temp_path = Path(temp_dir)
            source = temp_path / self.SOURCE_NAME
            output = temp_path / self.OUTPUT_NAME
            source.write_text(self.source_text(instruction), encoding="utf-8")

            cmd = [self.executable, "-f", "bin", "-o", str(output), str(source)]
            logger.debug(f"Running {' '.join(cmd)} for '{instruction}'")

            try:
                completed = subprocess.run(cmd, capture_output=True, text=True)
            except FileNotFoundError:
                raise OracleError(
                    f"assembler '{self.executable}' not found - is nasm installed?",
                    instruction,
                ) from None

            data = b""
            if completed.returncode == 0 and output.exists():
                data = output.read_bytes()

            return OracleResult(
                instruction=instruction,
                returncode=completed.returncode,
                output=data,
                stderr=completed.stderr,
            )
