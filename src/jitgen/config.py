"""
Generator Configuration
=======================

Settings shared by the generator commands. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of the above)

The defaults reproduce the standard build: the instruction list is
``instructions.list`` in the current directory, encodings come from
``nasm`` in 64-bit mode, and templates are assembled one at a time.

Copyright (c) 2026 jitgen Contributors
"""

from dataclasses import dataclass, field
from pathlib import Path
import logging
import os

logger = logging.getLogger(__name__)


@dataclass
class GeneratorConfig:
    """
    Configuration for a generator run.

    Attributes:
        assembler: Assembler executable used as the encoding oracle
        mode_directive: Processor-mode directive placed before each instruction
        sentinel_byte: Byte value repeated to fill a placeholder
        instruction_list: Default instruction list path
        jobs: Number of concurrent assembler invocations
        indent: Prefix for every emitted declaration line
    """

    assembler: str = "nasm"
    mode_directive: str = "bits 64"
    sentinel_byte: int = 0x11
    instruction_list: Path = field(default_factory=lambda: Path("instructions.list"))
    jobs: int = 1
    indent: str = "    "

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """
        Create GeneratorConfig from environment variables.

        Environment variables (all optional):
            JITGEN_NASM: Assembler executable
            JITGEN_JOBS: Concurrent assembler invocations (integer >= 1)

        Returns:
            GeneratorConfig with values from environment variables
        """
        config = cls()

        if assembler := os.environ.get("JITGEN_NASM"):
            config.assembler = assembler

        if jobs := os.environ.get("JITGEN_JOBS"):
            try:
                config.jobs = max(1, int(jobs))
            except ValueError:
                logger.warning(f"ignoring invalid JITGEN_JOBS value {jobs!r}")

        return config
