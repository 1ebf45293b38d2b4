"""
Byte Template Extraction
========================

Finds the static opcode bytes of an instruction template by asking the
assembler to encode it.

The placeholder, if any, is replaced with a sentinel number exactly as
wide as the operand (``0x11`` repeated), the instruction is assembled, and
the operand's bytes are cut off the end of the encoding:

    mov r12, $u64
    mov r12, 0x1111111111111111  ->  49 bc 11 11 11 11 11 11 11 11
                                     ^^^^^ byte template

This relies on the operand being the trailing bytes of the encoding,
which holds for immediates and rel32 displacements on x86-64. For
immediate operands the cut-off bytes are compared against the sentinel
and a warning is logged when they differ.

Copyright (c) 2026 jitgen Contributors
"""

import logging
from typing import Protocol

from jitgen.errors import OracleError
from jitgen.oracle import OracleResult
from jitgen.template.parser import ParsedTemplate

logger = logging.getLogger(__name__)

DEFAULT_SENTINEL_BYTE = 0x11


class EncodingOracle(Protocol):
    """Anything that can assemble one line of assembly."""

    def assemble(self, instruction: str) -> OracleResult:
        ...


def sentinel_literal(width: int, byte: int = DEFAULT_SENTINEL_BYTE) -> str:
    """
    Render a sentinel number of exactly ``width`` bytes.

    Example:
        >>> sentinel_literal(4)
        '0x11111111'
    """
    return "0x" + f"{byte:02x}" * width


def assembly_text(parsed: ParsedTemplate, byte: int = DEFAULT_SENTINEL_BYTE) -> str:
    """Render a template as assembly, with the sentinel in place of the placeholder."""
    placeholder = parsed.placeholder
    if placeholder is None:
        return parsed.render()
    return parsed.render(sentinel_literal(placeholder.operand.width, byte))


def extract_byte_template(
    parsed: ParsedTemplate,
    oracle: EncodingOracle,
    sentinel_byte: int = DEFAULT_SENTINEL_BYTE,
) -> bytes:
    """
    Compute the byte template of an instruction.

    Args:
        parsed: The parsed template
        oracle: Encoding oracle used to assemble the instruction
        sentinel_byte: Byte value used to fill the placeholder

    Returns:
        Encoded bytes with the trailing operand bytes removed

    Raises:
        OracleError: If the assembler fails, or returns fewer bytes than
            the operand is wide
    """
    instruction = assembly_text(parsed, sentinel_byte)
    result = oracle.assemble(instruction)

    if not result.ok:
        raise OracleError(
            f"assembler exited with status {result.returncode}",
            instruction,
            returncode=result.returncode,
            stderr=result.stderr,
        )

    encoded = result.output
    placeholder = parsed.placeholder
    if placeholder is None:
        logger.debug(f"{instruction}: {encoded.hex(' ')}")
        return encoded

    operand = placeholder.operand
    if len(encoded) < operand.width:
        raise OracleError(
            f"encoding is {len(encoded)} bytes, shorter than the "
            f"{operand.width}-byte {operand.kind} operand",
            instruction,
            returncode=result.returncode,
        )

    prefix, tail = encoded[:-operand.width], encoded[-operand.width:]
    if not operand.is_relative and tail != bytes([sentinel_byte]) * operand.width:
        logger.warning(
            f"'{parsed.source}': trailing bytes {tail.hex(' ')} are not the "
            f"{operand.kind} sentinel; the operand may not be the last field"
        )

    logger.debug(f"{instruction}: {encoded.hex(' ')} -> {prefix.hex(' ')}")
    return prefix
