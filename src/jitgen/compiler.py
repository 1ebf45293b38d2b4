"""
Template Compiler
=================

Drives a whole instruction list through the pipeline:

    templates ──▶ parse + derive ──▶ extract byte templates ──▶ results
                  (pure, all first)   (assembler, per template)

Every template is parsed and derived before the assembler runs even once,
so a malformed line fails the run without any assembler invocation.
Extraction then runs one template at a time, or on a thread pool when
``jobs > 1``; results always come back in input order.

Compilation is all-or-nothing: the first error propagates and no results
are returned.

Copyright (c) 2026 jitgen Contributors
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable
import logging

from jitgen.extractor import (
    DEFAULT_SENTINEL_BYTE,
    EncodingOracle,
    extract_byte_template,
)
from jitgen.template.derive import DerivedInstruction, derive_instruction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledInstruction(DerivedInstruction):
    """
    A derived instruction together with its byte template.

    Attributes:
        byte_template: Static opcode bytes, trailing operand bytes removed
    """
    byte_template: bytes = b""


def derive_templates(templates: Iterable[str]) -> list[DerivedInstruction]:
    """
    Parse and derive every template, in order.

    Raises:
        TemplateError: For the first malformed template
    """
    return [derive_instruction(template) for template in templates]


def compile_instruction(
    derived: DerivedInstruction,
    oracle: EncodingOracle,
    sentinel_byte: int = DEFAULT_SENTINEL_BYTE,
) -> CompiledInstruction:
    """Extract the byte template for one derived instruction."""
    byte_template = extract_byte_template(derived.template, oracle, sentinel_byte)
    return CompiledInstruction(
        template=derived.template,
        identifier=derived.identifier,
        operand=derived.operand,
        is_branch=derived.is_branch,
        byte_template=byte_template,
    )


def compile_templates(
    templates: Iterable[str],
    oracle: EncodingOracle,
    jobs: int = 1,
    sentinel_byte: int = DEFAULT_SENTINEL_BYTE,
) -> list[CompiledInstruction]:
    """
    Compile an instruction list.

    Args:
        templates: Template lines in output order
        oracle: Encoding oracle
        jobs: Maximum concurrent assembler invocations
        sentinel_byte: Byte value used to fill placeholders

    Returns:
        One CompiledInstruction per template, in input order

    Raises:
        TemplateError: A template is malformed (raised before any assembly)
        OracleError: The assembler rejected an instruction
    """
    derived = derive_templates(templates)
    logger.debug(f"Derived {len(derived)} templates")

    def compile_one(item: DerivedInstruction) -> CompiledInstruction:
        return compile_instruction(item, oracle, sentinel_byte)

    if jobs <= 1 or len(derived) <= 1:
        compiled = [compile_one(item) for item in derived]
    else:
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            futures = [executor.submit(compile_one, item) for item in derived]
            try:
                compiled = [future.result() for future in futures]
            except Exception:
                for future in futures:
                    future.cancel()
                raise

    logger.info(f"Compiled {len(compiled)} instructions")
    return compiled
