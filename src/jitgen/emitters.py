"""
Declaration Emitters
====================

Turn compiled instructions into the text consumed by the hand-written
backend. Two independent outputs are produced from the same instruction
list.

Encoder declarations (one macro invocation per instruction):

    instr_branch!(je, [0x0f, 0x84]);            ; near jump, patched later
    instr!(ret, [0xc3]);                        ; no operand
    instr!(mov_r12_u64, u64, [0x49, 0xbc]);     ; typed operand

Prototype declarations (one trait method per instruction):

    fn ret(&mut self);
    fn je(&mut self, label: Self::Label);
    fn mov_r12_u64(&mut self, operand: u64);

Branch declarations carry no operand type: the backend handles the label
displacement itself.

Copyright (c) 2026 jitgen Contributors
"""

from typing import Iterable

from jitgen.compiler import CompiledInstruction
from jitgen.template.derive import DerivedInstruction
from jitgen.template.operands import parameter_name

DEFAULT_INDENT = "    "


def format_bytes(data: bytes) -> str:
    """
    Format bytes as an array literal.

    Example:
        >>> format_bytes(bytes([0x0f, 0x84]))
        '[0x0f, 0x84]'
    """
    return "[" + ", ".join(f"0x{b:02x}" for b in data) + "]"


# =============================================================================
# Encoder Declarations
# =============================================================================

def format_encoder_declaration(instruction: CompiledInstruction) -> str:
    """Format the encoder declaration for one instruction (unindented)."""
    code = format_bytes(instruction.byte_template)

    if instruction.is_branch:
        return f"instr_branch!({instruction.identifier}, {code});"
    if instruction.operand is None:
        return f"instr!({instruction.identifier}, {code});"
    return (
        f"instr!({instruction.identifier}, "
        f"{instruction.operand.declared_name}, {code});"
    )


def emit_encoder_declarations(
    instructions: Iterable[CompiledInstruction],
    indent: str = DEFAULT_INDENT,
) -> str:
    """
    Generate encoder declarations for a compiled instruction list.

    Returns:
        One declaration per line, in input order, newline-terminated
    """
    lines = [indent + format_encoder_declaration(ins) for ins in instructions]
    return "".join(line + "\n" for line in lines)


# =============================================================================
# Prototype Declarations
# =============================================================================

def format_prototype(instruction: DerivedInstruction) -> str:
    """Format the trait method prototype for one instruction (unindented)."""
    operand = instruction.operand
    if operand is None:
        return f"fn {instruction.identifier}(&mut self);"
    return (
        f"fn {instruction.identifier}(&mut self, "
        f"{parameter_name(operand)}: {operand.declared_name});"
    )


def emit_prototype_declarations(
    instructions: Iterable[DerivedInstruction],
    indent: str = DEFAULT_INDENT,
) -> str:
    """
    Generate trait method prototypes for an instruction list.

    Prototypes depend only on derived names and types, so plain
    DerivedInstruction values are enough; no assembler run is needed.
    """
    lines = [indent + format_prototype(ins) for ins in instructions]
    return "".join(line + "\n" for line in lines)
