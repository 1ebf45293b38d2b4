"""
Operand Placeholder Tables
==========================

Instruction templates name their single variable operand with a placeholder
token such as ``$u64`` or ``$label``. This module holds the fixed tables that
describe every supported placeholder kind:

    Kind    Width   Category            Declared type
    ----    -----   --------            -------------
    i8      1       INTEGER             i8
    u8      1       INTEGER             u8
    i32     4       INTEGER             i32
    u32     4       INTEGER             u32
    u64     8       INTEGER             u64
    label   4       RELATIVE_LABEL      Self::Label
    addr    8       ABSOLUTE_ADDRESS    Self::Address

Widths are the number of trailing bytes the operand occupies in the encoded
instruction. A ``label`` is a rel32 displacement, so it is 4 bytes wide even
though the label handle itself is abstract.

The tables are built once at import time and are read-only.
"""

from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping

from jitgen.errors import UnsupportedOperandError


# Every placeholder token starts with this character
SENTINEL_MARKER = "$"


class OperandCategory(Enum):
    """Semantic family of a placeholder operand."""
    INTEGER = auto()            # Fixed-width immediate
    RELATIVE_LABEL = auto()     # Branch target, encoded as a displacement
    ABSOLUTE_ADDRESS = auto()   # Absolute 64-bit address

    def __str__(self) -> str:
        return {
            OperandCategory.INTEGER: "integer",
            OperandCategory.RELATIVE_LABEL: "relative label",
            OperandCategory.ABSOLUTE_ADDRESS: "absolute address",
        }[self]


@dataclass(frozen=True)
class OperandType:
    """
    Semantic type of a placeholder operand.

    Attributes:
        kind: Placeholder kind as written after the marker ("u64")
        width: Encoded size in bytes
        category: Semantic family
        declared_name: Type name used in generated declarations
    """
    kind: str
    width: int
    category: OperandCategory
    declared_name: str

    @property
    def is_relative(self) -> bool:
        """True if the encoded bytes depend on the instruction's position."""
        return self.category is OperandCategory.RELATIVE_LABEL

    def __str__(self) -> str:
        return self.declared_name


def _integer(kind: str, width: int) -> OperandType:
    return OperandType(kind, width, OperandCategory.INTEGER, kind)


OPERAND_TYPES: Mapping[str, OperandType] = MappingProxyType({
    "i8": _integer("i8", 1),
    "u8": _integer("u8", 1),
    "i32": _integer("i32", 4),
    "u32": _integer("u32", 4),
    "u64": _integer("u64", 8),
    "label": OperandType("label", 4, OperandCategory.RELATIVE_LABEL, "Self::Label"),
    "addr": OperandType("addr", 8, OperandCategory.ABSOLUTE_ADDRESS, "Self::Address"),
})

# Parameter names used in prototype declarations
PARAMETER_NAMES: Mapping[OperandCategory, str] = MappingProxyType({
    OperandCategory.RELATIVE_LABEL: "label",
    OperandCategory.ABSOLUTE_ADDRESS: "addr",
})

DEFAULT_PARAMETER_NAME = "operand"


def lookup_operand_type(kind: str, template: str) -> OperandType:
    """
    Look up a placeholder kind in the operand table.

    Args:
        kind: Kind text following the marker (e.g. "i32")
        template: Template the placeholder came from, for error reporting

    Returns:
        The matching OperandType

    Raises:
        UnsupportedOperandError: If the kind is not in the table
    """
    try:
        return OPERAND_TYPES[kind]
    except KeyError:
        raise UnsupportedOperandError(
            kind, template, supported=list(OPERAND_TYPES)
        ) from None


def parameter_name(operand: OperandType) -> str:
    """Return the prototype parameter name for an operand type."""
    return PARAMETER_NAMES.get(operand.category, DEFAULT_PARAMETER_NAME)
