"""
Instruction Templates
=====================

Loading, parsing and pure derivations for instruction templates.

Main Components
---------------
- **loader**: Reads the instruction list
- **parser**: Tokenizes templates into words, placeholders and memory operands
- **derive**: Identifier, operand type and branch classification
- **operands**: Fixed placeholder tables
"""

from jitgen.template.derive import (
    DerivedInstruction,
    classify_operand,
    derive_identifier,
    derive_instruction,
    is_branch,
)
from jitgen.template.loader import load_templates, split_templates
from jitgen.template.operands import (
    OPERAND_TYPES,
    OperandCategory,
    OperandType,
    parameter_name,
)
from jitgen.template.parser import (
    ParsedTemplate,
    TemplateToken,
    TokenKind,
    parse_template,
)

__all__ = [
    "DerivedInstruction",
    "classify_operand",
    "derive_identifier",
    "derive_instruction",
    "is_branch",
    "load_templates",
    "split_templates",
    "OPERAND_TYPES",
    "OperandCategory",
    "OperandType",
    "parameter_name",
    "ParsedTemplate",
    "TemplateToken",
    "TokenKind",
    "parse_template",
]
