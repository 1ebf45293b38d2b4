"""
Template Derivations
====================

Pure functions from a parsed template to the names and types the
declaration emitters need. None of these consult the assembler, so the
same DerivedInstruction drives both the encoder and the prototype output.

Identifier segments, in token order:
    word            -> lowercased word          mov      -> mov
    $label          -> (dropped)                $label   ->
    other $kind     -> kind name                $u64     -> u64
    [a+b]           -> ptr_ + interior          [rax+8]  -> ptr_rax_plus_8
"""

import re
from dataclasses import dataclass
from typing import Optional

from jitgen.template.operands import OperandCategory, OperandType
from jitgen.template.parser import ParsedTemplate, TokenKind, parse_template


# Near-jump mnemonic family: je, jg, jge, jmp, jne, jns, ...
BRANCH_PATTERN = re.compile(r"j[a-z]{1,2}")


@dataclass(frozen=True)
class DerivedInstruction:
    """
    Everything known about a template without assembling it.

    Attributes:
        template: The parsed template
        identifier: Canonical declaration name
        operand: Operand type, or None for operand-less instructions
        is_branch: True for near-jump mnemonics
    """
    template: ParsedTemplate
    identifier: str
    operand: Optional[OperandType]
    is_branch: bool

    @property
    def source(self) -> str:
        return self.template.source


def derive_identifier(parsed: ParsedTemplate) -> str:
    """
    Build the canonical identifier for a template.

    Example:
        >>> derive_identifier(parse_template("mov [rax+8], $i32"))
        'mov_ptr_rax_plus_8_i32'
    """
    segments = []
    for token in parsed.tokens:
        if token.kind is TokenKind.PLACEHOLDER:
            if token.operand.category is OperandCategory.RELATIVE_LABEL:
                continue
            segments.append(token.operand.kind)
        elif token.kind is TokenKind.MEMORY:
            segments.append("ptr_" + token.memory_interior.replace("+", "_plus_"))
        else:
            segments.append(token.text.lower())

    return "_".join(segment for segment in segments if segment)


def classify_operand(parsed: ParsedTemplate) -> Optional[OperandType]:
    """Return the operand type of the template's placeholder, if any."""
    placeholder = parsed.placeholder
    return placeholder.operand if placeholder is not None else None


def is_branch(template: str) -> bool:
    """
    True if the template's first raw token is a near-jump mnemonic.

    Only the raw template text is examined; the derived identifier and
    operand type play no part.
    """
    words = template.split()
    return bool(words) and BRANCH_PATTERN.fullmatch(words[0]) is not None


def derive_instruction(template: str) -> DerivedInstruction:
    """
    Parse a template and derive its identifier, operand and branch flag.

    Raises:
        MalformedTemplateError: See parse_template()
        UnsupportedOperandError: See parse_template()
    """
    parsed = parse_template(template)
    return DerivedInstruction(
        template=parsed,
        identifier=derive_identifier(parsed),
        operand=classify_operand(parsed),
        is_branch=is_branch(template),
    )
