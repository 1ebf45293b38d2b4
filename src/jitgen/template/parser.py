"""
Instruction Template Parser
===========================

Splits an instruction template into classified tokens.

A template is one line of assembly with at most one typed placeholder:

    mov [rax+8], $i32
    ^^^ ^^^^^^^  ^^^^
    |   |        placeholder (kind i32)
    |   memory operand
    word

Tokens are separated by runs of whitespace. Trailing commas are operand
separators and are stripped before classification, but each token keeps
its raw text so the template can be rendered back into assembly source
with the placeholder replaced.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from jitgen.errors import MalformedTemplateError
from jitgen.template.operands import (
    SENTINEL_MARKER,
    OperandType,
    lookup_operand_type,
)


# =============================================================================
# Token Types
# =============================================================================

class TokenKind(Enum):
    """Classification of a template token."""
    WORD = auto()           # Mnemonic, register or size keyword
    PLACEHOLDER = auto()    # $kind
    MEMORY = auto()         # [base+offset]


@dataclass(frozen=True)
class TemplateToken:
    """
    A single classified token.

    Attributes:
        kind: The TokenKind classification
        text: Token text with separators stripped
        raw: Token text exactly as written
        operand: Operand type for placeholder tokens, None otherwise
    """
    kind: TokenKind
    text: str
    raw: str
    operand: Optional[OperandType] = None

    @property
    def separator(self) -> str:
        """Trailing separator characters stripped from the raw text."""
        return self.raw[len(self.text):]

    @property
    def memory_interior(self) -> str:
        """Text between the brackets of a memory operand."""
        return self.text[1:-1]


@dataclass(frozen=True)
class ParsedTemplate:
    """
    A tokenized instruction template.

    Attributes:
        source: The template text as read from the instruction list
        tokens: Classified tokens in their original order
    """
    source: str
    tokens: tuple[TemplateToken, ...]

    @property
    def placeholder(self) -> Optional[TemplateToken]:
        """The placeholder token, if the template has one."""
        for token in self.tokens:
            if token.kind is TokenKind.PLACEHOLDER:
                return token
        return None

    @property
    def mnemonic(self) -> str:
        """First raw token of the template, or "" for a blank template."""
        return self.tokens[0].raw if self.tokens else ""

    def render(self, substitute: Optional[str] = None) -> str:
        """
        Render the template back into assembly source.

        Args:
            substitute: Text to put in place of the placeholder. Required
                when the template has a placeholder.

        Returns:
            Single-line assembly text
        """
        parts = []
        for token in self.tokens:
            if token.kind is TokenKind.PLACEHOLDER:
                if substitute is None:
                    raise ValueError(
                        f"template '{self.source}' needs a placeholder substitute"
                    )
                parts.append(substitute + token.separator)
            else:
                parts.append(token.raw)
        return " ".join(parts)


# =============================================================================
# Parsing
# =============================================================================

def classify_token(raw: str, template: str) -> TemplateToken:
    """
    Classify one whitespace-delimited token.

    Args:
        raw: Token text as written
        template: Full template text, for error reporting

    Raises:
        UnsupportedOperandError: Placeholder with an unknown kind
        MalformedTemplateError: Memory operand missing its closing bracket
    """
    text = raw.rstrip(",")

    if text.startswith(SENTINEL_MARKER):
        operand = lookup_operand_type(text[len(SENTINEL_MARKER):], template)
        return TemplateToken(TokenKind.PLACEHOLDER, text, raw, operand)

    if text.startswith("["):
        if not text.endswith("]"):
            raise MalformedTemplateError(
                f"missing ] in memory operand '{text}'",
                template,
            )
        return TemplateToken(TokenKind.MEMORY, text, raw)

    return TemplateToken(TokenKind.WORD, text, raw)


def parse_template(template: str) -> ParsedTemplate:
    """
    Tokenize an instruction template.

    Args:
        template: One line from the instruction list

    Returns:
        ParsedTemplate with tokens in source order

    Raises:
        MalformedTemplateError: Unterminated memory operand or more than
            one placeholder
        UnsupportedOperandError: Unknown placeholder kind

    Example:
        >>> parsed = parse_template("mov [rax+8], $i32")
        >>> [t.kind.name for t in parsed.tokens]
        ['WORD', 'MEMORY', 'PLACEHOLDER']
    """
    tokens = tuple(classify_token(raw, template) for raw in template.split())

    placeholders = [t for t in tokens if t.kind is TokenKind.PLACEHOLDER]
    if len(placeholders) > 1:
        raise MalformedTemplateError(
            f"multiple placeholders ({', '.join(t.text for t in placeholders)})",
            template,
            hint="a template may contain at most one placeholder",
        )

    return ParsedTemplate(template, tokens)
