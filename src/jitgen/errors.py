"""
jitgen Error Hierarchy
======================

This module defines the exception hierarchy for the declaration generator.
All exceptions inherit from JitgenError, allowing callers to catch every
generator failure with a single except clause.

Exception Hierarchy
-------------------
JitgenError (base)
├── InstructionListError - instruction list cannot be read
├── TemplateError (template-related, carries the template text)
│   ├── MalformedTemplateError - unterminated memory operand, extra placeholders
│   └── UnsupportedOperandError - placeholder kind not in the operand table
└── OracleError - the external assembler rejected an instruction

Any of these aborts the whole run. No declaration set is ever written
unless every template in the list was compiled.

Error messages follow this format:
    error: description
    template: offending template text
    hint: suggestion for fixing (when available)

Copyright (c) 2026 jitgen Contributors
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class JitgenError(Exception):
    """
    Base exception for all jitgen errors.

        try:
            compile_templates(lines, oracle)
        except JitgenError as e:
            print(f"Error: {e}")
    """
    pass


class InstructionListError(JitgenError):
    """
    The instruction list resource could not be read.

    Attributes:
        path: Path of the instruction list
        reason: Description of the underlying failure
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read instruction list '{path}': {reason}")


# =============================================================================
# Template Exceptions
# =============================================================================

class TemplateError(JitgenError):
    """
    Base exception for errors in a single instruction template.

    Attributes:
        message: The error description
        template: The offending template text
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        template: str,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.template = template
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with template context and hint.

        Example output:
            error: missing ] in memory operand '[rax+8'
            template: mov [rax+8, $i32
        """
        parts = [f"error: {self.message}", f"template: {self.template}"]
        if self.hint:
            parts.append(f"hint: {self.hint}")
        return "\n".join(parts)


class MalformedTemplateError(TemplateError):
    """
    Template text cannot be tokenized.

    Examples:
        - Memory operand opened with '[' but not closed with ']'
        - More than one placeholder in a single template
    """
    pass


class UnsupportedOperandError(TemplateError):
    """
    Placeholder kind is not in the operand table.

    Example:
        movsd xmm0, $f64  ; Error: 'f64' is not a supported kind
    """

    def __init__(
        self,
        kind: str,
        template: str,
        supported: Optional[list[str]] = None,
    ):
        self.kind = kind
        self.supported = supported or []

        hint = None
        if self.supported:
            hint = f"supported kinds: {', '.join(self.supported)}"

        super().__init__(
            f"unsupported operand kind '{kind}'",
            template,
            hint=hint,
        )


# =============================================================================
# Oracle Exceptions
# =============================================================================

class OracleError(JitgenError):
    """
    The external assembler failed to encode an instruction.

    Attributes:
        instruction: The assembly text handed to the assembler
        returncode: Assembler exit status (None if it never ran)
        stderr: Diagnostics printed by the assembler
    """

    def __init__(
        self,
        message: str,
        instruction: str,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        self.message = message
        self.instruction = instruction
        self.returncode = returncode
        self.stderr = stderr

        parts = [f"error: {message}", f"instruction: {instruction}"]
        if stderr.strip():
            parts.append(stderr.strip())
        super().__init__("\n".join(parts))
