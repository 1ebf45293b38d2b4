"""
jitgen - Instruction Declaration Generator
==========================================

This package compiles a table of x86-64 instruction templates into the
declarations used by a hand-written JIT code generator: the static opcode
bytes of every instruction, and the trait methods that emit them.

An instruction list has one template per line. A template is ordinary
NASM syntax with at most one typed placeholder:

    ret
    je $label
    mov r12, $u64
    add byte [rbx+r8], $u8

Main Components
---------------
- **template**: Loading, parsing, identifier/operand/branch derivation
- **oracle**: NASM wrapper used to find exact encodings
- **extractor**: Byte template extraction with placeholder sentinels
- **compiler**: All-or-nothing driver over a whole instruction list
- **emitters**: Encoder and prototype declaration text

Quick Start
-----------
    >>> from jitgen import NasmOracle, compile_templates, emit_encoder_declarations
    >>> compiled = compile_templates(["ret", "mov r12, $u64"], NasmOracle())
    >>> print(emit_encoder_declarations(compiled), end="")
        instr!(ret, [0xc3]);
        instr!(mov_r12_u64, u64, [0x49, 0xbc]);

Or use the command-line tool:
    $ jitgen encoders instructions.list
    $ jitgen prototypes instructions.list

Copyright (c) 2026 jitgen Contributors
"""

__version__ = "1.0.0"

from jitgen.compiler import (
    CompiledInstruction,
    compile_templates,
    derive_templates,
)
from jitgen.config import GeneratorConfig
from jitgen.emitters import (
    emit_encoder_declarations,
    emit_prototype_declarations,
    format_encoder_declaration,
    format_prototype,
)
from jitgen.errors import (
    JitgenError,
    InstructionListError,
    TemplateError,
    MalformedTemplateError,
    UnsupportedOperandError,
    OracleError,
)
from jitgen.extractor import extract_byte_template
from jitgen.oracle import NasmOracle, OracleResult
from jitgen.template import (
    DerivedInstruction,
    OperandCategory,
    OperandType,
    derive_instruction,
    load_templates,
    parse_template,
)

__all__ = [
    "__version__",
    # Compilation
    "CompiledInstruction",
    "compile_templates",
    "derive_templates",
    "extract_byte_template",
    "GeneratorConfig",
    # Oracle
    "NasmOracle",
    "OracleResult",
    # Templates
    "DerivedInstruction",
    "OperandCategory",
    "OperandType",
    "derive_instruction",
    "load_templates",
    "parse_template",
    # Emitters
    "emit_encoder_declarations",
    "emit_prototype_declarations",
    "format_encoder_declaration",
    "format_prototype",
    # Exception hierarchy
    "JitgenError",
    "InstructionListError",
    "TemplateError",
    "MalformedTemplateError",
    "UnsupportedOperandError",
    "OracleError",
]
