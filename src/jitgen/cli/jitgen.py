"""
jitgen - Backend Declaration Generator Command-Line Interface
=============================================================

Generates the instruction declarations for a hand-written x86-64 code
generator from an instruction list.

Usage Examples
--------------
Encoder macro invocations (assembles every template with nasm):
    $ jitgen encoders instructions.list > src/instructions.rs

Trait method prototypes (no assembler needed):
    $ jitgen prototypes instructions.list > src/prototypes.rs

Inspect derived names, types and byte templates:
    $ jitgen inspect instructions.list

Output is written only after every template compiled; a single bad line
fails the whole run and nothing is written.

Copyright (c) 2026 jitgen Contributors
"""

import logging
from pathlib import Path
from typing import Optional

import click

from jitgen import __version__
from jitgen.cli.errors import handle_cli_exception
from jitgen.compiler import compile_templates, derive_templates
from jitgen.config import GeneratorConfig
from jitgen.emitters import (
    emit_encoder_declarations,
    emit_prototype_declarations,
    format_bytes,
)
from jitgen.oracle import NasmOracle
from jitgen.template.loader import load_templates


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def write_output(text: str, output: Optional[Path]) -> None:
    """Write generated text to a file, or to stdout when no file is given."""
    if output is None:
        click.echo(text, nl=False)
    else:
        output.write_text(text, encoding="utf-8")


def resolve_config(nasm: Optional[str] = None, jobs: Optional[int] = None) -> GeneratorConfig:
    """Build the run configuration; command-line values win over the environment."""
    config = GeneratorConfig.from_env()
    if nasm:
        config.assembler = nasm
    if jobs is not None:
        config.jobs = jobs
    return config


INSTRUCTION_LIST = click.argument(
    "instruction_list",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)

OUTPUT = click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write declarations to a file instead of stdout",
)

VERBOSE = click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)

NASM = click.option(
    "--nasm",
    metavar="PATH",
    help="Assembler executable (default: nasm, or $JITGEN_NASM)",
)

JOBS = click.option(
    "-j", "--jobs",
    type=click.IntRange(min=1),
    help="Concurrent assembler invocations (default: 1, or $JITGEN_JOBS)",
)


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.version_option(__version__, "--version", "-V", prog_name="jitgen")
def main() -> None:
    """
    Instruction declaration generator for the x86-64 JIT backend.

    Reads an instruction list (default: instructions.list) with one
    instruction template per line, e.g. "mov r12, $u64".

    \b
    Commands:
      encoders    Encoder macro invocations with opcode bytes
      prototypes  Trait method prototypes
      inspect     Table of derived names, operand types and bytes
    """
    pass


@main.command("encoders")
@INSTRUCTION_LIST
@OUTPUT
@NASM
@JOBS
@VERBOSE
def cmd_encoders(
    instruction_list: Optional[Path],
    output: Optional[Path],
    nasm: Optional[str],
    jobs: Optional[int],
    verbose: bool,
) -> None:
    """
    Generate encoder declarations.

    Every template is assembled with nasm to find its opcode bytes.

    \b
    Examples:
      jitgen encoders                         # reads instructions.list
      jitgen encoders -j 8 -o instrs.rs list  # 8 parallel nasm runs
    """
    setup_logging(verbose)
    try:
        config = resolve_config(nasm, jobs)
        templates = load_templates(instruction_list or config.instruction_list)
        oracle = NasmOracle(config.assembler, config.mode_directive)

        compiled = compile_templates(
            templates,
            oracle,
            jobs=config.jobs,
            sentinel_byte=config.sentinel_byte,
        )
        write_output(emit_encoder_declarations(compiled, config.indent), output)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Generation")


@main.command("prototypes")
@INSTRUCTION_LIST
@OUTPUT
@VERBOSE
def cmd_prototypes(
    instruction_list: Optional[Path],
    output: Optional[Path],
    verbose: bool,
) -> None:
    """
    Generate trait method prototypes.

    \b
    Examples:
      jitgen prototypes
      jitgen prototypes -o prototypes.rs instructions.list
    """
    setup_logging(verbose)
    try:
        config = resolve_config()
        templates = load_templates(instruction_list or config.instruction_list)
        derived = derive_templates(templates)
        write_output(emit_prototype_declarations(derived, config.indent), output)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Generation")


@main.command("inspect")
@INSTRUCTION_LIST
@NASM
@JOBS
@VERBOSE
def cmd_inspect(
    instruction_list: Optional[Path],
    nasm: Optional[str],
    jobs: Optional[int],
    verbose: bool,
) -> None:
    """
    Show what each template compiles to.

    \b
    Example:
      jitgen inspect instructions.list
    """
    setup_logging(verbose)
    try:
        config = resolve_config(nasm, jobs)
        templates = load_templates(instruction_list or config.instruction_list)
        oracle = NasmOracle(config.assembler, config.mode_directive)
        compiled = compile_templates(
            templates,
            oracle,
            jobs=config.jobs,
            sentinel_byte=config.sentinel_byte,
        )

        width = max((len(ins.identifier) for ins in compiled), default=10)
        click.echo(f"{'IDENTIFIER':<{width}}  {'OPERAND':<14}  BRANCH  BYTES")
        click.echo("-" * (width + 40))
        for ins in compiled:
            operand = ins.operand.declared_name if ins.operand else "-"
            branch = "yes" if ins.is_branch else "no"
            click.echo(
                f"{ins.identifier:<{width}}  {operand:<14}  {branch:<6}  "
                f"{format_bytes(ins.byte_template)}"
            )
        click.echo(f"\n{len(compiled)} instructions")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Inspection")


if __name__ == "__main__":
    main()
