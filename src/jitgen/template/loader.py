"""
Instruction list loading.

The instruction list is a UTF-8 text file with one template per line.
Lines end at "\n" (optionally preceded by "\r"). Order is preserved and
only the terminator is removed; other control characters such as form
feeds stay part of the template.

Copyright (c) 2026 jitgen Contributors
"""

import logging
from pathlib import Path
from typing import Union

from jitgen.errors import InstructionListError

logger = logging.getLogger(__name__)


def split_templates(text: str) -> list[str]:
    """Split instruction list text into templates, one per line."""
    templates = text.split("\n")
    if templates[-1] == "":
        # Final newline terminates the last line, it does not start a new one
        templates.pop()
    templates = [t[:-1] if t.endswith("\r") else t for t in templates]
    for number, template in enumerate(templates, start=1):
        if not template.strip():
            logger.warning(f"line {number}: blank template")
    return templates


def load_templates(path: Union[str, Path]) -> list[str]:
    """
    Read an instruction list from disk.

    Args:
        path: Path to the instruction list

    Returns:
        Templates in file order

    Raises:
        InstructionListError: If the file cannot be read or decoded
    """
    path = Path(path)
    try:
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InstructionListError(str(path), str(e)) from e

    templates = split_templates(text)
    logger.debug(f"Loaded {len(templates)} templates from {path}")
    return templates
