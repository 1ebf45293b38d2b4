"""
jitgen Command-Line Interface
=============================

- **jitgen encoders**: encoder macro invocations with opcode bytes
- **jitgen prototypes**: trait method prototypes
- **jitgen inspect**: diagnostic table of compiled templates

Each command is part of a single Click group with help and error reporting.
"""

__all__ = ["jitgen"]
