"""
Shared fixtures for the jitgen test suite.

Provides an in-memory encoding oracle so template compilation can be
tested without nasm.
"""

import threading

import pytest

from jitgen.oracle import OracleResult


# Encodings as nasm produces them in 64-bit mode, sentinel byte 0x11
KNOWN_ENCODINGS = {
    "ret": bytes([0xc3]),
    "syscall": bytes([0x0f, 0x05]),
    "add r15, rax": bytes([0x49, 0x01, 0xc7]),
    "je 0x11111111": bytes([0x0f, 0x84, 0x0b, 0x11, 0x11, 0x11]),
    "jmp 0x11111111": bytes([0xe9, 0x0c, 0x11, 0x11, 0x11]),
    "mov r12, 0x1111111111111111": bytes([0x49, 0xbc]) + bytes([0x11]) * 8,
    "mov rbx, 0x1111111111111111": bytes([0x48, 0xbb]) + bytes([0x11]) * 8,
    "mov rax, 0x11111111": bytes([0xb8]) + bytes([0x11]) * 4,
    "add r8, 0x11": bytes([0x49, 0x83, 0xc0, 0x11]),
    "add r8, 0x11111111": bytes([0x49, 0x81, 0xc0]) + bytes([0x11]) * 4,
    "add byte [rbx+r8], 0x11": bytes([0x42, 0x80, 0x04, 0x03, 0x11]),
    "mov dword [rax+8], 0x11111111": bytes([0xc7, 0x40, 0x08]) + bytes([0x11]) * 4,
}


class FakeOracle:
    """
    Encoding oracle backed by a dictionary.

    Unknown instructions fail with exit status 1, like nasm does for
    invalid input. Every call is recorded in ``calls``.
    """

    def __init__(self, encodings=None):
        self.encodings = dict(KNOWN_ENCODINGS if encodings is None else encodings)
        self.calls = []
        self._lock = threading.Lock()

    def assemble(self, instruction: str) -> OracleResult:
        with self._lock:
            self.calls.append(instruction)
        if instruction in self.encodings:
            return OracleResult(instruction, 0, self.encodings[instruction])
        return OracleResult(
            instruction, 1, b"",
            "instruction.asm:2: error: invalid combination of opcode and operands",
        )


@pytest.fixture
def fake_oracle() -> FakeOracle:
    """Fixture: oracle that knows the encodings in KNOWN_ENCODINGS."""
    return FakeOracle()


@pytest.fixture
def oracle_factory():
    """Fixture: build a FakeOracle with custom encodings."""
    return FakeOracle
