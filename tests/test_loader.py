"""
Tests for instruction list loading and configuration.
"""

import logging
from pathlib import Path

import pytest

from jitgen.config import GeneratorConfig
from jitgen.errors import InstructionListError
from jitgen.template.loader import load_templates, split_templates


class TestSplitTemplates:
    def test_order_preserved(self):
        assert split_templates("ret\nje $label\nsyscall\n") == [
            "ret", "je $label", "syscall",
        ]

    def test_crlf_terminators(self):
        assert split_templates("ret\r\nsyscall\r\n") == ["ret", "syscall"]

    def test_no_trailing_newline(self):
        assert split_templates("ret\nsyscall") == ["ret", "syscall"]

    def test_blank_lines_kept_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="jitgen.template.loader"):
            assert split_templates("ret\n\nsyscall\n") == ["ret", "", "syscall"]
        assert "line 2: blank template" in caplog.text

    def test_whitespace_preserved(self):
        """Only the terminator is removed."""
        assert split_templates("  ret  \n") == ["  ret  "]

    def test_form_feed_stays_in_template(self):
        from jitgen.compiler import derive_templates

        templates = split_templates("mov r12,\x0c $u64\n")
        assert templates == ["mov r12,\x0c $u64"]
        assert [d.identifier for d in derive_templates(templates)] == ["mov_r12_u64"]

    def test_unicode_line_separators_not_split(self):
        assert split_templates("ret\u2028syscall\n") == ["ret\u2028syscall"]
        assert split_templates("ret\x85syscall\n") == ["ret\x85syscall"]

    def test_lone_carriage_return_not_split(self):
        assert split_templates("ret\rsyscall\n") == ["ret\rsyscall"]


class TestLoadTemplates:
    def test_load(self, tmp_path):
        path = tmp_path / "instructions.list"
        path.write_text("ret\nmov r12, $u64\n", encoding="utf-8")
        assert load_templates(path) == ["ret", "mov r12, $u64"]

    def test_load_keeps_control_characters(self, tmp_path):
        path = tmp_path / "instructions.list"
        path.write_bytes(b"ret\rsyscall\r\nmov r12,\x0c $u64\n")
        assert load_templates(path) == ["ret\rsyscall", "mov r12,\x0c $u64"]

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "missing.list"
        with pytest.raises(InstructionListError) as exc_info:
            load_templates(missing)
        assert exc_info.value.path == str(missing)
        assert "missing.list" in str(exc_info.value)

    def test_directory(self, tmp_path):
        with pytest.raises(InstructionListError):
            load_templates(tmp_path)

    def test_example_list_loads(self):
        """The bundled example list parses cleanly."""
        from jitgen.compiler import derive_templates

        example = Path(__file__).parent.parent / "examples" / "instructions.list"
        templates = load_templates(example)
        derived = derive_templates(templates)
        identifiers = [d.identifier for d in derived]
        assert len(set(identifiers)) == len(identifiers)
        assert "add_byte_ptr_rbx_plus_r8_u8" in identifiers
        assert "mov_r15b_byte_ptr_r14_plus_r10" in identifiers


class TestGeneratorConfig:
    def test_defaults(self):
        config = GeneratorConfig()
        assert config.assembler == "nasm"
        assert config.mode_directive == "bits 64"
        assert config.sentinel_byte == 0x11
        assert config.instruction_list == Path("instructions.list")
        assert config.jobs == 1

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("JITGEN_NASM", "/opt/nasm/bin/nasm")
        monkeypatch.setenv("JITGEN_JOBS", "8")
        config = GeneratorConfig.from_env()
        assert config.assembler == "/opt/nasm/bin/nasm"
        assert config.jobs == 8

    def test_invalid_jobs_ignored(self, monkeypatch):
        monkeypatch.delenv("JITGEN_NASM", raising=False)
        monkeypatch.setenv("JITGEN_JOBS", "many")
        config = GeneratorConfig.from_env()
        assert config.jobs == 1
        assert config.assembler == "nasm"
