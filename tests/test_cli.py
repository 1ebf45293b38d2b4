"""
Tests for the jitgen command-line interface.

The assembler is replaced with the FakeOracle from conftest.py.
"""

import pytest
from click.testing import CliRunner

from jitgen.cli.errors import ExitCode
from jitgen.cli.jitgen import main


@pytest.fixture
def instruction_list(tmp_path):
    path = tmp_path / "instructions.list"
    path.write_text("ret\nje $label\nmov r12, $u64\nmov rbx, $addr\n", encoding="utf-8")
    return path


@pytest.fixture
def use_fake_oracle(monkeypatch, fake_oracle):
    """Route the CLI's NasmOracle to the fake oracle."""
    created = []

    def factory(executable="nasm", directive="bits 64"):
        created.append((executable, directive))
        return fake_oracle

    monkeypatch.setattr("jitgen.cli.jitgen.NasmOracle", factory)
    return created


class TestMainGroup:
    def test_help(self):
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "encoders" in result.output
        assert "prototypes" in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestEncodersCommand:
    def test_stdout(self, instruction_list, use_fake_oracle):
        result = CliRunner().invoke(main, ["encoders", str(instruction_list)])
        assert result.exit_code == 0, result.output
        assert result.output == (
            "    instr!(ret, [0xc3]);\n"
            "    instr_branch!(je, [0x0f, 0x84]);\n"
            "    instr!(mov_r12_u64, u64, [0x49, 0xbc]);\n"
            "    instr!(mov_rbx_addr, Self::Address, [0x48, 0xbb]);\n"
        )

    def test_output_file(self, instruction_list, use_fake_oracle, tmp_path):
        out = tmp_path / "instructions.rs"
        result = CliRunner().invoke(
            main, ["encoders", str(instruction_list), "-o", str(out), "-j", "2"]
        )
        assert result.exit_code == 0, result.output
        assert out.read_text(encoding="utf-8").startswith("    instr!(ret, [0xc3]);\n")

    def test_nasm_option(self, instruction_list, use_fake_oracle):
        result = CliRunner().invoke(
            main, ["encoders", str(instruction_list), "--nasm", "/usr/local/bin/nasm"]
        )
        assert result.exit_code == 0
        assert use_fake_oracle == [("/usr/local/bin/nasm", "bits 64")]

    def test_default_instruction_list(self, use_fake_oracle):
        runner = CliRunner()
        with runner.isolated_filesystem():
            with open("instructions.list", "w", encoding="utf-8") as f:
                f.write("ret\n")
            result = runner.invoke(main, ["encoders"])
        assert result.exit_code == 0
        assert result.output == "    instr!(ret, [0xc3]);\n"

    def test_malformed_template_writes_nothing(self, tmp_path, use_fake_oracle, fake_oracle):
        source = tmp_path / "bad.list"
        source.write_text("ret\nmov [rax+8\n", encoding="utf-8")
        out = tmp_path / "out.rs"

        result = CliRunner().invoke(main, ["encoders", str(source), "-o", str(out)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "missing ]" in result.output
        assert "mov [rax+8" in result.output
        assert not out.exists()
        assert fake_oracle.calls == []

    def test_assembler_failure(self, tmp_path, use_fake_oracle):
        source = tmp_path / "bad.list"
        source.write_text("ret\nbogus r99\n", encoding="utf-8")
        result = CliRunner().invoke(main, ["encoders", str(source)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "bogus r99" in result.output
        assert "instr!(ret" not in result.output

    def test_missing_instruction_list(self, tmp_path, use_fake_oracle):
        result = CliRunner().invoke(main, ["encoders", str(tmp_path / "nope.list")])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "cannot read instruction list" in result.output

    def test_invalid_jobs(self, instruction_list, use_fake_oracle):
        result = CliRunner().invoke(main, ["encoders", str(instruction_list), "-j", "0"])
        assert result.exit_code == 2


class TestPrototypesCommand:
    def test_stdout(self, instruction_list):
        result = CliRunner().invoke(main, ["prototypes", str(instruction_list)])
        assert result.exit_code == 0, result.output
        assert result.output == (
            "    fn ret(&mut self);\n"
            "    fn je(&mut self, label: Self::Label);\n"
            "    fn mov_r12_u64(&mut self, operand: u64);\n"
            "    fn mov_rbx_addr(&mut self, addr: Self::Address);\n"
        )

    def test_unknown_kind(self, tmp_path):
        source = tmp_path / "bad.list"
        source.write_text("ret\nmovsd xmm0, $f64\n", encoding="utf-8")
        result = CliRunner().invoke(main, ["prototypes", str(source)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "unsupported operand kind 'f64'" in result.output
        assert "fn ret" not in result.output


class TestInspectCommand:
    def test_table(self, instruction_list, use_fake_oracle):
        result = CliRunner().invoke(main, ["inspect", str(instruction_list)])
        assert result.exit_code == 0, result.output
        assert "mov_r12_u64" in result.output
        assert "[0x0f, 0x84]" in result.output
        assert "4 instructions" in result.output

    def test_jobs_option(self, instruction_list, use_fake_oracle, monkeypatch):
        import jitgen.cli.jitgen as cli_module

        seen = []
        real_compile = cli_module.compile_templates

        def recording_compile(templates, oracle, jobs=1, **kwargs):
            seen.append(jobs)
            return real_compile(templates, oracle, jobs=jobs, **kwargs)

        monkeypatch.setattr(cli_module, "compile_templates", recording_compile)
        result = CliRunner().invoke(
            main, ["inspect", "-j", "2", str(instruction_list)]
        )
        assert result.exit_code == 0, result.output
        assert seen == [2]

    def test_jobs_from_env(self, instruction_list, use_fake_oracle, monkeypatch):
        import jitgen.cli.jitgen as cli_module

        seen = []
        real_compile = cli_module.compile_templates

        def recording_compile(templates, oracle, jobs=1, **kwargs):
            seen.append(jobs)
            return real_compile(templates, oracle, jobs=jobs, **kwargs)

        monkeypatch.setattr(cli_module, "compile_templates", recording_compile)
        monkeypatch.setenv("JITGEN_JOBS", "3")
        result = CliRunner().invoke(main, ["inspect", str(instruction_list)])
        assert result.exit_code == 0, result.output
        assert seen == [3]
