"""Integration tests for scripts/generate_pdf.py."""

import importlib.util
from pathlib import Path

import pytest
from typer.testing import CliRunner

SCRIPT_PATH = Path(__file__).parent.parent.parent / "scripts" / "generate_pdf.py"
FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"

runner = CliRunner()


@pytest.fixture
def cli(monkeypatch):
    spec = importlib.util.spec_from_file_location("generate_pdf", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    # Sinks are configured by the test session, not by the command
    monkeypatch.setattr(module, "setup_logger", lambda *args, **kwargs: None)
    return module


@pytest.mark.integration
def test_no_command_shows_help(cli):
    result = runner.invoke(cli.app, [])
    assert result.exit_code == 0
    assert "generate" in result.output
    assert "render" in result.output


@pytest.mark.integration
def test_render_to_stdout(cli):
    result = runner.invoke(cli.app, ["render", str(FIXTURES_PATH / "resume.yaml")])

    assert result.exit_code == 0
    assert "Grace Hopper" in result.output
    assert "Rear Admiral \\& Compiler Pioneer" in result.output
    assert "\\VAR{" not in result.output


@pytest.mark.integration
def test_render_to_file(cli, tmp_path):
    output = tmp_path / "out" / "resume.tex"
    result = runner.invoke(
        cli.app, ["render", str(FIXTURES_PATH / "resume.json"), "--output", str(output)]
    )

    assert result.exit_code == 0
    assert "\\skill{Cryptanalysis}" in output.read_text(encoding="utf-8")


@pytest.mark.integration
def test_render_missing_input(cli, tmp_path):
    result = runner.invoke(cli.app, ["render", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 1


@pytest.mark.integration
def test_generate(cli, fake_compiler, temp_area, tmp_path):
    output = tmp_path / "cv.pdf"
    result = runner.invoke(
        cli.app,
        [
            "generate",
            str(FIXTURES_PATH / "resume.yaml"),
            "--output",
            str(output),
            "--compiler",
            fake_compiler.path,
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Generation succeeded" in result.output
    assert output.read_bytes().startswith(b"%PDF-")
    assert list(temp_area.iterdir()) == []


@pytest.mark.integration
def test_generate_compiler_failure(cli, fake_compiler, temp_area, tmp_path, monkeypatch):
    monkeypatch.setenv("FAKE_LATEX_MODE", "fail")
    output = tmp_path / "cv.pdf"

    result = runner.invoke(
        cli.app,
        [
            "generate",
            str(FIXTURES_PATH / "resume.yaml"),
            "--output",
            str(output),
            "--compiler",
            fake_compiler.path,
        ],
    )

    assert result.exit_code == 1
    assert "CompilationFailed" in result.output
    assert "Undefined control sequence." in result.output
    assert not output.exists()
    assert list(temp_area.iterdir()) == []
