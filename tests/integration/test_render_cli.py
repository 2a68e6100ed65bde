"""
Integration tests for the render_resume.py CLI - file in, markup or report out.
"""

import importlib.util
import json
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "render_resume.py"

runner = CliRunner()


@pytest.fixture
def cli(tmp_path, monkeypatch):
    """Load the CLI module with logs redirected to tmp_path."""
    spec = importlib.util.spec_from_file_location("render_resume", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module, "LOGS_PATH", tmp_path / "logs")
    yield module
    # Commands attach sinks to the runner's temporary streams
    logger.remove()


@pytest.fixture
def resume_file(cli, tmp_path):
    path = tmp_path / "resume.json"
    result = runner.invoke(cli.app, ["init", str(path)])
    assert result.exit_code == 0, result.output
    return path


@pytest.mark.integration
def test_init_refuses_overwrite(cli, resume_file):
    result = runner.invoke(cli.app, ["init", str(resume_file)])
    assert result.exit_code == 1

    result = runner.invoke(cli.app, ["init", str(resume_file), "--force"])
    assert result.exit_code == 0


@pytest.mark.integration
def test_validate_passes(cli, resume_file):
    result = runner.invoke(cli.app, ["validate", str(resume_file)])

    assert result.exit_code == 0
    assert "Validation passed" in result.output


@pytest.mark.integration
def test_validate_reports_field_paths(cli, resume_file):
    data = json.loads(resume_file.read_text(encoding="utf-8"))
    data["header"]["name"] = ""
    data["header"]["email"] = "not-an-email"
    resume_file.write_text(json.dumps(data), encoding="utf-8")

    result = runner.invoke(cli.app, ["validate", str(resume_file)])

    assert result.exit_code == 1
    assert "header.name: Name is required" in result.output
    assert "header.email: Invalid email address" in result.output


@pytest.mark.integration
@pytest.mark.parametrize(
    "dialect, expected",
    [("latex", r"\begin{document}"), ("typst", "#resume-name[Jake Ryan]")],
)
def test_markup_to_stdout(cli, resume_file, dialect, expected):
    result = runner.invoke(cli.app, ["markup", str(resume_file), "--dialect", dialect])

    assert result.exit_code == 0, result.output
    assert expected in result.stdout


@pytest.mark.integration
def test_markup_to_file_with_preset(cli, resume_file, tmp_path):
    output = tmp_path / "out" / "resume.tex"
    result = runner.invoke(
        cli.app, ["markup", str(resume_file), "-d", "latex", "-o", str(output), "-p", "margins_narrow"]
    )

    assert result.exit_code == 0, result.output
    assert r"\addtolength{\oddsidemargin}" in output.read_text(encoding="utf-8")


@pytest.mark.integration
def test_markup_unknown_preset(cli, resume_file):
    result = runner.invoke(cli.app, ["markup", str(resume_file), "-p", "margins_huge"])
    assert result.exit_code == 1


@pytest.mark.integration
def test_markup_unknown_dialect(cli, resume_file):
    result = runner.invoke(cli.app, ["markup", str(resume_file), "-d", "rtf"])
    assert result.exit_code == 1


@pytest.mark.integration
def test_presets_listing(cli):
    result = runner.invoke(cli.app, ["presets", "margins"])

    assert result.exit_code == 0
    assert "margins_narrow" in result.output
    assert "spacing_tight" not in result.output
