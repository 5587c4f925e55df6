"""Tests for the CLI interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from pydantic import ValidationError

from repoctx.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def initialized_project(tmp_project: Path) -> Path:
    """A tmp_project with a saved configuration."""
    runner = CliRunner()
    result = runner.invoke(main, ["init", "--path", str(tmp_project)])
    assert result.exit_code == 0, f"Init failed: {result.output}"
    return tmp_project


class TestCLIInit:
    def test_init_basic(self, runner: CliRunner, tmp_project: Path):
        result = runner.invoke(main, ["init", "--path", str(tmp_project)])
        assert result.exit_code == 0
        assert "Initializing" in result.output

    def test_init_creates_config(self, runner: CliRunner, tmp_project: Path):
        runner.invoke(main, ["init", "--path", str(tmp_project), "--budget", "5000"])
        config_path = tmp_project / ".repoctx" / "config.json"
        assert config_path.exists()
        data = json.loads(config_path.read_text())
        assert data["context"]["max_tokens"] == 5000
        assert data["name"] == tmp_project.name

    def test_init_nonexistent_path(self, runner: CliRunner):
        result = runner.invoke(main, ["init", "--path", "/nonexistent/path"])
        assert result.exit_code != 0


class TestCLIAnalyze:
    def test_analyze(self, runner: CliRunner, initialized_project: Path):
        result = runner.invoke(main, ["analyze", "--path", str(initialized_project)])
        assert result.exit_code == 0, result.output
        assert "Repository Analysis" in result.output
        assert "React" in result.output

    def test_analyze_bad_config(self, runner: CliRunner, tmp_project: Path):
        (tmp_project / ".repoctx").mkdir()
        (tmp_project / ".repoctx" / "config.json").write_text("{broken")
        result = runner.invoke(main, ["analyze", "--path", str(tmp_project)])
        assert result.exit_code != 0
        assert "Invalid config" in result.output


class TestCLIContext:
    def test_context_text(self, runner: CliRunner, initialized_project: Path):
        result = runner.invoke(
            main, ["context", "fix the login bug in auth.js", "--path", str(initialized_project)]
        )
        assert result.exit_code == 0, result.output
        assert "Intent: debugging" in result.output
        assert "src/auth.js" in result.output

    def test_context_json(self, runner: CliRunner, initialized_project: Path):
        result = runner.invoke(
            main,
            [
                "context", "explain the user service",
                "--path", str(initialized_project),
                "--json", "--no-memory", "--budget", "2000",
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["intent"]["type"] == "explanation"
        assert data["memory"] is None
        assert data["token_budget"] == 2000
        assert data["estimated_tokens"] <= 2000

    def test_context_rejects_non_positive_budget(
        self, runner: CliRunner, initialized_project: Path
    ):
        result = runner.invoke(
            main, ["context", "q", "--path", str(initialized_project), "--budget", "0"]
        )
        assert result.exit_code == 2
        assert "--budget" in result.output


class TestCLIHealth:
    def test_health(self, runner: CliRunner, initialized_project: Path):
        result = runner.invoke(main, ["health", "--path", str(initialized_project)])
        assert result.exit_code == 0, result.output
        assert "Project Health" in result.output
        assert "/100" in result.output


class TestCLIConfig:
    def test_config_show(self, runner: CliRunner, initialized_project: Path):
        result = runner.invoke(main, ["config", "show", "--path", str(initialized_project)])
        assert result.exit_code == 0
        assert "max_tokens" in result.output

    def test_config_get(self, runner: CliRunner, initialized_project: Path):
        result = runner.invoke(
            main, ["config", "get", "memory.max_recent_files", "--path", str(initialized_project)]
        )
        assert result.exit_code == 0
        assert "memory.max_recent_files = 20" in result.output

    def test_config_set(self, runner: CliRunner, initialized_project: Path):
        result = runner.invoke(
            main,
            ["config", "set", "context.max_tokens", "8000", "--path", str(initialized_project)],
        )
        assert result.exit_code == 0
        data = json.loads((initialized_project / ".repoctx" / "config.json").read_text())
        assert data["context"]["max_tokens"] == 8000

    def test_config_set_unknown_key(self, runner: CliRunner, initialized_project: Path):
        result = runner.invoke(
            main, ["config", "set", "nope.key", "1", "--path", str(initialized_project)]
        )
        assert result.exit_code != 0
        assert "Unknown config key" in result.output

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("context.max_tokens", "lots"),
            ("memory.max_conversations", "500"),
            ("context.metadata_reserve", "1"),
        ],
    )
    def test_config_set_invalid_value(
        self, runner: CliRunner, initialized_project: Path, key: str, value: str
    ):
        config_path = initialized_project / ".repoctx" / "config.json"
        before = config_path.read_text()
        result = runner.invoke(
            main, ["config", "set", key, value, "--path", str(initialized_project)]
        )
        assert result.exit_code == 1
        assert not isinstance(result.exception, ValidationError)
        assert "Invalid value" in result.output
        assert config_path.read_text() == before


class TestCLIVersion:
    def test_version(self, runner: CliRunner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output
