"""Tests for CLI interface"""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock, patch

import click
import pytest
import yaml
from click.testing import CliRunner

from dailyphrase.cli import _die, cli, setup_logging
from dailyphrase.infrastructure import retry as retry_module
from dailyphrase.infrastructure.log_format import JsonFormatter
from dailyphrase.infrastructure.retry import RetryResult


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("DAILYPHRASE_LLM_PROVIDER", "DAILYPHRASE_LLM_MODEL", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)

    async def fake_sleep(seconds):
        return None

    monkeypatch.setattr(retry_module, "_sleep", fake_sleep)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(
        yaml.dump(
            {
                "llm": {"provider": "mock"},
                "database": {"url": f"sqlite:///{tmp_path / 'frases.db'}"},
            }
        ),
        encoding="utf-8",
    )
    return path


class TestSetupLogging:
    """Tests for setup_logging function"""

    def test_setup_logging_info_level(self):
        setup_logging(verbose=False)
        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_debug_level(self):
        setup_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_json(self):
        setup_logging(json_logs=True)
        assert all(isinstance(h.formatter, JsonFormatter) for h in logging.getLogger().handlers)
        setup_logging()


class TestDie:
    """Tests for _die function"""

    def test_die_without_exception(self):
        with pytest.raises(click.ClickException, match="Test error"):
            _die("Test error", verbose=False)

    def test_die_with_exception_verbose(self):
        with pytest.raises(click.ClickException, match="Test error"):
            _die("Test error", verbose=True, exc=ValueError("Test exception"))


class TestCommands:
    """End-to-end command tests against a temporary SQLite database"""

    def test_init_db(self, config_file):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "init-db"])
        assert result.exit_code == 0
        assert "Database ready" in result.output

    def test_phrase_with_empty_database(self, config_file):
        runner = CliRunner()
        runner.invoke(cli, ["--config", str(config_file), "init-db"])

        result = runner.invoke(cli, ["--config", str(config_file), "phrase"])

        assert result.exit_code != 0
        assert "No phrases available" in result.output

    def test_generate_then_phrase(self, config_file):
        runner = CliRunner()

        generated = runner.invoke(cli, ["--config", str(config_file), "generate"])
        assert generated.exit_code == 0, generated.output
        assert "Phrase stored (1 attempt(s)" in generated.output

        shown = runner.invoke(cli, ["--config", str(config_file), "phrase"])
        assert shown.exit_code == 0
        phrase_line = next(line for line in generated.output.splitlines() if line.startswith("["))
        assert phrase_line in shown.output

    def test_phrase_help_describes_per_run_cache(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["phrase", "--help"])
        assert result.exit_code == 0
        assert "every run advances the rotation" in " ".join(result.output.split())

    def test_generate_unknown_provider(self, config_file):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "generate", "--provider", "nope"])
        assert result.exit_code != 0
        assert "Unknown LLM provider" in result.output

    def test_generate_reports_failure(self, config_file):
        failed = RetryResult(success=False, attempts=5, total_time_ms=12, error=Exception("503"))
        job = MagicMock()

        async def run():
            return failed

        job.run = run
        runner = CliRunner()
        with patch("dailyphrase.cli.PhraseGenerationJob", return_value=job):
            result = runner.invoke(cli, ["--config", str(config_file), "generate"])

        assert result.exit_code != 0
        assert "Failed to generate phrase after 5 attempt(s)" in result.output

    def test_invalid_config_file(self, tmp_path):
        bad = tmp_path / "bad.yml"
        bad.write_text(json.dumps({"llm": {"provider": "unknown"}}), encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(bad), "phrase"])

        assert result.exit_code != 0
        assert "Configuration validation failed" in result.output
