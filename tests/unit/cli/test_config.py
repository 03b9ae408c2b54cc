"""Unit tests for the config command."""

import json
from pathlib import Path

from reclaimctl.cli.main import app
from reclaimctl.core.paths import get_settings_path
from reclaimctl.core.settings import Settings, load_settings
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigPath:
    """Tests for reclaimctl config path."""

    def test_default_path(self) -> None:
        result = runner.invoke(app, ["--quiet", "config", "path"])

        assert result.exit_code == 0
        assert result.stdout.strip() == str(get_settings_path())

    def test_custom_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom.toml"

        result = runner.invoke(app, ["--quiet", "--config", str(custom), "config", "path"])

        assert result.stdout.strip() == str(custom)


class TestConfigShow:
    """Tests for reclaimctl config show."""

    def test_defaults(self) -> None:
        result = runner.invoke(app, ["--quiet", "config", "show"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["cache"]["days"] == 32
        assert data["temp"]["hours"] == 0
        assert data["logging"]["level"] == "INFO"

    def test_reflects_settings_file(self, settings_file: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--quiet", "--config", str(settings_file), "config", "show"])

        data = json.loads(result.stdout)
        assert data["temp"]["roots"] == [str(tmp_path / "temp")]
        assert data["cache"]["root"] == str(tmp_path / "ccmcache")


class TestConfigInit:
    """Tests for reclaimctl config init."""

    def test_writes_defaults(self) -> None:
        result = runner.invoke(app, ["--quiet", "config", "init"])

        assert result.exit_code == 0
        assert "Settings written to" in result.stdout
        assert load_settings(get_settings_path()) == Settings()

    def test_existing_file_kept(self, settings_file: Path) -> None:
        before = settings_file.read_text(encoding="utf-8")

        result = runner.invoke(app, ["--quiet", "--config", str(settings_file), "config", "init"])

        assert result.exit_code == 1
        assert "--force" in result.stdout
        assert settings_file.read_text(encoding="utf-8") == before

    def test_force_overwrites(self, settings_file: Path) -> None:
        result = runner.invoke(
            app, ["--quiet", "--config", str(settings_file), "config", "init", "--force"]
        )

        assert result.exit_code == 0
        assert load_settings(settings_file) == Settings()

    def test_requires_subcommand(self) -> None:
        result = runner.invoke(app, ["config"])

        assert "path" in result.output
        assert "init" in result.output
