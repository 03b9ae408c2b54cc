"""Unit tests for settings models and TOML I/O."""

import tomllib
from pathlib import Path

import pytest
from pydantic import ValidationError
from reclaimctl.core.settings import (
    DEFAULT_CACHE_ROOT,
    DEFAULT_TEMP_ROOTS,
    DEFAULT_WORKING_TEMP,
    CacheSettings,
    Settings,
    SettingsError,
    SettingsParseError,
    SettingsValidationError,
    TempSettings,
    load_settings,
    save_settings,
    settings_to_dict,
)


class TestModels:
    """Tests for the settings models."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.temp.hours == 0
        assert settings.temp.roots == DEFAULT_TEMP_ROOTS
        assert settings.temp.working_temp == DEFAULT_WORKING_TEMP
        assert settings.temp.exclusions == []
        assert settings.cache.root == DEFAULT_CACHE_ROOT
        assert settings.cache.days == 32
        assert settings.logging.file == ""
        assert settings.logging.level == "INFO"

    def test_default_roots_not_shared(self) -> None:
        """Mutating one instance's roots leaves the defaults untouched."""
        first = TempSettings()
        first.roots.append("/extra")

        assert TempSettings().roots == DEFAULT_TEMP_ROOTS

    def test_negative_age_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TempSettings(hours=-1)
        with pytest.raises(ValidationError):
            CacheSettings(days=-5)

    def test_empty_exclusion_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Exclusion patterns cannot be empty"):
            CacheSettings(exclusions=["*.log", "  "])

    def test_exclusions_stripped(self) -> None:
        assert TempSettings(exclusions=[" *.lock "]).exclusions == ["*.lock"]

    def test_blank_working_temp_is_none(self) -> None:
        assert TempSettings(working_temp="  ").working_temp is None

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings.model_validate({"temp": {"hourz": 3}})

    def test_invalid_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings.model_validate({"logging": {"level": "TRACE"}})


class TestLoadSettings:
    """Tests for load_settings."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_settings(tmp_path / "absent.toml") == Settings()

    def test_default_path_used(self) -> None:
        """Without a path the XDG settings file is read (absent here)."""
        assert load_settings() == Settings()

    def test_partial_file(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        path.write_text('[cache]\ndays = 7\nexclusions = ["*.ini"]\n')

        settings = load_settings(path)

        assert settings.cache.days == 7
        assert settings.cache.exclusions == ["*.ini"]
        assert settings.cache.root == DEFAULT_CACHE_ROOT
        assert settings.temp.hours == 0

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        path.write_text("[temp\nhours = 1\n")

        with pytest.raises(SettingsParseError, match="Invalid TOML syntax"):
            load_settings(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        path.write_text('[temp]\nhours = "soon"\n')

        with pytest.raises(SettingsValidationError, match="Invalid settings"):
            load_settings(path)

    def test_errors_share_base_class(self) -> None:
        assert issubclass(SettingsParseError, SettingsError)
        assert issubclass(SettingsValidationError, SettingsError)


class TestSaveSettings:
    """Tests for save_settings and settings_to_dict."""

    def test_save_and_reload(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "settings.toml"
        settings = Settings.model_validate(
            {"temp": {"hours": 4, "exclusions": ["*.lock"]}, "cache": {"days": 10}}
        )

        saved = save_settings(settings, path)

        assert saved == path
        assert load_settings(path) == settings

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"

        save_settings(Settings(), path)

        assert [p.name for p in tmp_path.iterdir()] == ["settings.toml"]

    def test_unset_working_temp_written_as_empty_string(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        settings = Settings(temp=TempSettings(working_temp=None))

        save_settings(settings, path)

        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert data["temp"]["working_temp"] == ""
        assert load_settings(path).temp.working_temp is None

    def test_settings_to_dict_sections(self) -> None:
        data = settings_to_dict(Settings())

        assert set(data) == {"temp", "cache", "logging"}
        assert data["cache"]["days"] == 32

    def test_default_path_used(self) -> None:
        saved = save_settings(Settings())

        assert saved.name == "settings.toml"
        assert saved.exists()

    def test_unwritable_destination(self, tmp_path: Path) -> None:
        """A file in place of the parent directory is reported as SettingsError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("file")

        with pytest.raises(SettingsError, match="Failed to write settings"):
            save_settings(Settings(), blocker / "settings.toml")
