"""Settings models and TOML file I/O.

This module defines the Pydantic models for ``settings.toml`` and the
functions for loading and saving it. A missing settings file is not an
error: every field has a default matching a stock Windows server.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from reclaimctl.core.paths import get_settings_path

# Raw (unexpanded) temp roots swept by ``reclaimctl temp``
DEFAULT_TEMP_ROOTS: list[str] = [
    r"%SystemRoot%\Temp",
    r"%SystemRoot%\ServiceProfiles\LocalService\AppData\Local\Temp",
    r"%SystemRoot%\ServiceProfiles\NetworkService\AppData\Local\Temp",
    r"%SystemDrive%\Users\*\AppData\Local\Temp",
    "%TEMP%",
]

DEFAULT_WORKING_TEMP = r"C:\Temp"

DEFAULT_CACHE_ROOT = r"%SystemRoot%\ccmcache"

LogLevelType = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class SettingsError(Exception):
    """Base exception for settings-related errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


class SettingsValidationError(SettingsError):
    """Raised when settings content is invalid."""


def _validate_patterns(patterns: list[str]) -> list[str]:
    """Reject empty exclusion patterns, which would match nothing useful."""
    cleaned = [p.strip() for p in patterns]
    if any(not p for p in cleaned):
        msg = "Exclusion patterns cannot be empty"
        raise ValueError(msg)
    return cleaned


class TempSettings(BaseModel):
    """Settings for the generic temp cleanup mode.

    Attributes:
        hours: Minimum age in hours before an entry is deleted (0 = immediate).
        roots: Raw root paths; environment placeholders and wildcards allowed.
        working_temp: Directory that is never swept, even if listed in roots.
        exclusions: File-name glob patterns that are never deleted.
    """

    model_config = ConfigDict(extra="forbid")

    hours: Annotated[int, Field(ge=0, description="Minimum age in hours")] = 0
    roots: Annotated[
        list[str],
        Field(default_factory=lambda: list(DEFAULT_TEMP_ROOTS), description="Temp roots"),
    ]
    working_temp: Annotated[
        str | None, Field(description="Working temp directory to leave alone")
    ] = DEFAULT_WORKING_TEMP
    exclusions: Annotated[
        list[str], Field(default_factory=list, description="File-name glob patterns to keep")
    ]

    @field_validator("exclusions")
    @classmethod
    def validate_exclusions(cls, v: list[str]) -> list[str]:
        return _validate_patterns(v)

    @field_validator("working_temp", mode="before")
    @classmethod
    def empty_working_temp_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class CacheSettings(BaseModel):
    """Settings for the ConfigMgr client cache modes.

    Attributes:
        root: Cache root directory; always preserved.
        days: Minimum age in days for the age-based mode.
        exclusions: File-name glob patterns that are never deleted.
    """

    model_config = ConfigDict(extra="forbid")

    root: Annotated[str, Field(min_length=1, description="Cache root")] = DEFAULT_CACHE_ROOT
    days: Annotated[int, Field(ge=0, description="Minimum age in days")] = 32
    exclusions: Annotated[
        list[str], Field(default_factory=list, description="File-name glob patterns to keep")
    ]

    @field_validator("exclusions")
    @classmethod
    def validate_exclusions(cls, v: list[str]) -> list[str]:
        return _validate_patterns(v)


class LoggingSettings(BaseModel):
    """Log sink settings.

    Attributes:
        file: Log file to append records to. Empty disables the file sink.
        level: Minimum level written to the log file.
    """

    model_config = ConfigDict(extra="forbid")

    file: Annotated[str, Field(description="Log file path")] = ""
    level: Annotated[LogLevelType, Field(description="File log level")] = "INFO"


class Settings(BaseModel):
    """Root settings model mirroring ``settings.toml``."""

    model_config = ConfigDict(extra="forbid")

    temp: Annotated[TempSettings, Field(default_factory=TempSettings)]
    cache: Annotated[CacheSettings, Field(default_factory=CacheSettings)]
    logging: Annotated[LoggingSettings, Field(default_factory=LoggingSettings)]


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings object; defaults if the file does not exist.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsValidationError: If the content doesn't match the schema.
        SettingsError: If the file cannot be read.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsValidationError(f"Invalid settings in {settings_path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically through a temporary file in the same
    directory followed by os.replace().

    Args:
        settings: The Settings object to save.
        path: Destination path. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    data = settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def settings_to_dict(settings: Settings) -> dict[str, Any]:
    """Convert Settings to a TOML-serializable dictionary.

    TOML has no null, so an unset working temp is written as an empty string.
    """
    data = settings.model_dump()
    if data["temp"]["working_temp"] is None:
        data["temp"]["working_temp"] = ""
    return data
