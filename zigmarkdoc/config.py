"""Configuration loading for zigmarkdoc (optional YAML defaults file)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError, InvocationError, ResourceError
from .render import DEFAULT_FORMAT, FORMATS, MAX_HEADER_LEVEL, RenderOptions

_KNOWN_KEYS = ("format", "header_level", "include_private", "source")


@dataclass
class FileSettings:
    """Values read from a ``--config`` file; ``None`` means not set."""

    include_private: Optional[bool] = None
    source: Optional[bool] = None
    format: Optional[str] = None
    header_level: Optional[int] = None


@dataclass
class RunConfig:
    """Effective settings for one zigmarkdoc invocation."""

    input_path: Path
    output_path: Optional[Path] = None
    check: bool = False
    include_private: bool = False
    include_source: bool = True
    output_format: str = DEFAULT_FORMAT
    header_level: int = 1

    def validate(self) -> None:
        """Reject option combinations that cannot run."""
        if self.check and self.output_path is None:
            raise InvocationError("--check requires --output")
        if not 1 <= self.header_level <= MAX_HEADER_LEVEL:
            raise InvocationError(
                f"Header level must be between 1 and {MAX_HEADER_LEVEL}, got {self.header_level}"
            )
        if self.output_format not in FORMATS:
            known = ", ".join(FORMATS)
            raise InvocationError(
                f"Unknown output format '{self.output_format}' (expected one of: {known})"
            )

    def render_options(self) -> RenderOptions:
        return RenderOptions(header_level=self.header_level, include_source=self.include_source)


def load_config(config_path: Path) -> FileSettings:
    """Load defaults from a YAML file named on the command line."""
    data = _read_config(config_path.expanduser())
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a mapping at the root")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown configuration key(s) in {config_path.name}: {', '.join(unknown)}")

    settings = FileSettings(
        include_private=_as_bool(data, "include_private"),
        source=_as_bool(data, "source"),
        format=_as_str(data, "format"),
        header_level=_as_int(data, "header_level"),
    )
    if settings.format is not None and settings.format not in FORMATS:
        raise ConfigError(f"'format' must be one of: {', '.join(FORMATS)}")
    return settings


def merge_settings(
    input_path: Path,
    *,
    output_path: Optional[Path] = None,
    check: bool = False,
    include_private: Optional[bool] = None,
    source: Optional[bool] = None,
    output_format: Optional[str] = None,
    header_level: Optional[int] = None,
    file_settings: Optional[FileSettings] = None,
) -> RunConfig:
    """Combine explicit flags, file settings and built-in defaults, in that order."""
    defaults = file_settings or FileSettings()
    return RunConfig(
        input_path=input_path,
        output_path=output_path,
        check=check,
        include_private=_first(include_private, defaults.include_private, False),
        include_source=_first(source, defaults.source, True),
        output_format=_first(output_format, defaults.format, DEFAULT_FORMAT),
        header_level=_first(header_level, defaults.header_level, 1),
    )


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ResourceError(f"Error reading config file '{path}': {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Config file '{path}' is not valid UTF-8") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_bool(data: Dict[str, Any], key: str) -> Optional[bool]:
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return value
    raise ConfigError(f"'{key}' must be true or false")


def _as_int(data: Dict[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{key}' must be an integer")
    return value


def _as_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ConfigError(f"'{key}' must be a string")


__all__ = ["FileSettings", "RunConfig", "load_config", "merge_settings"]
