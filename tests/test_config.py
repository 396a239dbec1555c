"""Tests for zigmarkdoc.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from zigmarkdoc.config import FileSettings, RunConfig, load_config, merge_settings
from zigmarkdoc.errors import ConfigError, InvocationError, ResourceError


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "zigmarkdoc.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
include_private: true
source: false
format: structured
header_level: 2
""",
    )
    settings = load_config(path)
    assert settings == FileSettings(
        include_private=True, source=False, format="structured", header_level=2
    )


def test_empty_config_file_sets_nothing(tmp_path: Path) -> None:
    assert load_config(_write(tmp_path, "\n# nothing here\n")) == FileSettings()


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "colour: blue\n",
        "include_private: maybe\n",
        "header_level: two\n",
        "header_level: true\n",
        "format: html\n",
        "format: [textual]\n",
        "key: [unclosed\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str) -> None:
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, text))


def test_config_error_is_an_invocation_error() -> None:
    assert issubclass(ConfigError, InvocationError)
    assert ConfigError("bad").exit_code == 4


def test_missing_config_file_is_resource_error(tmp_path: Path) -> None:
    with pytest.raises(ResourceError):
        load_config(tmp_path / "absent.yml")


def test_merge_prefers_flags_then_file_then_defaults(tmp_path: Path) -> None:
    settings = FileSettings(include_private=True, source=False, format="structured", header_level=2)
    config = merge_settings(
        tmp_path / "a.zig",
        include_private=None,
        source=True,
        output_format=None,
        header_level=4,
        file_settings=settings,
    )
    assert config.include_private is True
    assert config.include_source is True
    assert config.output_format == "structured"
    assert config.header_level == 4


def test_merge_defaults_without_file(tmp_path: Path) -> None:
    config = merge_settings(tmp_path / "a.zig")
    assert config == RunConfig(input_path=tmp_path / "a.zig")
    assert config.include_private is False
    assert config.include_source is True
    assert config.output_format == "textual"
    assert config.header_level == 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"check": True},
        {"header_level": 0},
        {"header_level": 7},
        {"output_format": "html"},
    ],
)
def test_validate_rejects_bad_combinations(tmp_path: Path, kwargs: dict) -> None:
    config = RunConfig(input_path=tmp_path / "a.zig", **kwargs)
    with pytest.raises(InvocationError):
        config.validate()


def test_render_options_reflect_config(tmp_path: Path) -> None:
    config = RunConfig(input_path=tmp_path / "a.zig", include_source=False, header_level=3)
    options = config.render_options()
    assert options.header_level == 3
    assert options.include_source is False
