"""Tests for the YAML tool configuration loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from concordio.config import ConfigLoadError, ToolConfig, load_tool_config


def test_no_path_gives_defaults() -> None:
    """Without a file every setting has its default."""
    config = load_tool_config(None)
    assert config == ToolConfig()
    assert config.nuget_executable == "nuget"
    assert config.oasdiff_executable == "oasdiff"
    assert config.process_timeout is None


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    """An empty YAML document is treated as no settings."""
    path = tmp_path / "concordio.yaml"
    path.write_text("", encoding="utf-8")
    assert load_tool_config(path) == ToolConfig()


def test_values_are_loaded(tmp_path: Path) -> None:
    """List settings keep their order."""
    path = tmp_path / "concordio.yaml"
    path.write_text(
        "authors: Acme Corporation\n"
        "client: false\n"
        "properties:\n"
        "  - projectUrl=https://github.com/acme/petstore\n"
        "  - tags=pets\n"
        "nswag_options:\n"
        "  - JsonLibrary=SystemTextJson\n"
        "process_timeout: 30\n",
        encoding="utf-8",
    )
    config = load_tool_config(path)
    assert config.authors == "Acme Corporation"
    assert config.client is False
    assert config.properties == ["projectUrl=https://github.com/acme/petstore", "tags=pets"]
    assert config.nswag_options == ["JsonLibrary=SystemTextJson"]
    assert config.process_timeout == 30


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("unknown_setting: 1\n", "Invalid config file"),
        ("process_timeout: -5\n", "Invalid config file"),
        ("- just\n- a list\n", "must contain a mapping"),
        ("authors: [unclosed\n", "Failed to parse YAML"),
    ],
)
def test_invalid_files(tmp_path: Path, content: str, message: str) -> None:
    """Malformed or unknown settings are rejected with the file name."""
    path = tmp_path / "concordio.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigLoadError, match=message) as excinfo:
        load_tool_config(path)
    assert str(path) in str(excinfo.value)


def test_missing_file(tmp_path: Path) -> None:
    """A missing config file is a load error."""
    with pytest.raises(ConfigLoadError, match="Failed to read"):
        load_tool_config(tmp_path / "absent.yaml")
