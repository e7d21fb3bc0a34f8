"""Tests for docmanifest.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from docmanifest.config import (
    DEFAULT_EXAMPLE_IMAGE_FILTER,
    DEFAULT_EXAMPLE_NAME_FILTER,
    DEFAULT_SOURCES,
    ConfigError,
    ManifestConfig,
    ManifestMetaFilter,
    load_config,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ManifestConfig)
    assert config.root == tmp_path.resolve()
    assert config.project == tmp_path.resolve().name
    assert config.output_dir == tmp_path.resolve() / "doc"
    assert config.sources == DEFAULT_SOURCES
    assert config.example_dirs == []
    assert config.examples.name_filter == DEFAULT_EXAMPLE_NAME_FILTER
    assert config.examples.image_filter == DEFAULT_EXAMPLE_IMAGE_FILTER
    assert config.manifest_meta == []
    assert config.qhp.url_prefix == "qthelp:////"


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".docmanifest.yml"
    config_file.write_text(
        """
project: QtQuickControls
output_dir: "build/doc"
examples_install_path: "quickcontrols"
sources:
  - "src/**/*.qdoc"
example_dirs:
  - examples
exclude_dirs:
  - examples/shared
exclude_files: "*_p.h"
examples:
  name_filter: "*.cpp *.qml"
  image_filter: "*.png"
qhp:
  namespace: org.qt-project.qtquickcontrols.650
  virtual_folder: qtquickcontrols
manifestmeta:
  filters: [highlighted, android]
  highlighted:
    names:
      - "QtQuickControls/Gallery"
      - "QtQuickControls/Gallery"
    attributes: ["isHighlighted:true"]
  android:
    names: "*"
    tags: [Android]
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    root = tmp_path.resolve()
    assert config.project == "QtQuickControls"
    assert config.output_dir == root / "build" / "doc"
    assert config.examples_install_path == "quickcontrols"
    assert config.sources == ["src/**/*.qdoc"]
    assert config.example_dirs == [root / "examples"]
    assert config.exclude_dirs == ["examples/shared"]
    assert config.exclude_files == ["*_p.h"]
    assert config.examples.name_filter == "*.cpp *.qml"
    assert config.examples.image_filter == "*.png"
    assert config.qhp.url_prefix == "qthelp://org.qt-project.qtquickcontrols.650/qtquickcontrols/"
    assert config.manifest_meta == [
        ManifestMetaFilter(names=("QtQuickControls/Gallery",), attributes=("isHighlighted:true",)),
        ManifestMetaFilter(names=("*",), tags=("Android",)),
    ]


def test_load_config_resolves_directory_of_source_file(tmp_path: Path) -> None:
    (tmp_path / ".docmanifest.yml").write_text("project: Demo\n", encoding="utf-8")
    source = tmp_path / "main.qdoc"
    source.write_text("", encoding="utf-8")

    config = load_config(source)

    assert config.project == "Demo"


def test_load_config_treats_empty_file_as_defaults(tmp_path: Path) -> None:
    (tmp_path / ".docmanifest.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.project == tmp_path.resolve().name


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".docmanifest.yml").write_text("- one\n- two\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_reports_yaml_errors(tmp_path: Path) -> None:
    (tmp_path / ".docmanifest.yml").write_text("project: [unterminated\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_filter_sections_missing_from_config_are_empty(tmp_path: Path) -> None:
    (tmp_path / ".docmanifest.yml").write_text(
        "manifestmeta:\n  filters: [ghost]\n", encoding="utf-8"
    )

    config = load_config(tmp_path)

    assert config.manifest_meta == [ManifestMetaFilter()]
