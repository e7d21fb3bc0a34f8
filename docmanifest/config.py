"""Configuration loading for docmanifest (.docmanifest.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".docmanifest.yml"

DEFAULT_SOURCES = ["**/*.qdoc", "**/*.cpp", "**/*.h"]
DEFAULT_EXAMPLE_NAME_FILTER = "*.cpp *.h *.qml *.js *.py"
DEFAULT_EXAMPLE_IMAGE_FILTER = "*.png *.jpg *.svg *.webp"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class ManifestMetaFilter:
    """Extra attributes and tags applied to examples whose full name matches."""

    names: tuple[str, ...] = ()
    attributes: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()


@dataclass
class QhpConfig:
    """Help-project settings used to build documentation URLs."""

    namespace: Optional[str] = None
    virtual_folder: Optional[str] = None

    @property
    def url_prefix(self) -> str:
        return f"qthelp://{self.namespace or ''}/{self.virtual_folder or ''}/"


@dataclass
class ExampleConfig:
    """Globs used when collecting example source and image files."""

    name_filter: str = DEFAULT_EXAMPLE_NAME_FILTER
    image_filter: str = DEFAULT_EXAMPLE_IMAGE_FILTER


@dataclass
class ManifestConfig:
    """Represents the high-level settings defined in .docmanifest.yml."""

    root: Path
    project: str = ""
    output_dir: Path | None = None
    examples_install_path: str = ""
    sources: List[str] = field(default_factory=lambda: list(DEFAULT_SOURCES))
    example_dirs: List[Path] = field(default_factory=list)
    exclude_dirs: List[str] = field(default_factory=list)
    exclude_files: List[str] = field(default_factory=list)
    examples: ExampleConfig = field(default_factory=ExampleConfig)
    qhp: QhpConfig = field(default_factory=QhpConfig)
    manifest_meta: List[ManifestMetaFilter] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.project:
            self.project = self.root.name
        if self.output_dir is None:
            self.output_dir = self.root / "doc"


def load_config(config_path: Path) -> ManifestConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ManifestConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_dir_str = _as_str(data.get("output_dir"))
    sources = _as_str_list(data.get("sources")) if "sources" in data else list(DEFAULT_SOURCES)

    examples_data = _as_dict(data.get("examples"))
    examples = ExampleConfig()
    if examples_data:
        examples.name_filter = _as_str(examples_data.get("name_filter")) or DEFAULT_EXAMPLE_NAME_FILTER
        examples.image_filter = _as_str(examples_data.get("image_filter")) or DEFAULT_EXAMPLE_IMAGE_FILTER

    qhp_data = _as_dict(data.get("qhp"))
    qhp = QhpConfig(
        namespace=_as_str(qhp_data.get("namespace")),
        virtual_folder=_as_str(qhp_data.get("virtual_folder")),
    )

    return ManifestConfig(
        root=root,
        project=_as_str(data.get("project")) or "",
        output_dir=root / output_dir_str if output_dir_str else None,
        examples_install_path=_as_str(data.get("examples_install_path")) or "",
        sources=sources,
        example_dirs=[root / entry for entry in _as_str_list(data.get("example_dirs"))],
        exclude_dirs=_as_str_list(data.get("exclude_dirs")),
        exclude_files=_as_str_list(data.get("exclude_files")),
        examples=examples,
        qhp=qhp,
        manifest_meta=_read_manifest_meta(_as_dict(data.get("manifestmeta"))),
    )


def _read_manifest_meta(data: Dict[str, Any]) -> List[ManifestMetaFilter]:
    filters: List[ManifestMetaFilter] = []
    for section in _as_str_list(data.get("filters")):
        section_data = _as_dict(data.get(section))
        filters.append(
            ManifestMetaFilter(
                names=_unique(_as_str_list(section_data.get("names"))),
                attributes=_unique(_as_str_list(section_data.get("attributes"))),
                tags=_unique(_as_str_list(section_data.get("tags"))),
            )
        )
    return filters


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _unique(values: Sequence[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
