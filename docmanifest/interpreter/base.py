"""Shared types for the annotation interpreter."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, List

from ..config import DEFAULT_EXAMPLE_IMAGE_FILTER, DEFAULT_EXAMPLE_NAME_FILTER
from ..models import Location

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..config import ManifestConfig


@dataclass(frozen=True)
class InterpreterContext:
    """Read-only settings shared by every interpretation in a run."""

    exclude_dirs: frozenset[str] = frozenset()
    exclude_files: frozenset[str] = frozenset()
    example_dirs: tuple[Path, ...] = ()
    example_name_filter: str = DEFAULT_EXAMPLE_NAME_FILTER
    example_image_filter: str = DEFAULT_EXAMPLE_IMAGE_FILTER

    @classmethod
    def from_config(cls, config: "ManifestConfig") -> "InterpreterContext":
        return cls(
            exclude_dirs=frozenset(config.exclude_dirs),
            exclude_files=frozenset(config.exclude_files),
            example_dirs=tuple(config.example_dirs),
            example_name_filter=config.examples.name_filter,
            example_image_filter=config.examples.image_filter,
        )


@dataclass(frozen=True)
class AnnotationIssue:
    """A structural problem with a single command occurrence."""

    location: Location
    command: str
    message: str

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


@dataclass
class InterpretResult:
    """Entities created or updated by one comment and the problems found in it."""

    entities: List[int] = field(default_factory=list)
    issues: List[AnnotationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


class TopicArgumentError(ValueError):
    """Raised when a topic command's argument cannot be parsed."""


__all__ = [
    "AnnotationIssue",
    "InterpretResult",
    "InterpreterContext",
    "TopicArgumentError",
]
