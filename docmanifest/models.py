"""Core data models shared across docmanifest components."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Location:
    """Position of a command inside a documentation source file."""

    path: str = ""
    line: int = 0

    def __str__(self) -> str:
        if not self.path:
            return "<unknown>"
        return f"{self.path}:{self.line}" if self.line else self.path


@dataclass(frozen=True)
class CommandOccurrence:
    """A single `\\command argument` found in a documentation comment."""

    name: str
    argument: str = ""
    location: Location = field(default_factory=Location)


class MetaTagMap:
    """Multi-valued mapping of `\\meta` keys to their values."""

    def __init__(self, items: Sequence[Tuple[str, str]] = ()) -> None:
        self._values: Dict[str, List[str]] = defaultdict(list)
        for key, value in items:
            self.add(key, value)

    def add(self, key: str, value: str) -> None:
        self._values[key].append(value)

    def values(self, key: str) -> List[str]:
        """Return every value stored for `key`, in insertion order."""
        return list(self._values.get(key, ()))

    def value(self, key: str, default: str = "") -> str:
        """Return the most recently stored value for `key`."""
        stored = self._values.get(key)
        return stored[-1] if stored else default

    def keys(self) -> List[str]:
        return [key for key, values in self._values.items() if values]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and bool(self._values.get(key))

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        for key, values in self._values.items():
            for value in values:
                yield key, value

    def __len__(self) -> int:
        return sum(len(values) for values in self._values.values())

    def __repr__(self) -> str:
        return f"MetaTagMap({list(self)!r})"


@dataclass
class DocComment:
    """A documentation comment split into its command occurrences."""

    text: str
    commands: Tuple[CommandOccurrence, ...] = ()
    location: Location = field(default_factory=Location)
    brief: str = ""
    images: Tuple[str, ...] = ()
    meta_tags: MetaTagMap = field(default_factory=MetaTagMap)

    def __post_init__(self) -> None:
        self.commands = tuple(self.commands)
        self.images = tuple(self.images)

    @property
    def brief_text(self) -> str:
        return self.brief.strip()

    def first_image(self) -> Optional[str]:
        return self.images[0] if self.images else None
