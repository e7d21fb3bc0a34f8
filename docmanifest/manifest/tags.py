"""Derive the search tags and filter-supplied attributes of an example."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..config import ManifestMetaFilter
from ..entities import ExampleEntity
from ..models import MetaTagMap

STOP_WORDS = frozenset({"qt", "the", "and"})
EXCLUDED_PREFIXES = ("example", "chapter")
MODULE_NAME_SUFFIXES = ("3D", "GL")


class AttributeSet:
    """Ordered attributes of one manifest element with first-writer-wins semantics."""

    def __init__(self) -> None:
        self._values: Dict[str, str] = {}

    def write(self, name: str, value: str) -> bool:
        """Store `name` unless an earlier writer already claimed it."""
        if name in self._values:
            return False
        self._values[name] = value
        return True

    @property
    def used(self) -> List[str]:
        return list(self._values)

    def items(self) -> List[tuple[str, str]]:
        return list(self._values.items())

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __getitem__(self, name: str) -> str:
        return self._values[name]


def pattern_matches(full_name: str, pattern: str) -> bool:
    """Match `project/title` against a filter name pattern.

    Patterns without `*` match exactly, a leading `*` matches everything and
    any other `*` turns the text before it into a prefix.
    """
    wildcard = pattern.find("*")
    if wildcard == -1:
        return full_name == pattern
    if wildcard == 0:
        return True
    return full_name.startswith(pattern[:wildcard])


def apply_meta_filters(
    full_name: str,
    filters: Sequence[ManifestMetaFilter],
    tags: Set[str],
    attributes: Optional[AttributeSet] = None,
) -> None:
    """Merge tags and write attributes of every filter rule matching `full_name`."""
    for meta_filter in filters:
        for pattern in meta_filter.names:
            if not pattern_matches(full_name, pattern):
                continue
            tags.update(tag.lower() for tag in meta_filter.tags)
            if attributes is None:
                continue
            for attribute in meta_filter.attributes:
                name, sep, value = attribute.partition(":")
                if not name:
                    continue
                attributes.write(name, value if sep else "true")


def title_tags(title: str) -> Set[str]:
    return set(title.lower().split())


def module_name_tags(project: str) -> Set[str]:
    """Split a CamelCase module name into lowercase words.

    `QtQuickControls` gives qt, quick, controls; a trailing `3D` or `GL` stays
    attached to its word, so `QtQuick3D` gives qt, quick3d.
    """
    return {segment.lower() for segment in split_module_name(project)}


def split_module_name(project: str) -> List[str]:
    segments: List[str] = []
    pos = 0
    length = len(project)
    while pos < length:
        if not _is_upper(project[pos]):
            pos += 1
            continue
        start = pos
        while pos < length and _is_upper(project[pos]):
            pos += 1
        while pos < length and _is_lower_or_digit(project[pos]):
            if _suffix_at(project, pos):
                break
            pos += 1
        suffix = _suffix_at(project, pos)
        if suffix:
            pos += len(suffix)
        segments.append(project[start:pos])
    return segments


def meta_command_tags(meta_tags: Optional[MetaTagMap]) -> Set[str]:
    """Tags added with `\\meta {tag} {tag1[,tag2,...]}`."""
    tags: Set[str] = set()
    if meta_tags is None:
        return tags
    for value in meta_tags.values("tag"):
        tags.update(value.lower().split(","))
    return tags


def clean_up_tags(tags: Iterable[str]) -> Set[str]:
    """Drop malformed and overly common tags."""
    cleaned: Set[str] = set()
    for tag in tags:
        if tag.startswith("("):
            tag = tag[1:-1]
        if tag.endswith(":"):
            tag = tag[:-1]
        if not _is_valid_tag(tag):
            continue
        cleaned.add(tag)
    return cleaned


def _is_valid_tag(tag: str) -> bool:
    if len(tag) < 2 or tag[0].isdigit() or tag[0] == "-":
        return False
    # Leftovers of nested punctuation such as `((name))` or `name::`.
    if tag.startswith("(") or tag.endswith(":"):
        return False
    if tag in STOP_WORDS:
        return False
    return not tag.startswith(EXCLUDED_PREFIXES)


def derive_tags(
    example: ExampleEntity,
    project: str,
    filters: Sequence[ManifestMetaFilter] = (),
    attributes: Optional[AttributeSet] = None,
) -> Set[str]:
    """Return the cleaned tag set of `example`, writing filter attributes on the way."""
    tags: Set[str] = set()
    apply_meta_filters(f"{project}/{example.title}", filters, tags, attributes)
    tags |= title_tags(example.title)
    tags |= module_name_tags(project)
    tags |= meta_command_tags(example.doc.meta_tags if example.doc is not None else None)
    return clean_up_tags(tags)


def _is_upper(char: str) -> bool:
    return "A" <= char <= "Z"


def _is_lower_or_digit(char: str) -> bool:
    return "a" <= char <= "z" or "0" <= char <= "9"


def _suffix_at(text: str, pos: int) -> str:
    for suffix in MODULE_NAME_SUFFIXES:
        if text.startswith(suffix, pos):
            return suffix
    return ""


__all__ = [
    "AttributeSet",
    "apply_meta_filters",
    "clean_up_tags",
    "derive_tags",
    "meta_command_tags",
    "module_name_tags",
    "pattern_matches",
    "split_module_name",
    "title_tags",
]
