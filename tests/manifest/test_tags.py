"""Tests for manifest tag derivation."""

from __future__ import annotations

import pytest

from docmanifest.config import ManifestMetaFilter
from docmanifest.entities import ExampleEntity
from docmanifest.manifest.tags import (
    AttributeSet,
    apply_meta_filters,
    clean_up_tags,
    derive_tags,
    meta_command_tags,
    module_name_tags,
    pattern_matches,
    split_module_name,
    title_tags,
)
from docmanifest.models import DocComment, MetaTagMap


def test_module_name_tags_drop_qt_after_cleanup() -> None:
    assert module_name_tags("QtQuickControls") == {"qt", "quick", "controls"}
    assert clean_up_tags(module_name_tags("QtQuickControls")) == {"quick", "controls"}


@pytest.mark.parametrize(
    ("project", "segments"),
    [
        ("QtQuick3D", ["Qt", "Quick3D"]),
        ("QtOpenGL", ["Qt", "OpenGL"]),
        ("QtWebEngineWidgets", ["Qt", "Web", "Engine", "Widgets"]),
        ("QtQml", ["Qt", "Qml"]),
        ("qt5compat", []),
    ],
)
def test_split_module_name(project: str, segments) -> None:
    assert split_module_name(project) == segments


def test_fused_3d_suffix_stays_one_tag() -> None:
    assert clean_up_tags(module_name_tags("QtQuick3D")) == {"quick3d"}


@pytest.mark.parametrize(
    ("pattern", "matches"),
    [
        ("MyModule/Foo", True),
        ("MyModule/Fo", False),
        ("MyModule*", True),
        ("Other*", False),
        ("*", True),
        ("*Foo", True),
    ],
)
def test_pattern_matches(pattern: str, matches: bool) -> None:
    assert pattern_matches("MyModule/Foo", pattern) is matches


def test_filters_merge_tags_and_write_attributes() -> None:
    filters = [
        ManifestMetaFilter(names=("MyModule*",), attributes=("isHighlighted", "category:graphics"), tags=("Android",)),
        ManifestMetaFilter(names=("*",), attributes=("category:other",), tags=("embedded",)),
    ]
    tags = set()
    attributes = AttributeSet()

    apply_meta_filters("MyModule/Foo", filters, tags, attributes)

    assert tags == {"android", "embedded"}
    assert attributes.items() == [("isHighlighted", "true"), ("category", "graphics")]


def test_filter_attributes_never_replace_written_ones() -> None:
    attributes = AttributeSet()
    attributes.write("name", "Analog Clock")

    apply_meta_filters("Proj/Analog Clock", [ManifestMetaFilter(names=("*",), attributes=("name:Other",))], set(), attributes)

    assert attributes["name"] == "Analog Clock"
    assert attributes.used == ["name"]


def test_title_and_meta_tags_are_lowercased() -> None:
    meta = MetaTagMap([("tag", "Widgets,Layout"), ("tag", "painting"), ("category", "ignored")])

    assert title_tags("Analog  Clock Example") == {"analog", "clock", "example"}
    assert meta_command_tags(meta) == {"widgets", "layout", "painting"}
    assert meta_command_tags(None) == set()


def test_clean_up_rules() -> None:
    candidates = {
        "(foo)", "bar:", "a", "3d", "-x", "the", "and", "qt", "examples",
        "chapter1", "widgets", "((nested))", "baz::",
    }

    assert clean_up_tags(candidates) == {"foo", "bar", "widgets"}


def test_clean_up_is_idempotent() -> None:
    candidates = {"(foo)", "bar:", "((deep))", "x", "2d", "charts", "ok:"}

    once = clean_up_tags(candidates)

    assert clean_up_tags(once) == once
    assert all(tag == tag.lower() and len(tag) >= 2 for tag in once)


def test_derive_tags_combines_every_source() -> None:
    doc = DocComment(text="", meta_tags=MetaTagMap([("tag", "Timer")]))
    example = ExampleEntity(name="widgets/analogclock", title="Analog Clock Example", doc=doc)
    filters = [ManifestMetaFilter(names=("QtWidgets/Analog*",), tags=("Painting",))]

    tags = derive_tags(example, "QtWidgets", filters)

    assert tags == {"analog", "clock", "widgets", "timer", "painting"}


def test_derive_tags_does_not_leak_between_examples() -> None:
    first = ExampleEntity(name="a", title="Rotating Cube")
    second = ExampleEntity(name="b", title="Calendar")

    derive_tags(first, "QtGui")

    assert derive_tags(second, "QtGui") == {"calendar", "gui"}
