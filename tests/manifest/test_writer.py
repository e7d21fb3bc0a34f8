"""Tests for docmanifest.manifest.writer."""

from __future__ import annotations

from pathlib import Path

from docmanifest.commands import TopicCommand
from docmanifest.config import ManifestConfig, ManifestMetaFilter, QhpConfig
from docmanifest.entities import ExampleEntity
from docmanifest.graph import DocumentationGraph
from docmanifest.manifest.writer import NO_DESCRIPTION, ManifestWriter, partition
from docmanifest.manifest.xmlwriter import XmlStreamWriter
from docmanifest.models import DocComment, MetaTagMap

URL_PREFIX = "qthelp://org.qt-project.qtwidgets/qtwidgets/"


def _config(tmp_path: Path, **overrides) -> ManifestConfig:
    values = {
        "root": tmp_path,
        "project": "QtWidgets",
        "output_dir": tmp_path / "out",
        "examples_install_path": "qtwidgets",
        "qhp": QhpConfig(namespace="org.qt-project.qtwidgets", virtual_folder="qtwidgets"),
    }
    values.update(overrides)
    return ManifestConfig(**values)


def _clock() -> ExampleEntity:
    return ExampleEntity(
        name="widgets/analogclock",
        title="Analog Clock",
        topic=TopicCommand.EXAMPLE,
        doc=DocComment(text="", brief="Shows a clock."),
        project_file="widgets/analogclock/CMakeLists.txt",
        image_file_name="analogclock.png",
        files=["widgets/analogclock/analogclock.cpp", "widgets/analogclock/main.cpp"],
    )


def _demo() -> ExampleEntity:
    return ExampleEntity(name="demos/clocks", title="Clocks", topic=TopicCommand.EXAMPLE, doc=DocComment(text=""))


def _graph(*examples: ExampleEntity) -> DocumentationGraph:
    graph = DocumentationGraph()
    for example in examples:
        graph.add(example)
    return graph


def test_partition_is_decided_by_demos_prefix() -> None:
    examples = [_clock(), _demo(), ExampleEntity(name="demosaic/filter")]

    assert [example.name for example in partition(examples, "examples")] == ["widgets/analogclock"]
    assert [example.name for example in partition(examples, "demos")] == ["demos/clocks", "demosaic/filter"]


def test_serialize_writes_full_example_element(tmp_path: Path) -> None:
    writer = ManifestWriter(_config(tmp_path), _graph(_clock()))
    xml = XmlStreamWriter()

    assert writer.serialize(writer.graph.examples(), "examples", xml)

    assert xml.getvalue() == (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<instructionals module="QtWidgets">\n'
        "    <examples>\n"
        '        <example name="Analog Clock"'
        f' docUrl="{URL_PREFIX}qtwidgets-widgets-analogclock-example.html"'
        ' projectPath="qtwidgets/widgets/analogclock/CMakeLists.txt"'
        f' imageUrl="{URL_PREFIX}analogclock.png">\n'
        "            <description><![CDATA[Shows a clock.]]></description>\n"
        "            <tags>analog,clock,widgets</tags>\n"
        '            <fileToOpen mainFile="true">qtwidgets/widgets/analogclock/analogclock.cpp</fileToOpen>\n'
        "            <fileToOpen>qtwidgets/widgets/analogclock/main.cpp</fileToOpen>\n"
        "        </example>\n"
        "    </examples>\n"
        "</instructionals>\n"
    )
    assert writer.warnings == []


def test_missing_brief_and_attributes_are_reported(tmp_path: Path) -> None:
    writer = ManifestWriter(_config(tmp_path), _graph(_demo()))
    xml = XmlStreamWriter()

    writer.serialize(writer.graph.examples(), "demos", xml)

    output = xml.getvalue()
    assert f"<description><![CDATA[{NO_DESCRIPTION}]]></description>" in output
    assert "<demos>" in output and '<demo name="Clocks"' in output
    assert "fileToOpen" not in output
    assert writer.warnings == [
        "demos/clocks: missing attribute imageUrl",
        "demos/clocks: missing attribute projectPath",
    ]


def test_tags_block_is_omitted_when_empty(tmp_path: Path) -> None:
    example = ExampleEntity(name="basic", title="", doc=DocComment(text="", brief="Basic."))
    writer = ManifestWriter(_config(tmp_path, project="Qt"), _graph(example))
    xml = XmlStreamWriter()

    writer.serialize(writer.graph.examples(), "examples", xml)

    assert "<tags>" not in xml.getvalue()


def test_filter_attributes_follow_fixed_ones(tmp_path: Path) -> None:
    filters = [
        ManifestMetaFilter(names=("QtWidgets/Analog*",), attributes=("name:Hijacked", "isHighlighted", "category:one")),
        ManifestMetaFilter(names=("*",), attributes=("category:two",), tags=("Desktop",)),
    ]
    writer = ManifestWriter(_config(tmp_path), _graph(_clock()), meta_filters=filters)
    xml = XmlStreamWriter()

    writer.serialize(writer.graph.examples(), "examples", xml)

    output = xml.getvalue()
    assert 'name="Analog Clock"' in output
    assert "Hijacked" not in output
    assert f'imageUrl="{URL_PREFIX}analogclock.png" isHighlighted="true" category="one">' in output
    assert "<tags>analog,clock,desktop,widgets</tags>" in output


def test_meta_installpath_overrides_configured_path(tmp_path: Path) -> None:
    example = _clock()
    example.doc.meta_tags = MetaTagMap([("installpath", "custom")])
    writer = ManifestWriter(_config(tmp_path), _graph(example))

    assert writer.install_path(example) == "custom/"
    assert writer.install_path(_demo()) == "qtwidgets/"


def test_serialize_skips_empty_partition(tmp_path: Path) -> None:
    writer = ManifestWriter(_config(tmp_path), _graph(_clock()))
    xml = XmlStreamWriter()

    assert not writer.serialize(writer.graph.examples(), "demos", xml)
    assert xml.getvalue() == ""


def test_generate_manifest_files_writes_both_kinds_and_clears(tmp_path: Path) -> None:
    graph = _graph(_clock(), _demo())
    writer = ManifestWriter(_config(tmp_path, manifest_meta=[ManifestMetaFilter(names=("*",))]), graph)

    written = writer.generate_manifest_files()

    assert written == [tmp_path / "out" / "examples-manifest.xml", tmp_path / "out" / "demos-manifest.xml"]
    assert "analogclock" in written[0].read_text(encoding="utf-8")
    assert 'name="Clocks"' not in written[0].read_text(encoding="utf-8")
    assert 'name="Clocks"' in written[1].read_text(encoding="utf-8")
    assert graph.examples() == []
    assert writer.meta_filters == []


def test_generate_manifest_file_skips_kind_without_examples(tmp_path: Path) -> None:
    writer = ManifestWriter(_config(tmp_path), _graph(_clock()))

    assert writer.generate_manifest_file("demos") is None
    assert not (tmp_path / "out" / "demos-manifest.xml").exists()


def test_unwritable_output_abandons_that_kind(tmp_path: Path) -> None:
    blocker = tmp_path / "out"
    blocker.write_text("not a directory", encoding="utf-8")
    writer = ManifestWriter(_config(tmp_path), _graph(_clock(), _demo()))

    assert writer.generate_manifest_files() == []
    assert blocker.read_text(encoding="utf-8") == "not a directory"
