"""Tests for the streaming XML writer."""

from __future__ import annotations

import pytest

from docmanifest.manifest.xmlwriter import XmlStreamWriter, escape_attribute, escape_text


def test_writer_indents_nested_elements() -> None:
    writer = XmlStreamWriter()
    writer.start_document()
    writer.start_element("instructionals")
    writer.attribute("module", "QtWidgets")
    writer.start_element("examples")
    writer.start_element("example")
    writer.attribute("name", "Clock")
    writer.text_element("tags", "clock,timer")
    writer.start_element("empty")
    writer.end_element()
    writer.end_document()

    assert writer.getvalue() == (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<instructionals module="QtWidgets">\n'
        "    <examples>\n"
        '        <example name="Clock">\n'
        "            <tags>clock,timer</tags>\n"
        "            <empty/>\n"
        "        </example>\n"
        "    </examples>\n"
        "</instructionals>\n"
    )


def test_escaping() -> None:
    assert escape_text('a < b && c > "d"') == 'a &lt; b &amp;&amp; c &gt; "d"'
    assert escape_attribute('say "hi"\n') == "say &quot;hi&quot;&#10;"


def test_cdata_splits_terminator() -> None:
    writer = XmlStreamWriter()
    writer.start_element("description")
    writer.cdata("x ]]> y <b>")
    writer.end_element()

    assert writer.getvalue() == "\n<description><![CDATA[x ]]]]><![CDATA[> y <b>]]></description>"


def test_attribute_outside_start_tag_is_rejected() -> None:
    writer = XmlStreamWriter()
    writer.start_element("a")
    writer.characters("text")

    with pytest.raises(ValueError):
        writer.attribute("late", "value")


def test_end_element_without_open_element_is_rejected() -> None:
    with pytest.raises(ValueError):
        XmlStreamWriter().end_element()
