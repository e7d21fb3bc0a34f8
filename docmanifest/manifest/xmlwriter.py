"""Minimal streaming XML writer with automatic indentation and CDATA support."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

_TEXT_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", "\r": "&#13;"}
_ATTRIBUTE_ESCAPES = {
    **_TEXT_ESCAPES,
    '"': "&quot;",
    "\n": "&#10;",
    "\t": "&#9;",
}


def escape_text(value: str) -> str:
    return "".join(_TEXT_ESCAPES.get(char, char) for char in value)


def escape_attribute(value: str) -> str:
    return "".join(_ATTRIBUTE_ESCAPES.get(char, char) for char in value)


@dataclass
class _OpenElement:
    name: str
    has_children: bool = False
    has_text: bool = False


class XmlStreamWriter:
    """Writes elements in document order into an in-memory buffer.

    Attributes must be written right after `start_element`. Elements that only
    contain character data stay on one line; nested elements are indented by
    `indent` spaces per level.
    """

    def __init__(self, indent: int = 4) -> None:
        self.indent = indent
        self._parts: List[str] = []
        self._stack: List[_OpenElement] = []
        self._tag_open = False

    def start_document(self) -> None:
        self._parts.append('<?xml version="1.0" encoding="UTF-8"?>')

    def end_document(self) -> None:
        while self._stack:
            self.end_element()
        self._parts.append("\n")

    def start_element(self, name: str) -> None:
        self._close_start_tag()
        if self._stack:
            self._stack[-1].has_children = True
        self._newline(len(self._stack))
        self._parts.append(f"<{name}")
        self._stack.append(_OpenElement(name))
        self._tag_open = True

    def attribute(self, name: str, value: str) -> None:
        if not self._tag_open:
            raise ValueError(f"Attribute '{name}' written outside of a start tag")
        self._parts.append(f' {name}="{escape_attribute(value)}"')

    def characters(self, text: str) -> None:
        self._close_start_tag()
        self._mark_text()
        self._parts.append(escape_text(text))

    def cdata(self, text: str) -> None:
        self._close_start_tag()
        self._mark_text()
        self._parts.append("<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>")

    def text_element(self, name: str, text: str) -> None:
        self.start_element(name)
        self.characters(text)
        self.end_element()

    def end_element(self) -> None:
        if not self._stack:
            raise ValueError("end_element called without an open element")
        element = self._stack.pop()
        if self._tag_open:
            self._parts.append("/>")
            self._tag_open = False
            return
        if element.has_children and not element.has_text:
            self._newline(len(self._stack))
        self._parts.append(f"</{element.name}>")

    def getvalue(self) -> str:
        return "".join(self._parts)

    def _close_start_tag(self) -> None:
        if self._tag_open:
            self._parts.append(">")
            self._tag_open = False

    def _mark_text(self) -> None:
        if not self._stack:
            raise ValueError("Character data written outside of an element")
        self._stack[-1].has_text = True

    def _newline(self, depth: int) -> None:
        self._parts.append("\n" + " " * (self.indent * depth))


__all__ = ["XmlStreamWriter", "escape_attribute", "escape_text"]
