"""Closed vocabulary of documentation-comment commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class TopicCommand(str, Enum):
    """Commands that declare the entity a comment documents."""

    CLASS = "class"
    DONTDOCUMENT = "dontdocument"
    ENUM = "enum"
    EXAMPLE = "example"
    EXTERNALPAGE = "externalpage"
    FN = "fn"
    GROUP = "group"
    HEADERFILE = "headerfile"
    MACRO = "macro"
    MODULE = "module"
    NAMESPACE = "namespace"
    PAGE = "page"
    PROPERTY = "property"
    TYPEALIAS = "typealias"
    TYPEDEF = "typedef"
    VARIABLE = "variable"
    QMLTYPE = "qmltype"
    QMLPROPERTY = "qmlproperty"
    QMLPROPERTYGROUP = "qmlpropertygroup"
    QMLATTACHEDPROPERTY = "qmlattachedproperty"
    QMLSIGNAL = "qmlsignal"
    QMLATTACHEDSIGNAL = "qmlattachedsignal"
    QMLMETHOD = "qmlmethod"
    QMLATTACHEDMETHOD = "qmlattachedmethod"
    QMLVALUETYPE = "qmlvaluetype"
    QMLBASICTYPE = "qmlbasictype"
    QMLMODULE = "qmlmodule"
    STRUCT = "struct"
    UNION = "union"


class MetaCommand(str, Enum):
    """Commands that adjust or augment an already declared entity."""

    ABSTRACT = "abstract"
    ATTRIBUTION = "attribution"
    DEFAULT = "default"
    DEPRECATED = "deprecated"
    INGROUP = "ingroup"
    INMODULE = "inmodule"
    INPUBLICGROUP = "inpublicgroup"
    INTERNAL = "internal"
    META = "meta"
    MODULESTATE = "modulestate"
    NONREENTRANT = "nonreentrant"
    OBSOLETE = "obsolete"
    PRELIMINARY = "preliminary"
    QMLDEFAULT = "qmldefault"
    QMLINHERITS = "qmlinherits"
    QMLREADONLY = "qmlreadonly"
    QMLREQUIRED = "qmlrequired"
    REENTRANT = "reentrant"
    SINCE = "since"
    STARTPAGE = "startpage"
    SUBTITLE = "subtitle"
    THREADSAFE = "threadsafe"
    TITLE = "title"
    WRAPPER = "wrapper"
    INHEADERFILE = "inheaderfile"
    NEXTPAGE = "nextpage"
    OVERLOAD = "overload"
    PREVIOUSPAGE = "previouspage"
    QMLINSTANTIATES = "qmlinstantiates"
    REIMP = "reimp"
    RELATES = "relates"


# Body formatting commands. They carry no entity semantics; the reader keeps
# `brief` and `image` and the interpreter otherwise skips them.
MARKUP_COMMANDS = frozenset(
    {
        "a", "annotatedlist", "b", "badcode", "bold", "brief", "c", "caption",
        "chapter", "code", "codeline", "div", "dots", "e", "else", "endchapter",
        "endcode", "enddiv", "endfootnote", "endif", "endlegalese", "endlink",
        "endlist", "endomit", "endpart", "endquotation", "endraw", "endsection1",
        "endsection2", "endsection3", "endsection4", "endsidebar", "endtable",
        "footnote", "generatelist", "header", "i", "if", "image", "include",
        "inlineimage", "keyword", "l", "legalese", "li", "link", "list",
        "note", "o", "omit", "omitvalue", "part", "printline", "printto",
        "printuntil", "quotation", "quotefile", "quotefromfile", "raw", "row",
        "sa", "section1", "section2", "section3", "section4", "sidebar",
        "skipline", "skipto", "skipuntil", "snippet", "span", "sub", "sup",
        "table", "tableofcontents", "target", "tt", "uicontrol", "underline",
        "unicode", "value", "warning",
    }
)


class Markup(str):
    """A recognised body-formatting command name."""


@dataclass(frozen=True)
class Unrecognized:
    """A command name that belongs to no vocabulary."""

    name: str


Command = Union[TopicCommand, MetaCommand, Markup, Unrecognized]

_TOPICS = {member.value: member for member in TopicCommand}
_METAS = {member.value: member for member in MetaCommand}


def classify(name: str) -> Command:
    """Map a raw command token onto exactly one vocabulary member."""
    if name in _TOPICS:
        return _TOPICS[name]
    if name in _METAS:
        return _METAS[name]
    if name in MARKUP_COMMANDS:
        return Markup(name)
    return Unrecognized(name)


__all__ = [
    "Command",
    "MARKUP_COMMANDS",
    "Markup",
    "MetaCommand",
    "TopicCommand",
    "Unrecognized",
    "classify",
]
