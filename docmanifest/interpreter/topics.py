"""Handlers for topic commands, each creating and registering one entity."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from ..commands import TopicCommand
from ..entities import (
    Aggregate,
    Declaration,
    EntityKind,
    ExampleEntity,
    Function,
    Page,
    Property,
)
from ..models import CommandOccurrence, DocComment
from .base import TopicArgumentError

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .core import AnnotationInterpreter

TopicHandler = Callable[["AnnotationInterpreter", CommandOccurrence, DocComment], Optional[int]]

_IDENTIFIER = re.compile(r"[A-Za-z_~][\w:~<>=!+\-*/%&|^\[\]]*$")


def _required(occurrence: CommandOccurrence) -> str:
    argument = occurrence.argument.strip()
    if not argument:
        raise TopicArgumentError(f"Missing argument for \\{occurrence.name}")
    return argument


def _first_word(occurrence: CommandOccurrence) -> str:
    return _required(occurrence).split()[0]


def _split_qualified(name: str) -> Tuple[str, str]:
    """Split `A::B::c` into (`A::B`, `c`)."""
    parent, sep, leaf = name.rpartition("::")
    return (parent, leaf) if sep else ("", name)


def parse_signature(signature: str) -> Tuple[str, str]:
    """Return the (parent, name) pair of a function or method signature."""
    head = signature.split("(", 1)[0].strip()
    if not head:
        raise TopicArgumentError(f"Cannot parse signature '{signature}'")
    qualified = re.split(r"[\s*&]+", head)[-1]
    if not qualified or not _IDENTIFIER.match(qualified):
        raise TopicArgumentError(f"Cannot parse signature '{signature}'")
    return _split_qualified(qualified)


def parse_qml_property(argument: str) -> Tuple[str, str, str]:
    """Return (type, element, name) from `type [Module::]Element::name`."""
    parts = argument.split()
    if len(parts) < 2:
        raise TopicArgumentError(f"Missing property type or name in '{argument}'")
    data_type, qualified = " ".join(parts[:-1]), parts[-1]
    element, name = _split_qualified(qualified)
    if not element or not name:
        raise TopicArgumentError(f"Unqualified QML property '{qualified}'")
    element = element.rpartition("::")[2]
    return data_type, element, name


def _aggregate(interp, occurrence, doc) -> Optional[int]:
    parent, name = _split_qualified(_first_word(occurrence))
    topic = TopicCommand(occurrence.name)
    return interp.graph.add(
        Aggregate(name=name, parent_name=parent, topic=topic, doc=doc, location=occurrence.location),
    )


def _function(interp, occurrence, doc) -> Optional[int]:
    signature = _required(occurrence)
    parent, name = parse_signature(signature)
    return interp.graph.add(
        Function(
            name=name,
            parent_name=parent,
            signature=signature,
            topic=TopicCommand(occurrence.name),
            doc=doc,
            location=occurrence.location,
        ),
    )


def _property(interp, occurrence, doc) -> Optional[int]:
    parent, name = _split_qualified(_first_word(occurrence))
    return interp.graph.add(
        Property(
            name=name,
            parent_name=parent,
            topic=TopicCommand.PROPERTY,
            doc=doc,
            location=occurrence.location,
        ),
    )


def _qml_property(interp, occurrence, doc) -> Optional[int]:
    topic = TopicCommand(occurrence.name)
    data_type, element, name = parse_qml_property(_required(occurrence))
    return interp.graph.add(
        Property(
            name=name,
            parent_name=element,
            data_type=data_type,
            attached=topic is TopicCommand.QMLATTACHEDPROPERTY,
            topic=topic,
            doc=doc,
            location=occurrence.location,
        ),
    )


def _qml_property_group(interp, occurrence, doc) -> Optional[int]:
    element, name = _split_qualified(_first_word(occurrence))
    if not element:
        raise TopicArgumentError(f"Unqualified QML property group '{name}'")
    return interp.graph.add(
        Property(
            name=name,
            parent_name=element,
            topic=TopicCommand.QMLPROPERTYGROUP,
            doc=doc,
            location=occurrence.location,
        ),
    )


def _declaration(interp, occurrence, doc) -> Optional[int]:
    parent, name = _split_qualified(_first_word(occurrence))
    return interp.graph.add(
        Declaration(
            name=name,
            parent_name=parent,
            topic=TopicCommand(occurrence.name),
            doc=doc,
            location=occurrence.location,
        ),
    )


def _page(interp, occurrence, doc) -> Optional[int]:
    name = _first_word(occurrence)
    return interp.graph.add(
        Page(name=name, topic=TopicCommand.PAGE, doc=doc, location=occurrence.location),
    )


def _external_page(interp, occurrence, doc) -> Optional[int]:
    url = _first_word(occurrence)
    return interp.graph.add(
        Page(name=url, url=url, topic=TopicCommand.EXTERNALPAGE, doc=doc, location=occurrence.location),
    )


def _example(interp, occurrence, doc) -> Optional[int]:
    example = ExampleEntity(
        name=_first_word(occurrence).strip("/"),
        topic=TopicCommand.EXAMPLE,
        doc=doc,
        location=occurrence.location,
    )
    image = doc.first_image()
    if image:
        example.image_file_name = image
    entity_id = interp.graph.add(example)
    if interp.resolver is not None:
        interp.resolver.resolve(example)
    return entity_id


def _group(interp, occurrence, doc) -> Optional[int]:
    collection = interp.graph.define_collection(
        EntityKind.GROUP, _first_word(occurrence), doc, occurrence.location
    )
    return collection.id


def _module(interp, occurrence, doc) -> Optional[int]:
    collection = interp.graph.define_collection(
        EntityKind.MODULE, _first_word(occurrence), doc, occurrence.location
    )
    return collection.id


def _qml_module(interp, occurrence, doc) -> Optional[int]:
    parts = _required(occurrence).split()
    version = parts[1] if len(parts) > 1 else ""
    collection = interp.graph.define_collection(
        EntityKind.QML_MODULE, parts[0], doc, occurrence.location, version=version
    )
    return collection.id


def _dont_document(interp, occurrence, doc) -> Optional[int]:
    names = _required(occurrence).strip("()").split()
    interp.graph.dont_document.update(names)
    return None


TOPIC_HANDLERS: Dict[TopicCommand, TopicHandler] = {
    TopicCommand.CLASS: _aggregate,
    TopicCommand.DONTDOCUMENT: _dont_document,
    TopicCommand.ENUM: _declaration,
    TopicCommand.EXAMPLE: _example,
    TopicCommand.EXTERNALPAGE: _external_page,
    TopicCommand.FN: _function,
    TopicCommand.GROUP: _group,
    TopicCommand.HEADERFILE: _aggregate,
    TopicCommand.MACRO: _function,
    TopicCommand.MODULE: _module,
    TopicCommand.NAMESPACE: _aggregate,
    TopicCommand.PAGE: _page,
    TopicCommand.PROPERTY: _property,
    TopicCommand.TYPEALIAS: _declaration,
    TopicCommand.TYPEDEF: _declaration,
    TopicCommand.VARIABLE: _declaration,
    TopicCommand.QMLTYPE: _aggregate,
    TopicCommand.QMLPROPERTY: _qml_property,
    TopicCommand.QMLPROPERTYGROUP: _qml_property_group,
    TopicCommand.QMLATTACHEDPROPERTY: _qml_property,
    TopicCommand.QMLSIGNAL: _function,
    TopicCommand.QMLATTACHEDSIGNAL: _function,
    TopicCommand.QMLMETHOD: _function,
    TopicCommand.QMLATTACHEDMETHOD: _function,
    TopicCommand.QMLVALUETYPE: _aggregate,
    TopicCommand.QMLBASICTYPE: _aggregate,
    TopicCommand.QMLMODULE: _qml_module,
    TopicCommand.STRUCT: _aggregate,
    TopicCommand.UNION: _aggregate,
}


__all__ = ["TOPIC_HANDLERS", "TopicHandler", "parse_qml_property", "parse_signature"]
