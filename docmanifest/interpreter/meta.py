"""Handlers for meta commands that adjust an entity after its topic created it.

Each handler receives the interpreter, the entity being documented, the
command occurrence and the comment it came from. A handler returns `None` on
success or a message describing why the command could not be applied; the
interpreter turns such messages into `AnnotationIssue` records and moves on.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from ..commands import MetaCommand, TopicCommand
from ..entities import (
    Aggregate,
    Declaration,
    DocumentationEntity,
    EntityKind,
    Function,
    Module,
    Page,
    Property,
    QmlModule,
    Status,
    ThreadSafeness,
)
from ..models import CommandOccurrence, DocComment

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .core import AnnotationInterpreter

MetaHandler = Callable[
    ["AnnotationInterpreter", DocumentationEntity, CommandOccurrence, DocComment], Optional[str]
]

_BRACED = re.compile(r"\{([^}]*)\}")

_QML_TYPE_TOPICS = frozenset(
    {TopicCommand.QMLTYPE, TopicCommand.QMLVALUETYPE, TopicCommand.QMLBASICTYPE}
)


def _not_applicable(occurrence: CommandOccurrence, entity: DocumentationEntity) -> str:
    return f"Cannot use \\{occurrence.name} on {entity.kind.value} '{entity.key}'"


def parse_meta_argument(argument: str) -> Optional[Tuple[str, str]]:
    """Split `{key} {value}` or `key value` into its parts."""
    braced = _BRACED.findall(argument)
    if braced:
        key = braced[0].strip()
        value = braced[1].strip() if len(braced) > 1 else ""
    else:
        key, _, value = argument.strip().partition(" ")
        value = value.strip()
    return (key, value) if key else None


def _abstract(interp, entity, occurrence, doc):
    if not isinstance(entity, Aggregate):
        return _not_applicable(occurrence, entity)
    entity.abstract = True
    return None


def _attribution(interp, entity, occurrence, doc):
    if not isinstance(entity, Page):
        return _not_applicable(occurrence, entity)
    entity.attribution = True
    return None


def _default(interp, entity, occurrence, doc):
    if not isinstance(entity, Property):
        return _not_applicable(occurrence, entity)
    entity.default = True
    return None


def _deprecated(interp, entity, occurrence, doc):
    entity.status = Status.DEPRECATED
    entity.deprecated_since = occurrence.argument.strip()
    return None


def _obsolete(interp, entity, occurrence, doc):
    entity.status = Status.DEPRECATED
    return None


def _internal(interp, entity, occurrence, doc):
    entity.status = Status.INTERNAL
    return None


def _preliminary(interp, entity, occurrence, doc):
    entity.status = Status.PRELIMINARY
    return None


def _ingroup(interp, entity, occurrence, doc):
    names = occurrence.argument.split()
    if not names:
        return f"Missing group name for \\{occurrence.name}"
    for name in names:
        interp.graph.add_member(EntityKind.GROUP, name, entity)
        if name not in entity.groups:
            entity.groups.append(name)
    return None


def _inmodule(interp, entity, occurrence, doc):
    name = occurrence.argument.strip()
    if not name:
        return "Missing module name for \\inmodule"
    entity.module = name
    interp.graph.add_member(EntityKind.MODULE, name, entity)
    return None


def _meta(interp, entity, occurrence, doc):
    parsed = parse_meta_argument(occurrence.argument)
    if parsed is None:
        return "Missing key for \\meta"
    key, value = parsed
    doc.meta_tags.add(key, value)
    return None


def _module_state(interp, entity, occurrence, doc):
    if not isinstance(entity, (Module, QmlModule)):
        return _not_applicable(occurrence, entity)
    entity.state = occurrence.argument.strip()
    return None


def _thread_safeness(value: ThreadSafeness) -> MetaHandler:
    def handler(interp, entity, occurrence, doc):
        entity.thread_safeness = value
        return None

    return handler


def _qml_inherits(interp, entity, occurrence, doc):
    if not isinstance(entity, Aggregate) or entity.topic not in _QML_TYPE_TOPICS:
        return _not_applicable(occurrence, entity)
    entity.qml_base = occurrence.argument.strip()
    return None


def _qml_instantiates(interp, entity, occurrence, doc):
    if not isinstance(entity, Aggregate) or entity.topic is not TopicCommand.QMLTYPE:
        return _not_applicable(occurrence, entity)
    entity.instantiates = occurrence.argument.strip()
    return None


def _qml_read_only(interp, entity, occurrence, doc):
    if not isinstance(entity, Property) or not entity.is_qml:
        return _not_applicable(occurrence, entity)
    entity.read_only = True
    return None


def _qml_required(interp, entity, occurrence, doc):
    if not isinstance(entity, Property) or not entity.is_qml:
        return _not_applicable(occurrence, entity)
    entity.required = True
    return None


def _since(interp, entity, occurrence, doc):
    entity.since = occurrence.argument.strip()
    return None


def _link(interp, entity, occurrence, doc):
    target = occurrence.argument.strip()
    if not target:
        return f"Missing target for \\{occurrence.name}"
    entity.links[occurrence.name] = target
    return None


def _title(interp, entity, occurrence, doc):
    entity.title = occurrence.argument.strip()
    return None


def _subtitle(interp, entity, occurrence, doc):
    entity.subtitle = occurrence.argument.strip()
    return None


def _wrapper(interp, entity, occurrence, doc):
    entity.wrapper = True
    return None


def _in_header_file(interp, entity, occurrence, doc):
    if not isinstance(entity, Aggregate) or entity.is_qml:
        return _not_applicable(occurrence, entity)
    entity.include_file = occurrence.argument.strip()
    return None


def _overload(interp, entity, occurrence, doc):
    if not isinstance(entity, Function):
        return _not_applicable(occurrence, entity)
    entity.overload = True
    entity.overload_of = occurrence.argument.strip()
    return None


def _reimp(interp, entity, occurrence, doc):
    if not isinstance(entity, Function) or entity.is_qml:
        return _not_applicable(occurrence, entity)
    entity.reimplemented = True
    return None


def _relates(interp, entity, occurrence, doc):
    if not isinstance(entity, (Function, Property, Declaration)):
        return _not_applicable(occurrence, entity)
    name = occurrence.argument.strip()
    target = interp.graph.find_aggregate(name) if name else None
    if target is None:
        return f"Cannot find '{name}' specified with \\relates"
    entity.related_to = target.id
    return None


META_HANDLERS: Dict[MetaCommand, MetaHandler] = {
    MetaCommand.ABSTRACT: _abstract,
    MetaCommand.ATTRIBUTION: _attribution,
    MetaCommand.DEFAULT: _default,
    MetaCommand.DEPRECATED: _deprecated,
    MetaCommand.INGROUP: _ingroup,
    MetaCommand.INMODULE: _inmodule,
    MetaCommand.INPUBLICGROUP: _ingroup,
    MetaCommand.INTERNAL: _internal,
    MetaCommand.META: _meta,
    MetaCommand.MODULESTATE: _module_state,
    MetaCommand.NONREENTRANT: _thread_safeness(ThreadSafeness.NON_REENTRANT),
    MetaCommand.OBSOLETE: _obsolete,
    MetaCommand.PRELIMINARY: _preliminary,
    MetaCommand.QMLDEFAULT: _default,
    MetaCommand.QMLINHERITS: _qml_inherits,
    MetaCommand.QMLREADONLY: _qml_read_only,
    MetaCommand.QMLREQUIRED: _qml_required,
    MetaCommand.REENTRANT: _thread_safeness(ThreadSafeness.REENTRANT),
    MetaCommand.SINCE: _since,
    MetaCommand.STARTPAGE: _link,
    MetaCommand.SUBTITLE: _subtitle,
    MetaCommand.THREADSAFE: _thread_safeness(ThreadSafeness.THREAD_SAFE),
    MetaCommand.TITLE: _title,
    MetaCommand.WRAPPER: _wrapper,
    MetaCommand.INHEADERFILE: _in_header_file,
    MetaCommand.NEXTPAGE: _link,
    MetaCommand.OVERLOAD: _overload,
    MetaCommand.PREVIOUSPAGE: _link,
    MetaCommand.QMLINSTANTIATES: _qml_instantiates,
    MetaCommand.REIMP: _reimp,
    MetaCommand.RELATES: _relates,
}


__all__ = ["META_HANDLERS", "MetaHandler", "parse_meta_argument"]
