"""Documentation entities created by topic commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Optional

from .commands import TopicCommand
from .models import DocComment, Location


class EntityKind(str, Enum):
    """Namespaces in which entity names must be unique."""

    AGGREGATE = "aggregate"
    FUNCTION = "function"
    PROPERTY = "property"
    DECLARATION = "declaration"
    PAGE = "page"
    EXAMPLE = "example"
    GROUP = "group"
    MODULE = "module"
    QML_MODULE = "qmlmodule"


class Status(str, Enum):
    ACTIVE = "active"
    PRELIMINARY = "preliminary"
    DEPRECATED = "deprecated"
    INTERNAL = "internal"


class ThreadSafeness(str, Enum):
    UNSPECIFIED = "unspecified"
    NON_REENTRANT = "nonreentrant"
    REENTRANT = "reentrant"
    THREAD_SAFE = "threadsafe"


@dataclass(eq=False)
class DocumentationEntity:
    """Base node of the documentation graph."""

    kind: ClassVar[EntityKind]

    name: str
    topic: Optional[TopicCommand] = None
    doc: Optional[DocComment] = None
    location: Location = field(default_factory=Location)
    id: int = -1
    parent_name: str = ""
    title: str = ""
    subtitle: str = ""
    since: str = ""
    status: Status = Status.ACTIVE
    deprecated_since: str = ""
    thread_safeness: ThreadSafeness = ThreadSafeness.UNSPECIFIED
    module: str = ""
    groups: List[str] = field(default_factory=list)
    links: Dict[str, str] = field(default_factory=dict)
    wrapper: bool = False

    @property
    def key(self) -> str:
        """Name under which the graph indexes this entity."""
        return f"{self.parent_name}::{self.name}" if self.parent_name else self.name

    @property
    def is_qml(self) -> bool:
        return self.topic is not None and self.topic.value.startswith("qml")

    @property
    def brief_text(self) -> str:
        return self.doc.brief_text if self.doc is not None else ""


@dataclass(eq=False)
class Aggregate(DocumentationEntity):
    """Classes, structs, unions, namespaces, header files and QML types."""

    kind: ClassVar[EntityKind] = EntityKind.AGGREGATE

    abstract: bool = False
    include_file: str = ""
    qml_base: str = ""
    instantiates: str = ""


@dataclass(eq=False)
class Function(DocumentationEntity):
    """C++ functions and macros, QML methods and signals."""

    kind: ClassVar[EntityKind] = EntityKind.FUNCTION

    signature: str = ""
    overload: bool = False
    overload_of: str = ""
    reimplemented: bool = False
    related_to: Optional[int] = None

    @property
    def key(self) -> str:
        return self.signature or super().key


@dataclass(eq=False)
class Property(DocumentationEntity):
    """C++ and QML properties, including attached properties and groups."""

    kind: ClassVar[EntityKind] = EntityKind.PROPERTY

    data_type: str = ""
    read_only: bool = False
    required: bool = False
    default: bool = False
    attached: bool = False
    related_to: Optional[int] = None


@dataclass(eq=False)
class Declaration(DocumentationEntity):
    """Enums, typedefs, type aliases and variables."""

    kind: ClassVar[EntityKind] = EntityKind.DECLARATION

    related_to: Optional[int] = None


@dataclass(eq=False)
class Page(DocumentationEntity):
    """Free-standing documentation pages and external page links."""

    kind: ClassVar[EntityKind] = EntityKind.PAGE

    url: str = ""
    attribution: bool = False


@dataclass(eq=False)
class ExampleEntity(Page):
    """An example or demo program listed in the generated manifests."""

    kind: ClassVar[EntityKind] = EntityKind.EXAMPLE

    project_file: str = ""
    image_file_name: str = ""
    files: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)

    @property
    def is_demo(self) -> bool:
        return self.name.startswith("demos")

    @property
    def base_name(self) -> str:
        """Last path component of the example name."""
        return self.name[self.name.rfind("/") + 1 :]


@dataclass(eq=False)
class Collection(DocumentationEntity):
    """Groups, C++ modules and QML modules."""

    kind: ClassVar[EntityKind] = EntityKind.GROUP

    members: List[int] = field(default_factory=list)
    version: str = ""
    state: str = ""

    @property
    def defined(self) -> bool:
        return self.doc is not None


@dataclass(eq=False)
class Module(Collection):
    kind: ClassVar[EntityKind] = EntityKind.MODULE


@dataclass(eq=False)
class QmlModule(Collection):
    kind: ClassVar[EntityKind] = EntityKind.QML_MODULE


COLLECTION_TYPES: Dict[EntityKind, type[Collection]] = {
    EntityKind.GROUP: Collection,
    EntityKind.MODULE: Module,
    EntityKind.QML_MODULE: QmlModule,
}


__all__ = [
    "Aggregate",
    "COLLECTION_TYPES",
    "Collection",
    "Declaration",
    "DocumentationEntity",
    "EntityKind",
    "ExampleEntity",
    "Function",
    "Module",
    "Page",
    "Property",
    "QmlModule",
    "Status",
    "ThreadSafeness",
]
