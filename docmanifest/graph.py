"""In-memory documentation graph populated by the annotation interpreter."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Set, Tuple

from .entities import (
    COLLECTION_TYPES,
    Aggregate,
    Collection,
    DocumentationEntity,
    EntityKind,
    ExampleEntity,
)
from .models import DocComment, Location


class DuplicateEntityError(ValueError):
    """Raised when a topic declares a name that is already registered."""

    def __init__(self, entity: DocumentationEntity, existing: DocumentationEntity) -> None:
        super().__init__(
            f"{entity.kind.value} '{entity.key}' is already documented at {existing.location}"
        )
        self.entity = entity
        self.existing = existing


class DocumentationGraph:
    """Owns every entity and indexes them by id and by (kind, key)."""

    def __init__(self) -> None:
        self._entities: Dict[int, DocumentationEntity] = {}
        self._index: Dict[Tuple[EntityKind, bool, str], int] = {}
        self._next_id = 0
        self.dont_document: Set[str] = set()

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[DocumentationEntity]:
        return iter(list(self._entities.values()))

    def add(self, entity: DocumentationEntity) -> int:
        """Register `entity` exactly once and return its id."""
        index_key = _index_key(entity)
        existing_id = self._index.get(index_key)
        if existing_id is not None:
            raise DuplicateEntityError(entity, self._entities[existing_id])
        entity.id = self._next_id
        self._next_id += 1
        self._entities[entity.id] = entity
        self._index[index_key] = entity.id
        return entity.id

    def get(self, entity_id: int) -> DocumentationEntity:
        return self._entities[entity_id]

    def find(self, kind: EntityKind, key: str, *, qml: bool = False) -> Optional[DocumentationEntity]:
        entity_id = self._index.get((kind, qml, key))
        return self._entities[entity_id] if entity_id is not None else None

    def find_aggregate(self, name: str) -> Optional[Aggregate]:
        entity = self.find(EntityKind.AGGREGATE, name)
        return entity if isinstance(entity, Aggregate) else None

    def collection(self, kind: EntityKind, name: str) -> Collection:
        """Return the group or module called `name`, creating it when missing."""
        existing = self.find(kind, name)
        if isinstance(existing, Collection):
            return existing
        created = COLLECTION_TYPES[kind](name=name)
        self.add(created)
        return created

    def define_collection(
        self,
        kind: EntityKind,
        name: str,
        doc: DocComment,
        location: Location,
        **fields: str,
    ) -> Collection:
        """Attach the defining comment to a collection, which may already have members."""
        collection = self.collection(kind, name)
        if collection.defined:
            raise DuplicateEntityError(COLLECTION_TYPES[kind](name=name, location=location), collection)
        collection.doc = doc
        collection.location = location
        for attr, value in fields.items():
            setattr(collection, attr, value)
        return collection

    def add_member(self, kind: EntityKind, name: str, entity: DocumentationEntity) -> Collection:
        collection = self.collection(kind, name)
        if entity.id not in collection.members:
            collection.members.append(entity.id)
        return collection

    def examples(self) -> List[ExampleEntity]:
        """Return every example entity ordered by name."""
        found = [entity for entity in self._entities.values() if isinstance(entity, ExampleEntity)]
        return sorted(found, key=lambda example: example.name)

    def clear_examples(self) -> None:
        for entity in self.examples():
            del self._entities[entity.id]
            self._index.pop(_index_key(entity), None)


def _index_key(entity: DocumentationEntity) -> Tuple[EntityKind, bool, str]:
    # C++ and QML declarations live in separate namespaces.
    return entity.kind, entity.is_qml, entity.key


__all__ = ["DocumentationGraph", "DuplicateEntityError"]
