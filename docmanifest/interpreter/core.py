"""Turns documentation comments into entities of the documentation graph."""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..commands import Markup, MetaCommand, TopicCommand, Unrecognized, classify
from ..graph import DocumentationGraph, DuplicateEntityError
from ..logging import get_logger
from ..models import CommandOccurrence, DocComment, Location
from .base import AnnotationIssue, InterpreterContext, InterpretResult, TopicArgumentError
from .examples import ExampleFileResolver
from .meta import META_HANDLERS
from .topics import TOPIC_HANDLERS

# Commands that write to the comment itself rather than to its entities.
_DOC_SCOPED = frozenset({MetaCommand.META})


class AnnotationInterpreter:
    """Dispatches topic and meta commands of each comment through fixed handler tables."""

    def __init__(
        self,
        graph: DocumentationGraph,
        context: InterpreterContext | None = None,
        resolver: ExampleFileResolver | None = None,
    ) -> None:
        self.graph = graph
        self.context = context or InterpreterContext()
        if resolver is None and self.context.example_dirs:
            resolver = ExampleFileResolver(self.context)
        self.resolver = resolver
        self.logger = get_logger("interpreter")
        self.issues: List[AnnotationIssue] = []

    def interpret_all(self, docs: Iterable[DocComment]) -> List[AnnotationIssue]:
        """Interpret every comment in order and return the issues they raised."""
        issues: List[AnnotationIssue] = []
        for doc in docs:
            issues.extend(self.interpret(doc).issues)
        return issues

    def interpret(self, doc: DocComment, *, target: Optional[int] = None) -> InterpretResult:
        """Apply one comment to the graph.

        A comment declares its entity with a topic command. Comments without a
        topic document `target`, the declaration the comment was found next
        to, when the caller supplies one.
        """
        result = InterpretResult()
        topics: List[CommandOccurrence] = []
        metas: List[tuple[MetaCommand, CommandOccurrence]] = []

        for occurrence in doc.commands:
            command = classify(occurrence.name)
            if isinstance(command, TopicCommand):
                topics.append(occurrence)
            elif isinstance(command, MetaCommand):
                metas.append((command, occurrence))
            elif isinstance(command, Unrecognized):
                self._report(result, occurrence.location, occurrence.name, f"Unknown command '\\{command.name}'")
            elif isinstance(command, Markup):
                continue

        if self._has_too_many_topics(doc, topics, result):
            return self._finish(result)

        if topics:
            for occurrence in topics:
                entity_id = self._process_topic(occurrence, doc, result)
                if entity_id is not None:
                    result.entities.append(entity_id)
        elif target is not None:
            entity = self.graph.get(target)
            if entity.doc is None:
                entity.doc = doc
            result.entities.append(target)
        else:
            self._report(result, doc.location, "", "Comment contains no topic command")
            return self._finish(result)

        for command, occurrence in metas:
            targets = result.entities[:1] if command in _DOC_SCOPED else result.entities
            for entity_id in targets:
                message = META_HANDLERS[command](self, self.graph.get(entity_id), occurrence, doc)
                if message:
                    self._report(result, occurrence.location, occurrence.name, message)

        return self._finish(result)

    def _has_too_many_topics(
        self, doc: DocComment, topics: List[CommandOccurrence], result: InterpretResult
    ) -> bool:
        distinct = list(dict.fromkeys(occurrence.name for occurrence in topics))
        if len(distinct) <= 1:
            return False
        used = ", ".join(f"\\{name}" for name in distinct)
        self._report(result, doc.location, distinct[1], f"Multiple topic commands found in comment: {used}")
        return True

    def _process_topic(
        self, occurrence: CommandOccurrence, doc: DocComment, result: InterpretResult
    ) -> Optional[int]:
        handler = TOPIC_HANDLERS[TopicCommand(occurrence.name)]
        try:
            return handler(self, occurrence, doc)
        except TopicArgumentError as exc:
            self._report(result, occurrence.location, occurrence.name, str(exc))
        except DuplicateEntityError as exc:
            self._report(result, occurrence.location, occurrence.name, f"Duplicate \\{occurrence.name}: {exc}")
        return None

    def _report(self, result: InterpretResult, location: Location, command: str, message: str) -> None:
        issue = AnnotationIssue(location=location, command=command, message=message)
        result.issues.append(issue)
        self.logger.warning("%s", issue)

    def _finish(self, result: InterpretResult) -> InterpretResult:
        self.issues.extend(result.issues)
        return result


__all__ = ["AnnotationInterpreter"]
