"""Annotation command interpreter."""

from .base import AnnotationIssue, InterpreterContext, InterpretResult, TopicArgumentError
from .core import AnnotationInterpreter
from .examples import ExampleFileResolver
from .meta import META_HANDLERS
from .topics import TOPIC_HANDLERS

__all__ = [
    "AnnotationInterpreter",
    "AnnotationIssue",
    "ExampleFileResolver",
    "InterpretResult",
    "InterpreterContext",
    "META_HANDLERS",
    "TOPIC_HANDLERS",
    "TopicArgumentError",
]
