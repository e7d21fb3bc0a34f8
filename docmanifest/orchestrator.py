"""Pipeline orchestration for the generate and check commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .config import ManifestConfig, load_config
from .graph import DocumentationGraph
from .interpreter import AnnotationInterpreter, AnnotationIssue, InterpreterContext
from .logging import get_logger
from .manifest import ManifestWriter
from .reader import DocReader


@dataclass
class GenerateOutcome:
    """Result of a manifest generation run."""

    written: List[Path] = field(default_factory=list)
    issues: List[AnnotationIssue] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class Orchestrator:
    """Reads doc comments, builds the documentation graph and writes manifests."""

    def __init__(self, reader: DocReader | None = None) -> None:
        self._reader = reader
        self.logger = get_logger("orchestrator")

    def run_generate(self, path: str, *, output_dir: str | None = None) -> GenerateOutcome:
        """Interpret every doc comment under `path` and write its manifests."""
        config = self._load_config(path)
        if output_dir is not None:
            config.output_dir = Path(output_dir).expanduser().resolve()
        self.logger.info("Starting generate run for %s (project=%s)", config.root, config.project)

        graph, issues = self._build_graph(config)
        writer = ManifestWriter(config, graph)
        written = writer.generate_manifest_files()
        if not written:
            self.logger.info("No examples documented; no manifest written")
        return GenerateOutcome(written=written, issues=issues, warnings=list(writer.warnings))

    def run_check(self, path: str) -> List[AnnotationIssue]:
        """Interpret every doc comment under `path` and return the issues found."""
        config = self._load_config(path)
        self.logger.info("Starting check run for %s", config.root)
        _, issues = self._build_graph(config)
        return issues

    def _load_config(self, path: str) -> ManifestConfig:
        return load_config(Path(path).expanduser().resolve())

    def _build_graph(self, config: ManifestConfig) -> tuple[DocumentationGraph, List[AnnotationIssue]]:
        reader = self._reader or DocReader(config.exclude_dirs, config.exclude_files)
        docs = reader.read_tree(config.root, config.sources)
        self.logger.debug("Reader found %d doc comments", len(docs))

        graph = DocumentationGraph()
        interpreter = AnnotationInterpreter(graph, InterpreterContext.from_config(config))
        issues = interpreter.interpret_all(docs)
        self.logger.debug(
            "Interpreted %d doc comments into %d entities (%d issues)",
            len(docs),
            len(graph),
            len(issues),
        )
        return graph, issues


__all__ = ["GenerateOutcome", "Orchestrator"]
