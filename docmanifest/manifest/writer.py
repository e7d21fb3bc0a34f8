"""Writes the examples and demos manifest files read by IDE example browsers."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..config import ManifestConfig, ManifestMetaFilter
from ..entities import ExampleEntity
from ..graph import DocumentationGraph
from ..logging import get_logger
from .files import files_to_open, rank_files_to_open
from .tags import AttributeSet, derive_tags
from .xmlwriter import XmlStreamWriter

MANIFEST_KINDS = {"examples": "example", "demos": "demo"}
NO_DESCRIPTION = "No description available"
ATTRIBUTES_TO_WARN_FOR = ("imageUrl", "projectPath")


def partition(examples: Iterable[ExampleEntity], kind: str) -> List[ExampleEntity]:
    """Return the examples that belong in the `kind` manifest."""
    demos = kind == "demos"
    return [example for example in examples if example.is_demo == demos]


def canonical_file_base(text: str) -> str:
    base = re.sub(r"[^a-z0-9]+", "-", text.lower())
    return base.strip("-")


def example_file_base(project: str, example: ExampleEntity) -> str:
    return canonical_file_base(f"{project}-{example.name}-example")


class ManifestWriter:
    """Compiles example entities of a documentation graph into manifest XML."""

    def __init__(
        self,
        config: ManifestConfig,
        graph: DocumentationGraph,
        meta_filters: Optional[Sequence[ManifestMetaFilter]] = None,
    ) -> None:
        self.config = config
        self.graph = graph
        self.project = config.project
        self.output_dir = Path(config.output_dir) if config.output_dir else config.root
        self.manifest_dir = config.qhp.url_prefix
        self.meta_filters: List[ManifestMetaFilter] = list(
            config.manifest_meta if meta_filters is None else meta_filters
        )
        self.examples_path = config.examples_install_path
        if self.examples_path and not self.examples_path.endswith("/"):
            self.examples_path += "/"
        self.warnings: List[str] = []
        self.logger = get_logger("manifest")

    def generate_manifest_files(self) -> List[Path]:
        """Write the examples and demos manifests, then release the examples."""
        written: List[Path] = []
        for kind in MANIFEST_KINDS:
            path = self.generate_manifest_file(kind)
            if path is not None:
                written.append(path)
        self.graph.clear_examples()
        self.meta_filters.clear()
        return written

    def generate_manifest_file(self, kind: str) -> Optional[Path]:
        """Write `<kind>-manifest.xml`; returns None when nothing was written."""
        examples = partition(self.graph.examples(), kind)
        if not examples:
            self.logger.debug("No %s to write a manifest for", kind)
            return None

        writer = XmlStreamWriter()
        self.serialize(examples, kind, writer)

        output_file = self.output_dir / f"{kind}-manifest.xml"
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            output_file.write_text(writer.getvalue(), encoding="utf-8")
        except OSError as exc:
            self.logger.debug("Cannot write %s: %s", output_file, exc)
            return None
        self.logger.info("Wrote %d %s to %s", len(examples), kind, output_file)
        return output_file

    def serialize(self, examples: Iterable[ExampleEntity], kind: str, writer: XmlStreamWriter) -> bool:
        """Emit the manifest document for the `kind` partition of `examples`."""
        element = MANIFEST_KINDS[kind]
        selected = sorted(partition(examples, kind), key=lambda example: example.name)
        if not selected:
            return False

        writer.start_document()
        writer.start_element("instructionals")
        writer.attribute("module", self.project)
        writer.start_element(kind)
        for example in selected:
            self._write_example(example, element, writer)
        writer.end_element()
        writer.end_element()
        writer.end_document()
        return True

    def install_path(self, example: ExampleEntity) -> str:
        """Install prefix for `example`: its `\\meta installpath` or the configured one."""
        install_path = ""
        if example.doc is not None:
            install_path = example.doc.meta_tags.value("installpath")
        if not install_path:
            install_path = self.examples_path
        if install_path and not install_path.endswith("/"):
            install_path += "/"
        return install_path

    def _write_example(self, example: ExampleEntity, element: str, writer: XmlStreamWriter) -> None:
        install_path = self.install_path(example)

        attributes = AttributeSet()
        attributes.write("name", example.title)
        attributes.write("docUrl", f"{self.manifest_dir}{example_file_base(self.project, example)}.html")
        if example.project_file:
            attributes.write("projectPath", install_path + example.project_file)
        if example.image_file_name:
            attributes.write("imageUrl", self.manifest_dir + example.image_file_name)

        tags = derive_tags(example, self.project, self.meta_filters, attributes)
        self._warn_about_unused_attributes(attributes, example.name)

        writer.start_element(element)
        for name, value in attributes.items():
            writer.attribute(name, value)

        writer.start_element("description")
        writer.cdata(example.brief_text or NO_DESCRIPTION)
        writer.end_element()

        if tags:
            writer.text_element("tags", ",".join(sorted(tags)))

        ranking = rank_files_to_open(example.files, example.base_name)
        for file in files_to_open(ranking):
            writer.start_element("fileToOpen")
            if file.main:
                writer.attribute("mainFile", "true")
            writer.characters(install_path + file.path)
            writer.end_element()

        writer.end_element()

    def _warn_about_unused_attributes(self, attributes: AttributeSet, name: str) -> None:
        for attribute in ATTRIBUTES_TO_WARN_FOR:
            if attribute not in attributes:
                message = f"{name}: missing attribute {attribute}"
                self.warnings.append(message)
                self.logger.warning("%s", message)


__all__ = [
    "ManifestWriter",
    "NO_DESCRIPTION",
    "canonical_file_base",
    "example_file_base",
    "partition",
]
