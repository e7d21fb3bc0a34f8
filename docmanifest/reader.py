"""Locate `/*! ... */` documentation comments and split them into commands."""

from __future__ import annotations

import re
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, List, Sequence

from .logging import get_logger
from .models import CommandOccurrence, DocComment, Location

_COMMENT_PATTERN = re.compile(r"/\*!(.*?)\*/", re.DOTALL)
_COMMAND_PATTERN = re.compile(r"^\\([A-Za-z][A-Za-z0-9]*)(?:\s+(.*))?$")

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
}


class DocReader:
    """Reads documentation comments from source files."""

    def __init__(self, exclude_dirs: Iterable[str] = (), exclude_files: Iterable[str] = ()) -> None:
        self.exclude_dirs = set(_EXCLUDED_DIRS) | set(exclude_dirs)
        self.exclude_files = set(exclude_files)
        self.logger = get_logger("reader")

    def read_tree(self, root: Path, patterns: Sequence[str]) -> List[DocComment]:
        """Read every file under `root` matching one of the glob `patterns`."""
        docs: List[DocComment] = []
        for path in self._iter_sources(root, patterns):
            docs.extend(self.read_file(path, display=path.relative_to(root).as_posix()))
        self.logger.debug("Read %d doc comments under %s", len(docs), root)
        return docs

    def read_file(self, path: Path, *, display: str | None = None) -> List[DocComment]:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.warning("Cannot read %s: %s", path, exc)
            return []
        return self.read_text(text, display or str(path))

    def read_text(self, text: str, path: str = "") -> List[DocComment]:
        docs: List[DocComment] = []
        for match in _COMMENT_PATTERN.finditer(text):
            start_line = text.count("\n", 0, match.start()) + 1
            docs.append(parse_comment(match.group(1), Location(path, start_line)))
        return docs

    def _iter_sources(self, root: Path, patterns: Sequence[str]) -> Iterable[Path]:
        seen = set()
        for pattern in patterns:
            for path in sorted(root.glob(pattern)):
                if path in seen or not path.is_file():
                    continue
                relative = path.relative_to(root)
                if any(part in self.exclude_dirs for part in relative.parts[:-1]):
                    continue
                if any(fnmatchcase(path.name, excluded) for excluded in self.exclude_files):
                    continue
                seen.add(path)
                yield path


def parse_comment(body: str, location: Location) -> DocComment:
    """Split the body of one comment into command occurrences.

    Only commands that start a line are recognised; inline markup stays part
    of the text. `\\brief` takes the rest of its paragraph.
    """
    lines = body.split("\n")
    commands: List[CommandOccurrence] = []
    images: List[str] = []
    brief = ""

    index = 0
    while index < len(lines):
        stripped = lines[index].strip()
        match = _COMMAND_PATTERN.match(stripped)
        line_location = Location(location.path, location.line + index)
        index += 1
        if not match:
            continue
        name, argument = match.group(1), (match.group(2) or "").strip()
        commands.append(CommandOccurrence(name=name, argument=argument, location=line_location))
        if name == "brief" and not brief:
            paragraph = [argument] if argument else []
            while index < len(lines):
                follow = lines[index].strip()
                if not follow or follow.startswith("\\"):
                    break
                paragraph.append(follow)
                index += 1
            brief = " ".join(paragraph)
        elif name == "image" and argument:
            images.append(argument.split()[0])

    return DocComment(
        text=body.strip(),
        commands=tuple(commands),
        location=location,
        brief=brief,
        images=tuple(images),
    )


__all__ = ["DocReader", "parse_comment"]
