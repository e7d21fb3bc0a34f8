"""Locate the project, source and image files that belong to an example."""

from __future__ import annotations

from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..entities import ExampleEntity
from ..logging import get_logger
from .base import InterpreterContext

_PROJECT_FILE_CANDIDATES = (
    "CMakeLists.txt",
    "{leaf}.pro",
    "{leaf}.qmlproject",
    "{leaf}.pyproject",
    "qbuild.pro",
)
_EXTRA_FILES_FILTER = "*.qrc *.pro *.qmlproject *.pyproject CMakeLists.txt qmldir"
_GENERATED_MARKERS = ("/qrc_", "/moc_", "/ui_")


class ExampleFileResolver:
    """Fills in an example's project file, file list and images from disk."""

    def __init__(self, context: InterpreterContext) -> None:
        self.context = context
        self.logger = get_logger("interpreter.examples")

    def find_project_file(self, name: str) -> Optional[tuple[Path, Path]]:
        """Return `(example_dir_root, project_file)` for the example `name`."""
        leaf = name[name.rfind("/") + 1 :]
        for root in self.context.example_dirs:
            example_dir = root / name
            if not example_dir.is_dir():
                continue
            for candidate in _PROJECT_FILE_CANDIDATES:
                project_file = example_dir / candidate.format(leaf=leaf)
                if project_file.is_file():
                    return root, project_file
        return None

    def resolve(self, example: ExampleEntity) -> bool:
        """Populate `example` in place; returns False when no project file exists."""
        found = self.find_project_file(example.name)
        if found is None:
            dirs = " ".join(str(path) for path in self.context.example_dirs)
            self.logger.warning(
                "%s: Cannot find project file for example '%s' (example directories: %s)",
                example.location,
                example.name,
                dirs or "<none>",
            )
            return False

        root, project_file = found
        example_dir = project_file.parent
        example_files = self._files_here(
            example_dir, self.context.example_name_filter, self.context.exclude_dirs
        )
        image_files = self._files_here(
            example_dir,
            self.context.example_image_filter,
            self.context.exclude_dirs | {(example_dir / "doc" / "images").as_posix()},
        )

        if example_files:
            example_files = _move_main_cpp_last(example_files)
            example_files.extend(
                path
                for path in self._files_here(example_dir, _EXTRA_FILES_FILTER, self.context.exclude_dirs)
                if path not in example_files
            )

        example.files = [_relative(path, root) for path in example_files]
        example.images = [_relative(path, root) for path in image_files]
        example.project_file = _relative(project_file, root)
        self.logger.debug(
            "Resolved example %s: %d files, %d images",
            example.name,
            len(example.files),
            len(example.images),
        )
        return True

    def _files_here(self, directory: Path, name_filter: str, exclude_dirs: Iterable[str]) -> List[Path]:
        patterns = name_filter.split()
        excluded = tuple(exclude_dirs)
        results: List[Path] = []
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError:
            return results

        for entry in entries:
            if entry.is_file() and _matches_any(entry.name, patterns):
                if not _is_excluded(entry, self.context.exclude_files):
                    results.append(entry)
        for entry in entries:
            if entry.is_dir() and not _is_excluded(entry, excluded):
                results.extend(self._files_here(entry, name_filter, excluded))
        return results


def _move_main_cpp_last(files: Sequence[Path]) -> List[Path]:
    main_cpp: Optional[Path] = None
    kept: List[Path] = []
    for path in files:
        posix = path.as_posix()
        if posix.endswith("/main.cpp"):
            if main_cpp is None:
                main_cpp = path
            continue
        if any(marker in posix for marker in _GENERATED_MARKERS):
            continue
        kept.append(path)
    if main_cpp is not None:
        kept.append(main_cpp)
    return kept


def _matches_any(name: str, patterns: Sequence[str]) -> bool:
    return any(fnmatchcase(name, pattern) for pattern in patterns)


def _is_excluded(path: Path, patterns: Iterable[str]) -> bool:
    posix = path.as_posix()
    for pattern in patterns:
        trimmed = pattern.rstrip("/")
        if not trimmed:
            continue
        if fnmatchcase(path.name, trimmed) or posix == trimmed or posix.endswith(f"/{trimmed}"):
            return True
    return False


def _relative(path: Path, root: Path) -> str:
    return path.relative_to(root).as_posix()


__all__ = ["ExampleFileResolver"]
