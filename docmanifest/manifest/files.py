"""Choose which example files an IDE should open, most preferred first."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, List, Sequence

# Lower values are preferred; the lowest present priority is the main file.
PRIORITY_QML = 0
PRIORITY_CPP = 1
PRIORITY_HEADER = 2
PRIORITY_MAIN_QML = 3
PRIORITY_MAIN_CPP = 4


@dataclass(frozen=True)
class FileToOpen:
    path: str
    priority: int
    main: bool = False


def rank_files_to_open(files: Sequence[str], example_name: str) -> Dict[int, str]:
    """Map priorities to the files that should be opened for `example_name`.

    Each priority holds one file; when several files qualify for the same
    priority the last one wins.
    """
    ranking: Dict[int, str] = {}
    wanted = example_name.lower()
    for file in files:
        file_name = PurePosixPath(file.replace("\\", "/")).name.lower()
        base_name = file_name.split(".", 1)[0]
        if base_name == wanted:
            if file_name.endswith(".qml"):
                ranking[PRIORITY_QML] = file
            elif file_name.endswith(".cpp"):
                ranking[PRIORITY_CPP] = file
            elif file_name.endswith(".h"):
                ranking[PRIORITY_HEADER] = file
        elif file_name.endswith("main.qml"):
            ranking[PRIORITY_MAIN_QML] = file
        elif file_name.endswith("main.cpp"):
            ranking[PRIORITY_MAIN_CPP] = file
    return dict(sorted(ranking.items()))


def files_to_open(ranking: Dict[int, str]) -> List[FileToOpen]:
    """Order a ranking for output and flag the most preferred file as main."""
    ordered = sorted(ranking.items())
    return [
        FileToOpen(path=path, priority=priority, main=index == 0)
        for index, (priority, path) in enumerate(ordered)
    ]


__all__ = ["FileToOpen", "files_to_open", "rank_files_to_open"]
