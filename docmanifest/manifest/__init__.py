"""Manifest compiler: tag derivation, file ranking and XML serialization."""

from .files import FileToOpen, files_to_open, rank_files_to_open
from .tags import AttributeSet, clean_up_tags, derive_tags, module_name_tags, pattern_matches
from .writer import ManifestWriter, partition
from .xmlwriter import XmlStreamWriter

__all__ = [
    "AttributeSet",
    "FileToOpen",
    "ManifestWriter",
    "XmlStreamWriter",
    "clean_up_tags",
    "derive_tags",
    "files_to_open",
    "module_name_tags",
    "partition",
    "pattern_matches",
    "rank_files_to_open",
]
