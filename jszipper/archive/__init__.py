"""Zip archiving primitives."""

from .resources import ArchiveResource, BytesResource, FileResource
from .selectors import IncludeExcludeSelector, match_path
from .zip import ArchiverError, ZipArchiver, ZipUnArchiver, selectors_for

__all__ = [
    "ArchiveResource",
    "BytesResource",
    "FileResource",
    "IncludeExcludeSelector",
    "match_path",
    "ArchiverError",
    "ZipArchiver",
    "ZipUnArchiver",
    "selectors_for",
]
