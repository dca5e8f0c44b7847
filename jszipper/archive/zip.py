"""Zip archiver and unarchiver used by the build steps."""

from __future__ import annotations

import os
import shutil
import tempfile
import zipfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path, PurePosixPath
from typing import Sequence

from loguru import logger

from .resources import ArchiveResource, FileResource
from .selectors import IncludeExcludeSelector

_MIN_ZIP_TIME = (1980, 1, 1, 0, 0, 0)
_FILE_MODE = 0o100644
_DIR_MODE = 0o040755


class ArchiverError(RuntimeError):
    """Raised when an archive cannot be read, written or is misconfigured."""


def _zip_time(last_modified_ms: int) -> tuple[int, int, int, int, int, int]:
    stamp = datetime.fromtimestamp(last_modified_ms / 1000)
    date_time = (stamp.year, stamp.month, stamp.day, stamp.hour, stamp.minute, stamp.second)
    return max(date_time, _MIN_ZIP_TIME)


@dataclass(slots=True)
class _Entry:
    name: str
    resource: ArchiveResource | None
    last_modified: int

    @property
    def is_directory(self) -> bool:
        return self.resource is None


class ZipArchiver:
    """Collect files, directories and in-memory resources into a zip file."""

    def __init__(
        self,
        dest_file: Path,
        *,
        include_empty_dirs: bool = False,
        compress: bool = True,
        forced: bool = False,
    ) -> None:
        self.dest_file = Path(dest_file)
        self.include_empty_dirs = include_empty_dirs
        self.compress = compress
        self.forced = forced
        self._entries: dict[str, _Entry] = {}

    @property
    def entry_names(self) -> list[str]:
        return list(self._entries)

    def add_file(self, path: Path, entry_name: str) -> None:
        path = Path(path)
        if not path.is_file():
            raise ArchiverError(f"{path} isn't a file.")
        self.add_resource(FileResource(path), entry_name)

    def add_resource(self, resource: ArchiveResource, entry_name: str) -> None:
        if not resource.exists:
            raise ArchiverError(f"{resource.name} doesn't exist.")
        self._put(_Entry(_clean_entry_name(entry_name), resource, resource.last_modified))

    def add_directory(self, directory: Path, prefix: str = "") -> None:
        """Mirror the tree under ``directory`` into the archive, relative to it."""

        directory = Path(directory)
        if not directory.is_dir():
            raise ArchiverError(f"{directory} isn't a directory.")

        prefix = prefix.strip("/")
        for path in sorted(directory.rglob("*")):
            relative = path.relative_to(directory).as_posix()
            name = f"{prefix}/{relative}" if prefix else relative
            if path.is_dir():
                if self.include_empty_dirs:
                    mtime = int(path.stat().st_mtime * 1000)
                    self._put(_Entry(_clean_entry_name(name) + "/", None, mtime))
                continue
            if path.is_file():
                self.add_resource(FileResource(path), name)

    def is_up_to_date(self) -> bool:
        """Return ``True`` when the destination exists and no entry is newer than it."""

        if not self.dest_file.is_file():
            return False
        dest_mtime = int(self.dest_file.stat().st_mtime * 1000)
        for entry in self._entries.values():
            if entry.is_directory:
                continue
            if entry.last_modified > dest_mtime:
                logger.debug("{} is newer than {}", entry.name, self.dest_file)
                return False
        return True

    def create_archive(self) -> bool:
        """Write the archive; returns ``False`` when an up-to-date archive was kept."""

        if not self._entries:
            raise ArchiverError("You must set at least one file.")

        if not self.forced and self.is_up_to_date():
            logger.info("Archive {} is up to date", self.dest_file)
            return False

        self.dest_file.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.dest_file.name}.", suffix=".tmp", dir=self.dest_file.parent)
        os.close(fd)
        tmp_path = Path(tmp_name)

        compression = zipfile.ZIP_DEFLATED if self.compress else zipfile.ZIP_STORED
        try:
            with zipfile.ZipFile(tmp_path, "w", compression=compression) as zf:
                for entry in self._entries.values():
                    self._write_entry(zf, entry, compression)
            os.replace(tmp_path, self.dest_file)
        except (OSError, ValueError, zipfile.BadZipFile) as exc:
            tmp_path.unlink(missing_ok=True)
            raise ArchiverError(f"Problem creating zip {self.dest_file}: {exc}") from exc

        logger.info("Building zip: {} ({} entries)", self.dest_file, len(self._entries))
        return True

    def _put(self, entry: _Entry) -> None:
        if entry.name in self._entries:
            logger.debug("Replacing archive entry {}", entry.name)
        self._entries[entry.name] = entry

    @staticmethod
    def _write_entry(zf: zipfile.ZipFile, entry: _Entry, compression: int) -> None:
        info = zipfile.ZipInfo(entry.name, date_time=_zip_time(entry.last_modified))
        if entry.resource is None:
            info.external_attr = (_DIR_MODE << 16) | 0x10
            zf.writestr(info, b"")
            return

        info.compress_type = compression
        info.external_attr = _FILE_MODE << 16
        with entry.resource.open() as source, zf.open(info, "w") as target:
            shutil.copyfileobj(source, target)


class ZipUnArchiver:
    """Extract a zip archive into a directory, optionally filtered by selectors."""

    def __init__(
        self,
        source_file: Path,
        dest_directory: Path,
        *,
        selectors: Sequence[IncludeExcludeSelector] = (),
        overwrite: bool = True,
    ) -> None:
        self.source_file = Path(source_file)
        self.dest_directory = Path(dest_directory)
        self.selectors = list(selectors)
        self.overwrite = overwrite

    def is_selected(self, entry_name: str) -> bool:
        return all(selector.is_selected(entry_name) for selector in self.selectors)

    def extract(self) -> int:
        """Extract the selected entries; returns the number of files written."""

        if not self.source_file.is_file():
            raise ArchiverError(f"The source file {self.source_file} doesn't exist.")
        if self.dest_directory.exists() and not self.dest_directory.is_dir():
            raise ArchiverError(f"The destination {self.dest_directory} isn't a directory.")

        logger.debug("Expanding {} into {}", self.source_file, self.dest_directory)
        dest_root = self.dest_directory.resolve()
        written = 0
        try:
            with zipfile.ZipFile(self.source_file, "r") as zf:
                for info in zf.infolist():
                    if not self.is_selected(info.filename):
                        continue
                    target = self._target_path(dest_root, info.filename)
                    if info.is_dir():
                        target.mkdir(parents=True, exist_ok=True)
                        continue
                    if target.exists() and not self.overwrite:
                        logger.debug("Skipping existing file {}", target)
                        continue
                    target.parent.mkdir(parents=True, exist_ok=True)
                    with zf.open(info) as source, target.open("wb") as sink:
                        shutil.copyfileobj(source, sink)
                    mtime = _entry_mtime(info)
                    if mtime is not None:
                        os.utime(target, (mtime, mtime))
                    written += 1
        # encrypted entries raise RuntimeError, unknown compression NotImplementedError
        except (
            OSError,
            RuntimeError,
            NotImplementedError,
            ValueError,
            zipfile.BadZipFile,
            zipfile.LargeZipFile,
        ) as exc:
            raise ArchiverError(f"Error while expanding {self.source_file}: {exc}") from exc
        return written

    @staticmethod
    def _target_path(dest_root: Path, entry_name: str) -> Path:
        member = PurePosixPath(entry_name.replace("\\", "/"))
        if member.is_absolute() or (member.parts and member.parts[0].endswith(":")):
            raise ArchiverError(f"Archive entry {entry_name!r} has an absolute path")
        target = (dest_root / member).resolve()
        if target != dest_root and dest_root not in target.parents:
            raise ArchiverError(f"Archive entry {entry_name!r} would extract outside {dest_root}")
        return target


def _entry_mtime(info: zipfile.ZipInfo) -> float | None:
    """Epoch seconds of the entry's DOS timestamp, or ``None`` when it is not a valid date."""

    try:
        return datetime(*info.date_time).timestamp()
    except (ValueError, OverflowError):
        logger.debug("Entry {} has an invalid timestamp {}", info.filename, info.date_time)
        return None


def _clean_entry_name(name: str) -> str:
    cleaned = name.replace("\\", "/").strip("/")
    if not cleaned:
        raise ArchiverError("Archive entry name must not be empty")
    return cleaned


def selectors_for(includes: str | None, excludes: str | None) -> list[IncludeExcludeSelector]:
    selector = IncludeExcludeSelector.from_csv(includes, excludes)
    return [selector] if selector is not None else []


__all__ = [
    "ArchiverError",
    "ZipArchiver",
    "ZipUnArchiver",
    "selectors_for",
]
