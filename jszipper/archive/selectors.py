"""Include/exclude selection of archive entries using Ant-style globs."""

from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Iterable, Sequence


def _split(path: str) -> list[str]:
    return [segment for segment in path.replace("\\", "/").split("/") if segment]


def normalize_pattern(pattern: str) -> str:
    pattern = pattern.strip().replace("\\", "/")
    if pattern.endswith("/"):
        pattern += "**"
    return pattern


def match_path(pattern: str, path: str) -> bool:
    """Match ``path`` against an Ant-style ``pattern``.

    ``*`` and ``?`` match within a single path segment, ``**`` matches any
    number of segments (including none). Matching is case sensitive.
    """

    return _match_segments(_split(normalize_pattern(pattern)), _split(path))


def _match_segments(pattern: Sequence[str], path: Sequence[str]) -> bool:
    if not pattern:
        return not path

    head = pattern[0]
    if head == "**":
        rest = pattern[1:]
        # collapse consecutive ``**``
        while rest and rest[0] == "**":
            rest = rest[1:]
        if not rest:
            return True
        return any(_match_segments(rest, path[index:]) for index in range(len(path) + 1))

    if not path:
        return False
    if not fnmatchcase(path[0], head):
        return False
    return _match_segments(pattern[1:], path[1:])


class IncludeExcludeSelector:
    """Admit an entry when it matches an include (if any) and no exclude (if any)."""

    def __init__(
        self,
        includes: Iterable[str] | None = None,
        excludes: Iterable[str] | None = None,
    ) -> None:
        self.includes = [normalize_pattern(p) for p in includes or () if p.strip()]
        self.excludes = [normalize_pattern(p) for p in excludes or () if p.strip()]

    def is_selected(self, entry_name: str) -> bool:
        if self.includes and not any(match_path(p, entry_name) for p in self.includes):
            return False
        if any(match_path(p, entry_name) for p in self.excludes):
            return False
        return True

    def __repr__(self) -> str:
        return f"IncludeExcludeSelector(includes={self.includes!r}, excludes={self.excludes!r})"

    @classmethod
    def from_csv(cls, includes: str | None, excludes: str | None) -> "IncludeExcludeSelector | None":
        """Build a selector from comma-separated pattern lists, or ``None`` when both are empty."""

        if not includes and not excludes:
            return None
        return cls(
            includes=includes.split(",") if includes else None,
            excludes=excludes.split(",") if excludes else None,
        )


__all__ = ["IncludeExcludeSelector", "match_path", "normalize_pattern"]
