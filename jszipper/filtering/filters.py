"""Composable filters over a project's resolved dependency set."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Sequence

from loguru import logger

from jszipper.project.models import Artifact

VALID_SCOPES: frozenset[str] = frozenset({"compile", "provided", "runtime", "test", "system", "import"})


class ArtifactFilterError(ValueError):
    """Raised when a filter is configured with invalid parameters."""


class ArtifactsFilter(ABC):
    """Abstract filter keeping a subset of artifacts."""

    def filter(self, artifacts: Sequence[Artifact]) -> list[Artifact]:
        """Return the artifacts this filter keeps, in input order."""
        return [artifact for artifact in artifacts if self.is_artifact_included(artifact)]

    @abstractmethod
    def is_artifact_included(self, artifact: Artifact) -> bool:
        """Return ``True`` when ``artifact`` passes the filter."""


class ProjectTransitivityFilter(ArtifactsFilter):
    """Keep only dependencies the project declares directly.

    Artifacts are matched on their dependency conflict id, so a direct
    dependency resolved to a different version still counts as direct.
    """

    def __init__(self, direct_artifacts: Iterable[Artifact], exclude_transitive: bool = True) -> None:
        self.direct_ids = {artifact.dependency_conflict_id for artifact in direct_artifacts}
        self.exclude_transitive = exclude_transitive

    def is_artifact_included(self, artifact: Artifact) -> bool:
        if not self.exclude_transitive:
            return True
        return artifact.dependency_conflict_id in self.direct_ids


class ScopeFilter(ArtifactsFilter):
    """Keep artifacts whose scope equals ``include_scope`` and differs from ``exclude_scope``."""

    def __init__(self, include_scope: str = "", exclude_scope: str = "") -> None:
        self.include_scope = (include_scope or "").strip()
        self.exclude_scope = (exclude_scope or "").strip()

    def filter(self, artifacts: Sequence[Artifact]) -> list[Artifact]:
        self._validate()
        return super().filter(artifacts)

    def is_artifact_included(self, artifact: Artifact) -> bool:
        if self.include_scope and artifact.scope != self.include_scope:
            return False
        if self.exclude_scope and artifact.scope == self.exclude_scope:
            return False
        return True

    def _validate(self) -> None:
        if self.include_scope and self.include_scope not in VALID_SCOPES:
            raise ArtifactFilterError(f"Invalid Scope in includeScope: {self.include_scope}")
        if self.exclude_scope and self.exclude_scope not in VALID_SCOPES:
            raise ArtifactFilterError(f"Invalid Scope in excludeScope: {self.exclude_scope}")
        if self.include_scope and self.include_scope == self.exclude_scope:
            raise ArtifactFilterError(f"includeScope and excludeScope cannot both be {self.include_scope}")


class TypeFilter(ArtifactsFilter):
    """Keep artifacts whose type is listed in ``include_types`` and not in ``exclude_types``.

    Both arguments are comma-separated lists; an empty list disables that side.
    """

    def __init__(self, include_types: str = "", exclude_types: str = "") -> None:
        self.include_types = _split_csv(include_types)
        self.exclude_types = _split_csv(exclude_types)

    def is_artifact_included(self, artifact: Artifact) -> bool:
        if self.include_types and artifact.type not in self.include_types:
            return False
        return artifact.type not in self.exclude_types


class FilterArtifacts:
    """An ordered chain of filters; an artifact survives only if every filter keeps it."""

    def __init__(self, filters: Iterable[ArtifactsFilter] | None = None) -> None:
        self.filters: list[ArtifactsFilter] = list(filters or [])

    def add_filter(self, artifact_filter: ArtifactsFilter) -> None:
        self.filters.append(artifact_filter)

    def filter(self, artifacts: Iterable[Artifact]) -> list[Artifact]:
        result = list(artifacts)
        for artifact_filter in self.filters:
            before = len(result)
            result = artifact_filter.filter(result)
            logger.debug(
                "{} kept {} of {} artifacts",
                artifact_filter.__class__.__name__,
                len(result),
                before,
            )
        return result


def _split_csv(value: str | None) -> frozenset[str]:
    if not value:
        return frozenset()
    return frozenset(part.strip() for part in value.split(",") if part.strip())


__all__ = [
    "ArtifactFilterError",
    "ArtifactsFilter",
    "FilterArtifacts",
    "ProjectTransitivityFilter",
    "ScopeFilter",
    "TypeFilter",
    "VALID_SCOPES",
]
