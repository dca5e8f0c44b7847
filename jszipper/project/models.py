"""Data models describing the project being built and its dependencies."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

SNAPSHOT_VERSION = "SNAPSHOT"

# <base>-yyyyMMdd.HHmmss-<build number>, as written by snapshot deployments
_TIMESTAMPED_SNAPSHOT = re.compile(r"^(?P<base>.*)-(?P<timestamp>\d{8}\.\d{6})-(?P<build>\d+)$")


def is_snapshot_version(version: str) -> bool:
    if version.endswith(SNAPSHOT_VERSION):
        return True
    return _TIMESTAMPED_SNAPSHOT.match(version) is not None


@dataclass(slots=True)
class Artifact:
    """A versioned build product identified by its coordinates."""

    group_id: str
    artifact_id: str
    base_version: str
    type: str = "jar"
    classifier: str | None = None
    scope: str = "compile"
    file: Path | None = None
    resolved_version: str | None = None

    @property
    def version(self) -> str:
        return self.resolved_version or self.base_version

    @property
    def is_snapshot(self) -> bool:
        return is_snapshot_version(self.base_version)

    @property
    def dependency_conflict_id(self) -> str:
        """``group:artifact:type[:classifier]``, the identity of a dependency across versions."""

        conflict_id = f"{self.group_id}:{self.artifact_id}:{self.type}"
        if self.classifier:
            conflict_id = f"{conflict_id}:{self.classifier}"
        return conflict_id

    @property
    def sort_key(self) -> tuple[str, str, str, str, str]:
        return (self.group_id, self.artifact_id, self.version, self.type, self.classifier or "")

    def coordinates(self) -> str:
        parts = [self.group_id, self.artifact_id, self.type]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        if self.scope:
            parts.append(self.scope)
        return ":".join(parts)

    def __str__(self) -> str:
        return self.coordinates()


@dataclass(slots=True)
class Project:
    """In-memory project model shared by the build steps.

    ``artifacts`` holds the full resolved dependency set while
    ``dependency_artifacts`` holds only the dependencies the project declares
    itself. ``artifact`` is the project's own output; its ``file`` is set once
    the primary archive has been built.
    """

    group_id: str
    artifact_id: str
    version: str
    packaging: str
    file: Path
    basedir: Path
    build_directory: Path
    final_name: str
    artifact: Artifact
    artifacts: list[Artifact] = field(default_factory=list)
    dependency_artifacts: list[Artifact] = field(default_factory=list)
    attached_artifacts: list[Artifact] = field(default_factory=list)

    def attach_artifact(self, type: str, classifier: str, file: Path) -> Artifact:  # noqa: A002
        """Register a classified secondary output of the build."""

        attached = Artifact(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            base_version=self.artifact.base_version,
            resolved_version=self.artifact.resolved_version,
            type=type,
            classifier=classifier.lstrip("-"),
            scope="",
            file=file,
        )
        self.attached_artifacts = [
            existing
            for existing in self.attached_artifacts
            if existing.dependency_conflict_id != attached.dependency_conflict_id
        ]
        self.attached_artifacts.append(attached)
        return attached

    @property
    def coordinates(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


__all__ = ["Artifact", "Project", "SNAPSHOT_VERSION", "is_snapshot_version"]
