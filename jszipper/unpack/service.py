"""Extract ``jszip`` dependencies of a project into a staging directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from jszipper.archive import ArchiverError, ZipUnArchiver, selectors_for
from jszipper.config.unpack import UnpackConfig
from jszipper.errors import BuildStepError
from jszipper.filtering import (
    ArtifactFilterError,
    FilterArtifacts,
    ProjectTransitivityFilter,
    ScopeFilter,
    TypeFilter,
)
from jszipper.project.loader import resolve_path
from jszipper.project.models import Artifact, Project


@dataclass(frozen=True)
class UnpackResult:
    """Outcome of an unpack run."""

    target_directory: Path
    artifacts: list[Artifact] = field(default_factory=list)
    files_written: int = 0


class UnpackService:
    """Filter the project's resolved dependencies and unpack the survivors."""

    def __init__(self, project: Project, config: UnpackConfig | None = None) -> None:
        self.project = project
        self.config = config or UnpackConfig()

    @property
    def target_directory(self) -> Path:
        if self.config.target_directory is None:
            return self.project.build_directory / self.project.final_name
        return resolve_path(self.config.target_directory, self.project.basedir)

    def build_filter(self) -> FilterArtifacts:
        chain = FilterArtifacts()
        chain.add_filter(
            ProjectTransitivityFilter(
                self.project.dependency_artifacts,
                exclude_transitive=self.config.exclude_transitive,
            )
        )
        chain.add_filter(ScopeFilter(self.config.include_scope, ""))
        chain.add_filter(TypeFilter(self.config.include_type, ""))
        return chain

    def select_artifacts(self) -> list[Artifact]:
        """Apply the filter chain and return the survivors in extraction order.

        Extraction order is ``group:artifact:version`` so that overlapping
        entries resolve the same way on every run (the last archive wins).
        """

        try:
            selected = self.build_filter().filter(self.project.artifacts)
        except ArtifactFilterError as exc:
            raise BuildStepError(str(exc)) from exc
        return sorted(selected, key=lambda artifact: artifact.sort_key)

    def run(self) -> UnpackResult:
        artifacts = self.select_artifacts()
        target = self.target_directory

        written = 0
        for artifact in artifacts:
            if artifact.file is None:
                raise BuildStepError(f"Artifact {artifact} has not been resolved to a file")
            written += self.unpack(artifact.file, target, self.config.includes, self.config.excludes)

        logger.info("Artifacts = {}", [str(artifact) for artifact in artifacts])
        return UnpackResult(target_directory=target, artifacts=artifacts, files_written=written)

    def unpack(
        self,
        file: Path,
        location: Path,
        includes: str | None = None,
        excludes: str | None = None,
    ) -> int:
        """Extract ``file`` into ``location``; returns the number of files written."""

        try:
            location.mkdir(parents=True, exist_ok=True)
            unarchiver = ZipUnArchiver(file, location, selectors=selectors_for(includes, excludes))
            written = unarchiver.extract()
        except (ArchiverError, OSError) as exc:
            raise BuildStepError(f"Error unpacking file: {file} to: {location}\n{exc}") from exc

        logger.info("Unpacked {} ({} files) to {}", file.name, written, location)
        return written


__all__ = ["UnpackService", "UnpackResult"]
