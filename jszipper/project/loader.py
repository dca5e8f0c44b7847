"""Build the in-memory project model from configuration."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from jszipper.config.project import DependencyConfig, ProjectConfig
from jszipper.project.models import Artifact, Project


def resolve_path(path: Path, base_path: Path) -> Path:
    path = path.expanduser()
    if path.is_absolute():
        return path
    return (base_path / path).resolve()


def build_project(config: ProjectConfig, base_path: Path) -> Project:
    """Create a :class:`Project` rooted at ``base_path``.

    Relative descriptor, build directory and dependency paths are resolved
    against ``base_path``. Every configured dependency lands in
    ``Project.artifacts``; the ones flagged ``direct`` also land in
    ``Project.dependency_artifacts``.
    """

    basedir = base_path.resolve()
    final_name = config.final_name or f"{config.artifact_id}-{config.version}"

    project_artifact = Artifact(
        group_id=config.group_id,
        artifact_id=config.artifact_id,
        base_version=config.version,
        resolved_version=config.resolved_version,
        type=config.packaging,
        scope="",
    )

    artifacts: list[Artifact] = []
    direct: list[Artifact] = []
    for dep in config.dependencies:
        artifact = _dependency_artifact(dep, basedir)
        artifacts.append(artifact)
        if dep.direct:
            direct.append(artifact)

    project = Project(
        group_id=config.group_id,
        artifact_id=config.artifact_id,
        version=config.version,
        packaging=config.packaging,
        file=resolve_path(config.descriptor, basedir),
        basedir=basedir,
        build_directory=resolve_path(config.build_directory, basedir),
        final_name=final_name,
        artifact=project_artifact,
        artifacts=artifacts,
        dependency_artifacts=direct,
    )
    logger.debug(
        "Loaded project {} with {} dependencies ({} direct)",
        project.coordinates,
        len(artifacts),
        len(direct),
    )
    return project


def _dependency_artifact(dep: DependencyConfig, basedir: Path) -> Artifact:
    return Artifact(
        group_id=dep.group_id,
        artifact_id=dep.artifact_id,
        base_version=dep.version,
        type=dep.type,
        classifier=dep.classifier,
        scope=dep.scope,
        file=resolve_path(dep.file, basedir) if dep.file is not None else None,
    )


__all__ = ["build_project", "resolve_path"]
