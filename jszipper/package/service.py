"""Assemble the project content and descriptor metadata into a zip archive."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from jszipper.archive import ZipArchiver
from jszipper.config.package import PackageConfig
from jszipper.errors import BuildStepError
from jszipper.project.loader import resolve_path
from jszipper.project.models import Project

from .descriptor import (
    DESCRIPTOR_FILE_NAME,
    PROPERTIES_FILE_NAME,
    PomPropertiesResource,
    descriptor_entry_prefix,
)


@dataclass(frozen=True)
class PackageResult:
    """Outcome of a package run."""

    path: Path
    classifier: str | None
    entries: list[str]
    rebuilt: bool


def normalize_classifier(classifier: str | None) -> str:
    """Return the ``-classifier`` file name segment, or ``""`` when there is none."""

    if classifier is None or not classifier.strip():
        return ""
    classifier = classifier.strip()
    return classifier if classifier.startswith("-") else f"-{classifier}"


def zip_file_path(basedir: Path, final_name: str, classifier: str | None = None) -> Path:
    return Path(basedir) / f"{final_name}{normalize_classifier(classifier)}.zip"


class PackageService:
    """Build ``<output_directory>/<final_name>[-<classifier>].zip`` for a project."""

    def __init__(self, project: Project, config: PackageConfig | None = None) -> None:
        self.project = project
        self.config = config or PackageConfig()

    @property
    def content_directory(self) -> Path:
        return resolve_path(self.config.content_directory, self.project.basedir)

    @property
    def output_directory(self) -> Path:
        if self.config.output_directory is None:
            return self.project.build_directory
        return resolve_path(self.config.output_directory, self.project.basedir)

    @property
    def final_name(self) -> str:
        return self.config.final_name or self.project.final_name

    @property
    def classifier(self) -> str | None:
        segment = normalize_classifier(self.config.classifier)
        return segment[1:] if segment else None

    @property
    def zip_file(self) -> Path:
        return zip_file_path(self.output_directory, self.final_name, self.config.classifier)

    def run(self) -> PackageResult:
        """Assemble the archive and record it against the project model.

        An unclassified archive becomes the project's primary artifact file.
        A classified archive is only produced; attaching it is left to the
        caller. Any failure raises :class:`BuildStepError` and registers nothing.
        """

        zip_file = self.zip_file
        try:
            archiver = ZipArchiver(
                zip_file,
                include_empty_dirs=self.config.include_empty_dirs,
                compress=True,
                forced=self.config.force_creation,
            )
            if self.config.add_maven_descriptor:
                self._add_descriptor(archiver)

            content_directory = self.content_directory
            if content_directory.is_dir():
                archiver.add_directory(content_directory)
            else:
                logger.warning("Content directory {} does not exist; skipping", content_directory)

            rebuilt = archiver.create_archive()
        except Exception as exc:
            raise BuildStepError(f"Error assembling ZIP: {exc}") from exc

        if self.classifier is None:
            self.project.artifact.file = zip_file
            logger.info("Set {} as the artifact file of {}", zip_file, self.project.coordinates)
        else:
            logger.info("Built classified archive {} (classifier={})", zip_file, self.classifier)

        return PackageResult(
            path=zip_file,
            classifier=self.classifier,
            entries=archiver.entry_names,
            rebuilt=rebuilt,
        )

    def _add_descriptor(self, archiver: ZipArchiver) -> None:
        project = self.project
        if not project.file.is_file():
            raise FileNotFoundError(f"Project descriptor not found: {project.file}")

        if project.artifact.is_snapshot:
            logger.debug("Normalising SNAPSHOT version {} -> {}", project.version, project.artifact.version)
            project.version = project.artifact.version

        prefix = descriptor_entry_prefix(project.group_id, project.artifact_id)
        archiver.add_file(project.file, prefix + DESCRIPTOR_FILE_NAME)
        archiver.add_resource(PomPropertiesResource(project), prefix + PROPERTIES_FILE_NAME)


__all__ = ["PackageService", "PackageResult", "normalize_classifier", "zip_file_path"]
