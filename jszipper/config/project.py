"""Project model configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator

from jszipper.config.base import BaseConfig


class DependencyConfig(BaseConfig):
    """A single resolved dependency of the project."""

    group_id: str = Field(..., min_length=1, description="Dependency groupId")
    artifact_id: str = Field(..., min_length=1, description="Dependency artifactId")
    version: str = Field(..., min_length=1, description="Dependency version")
    type: str = Field("jar", min_length=1, description="Packaging type of the dependency")
    classifier: str | None = Field(None, description="Optional classifier")
    scope: str = Field("compile", min_length=1, description="Dependency scope")
    file: Path | None = Field(None, description="Resolved archive location on disk")
    direct: bool = Field(True, description="Whether the project declares this dependency itself")

    @field_validator("classifier")
    @classmethod
    def _blank_classifier(cls, classifier: str | None) -> str | None:
        if classifier is None:
            return None
        stripped = classifier.strip()
        return stripped if stripped else None


class ProjectConfig(BaseConfig):
    """Coordinates, descriptor and resolved dependencies of the project being built."""

    group_id: str = Field(..., min_length=1, description="Project groupId")
    artifact_id: str = Field(..., min_length=1, description="Project artifactId")
    version: str = Field(..., min_length=1, description="Project version, may be a SNAPSHOT")
    resolved_version: str | None = Field(
        None,
        description="Concrete version a SNAPSHOT resolves to (e.g. 1.0-20240101.120000-1)",
    )
    packaging: str = Field("jszip", min_length=1, description="Packaging type of the project artifact")
    descriptor: Path = Field(Path("pom.xml"), description="Project descriptor copied into the archive")
    build_directory: Path = Field(Path("target"), description="Build output directory")
    final_name: str | None = Field(
        None,
        description="Base name of build outputs (defaults to <artifact_id>-<version>)",
    )
    dependencies: list[DependencyConfig] = Field(
        default_factory=list,
        description="Resolved dependency set, direct and transitive",
    )


__all__ = ["DependencyConfig", "ProjectConfig"]
