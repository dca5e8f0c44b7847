"""Package step configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field

from jszipper.config.base import BaseConfig


class PackageConfig(BaseConfig):
    """Settings for assembling the project zip."""

    content_directory: Path = Field(
        Path("src/main/js"),
        description="Directory whose tree is mirrored into the archive",
    )
    output_directory: Path | None = Field(
        None,
        description="Directory receiving the zip (defaults to the build directory)",
    )
    final_name: str | None = Field(
        None,
        description="Archive base name (defaults to the project final name)",
    )
    classifier: str | None = Field(
        None,
        description="Classifier appended to the archive name; classified archives are attachments",
    )
    include_empty_dirs: bool = Field(False, description="Store entries for empty directories")
    force_creation: bool = Field(False, description="Rebuild the archive even when it is up to date")
    add_maven_descriptor: bool = Field(True, description="Add pom.xml and pom.properties under META-INF/maven")


__all__ = ["PackageConfig"]
