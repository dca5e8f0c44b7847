"""Application-level configuration models."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field

from jszipper.config.base import BaseConfig
from jszipper.config.package import PackageConfig
from jszipper.config.project import ProjectConfig
from jszipper.config.unpack import UnpackConfig


class AppConfig(BaseConfig):
    """Top-level build configuration."""

    base_dir: Path | None = Field(
        None,
        description="Project base directory (defaults to the directory holding the config file)",
    )
    logging_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", description="Log level: DEBUG, INFO, WARNING, ERROR"
    )
    log_file: Path | None = Field(None, description="Optional file receiving a copy of the build log")

    project: ProjectConfig = Field(..., description="Project coordinates and resolved dependencies")
    unpack: UnpackConfig = Field(default_factory=UnpackConfig, description="Unpack step settings")
    package: PackageConfig = Field(default_factory=PackageConfig, description="Package step settings")


__all__ = ["AppConfig"]
