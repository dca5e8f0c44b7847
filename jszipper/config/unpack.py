"""Unpack step configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field

from jszipper.config.base import BaseConfig


class UnpackConfig(BaseConfig):
    """Settings for extracting ``jszip`` dependencies into a staging directory."""

    target_directory: Path | None = Field(
        None,
        description="Extraction directory (defaults to <build_directory>/<final_name>)",
    )
    includes: str | None = Field(None, description="Comma-separated glob patterns to extract")
    excludes: str | None = Field(None, description="Comma-separated glob patterns to skip")
    include_scope: str = Field("runtime", description="Only dependencies with this scope are unpacked")
    include_type: str = Field("jszip", description="Comma-separated dependency types to unpack")
    exclude_transitive: bool = Field(
        True,
        description="Only unpack dependencies declared directly by the project",
    )


__all__ = ["UnpackConfig"]
