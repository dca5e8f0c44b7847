"""Configuration namespace for jszipper."""

from __future__ import annotations

from .app import AppConfig
from .base import BaseConfig, load_config
from .package import PackageConfig
from .project import DependencyConfig, ProjectConfig
from .unpack import UnpackConfig

__all__ = [
    "BaseConfig",
    "AppConfig",
    "load_config",
    "DependencyConfig",
    "ProjectConfig",
    "UnpackConfig",
    "PackageConfig",
]
