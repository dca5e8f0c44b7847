"""Project model used by the build steps."""

from .loader import build_project, resolve_path
from .models import Artifact, Project, is_snapshot_version

__all__ = [
    "Artifact",
    "Project",
    "build_project",
    "resolve_path",
    "is_snapshot_version",
]
