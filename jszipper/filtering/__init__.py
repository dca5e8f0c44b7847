"""Artifact filtering utilities."""

from .filters import (
    VALID_SCOPES,
    ArtifactFilterError,
    ArtifactsFilter,
    FilterArtifacts,
    ProjectTransitivityFilter,
    ScopeFilter,
    TypeFilter,
)

__all__ = [
    "ArtifactFilterError",
    "ArtifactsFilter",
    "FilterArtifacts",
    "ProjectTransitivityFilter",
    "ScopeFilter",
    "TypeFilter",
    "VALID_SCOPES",
]
