"""Packaging of project content into a zip archive."""

from .descriptor import PomPropertiesResource, parse_properties, render_properties
from .service import PackageResult, PackageService, normalize_classifier, zip_file_path

__all__ = [
    "PackageService",
    "PackageResult",
    "PomPropertiesResource",
    "normalize_classifier",
    "parse_properties",
    "render_properties",
    "zip_file_path",
]
