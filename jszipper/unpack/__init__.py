"""Unpacking of ``jszip`` dependencies."""

from .service import UnpackResult, UnpackService

__all__ = ["UnpackService", "UnpackResult"]
