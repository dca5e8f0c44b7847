"""Errors surfaced by the build steps."""

from __future__ import annotations


class BuildStepError(RuntimeError):
    """A build step failed; the original exception is chained as ``__cause__``."""


__all__ = ["BuildStepError"]
