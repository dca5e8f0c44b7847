"""Builders for archives, artifacts and projects used in tests."""

from __future__ import annotations

import sys
import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Mapping

from loguru import logger

from jszipper.config import DependencyConfig, ProjectConfig
from jszipper.project import Artifact, Project, build_project

POM_XML = """<?xml version="1.0" encoding="UTF-8"?>
<project>
  <modelVersion>4.0.0</modelVersion>
  <groupId>com.example</groupId>
  <artifactId>widgets</artifactId>
  <version>1.0</version>
  <packaging>jszip</packaging>
</project>
"""


@contextmanager
def logger_to_stderr(level: str = "INFO"):
    """Temporarily route Loguru output to stderr for assertion."""

    handler_id = logger.add(sys.stderr, level=level)
    try:
        yield
    finally:
        logger.remove(handler_id)


def make_zip(path: Path, entries: Mapping[str, str | bytes]) -> Path:
    """Write a zip at ``path``; names ending in ``/`` become directory entries."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries.items():
            if name.endswith("/"):
                zf.writestr(name, b"")
                continue
            data = content.encode("utf-8") if isinstance(content, str) else content
            zf.writestr(name, data)
    return path


def make_artifact(
    artifact_id: str,
    *,
    group_id: str = "org.example",
    version: str = "1.0",
    type: str = "jszip",  # noqa: A002
    scope: str = "runtime",
    classifier: str | None = None,
    file: Path | None = None,
) -> Artifact:
    return Artifact(
        group_id=group_id,
        artifact_id=artifact_id,
        base_version=version,
        type=type,
        scope=scope,
        classifier=classifier,
        file=file,
    )


def make_project(
    base_dir: Path,
    *,
    version: str = "1.0",
    resolved_version: str | None = None,
    dependencies: Iterable[DependencyConfig] = (),
    write_descriptor: bool = True,
) -> Project:
    """Construct a project rooted at ``base_dir`` through the regular loader."""

    base_dir.mkdir(parents=True, exist_ok=True)
    if write_descriptor:
        (base_dir / "pom.xml").write_text(POM_XML, encoding="utf-8")
    config = ProjectConfig(
        group_id="com.example",
        artifact_id="widgets",
        version=version,
        resolved_version=resolved_version,
        dependencies=list(dependencies),
    )
    return build_project(config, base_dir)


def zip_names(path: Path) -> list[str]:
    with zipfile.ZipFile(path, "r") as zf:
        return zf.namelist()
