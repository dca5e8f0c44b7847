"""Shared helpers for CLI tests."""

from __future__ import annotations

from pathlib import Path

from pytest import MonkeyPatch

from jszipper.config import AppConfig, DependencyConfig, ProjectConfig

from tests.utils import POM_XML, make_zip

BASE_CONFIG = """
logging_level = "INFO"

[project]
group_id = "com.example"
artifact_id = "widgets"
version = "{version}"

[[project.dependencies]]
group_id = "org.example"
artifact_id = "lib"
version = "1.0"
type = "jszip"
scope = "runtime"
file = "libs/lib-1.0.zip"
"""


def write_project(
    base_dir: Path,
    *,
    version: str = "1.0",
    extra: str = "",
    with_descriptor: bool = True,
    with_content: bool = True,
) -> Path:
    """Lay out a small project under ``base_dir`` and return its config file."""

    base_dir.mkdir(parents=True, exist_ok=True)
    make_zip(base_dir / "libs" / "lib-1.0.zip", {"lib/app.js": "app", "lib/app.css": "css"})
    if with_descriptor:
        (base_dir / "pom.xml").write_text(POM_XML, encoding="utf-8")
    if with_content:
        content = base_dir / "src" / "main" / "js"
        content.mkdir(parents=True, exist_ok=True)
        (content / "widgets.js").write_text("export default {};", encoding="utf-8")

    config_file = base_dir / "jszip.toml"
    config_file.write_text(BASE_CONFIG.format(version=version) + extra, encoding="utf-8")
    return config_file


def make_app_config(base_dir: Path, *, dependency_file: Path | None = None) -> AppConfig:
    """Construct an in-memory AppConfig tailored for CLI tests."""

    return AppConfig(
        base_dir=base_dir,
        project=ProjectConfig(
            group_id="com.example",
            artifact_id="widgets",
            version="1.0",
            dependencies=[
                DependencyConfig(
                    group_id="org.example",
                    artifact_id="lib",
                    version="1.0",
                    type="jszip",
                    scope="runtime",
                    file=dependency_file,
                )
            ],
        ),
    )


def patch_load_config(monkeypatch: MonkeyPatch, config: AppConfig) -> None:
    """Force the CLI to return the provided config instead of reading from disk."""

    def _fake_load_config(model: object, path: Path) -> AppConfig:
        if model is not AppConfig:
            raise AssertionError("Unexpected config model request")
        return config

    monkeypatch.setattr("jszipper.cli.load_config", _fake_load_config)
