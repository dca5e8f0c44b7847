"""Command line interface for the jszipper build steps."""

from __future__ import annotations

import json
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
from loguru import logger

from .config import AppConfig, load_config
from .config.inspector import check_config, explain_config
from .errors import BuildStepError
from .package import PackageService, parse_properties
from .package.descriptor import PROPERTIES_FILE_NAME, descriptor_entry_prefix
from .project import Project, build_project
from .unpack import UnpackService


@dataclass(slots=True)
class CLIState:
    """Holds shared state between Typer commands."""

    config_path: Path
    _config: AppConfig | None = None
    _log_sink_id: int | None = None

    def ensure_config(self) -> AppConfig:
        if self._config is None:
            logger.info("Loading configuration from {}", self.config_path)
            self._config = load_config(AppConfig, self.config_path)
            self._setup_log_sink(self._config)
        return self._config

    def base_path(self) -> Path:
        config = self.ensure_config()
        base_path = config.base_dir
        if base_path is None:
            return self.config_path.parent
        if not base_path.is_absolute():
            return (self.config_path.parent / base_path).resolve()
        return base_path

    def build_project(self) -> Project:
        return build_project(self.ensure_config().project, self.base_path())

    def close(self) -> None:
        if self._log_sink_id is not None:
            logger.remove(self._log_sink_id)
            self._log_sink_id = None

    def _setup_log_sink(self, config: AppConfig) -> None:
        if config.log_file is None or self._log_sink_id is not None:
            return
        log_file = config.log_file
        if not log_file.is_absolute():
            log_file = self.config_path.parent / log_file
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            self._log_sink_id = logger.add(
                log_file,
                rotation="5 MB",
                retention=5,
                level=config.logging_level,
            )
        except Exception as exc:  # pragma: no cover - filesystem issues are environment-specific
            logger.warning("Failed to initialise log file sink {}: {}", log_file, exc)
            self._log_sink_id = None


app = typer.Typer(help="Unpack and package jszip archives")
config_app = typer.Typer(help="Validate and document configuration files")
app.add_typer(config_app, name="config")


def _default_config_path() -> Path:
    return Path("jszip.toml")


def _normalize_format(value: str) -> str:
    return value.lower()


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):  # pragma: no cover - defensive guard
        raise RuntimeError("CLI context is not initialised")
    return state


def _exit(code: int) -> None:
    raise typer.Exit(code)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    config: Path = typer.Option(
        _default_config_path(),
        help="Path to the TOML build configuration",
    ),
) -> None:
    """Initialise CLI state."""

    state = CLIState(config_path=config.resolve())
    ctx.obj = state
    ctx.call_on_close(state.close)

    if ctx.invoked_subcommand is None:
        logger.warning("No command provided. Try 'unpack', 'package' or 'status'.")
        _exit(0)


@app.command(help="Unpack jszip dependencies into the staging directory")
def unpack(
    ctx: typer.Context,
    target_directory: Path | None = typer.Option(
        None,
        help="Override the extraction directory",
    ),
    includes: str | None = typer.Option(
        None,
        help="Comma-separated glob patterns of entries to extract",
    ),
    excludes: str | None = typer.Option(
        None,
        help="Comma-separated glob patterns of entries to skip",
    ),
) -> None:
    state = _get_state(ctx)
    config = state.ensure_config()

    overrides: dict[str, Any] = {}
    if target_directory is not None:
        overrides["target_directory"] = target_directory
    if includes is not None:
        overrides["includes"] = includes
    if excludes is not None:
        overrides["excludes"] = excludes
    unpack_cfg = config.unpack.model_copy(update=overrides)

    project = state.build_project()
    service = UnpackService(project, unpack_cfg)
    try:
        result = service.run()
    except BuildStepError as exc:
        logger.error("Unpack failed: {}", exc)
        _exit(1)
        return

    logger.info(
        "Unpacked {} artifacts ({} files) into {}",
        len(result.artifacts),
        result.files_written,
        result.target_directory,
    )


@app.command(help="Package the content directory into a zip archive")
def package(
    ctx: typer.Context,
    classifier: str | None = typer.Option(
        None,
        help="Classifier appended to the archive name",
    ),
    force: bool | None = typer.Option(
        None,
        "--force/--no-force",
        help="Rebuild the archive even when it is up to date",
    ),
    include_empty_dirs: bool | None = typer.Option(
        None,
        "--include-empty-dirs/--no-include-empty-dirs",
        help="Store entries for empty directories",
    ),
    descriptor: bool | None = typer.Option(
        None,
        "--descriptor/--no-descriptor",
        help="Add pom.xml and pom.properties under META-INF/maven",
    ),
) -> None:
    state = _get_state(ctx)
    config = state.ensure_config()

    overrides: dict[str, Any] = {}
    if classifier is not None:
        overrides["classifier"] = classifier
    if force is not None:
        overrides["force_creation"] = force
    if include_empty_dirs is not None:
        overrides["include_empty_dirs"] = include_empty_dirs
    if descriptor is not None:
        overrides["add_maven_descriptor"] = descriptor
    package_cfg = config.package.model_copy(update=overrides)

    project = state.build_project()
    service = PackageService(project, package_cfg)
    try:
        result = service.run()
    except BuildStepError as exc:
        logger.error("Package failed: {}", exc)
        _exit(1)
        return

    if result.classifier is not None:
        project.attach_artifact("zip", result.classifier, result.path)
        logger.info("Attached {} as classifier '{}'", result.path, result.classifier)

    if result.rebuilt:
        logger.info("Archive written to {} ({} entries)", result.path, len(result.entries))
    else:
        logger.info("Archive {} was already up to date", result.path)


@app.command(help="Show the project model and step settings")
def status(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    config = state.ensure_config()
    project = state.build_project()
    _report_status(config, project)


@config_app.command(help="Validate the configuration file")
def check(
    ctx: typer.Context,
    format: str = typer.Option(  # noqa: A002 - match CLI option name
        "text",
        "--format",
        case_sensitive=False,
        help="Output format for validation results",
        callback=_normalize_format,
    ),
) -> None:
    state = _get_state(ctx)
    result, exit_code, config = check_config(state.config_path)

    if format == "json":
        print(json.dumps(result, indent=2, ensure_ascii=False))
        _exit(exit_code)

    if config is not None:
        project = config.project
        logger.info(
            "Configuration OK: {} ({}:{}:{}, {} dependencies)",
            result["config_path"],
            project.group_id,
            project.artifact_id,
            project.version,
            len(project.dependencies),
        )
        for warning in result["warnings"]:
            logger.warning("{}", warning)
        _exit(exit_code)

    error: dict[str, Any] = result["error"]
    logger.error("Configuration error ({}) for {}: {}", error["type"], result["config_path"], error["message"])
    for detail in error.get("details", []):
        logger.error("  - {}: {} ({})", detail["loc"] or "<root>", detail["message"], detail["type"])
    _exit(exit_code)


@config_app.command(help="List build settings, their defaults and the values in effect")
def explain(
    ctx: typer.Context,
    format: str = typer.Option(  # noqa: A002 - match CLI option name
        "text",
        "--format",
        case_sensitive=False,
        help="Output format for the settings listing",
        callback=_normalize_format,
    ),
) -> None:
    state = _get_state(ctx)

    config: AppConfig | None = None
    if state.config_path.exists():
        result, exit_code, config = check_config(state.config_path)
        if config is None:
            logger.error("Cannot explain {}: {}", result["config_path"], result["error"]["message"])
            _exit(exit_code)

    rows = explain_config(config)

    if format == "json":
        payload = {"config_path": str(state.config_path) if config is not None else None, "settings": rows}
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    if config is None:
        logger.info("No configuration at {}; showing defaults only", state.config_path)
    for row in rows:
        if row["required"]:
            default = "required"
        else:
            default = json.dumps(row["default"], ensure_ascii=False)
        line = f"  - {row['name']} (default: {default})"
        if row["source"] is not None:
            line += f" = {json.dumps(row['value'], ensure_ascii=False)} [{row['source']}]"
        logger.info("{}", line)
        if row["description"]:
            logger.info("      {}", row["description"])


def _read_recorded_version(archive: Path, project: Project) -> str | None:
    entry = descriptor_entry_prefix(project.group_id, project.artifact_id) + PROPERTIES_FILE_NAME
    try:
        with zipfile.ZipFile(archive, "r") as zf:
            data = zf.read(entry)
    except KeyError:
        return None
    except (OSError, zipfile.BadZipFile) as exc:
        logger.debug("Cannot read {} from {}: {}", entry, archive, exc)
        return None
    return parse_properties(data).get("version")


def _report_status(config: AppConfig, project: Project) -> None:
    """Print the project model and what each step would do."""

    logger.info("=== Project ===")
    logger.info("Coordinates: {} (packaging={})", project.coordinates, project.packaging)
    if project.artifact.is_snapshot:
        logger.info("SNAPSHOT resolves to: {}", project.artifact.version)
    logger.info("Descriptor: {} (exists={})", project.file, project.file.is_file())
    logger.info("Build directory: {}", project.build_directory)
    logger.info("Final name: {}", project.final_name)
    logger.info(
        "Dependencies: {} resolved, {} direct",
        len(project.artifacts),
        len(project.dependency_artifacts),
    )

    logger.info("\n=== Unpack ===")
    unpack_service = UnpackService(project, config.unpack)
    logger.info("Target directory: {}", unpack_service.target_directory)
    try:
        selected = unpack_service.select_artifacts()
    except BuildStepError as exc:
        logger.error("Filter configuration is invalid: {}", exc)
    else:
        logger.info("Artifacts to unpack: {}", len(selected))
        for artifact in selected:
            logger.info("  - {} -> {}", artifact, artifact.file or "<unresolved>")

    logger.info("\n=== Package ===")
    package_service = PackageService(project, config.package)
    logger.info("Content directory: {} (exists={})", package_service.content_directory, package_service.content_directory.is_dir())
    archive = package_service.zip_file
    logger.info("Archive: {} (exists={})", archive, archive.is_file())
    if archive.is_file():
        recorded = _read_recorded_version(archive, project)
        if recorded is not None:
            logger.info("Recorded version: {}", recorded)


def main(argv: list[str] | None = None) -> int:
    """Entry point compatible with setuptools console scripts."""

    try:
        result = app(args=argv, standalone_mode=False)
    except typer.Exit as exc:  # pragma: no cover - Typer translates exit codes
        return exc.exit_code
    if isinstance(result, int):
        return result
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
