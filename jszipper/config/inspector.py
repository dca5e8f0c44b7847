"""Validate build configuration files and describe the settings they produce."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from pydantic import BaseModel, ValidationError

from jszipper.project.models import SNAPSHOT_VERSION, is_snapshot_version

from .app import AppConfig
from .base import BaseConfig, load_config
from .project import DependencyConfig


class ConfigInspectionError(RuntimeError):
    """Raised when configuration inspection fails unexpectedly."""


def check_config(path: Path) -> tuple[dict[str, Any], int, AppConfig | None]:
    """Validate the configuration file and collect warnings.

    Returns a tuple of ``(result_dict, exit_code, config_instance_or_None)``.
    Exit codes: 0 valid, 1 unparsable TOML, 2 missing or unreadable file,
    3 schema violations (listed under ``error.details``).
    """

    try:
        config = load_config(AppConfig, path)
    except FileNotFoundError as exc:
        return _error_result(path, "missing_file", str(exc)), 2, None
    except ValidationError as exc:
        result = _error_result(path, "validation_error", "Configuration validation failed")
        result["error"]["details"] = [
            {
                "loc": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
        return result, 3, None
    except PermissionError as exc:
        return _error_result(path, "permission_error", str(exc)), 2, None
    except ValueError as exc:
        return _error_result(path, "invalid_format", str(exc)), 1, None
    except Exception as exc:  # pragma: no cover - unexpected failures
        raise ConfigInspectionError("Unexpected configuration inspection error") from exc

    result = {
        "status": "ok",
        "config_path": str(path),
        "warnings": _collect_warnings(config),
    }
    return result, 0, config


def explain_config(config: AppConfig | None = None) -> list[dict[str, Any]]:
    """List every build setting with its default and, given a config, the value in effect.

    Nested blocks (``project``, ``unpack``, ``package``) are flattened into
    dotted names. ``source`` is ``"file"`` when the configuration sets the
    value explicitly, ``"default"`` when it falls back, and ``None`` when no
    configuration was given. ``project.dependencies`` is reported as a whole.
    """

    rows: list[dict[str, Any]] = []
    _describe(AppConfig, config, "", rows)
    return rows


def _describe(model_cls: type[BaseConfig], instance: BaseConfig | None, prefix: str, rows: list[dict[str, Any]]) -> None:
    for name, field in model_cls.model_fields.items():
        key = f"{prefix}{name}"
        value = getattr(instance, name) if instance is not None else None

        annotation = field.annotation
        if isinstance(annotation, type) and issubclass(annotation, BaseConfig):
            _describe(annotation, value, f"{key}.", rows)
            continue

        if instance is None:
            source = None
        else:
            source = "file" if name in instance.model_fields_set else "default"
        rows.append(
            {
                "name": key,
                "required": field.is_required(),
                "default": None if field.is_required() else _jsonable(field.get_default(call_default_factory=True)),
                "value": _jsonable(value),
                "source": source,
                "description": field.description or "",
            }
        )


def _jsonable(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_defaults=True)
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def _error_result(path: Path, error_type: str, message: str) -> dict[str, Any]:
    return {
        "status": "error",
        "config_path": str(path),
        "error": {
            "type": error_type,
            "message": message,
        },
    }


def _split_types(value: str) -> set[str]:
    return {part.strip() for part in value.split(",") if part.strip()}


def _unresolved(dependencies: Iterable[DependencyConfig], types: set[str]) -> list[str]:
    return [
        f"{dep.group_id}:{dep.artifact_id}:{dep.version}"
        for dep in dependencies
        if dep.type in types and dep.file is None
    ]


def _collect_warnings(config: AppConfig) -> list[str]:
    warnings: list[str] = []
    project = config.project

    # timestamped snapshot versions are already concrete
    if project.version.endswith(SNAPSHOT_VERSION) and not project.resolved_version:
        warnings.append(
            f"'project.version' {project.version} is a SNAPSHOT without 'resolved_version'; "
            "pom.properties will record the placeholder"
        )
    if project.resolved_version and not is_snapshot_version(project.version):
        warnings.append("'project.resolved_version' is ignored for non-SNAPSHOT versions")

    for coordinates in _unresolved(project.dependencies, _split_types(config.unpack.include_type)):
        warnings.append(f"Dependency {coordinates} has no resolved 'file'")

    if config.package.classifier is not None and not config.package.classifier.strip():
        warnings.append("'package.classifier' is blank and will be ignored")

    return warnings


__all__ = ["check_config", "explain_config", "ConfigInspectionError"]
