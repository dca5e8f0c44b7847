from __future__ import annotations

import os
import zipfile
from pathlib import Path

import pytest

from jszipper.config import PackageConfig
from jszipper.errors import BuildStepError
from jszipper.package import PackageService, normalize_classifier, parse_properties, zip_file_path

from tests.utils import make_project, zip_names

PREFIX = "META-INF/maven/com.example/widgets/"


def _write_content(base: Path) -> Path:
    content = base / "src" / "main" / "js"
    content.mkdir(parents=True)
    (content / "a.js").write_text("console.log('a');", encoding="utf-8")
    return content


@pytest.mark.parametrize(
    ("classifier", "expected"),
    [(None, "mylib.zip"), ("", "mylib.zip"), ("  ", "mylib.zip"), ("foo", "mylib-foo.zip"), ("-foo", "mylib-foo.zip")],
)
def test_zip_file_path_classifier_segment(tmp_path: Path, classifier: str | None, expected: str) -> None:
    assert zip_file_path(tmp_path, "mylib", classifier) == tmp_path / expected


def test_normalize_classifier_never_doubles_hyphen() -> None:
    assert normalize_classifier("-foo") == "-foo"
    assert normalize_classifier("foo") == "-foo"
    assert normalize_classifier(None) == ""


def test_package_builds_archive_with_descriptor(tmp_path: Path) -> None:
    project = make_project(tmp_path)
    _write_content(tmp_path)

    result = PackageService(project, PackageConfig(final_name="mylib")).run()

    expected_path = project.build_directory / "mylib.zip"
    assert result.path == expected_path
    assert result.rebuilt is True
    assert result.classifier is None
    assert project.artifact.file == expected_path
    assert sorted(zip_names(expected_path)) == ["META-INF/maven/com.example/widgets/pom.properties",
                                                "META-INF/maven/com.example/widgets/pom.xml",
                                                "a.js"]

    with zipfile.ZipFile(expected_path) as zf:
        assert zf.read(PREFIX + "pom.xml") == project.file.read_bytes()
        props = parse_properties(zf.read(PREFIX + "pom.properties"))
        assert zf.read(PREFIX + "pom.properties").startswith(b"#Generated by Maven\n")
    assert props == {"groupId": "com.example", "artifactId": "widgets", "version": "1.0"}


def test_package_records_resolved_snapshot_version(tmp_path: Path) -> None:
    project = make_project(tmp_path, version="1.0-SNAPSHOT", resolved_version="1.0-20240301.101500-4")
    _write_content(tmp_path)

    result = PackageService(project).run()

    assert result.path.name == "widgets-1.0-SNAPSHOT.zip"
    assert project.version == "1.0-20240301.101500-4"
    with zipfile.ZipFile(result.path) as zf:
        props = parse_properties(zf.read(PREFIX + "pom.properties"))
    assert props["version"] == "1.0-20240301.101500-4"


def test_package_without_descriptor(tmp_path: Path) -> None:
    project = make_project(tmp_path, write_descriptor=False)
    _write_content(tmp_path)

    result = PackageService(project, PackageConfig(add_maven_descriptor=False)).run()

    assert zip_names(result.path) == ["a.js"]


def test_classified_archive_is_not_primary_artifact(tmp_path: Path) -> None:
    project = make_project(tmp_path)
    _write_content(tmp_path)

    result = PackageService(project, PackageConfig(classifier="-docs")).run()

    assert result.path.name == "widgets-1.0-docs.zip"
    assert result.classifier == "docs"
    assert project.artifact.file is None


def test_missing_descriptor_aborts_and_registers_nothing(tmp_path: Path) -> None:
    project = make_project(tmp_path, write_descriptor=False)
    _write_content(tmp_path)
    service = PackageService(project)

    with pytest.raises(BuildStepError, match="Error assembling ZIP") as excinfo:
        service.run()

    assert isinstance(excinfo.value.__cause__, FileNotFoundError)
    assert project.artifact.file is None
    assert not service.zip_file.exists()


def test_missing_content_directory_still_packages_descriptor(tmp_path: Path) -> None:
    project = make_project(tmp_path)

    result = PackageService(project).run()

    assert sorted(zip_names(result.path)) == [PREFIX + "pom.properties", PREFIX + "pom.xml"]


def test_nothing_to_package_is_an_error(tmp_path: Path) -> None:
    project = make_project(tmp_path)

    with pytest.raises(BuildStepError):
        PackageService(project, PackageConfig(add_maven_descriptor=False)).run()
    assert project.artifact.file is None


def test_rerun_without_force_keeps_up_to_date_archive(tmp_path: Path) -> None:
    project = make_project(tmp_path)
    content = _write_content(tmp_path)
    for path in (project.file, content / "a.js"):
        os.utime(path, (1_600_000_000, 1_600_000_000))

    first = PackageService(project).run()
    original = first.path.read_bytes()

    second = PackageService(make_project(tmp_path, write_descriptor=False)).run()
    assert second.rebuilt is False
    assert second.path.read_bytes() == original
    with zipfile.ZipFile(second.path) as zf:
        assert zf.testzip() is None

    forced = PackageService(make_project(tmp_path, write_descriptor=False), PackageConfig(force_creation=True)).run()
    assert forced.rebuilt is True


def test_include_empty_dirs(tmp_path: Path) -> None:
    project = make_project(tmp_path)
    content = _write_content(tmp_path)
    (content / "vendor").mkdir()

    result = PackageService(project, PackageConfig(include_empty_dirs=True)).run()

    assert "vendor/" in zip_names(result.path)


def test_missing_descriptor_leaves_snapshot_version_untouched(tmp_path: Path) -> None:
    project = make_project(
        tmp_path,
        version="1.0-SNAPSHOT",
        resolved_version="1.0-20240301.101500-4",
        write_descriptor=False,
    )
    _write_content(tmp_path)

    with pytest.raises(BuildStepError):
        PackageService(project).run()

    assert project.version == "1.0-SNAPSHOT"
