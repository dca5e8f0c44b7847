"""Descriptor metadata written under ``META-INF/maven`` in packaged archives."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Mapping

from jszipper.archive.resources import BytesResource, FileResource
from jszipper.project.models import Project

GENERATED_BY = "Generated by Maven"
DESCRIPTOR_FILE_NAME = "pom.xml"
PROPERTIES_FILE_NAME = "pom.properties"

_SPECIAL_ESCAPES = {
    "\\": "\\\\",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\f": "\\f",
    "=": "\\=",
    ":": "\\:",
    "#": "\\#",
    "!": "\\!",
}


def descriptor_entry_prefix(group_id: str, artifact_id: str) -> str:
    return f"META-INF/maven/{group_id}/{artifact_id}/"


def _escape(text: str, *, escape_space: bool) -> str:
    out: list[str] = []
    for index, char in enumerate(text):
        if char == " ":
            out.append("\\ " if escape_space or index == 0 else " ")
        elif char in _SPECIAL_ESCAPES:
            out.append(_SPECIAL_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) > 0x7E:
            for unit in _utf16_units(char):
                out.append(f"\\u{unit:04X}")
        else:
            out.append(char)
    return "".join(out)


def _utf16_units(char: str) -> list[int]:
    encoded = char.encode("utf-16-be")
    return [int.from_bytes(encoded[i : i + 2], "big") for i in range(0, len(encoded), 2)]


def _escape_comment(line: str) -> str:
    out: list[str] = []
    for char in line:
        if ord(char) > 0x7E:
            out.extend(f"\\u{unit:04X}" for unit in _utf16_units(char))
        else:
            out.append(char)
    return "".join(out)


def _format_timestamp(timestamp: datetime) -> str:
    # java.util.Date#toString layout, e.g. "Mon Oct 19 12:00:00 UTC 2026"
    zone = timestamp.tzname() or "UTC"
    return timestamp.strftime(f"%a %b %d %H:%M:%S {zone} %Y")


def render_properties(
    values: Mapping[str, str],
    comment: str | None = None,
    *,
    timestamp: datetime | None = None,
) -> bytes:
    """Serialise ``values`` in the ``java.util.Properties#store`` layout.

    The output is ISO-8859-1 encoded with non Latin-1 characters written as
    ``\\uXXXX`` escapes; keys are written in mapping order.
    """

    lines: list[str] = []
    if comment:
        for comment_line in comment.splitlines():
            lines.append("#" + _escape_comment(comment_line))
    lines.append("#" + _format_timestamp(timestamp or datetime.now(timezone.utc)))
    for key, value in values.items():
        lines.append(f"{_escape(key, escape_space=True)}={_escape(value, escape_space=False)}")
    return ("\n".join(lines) + "\n").encode("iso-8859-1")


def parse_properties(data: bytes) -> dict[str, str]:
    """Minimal reader for the files produced by :func:`render_properties`."""

    result: dict[str, str] = {}
    for raw_line in data.decode("iso-8859-1").splitlines():
        line = raw_line.strip()
        if not line or line[0] in "#!":
            continue
        key, value = _split_property(line)
        result[_unescape(key)] = _unescape(value)
    return result


def _split_property(line: str) -> tuple[str, str]:
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in "=:":
            return line[:index], line[index + 1 :]
        index += 1
    return line, ""


def _unescape(text: str) -> str:
    out: list[str] = []
    index = 0
    simple = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
    while index < len(text):
        char = text[index]
        if char != "\\" or index + 1 >= len(text):
            out.append(char)
            index += 1
            continue
        nxt = text[index + 1]
        if nxt == "u" and index + 6 <= len(text):
            out.append(chr(int(text[index + 2 : index + 6], 16)))
            index += 6
            continue
        out.append(simple.get(nxt, nxt))
        index += 2
    # recombine surrogate pairs produced by \\uXXXX escapes
    return "".join(out).encode("utf-16", "surrogatepass").decode("utf-16")


class PomPropertiesResource(BytesResource):
    """In-memory ``pom.properties`` describing the project coordinates.

    The content is rendered once at construction; the modification time is
    taken from the project descriptor file so up-to-date checks follow it.
    """

    def __init__(self, project: Project, *, timestamp: datetime | None = None) -> None:
        values = {
            "groupId": project.group_id,
            "artifactId": project.artifact_id,
            "version": project.version,
        }
        data = render_properties(values, GENERATED_BY, timestamp=timestamp)
        super().__init__(PROPERTIES_FILE_NAME, data, FileResource(project.file).last_modified)
        self.values = values


__all__ = [
    "GENERATED_BY",
    "DESCRIPTOR_FILE_NAME",
    "PROPERTIES_FILE_NAME",
    "PomPropertiesResource",
    "descriptor_entry_prefix",
    "parse_properties",
    "render_properties",
]
