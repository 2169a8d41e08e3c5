"""Decode Maven coordinates from a pom.xml embedded in a jar."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Iterable, Optional

from constants import Constants


class PomDecodeError(ValueError):
    """Raised when a pom cannot be decoded into usable coordinates."""


@dataclass
class PomCoordinates:
    """groupId/artifactId/version of a project descriptor."""
    group_id: str
    artifact_id: str
    version: str


def select_pom_entry(names: Iterable[str]) -> Optional[str]:
    """Pick the embedded pom to trust among the entries of a jar.

    Candidates start with META-INF and end with pom.xml. The shortest path
    wins; deeper poms are usually parents or shaded dependencies. Ties keep
    the first entry in container order.
    """
    selected: Optional[str] = None
    for name in names:
        if not (name.startswith(Constants.POM_PREFIX) and name.endswith(Constants.POM_SUFFIX)):
            continue
        if selected is None or len(name) < len(selected):
            selected = name
    return selected


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child_text(elem: ET.Element, name: str) -> str:
    for child in elem:
        if isinstance(child.tag, str) and _local(child.tag) == name:
            return (child.text or "").strip()
    return ""


def decode_pom(data: bytes) -> PomCoordinates:
    """Decode a pom document into coordinates.

    Both the POM 4.0.0 namespace and un-namespaced poms are accepted. Only the
    project's own groupId/artifactId/version are read; values declared in
    <parent> are not inherited, and a missing field decodes as "".

    Args:
        data: Raw pom.xml bytes.

    Returns:
        PomCoordinates with stripped values.

    Raises:
        PomDecodeError: On malformed XML, entity declarations, or a
            non-project root.
    """
    if b"<!ENTITY" in data:
        raise PomDecodeError("Entity declarations are not accepted in embedded poms")
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise PomDecodeError(f"Malformed pom: {e}") from e

    if _local(root.tag) != "project":
        raise PomDecodeError(f"Unexpected root element <{_local(root.tag)}>, expected <project>")

    return PomCoordinates(
        group_id=_child_text(root, "groupId"),
        artifact_id=_child_text(root, "artifactId"),
        version=_child_text(root, "version"),
    )
