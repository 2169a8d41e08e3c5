"""Identity resolution strategies for jar archives.

Each strategy is a stateless callable ``(path, archive) -> Identity`` that
raises ResolutionError to hand over to the next one. ``archive`` is None when
the container could not be opened. STRATEGIES holds them in priority order.
"""
from __future__ import annotations

import logging
import os
import re
from typing import Callable, List, Optional

from constants import Constants
from models import Ecosystem, Identity
from .archive import Archive, ArchiveError
from .pom import PomDecodeError, decode_pom, select_pom_entry

logger = logging.getLogger(__name__)

_JAR_SUFFIX = re.compile(r"(-sources|-javadoc)?\.jar$")


class ResolutionError(Exception):
    """Raised by a strategy that cannot produce an identity for an archive."""


Strategy = Callable[[str, Optional[Archive]], Identity]


def resolve_from_pom(path: str, archive: Optional[Archive]) -> Identity:
    """Resolve from the shallowest META-INF/**/pom.xml inside the jar."""
    if archive is None:
        raise ResolutionError("container unavailable, no embedded pom")
    pom_path = select_pom_entry(archive.names())
    if pom_path is None:
        raise ResolutionError("no embedded pom found")
    try:
        coords = decode_pom(archive.read(pom_path))
    except (ArchiveError, PomDecodeError) as e:
        raise ResolutionError(f"unable to decode {pom_path}: {e}") from e
    logger.debug("resolving locator from pom: %s", pom_path)
    return Identity(
        ecosystem=Ecosystem.MAVEN,
        name=f"{coords.group_id}:{coords.artifact_id}",
        revision=coords.version,
    )


def resolve_from_manifest(path: str, archive: Optional[Archive]) -> Identity:
    """Resolve from Bundle-SymbolicName and Implementation-Version.

    The group id is not recoverable here; the symbolic name becomes the whole
    name.
    """
    if archive is None:
        raise ResolutionError("container unavailable, no manifest")
    try:
        manifest = archive.manifest()
    except ArchiveError as e:
        raise ResolutionError(f"unable to read manifest: {e}") from e
    name = manifest.get(Constants.MANIFEST_NAME_ATTR, "").strip()
    version = manifest.get(Constants.MANIFEST_VERSION_ATTR, "").strip()
    if not name or not version:
        raise ResolutionError(
            f"manifest lacks {Constants.MANIFEST_NAME_ATTR} or {Constants.MANIFEST_VERSION_ATTR}"
        )
    logger.debug("resolving locator from META-INF manifest: %s", path)
    return Identity(ecosystem=Ecosystem.MAVEN, name=name, revision=version)


def resolve_from_filename(path: str, archive: Optional[Archive]) -> Identity:
    """Resolve from the file name: the last dash-separated segment is the revision.

    ``guava.jar`` gives (guava, ""); ``commons-io-2.11.0.jar`` gives
    (commons-io, 2.11.0). Names whose own segments contain dashes split on
    the last one regardless, e.g. ``my-library-sources.jar`` gives
    (my, library).
    """
    stem = _JAR_SUFFIX.sub("", os.path.basename(path))
    parts = stem.split("-")
    if len(parts) == 1:
        name, revision = parts[0], ""
    else:
        name, revision = "-".join(parts[:-1]), parts[-1]
    if not name:
        raise ResolutionError("unable to parse jar file name")
    return Identity(ecosystem=Ecosystem.MAVEN, name=name, revision=revision)


STRATEGIES: List[Strategy] = [
    resolve_from_pom,
    resolve_from_manifest,
    resolve_from_filename,
]
