"""Read-only handle over a jar container and its embedded manifest."""
from __future__ import annotations

import re
import zipfile
import zlib
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from constants import Constants

_LINE_SPLIT = re.compile(r"\r\n|\r|\n")


class ArchiveError(Exception):
    """Raised when a container cannot be opened or an entry cannot be read."""


def parse_manifest(text: str) -> Dict[str, str]:
    """Parse the main section of a JAR manifest.

    Lines are ``Name: value``; a line starting with a single space continues
    the previous value. The main section ends at the first blank line.

    Args:
        text: Decoded MANIFEST.MF content.

    Returns:
        Mapping of attribute name to value.
    """
    attrs: Dict[str, str] = {}
    last_key: Optional[str] = None
    for line in _LINE_SPLIT.split(text):
        if not line:
            break
        if line.startswith(" "):
            if last_key is not None:
                attrs[last_key] += line[1:]
            continue
        key, sep, value = line.partition(":")
        if not sep:
            last_key = None
            continue
        last_key = key.strip()
        attrs[last_key] = value.strip()
    return attrs


class Archive:
    """Open zip container; use through open_archive() so it is always closed."""

    def __init__(self, path: str, zf: zipfile.ZipFile):
        self.path = path
        self._zf = zf
        self._manifest: Optional[Dict[str, str]] = None

    def names(self) -> List[str]:
        """Entry names in container order."""
        return self._zf.namelist()

    def read(self, name: str) -> bytes:
        """Read a single entry fully.

        Raises:
            ArchiveError: If the entry is missing or its data is corrupt.
        """
        try:
            with self._zf.open(name) as fh:
                return fh.read()
        except (KeyError, ValueError, zipfile.BadZipFile, zlib.error, OSError, EOFError,
                RuntimeError, NotImplementedError) as e:
            # RuntimeError: encrypted entry; NotImplementedError: unknown compression
            raise ArchiveError(f"Unable to read {name} from {self.path}: {e}") from e

    def manifest(self) -> Dict[str, str]:
        """Main section attributes of META-INF/MANIFEST.MF, empty when absent."""
        if self._manifest is None:
            if Constants.MANIFEST_PATH in self._zf.namelist():
                raw = self.read(Constants.MANIFEST_PATH)
                self._manifest = parse_manifest(raw.decode("utf-8", errors="replace"))
            else:
                self._manifest = {}
        return self._manifest

    def close(self) -> None:
        self._zf.close()


@contextmanager
def open_archive(path: str) -> Iterator[Archive]:
    """Open a jar for random access and close it on every exit path.

    Raises:
        ArchiveError: If the file is missing or not a valid zip container.
    """
    try:
        zf = zipfile.ZipFile(path, "r")
    except (zipfile.BadZipFile, OSError, ValueError) as e:
        raise ArchiveError(f"Unable to open archive {path}: {e}") from e
    archive = Archive(path, zf)
    try:
        yield archive
    finally:
        archive.close()
