"""Shared fixtures: build jar files on the fly."""
from __future__ import annotations

import zipfile

import pytest


def pom_xml(group="com.example", artifact="lib", version="1.2.3", namespaced=True):
    """Render a minimal pom document."""
    ns = ' xmlns="http://maven.apache.org/POM/4.0.0"' if namespaced else ""
    parts = [f'<?xml version="1.0" encoding="UTF-8"?>\n<project{ns}>\n  <modelVersion>4.0.0</modelVersion>\n']
    if group is not None:
        parts.append(f"  <groupId>{group}</groupId>\n")
    if artifact is not None:
        parts.append(f"  <artifactId>{artifact}</artifactId>\n")
    if version is not None:
        parts.append(f"  <version>{version}</version>\n")
    parts.append("</project>\n")
    return "".join(parts)


def manifest_mf(**attrs):
    """Render a MANIFEST.MF main section from keyword attributes (underscores become dashes)."""
    lines = ["Manifest-Version: 1.0"]
    for key, value in attrs.items():
        lines.append(f"{key.replace('_', '-')}: {value}")
    return "\r\n".join(lines) + "\r\n\r\n"


@pytest.fixture
def make_jar(tmp_path):
    """Return a factory writing a jar with the given entries under tmp_path."""

    def _make(relpath, entries=None):
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as zf:
            for name, content in (entries or {}).items():
                zf.writestr(name, content)
        return str(path)

    return _make


@pytest.fixture(autouse=True)
def _restore_constants():
    """Undo Constants overrides applied by config/CLI code under test."""
    from constants import Constants

    saved = {
        attr: getattr(Constants, attr)
        for attr in ("ARCHIVE_PATTERN", "MAX_WORKERS", "ARCHIVE_TIMEOUT_SEC")
    }
    yield
    for attr, value in saved.items():
        setattr(Constants, attr, value)


@pytest.fixture(autouse=True)
def _restore_root_log_level():
    """The CLI reconfigures the root logger; keep tests independent."""
    import logging

    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
