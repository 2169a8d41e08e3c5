"""Ant source scanner: find pre-built .jar archives under a project root."""
from __future__ import annotations

import logging
import os
from glob import glob
from typing import List

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


class ArchiveScanError(Exception):
    """Raised when the project root cannot be scanned at all."""


def scan_archives(dir_name: str, pattern: str = Constants.ARCHIVE_PATTERN) -> List[str]:
    """Scan a directory tree for archives matching a recursive glob.

    Args:
        dir_name: Project root to scan.
        pattern: Glob relative to dir_name; ``**`` matches any depth,
            including the root itself. Hidden directories and files match.

    Returns:
        Sorted list of matching file paths.

    Raises:
        ArchiveScanError: If the pattern is invalid or the root cannot be read.
    """
    if not pattern or os.path.isabs(pattern):
        raise ArchiveScanError(f"Invalid archive pattern: {pattern!r}")
    if not os.path.exists(dir_name):
        raise ArchiveScanError(f"Directory not found: {dir_name}")
    if not os.path.isdir(dir_name):
        raise ArchiveScanError(f"Not a directory: {dir_name}")
    # glob swallows listing errors, so probe the root explicitly
    try:
        with os.scandir(dir_name):
            pass
    except OSError as e:
        raise ArchiveScanError(f"Unable to read directory {dir_name}: {e}") from e

    logging.info("Ant scanner engaged.")
    matches = glob(os.path.join(dir_name, pattern), recursive=True, include_hidden=True)
    archives = sorted(path for path in matches if os.path.isfile(path))

    if is_debug_enabled(logger):
        logger.debug(
            "Discovered archives",
            extra=extra_context(
                event="decision",
                component="scan",
                action="scan_archives",
                outcome="empty" if not archives else "non_empty",
                count=len(archives),
                package_manager="ant",
            ),
        )
    return archives
