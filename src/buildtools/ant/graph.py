"""Assemble resolved jar identities into a flat dependency graph."""
from __future__ import annotations

import logging
import queue
import threading
import time
from collections import deque
from typing import Dict, Iterable, List, Optional

from constants import Constants
from common.logging_utils import Timer, extra_context, is_debug_enabled
from models import DependencyGraph, Identity, Import, Package
from .resolver import IdentityResolver
from .scan import scan_archives

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Accumulate per-archive outcomes, in scan order, into a DependencyGraph."""

    def __init__(self) -> None:
        self._graph = DependencyGraph()

    def add(self, identity: Optional[Identity]) -> None:
        """Record one outcome; None (unresolved) contributes nothing."""
        if identity is None or not identity.name:
            return
        self._graph.direct.append(Import(resolved=identity))
        self._graph.transitive[identity] = Package(id=identity)

    def extend(self, outcomes: Iterable[Optional[Identity]]) -> None:
        for identity in outcomes:
            self.add(identity)

    def build(self) -> DependencyGraph:
        return self._graph


class _ResolveThread(threading.Thread):
    """Resolves one archive in a daemon thread and reports back on a queue."""

    def __init__(self, resolver: IdentityResolver, index: int, path: str, results: queue.Queue) -> None:
        super().__init__(name=f"antdeps-{index}", daemon=True)
        self._resolver = resolver
        self._index = index
        self._path = path
        self._results = results

    def run(self) -> None:
        outcome: Optional[Identity] = None
        try:
            outcome = self._resolver.resolve(self._path)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.warning("error resolving Jar: %s", self._path, exc_info=True)
        finally:
            self._results.put((self._index, outcome))


def _resolve_parallel(
    resolver: IdentityResolver,
    paths: List[str],
    workers: int,
    timeout: Optional[float],
) -> List[Optional[Identity]]:
    """Resolve paths on up to ``workers`` threads, returning outcomes in input order.

    Each archive's ``timeout`` budget starts when its thread starts, so an
    archive waiting for a free slot is never charged for the wait. An archive
    over budget counts as unresolved and its slot is released. Its thread is
    not interrupted; being a daemon it cannot hold up interpreter exit.
    """
    outcomes: List[Optional[Identity]] = [None] * len(paths)
    results: queue.Queue = queue.Queue()
    pending = deque(enumerate(paths))
    running: Dict[int, Optional[float]] = {}
    abandoned: List[str] = []

    while pending or running:
        while pending and len(running) < workers:
            index, path = pending.popleft()
            running[index] = None if timeout is None else time.monotonic() + timeout
            _ResolveThread(resolver, index, path, results).start()

        deadlines = [d for d in running.values() if d is not None]
        wait = max(min(deadlines) - time.monotonic(), 0) if deadlines else None
        try:
            index, outcome = results.get(timeout=wait)
        except queue.Empty:
            now = time.monotonic()
            for index, deadline in list(running.items()):
                if deadline is not None and deadline <= now:
                    del running[index]
                    abandoned.append(paths[index])
                    logger.warning("timed out resolving Jar after %ss: %s", timeout, paths[index])
            continue
        # late results from abandoned archives are ignored
        if index in running:
            del running[index]
            outcomes[index] = outcome

    if abandoned:
        logger.warning(
            "%d Jar(s) still resolving in background threads after timing out: %s",
            len(abandoned),
            ", ".join(abandoned),
        )
    return outcomes


def build_graph(
    dir_name: str,
    resolver: Optional[IdentityResolver] = None,
    workers: Optional[int] = None,
    timeout: Optional[float] = None,
) -> DependencyGraph:
    """Scan dir_name for jars and resolve each one into the dependency graph.

    Args:
        dir_name: Project root, scanned recursively.
        resolver: Resolver to use; a default IdentityResolver otherwise.
        workers: Thread count; defaults to Constants.MAX_WORKERS.
        timeout: Per-archive budget in seconds; defaults to
            Constants.ARCHIVE_TIMEOUT_SEC (None disables it).

    Returns:
        DependencyGraph with ``direct`` in scan order.

    Raises:
        ArchiveScanError: If dir_name cannot be scanned.
    """
    resolver = resolver or IdentityResolver()
    workers = Constants.MAX_WORKERS if workers is None else workers
    timeout = Constants.ARCHIVE_TIMEOUT_SEC if timeout is None else timeout

    with Timer() as timer:
        paths = scan_archives(dir_name, Constants.ARCHIVE_PATTERN)
        logger.debug("Running Ant analysis: %r", paths)

        if workers > 1 or timeout is not None:
            outcomes: Iterable[Optional[Identity]] = _resolve_parallel(
                resolver, paths, max(workers, 1), timeout
            )
        else:
            outcomes = (resolver.resolve(path) for path in paths)

        builder = GraphBuilder()
        builder.extend(outcomes)
        graph = builder.build()

    if is_debug_enabled(logger):
        logger.debug(
            "Ant analysis complete",
            extra=extra_context(
                event="function_exit",
                component="graph",
                action="build_graph",
                outcome="success",
                count=len(graph.direct),
                archives=len(paths),
                duration_ms=timer.duration_ms(),
                package_manager="ant",
            ),
        )
    return graph
