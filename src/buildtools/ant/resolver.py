"""Per-archive identity resolution over an ordered strategy chain."""
from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Optional, Sequence

from common.logging_utils import Timer, extra_context, is_debug_enabled
from models import Identity
from .archive import ArchiveError, open_archive
from .strategies import STRATEGIES, ResolutionError, Strategy

_default_logger = logging.getLogger(__name__)


def _name(strategy: Strategy) -> str:
    return getattr(strategy, "__name__", repr(strategy))


class IdentityResolver:
    """Resolve one jar path to an Identity, or None when every strategy fails.

    Args:
        strategies: Ordered strategies; the first to return wins.
        logger: Diagnostics sink. Only written to, never consulted.
    """

    def __init__(
        self,
        strategies: Optional[Sequence[Strategy]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.strategies = list(STRATEGIES if strategies is None else strategies)
        self.logger = logger or _default_logger

    def resolve(self, path: str) -> Optional[Identity]:
        """Run the strategies against path; never raises for per-archive problems."""
        self.logger.debug("processing locator from Jar: %s", path)
        with Timer() as timer, ExitStack() as stack:
            try:
                archive = stack.enter_context(open_archive(path))
            except ArchiveError as e:
                self.logger.debug("%s", e)
                archive = None

            for strategy in self.strategies:
                try:
                    identity = strategy(path, archive)
                except ResolutionError as e:
                    self.logger.debug("%s: %s: %s", _name(strategy), path, e)
                    continue
                except Exception:  # pylint: disable=broad-exception-caught
                    self.logger.warning(
                        "%s failed unexpectedly on %s", _name(strategy), path, exc_info=True
                    )
                    continue
                if is_debug_enabled(self.logger):
                    self.logger.debug(
                        "Resolved archive",
                        extra=extra_context(
                            event="function_exit",
                            component="resolver",
                            action="resolve",
                            outcome="resolved",
                            strategy=_name(strategy),
                            duration_ms=timer.duration_ms(),
                            package_manager="ant",
                        ),
                    )
                return identity

        self.logger.warning("unable to resolve Jar: %s", path)
        return None
