"""
Scoped-Resource Manager

Acquires resources in order and releases them in reverse order when the
scope exits, whether or not the body failed.

Failure policy:
    - Body failed: release failures are suppressed onto the body's failure,
      which propagates as primary.
    - Body succeeded: the first release failure propagates as primary and
      later release failures are suppressed onto it.
    - Every acquired resource gets a release attempt, even after an earlier
      release in the same unwind has failed or been interrupted.
    - An interrupt (e.g. KeyboardInterrupt) from the body or a release
      propagates as primary once every release was attempted.

Usage:
    from scoped_failures.application.scope import ResourceScope

    with ResourceScope(on_event=print) as scope:
        first = scope.acquire("r1")
        second = scope.acquire("r2")
        first.use()
        second.use()
"""

import logging
from typing import Any, Callable, List, Optional, Sequence

from scoped_failures.domain.errors import add_suppressed
from scoped_failures.domain.models import Releasable, ScopedResource, ScopeOutcome

logger = logging.getLogger(__name__)


class ResourceScope:
    """Context manager owning every resource acquired through it."""

    def __init__(self, on_event: Optional[Callable[[str], None]] = None):
        self._on_event = on_event
        self._held: List[Releasable] = []
        self._closed = False
        # Resources in the order their release was attempted
        self.released: List[Releasable] = []

    def __enter__(self) -> "ResourceScope":
        if self._closed:
            raise RuntimeError("ResourceScope cannot be re-entered")
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        primary = self._unwind(exc)
        if primary is not None and primary is not exc:
            raise primary
        return False

    def enter(self, resource: Releasable) -> Any:
        """Register an already acquired resource and return it."""
        if self._closed:
            raise RuntimeError("ResourceScope is already closed")
        self._held.append(resource)
        logger.debug("Acquired %r (%d held)", resource, len(self._held))
        return resource

    def acquire(self, name: str) -> ScopedResource:
        """Open a ScopedResource narrating through this scope."""
        return self.enter(ScopedResource(name, on_event=self._on_event))

    def _unwind(self, exc: Optional[BaseException]) -> Optional[BaseException]:
        self._closed = True
        failures: List[BaseException] = []
        while self._held:
            resource = self._held.pop()
            self.released.append(resource)
            try:
                resource.release()
            except BaseException as err:
                logger.warning("Release of %r failed: %s", resource, err)
                failures.append(err)
            else:
                logger.debug("Released %r", resource)
        return self._resolve(exc, failures)

    @staticmethod
    def _resolve(
        exc: Optional[BaseException],
        failures: List[BaseException]
    ) -> Optional[BaseException]:
        """
        Pick the failure that propagates and suppress the rest onto it.

        An interrupt (any failure that is not an Exception) outranks ordinary
        failures; otherwise the body's failure wins, then the first release
        failure.
        """
        candidates = ([exc] if exc is not None else []) + failures
        if not candidates:
            return None
        interrupts = [f for f in candidates if not isinstance(f, Exception)]
        primary = interrupts[0] if interrupts else candidates[0]
        for failure in candidates:
            if failure is not primary:
                add_suppressed(primary, failure)
        return primary


def run_scoped(
    acquisitions: Sequence[Callable[[], Releasable]],
    body: Callable[..., Any],
    on_event: Optional[Callable[[str], None]] = None
) -> Any:
    """
    Acquire resources in order, run ``body`` with them, release in reverse.

    Args:
        acquisitions: Zero-argument callables, each returning one resource
        body: Called with the acquired resources as positional arguments
        on_event: Narration callback handed to the scope

    Returns:
        Whatever ``body`` returns
    """
    with ResourceScope(on_event=on_event) as scope:
        resources = [scope.enter(acquire()) for acquire in acquisitions]
        return body(*resources)


def capture(fn: Callable[..., Any], *args, **kwargs) -> ScopeOutcome:
    """Run ``fn`` and record the failure it propagates, if any."""
    try:
        fn(*args, **kwargs)
    except Exception as exc:
        return ScopeOutcome.of(exc)
    return ScopeOutcome()
