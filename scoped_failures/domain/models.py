"""
Domain Models

Scoped resources and the outcome record produced when a scope unwinds.
No dependencies on external frameworks.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from scoped_failures.domain.errors import ResourceError, get_suppressed


# Names that mark a resource as intentionally broken
FAULTY_NAME = "faulty"
FAILING_NAME = "failing"


class Releasable(Protocol):
    """Anything a scope can release on exit."""

    def release(self) -> None:
        ...


# =============================================================================
# SCOPED RESOURCE
# =============================================================================

class ScopedResource:
    """
    External handle identified by a name.

    A resource named ``faulty`` always fails on use and one named ``failing``
    always fails on release. Lifecycle events are narrated through the
    optional ``on_event`` callback.
    """

    def __init__(self, name: str, on_event: Optional[Callable[[str], None]] = None):
        if not name or not name.strip():
            raise ValueError("Resource name cannot be empty")
        self.name = name
        self._on_event = on_event
        self._open = True
        self._emit(f"Resource {name} opened")

    @property
    def is_open(self) -> bool:
        return self._open

    def use(self) -> None:
        """
        Perform an operation on the resource.

        Raises:
            ResourceError: If the resource is closed or marked faulty
        """
        if not self._open:
            raise ResourceError(f"Resource {self.name} is closed")
        if self.name == FAULTY_NAME:
            raise ResourceError(f"Resource {self.name} is faulty")
        self._emit(f"Operation performed on resource {self.name}")

    def release(self) -> None:
        """
        Close the resource. The resource is closed even when this raises.

        Raises:
            ResourceError: If the resource is marked failing
        """
        self._open = False
        self._emit(f"Resource {self.name} closed")
        if self.name == FAILING_NAME:
            raise ResourceError(f"Failed to close resource {self.name}")

    def _emit(self, text: str) -> None:
        if self._on_event is not None:
            self._on_event(text)

    def __enter__(self) -> "ScopedResource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "open" if self._open else "closed"
        return f"ScopedResource({self.name!r}, {state})"


# =============================================================================
# OUTCOME RECORD
# =============================================================================

@dataclass(frozen=True, slots=True)
class ScopeOutcome:
    """Primary failure of a scope plus the failures suppressed on it."""
    primary: Optional[BaseException] = None
    suppressed: tuple = ()

    def __post_init__(self):
        if self.primary is None and self.suppressed:
            raise ValueError("Suppressed failures require a primary failure")

    @classmethod
    def of(cls, exc: Optional[BaseException]) -> "ScopeOutcome":
        """Build an outcome from a propagated failure (or none)."""
        if exc is None:
            return cls()
        return cls(primary=exc, suppressed=get_suppressed(exc))

    @property
    def failed(self) -> bool:
        return self.primary is not None

    def messages(self) -> list[str]:
        """Primary message first, then each suppressed message."""
        if self.primary is None:
            return []
        return [str(self.primary)] + [str(s) for s in self.suppressed]
