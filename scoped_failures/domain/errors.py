"""
Domain Errors

Failure hierarchy for the scoped-failures demonstrations.
Checked failures derive from DomainError; everything else is unchecked.
Suppressed failures can be attached to any exception object.
"""

from enum import Enum
from typing import Optional


# =============================================================================
# FAILURE KINDS
# =============================================================================

class FailureKind(Enum):
    """Whether a failure must be handled explicitly by the caller."""
    CHECKED = "checked"
    UNCHECKED = "unchecked"


# =============================================================================
# DOMAIN ERRORS
# =============================================================================

class DomainError(Exception):
    """
    Declared failure that callers are expected to handle.

    The message and cause are fixed at construction. The cause is mirrored
    into ``__cause__`` for traceback display only; rebinding that attribute
    (e.g. ``raise ... from None``) does not change ``cause``.
    """

    kind = FailureKind.CHECKED

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self._message = message
        self._cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def message(self) -> str:
        return self._message

    @property
    def cause(self) -> Optional[BaseException]:
        """The failure this one was chained from, if any."""
        return self._cause

    def __str__(self) -> str:
        return self._message


class ResourceError(DomainError):
    """A scoped resource could not be used or released."""
    pass


class UnknownScenarioError(DomainError):
    """No scenario is registered under the requested id."""

    def __init__(self, scenario_id: str):
        super().__init__(f"Unknown scenario: {scenario_id}")
        self.scenario_id = scenario_id


# =============================================================================
# CLASSIFICATION
# =============================================================================

def classify(exc: BaseException) -> FailureKind:
    """Return the failure kind of an exception."""
    if isinstance(exc, DomainError):
        return exc.kind
    return FailureKind.UNCHECKED


def is_checked(exc: BaseException) -> bool:
    return classify(exc) is FailureKind.CHECKED


# =============================================================================
# SUPPRESSED FAILURES
# =============================================================================

_SUPPRESSED_ATTR = "__suppressed__"


def add_suppressed(primary: BaseException, failure: BaseException) -> None:
    """
    Record ``failure`` as suppressed on ``primary``.

    Suppressed failures keep insertion order. Each one is also added as a
    note so it shows up when the primary's traceback is printed.

    Raises:
        ValueError: If a failure would suppress itself
    """
    if failure is primary:
        raise ValueError("A failure cannot suppress itself")
    suppressed = primary.__dict__.setdefault(_SUPPRESSED_ATTR, [])
    suppressed.append(failure)
    primary.add_note(f"Suppressed: {type(failure).__name__}: {failure}")


def get_suppressed(exc: BaseException) -> tuple:
    """Return the failures suppressed on ``exc``, oldest first."""
    return tuple(exc.__dict__.get(_SUPPRESSED_ATTR, ()))
