"""
Demonstration Scenarios

Scripted scenarios narrating how failures are raised, matched, chained and
suppressed. Each scenario narrates through a ``say`` callback and returns
the outcome it observed. No scenario lets a failure escape.

Usage:
    from scoped_failures.application.scenarios import run_scenario

    report = run_scenario("suppressed", say=print)
    print(report.outcome.messages())
"""

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Dict, List, Optional

from scoped_failures.application.scope import ResourceScope, run_scoped
from scoped_failures.domain.errors import (
    DomainError,
    ResourceError,
    UnknownScenarioError,
    classify,
    get_suppressed,
)
from scoped_failures.domain.models import (
    FAILING_NAME,
    FAULTY_NAME,
    ScopedResource,
    ScopeOutcome,
)
from scoped_failures.infrastructure.scenario_catalog import ScenarioCatalog, get_catalog

logger = logging.getLogger(__name__)

Say = Callable[[str], None]
ScenarioRunner = Callable[[Say], ScopeOutcome]

SCENARIOS: Dict[str, ScenarioRunner] = {}


def scenario(scenario_id: str) -> Callable[[ScenarioRunner], ScenarioRunner]:
    """Register a scenario runner under ``scenario_id``."""
    def register(fn: ScenarioRunner) -> ScenarioRunner:
        if scenario_id in SCENARIOS:
            raise ValueError(f"Scenario already registered: {scenario_id}")
        SCENARIOS[scenario_id] = fn
        return fn
    return register


@dataclass
class ScenarioReport:
    """Narration and observed outcome of one scenario run."""
    scenario_id: str
    lines: List[str] = field(default_factory=list)
    outcome: ScopeOutcome = field(default_factory=ScopeOutcome)


# =============================================================================
# HELPERS
# =============================================================================

def _report_suppressed(say: Say, exc: BaseException) -> None:
    suppressed = get_suppressed(exc)
    if suppressed:
        say("Suppressed failures:")
        for failure in suppressed:
            say(f"- {failure}")


def _raise_checked() -> None:
    raise DomainError("Demonstrating checked failures")


def _write_out_of_range() -> None:
    values = [0] * 5
    try:
        values[10] = 50
    except IndexError as err:
        raise ResourceError("Error accessing list", cause=err)


def _missing_text() -> Optional[str]:
    return None


# =============================================================================
# SCENARIOS
# =============================================================================

@scenario("arithmetic")
def arithmetic(say: Say) -> ScopeOutcome:
    try:
        result = 10 // 0
        say(f"Result: {result}")
    except ZeroDivisionError as e:
        say(f"Caught arithmetic error: {e}")
        return ScopeOutcome.of(e)
    return ScopeOutcome()


@scenario("handler-order")
def handler_order(say: Say) -> ScopeOutcome:
    text = _missing_text()
    try:
        say(f"Length: {len(text.strip())}")
    except AttributeError as e:
        say(f"Caught null reference error: {e}")
        return ScopeOutcome.of(e)
    except Exception as e:
        say(f"Caught general error: {e}")
        return ScopeOutcome.of(e)
    return ScopeOutcome()


@scenario("resource-scope")
def resource_scope(say: Say) -> ScopeOutcome:
    try:
        with ResourceScope(on_event=say) as scope:
            first = scope.acquire("r1")
            second = scope.acquire("r2")
            first.use()
            second.use()
    except ResourceError as e:
        say(f"Resource operation failed: {e}")
        return ScopeOutcome.of(e)
    return ScopeOutcome()


@scenario("finally")
def handler_with_finally(say: Say) -> ScopeOutcome:
    outcome = ScopeOutcome()
    try:
        _raise_checked()
    except DomainError as e:
        say(f"Caught domain error: {e}")
        outcome = ScopeOutcome.of(e)
    finally:
        say("Finally block executed")
    return outcome


@scenario("chaining")
def chaining(say: Say) -> ScopeOutcome:
    try:
        _write_out_of_range()
    except ResourceError as e:
        say(f"Main cause: {e}")
        say(f"Original cause: {e.cause}")
        return ScopeOutcome.of(e)
    return ScopeOutcome()


@scenario("suppressed")
def suppressed(say: Say) -> ScopeOutcome:
    try:
        with ResourceScope(on_event=say) as scope:
            faulty = scope.acquire(FAULTY_NAME)
            failing = scope.acquire(FAILING_NAME)
            faulty.use()
            failing.use()
    except ResourceError as e:
        say(f"Operation failed: {e}")
        _report_suppressed(say, e)
        return ScopeOutcome.of(e)
    return ScopeOutcome()


@scenario("release-failure")
def release_failure(say: Say) -> ScopeOutcome:
    acquisitions = [
        partial(ScopedResource, FAILING_NAME, on_event=say),
        partial(ScopedResource, "r5", on_event=say),
        partial(ScopedResource, FAILING_NAME, on_event=say),
    ]

    def use_all(*resources: ScopedResource) -> None:
        for resource in resources:
            resource.use()

    try:
        run_scoped(acquisitions, use_all, on_event=say)
    except ResourceError as e:
        say(f"Release failed: {e}")
        _report_suppressed(say, e)
        return ScopeOutcome.of(e)
    return ScopeOutcome()


@scenario("partial-acquisition")
def partial_acquisition(say: Say) -> ScopeOutcome:
    scope = ResourceScope(on_event=say)
    try:
        with scope:
            scope.acquire("r6")
            scope.acquire("")
    except ValueError as e:
        say(f"Acquisition failed: {e}")
        say("Released: " + ", ".join(r.name for r in scope.released))
        return ScopeOutcome.of(e)
    return ScopeOutcome()


@scenario("unchecked-in-scope")
def unchecked_in_scope(say: Say) -> ScopeOutcome:
    try:
        with ResourceScope(on_event=say) as scope:
            scope.acquire(FAILING_NAME).use()
            say(f"Ratio: {1 / 0}")
    except DomainError as e:
        say(f"Caught domain error: {e}")
        return ScopeOutcome.of(e)
    except Exception as e:
        say(f"Caught {classify(e).value} {type(e).__name__}: {e}")
        _report_suppressed(say, e)
        return ScopeOutcome.of(e)
    return ScopeOutcome()


@scenario("implicit-context")
def implicit_context(say: Say) -> ScopeOutcome:
    try:
        with ScopedResource(FAULTY_NAME, on_event=say) as faulty, \
                ScopedResource(FAILING_NAME, on_event=say) as failing:
            faulty.use()
            failing.use()
    except ResourceError as e:
        say(f"Operation failed: {e}")
        if e.__context__ is not None:
            say(f"Implicit context: {e.__context__}")
        say(f"Suppressed failures recorded: {len(get_suppressed(e))}")
        return ScopeOutcome.of(e)
    return ScopeOutcome()


# =============================================================================
# RUNNERS
# =============================================================================

def run_scenario(scenario_id: str, say: Optional[Say] = None) -> ScenarioReport:
    """
    Run one scenario, collecting its narration.

    Args:
        scenario_id: Registered scenario id
        say: Optional callback receiving each narrated line as it happens

    Returns:
        ScenarioReport with the narration and observed outcome

    Raises:
        UnknownScenarioError: If no scenario is registered under the id
    """
    runner = SCENARIOS.get(scenario_id)
    if runner is None:
        raise UnknownScenarioError(scenario_id)

    report = ScenarioReport(scenario_id=scenario_id)

    def narrate(line: str) -> None:
        report.lines.append(line)
        if say is not None:
            say(line)

    logger.debug("Running scenario %s", scenario_id)
    report.outcome = runner(narrate)
    logger.info(
        "Scenario %s finished: %s",
        scenario_id, report.outcome.messages() or "no failure"
    )
    return report


def run_all(say: Optional[Say] = None, catalog: Optional[ScenarioCatalog] = None) -> List[ScenarioReport]:
    """Run every catalogued scenario in catalog order."""
    catalog = catalog or get_catalog()
    return [run_scenario(scenario_id, say) for scenario_id in catalog.ids()]


def list_available_scenarios(catalog: Optional[ScenarioCatalog] = None) -> List[Dict]:
    """List catalogued scenarios that have a registered runner."""
    catalog = catalog or get_catalog()
    return [
        {
            "id": entry.id,
            "name": entry.name,
            "description": entry.description,
            "category": entry.category.value
        }
        for entry in catalog.entries()
        if entry.id in SCENARIOS
    ]
