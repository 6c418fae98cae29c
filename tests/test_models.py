import pytest

from scoped_failures.domain.errors import ResourceError, add_suppressed
from scoped_failures.domain.models import (
    FAILING_NAME,
    FAULTY_NAME,
    ScopedResource,
    ScopeOutcome,
)


def test_resource_opens_and_performs_operation(events):
    resource = ScopedResource("r1", on_event=events.append)
    assert resource.is_open

    resource.use()

    assert events == ["Resource r1 opened", "Operation performed on resource r1"]


def test_faulty_resource_always_fails_on_use():
    resource = ScopedResource(FAULTY_NAME)
    for _ in range(2):
        with pytest.raises(ResourceError, match="Resource faulty is faulty"):
            resource.use()


def test_failing_resource_fails_on_release_but_closes(events):
    resource = ScopedResource(FAILING_NAME, on_event=events.append)
    resource.use()

    with pytest.raises(ResourceError, match="Failed to close resource failing"):
        resource.release()

    assert not resource.is_open
    assert events[-1] == "Resource failing closed"


def test_use_after_release_fails():
    resource = ScopedResource("r1")
    resource.release()
    with pytest.raises(ResourceError, match="Resource r1 is closed"):
        resource.use()


def test_failing_resource_fails_on_every_release(events):
    resource = ScopedResource(FAILING_NAME, on_event=events.append)
    for _ in range(2):
        with pytest.raises(ResourceError, match="Failed to close resource failing"):
            resource.release()

    assert not resource.is_open
    assert events.count("Resource failing closed") == 2


def test_second_release_of_healthy_resource_succeeds():
    resource = ScopedResource("r1")
    resource.release()
    resource.release()
    assert not resource.is_open


@pytest.mark.parametrize("name", ["", "   "])
def test_empty_name_is_rejected(name):
    with pytest.raises(ValueError):
        ScopedResource(name)


def test_native_with_lets_release_failure_replace_body_failure():
    with pytest.raises(ResourceError) as exc_info:
        with ScopedResource(FAULTY_NAME) as faulty, ScopedResource(FAILING_NAME):
            faulty.use()

    err = exc_info.value
    assert str(err) == "Failed to close resource failing"
    assert str(err.__context__) == "Resource faulty is faulty"


def test_outcome_without_failure():
    outcome = ScopeOutcome.of(None)
    assert not outcome.failed
    assert outcome.messages() == []


def test_outcome_collects_suppressed_failures():
    primary = ResourceError("Resource faulty is faulty")
    add_suppressed(primary, ResourceError("Failed to close resource failing"))

    outcome = ScopeOutcome.of(primary)

    assert outcome.failed
    assert outcome.primary is primary
    assert outcome.messages() == [
        "Resource faulty is faulty",
        "Failed to close resource failing",
    ]


def test_outcome_rejects_suppressed_without_primary():
    with pytest.raises(ValueError):
        ScopeOutcome(primary=None, suppressed=(ResourceError("x"),))
