"""
Scoped Failures

Narrated demonstrations of failure handling: declared (checked) failures,
chaining, ordered handlers, finally blocks, and suppressed failures raised
while releasing scoped resources.

Architecture:
    - scoped_failures/domain: Failure kinds, scoped resources, outcome records
    - scoped_failures/infrastructure: Configuration and the scenario catalog
    - scoped_failures/application: Scoped-resource manager and scenarios
    - scoped_failures/interfaces: CLI

Usage:
    from scoped_failures.application.scope import ResourceScope
    from scoped_failures.interfaces.cli import main

    with ResourceScope(on_event=print) as scope:
        scope.acquire("r1").use()
"""

__version__ = "1.0.0"
