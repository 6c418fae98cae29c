"""
Domain Layer

Failure kinds, scoped resources and outcome records.
No dependencies on external frameworks.
"""
