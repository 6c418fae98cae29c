"""
Application Layer

Scoped-resource manager and the scripted demonstration scenarios.
"""
