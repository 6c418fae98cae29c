"""
Interfaces Layer

Command-line entry point.
"""
