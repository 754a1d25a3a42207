"""Intake API package — job-application intake backend.

Invariants:
    - Package root contains no executable code (no import side effects)
"""
