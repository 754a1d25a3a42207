"""Pydantic Schemas — request/response shapes for the HTTP endpoints.

Invariants:
    - Request fields are optional at the schema level; required-field checks
      happen in the services so the error messages stay endpoint-specific
"""
