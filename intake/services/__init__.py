"""Service Layer — orchestrates core logic around collaborator IO.

Invariants:
    - Services receive collaborators through their constructor (no globals)
    - Every email-derived key is normalized before it touches external state
"""
