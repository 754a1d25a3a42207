"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Every client maps its library's exceptions to a DependencyError subclass
    - No automatic retries: failures surface to the caller immediately
"""
