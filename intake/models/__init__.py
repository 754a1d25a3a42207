"""ORM Models — SQLAlchemy declarative models for the document store.

Invariants:
    - All models inherit from Base (db/base.py)
    - Each model exposes to_document() returning a plain dict
    - Uniqueness lives in table constraints, never in application code
"""

from intake.models.applicant import Applicant  # noqa: F401
from intake.models.payment import Payment  # noqa: F401
