"""Email Normalizer — canonical form for every email-derived key.

Invariants:
    - Pure and total: never raises, no side effects
    - normalize_email(normalize_email(x)) == normalize_email(x) for valid x
    - Inputs differing only in case or surrounding whitespace normalize equally
    - Pattern is permissive (local@domain.tld shape), not RFC 5322
"""

import re

from intake.core.domain_types import NormalizedEmail

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(raw: object) -> NormalizedEmail | None:
    """Trim, lowercase and validate. Returns None when the input is unusable."""
    if not raw or not isinstance(raw, str):
        return None
    candidate = raw.strip().lower()
    if not _EMAIL_PATTERN.match(candidate):
        return None
    return NormalizedEmail(candidate)
