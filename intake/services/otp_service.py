"""OTP Service — issues and verifies email one-time codes.

Invariants:
    - Per email: ABSENT -> PENDING (issue) -> ABSENT (verify success or expiry)
    - Cache key is otp:<normalized email>; value is always 6 numeric chars
    - issue() overwrites any pending code (last write wins)
    - verify() compares strings exactly, no numeric coercion
    - Wrong, expired, consumed and never-issued codes raise the same InvalidOtpError
    - A code is accepted at most once: success requires this call's delete to
      remove the key

Design Decisions:
    - No internal retry: cache or email failure surfaces as DependencyError and
      the code counts as not issued; an undelivered code is deleted again
"""

import logging
import secrets

from intake.core.domain_types import NormalizedEmail
from intake.core.email_normalizer import normalize_email
from intake.core.errors import (
    DependencyError, ErrorContext, InputValidationError, InvalidOtpError,
)
from intake.core.repository_protocols import EmailSender, ExpiringCache

logger = logging.getLogger(__name__)

OTP_KEY_PREFIX = "otp:"
OTP_MIN = 100_000
OTP_MAX = 999_999
DEFAULT_TTL_SECONDS = 300


def otp_cache_key(email: NormalizedEmail) -> str:
    return f"{OTP_KEY_PREFIX}{email}"


def generate_code() -> str:
    """Uniform 6-digit code in [100000, 999999] from the OS CSPRNG."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


def render_otp_email(code: str, ttl_seconds: int) -> str:
    minutes = max(1, ttl_seconds // 60)
    return (
        f"<p>Your OTP code is <b>{code}</b>. "
        f"It is valid for {minutes} minutes.</p>"
    )


class OtpService:
    """Time-boxed email verification codes on an ExpiringCache."""

    SUBJECT = "Your OTP Code"

    def __init__(
        self,
        cache: ExpiringCache,
        mailer: EmailSender,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        sender_name: str | None = None,
    ):
        self._cache = cache
        self._mailer = mailer
        self._ttl_seconds = ttl_seconds
        self._sender_name = sender_name

    @staticmethod
    def _require_email(email: object) -> NormalizedEmail:
        if not email:
            raise InputValidationError("Email is required", field="email")
        normalized = normalize_email(email)
        if normalized is None:
            raise InputValidationError("Invalid email format", field="email")
        return normalized

    async def issue(self, email: object) -> None:
        """Generate, store and email a fresh code for this address."""
        normalized = self._require_email(email)
        code = generate_code()
        key = otp_cache_key(normalized)
        try:
            await self._cache.set_with_expiry(key, code, self._ttl_seconds)
        except DependencyError as e:
            raise e.with_public_message("Failed to send OTP") from e
        try:
            await self._mailer.send(
                normalized,
                self.SUBJECT,
                render_otp_email(code, self._ttl_seconds),
                sender_name=self._sender_name,
            )
        except DependencyError as e:
            await self._discard(key)
            raise e.with_public_message("Failed to send OTP") from e
        logger.info("OTP issued", extra={"operation": "issue_otp"})

    async def _discard(self, key: str) -> None:
        """Remove a code whose email never went out."""
        try:
            await self._cache.delete(key)
        except DependencyError as e:
            logger.warning(
                "Could not discard undelivered OTP; it expires with its TTL",
                extra={"operation": "issue_otp", "detail": e.detail},
            )

    async def verify(self, email: object, submitted_code: object) -> None:
        """Consume the pending code if it matches; raise InvalidOtpError otherwise."""
        if not email or not submitted_code:
            raise InputValidationError("Email and OTP are required")
        normalized = self._require_email(email)
        key = otp_cache_key(normalized)
        try:
            stored = await self._cache.get(key)
            matches = (
                stored is not None
                and isinstance(submitted_code, str)
                and stored == submitted_code
            )
            # Losing a concurrent race for the same code counts as a miss
            if not matches or not await self._cache.delete(key):
                raise InvalidOtpError(ErrorContext(operation="verify_otp"))
        except DependencyError as e:
            raise e.with_public_message("Failed to verify OTP") from e
        logger.info("OTP verified", extra={"operation": "verify_otp"})
