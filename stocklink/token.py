"""
Link signing and verification.

A link carries four query fields: the three Claims fields plus a token.
The token is hmac_sha256(LINK_SECRET, canonical_message).hexdigest(), where

    canonical_message = "{target_id}.{direction}.{expiry}"

Nothing is stored server-side. A link is valid iff its token matches the
claims it carries and its expiry has not passed, so the same link can be
redeemed any number of times until it expires.

Canonical message
-----------------
direction and expiry are always rendered from their integer values ("1",
"-1", plain decimal digits), so only target_id can contain a period. The
last two periods of a message therefore always split it back into exactly
one (target_id, direction, expiry) tuple, and two different Claims can never
produce the same message. This holds only because loose forms like "+1" or
"007" are rejected before a Claims value is built; never normalize them.

Why hmac.compare_digest?
------------------------
Plain == may return as soon as a byte differs, leaking how much of a guessed
token is right. compare_digest takes the same time regardless of where the
inputs diverge, and simply returns False when the lengths differ.
"""
import hashlib
import hmac
import re
import time

from pydantic import ValidationError

from stocklink.errors import ConfigurationError
from stocklink.models import Claims, VerifyResult

# Textual direction -> signed delta. Exact matches only.
DIRECTIONS = {"1": 1, "-1": -1}

# One year.
DEFAULT_TTL_SECONDS = 31536000

# Canonical decimal seconds: no sign, no leading zeros, at most 12 digits.
EXPIRY_PATTERN = re.compile(r"0|[1-9][0-9]{0,11}")


def build_message(claims: Claims) -> str:
    """Return the canonical message for claims: target_id, direction, expiry joined by '.'."""
    return f"{claims.target_id}.{claims.direction}.{claims.expiry}"


class LinkSigner:
    """
    Signs and verifies link claims with one process-wide secret.

    Build one at startup and share it. The instance holds no mutable state,
    so concurrent requests can use it without locking.

    Example:
        signer = LinkSigner(secret=settings.link_secret)
        claims, token = signer.issue("123", 1, ttl=60)
        result = signer.verify("123", "1", str(claims.expiry), token)
        assert result.ok
    """

    def __init__(self, secret: str | bytes):
        if not secret:
            raise ConfigurationError(
                "LINK_SECRET is required. "
                "Set it with: export LINK_SECRET=$(openssl rand -hex 32)"
            )
        self._key = secret.encode() if isinstance(secret, str) else bytes(secret)

    def sign(self, claims: Claims) -> str:
        """Return the lowercase hex HMAC-SHA256 token for claims. Deterministic."""
        msg = build_message(claims).encode()
        return hmac.new(self._key, msg, hashlib.sha256).hexdigest()

    def issue(
        self,
        target_id: str,
        direction: int,
        ttl: int = DEFAULT_TTL_SECONDS,
        now: int | None = None,
    ) -> tuple[Claims, str]:
        """
        Build claims that expire ttl seconds from now and sign them.

        Raises pydantic.ValidationError if target_id is empty or direction is
        not 1/-1. Parse request input before calling this.
        """
        if now is None:
            now = int(time.time())
        claims = Claims(target_id=target_id, direction=direction, expiry=now + ttl)
        return claims, self.sign(claims)

    def verify(
        self,
        target_id: str | None,
        direction: str | None,
        expiry: str | None,
        token: str | None,
        now: int | None = None,
    ) -> VerifyResult:
        """
        Decide whether a presented link is valid right now.

        Takes the raw query values exactly as received. Never raises; every
        malformed input becomes a rejection.

        Order of checks:
            1. all four fields present and non-empty     else INVALID
            2. direction is exactly "1" or "-1"           else INVALID_DELTA
            3. expiry is canonical digits, not in the past else INVALID / EXPIRED
            4. token matches the recomputed token         else INVALID
        """
        fields = (target_id, direction, expiry, token)
        if not all(isinstance(f, str) and f for f in fields):
            return VerifyResult(status="INVALID")

        if direction not in DIRECTIONS:
            return VerifyResult(status="INVALID_DELTA")

        if not EXPIRY_PATTERN.fullmatch(expiry):
            return VerifyResult(status="INVALID")
        if now is None:
            now = int(time.time())
        if int(expiry) < now:
            return VerifyResult(status="EXPIRED")

        try:
            claims = Claims(
                target_id=target_id,
                direction=DIRECTIONS[direction],
                expiry=int(expiry),
            )
            expected = self.sign(claims)
            matched = hmac.compare_digest(token.encode("ascii"), expected.encode("ascii"))
        except (ValidationError, TypeError, ValueError):
            # Non-ASCII tokens raise UnicodeEncodeError, a ValueError.
            return VerifyResult(status="INVALID")

        if not matched:
            return VerifyResult(status="INVALID")
        return VerifyResult(status="VALID", claims=claims)
