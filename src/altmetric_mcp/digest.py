"""
Explorer API request signing.

The Explorer API authenticates each request with an HMAC-SHA1 digest over a
canonical, pipe-delimited rendering of the request filters.

Provides:
- canonical_string(filters): deterministic token string used as HMAC input
- compute_digest(filters, secret): lowercase hex HMAC-SHA1 of that string
"""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Mapping
from typing import Final

__all__ = [
    "EXCLUDED_KEYS",
    "MIN_SECRET_LENGTH",
    "InvalidSecretError",
    "canonical_string",
    "compute_digest",
    "format_scalar",
]

# Sent as plain query parameters, never signed. Must match the remote service.
EXCLUDED_KEYS: Final[frozenset[str]] = frozenset({"order", "page[number]", "page[size]"})

MIN_SECRET_LENGTH: Final[int] = 16

_SEPARATOR: Final[str] = "|"


class InvalidSecretError(ValueError):
    """Raised when the Explorer API secret is missing or too short."""


def format_scalar(value: object) -> str:
    """Render a filter scalar the same way for signing and for the query string."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def canonical_string(filters: Mapping[str, object]) -> str:
    """
    Return the pipe-joined token string signed for ``filters``.

    Excluded keys are dropped before the remaining keys are sorted by code
    point. Each key is followed by its value, or by every element of a
    list/tuple value in original order.
    """
    signed = {str(k): v for k, v in filters.items() if str(k) not in EXCLUDED_KEYS}

    tokens: list[str] = []
    for key in sorted(signed):
        value = signed[key]
        tokens.append(key)
        if isinstance(value, (list, tuple)):
            tokens.extend(format_scalar(item) for item in value)
        else:
            tokens.append(format_scalar(value))
    return _SEPARATOR.join(tokens)


def compute_digest(filters: Mapping[str, object], secret: str | bytes | None) -> str:
    """Return the hex HMAC-SHA1 digest authenticating ``filters``.

    Args:
        filters: Filter names mapped to scalars or sequences of scalars.
        secret: Explorer API secret, at least 16 characters long.

    Returns:
        40-character lowercase hexadecimal digest.

    Raises:
        InvalidSecretError: If ``secret`` is missing or shorter than 16
            characters. Checked before ``filters`` is read.
    """

    if not secret or len(secret) < MIN_SECRET_LENGTH:
        raise InvalidSecretError(
            f"ALTMETRIC_EXPLORER_API_SECRET must be at least {MIN_SECRET_LENGTH} characters"
        )
    key = secret if isinstance(secret, bytes) else secret.encode("utf-8")
    message = canonical_string(filters).encode("utf-8")
    return hmac.new(key, message, hashlib.sha1).hexdigest()
