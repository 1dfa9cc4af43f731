"""Helpers for constructing test tokens."""

from __future__ import annotations

from typing import Any

import jwt

from .config import TEST_KEY

__all__ = ["encode_payload", "tamper"]


def encode_payload(
    payload: dict[str, Any],
    *,
    key: str | None = TEST_KEY,
    algorithm: str = "HS256",
) -> str:
    """Sign an arbitrary payload, bypassing claim construction."""
    return jwt.encode(payload, key, algorithm=algorithm)


def tamper(token: str, segment: int) -> str:
    """Change one character in the middle of a token segment.

    Parameters
    ----------
    token
        Encoded token.
    segment
        Index of the segment to change: 1 for the payload, 2 for the
        signature.

    Returns
    -------
    str
        The modified token. The changed character is a valid base64url
        character, and the last character is never changed since some of its
        bits may only be padding.
    """
    parts = token.split(".")
    target = parts[segment]
    index = len(target) // 2
    replacement = "A" if target[index] != "A" else "B"
    parts[segment] = target[:index] + replacement + target[index + 1 :]
    return ".".join(parts)
