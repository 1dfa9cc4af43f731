"""Representation of the claims carried in a token."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any, Self

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    ValidationError,
)

from ..exceptions import MalformedTokenError

__all__ = ["ClaimSet", "Timestamp"]


def _parse_timestamp(v: Any) -> datetime:
    """Accept only numeric seconds since epoch (or a `datetime`)."""
    if isinstance(v, datetime):
        return v
    if isinstance(v, bool) or not isinstance(v, int | float):
        raise ValueError("must be a numeric timestamp")
    try:
        return datetime.fromtimestamp(int(v), tz=UTC)
    except (OverflowError, OSError) as e:
        raise ValueError(f"timestamp out of range: {v}") from e


Timestamp = Annotated[
    datetime,
    BeforeValidator(_parse_timestamp),
    PlainSerializer(lambda t: int(t.timestamp()), return_type=int),
]
"""A timestamp carried in a token as integer seconds since epoch."""


class ClaimSet(BaseModel):
    """The claims embedded in a token.

    Wire names follow the token format (``id``, ``exp``, ``orig_iat``), while
    the Python attribute names describe the meaning of each claim. Unknown
    claims are ignored.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    identity: str = Field(
        ...,
        title="Identity",
        description="Authenticated principal the token was issued to",
        min_length=1,
        alias="id",
    )

    expires_at: Timestamp = Field(
        ...,
        title="Expiration",
        description="Time at and after which the token is no longer valid",
        alias="exp",
    )

    issued_at: Timestamp | None = Field(
        None,
        title="Original issue time",
        description=(
            "Time the first token of this chain was issued. Only present if"
            " refresh is enabled and carried unchanged through refreshes."
        ),
        alias="orig_iat",
    )

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Self:
        """Build the claim set from a decoded token payload.

        Parameters
        ----------
        payload
            Decoded payload of a token whose signature has been verified.

        Returns
        -------
        ClaimSet
            The typed claims.

        Raises
        ------
        MalformedTokenError
            Raised if a required claim is missing or any claim has the wrong
            type.
        """
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise MalformedTokenError(f"Invalid token claims: {e!s}") from e

    def to_payload(self) -> dict[str, Any]:
        """Convert to the payload dictionary to encode in a token."""
        return self.model_dump(by_alias=True, exclude_none=True)
