"""Representation of authentication-related data."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from ..constants import NOT_AUTHORIZED

__all__ = [
    "AuthChallenge",
    "AuthType",
    "ErrorResponse",
    "LoginRequest",
    "TokenResponse",
]


class AuthType(Enum):
    """Authentication types for the WWW-Authenticate header."""

    Basic = "basic"
    """HTTP Basic Authentication (RFC 7617)."""


@dataclass
class AuthChallenge:
    """Represents a ``WWW-Authenticate`` header for a simple challenge."""

    auth_type: AuthType
    """The authentication type (the first part of the header)."""

    realm: str
    """The value of the realm attribute."""

    def to_header(self) -> str:
        """Construct the WWW-Authenticate header for this challenge.

        Returns
        -------
        str
            Contents of the WWW-Authenticate header.
        """
        return f'{self.auth_type.name} realm="{self.realm}"'


class LoginRequest(BaseModel):
    """Body of a request to the login route."""

    model_config = ConfigDict(extra="ignore")

    username: str = Field(
        ...,
        title="Username",
        description="Identity to authenticate as",
        min_length=1,
        examples=["someuser"],
    )

    password: SecretStr = Field(
        ...,
        title="Password",
        description="Password for that identity",
        examples=["correct horse battery staple"],
    )


class TokenResponse(BaseModel):
    """Response to a successful login or refresh."""

    token: str = Field(
        ...,
        title="Token",
        description=(
            "Newly-issued bearer token, to be sent in an Authorization"
            " header of type Bearer"
        ),
        examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.eyJ..."],
    )


class ErrorResponse(BaseModel):
    """Body of every unauthorized response.

    The body carries no information about why the request was rejected.
    """

    error: str = Field(
        NOT_AUTHORIZED,
        title="Error",
        serialization_alias="Error",
        examples=[NOT_AUTHORIZED],
    )
