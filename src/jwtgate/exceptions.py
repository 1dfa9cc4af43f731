"""Exceptions for jwtgate."""

from __future__ import annotations

from typing import ClassVar

__all__ = [
    "AuthenticationError",
    "CredentialsRejectedError",
    "ExpiredTokenError",
    "InvalidConfigurationError",
    "InvalidRequestError",
    "InvalidSignatureError",
    "MalformedTokenError",
    "PermissionDeniedError",
    "RefreshExpiredError",
    "TokenSigningError",
]


class InvalidConfigurationError(Exception):
    """The authentication layer was configured incorrectly.

    This is only raised while the application is being constructed, never
    while handling a request, and should be treated as fatal.
    """


class AuthenticationError(Exception):
    """A request could not be authenticated or authorized.

    All subclasses are rendered to the client as the same unauthorized
    response. The ``error`` and ``message`` attributes are only used for
    logging, so that the reason for a rejection is recorded without being
    disclosed.
    """

    error: ClassVar[str] = "not_authorized"
    """Short code identifying the kind of failure."""

    message: ClassVar[str] = "Request not authorized"
    """The summary message to use when logging this error."""


class InvalidRequestError(AuthenticationError):
    """The request did not carry credentials in a form we can parse.

    Raised for a missing or malformed ``Authorization`` header and for a
    login body that is not a JSON object with a username and password.
    """

    error = "invalid_request"
    message = "Invalid request"


class InvalidSignatureError(AuthenticationError):
    """The token signature does not match its contents."""

    error = "invalid_signature"
    message = "Invalid token signature"


class ExpiredTokenError(AuthenticationError):
    """The token is past its expiration time."""

    error = "expired_token"
    message = "Token expired"


class MalformedTokenError(AuthenticationError):
    """The token is not a structurally valid token with the expected claims."""

    error = "malformed_token"
    message = "Malformed token"


class CredentialsRejectedError(AuthenticationError):
    """The username and password were not accepted."""

    error = "invalid_credentials"
    message = "Authentication failed"


class PermissionDeniedError(AuthenticationError):
    """The authenticated user may not perform this request."""

    error = "permission_denied"
    message = "Permission denied"


class RefreshExpiredError(AuthenticationError):
    """The token was originally issued too long ago to be refreshed."""

    error = "refresh_expired"
    message = "Refresh window expired"


class TokenSigningError(AuthenticationError):
    """A new token could not be signed."""

    error = "signing_failed"
    message = "Unable to sign token"
