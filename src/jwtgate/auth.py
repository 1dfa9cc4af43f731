"""Utility functions for parsing and answering authentication headers."""

from __future__ import annotations

from fastapi import Request, status
from fastapi.responses import JSONResponse

from .config import Config
from .dependencies.context import RequestContext, get_process_context
from .exceptions import AuthenticationError, InvalidRequestError
from .models.auth import AuthChallenge, AuthType, ErrorResponse

__all__ = [
    "generate_unauthorized_response",
    "parse_authorization",
    "parse_bearer",
    "unauthorized_error_handler",
]


def generate_unauthorized_response(config: Config) -> JSONResponse:
    """Construct the response sent for every rejected request.

    The response never says why the request was rejected.

    Parameters
    ----------
    config
        jwtgate configuration, which selects between prompt and silent mode.

    Returns
    -------
    fastapi.responses.JSONResponse
        In prompt mode, a 401 response with a ``WWW-Authenticate`` challenge
        of type ``Basic``. In silent mode, a response with the configured
        silent status code and no challenge. Both have the same body.
    """
    headers = {"Cache-Control": "no-cache, no-store"}
    if config.need_prompt:
        challenge = AuthChallenge(auth_type=AuthType.Basic, realm=config.realm)
        headers["WWW-Authenticate"] = challenge.to_header()
        status_code = status.HTTP_401_UNAUTHORIZED
    else:
        status_code = config.silent_status_code
    return JSONResponse(
        ErrorResponse().model_dump(by_alias=True),
        status_code=status_code,
        headers=headers,
    )


def parse_authorization(context: RequestContext) -> str:
    """Find a bearer token in the Authorization header.

    Rebinds the logging context to include the source of the token.

    Parameters
    ----------
    context
        The context of the incoming request.

    Returns
    -------
    str
        The encoded token.

    Raises
    ------
    InvalidRequestError
        Raised if the ``Authorization`` header is missing or malformed.
    """
    token = parse_bearer(context.request.headers.get("Authorization"))
    context.rebind_logger(token_source="bearer")
    return token


def parse_bearer(header: str | None) -> str:
    """Extract the token from an ``Authorization`` header value.

    The header must be exactly ``Bearer``, one space, and a non-empty token.

    Parameters
    ----------
    header
        Value of the header, or `None` if it was not present.

    Returns
    -------
    str
        The encoded token.

    Raises
    ------
    InvalidRequestError
        Raised if the header is missing or not of that form.
    """
    if not header:
        raise InvalidRequestError("No Authorization header")
    parts = header.split(" ")
    if len(parts) != 2:
        raise InvalidRequestError("Malformed Authorization header")
    auth_type, token = parts
    if auth_type != "Bearer":
        raise InvalidRequestError(f"Unknown Authorization type {auth_type}")
    if not token:
        raise InvalidRequestError("Empty bearer token")
    return token


async def unauthorized_error_handler(
    request: Request, exc: AuthenticationError
) -> JSONResponse:
    """Render an `~jwtgate.exceptions.AuthenticationError` as a response.

    Installed as an exception handler by `jwtgate.main.setup_auth`. The
    error is logged where it is raised, so it is only used here to pick the
    response.
    """
    config = get_process_context(request).config
    return generate_unauthorized_response(config)
