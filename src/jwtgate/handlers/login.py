"""Route handler for issuing tokens."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any

from fastapi import APIRouter, Depends
from pydantic import ValidationError

from ..constants import LOGIN_ROUTE
from ..dependencies.context import RequestContext, context_dependency
from ..exceptions import (
    AuthenticationError,
    CredentialsRejectedError,
    InvalidRequestError,
)
from ..models.auth import ErrorResponse, LoginRequest, TokenResponse

router = APIRouter()
"""Router for the login handler."""

__all__ = ["router"]


@router.post(
    LOGIN_ROUTE,
    description=(
        "Exchange a username and password for a bearer token. The body must"
        " be a JSON object with username and password keys."
    ),
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Log in",
    tags=["auth"],
)
async def post_login(
    context: Annotated[RequestContext, Depends(context_dependency)],
) -> TokenResponse:
    try:
        token = await _login(context)
    except AuthenticationError as e:
        context.logger.warning(e.message, error=str(e))
        raise
    context.logger.info("Issued token")
    return TokenResponse(token=token)


async def _login(context: RequestContext) -> str:
    """Check the login credentials and mint a token for them.

    The body is parsed by hand rather than by FastAPI so that a bad body is
    answered with the unauthorized response instead of a 422 error.
    """
    body = await context.request.body()
    try:
        login = LoginRequest.model_validate_json(body)
    except ValidationError as e:
        # Only the locations and messages, since the input holds the password.
        errors = e.errors(include_input=False, include_url=False)
        problems = "; ".join(_describe(error) for error in errors)
        msg = f"Invalid login request: {problems}"
        raise InvalidRequestError(msg) from None
    context.rebind_logger(user=login.username)

    password = login.password.get_secret_value()
    if not await context.process.authenticate(login.username, password):
        raise CredentialsRejectedError(f"Bad password for {login.username}")
    return context.process.codec.mint(login.username)


def _describe(error: Mapping[str, Any]) -> str:
    """Describe a validation error without its input."""
    location = ".".join(str(p) for p in error["loc"]) or "body"
    return f"{location}: {error['msg']}"
