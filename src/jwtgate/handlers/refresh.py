"""Route handler for refreshing tokens."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from ..auth import parse_authorization
from ..constants import REFRESH_ROUTE
from ..dependencies.auth import authenticated_user
from ..dependencies.context import RequestContext, context_dependency
from ..exceptions import AuthenticationError
from ..models.auth import ErrorResponse, TokenResponse

router = APIRouter()
"""Router for the refresh handler."""

__all__ = ["router"]


@router.api_route(
    REFRESH_ROUTE,
    methods=["GET", "POST"],
    description=(
        "Exchange a valid token for a new one with a fresh expiration, as"
        " long as the original login was within the refresh window"
    ),
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Refresh token",
    tags=["auth"],
)
async def refresh_token(
    identity: Annotated[str, Depends(authenticated_user)],
    context: Annotated[RequestContext, Depends(context_dependency)],
) -> TokenResponse:
    try:
        token = context.process.codec.refresh(parse_authorization(context))
    except AuthenticationError as e:
        context.logger.warning(e.message, error=str(e))
        raise
    context.logger.info("Refreshed token")
    return TokenResponse(token=token)
