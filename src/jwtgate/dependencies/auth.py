"""Authentication dependencies for FastAPI."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from ..auth import parse_authorization
from ..callbacks import Authorizer
from ..constants import REMOTE_USER
from ..exceptions import AuthenticationError, PermissionDeniedError
from .context import RequestContext, context_dependency

__all__ = ["Authenticate", "authenticated_user", "get_remote_user"]


class Authenticate:
    """Dependency to verify bearer token authentication.

    Place on any route that requires a valid token. The dependency returns
    the authenticated identity and also stores it in the ASGI scope under
    ``REMOTE_USER``. If authentication or authorization fails, it raises an
    `~jwtgate.exceptions.AuthenticationError` before the route runs, which
    is rendered as the unauthorized response.

    This is a class so that routes may carry their own authorization policy
    while sharing the same code.

    Parameters
    ----------
    authorizer
        If set, use this authorizer for the route instead of the one the
        application was configured with.
    """

    def __init__(self, authorizer: Authorizer | None = None) -> None:
        self.authorizer = authorizer

    async def __call__(
        self,
        *,
        context: Annotated[RequestContext, Depends(context_dependency)],
    ) -> str:
        try:
            return await self.authenticate(context)
        except AuthenticationError as e:
            context.logger.warning(e.message, error=str(e))
            raise

    async def authenticate(self, context: RequestContext) -> str:
        """Authenticate and authorize the request.

        Parameters
        ----------
        context
            The request context.

        Returns
        -------
        str
            The authenticated identity.

        Raises
        ------
        AuthenticationError
            Raised if no valid token was presented or the request was not
            authorized.
        """
        token = parse_authorization(context)
        claims = context.process.codec.verify(token)
        context.rebind_logger(user=claims.identity)

        request = context.request
        process = context.process
        if not await process.authorize(
            claims.identity, request, self.authorizer
        ):
            msg = f"{claims.identity} not authorized for {request.url.path}"
            raise PermissionDeniedError(msg)

        request.scope[REMOTE_USER] = claims.identity
        return claims.identity


authenticated_user = Authenticate()
"""Dependency that authenticates with the application's authorizer."""


def get_remote_user(request: Request) -> str | None:
    """Return the identity stored by `Authenticate`, if any.

    Parameters
    ----------
    request
        The incoming request.

    Returns
    -------
    str or None
        The authenticated identity, or `None` if the request did not pass
        through the authentication dependency.
    """
    return request.scope.get(REMOTE_USER)
