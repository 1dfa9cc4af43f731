"""Interfaces for the credential and authorization callbacks.

Both callbacks are supplied by the application that installs jwtgate. Either
may be a plain function, a coroutine function, or an object with a
``__call__`` method of either kind. Synchronous callbacks are run in a thread
pool so that they may safely block.
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Protocol

from fastapi import Request

__all__ = ["Authenticator", "Authorizer", "permit_all"]


class Authenticator(Protocol):
    """Verifies a username and password at login."""

    def __call__(
        self, username: str, password: str
    ) -> bool | Awaitable[bool]:
        """Check a username and password.

        Parameters
        ----------
        username
            Username from the login request.
        password
            Password from the login request.

        Returns
        -------
        bool
            `True` if the credentials are valid, `False` otherwise.
        """


class Authorizer(Protocol):
    """Decides whether an authenticated identity may make a request."""

    def __call__(
        self, identity: str, request: Request
    ) -> bool | Awaitable[bool]:
        """Check whether a request is authorized.

        Parameters
        ----------
        identity
            Identity from the verified token.
        request
            The incoming request.

        Returns
        -------
        bool
            `True` to allow the request, `False` to reject it.
        """


def permit_all(identity: str, request: Request) -> bool:
    """Authorize every authenticated request."""
    return True
