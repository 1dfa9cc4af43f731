"""Create jwtgate components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

from fastapi import Request

from .callbacks import Authenticator, Authorizer, permit_all
from .codec import TokenCodec
from .config import Config
from .exceptions import InvalidConfigurationError
from .util import run_callback

__all__ = ["ProcessContext"]


@dataclass(frozen=True, slots=True)
class ProcessContext:
    """Per-process application context.

    Holds everything that is built once from the configuration and then
    shared, read-only, by every request. It is stored on the application
    state by `jwtgate.main.setup_auth`.
    """

    config: Config
    """jwtgate's configuration."""

    codec: TokenCodec
    """Codec used to mint, verify, and refresh tokens."""

    authenticator: Authenticator
    """Callback that checks login credentials."""

    authorizer: Authorizer
    """Default callback that authorizes gated requests."""

    @classmethod
    def from_config(
        cls,
        config: Config,
        authenticator: Authenticator | None,
        authorizer: Authorizer | None = None,
    ) -> Self:
        """Create a new process context from the jwtgate configuration.

        Parameters
        ----------
        config
            The jwtgate configuration.
        authenticator
            Callback that checks login credentials. Required.
        authorizer
            Callback that authorizes gated requests. If not given, every
            request with a valid token is allowed.

        Returns
        -------
        ProcessContext
            Shared context for a jwtgate process.

        Raises
        ------
        InvalidConfigurationError
            Raised if the authenticator is missing, either callback is not
            callable, or the signing key is not usable.
        """
        if authenticator is None:
            raise InvalidConfigurationError("No authenticator configured")
        if not callable(authenticator):
            raise InvalidConfigurationError("Authenticator is not callable")
        if authorizer is None:
            authorizer = permit_all
        elif not callable(authorizer):
            raise InvalidConfigurationError("Authorizer is not callable")
        return cls(
            config=config,
            codec=TokenCodec.from_config(config),
            authenticator=authenticator,
            authorizer=authorizer,
        )

    async def authenticate(self, username: str, password: str) -> bool:
        """Check login credentials with the configured authenticator."""
        return bool(await run_callback(self.authenticator, username, password))

    async def authorize(
        self,
        identity: str,
        request: Request,
        authorizer: Authorizer | None = None,
    ) -> bool:
        """Check whether an identity may make a request.

        Parameters
        ----------
        identity
            Identity from the verified token.
        request
            The incoming request.
        authorizer
            Override for the configured authorizer, if given.

        Returns
        -------
        bool
            Whether the request is authorized.
        """
        check = authorizer or self.authorizer
        return bool(await run_callback(check, identity, request))
