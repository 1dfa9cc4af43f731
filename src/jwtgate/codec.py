"""Mint, verify, and refresh tokens."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Self

import jwt
from safir.datetime import current_datetime

from .config import Config
from .exceptions import (
    ExpiredTokenError,
    InvalidConfigurationError,
    InvalidSignatureError,
    MalformedTokenError,
    RefreshExpiredError,
    TokenSigningError,
)
from .keypair import SigningKeys
from .models.claims import ClaimSet

__all__ = ["TokenCodec"]


class TokenCodec:
    """Encode claims into signed tokens and decode them again.

    All methods take an optional ``now`` parameter, which defaults to the
    current time truncated to seconds. Tokens carry whole seconds, so callers
    that supply their own time should truncate it as well.

    Parameters
    ----------
    keys
        Keys and algorithm used to sign and verify tokens.
    timeout
        Lifetime of newly-minted tokens.
    max_refresh
        How long after the original issue time a token may be refreshed.
        Zero disables refresh, in which case tokens carry no original issue
        time.
    """

    def __init__(
        self,
        keys: SigningKeys,
        *,
        timeout: timedelta,
        max_refresh: timedelta = timedelta(0),
    ) -> None:
        self._keys = keys
        self._timeout = timeout
        self._max_refresh = max_refresh

    @classmethod
    def from_config(cls, config: Config) -> Self:
        """Create a codec from the jwtgate configuration.

        Raises
        ------
        InvalidConfigurationError
            Raised if the configured key is not usable.
        """
        return cls(
            config.signing_keys(),
            timeout=config.timeout,
            max_refresh=config.max_refresh,
        )

    @property
    def refresh_enabled(self) -> bool:
        """Whether tokens may be refreshed."""
        return self._max_refresh > timedelta(0)

    def mint(
        self,
        identity: str,
        *,
        issued_at: datetime | None = None,
        now: datetime | None = None,
    ) -> str:
        """Mint a new token.

        Parameters
        ----------
        identity
            Authenticated identity to embed in the token.
        issued_at
            Original issue time of the token being refreshed, if any. If not
            given, the current time is recorded when refresh is enabled.
        now
            Time at which the token is minted.

        Returns
        -------
        str
            The encoded and signed token.

        Raises
        ------
        MalformedTokenError
            Raised if the identity is empty.
        TokenSigningError
            Raised if the token could not be signed.
        """
        now = now or current_datetime()
        if issued_at is None and self.refresh_enabled:
            issued_at = now
        claims = ClaimSet.from_payload(
            {
                "id": identity,
                "exp": now + self._timeout,
                "orig_iat": issued_at,
            }
        )
        try:
            return jwt.encode(
                claims.to_payload(),
                self._keys.signing_key,
                algorithm=self._keys.algorithm,
            )
        except (
            NotImplementedError,
            TypeError,
            ValueError,
            jwt.PyJWTError,
        ) as e:
            msg = f"Cannot sign with {self._keys.algorithm}: {e!s}"
            raise TokenSigningError(msg) from e

    def refresh(self, token: str, *, now: datetime | None = None) -> str:
        """Exchange a valid token for a new one.

        The new token has the same identity and original issue time as the
        old one and a fresh expiration. The old token is not affected.

        Parameters
        ----------
        token
            Encoded token to refresh.
        now
            Time at which the refresh happens.

        Returns
        -------
        str
            The new encoded token.

        Raises
        ------
        AuthenticationError
            Raised if the token is not valid (see `verify`).
        InvalidConfigurationError
            Raised if refresh is not enabled.
        MalformedTokenError
            Raised if the token has no original issue time.
        RefreshExpiredError
            Raised if the token was originally issued longer ago than the
            refresh window.
        """
        if not self.refresh_enabled:
            raise InvalidConfigurationError("Token refresh is not enabled")
        now = now or current_datetime()
        claims = self.verify(token, now=now)
        if not claims.issued_at:
            raise MalformedTokenError("Token has no orig_iat claim")
        if claims.issued_at < now - self._max_refresh:
            issued = claims.issued_at.isoformat()
            raise RefreshExpiredError(f"Token originally issued at {issued}")
        return self.mint(claims.identity, issued_at=claims.issued_at, now=now)

    def verify(self, token: str, *, now: datetime | None = None) -> ClaimSet:
        """Verify a token and return its claims.

        Parameters
        ----------
        token
            Encoded token to verify.
        now
            Time against which to check expiration.

        Returns
        -------
        ClaimSet
            The verified claims.

        Raises
        ------
        ExpiredTokenError
            Raised if the token has expired.
        InvalidSignatureError
            Raised if the signature does not match or the token claims to be
            signed with a different algorithm.
        MalformedTokenError
            Raised if the token could not be decoded or is missing required
            claims.
        """
        try:
            payload = jwt.decode(
                token,
                self._keys.verification_key,
                algorithms=[self._keys.algorithm],
                options={
                    "verify_aud": False,
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_iss": False,
                    "verify_jti": False,
                    "verify_nbf": False,
                    "verify_sub": False,
                },
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as e:
            raise InvalidSignatureError(str(e)) from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(str(e)) from e

        claims = ClaimSet.from_payload(payload)
        now = now or current_datetime()
        if now >= claims.expires_at:
            expires = claims.expires_at.isoformat()
            raise ExpiredTokenError(f"Token expired at {expires}")
        return claims
