"""Configuration for jwtgate.

The configuration holds only data: the realm, signing algorithm and key, and
token lifetimes. The credential and authorization callbacks are code and are
supplied separately when the application is wired together (see
`jwtgate.factory.ProcessContext`).

Settings may be passed to the constructor, loaded from a YAML file with
`Config.from_file`, or set with environment variables prefixed with
``JWTGATE_`` (``JWTGATE_KEY``, for example, which is the recommended way to
inject the signing key).
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Self

import jwt
import yaml
from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from safir.logging import LogLevel, Profile, configure_logging
from safir.pydantic import HumanTimedelta

from .constants import (
    DEFAULT_ALGORITHM,
    DEFAULT_TIMEOUT,
    SUPPORTED_ALGORITHMS,
)
from .exceptions import InvalidConfigurationError
from .keypair import SigningKeys

__all__ = ["Config"]


class Config(BaseSettings):
    """Configuration for jwtgate.

    The object is frozen once constructed and is shared, read-only, by every
    request.
    """

    model_config = SettingsConfigDict(
        env_prefix="JWTGATE_", extra="forbid", frozen=True
    )

    realm: str = Field(
        ...,
        title="Realm",
        description="Realm name shown to the user in challenge responses",
        min_length=1,
    )

    signing_algorithm: str = Field(
        DEFAULT_ALGORITHM,
        title="Signing algorithm",
        description="JWT algorithm used to sign and verify tokens",
    )

    key: SecretStr = Field(
        ...,
        title="Signing key",
        description=(
            "Shared secret for HMAC algorithms, or a PEM-encoded private key"
            " for RSA and ECDSA algorithms"
        ),
    )

    timeout: HumanTimedelta = Field(
        DEFAULT_TIMEOUT,
        title="Token lifetime",
        description="How long a newly-minted token is valid",
    )

    max_refresh: HumanTimedelta = Field(
        timedelta(0),
        title="Maximum refresh window",
        description=(
            "How long after the original login a still-valid token may be"
            " refreshed. Zero disables refresh. A token chain can therefore"
            " stay valid for at most this plus the token lifetime."
        ),
    )

    need_prompt: bool = Field(
        False,
        title="Prompt for authentication",
        description=(
            "If set, unauthorized responses are 401 errors with a"
            " WWW-Authenticate challenge. Otherwise they use"
            " silent_status_code with only an error body."
        ),
    )

    silent_status_code: int = Field(
        200,
        title="Silent unauthorized status",
        description="HTTP status of unauthorized responses without a prompt",
        ge=200,
        le=599,
    )

    path_prefix: str = Field(
        "",
        title="Route prefix",
        description="Prefix for the login and refresh routes",
    )

    name: str = Field(
        "jwtgate",
        title="Logger name",
        description="Name of the root logger for the application",
    )

    profile: Profile = Field(
        Profile.production,
        title="Logging profile",
        description="production for JSON logs, development for console logs",
    )

    log_level: LogLevel = Field(
        LogLevel.INFO,
        title="Log level",
        description="Log level of the application's logger",
    )

    @field_validator("key")
    @classmethod
    def _validate_key(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("signing key must not be empty")
        return v

    @field_validator("path_prefix")
    @classmethod
    def _validate_path_prefix(cls, v: str) -> str:
        if v and not v.startswith("/"):
            raise ValueError("must be empty or start with /")
        return v.rstrip("/")

    @field_validator("signing_algorithm")
    @classmethod
    def _validate_signing_algorithm(cls, v: str) -> str:
        if v not in SUPPORTED_ALGORITHMS:
            supported = ", ".join(sorted(SUPPORTED_ALGORITHMS))
            raise ValueError(f"unsupported algorithm {v} (use {supported})")
        return v

    @field_validator("timeout")
    @classmethod
    def _validate_timeout(cls, v: timedelta) -> timedelta:
        if v <= timedelta(0):
            raise ValueError("token lifetime must be positive")
        return v

    @field_validator("max_refresh")
    @classmethod
    def _validate_max_refresh(cls, v: timedelta) -> timedelta:
        if v < timedelta(0):
            raise ValueError("refresh window must not be negative")
        return v

    @model_validator(mode="after")
    def _validate_key_for_algorithm(self) -> Self:
        """Ensure the key can sign tokens with the configured algorithm."""
        try:
            keys = self.signing_keys()
            jwt.encode({}, keys.signing_key, algorithm=keys.algorithm)
        except InvalidConfigurationError as e:
            raise ValueError(str(e)) from e
        except (
            NotImplementedError,
            TypeError,
            ValueError,
            jwt.PyJWTError,
        ) as e:
            msg = f"key cannot sign with {self.signing_algorithm}: {e!s}"
            raise ValueError(msg) from e
        return self

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Construct a Config object from a configuration file.

        Parameters
        ----------
        path
            Path to the configuration file in YAML.

        Returns
        -------
        Config
            The corresponding `Config` object.

        Notes
        -----
        Settings in the file take precedence over environment variables, so
        secrets such as the signing key should be omitted from the file if
        they are to be injected via the environment.
        """
        with path.open("r") as f:
            return cls(**(yaml.safe_load(f) or {}))

    @property
    def refresh_enabled(self) -> bool:
        """Whether tokens may be refreshed."""
        return self.max_refresh > timedelta(0)

    def configure_logging(self) -> None:
        """Configure logging based on the configuration."""
        configure_logging(
            profile=self.profile,
            log_level=self.log_level,
            name=self.name,
            add_timestamp=True,
        )

    def signing_keys(self) -> SigningKeys:
        """Load the signing and verification keys.

        Returns
        -------
        SigningKeys
            Keys ready for use by the token codec.

        Raises
        ------
        InvalidConfigurationError
            Raised if the key is not usable with the configured algorithm.
        """
        secret = self.key.get_secret_value().encode()
        return SigningKeys.from_secret(self.signing_algorithm, secret)
