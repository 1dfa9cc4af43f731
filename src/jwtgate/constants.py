"""Constants for jwtgate."""

from datetime import timedelta

__all__ = [
    "ASYMMETRIC_ALGORITHMS",
    "CONFIG_PATH",
    "DEFAULT_ALGORITHM",
    "DEFAULT_TIMEOUT",
    "HMAC_ALGORITHMS",
    "LOGIN_ROUTE",
    "NOT_AUTHORIZED",
    "REFRESH_ROUTE",
    "REMOTE_USER",
    "SUPPORTED_ALGORITHMS",
]

CONFIG_PATH = "/etc/jwtgate/jwtgate.yaml"
"""Default configuration path."""

DEFAULT_ALGORITHM = "HS256"
"""JWT algorithm used if none is configured."""

DEFAULT_TIMEOUT = timedelta(hours=1)
"""Lifetime of a newly-minted token if none is configured."""

HMAC_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})
"""Symmetric algorithms, where the configured key is a shared secret."""

ASYMMETRIC_ALGORITHMS = frozenset(
    {
        "ES256",
        "ES384",
        "ES512",
        "PS256",
        "PS384",
        "PS512",
        "RS256",
        "RS384",
        "RS512",
    }
)
"""Asymmetric algorithms, where the configured key is a PEM private key."""

SUPPORTED_ALGORITHMS = HMAC_ALGORITHMS | ASYMMETRIC_ALGORITHMS
"""All algorithms that may be configured."""

LOGIN_ROUTE = "/login"
"""Route, relative to the configured prefix, of the issuance handler."""

NOT_AUTHORIZED = "Not Authorized"
"""Body message of every unauthorized response."""

REFRESH_ROUTE = "/refresh_token"
"""Route, relative to the configured prefix, of the refresh handler."""

REMOTE_USER = "REMOTE_USER"
"""Request scope key under which the authenticated identity is stored."""
