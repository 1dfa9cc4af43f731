"""Signing key handling."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Self

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    load_pem_private_key,
)

from .constants import HMAC_ALGORITHMS, SUPPORTED_ALGORITHMS
from .exceptions import InvalidConfigurationError

_CURVES: dict[str, ec.EllipticCurve] = {
    "ES256": ec.SECP256R1(),
    "ES384": ec.SECP384R1(),
    "ES512": ec.SECP521R1(),
}
"""Elliptic curve used by each ECDSA algorithm."""

SigningKey = bytes | rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey
"""Key types used for signing."""

VerificationKey = bytes | rsa.RSAPublicKey | ec.EllipticCurvePublicKey
"""Key types used for verification."""

__all__ = ["SigningKeys", "generate_key"]


@dataclass(frozen=True, slots=True)
class SigningKeys:
    """The keys used to sign and verify tokens for one algorithm.

    Notes
    -----
    Created by calling :py:meth:`~SigningKeys.from_secret` rather than the
    constructor.
    """

    algorithm: str
    """JWT algorithm these keys are for."""

    signing_key: SigningKey
    """Key used to sign new tokens."""

    verification_key: VerificationKey
    """Key used to verify token signatures."""

    @classmethod
    def from_secret(cls, algorithm: str, secret: bytes) -> Self:
        """Load the keys for an algorithm from the configured key bytes.

        Parameters
        ----------
        algorithm
            The JWT algorithm.
        secret
            For HMAC algorithms, the shared secret. Otherwise, a PEM-encoded
            private key (which must not be password-protected) of the type
            matching the algorithm.

        Returns
        -------
        SigningKeys
            The corresponding keys.

        Raises
        ------
        InvalidConfigurationError
            Raised if the algorithm is not supported or the key cannot be
            used with it.
        """
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise InvalidConfigurationError(f"Unknown algorithm {algorithm}")
        if not secret:
            raise InvalidConfigurationError("Signing key is empty")
        if algorithm in HMAC_ALGORITHMS:
            return cls(
                algorithm=algorithm,
                signing_key=secret,
                verification_key=secret,
            )

        try:
            private_key = load_pem_private_key(secret, password=None)
        except (TypeError, ValueError, UnsupportedAlgorithm) as e:
            msg = f"Key for {algorithm} is not a PEM private key: {e!s}"
            raise InvalidConfigurationError(msg) from e
        if algorithm.startswith("ES"):
            if not isinstance(private_key, ec.EllipticCurvePrivateKey):
                msg = f"Key for {algorithm} is not an ECDSA private key"
                raise InvalidConfigurationError(msg)
            if private_key.curve.name != _CURVES[algorithm].name:
                curve = private_key.curve.name
                msg = f"Key curve {curve} is wrong for {algorithm}"
                raise InvalidConfigurationError(msg)
            return cls(
                algorithm=algorithm,
                signing_key=private_key,
                verification_key=private_key.public_key(),
            )
        if not isinstance(private_key, rsa.RSAPrivateKey):
            msg = f"Key for {algorithm} is not an RSA private key"
            raise InvalidConfigurationError(msg)
        return cls(
            algorithm=algorithm,
            signing_key=private_key,
            verification_key=private_key.public_key(),
        )


def generate_key(algorithm: str) -> bytes:
    """Generate a new key suitable for the ``key`` setting.

    Parameters
    ----------
    algorithm
        The JWT algorithm the key will be used with.

    Returns
    -------
    bytes
        A random URL-safe secret for HMAC algorithms, otherwise a PEM-encoded
        PKCS#8 private key with no encryption.

    Raises
    ------
    InvalidConfigurationError
        Raised if the algorithm is not supported.
    """
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise InvalidConfigurationError(f"Unknown algorithm {algorithm}")
    if algorithm in HMAC_ALGORITHMS:
        return secrets.token_urlsafe(64).encode()
    private_key: rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey
    if algorithm.startswith("ES"):
        private_key = ec.generate_private_key(_CURVES[algorithm])
    else:
        private_key = rsa.generate_private_key(
            public_exponent=65537, key_size=2048
        )
    return private_key.private_bytes(
        Encoding.PEM, PrivateFormat.PKCS8, NoEncryption()
    )
