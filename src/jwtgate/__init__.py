"""Bearer token authentication for FastAPI applications."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .config import Config
from .dependencies.auth import Authenticate, authenticated_user
from .main import create_app, setup_auth

__all__ = [
    "Authenticate",
    "Config",
    "__version__",
    "authenticated_user",
    "create_app",
    "setup_auth",
]

__version__: str
"""The version string of jwtgate (PEP 440 / SemVer compatible)."""

try:
    __version__ = version(__name__)
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0"
