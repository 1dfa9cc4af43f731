"""Build test configuration for jwtgate."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jwtgate.config import Config

__all__ = ["TEST_KEY", "TEST_REALM", "build_config", "config_path"]

TEST_KEY = "Dh6uJ3cD6H7XJpvdgnc6AEvv3WPk1khdRt0P5TbbUBQ"
"""HMAC secret used by default in tests."""

TEST_REALM = "testing"
"""Realm used by default in tests."""


def build_config(**settings: Any) -> Config:
    """Build a configuration with test defaults.

    Parameters
    ----------
    **settings
        Settings that override the defaults.

    Returns
    -------
    Config
        The resulting configuration.
    """
    values: dict[str, Any] = {
        "realm": TEST_REALM,
        "key": TEST_KEY,
        "profile": "production",
        "log_level": "DEBUG",
    }
    values.update(settings)
    return Config(**values)


def config_path(filename: str) -> Path:
    """Return the path to a test configuration file.

    Parameters
    ----------
    filename
        Base name of the configuration file, without ``.yaml``.

    Returns
    -------
    pathlib.Path
        Path to that file.
    """
    data_path = Path(__file__).parent.parent / "data"
    return data_path / "config" / f"{filename}.yaml"
