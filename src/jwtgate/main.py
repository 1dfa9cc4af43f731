"""Install jwtgate into a FastAPI application."""

from __future__ import annotations

import os
from pathlib import Path

import structlog
from fastapi import FastAPI

from .auth import unauthorized_error_handler
from .callbacks import Authenticator, Authorizer
from .config import Config
from .constants import CONFIG_PATH
from .exceptions import AuthenticationError, InvalidConfigurationError
from .factory import ProcessContext
from .handlers import login, refresh

__all__ = ["create_app", "include_refresh_routes", "setup_auth"]


def setup_auth(
    app: FastAPI,
    config: Config,
    *,
    authenticator: Authenticator,
    authorizer: Authorizer | None = None,
) -> ProcessContext:
    """Install the authentication layer into an application.

    Stores the shared process context on the application state, installs
    the unauthorized response handler, and adds the login route and, if
    refresh is enabled, the refresh route. Protected routes then depend on
    `jwtgate.dependencies.auth.authenticated_user` or on their own
    `jwtgate.dependencies.auth.Authenticate` instance.

    Parameters
    ----------
    app
        Application to install into.
    config
        jwtgate configuration.
    authenticator
        Callback that checks login credentials.
    authorizer
        Callback that authorizes gated requests. Defaults to allowing every
        request with a valid token.

    Returns
    -------
    ProcessContext
        The shared process context, also available as
        ``app.state.jwtgate``.

    Raises
    ------
    InvalidConfigurationError
        Raised if the callbacks or signing key are not usable.
    """
    process = ProcessContext.from_config(config, authenticator, authorizer)
    app.state.jwtgate = process
    app.add_exception_handler(AuthenticationError, unauthorized_error_handler)
    app.include_router(login.router, prefix=config.path_prefix)
    if config.refresh_enabled:
        include_refresh_routes(app, config)

    logger = structlog.get_logger(config.name)
    logger.debug(
        "Installed authentication",
        algorithm=config.signing_algorithm,
        refresh=config.refresh_enabled,
    )
    return process


def include_refresh_routes(app: FastAPI, config: Config) -> None:
    """Add the refresh route to an application.

    `setup_auth` already does this when refresh is enabled.

    Raises
    ------
    InvalidConfigurationError
        Raised if refresh is not enabled in the configuration.
    """
    if not config.refresh_enabled:
        msg = "Refresh route requested but max_refresh is not set"
        raise InvalidConfigurationError(msg)
    app.include_router(refresh.router, prefix=config.path_prefix)


def create_app(
    config: Config | None = None,
    *,
    authenticator: Authenticator,
    authorizer: Authorizer | None = None,
) -> FastAPI:
    """Create a standalone FastAPI application with jwtgate installed.

    This is in a function rather than using a global variable because the
    credential callbacks must be supplied by the caller.

    Parameters
    ----------
    config
        jwtgate configuration. If not given, it is loaded from the file named
        by the ``JWTGATE_CONFIG_PATH`` environment variable, or from
        ``/etc/jwtgate/jwtgate.yaml`` if that is not set.
    authenticator
        Callback that checks login credentials.
    authorizer
        Callback that authorizes gated requests.

    Returns
    -------
    fastapi.FastAPI
        The configured application.

    Raises
    ------
    InvalidConfigurationError
        Raised if the callbacks or signing key are not usable.
    pydantic.ValidationError
        Raised if the configuration file is invalid.
    """
    if config is None:
        path = os.getenv("JWTGATE_CONFIG_PATH", CONFIG_PATH)
        config = Config.from_file(Path(path))
    config.configure_logging()

    app = FastAPI(
        title="jwtgate",
        description="Bearer token authentication",
        openapi_url=f"{config.path_prefix}/openapi.json",
        docs_url=f"{config.path_prefix}/docs",
        redoc_url=f"{config.path_prefix}/redoc",
    )
    setup_auth(
        app, config, authenticator=authenticator, authorizer=authorizer
    )
    return app
