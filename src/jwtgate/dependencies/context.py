"""Request context dependency for FastAPI.

This dependency gathers the configuration, the shared process context, and
the request logger into a single object for the convenience of writing
request handlers. The logger can be rebound with additional context during
processing, including from other dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Depends, Request
from safir.dependencies.logger import logger_dependency
from structlog.stdlib import BoundLogger

from ..config import Config
from ..factory import ProcessContext

__all__ = [
    "ContextDependency",
    "RequestContext",
    "context_dependency",
    "get_process_context",
]


@dataclass(slots=True)
class RequestContext:
    """Holds the incoming request and its surrounding context."""

    request: Request
    """The incoming request."""

    config: Config
    """jwtgate's configuration."""

    logger: BoundLogger
    """The request logger, rebound with discovered context."""

    process: ProcessContext
    """The shared per-process context."""

    def rebind_logger(self, **values: Any) -> None:
        """Add the given values to the logging context.

        Parameters
        ----------
        **values
            Additional values that should be added to the logging context.
        """
        self.logger = self.logger.bind(**values)


class ContextDependency:
    """Provide a per-request context as a FastAPI dependency.

    The shared portion of the context is read from the application state,
    where `jwtgate.main.setup_auth` stores it, so several applications with
    different configurations may coexist in one process.
    """

    async def __call__(
        self,
        *,
        request: Request,
        logger: Annotated[BoundLogger, Depends(logger_dependency)],
    ) -> RequestContext:
        """Create a per-request context and return it."""
        process = get_process_context(request)
        return RequestContext(
            request=request,
            config=process.config,
            logger=logger,
            process=process,
        )


def get_process_context(request: Request) -> ProcessContext:
    """Return the process context installed on the application.

    Raises
    ------
    RuntimeError
        Raised if `jwtgate.main.setup_auth` was not called on the
        application.
    """
    process = getattr(request.app.state, "jwtgate", None)
    if not isinstance(process, ProcessContext):
        raise RuntimeError("jwtgate not installed on this application")
    return process


context_dependency = ContextDependency()
"""The dependency that will return the per-request context."""
