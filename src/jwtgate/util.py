"""General utility functions."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from starlette.concurrency import run_in_threadpool

__all__ = ["is_async_callable", "run_callback"]


def is_async_callable(obj: Any) -> bool:
    """Whether calling an object returns a coroutine.

    Handles both coroutine functions and objects whose ``__call__`` method is
    a coroutine function.
    """
    if inspect.iscoroutinefunction(obj):
        return True
    return inspect.iscoroutinefunction(getattr(obj, "__call__", None))


async def run_callback(callback: Callable[..., Any], *args: Any) -> Any:
    """Run a sync or async callback without blocking the event loop.

    Parameters
    ----------
    callback
        The callback. Coroutine functions are awaited. Anything else is run
        in the Starlette thread pool.
    *args
        Arguments to the callback.

    Returns
    -------
    Any
        Whatever the callback returns.
    """
    if is_async_callable(callback):
        return await callback(*args)
    result = await run_in_threadpool(callback, *args)
    if inspect.isawaitable(result):
        result = await result
    return result
