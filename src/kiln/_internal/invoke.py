"""Invoke helpers — call sync or async callables uniformly.

Route handlers, lifecycle hooks and asset compilers can be ``def`` or
``async def``. Any code that calls user-provided code goes through here
so the sync/async check lives in exactly one place.
"""

import inspect
from collections.abc import Callable
from typing import Any

from anyio import to_thread


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


async def invoke_blocking(func: Callable[..., Any], *args: Any) -> Any:
    """Call *func* off the event loop unless it is a coroutine function.

    Sync callables run in anyio's worker thread pool, so blocking work
    (reading and transforming files) doesn't stall other requests.
    """
    if inspect.iscoroutinefunction(func):
        return await func(*args)
    result = await to_thread.run_sync(func, *args)
    if inspect.isawaitable(result):
        result = await result
    return result
