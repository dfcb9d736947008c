"""Middleware shape and the ``Next`` continuation.

Middleware wraps the rest of the pipeline. It sees the request first and
either answers it (an asset compiler serving ``/javascripts/app.js``) or
hands it on with ``await next(request)`` and gets the downstream
response back::

    async def server_timing(request: Request, next: Next) -> Response:
        started = time.perf_counter()
        response = await next(request)
        elapsed = (time.perf_counter() - started) * 1000
        return response.with_header("Server-Timing", f"app;dur={elapsed:.1f}")

Plain functions and objects with an async ``__call__`` both qualify.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from kiln.http.request import Request
from kiln.http.response import Response

# What the pipeline hands back up the chain
AnyResponse: TypeAlias = Response

# Everything downstream of the current middleware, router included
Next: TypeAlias = Callable[[Request], Awaitable[AnyResponse]]


class Middleware(Protocol):
    """Structural type for ``App.add_middleware``."""

    async def __call__(self, request: Request, next: Next) -> AnyResponse: ...
