"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    AssetCompiler -- Compile source files on request, with conditional GET and caching
    AlmostStatic -- Compile source files on request, nothing else
"""

from kiln.middleware.assets import (
    AlmostStatic,
    AssetCompiler,
    AssetConfig,
    ResolvedRequest,
    guess_mime_type,
)
from kiln.middleware.protocol import AnyResponse, Middleware, Next

__all__ = [
    "AlmostStatic",
    "AnyResponse",
    "AssetCompiler",
    "AssetConfig",
    "Middleware",
    "Next",
    "ResolvedRequest",
    "guess_mime_type",
]
