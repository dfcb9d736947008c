"""Kiln — compile assets on request.

Middleware that maps a URL prefix to a directory of source files, runs a
compiler on the matching source, and serves the result with proper HTTP
caching semantics. Ships with a small ASGI app to mount it on.

Basic usage::

    from kiln import App, AssetCompiler, AssetConfig

    app = App()
    app.add_middleware(AssetCompiler(AssetConfig(
        url="/stylesheets/",
        source_dir="app/sass",
        source_extension="scss",
        content_type="text/css",
        compiler=compile_sass,
    )))

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "AlmostStatic",
    "AnyResponse",
    "App",
    "AppConfig",
    "AssetCompiler",
    "AssetConfig",
    "ConfigurationError",
    "Forbidden",
    "HTTPError",
    "KilnError",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "ResolvedRequest",
    "Response",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import kiln`` fast while providing a clean top-level API.
    """
    if name == "App":
        from kiln.app import App

        return App

    if name == "AppConfig":
        from kiln.config import AppConfig

        return AppConfig

    if name == "Request":
        from kiln.http.request import Request

        return Request

    if name == "Response":
        from kiln.http.response import Response

        return Response

    if name in ("AlmostStatic", "AssetCompiler", "AssetConfig", "ResolvedRequest"):
        from kiln.middleware import assets as _assets

        return getattr(_assets, name)

    if name in ("AnyResponse", "Middleware", "Next"):
        from kiln.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in (
        "ConfigurationError",
        "Forbidden",
        "HTTPError",
        "KilnError",
        "MethodNotAllowed",
        "NotFound",
    ):
        from kiln import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
