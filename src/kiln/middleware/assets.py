"""Compiled asset middleware.

Maps requests under a URL prefix to source files in a directory, runs a
compiler callback on the source file, and serves the result. Requests
for files that don't exist fall through to the next handler.

Two flavours share the same mapping pipeline:

- ``AssetCompiler`` adds ``Last-Modified``, conditional GET (304),
  week-long caching headers and 403 for directory targets.
- ``AlmostStatic`` compiles and serves with the content type only.

Usage::

    def coffee(path: str) -> bytes:
        return subprocess.run(["coffee", "-p", path], capture_output=True).stdout

    app.add_middleware(AssetCompiler(AssetConfig(
        url="/javascripts/",
        source_dir="app/coffeescripts",
        source_extension="coffee",
        content_type="text/javascript",
        compiler=coffee,
    )))
"""

from __future__ import annotations

import logging
import mimetypes
import stat
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TypeAlias

from kiln._internal.invoke import invoke_blocking
from kiln.config import PRODUCTION, current_environment
from kiln.errors import ConfigurationError, Forbidden
from kiln.http.dates import http_date
from kiln.http.request import Request
from kiln.http.response import Response
from kiln.middleware.protocol import AnyResponse, Next

logger = logging.getLogger("kiln.assets")

Compiled: TypeAlias = bytes | str
Compiler: TypeAlias = Callable[[str], Compiled | Awaitable[Compiled]]
MimeLookup: TypeAlias = Callable[[str], str | None]

CACHE_MAX_AGE = 604800  # one week, in seconds
CACHE_CONTROL = f"public,max-age={CACHE_MAX_AGE}"


def guess_mime_type(extension: str) -> str | None:
    """Look up the registered MIME type for a file extension.

    ``guess_mime_type(".png")`` -> ``"image/png"``; unknown -> ``None``.
    """
    if not extension:
        return None
    if not extension.startswith("."):
        extension = "." + extension
    content_type, _ = mimetypes.guess_type("asset" + extension, strict=False)
    return content_type


def has_parent_segment(path: str) -> bool:
    """True if *path* contains a ``..`` segment."""
    return ".." in path.replace("\\", "/").split("/")


@dataclass(frozen=True, slots=True)
class AssetConfig:
    """Configuration for one prefix-to-directory mapping.

    ``source_extension`` replaces the requested file's extension when
    looking up the source (``"eggscript"`` or ``".eggscript"``); when
    ``None`` the requested name is used as-is.

    ``content_type`` is sent verbatim; when ``None`` it is looked up
    from the requested extension via ``mime_lookup``.

    ``cache`` is tri-state: ``None`` caches only in production,
    ``True``/``False`` force caching on or off.
    """

    url: str
    source_dir: str | Path
    compiler: Compiler
    source_extension: str | None = None
    content_type: str | None = None
    cache: bool | None = None
    mime_lookup: MimeLookup = guess_mime_type


@dataclass(frozen=True, slots=True)
class ResolvedRequest:
    """A request that maps to an existing source file."""

    request_path: str  # path after the prefix, e.g. "subdir/app.js"
    source_path: Path  # absolute path of the source file
    extension: str  # requested extension, e.g. ".js"
    last_modified: int  # source mtime, whole POSIX seconds

    @property
    def last_modified_http(self) -> str:
        return http_date(self.last_modified)


class AssetCompiler:
    """Middleware that compiles source files on request.

    For a GET under ``config.url``:

    - ``..`` anywhere in the path, a directory target, or a source path
      that resolves outside ``source_dir`` -> 403
    - no regular source file -> next handler (compiler not called)
    - ``If-Modified-Since`` at or after the source mtime -> 304
    - otherwise -> 200 with the compiler's output

    Caching headers (``Cache-Control``/``Expires``) follow
    ``config.cache``; when it is ``None`` they are sent only if the
    deployment mode is ``"production"``. The mode is taken from
    *environment* or, when omitted, from ``KILN_ENV`` once at
    construction.
    """

    __slots__ = ("_caching", "_mode_pinned", "_prefix", "_source_dir", "_source_suffix", "config")

    # Pipeline switches; AlmostStatic turns these off.
    forbid_directories: bool = True
    conditional: bool = True

    def __init__(self, config: AssetConfig, *, environment: str | None = None) -> None:
        if not config.url or not config.url.startswith("/"):
            msg = f"Asset URL prefix must start with '/', got {config.url!r}"
            raise ConfigurationError(msg)
        if not callable(config.compiler):
            msg = f"Asset compiler must be callable, got {type(config.compiler).__name__}"
            raise ConfigurationError(msg)
        if config.source_extension is not None and not config.source_extension.strip("."):
            msg = "source_extension must not be empty; use None to keep the requested extension"
            raise ConfigurationError(msg)

        self.config = config
        self._source_dir = Path(config.source_dir).resolve()
        self._source_suffix = (
            "." + config.source_extension.lstrip(".") if config.source_extension else None
        )

        # Normalize prefix: leading slash, no trailing slash; "/" becomes "".
        stripped = "/" + config.url.strip("/")
        self._prefix = stripped if stripped != "/" else ""

        self._mode_pinned = environment is not None
        self._caching = self._caching_for(
            environment if environment is not None else current_environment()
        )

        if not self._source_dir.is_dir():
            logger.warning(
                "asset source directory %s does not exist; requests under %s will fall through",
                self._source_dir,
                config.url,
            )

    @property
    def caching(self) -> bool:
        """Whether responses carry ``Cache-Control``/``Expires``."""
        return self._caching

    def use_environment(self, environment: str) -> None:
        """Adopt the app's deployment mode unless one was passed explicitly.

        Called by ``App.add_middleware`` so ``AppConfig.environment``
        decides default caching for mounts built without ``environment=``.
        """
        if not self._mode_pinned:
            self._caching = self._caching_for(environment)

    def _caching_for(self, environment: str) -> bool:
        if self.config.cache is not None:
            return self.config.cache
        return environment == PRODUCTION

    def describe(self) -> str:
        """One-line summary of the mount, e.g. for startup logs.

        ``"/javascripts/ -> /srv/app/coffee/*.coffee (cached)"``
        """
        pattern = f"*{self._source_suffix}" if self._source_suffix else "*"
        state = "cached" if self.caching else "uncached"
        return f"{self._prefix}/ -> {self._source_dir / pattern} ({state})"

    async def __call__(self, request: Request, next: Next) -> AnyResponse:
        """Serve a compiled asset or fall through."""
        if request.method not in ("GET", "HEAD"):
            return await next(request)

        try:
            resolved = self.resolve(request.path)
        except Forbidden as exc:
            logger.debug("403 %s %s: %s", request.method, request.path, exc.detail)
            return Response(body=exc.detail, status=exc.status, content_type="text/plain")

        if resolved is None:
            return await next(request)

        if self.conditional:
            since = request.if_modified_since
            if since is not None and since >= resolved.last_modified:
                logger.debug("304 %s", resolved.source_path)
                return self._with_validators(
                    Response(body=b"", status=304, content_type=None), resolved
                )

        started = time.perf_counter()
        body = await self.compile(resolved)
        logger.debug(
            "compiled %s in %.1fms",
            resolved.source_path,
            (time.perf_counter() - started) * 1000,
        )

        return self._with_validators(
            Response(body=body, content_type=self.content_type_for(resolved)),
            resolved,
        )

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def match(self, path: str) -> str | None:
        """Return the path below the prefix, or ``None`` if *path* is outside it."""
        if not self._prefix:
            return path.lstrip("/")
        if path == self._prefix:
            return ""
        if not path.startswith(self._prefix + "/"):
            return None
        return path[len(self._prefix) + 1 :].lstrip("/")

    def resolve(self, path: str) -> ResolvedRequest | None:
        """Map a request path to its source file.

        Returns ``None`` when the request isn't ours (outside the prefix)
        or the source file doesn't exist. Raises ``Forbidden`` for
        traversal attempts and directory targets.
        """
        if has_parent_segment(path):
            raise Forbidden("Forbidden: parent directory reference")
        if "\x00" in path:
            raise Forbidden("Forbidden: null byte in path")

        relative = self.match(path)
        if relative is None:
            return None

        requested = PurePosixPath(relative)
        # "." and "" normalize to a path with no final name
        is_directory = not requested.name or path.endswith("/")
        if not is_directory and self.forbid_directories:
            is_directory = (self._source_dir / relative).is_dir()
        if is_directory:
            if self.forbid_directories:
                raise Forbidden("Forbidden: directory listing")
            return None

        source_name = (
            requested.with_suffix(self._source_suffix) if self._source_suffix else requested
        )
        source_path = self._source_dir / source_name

        # Symlinks may point anywhere; the final target must stay inside.
        if not source_path.resolve().is_relative_to(self._source_dir):
            raise Forbidden("Forbidden: outside source directory")

        try:
            st = source_path.stat()
        except OSError:
            return None
        if not stat.S_ISREG(st.st_mode):
            return None

        return ResolvedRequest(
            request_path=relative,
            source_path=source_path,
            extension=requested.suffix,
            last_modified=int(st.st_mtime),
        )

    async def compile(self, resolved: ResolvedRequest) -> bytes | str:
        """Run the compiler on the source file.

        Sync compilers run in a worker thread. Whatever the compiler
        raises propagates to the caller.
        """
        result = await invoke_blocking(self.config.compiler, str(resolved.source_path))
        if isinstance(result, bytearray | memoryview):
            return bytes(result)
        if not isinstance(result, bytes | str):
            msg = (
                f"Asset compiler returned {type(result).__name__} for "
                f"{resolved.source_path}; expected bytes or str"
            )
            raise TypeError(msg)
        return result

    def content_type_for(self, resolved: ResolvedRequest) -> str | None:
        if self.config.content_type is not None:
            return self.config.content_type
        return self.config.mime_lookup(resolved.extension)

    def _with_validators(self, response: Response, resolved: ResolvedRequest) -> Response:
        response = response.with_header("Last-Modified", resolved.last_modified_http)
        if self._caching:
            response = response.with_header("Cache-Control", CACHE_CONTROL).with_header(
                "Expires", http_date(time.time() + CACHE_MAX_AGE)
            )
        return response


class AlmostStatic(AssetCompiler):
    """The minimal asset pipeline: compile and serve, nothing else.

    Same prefix matching, source resolution and missing-file fall-through
    as ``AssetCompiler``, and ``..`` is still refused with 403. Directory
    targets fall through instead of returning 403, ``If-Modified-Since``
    is ignored, and no ``Last-Modified`` or caching headers are sent.
    ``config.cache`` has no effect.
    """

    __slots__ = ()

    forbid_directories = False
    conditional = False

    @property
    def caching(self) -> bool:
        return False

    def _with_validators(self, response: Response, resolved: ResolvedRequest) -> Response:
        return response
