"""Kiln exception hierarchy.

``KilnError`` is the root. Setup mistakes raise ``ConfigurationError``
immediately; request-time failures that have an HTTP status raise an
``HTTPError`` subclass, which the ASGI handler turns into a response.
"""

from dataclasses import dataclass


class KilnError(Exception):
    """Base for all kiln-specific errors."""


class ConfigurationError(KilnError):
    """Invalid setup: a bad ``AssetConfig``, a handler returning ``None``.

    Raised from middleware constructors and from response negotiation,
    never swallowed.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(KilnError):
    """Request-time error carrying its HTTP status.

    ``headers`` are copied onto the default error response, so a 405
    keeps its ``Allow`` header even without a registered handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        return f"{self.status}: {self.detail}" if self.detail else str(self.status)


class Forbidden(HTTPError):  # noqa: N818
    """403: parent-directory segments, directory targets, symlink escapes."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status=403, detail=detail)


class NotFound(HTTPError):  # noqa: N818
    """404: nothing answered the path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: the path is routed, just not for this method."""

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow = ", ".join(sorted(allowed))
        super().__init__(
            status=405,
            detail=detail or f"Method not allowed. Allowed methods: {allow}",
            headers=(("Allow", allow),),
        )
