"""Routing — exact-path route table.

Routes are registered during setup and compiled into an immutable
lookup when the app freezes. The router is the last stop of the
pipeline: whatever the asset middleware doesn't claim ends up here.
"""

from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from kiln.errors import MethodNotAllowed, NotFound


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition."""

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route


def normalize_path(path: str) -> str:
    """``"users/"`` -> ``"/users"``; the root stays ``"/"``."""
    return "/" + path.strip("/")


class Router:
    """Exact-path router.

    Usage::

        router = Router()
        router.add(Route("/lobster", handler, frozenset({"GET"})))
        router.compile()
        match = router.match("GET", "/lobster")
    """

    __slots__ = ("_compiled", "_table")

    def __init__(self) -> None:
        self._table: dict[str, dict[str, Route]] | MappingProxyType[str, dict[str, Route]] = {}
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        by_method = self._table.setdefault(normalize_path(route.path), {})  # type: ignore[union-attr]
        for method in route.methods:
            by_method[method] = route
        # HEAD is answered by the GET handler; the sender drops the body.
        if "GET" in route.methods:
            by_method.setdefault("HEAD", route)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._table = MappingProxyType(dict(self._table))
        self._compiled = True

    @property
    def routes(self) -> list[Route]:
        """All registered routes, each listed once."""
        seen: dict[int, Route] = {}
        for by_method in self._table.values():
            for route in by_method.values():
                seen.setdefault(id(route), route)
        return list(seen.values())

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request against the table.

        Raises ``NotFound`` if no route has this path.
        Raises ``MethodNotAllowed`` if the path exists but not for *method*.
        """
        by_method = self._table.get(normalize_path(path))
        if not by_method:
            raise NotFound(f"No route matches {method} {path!r}")
        route = by_method.get(method)
        if route is None:
            raise MethodNotAllowed(frozenset(by_method))
        return RouteMatch(route=route)
