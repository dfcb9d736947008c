"""In-process test client for kiln applications.

Drives the app through its ASGI entry point, with no sockets or server,
and hands back the same ``Response`` type the app builds, so asset
responses can be checked header by header.
"""

from __future__ import annotations

from typing import Any

from kiln.app import App
from kiln.http.dates import http_date
from kiln.http.response import Response


class _Recorder:
    """Collects the ``http.response.*`` messages of one request."""

    __slots__ = ("body", "headers", "status")

    def __init__(self) -> None:
        self.status = 0
        self.headers: list[tuple[bytes, bytes]] = []
        self.body = bytearray()

    async def __call__(self, message: dict[str, Any]) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = list(message.get("headers", ()))
        elif message["type"] == "http.response.body":
            self.body += message.get("body", b"")

    def response(self) -> Response:
        """Rebuild a ``Response``; ``content_type`` is ``None`` if none was sent."""
        content_type: str | None = None
        headers: list[tuple[str, str]] = []
        for raw_name, raw_value in self.headers:
            name, value = raw_name.decode("latin-1"), raw_value.decode("latin-1")
            if name == "content-type":
                content_type = value
            else:
                headers.append((name, value))
        return Response(
            body=bytes(self.body),
            status=self.status,
            content_type=content_type,
            headers=tuple(headers),
        )


def _scope(method: str, target: str, headers: dict[str, str]) -> dict[str, Any]:
    path, _, query = target.partition("?")
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method.upper(),
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query.encode("latin-1"),
        "root_path": "",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in headers.items()
        ],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 0),
    }


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for kiln applications.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/javascripts/app.js")
            assert response.header("Last-Modified") is not None

            again = await client.get(
                "/javascripts/app.js", if_modified_since=source_mtime
            )
            assert again.status == 304
    """

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> TestClient:
        await self.app.startup()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.app.shutdown()

    async def get(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        if_modified_since: float | None = None,
    ) -> Response:
        """Send a GET; *if_modified_since* is a POSIX timestamp."""
        return await self.request(
            "GET", path, headers=headers, if_modified_since=if_modified_since
        )

    async def head(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("HEAD", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes = b"",
    ) -> Response:
        return await self.request("POST", path, headers=headers, body=body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes = b"",
        if_modified_since: float | None = None,
    ) -> Response:
        """Send one request through the app and return its response.

        ``Content-Length`` and every other header except ``Content-Type``
        land in ``response.headers``.
        """
        request_headers = dict(headers or {})
        if if_modified_since is not None:
            request_headers["If-Modified-Since"] = http_date(if_modified_since)

        pending = [{"type": "http.request", "body": body, "more_body": False}]

        async def receive() -> dict[str, Any]:
            if pending:
                return pending.pop()
            return {"type": "http.disconnect"}

        recorder = _Recorder()
        await self.app(_scope(method, path, request_headers), receive, recorder)
        return recorder.response()
