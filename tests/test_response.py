"""Tests for kiln.http.response."""

import pytest

from kiln.http.response import Response


class TestResponse:
    def test_defaults(self) -> None:
        response = Response("hi")
        assert response.status == 200
        assert response.content_type == "text/html; charset=utf-8"
        assert response.headers == ()

    def test_with_status_returns_new_instance(self) -> None:
        original = Response("hi")
        changed = original.with_status(404)
        assert changed.status == 404
        assert original.status == 200

    def test_chained_headers(self) -> None:
        response = (
            Response("x")
            .with_header("Last-Modified", "Tue, 14 Nov 2023 22:13:20 GMT")
            .with_headers({"Cache-Control": "public,max-age=604800"})
        )
        assert response.headers == (
            ("Last-Modified", "Tue, 14 Nov 2023 22:13:20 GMT"),
            ("Cache-Control", "public,max-age=604800"),
        )

    def test_header_lookup_is_case_insensitive(self) -> None:
        response = Response("x").with_header("Cache-Control", "no-store")
        assert response.header("cache-control") == "no-store"
        assert response.header("expires") is None
        assert response.header("expires", "never") == "never"
        assert response.has_header("CACHE-CONTROL")

    def test_content_type_via_header(self) -> None:
        response = Response("x").with_content_type("text/css")
        assert response.header("Content-Type") == "text/css"

    def test_no_content_type(self) -> None:
        response = Response(b"x", content_type=None)
        assert response.header("content-type") is None
        assert not response.has_header("content-type")

    def test_body_conversions(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()
        assert Response(b"bytes").text == "bytes"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Response("x").status = 500  # type: ignore[misc]
