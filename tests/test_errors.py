"""Tests for kiln.errors."""

import pytest

from kiln.errors import (
    ConfigurationError,
    Forbidden,
    HTTPError,
    KilnError,
    MethodNotAllowed,
    NotFound,
)


class TestHierarchy:
    @pytest.mark.parametrize("cls", [ConfigurationError, HTTPError, Forbidden, NotFound])
    def test_subclass_of_kiln_error(self, cls: type) -> None:
        assert issubclass(cls, KilnError)


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=418, detail="teapot")) == "418: teapot"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_forbidden(self) -> None:
        exc = Forbidden()
        assert exc.status == 403
        assert exc.detail == "Forbidden"

    def test_not_found(self) -> None:
        assert NotFound().status == 404

    def test_method_not_allowed_allow_header(self) -> None:
        exc = MethodNotAllowed(frozenset({"POST", "GET"}))
        assert exc.status == 405
        assert exc.headers == (("Allow", "GET, POST"),)
        assert "GET, POST" in exc.detail

    def test_raisable(self) -> None:
        with pytest.raises(HTTPError) as exc_info:
            raise Forbidden("Forbidden: directory listing")
        assert exc_info.value.detail == "Forbidden: directory listing"
