"""Tests for kiln.server.dev and kiln.server.production."""

import sys
import types
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from kiln.app import App
from kiln.config import AppConfig
from kiln.middleware.assets import AssetCompiler, AssetConfig
from kiln.server.dev import log_asset_mounts, run_dev_server
from kiln.server.production import run_production_server


@pytest.fixture
def fake_pounce(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Stand-in pounce modules recording ServerConfig/Server calls."""
    server_cls = MagicMock(name="Server")
    config_cls = MagicMock(name="ServerConfig")
    config_mod = types.ModuleType("pounce.config")
    config_mod.ServerConfig = config_cls  # type: ignore[attr-defined]
    server_mod = types.ModuleType("pounce.server")
    server_mod.Server = server_cls  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "pounce.config", config_mod)
    monkeypatch.setitem(sys.modules, "pounce.server", server_mod)
    server_cls.config_cls = config_cls
    return server_cls


def _app(source_dir: Path, *, cache: bool | None = None, environment: str = "development") -> App:
    app = App(config=AppConfig(environment=environment))
    config = AssetConfig(
        url="/js/", source_dir=source_dir, source_extension="coffee", compiler=str, cache=cache
    )
    app.add_middleware(AssetCompiler(config, environment=environment))
    return app


class TestLogAssetMounts:
    def test_one_line_per_mount(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("INFO", logger="kiln.server"):
            log_asset_mounts(_app(tmp_path))
        assert f"/js/ -> {tmp_path.resolve()}/*.coffee (uncached)" in caplog.text

    def test_no_mounts(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("INFO", logger="kiln.server"):
            log_asset_mounts(App())
        assert "no asset mounts" in caplog.text


class TestDevServer:
    def test_single_worker_with_reload(self, fake_pounce: MagicMock, tmp_path: Path) -> None:
        app = _app(tmp_path)
        run_dev_server(app, "127.0.0.1", 8000, app_path="myapp:app")
        kwargs = fake_pounce.config_cls.call_args.kwargs
        assert kwargs["workers"] == 1
        assert kwargs["reload"] is True
        fake_pounce.assert_called_once()
        assert fake_pounce.call_args.args[1] is app
        assert fake_pounce.call_args.kwargs["app_path"] == "myapp:app"
        fake_pounce.return_value.run.assert_called_once()


class TestProductionServer:
    def test_warns_about_uncached_mounts(
        self, fake_pounce: MagicMock, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level("WARNING", logger="kiln.server"):
            run_production_server(_app(tmp_path), workers=2)
        assert "send no caching headers" in caplog.text
        assert fake_pounce.config_cls.call_args.kwargs["workers"] == 2

    def test_quiet_when_cached(
        self, fake_pounce: MagicMock, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        app = _app(tmp_path, environment="production")
        with caplog.at_level("WARNING", logger="kiln.server"):
            run_production_server(app)
        assert "caching headers" not in caplog.text
        fake_pounce.return_value.run.assert_called_once()
