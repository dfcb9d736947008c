"""Development server.

One pounce worker with auto-reload. Asset sources don't need to be
watched: every request recompiles, so an edited ``.coffee`` file is
picked up on the next refresh. Reload covers the app's Python code.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kiln.app import App

logger = logging.getLogger("kiln.server")


def log_asset_mounts(app: App) -> None:
    """Log one line per asset mount so the URL-to-source mapping is visible."""
    mounts = app.assets
    if not mounts:
        logger.info("no asset mounts registered")
    for mount in mounts:
        logger.info("assets %s", mount.describe())


def run_dev_server(
    app: App,
    host: str,
    port: int,
    *,
    reload: bool = True,
    reload_include: tuple[str, ...] = (),
    reload_dirs: tuple[str, ...] = (),
    app_path: str | None = None,
) -> None:
    """Serve *app* on a single reloading pounce worker.

    Args:
        app: The kiln App.
        host: Bind host address.
        port: Bind port number.
        reload: Restart when watched files change.
        reload_include: Extra extensions that trigger a restart, for
            files the app reads at import time (e.g. ``(".toml",)``).
        reload_dirs: Extra directories to watch alongside cwd.
        app_path: ``"module:attribute"`` import string. When given,
            pounce reimports the app after each restart instead of
            reusing the live object.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    log_asset_mounts(app)

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        reload_include=reload_include,
        reload_dirs=reload_dirs,
    )
    Server(config, app, app_path=app_path).run()
