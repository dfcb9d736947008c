"""Production server.

Multi-worker pounce server. Asset middleware built without an explicit
``environment`` reads ``KILN_ENV`` when it is constructed, so export
``KILN_ENV=production`` before the app module is imported to get
week-long caching headers by default.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kiln.server.dev import log_asset_mounts

if TYPE_CHECKING:
    from kiln.app import App

logger = logging.getLogger("kiln.server")


def run_production_server(
    app: App,
    host: str = "0.0.0.0",
    port: int = 8000,
    workers: int = 0,  # 0 = auto-detect from CPU count
    *,
    log_format: str = "json",
    log_level: str = "info",
    keep_alive_timeout: float = 5.0,
    request_timeout: float = 30.0,
) -> None:
    """Run a kiln app on a production pounce server.

    Example:
        >>> from myapp import app
        >>> from kiln.server.production import run_production_server
        >>> run_production_server(app, workers=4)
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    log_asset_mounts(app)
    uncached = [mount for mount in app.assets if not mount.caching]
    if uncached:
        logger.warning(
            "%d asset mount(s) send no caching headers (app environment=%r); "
            "set KILN_ENV=production or cache=True to let browsers cache compiled assets",
            len(uncached),
            app.config.environment,
        )

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        log_format=log_format,
        log_level=log_level,
        keep_alive_timeout=keep_alive_timeout,
        request_timeout=request_timeout,
    )
    Server(config, app).run()
