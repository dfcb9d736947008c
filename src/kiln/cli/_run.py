"""``kiln run`` — development or production server command."""

import argparse

from kiln.cli._resolve import load_app


def run_server(args: argparse.Namespace) -> None:
    """Load ``args.app`` and start the matching server.

    Debug apps get the reloading dev server unless ``--production`` is
    passed; everything else runs on the production server. ``--host``
    and ``--port`` override the app config.
    """
    app = load_app(args.app, args.env)

    host = args.host or app.config.host
    port = args.port or app.config.port

    if args.production or not app.config.debug:
        from kiln.server.production import run_production_server

        run_production_server(
            app,
            host=host,
            port=port,
            workers=args.workers if args.workers is not None else app.config.workers,
            log_format=app.config.log_format,
            log_level=app.config.log_level,
            keep_alive_timeout=app.config.keep_alive_timeout,
            request_timeout=app.config.request_timeout,
        )
        return

    from kiln.server.dev import run_dev_server

    run_dev_server(
        app,
        host,
        port,
        reload=True,
        reload_include=app.config.reload_include,
        reload_dirs=app.config.reload_dirs,
        app_path=args.app,
    )
