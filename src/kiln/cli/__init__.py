"""Kiln CLI — serve an app, or list the asset mounts it registers.

Entry point registered as ``kiln`` in ``pyproject.toml``::

    [project.scripts]
    kiln = "kiln.cli:main"
"""

import argparse
import sys


def _add_app_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("app", help="Import string (e.g. myapp:app or myapp.web:create_app)")
    parser.add_argument(
        "--env",
        default=None,
        help="Deployment mode exported as KILN_ENV before the app is imported "
        "(e.g. production, which turns on asset caching headers)",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``kiln`` command."""
    parser = argparse.ArgumentParser(
        prog="kiln",
        description="Kiln — compile assets on request behind a small ASGI app.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- kiln run ---------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start dev or production server")
    _add_app_arguments(run_parser)
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--production",
        action="store_true",
        help="Use the multi-worker server even if the app is in debug mode",
    )
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=auto-detect, production only)",
    )

    # -- kiln assets ------------------------------------------------------
    assets_parser = subparsers.add_parser("assets", help="List the app's asset mounts")
    _add_app_arguments(assets_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from kiln.cli._run import run_server

        run_server(args)
    elif args.command == "assets":
        from kiln.cli._assets import list_assets

        list_assets(args)
