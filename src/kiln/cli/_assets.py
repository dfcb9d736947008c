"""``kiln assets`` — print each asset mount of an app."""

import argparse

from kiln.cli._resolve import load_app


def list_assets(args: argparse.Namespace) -> None:
    app = load_app(args.app, args.env)
    mounts = app.assets
    if not mounts:
        print("no asset mounts")
        return
    for mount in mounts:
        print(f"{type(mount).__name__:<14} {mount.describe()}")
