"""Locate the App a CLI command operates on."""

import importlib
import os
import sys
from typing import Any

from kiln.app import App
from kiln.config import ENVIRONMENT_VARIABLE


def resolve_app(import_string: str) -> App:
    """Import ``"package.module:attr"`` and return the kiln App it names.

    The attribute part may be dotted (``"myapp:web.app"``) and defaults
    to ``app``. Anything callable that isn't already an App is treated
    as a zero-argument factory.

    Raises:
        ModuleNotFoundError: The module can't be imported.
        AttributeError: The attribute path doesn't exist.
        TypeError: The factory failed, or the result isn't an App.
    """
    module_path, _, attr_path = import_string.partition(":")
    obj: Any = importlib.import_module(module_path)
    for attr in (attr_path or "app").split("."):
        obj = getattr(obj, attr)

    if callable(obj) and not isinstance(obj, App):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a kiln.App instance"
        raise TypeError(msg)
    return obj


def load_app(import_string: str, env: str | None = None) -> App:
    """``resolve_app`` for commands: export *env* first, exit 1 on failure.

    Asset middleware reads ``KILN_ENV`` when it is constructed, which is
    usually at import time, so the variable has to be set before the
    module is imported.
    """
    if env is not None:
        os.environ[ENVIRONMENT_VARIABLE] = env
    try:
        return resolve_app(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
