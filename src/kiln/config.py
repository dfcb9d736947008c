"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

# Deployment mode that turns on default asset caching
PRODUCTION = "production"

ENVIRONMENT_VARIABLE = "KILN_ENV"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def current_environment(default: str = "development") -> str:
    """Return the deployment mode from ``KILN_ENV``."""
    return os.environ.get(ENVIRONMENT_VARIABLE) or default


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Deployment mode ("production" enables default asset caching).
    # Defaults to KILN_ENV, read when the config is created.
    environment: str = field(default_factory=current_environment)

    # Reload (development mode — requires debug=True)
    reload_include: tuple[str, ...] = ()  # Extra extensions to watch (e.g. ".coffee", ".scss")
    reload_dirs: tuple[str, ...] = ()  # Extra directories to watch alongside cwd

    # Production
    workers: int = 0  # 0 = auto-detect from CPU count
    log_format: str = "json"
    log_level: str = "info"
    keep_alive_timeout: float = 5.0
    request_timeout: float = 30.0

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION

    @classmethod
    def from_env(cls, **overrides: object) -> AppConfig:
        """Build a config from ``KILN_*`` environment variables.

        Reads ``KILN_HOST``, ``KILN_PORT`` and ``KILN_DEBUG``; ``KILN_ENV``
        is already the default for ``environment``.
        Unset variables keep the field default; keyword arguments win
        over the environment.
        """
        values: dict[str, object] = {}
        if "KILN_HOST" in os.environ:
            values["host"] = os.environ["KILN_HOST"]
        if "KILN_PORT" in os.environ:
            values["port"] = int(os.environ["KILN_PORT"])
        if "KILN_DEBUG" in os.environ:
            values["debug"] = os.environ["KILN_DEBUG"].strip().lower() in _TRUTHY
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]
