"""
Centralised logging configuration.

Configures the root logger once, at application startup.
"""

import logging

from fleetops.app.core.config import settings

_configured = False


def configure_logging(level: str = None) -> None:
    """Attach a console handler to the root logger (idempotent)."""
    global _configured
    if _configured:
        return
    _configured = True

    log_level = (level or settings.log_level).upper()

    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler()
    console.setLevel(log_level)
    console.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(log_level)
    root.addHandler(console)
