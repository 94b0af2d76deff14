"""Konfiguracja logowania masklint — RichHandler na stderr."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_LEVEL = "WARNING"


def setup_logging(level: str | None = None) -> None:
    """
    Konfiguruje logowanie.

    Args:
        level: Opcjonalne nadpisanie `MASKLINT_LOG_LEVEL` (domyślnie WARNING).
    """
    level = (level or os.getenv("MASKLINT_LOG_LEVEL") or DEFAULT_LEVEL).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
