"""Logging setup."""

import logging

DEFAULT_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "WARNING", fmt: str = DEFAULT_FORMAT) -> None:
    """Call once at program start."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=fmt,
        datefmt="%H:%M:%S",
    )