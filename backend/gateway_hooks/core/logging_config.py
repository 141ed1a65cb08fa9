"""
Logging configuration for the receiver.
Call setup_logging() once at startup (main.py).
"""

import logging
import sys


def setup_logging(level: str = "INFO"):
    """Send the 'gateway_hooks' namespace to stdout."""
    root = logging.getLogger("gateway_hooks")
    root.setLevel(level.upper())
    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)
