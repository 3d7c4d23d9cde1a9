"""
Logging infrastructure.
"""

from .setup import configure_logging, LOG_FORMAT

__all__ = ["configure_logging", "LOG_FORMAT"]
