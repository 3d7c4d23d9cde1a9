"""
统一错误模块。
"""

from .errors import (
    ErrorSeverity,
    ConsentRelayError,
    ParseError,
    TransportError,
    ConfigError,
    Result,
)

__all__ = [
    "ErrorSeverity",
    "ConsentRelayError",
    "ParseError",
    "TransportError",
    "ConfigError",
    "Result",
]
