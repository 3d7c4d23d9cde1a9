"""
统一错误与 Result 封装：解析失败在本地跳过，传输失败映射为 Unreachable。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar, Union, cast


class ErrorSeverity(Enum):
    WARNING = "warning"      # message skipped, relay continues
    ERROR = "error"          # downstream failure, mapped to a response
    CRITICAL = "critical"    # startup aborts


@dataclass
class ConsentRelayError(Exception):
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    code: str = "UNKNOWN"
    context: Dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


@dataclass
class ParseError(ConsentRelayError):
    """Malformed inbound message: bad structure, missing field, unknown literal."""

    severity: ErrorSeverity = ErrorSeverity.WARNING
    code: str = "MALFORMED"


@dataclass
class TransportError(ConsentRelayError):
    """The downstream exchange could not complete (timeout, refused, DNS...)."""

    code: str = "TRANSPORT_ERROR"


@dataclass
class ConfigError(ConsentRelayError):
    severity: ErrorSeverity = ErrorSeverity.CRITICAL
    code: str = "MISSING_CONFIG"


T = TypeVar("T")
E = TypeVar("E", bound=ConsentRelayError)


@dataclass
class Result(Generic[T, E]):
    """函数式结果封装，避免用异常表达可预期的解析失败。"""

    _value: Union[T, E]
    _is_ok: bool

    @classmethod
    def ok(cls, value: T) -> "Result[T, E]":
        return cls(_value=value, _is_ok=True)

    @classmethod
    def err(cls, error: E) -> "Result[T, E]":
        return cls(_value=error, _is_ok=False)

    def is_ok(self) -> bool:
        return self._is_ok

    def unwrap(self) -> T:
        if not self._is_ok:
            raise cast(E, self._value)
        return cast(T, self._value)

    def unwrap_or(self, default: T) -> T:
        return cast(T, self._value) if self._is_ok else default

    def error(self) -> Optional[E]:
        return None if self._is_ok else cast(E, self._value)

    def map(self, fn) -> "Result[Any, E]":
        if self._is_ok:
            return Result.ok(fn(self._value))  # type: ignore[arg-type]
        return self
