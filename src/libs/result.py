"""
Result values returned by use cases.

Use cases never raise for business failures; they return either
``Return.ok(value)`` or ``Return.err(Error(code, message))`` and the API layer
decides which HTTP status a given error code maps to.
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Error:
    """Machine-readable code plus a human-readable message"""

    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class Result(Generic[T]):
    """Either a value or an Error, never both"""

    __slots__ = ("_value", "_error")

    def __init__(self, value: Optional[T] = None, error: Optional[Error] = None):
        self._value = value
        self._error = error

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        if self._error is not None:
            raise ValueError(f"Result holds an error: {self._error.code}")
        return self._value

    @property
    def error(self) -> Error:
        if self._error is None:
            raise ValueError("Result holds a value, not an error")
        return self._error

    def __repr__(self) -> str:
        if self.is_err():
            return f"Result(error={self._error!r})"
        return f"Result(value={self._value!r})"


class Return:
    """Factory helpers for Result"""

    @staticmethod
    def ok(value: Optional[T] = None) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result[Any]:
        return Result(error=error)
