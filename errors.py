from __future__ import annotations

from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ValidationError(ValueError):
    """Raised when a local precondition blocks an action."""


class TransportError(RuntimeError):
    """Raised when a remote call fails or returns a non-2xx status."""

    def __init__(
        self, method: str, path: str, status_code: Optional[int] = None
    ) -> None:
        super().__init__(f"{method} {path} failed")
        self.method = method
        self.path = path
        self.status_code = status_code


class Result(Generic[T]):
    """Outcome of a write operation: either a value or an error."""

    def __init__(
        self, value: Optional[T] = None, error: Optional[Exception] = None
    ) -> None:
        self.value = value
        self.error = error

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self.ok:
            return f"Result(value={self.value!r})"
        return f"Result(error={self.error!r})"
