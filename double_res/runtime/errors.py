"""Host runtime exception types."""

from __future__ import annotations


class ResourceBorrowError(RuntimeError):
    """Raised on conflicting resource borrows or use of a released view."""


class MissingResourceError(KeyError):
    """Raised when no resource is registered under a token."""

    def __init__(self, token: object) -> None:
        super().__init__(f"missing resource: {describe_token(token)}")
        self.token = token


def describe_token(token: object) -> str:
    return getattr(token, "__qualname__", None) or str(token)
