"""Double-buffer error types."""

from __future__ import annotations


class InvalidSelectorError(ValueError):
    """Raised when a buffer selector is set outside {0, 1}."""

    def __init__(self, value: object) -> None:
        super().__init__(f"double buffer index must be 0 or 1, got {value!r}")
        self.value = value
