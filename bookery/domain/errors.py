"""Domain-level error types shared across layers.

These errors describe programming or configuration mistakes in the module
dispatch tables. They are raised before any backend command is issued and are
not translated into user-facing messages.
"""

from __future__ import annotations

from typing import Any


class UnknownModuleError(LookupError):
    """Raised when a value does not name one of the fixed catalog modules."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Unknown module: {value!r}")
        self.value = value


__all__ = ["UnknownModuleError"]
