from __future__ import annotations
from typing import Any, List, Mapping, Optional, Protocol

from .entities import CatalogRecord
from .modules import Module


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, meta: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = dict(meta or {})


# ---- Ports (Hexagonal boundaries) ----
class CommandPort(Protocol):
    """Invoke a named backend command and return the markup it produces."""

    def invoke(self, command: str, params: Mapping[str, Any]) -> str: ...


class CatalogPort(Protocol):
    """Search records of one module in the library catalog."""

    def search(self, module: Module, token: str = "") -> List[CatalogRecord]: ...


class DisplayPort(Protocol):
    """Rendering surface owned by the window: forms, label and table regions."""

    def hide_forms(self) -> None: ...
    def show_form(self, form_id: str) -> None: ...
    def set_module_name(self, text: str) -> None: ...
    def set_table_head(self, markup: str) -> None: ...
    def set_table_body(self, markup: str) -> None: ...


class StoragePort(Protocol):
    """Persistence for user settings."""

    def save_user_settings(self, payload: Mapping[str, Any]) -> None: ...
    def load_user_settings(self) -> Optional[dict]: ...
