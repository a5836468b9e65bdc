"""Central registry for catalog modules and their backend command bindings.

The dispatcher asks this registry which form belongs to a module and which
backend command builds the module's search table body. The header command is
shared by every module and parameterized by the module name.
"""

from __future__ import annotations


from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Mapping

from .errors import UnknownModuleError

TABLE_HEAD_COMMAND = "create_table_head"
TABLE_BODY_COMMAND_PREFIX = "create_table_body_search_"


class Module(str, Enum):
    """Fixed set of entity kinds managed by the desktop app."""

    AUTHOR = "Author"
    BOOK = "Book"
    CUSTOMER = "Customer"
    RENTAL = "Rental"

    @classmethod
    def parse(cls, value: Any) -> "Module":
        """Return the module for an enum member or a case-insensitive name."""
        if isinstance(value, cls):
            return value
        token = str(value or "").strip().lower()
        for member in cls:
            if member.value.lower() == token:
                return member
        raise UnknownModuleError(value)


@dataclass(frozen=True)
class ModuleBinding:
    """Form and command names bound to a single module."""

    module: Module
    form_id: str
    body_command: str
    label: str
    api_segment: str


class ModuleRegistry:
    """Exhaustive mapping from every ``Module`` to its ``ModuleBinding``."""

    def __init__(self, bindings: Mapping[Module, ModuleBinding]) -> None:
        """Store bindings; every module must be covered exactly once."""
        normalized: Dict[Module, ModuleBinding] = {}
        for key, binding in bindings.items():
            module = Module.parse(key)
            if binding.module is not module:
                raise ValueError(
                    f"Binding for {module.value} declares module {binding.module.value}"
                )
            normalized[module] = binding
        missing = [member.value for member in Module if member not in normalized]
        if missing:
            raise ValueError(f"Missing module bindings: {', '.join(missing)}")
        self._bindings = normalized

    @classmethod
    def default(cls) -> "ModuleRegistry":
        """Build the registry used by the desktop app."""
        api_segments = {
            Module.AUTHOR: "author",
            Module.BOOK: "book",
            Module.CUSTOMER: "costumer",
            Module.RENTAL: "rent",
        }
        bindings = {
            module: ModuleBinding(
                module=module,
                form_id=f"{module.value.lower()}-form",
                body_command=body_command_name(module),
                label=module.value,
                api_segment=api_segments[module],
            )
            for module in Module
        }
        return cls(bindings)

    def bindings(self) -> Iterable[ModuleBinding]:
        """Return bindings in module declaration order."""
        return [self._bindings[member] for member in Module]

    def resolve(self, module: Any) -> ModuleBinding:
        """Return the binding for ``module`` or raise ``UnknownModuleError``."""
        return self._bindings[Module.parse(module)]

    def form_ids(self) -> list[str]:
        return [binding.form_id for binding in self.bindings()]


def body_command_name(module: Module) -> str:
    return f"{TABLE_BODY_COMMAND_PREFIX}{module.value.lower()}"


__all__ = [
    "Module",
    "ModuleBinding",
    "ModuleRegistry",
    "TABLE_HEAD_COMMAND",
    "TABLE_BODY_COMMAND_PREFIX",
    "body_command_name",
]
