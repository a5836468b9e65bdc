from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from bookery.domain.entities import CatalogRecord, parse_record
from bookery.domain.modules import Module
from bookery.domain.ports import CatalogPort

_SEED: Dict[Module, List[Dict[str, Any]]] = {
    Module.AUTHOR: [
        {"id": "a-1", "name": "Machado de Assis", "born": "1839-06-21"},
        {"id": "a-2", "name": "Clarice Lispector", "born": "1920-12-10"},
        {"id": "a-3", "name": "Jorge Amado", "born": "1912-08-10"},
    ],
    Module.BOOK: [
        {
            "id": "b-1",
            "name": "Dom Casmurro",
            "author_name": "Machado de Assis",
            "editor": "Garnier",
            "release": "1899-01-01",
        },
        {
            "id": "b-2",
            "name": "A Hora da Estrela",
            "author_name": "Clarice Lispector",
            "editor": "Jose Olympio",
            "release": "1977-10-26",
        },
    ],
    Module.CUSTOMER: [
        {"id": "c-1", "name": "Ana Souza", "document": "12345678901", "born": "1990-03-14"},
        {"id": "c-2", "name": "Bruno Lima", "document": "10987654321", "born": "1985-11-02"},
    ],
    Module.RENTAL: [
        {
            "id": "r-1",
            "costumer_name": "Ana Souza",
            "book_name": "Dom Casmurro",
            "borrowed_at": "2024-01-05",
            "due_date": "2024-01-19",
            "returned_at": "2024-01-17",
        },
        {
            "id": "r-2",
            "costumer_name": "Bruno Lima",
            "book_name": "A Hora da Estrela",
            "borrowed_at": "2024-02-01",
            "due_date": "2024-02-15",
            "returned_at": None,
        },
    ],
}

_SEARCH_FIELDS: Dict[Module, tuple[str, ...]] = {
    Module.AUTHOR: ("name",),
    Module.BOOK: ("name", "editor"),
    Module.CUSTOMER: ("name", "document"),
    Module.RENTAL: ("costumer_name", "book_name"),
}


@dataclass
class CatalogMock(CatalogPort):
    """Offline substitute for ``CatalogRestAdapter`` with deterministic records."""

    rows: Optional[Mapping[Module, List[Dict[str, Any]]]] = None
    calls: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        source = self.rows if self.rows is not None else _SEED
        self._rows: Dict[Module, List[Dict[str, Any]]] = {
            Module.parse(key): [dict(row) for row in value] for key, value in source.items()
        }

    # ---------- CatalogPort ----------

    def search(self, module: Module, token: str = "") -> List[CatalogRecord]:
        module = Module.parse(module)
        self.calls.append({"module": module, "token": token})
        needle = (token or "").strip().lower()
        matches: List[CatalogRecord] = []
        for row in self._rows.get(module, []):
            if needle and not any(
                needle in str(row.get(key) or "").lower() for key in _SEARCH_FIELDS[module]
            ):
                continue
            matches.append(parse_record(module, row))
        return matches

    # ---------- Test helpers ----------

    def add_row(self, module: Module, row: Mapping[str, Any]) -> None:
        self._rows.setdefault(Module.parse(module), []).append(dict(row))


__all__ = ["CatalogMock"]
