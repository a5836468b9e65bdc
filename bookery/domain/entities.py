"""Typed catalog records returned by the library API.

Each record knows how to build itself from a JSON object and how to present
itself as an ordered tuple of table cells. Cell order matches the columns the
header command emits for the same module.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional, Tuple, Union

from .modules import Module

ISODate = str  # "YYYY-MM-DD"


def _text(payload: Mapping[str, Any], *keys: str) -> str:
    """Return the first non-empty value among ``keys`` as a stripped string."""
    for key in keys:
        value = payload.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def _require(payload: Any, ctx: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValueError(f"{ctx}: expected object, got {type(payload).__name__}")
    return payload


@dataclass(frozen=True)
class Author:
    COLUMNS: ClassVar[Tuple[str, ...]] = ("Name", "Born")

    id: str
    name: str
    born: ISODate

    @classmethod
    def from_payload(cls, payload: Any) -> "Author":
        data = _require(payload, "author")
        return cls(id=_text(data, "id"), name=_text(data, "name"), born=_text(data, "born"))

    def cells(self) -> Tuple[str, ...]:
        return (self.name, self.born)


@dataclass(frozen=True)
class Book:
    COLUMNS: ClassVar[Tuple[str, ...]] = ("Name", "Author", "Editor", "Release")

    id: str
    name: str
    author: str
    editor: str
    release: ISODate

    @classmethod
    def from_payload(cls, payload: Any) -> "Book":
        data = _require(payload, "book")
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            # Search responses carry the author uuid unless the API joined the name.
            author=_text(data, "author_name", "author", "author_uuid"),
            editor=_text(data, "editor"),
            release=_text(data, "release"),
        )

    def cells(self) -> Tuple[str, ...]:
        return (self.name, self.author, self.editor, self.release)


@dataclass(frozen=True)
class Customer:
    COLUMNS: ClassVar[Tuple[str, ...]] = ("Name", "Document", "Born")

    id: str
    name: str
    document: str
    born: ISODate

    @classmethod
    def from_payload(cls, payload: Any) -> "Customer":
        data = _require(payload, "customer")
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            document=_text(data, "document"),
            born=_text(data, "born"),
        )

    def cells(self) -> Tuple[str, ...]:
        return (self.name, self.document, self.born)


@dataclass(frozen=True)
class Rental:
    COLUMNS: ClassVar[Tuple[str, ...]] = (
        "Customer",
        "Book",
        "Borrowed at",
        "Due Date",
        "Returned at",
    )

    id: str
    customer: str
    book: str
    borrowed_at: ISODate
    due_date: ISODate
    returned_at: Optional[ISODate] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "Rental":
        data = _require(payload, "rental")
        returned = _text(data, "returned_at")
        return cls(
            id=_text(data, "id"),
            customer=_text(data, "costumer_name", "customer_name", "costumer_uuid", "customer_uuid"),
            book=_text(data, "book_name", "book_uuid"),
            borrowed_at=_text(data, "borrowed_at"),
            due_date=_text(data, "due_date"),
            returned_at=returned or None,
        )

    def cells(self) -> Tuple[str, ...]:
        return (
            self.customer,
            self.book,
            self.borrowed_at,
            self.due_date,
            self.returned_at or "",
        )


CatalogRecord = Union[Author, Book, Customer, Rental]

RECORD_TYPES = {
    Module.AUTHOR: Author,
    Module.BOOK: Book,
    Module.CUSTOMER: Customer,
    Module.RENTAL: Rental,
}


def columns_for(module: Module) -> Tuple[str, ...]:
    """Return the table column titles for ``module``."""
    return RECORD_TYPES[Module.parse(module)].COLUMNS


def parse_record(module: Module, payload: Any) -> CatalogRecord:
    """Build the typed record for ``module`` from an API JSON object."""
    return RECORD_TYPES[Module.parse(module)].from_payload(payload)


__all__ = [
    "Author",
    "Book",
    "CatalogRecord",
    "Customer",
    "ISODate",
    "RECORD_TYPES",
    "Rental",
    "columns_for",
    "parse_record",
]
