"""Domain package exports for catalog modules and records."""

from .entities import Author, Book, CatalogRecord, Customer, Rental, columns_for, parse_record
from .errors import UnknownModuleError
from .modules import Module, ModuleBinding, ModuleRegistry, TABLE_HEAD_COMMAND

__all__ = [
    "Author",
    "Book",
    "CatalogRecord",
    "Customer",
    "Module",
    "ModuleBinding",
    "ModuleRegistry",
    "Rental",
    "TABLE_HEAD_COMMAND",
    "UnknownModuleError",
    "columns_for",
    "parse_record",
]
