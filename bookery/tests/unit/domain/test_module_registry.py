from __future__ import annotations

import pytest

from bookery.domain.errors import UnknownModuleError
from bookery.domain.modules import (
    Module,
    ModuleBinding,
    ModuleRegistry,
    body_command_name,
)


def test_default_registry_covers_every_module():
    registry = ModuleRegistry.default()
    assert [b.module for b in registry.bindings()] == list(Module)
    assert registry.form_ids() == ["author-form", "book-form", "customer-form", "rental-form"]


def test_body_commands_follow_naming_scheme():
    registry = ModuleRegistry.default()
    assert [b.body_command for b in registry.bindings()] == [
        "create_table_body_search_author",
        "create_table_body_search_book",
        "create_table_body_search_customer",
        "create_table_body_search_rental",
    ]
    assert body_command_name(Module.RENTAL) == "create_table_body_search_rental"


def test_api_segments_match_library_routes():
    registry = ModuleRegistry.default()
    assert registry.resolve(Module.CUSTOMER).api_segment == "costumer"
    assert registry.resolve(Module.RENTAL).api_segment == "rent"


def test_missing_binding_fails_at_construction():
    bindings = {
        binding.module: binding
        for binding in ModuleRegistry.default().bindings()
        if binding.module is not Module.RENTAL
    }
    with pytest.raises(ValueError, match="Rental"):
        ModuleRegistry(bindings)


def test_binding_for_wrong_module_is_rejected():
    bindings = {b.module: b for b in ModuleRegistry.default().bindings()}
    bindings[Module.BOOK] = ModuleBinding(
        module=Module.AUTHOR,
        form_id="book-form",
        body_command="create_table_body_search_book",
        label="Book",
        api_segment="book",
    )
    with pytest.raises(ValueError):
        ModuleRegistry(bindings)


@pytest.mark.parametrize("raw", ["book", "BOOK", " Book ", Module.BOOK])
def test_parse_accepts_names_case_insensitively(raw):
    assert Module.parse(raw) is Module.BOOK


@pytest.mark.parametrize("raw", ["Magazine", "", None, 3])
def test_unknown_module_raises(raw):
    registry = ModuleRegistry.default()
    with pytest.raises(UnknownModuleError) as excinfo:
        registry.resolve(raw)
    assert excinfo.value.value == raw

