from __future__ import annotations

import json

import pytest

from bookery.adapters.storage_local import StorageLocal
from bookery.viewmodels.settings_vm import SettingsVM


def test_missing_file_loads_none(tmp_path):
    assert StorageLocal(root_dir=str(tmp_path)).load_user_settings() is None


def test_save_then_load_through_settings_vm(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path / "nested"))
    vm = SettingsVM(on_save=storage.save_user_settings)
    vm.apply_dict({"api_base_url": "http://library.local", "retries": 5})
    vm.cmd_save()

    stored = json.loads((tmp_path / "nested" / "user_settings.json").read_text(encoding="utf-8"))
    assert stored["api_base_url"] == "http://library.local"
    assert stored["retries"] == 5

    restored = SettingsVM()
    restored.apply_dict(storage.load_user_settings())
    assert restored.to_dict() == vm.to_dict()


def test_non_object_file_is_rejected(tmp_path):
    (tmp_path / "user_settings.json").write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError, match="JSON object"):
        StorageLocal(root_dir=str(tmp_path)).load_user_settings()
