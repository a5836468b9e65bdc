from __future__ import annotations

import json
import logging

import pytest

from bookery.adapters.catalog_mock import CatalogMock
from bookery.adapters.catalog_rest import CatalogRestAdapter
from bookery.adapters.storage_local import StorageLocal
from bookery.app.controller import AppController
from bookery.app.settings_controller import SettingsController
from bookery.viewmodels.settings_vm import SettingsVM


class _Win:
    def __init__(self) -> None:
        self.toasts = []

    def show_toast(self, message: str) -> None:
        self.toasts.append(message)


@pytest.fixture(autouse=True)
def _clean_logging_env(monkeypatch):
    for var in ("BOOKERY_LOG_LEVEL", "BOOKERY_DEBUG", "BOOKERY_DEBUG_LOGGING"):
        monkeypatch.delenv(var, raising=False)
    root = logging.getLogger()
    previous = root.level
    yield
    root.setLevel(previous)
    for name in ("urllib3", "urllib3.connectionpool"):
        logging.getLogger(name).setLevel(logging.NOTSET)


def _build(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))
    vm = SettingsVM(on_save=storage.save_user_settings)
    controller = AppController(vm)
    bridges = []
    win = _Win()
    settings = SettingsController(
        win=win,
        settings_vm=vm,
        controller=controller,
        on_backend_changed=bridges.append,
    )
    return settings, storage, vm, controller, bridges, win


def test_save_persists_and_swaps_backend(tmp_path):
    settings, storage, vm, controller, bridges, win = _build(tmp_path)
    old_bridge = controller.command_bridge()
    assert isinstance(old_bridge.catalog, CatalogMock)

    ok = settings.save(
        {
            "api_base_url": "http://library.local:8000/",
            "api_key": "secret",
            "request_timeout_s": "5",
            "retries": "1",
            "max_workers": "3",
            "debug_logging": False,
        }
    )

    assert ok is True
    stored = json.loads((tmp_path / "user_settings.json").read_text(encoding="utf-8"))
    assert stored["api_base_url"] == "http://library.local:8000"
    assert stored["request_timeout_s"] == 5
    assert storage.load_user_settings() == stored

    assert len(bridges) == 1
    assert bridges[0] is not old_bridge
    assert isinstance(bridges[0].catalog, CatalogRestAdapter)
    assert bridges[0].catalog.cfg.request_timeout_s == 5
    assert win.toasts == ["Settings saved. Using http://library.local:8000."]


def test_clearing_url_returns_to_offline_catalog(tmp_path):
    settings, _, vm, _, bridges, win = _build(tmp_path)
    vm.api_base_url = "http://library.local"

    assert settings.save({"api_base_url": ""}) is True
    assert isinstance(bridges[0].catalog, CatalogMock)
    assert win.toasts[-1] == "Settings saved. Using the offline catalog."


@pytest.mark.parametrize(
    "values",
    [
        {"api_base_url": "library.local"},
        {"api_base_url": "http://library.local", "retries": "-2"},
        {"theme": "dark"},
    ],
)
def test_rejected_values_leave_settings_untouched(tmp_path, values):
    settings, _, vm, controller, bridges, win = _build(tmp_path)
    before = vm.to_dict()
    bridge = controller.command_bridge()

    assert settings.save(values) is False

    assert vm.to_dict() == before
    assert not (tmp_path / "user_settings.json").exists()
    assert bridges == []
    assert controller.command_bridge() is bridge
    assert win.toasts[-1].startswith("Could not save settings")


def test_storage_failure_is_reported(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    storage = StorageLocal(root_dir=str(blocker))
    vm = SettingsVM(on_save=storage.save_user_settings)
    win = _Win()
    bridges = []
    settings = SettingsController(
        win=win,
        settings_vm=vm,
        controller=AppController(vm),
        on_backend_changed=bridges.append,
    )

    assert settings.save({"api_base_url": "http://library.local"}) is False
    assert vm.api_base_url == ""
    assert bridges == []
    assert win.toasts[-1].startswith("Could not save settings")


def test_debug_flag_applies_log_level(tmp_path):
    settings, _, _, _, _, _ = _build(tmp_path)

    assert settings.save({"debug_logging": True}) is True
    assert logging.getLogger().level == logging.DEBUG

    assert settings.save({"debug_logging": False}) is True
    assert logging.getLogger().level == logging.INFO
