# bookery/app/main.py
from __future__ import annotations

import logging
import os
from typing import Optional

from .controller import AppController
from .module_dispatcher import ModuleDispatcher, ModuleSelected, SearchSubmitted
from .settings_controller import SettingsController
from .ui_queue import UiCallQueue
from .views.library_window import LibraryWindowView
from ..adapters.storage_local import StorageLocal
from ..domain.modules import Module, ModuleRegistry
from ..domain.ports import UseCaseError
from ..viewmodels.settings_vm import SettingsVM
from ..utils import logging as logging_utils


class App:
    """Bootstrap: wire the window, settings, command bridge and dispatcher."""

    def __init__(self) -> None:
        self._log = logging.getLogger(__name__)
        self.registry = ModuleRegistry.default()

        # ---- Settings ----
        self._storage_root = os.environ.get("BOOKERY_STORAGE_ROOT") or "."
        self._storage = StorageLocal(root_dir=self._storage_root)
        self.settings_vm = SettingsVM(on_save=self._storage.save_user_settings)
        self._settings_error: Optional[str] = self._load_user_settings()

        # ---- Window ----
        self.win = LibraryWindowView(
            modules=[(b.module.value, b.label, b.form_id) for b in self.registry.bindings()],
            on_select_module=self._on_select_module,
            on_search=self._on_search,
            on_open_settings=self._on_open_settings,
        )
        self.ui_queue = UiCallQueue(self.win.after, self.win.after_cancel)

        # ---- Adapters & dispatcher ----
        self.controller = AppController(self.settings_vm, self.registry)
        self.dispatcher = ModuleDispatcher(
            display=self.win,
            command_port=self.controller.command_bridge(),
            registry=self.registry,
            call_soon=self.ui_queue.post,
            on_error=self._on_dispatch_error,
            max_workers=self.settings_vm.max_workers,
        )
        self.settings = SettingsController(
            win=self.win,
            settings_vm=self.settings_vm,
            controller=self.controller,
            on_backend_changed=self.dispatcher.set_command_port,
        )

        self.win.protocol("WM_DELETE_WINDOW", self._on_close)
        self.win.hide_forms()
        if self._settings_error:
            self.win.show_toast(self._settings_error)
        elif self.settings_vm.offline:
            self.win.show_toast("Offline catalog (set BOOKERY_API_URL to use the library API).")

    def _load_user_settings(self) -> Optional[str]:
        """Apply stored settings and env overrides; return a message on failure."""
        error: Optional[str] = None
        try:
            payload = self._storage.load_user_settings()
            if payload is not None:
                self.settings_vm.apply_dict(payload)
        except (OSError, ValueError) as exc:
            self._log.warning("Could not load settings: %s", exc)
            error = f"Could not load settings: {exc}"
        env_url = os.environ.get("BOOKERY_API_URL")
        if env_url:
            try:
                self.settings_vm.api_base_url = env_url
            except ValueError as exc:
                error = str(exc)
        level = logging_utils.apply_gui_preferences(self.settings_vm.debug_logging)
        self._log.debug("Effective log level: %s", logging_utils.level_name(level))
        return error

    # ==================================================================
    # View callbacks
    # ==================================================================
    def _on_select_module(self, module: str, form_id: str) -> None:
        self.dispatcher.handle(ModuleSelected(module, form_id))
        self.win.show_toast(f"{module} selected.")

    def _on_search(self) -> None:
        if self.dispatcher.state.active_module is None:
            self.win.show_toast("Select a module first.")
            return
        self.dispatcher.handle(SearchSubmitted())
        self.win.show_toast(f"Searching {self.dispatcher.state.active_module.value}...")

    def _on_open_settings(self) -> None:
        self.settings.open_dialog()

    def _on_dispatch_error(self, region: str, module: Module, err: UseCaseError) -> None:
        self.win.show_toast(f"{module.value} {region}: {err.message}")

    def _on_close(self) -> None:
        self.ui_queue.stop()
        self.dispatcher.shutdown()
        self.win.destroy()

    def run(self) -> None:
        self.ui_queue.start()
        self.win.mainloop()


def main() -> None:
    logging_utils.configure_root()
    App().run()


if __name__ == "__main__":
    main()
