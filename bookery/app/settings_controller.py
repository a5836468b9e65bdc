"""Controller for the settings dialog and settings persistence.

Keeps the save workflow out of the views: validate through ``SettingsVM``,
persist through the storage port, then rebuild the backend adapters and hand
the new command bridge to the dispatcher.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from bookery.app.controller import AppController
from bookery.app.views.settings_dialog import SettingsDialog
from bookery.domain.ports import CommandPort
from bookery.utils import logging as logging_utils
from bookery.viewmodels.settings_vm import SettingsVM


class SettingsController:
    """Settings dialog orchestration and persistence."""

    def __init__(
        self,
        *,
        win,
        settings_vm: SettingsVM,
        controller: AppController,
        on_backend_changed: Callable[[CommandPort], None],
    ) -> None:
        """Store collaborators needed by the settings workflow.

        Args:
            win: Root window used for toasts and modal parenting.
            settings_vm: Settings viewmodel; its ``on_save`` writes to storage.
            controller: App controller that owns runtime adapter wiring.
            on_backend_changed: Receives the rebuilt command bridge.
        """
        self._log = logging.getLogger(__name__)
        self.win = win
        self.settings_vm = settings_vm
        self.controller = controller
        self._on_backend_changed = on_backend_changed
        self._dialog: Optional[SettingsDialog] = None

    def open_dialog(self) -> None:
        dlg = SettingsDialog(self.win, on_save=self.save)
        dlg.set_values(self.settings_vm.to_dict())
        self._dialog = dlg

    def save(self, values: Mapping[str, Any]) -> bool:
        """Apply, validate and persist ``values``; return True on success.

        Rejected values leave the current settings untouched.
        """
        previous = self.settings_vm.to_dict()
        try:
            self.settings_vm.apply_dict(values)
            self.settings_vm.cmd_save()
        except (OSError, ValueError) as exc:
            self.settings_vm.apply_dict(previous)
            self._log.warning("Settings not saved: %s", exc)
            self.win.show_toast(f"Could not save settings: {exc}")
            return False

        level = logging_utils.apply_gui_preferences(self.settings_vm.debug_logging)
        self._log.debug("Effective log level: %s", logging_utils.level_name(level))
        self.controller.reset()
        self._on_backend_changed(self.controller.command_bridge())
        if self.settings_vm.offline:
            self.win.show_toast("Settings saved. Using the offline catalog.")
        else:
            self.win.show_toast(f"Settings saved. Using {self.settings_vm.api_base_url}.")
        return True


__all__ = ["SettingsController"]
