"""Adapter wiring for the desktop app runtime.

This module owns lazy construction of the catalog adapter and the command
bridge from values in :class:`bookery.viewmodels.settings_vm.SettingsVM`.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..adapters.catalog_mock import CatalogMock
from ..adapters.catalog_rest import CatalogRestAdapter
from ..adapters.command_local import LocalCommandBridge
from ..domain.modules import ModuleRegistry
from ..domain.ports import CatalogPort
from ..viewmodels.settings_vm import SettingsVM


class AppController:
    """Create and cache runtime adapters from settings state.

    Call chain:
        ``bookery.app.main.App`` creates one instance and asks it for the
        command bridge before building the dispatcher. ``reset`` drops cached
        adapters after settings change.
    """

    def __init__(self, settings_vm: SettingsVM, registry: Optional[ModuleRegistry] = None) -> None:
        self._log = logging.getLogger(__name__)
        self.settings_vm = settings_vm
        self.registry = registry or ModuleRegistry.default()
        self._catalog: Optional[CatalogPort] = None
        self._bridge: Optional[LocalCommandBridge] = None

    @property
    def catalog(self) -> Optional[CatalogPort]:
        return self._catalog

    def reset(self) -> None:
        self._catalog = None
        self._bridge = None

    def command_bridge(self) -> LocalCommandBridge:
        """Return the cached bridge, building adapters on first use."""
        if self._bridge is None:
            self._catalog = self._build_catalog()
            self._bridge = LocalCommandBridge(self._catalog, self.registry)
        return self._bridge

    def _build_catalog(self) -> CatalogPort:
        if self.settings_vm.offline:
            self._log.info("No API URL configured; using offline catalog.")
            return CatalogMock()
        self._log.info("Using library API at %s", self.settings_vm.api_base_url)
        return CatalogRestAdapter(
            self.settings_vm.api_base_url,
            api_key=self.settings_vm.api_key or None,
            request_timeout_s=self.settings_vm.request_timeout_s,
            retries=self.settings_vm.retries,
            registry=self.registry,
        )


__all__ = ["AppController"]
