from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Any, Callable, Dict, Mapping, Optional


class SettingsDialog(tk.Toplevel):
    """Modal dialog to edit connection and logging settings (UI-only).

    Values are emitted as raw strings; ``SettingsVM`` does the coercion.
    """

    OnSave = Optional[Callable[[Dict[str, Any]], bool]]

    def __init__(self, parent: tk.Misc, *, on_save: OnSave = None) -> None:
        super().__init__(parent)
        self.title("Settings")
        self.transient(parent)
        self.resizable(False, False)
        self._on_save = on_save

        self.api_base_url_var = tk.StringVar(value="")
        self.api_key_var = tk.StringVar(value="")
        self.request_timeout_var = tk.StringVar(value="10")
        self.retries_var = tk.StringVar(value="2")
        self.max_workers_var = tk.StringVar(value="4")
        self.debug_logging_var = tk.BooleanVar(value=False)

        self._build_ui()
        self.protocol("WM_DELETE_WINDOW", self.destroy)
        self.grab_set()
        self.focus_set()

    def _build_ui(self) -> None:
        pad = dict(padx=8, pady=6)

        api = ttk.Labelframe(self, text="Library API")
        api.grid(row=0, column=0, sticky="ew", **pad)
        api.columnconfigure(1, weight=1)
        ttk.Label(api, text="Base URL").grid(row=0, column=0, sticky="w")
        ttk.Entry(api, textvariable=self.api_base_url_var, width=40).grid(row=0, column=1, sticky="ew")
        ttk.Label(api, text="API Key").grid(row=1, column=0, sticky="w", pady=(6, 0))
        ttk.Entry(api, textvariable=self.api_key_var, width=40, show="*").grid(
            row=1, column=1, sticky="ew", pady=(6, 0)
        )
        ttk.Label(api, text="Leave the URL empty to browse the offline catalog.").grid(
            row=2, column=0, columnspan=2, sticky="w", pady=(6, 0)
        )

        timing = ttk.Labelframe(self, text="Requests")
        timing.grid(row=1, column=0, sticky="ew", **pad)
        fields = (
            ("Timeout (s)", self.request_timeout_var),
            ("Retries", self.retries_var),
            ("Workers", self.max_workers_var),
        )
        for col, (label, var) in enumerate(fields):
            ttk.Label(timing, text=label).grid(row=0, column=col * 2, sticky="w", padx=(0, 4))
            ttk.Entry(timing, textvariable=var, width=6).grid(row=0, column=col * 2 + 1, padx=(0, 12))

        ttk.Checkbutton(self, text="Enable debug logging", variable=self.debug_logging_var).grid(
            row=2, column=0, sticky="w", **pad
        )

        footer = ttk.Frame(self)
        footer.grid(row=3, column=0, sticky="ew", **pad)
        ttk.Button(footer, text="Save", command=self._emit_save).pack(side="right", padx=(6, 0))
        ttk.Button(footer, text="Close", command=self.destroy).pack(side="right")

    def set_values(self, values: Mapping[str, Any]) -> None:
        self.api_base_url_var.set(values.get("api_base_url", ""))
        self.api_key_var.set(values.get("api_key", ""))
        self.request_timeout_var.set(str(values.get("request_timeout_s", 10)))
        self.retries_var.set(str(values.get("retries", 2)))
        self.max_workers_var.set(str(values.get("max_workers", 4)))
        self.debug_logging_var.set(bool(values.get("debug_logging", False)))

    def _emit_save(self) -> None:
        values = {
            "api_base_url": self.api_base_url_var.get(),
            "api_key": self.api_key_var.get(),
            "request_timeout_s": self.request_timeout_var.get(),
            "retries": self.retries_var.get(),
            "max_workers": self.max_workers_var.get(),
            "debug_logging": bool(self.debug_logging_var.get()),
        }
        # The dialog stays open when the values were rejected.
        if self._on_save and self._on_save(values):
            self.destroy()
