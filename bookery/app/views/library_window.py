"""
LibraryWindowView
-----------------
Tkinter main window for the Bookery desktop app. View code only: no HTTP, no
domain logic. It exposes callback hooks connected by ``bookery.app.main``.

Layout:
  * Navigation bar with one button per catalog module
  * Module title label and the search form of the active module
  * Results table (Treeview) filled from header/body markup
  * Status bar at the bottom
"""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

from .markup_table import parse_header, parse_rows

# Field labels shown in each search form.
FORM_FIELDS: Dict[str, Tuple[str, ...]] = {
    "author-form": ("Name", "Born from", "Born until"),
    "book-form": ("Name", "Editor", "Release"),
    "customer-form": ("Name", "Document"),
    "rental-form": ("Customer", "Book"),
}


class LibraryWindowView(tk.Tk):
    """Top-level application window and table rendering surface."""

    OnSelect = Optional[Callable[[str, str], None]]
    OnVoid = Optional[Callable[[], None]]

    def __init__(
        self,
        *,
        modules: Sequence[Tuple[str, str, str]],
        on_select_module: OnSelect = None,
        on_search: OnVoid = None,
        on_open_settings: OnVoid = None,
    ) -> None:
        """Build the window.

        Args:
            modules: ``(module name, label, form id)`` per navigation button.
            on_select_module: Called with ``(module name, form id)``.
            on_search: Called when a form's Search button is pressed.
            on_open_settings: Called by the Settings button.
        """
        super().__init__()
        self.title("Bookery")
        self.geometry("1000x640")
        self.minsize(760, 480)

        self._on_select_module = on_select_module
        self._on_search = on_search
        self._on_open_settings = on_open_settings
        self._forms: Dict[str, ttk.Frame] = {}

        self.rowconfigure(2, weight=1)
        self.columnconfigure(0, weight=1)

        self._build_navbar(modules)
        self._build_form_area(modules)
        self._build_table()
        self._build_statusbar()

        self.bind("<Return>", lambda e: self._on_search and self._on_search())

    # ------------------------------------------------------------------
    def _build_navbar(self, modules: Sequence[Tuple[str, str, str]]) -> None:
        bar = ttk.Frame(self)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 4))
        for idx, (name, label, form_id) in enumerate(modules):
            ttk.Button(
                bar,
                text=label,
                command=lambda n=name, f=form_id: self._select(n, f),
            ).grid(row=0, column=idx, padx=(0, 6))
        bar.columnconfigure(len(modules), weight=1)
        ttk.Button(
            bar,
            text="Settings",
            command=lambda: self._on_open_settings and self._on_open_settings(),
        ).grid(row=0, column=len(modules) + 1, sticky="e")

    def _build_form_area(self, modules: Iterable[Tuple[str, str, str]]) -> None:
        area = ttk.Frame(self)
        area.grid(row=1, column=0, sticky="ew", padx=8, pady=4)
        area.columnconfigure(0, weight=1)

        self.module_name_var = tk.StringVar(value="")
        ttk.Label(area, textvariable=self.module_name_var, font=("TkDefaultFont", 12, "bold")).grid(
            row=0, column=0, sticky="w", pady=(0, 4)
        )

        for _name, label, form_id in modules:
            form = ttk.Labelframe(area, text=f"Search {label}")
            for col, field_label in enumerate(FORM_FIELDS.get(form_id, ())):
                ttk.Label(form, text=field_label).grid(row=0, column=col * 2, padx=(6, 2), pady=6)
                ttk.Entry(form, width=18).grid(row=0, column=col * 2 + 1, padx=(0, 6))
            ttk.Button(
                form,
                text="Search",
                command=lambda: self._on_search and self._on_search(),
            ).grid(row=0, column=99, padx=6)
            self._forms[form_id] = form

    def _build_table(self) -> None:
        frame = ttk.Frame(self)
        frame.grid(row=2, column=0, sticky="nsew", padx=8, pady=4)
        frame.rowconfigure(0, weight=1)
        frame.columnconfigure(0, weight=1)

        self.table = ttk.Treeview(frame, columns=(), show="headings", height=16)
        vbar = ttk.Scrollbar(frame, orient="vertical", command=self.table.yview)
        self.table.configure(yscrollcommand=vbar.set)
        self.table.grid(row=0, column=0, sticky="nsew")
        vbar.grid(row=0, column=1, sticky="ns")

    def _build_statusbar(self) -> None:
        status = ttk.Frame(self)
        status.grid(row=3, column=0, sticky="ew", padx=8, pady=(4, 8))
        self.status_message_var = tk.StringVar(value="Ready.")
        ttk.Label(status, textvariable=self.status_message_var).pack(side="left")

    def _select(self, module: str, form_id: str) -> None:
        if self._on_select_module:
            self._on_select_module(module, form_id)

    # ------------------------------------------------------------------
    # DisplayPort
    # ------------------------------------------------------------------
    def hide_forms(self) -> None:
        for form in self._forms.values():
            form.grid_remove()

    def show_form(self, form_id: str) -> None:
        form = self._forms.get(form_id)
        if form is None:
            raise KeyError(f"Unknown form: {form_id}")
        form.grid(row=1, column=0, sticky="ew")

    def set_module_name(self, text: str) -> None:
        self.module_name_var.set(text)

    def set_table_head(self, markup: str) -> None:
        titles = parse_header(markup)
        column_ids = [f"c{idx}" for idx in range(len(titles))]
        self.table.configure(columns=column_ids)
        for column_id, title in zip(column_ids, titles):
            self.table.heading(column_id, text=title)
            self.table.column(column_id, width=140, anchor="w")

    def set_table_body(self, markup: str) -> None:
        self.table.delete(*self.table.get_children())
        for cells in parse_rows(markup):
            self.table.insert("", "end", values=cells)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def show_toast(self, message: str) -> None:
        """Lightweight user feedback in the status bar."""
        self.status_message_var.set(message)
