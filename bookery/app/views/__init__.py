"""Tkinter views. UI code only; callbacks are injected by ``bookery.app.main``."""
