"""Application composition layer for the Tkinter GUI.

The dispatcher, controller and views in this package wire navigation and
search events to the backend command bridge without placing business logic
in views.
"""
