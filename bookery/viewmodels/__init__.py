"""ViewModel package for UI state and command surfaces.

Call context:
    ``bookery/app/main.py`` and ``bookery/app/controller.py`` import the
    viewmodels from this package to bind view callbacks to state transitions.

Dependencies:
    Modules in this package depend on domain types and ``bookery.utils``. I/O adapters and
    use-case orchestration remain outside.
"""
