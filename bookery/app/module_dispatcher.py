"""Module-keyed dispatcher that drives navigation and the results table.

The dispatcher owns the navigation state (which module is active) and the
render pipeline for the two table regions. Backend commands run on a worker
pool; their results are handed back to the UI thread through ``call_soon``
and applied only when they are still the latest request for their region.

Call chain:
    ``bookery.app.main.App`` -> view callbacks -> ``ModuleDispatcher.handle``
    -> ``activate_module`` / ``run_search`` -> use cases -> ``CommandPort``.
"""

from __future__ import annotations

import logging
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional, Union

from bookery.domain.errors import UnknownModuleError
from bookery.domain.modules import Module, ModuleBinding, ModuleRegistry
from bookery.domain.ports import CommandPort, DisplayPort, UseCaseError
from bookery.usecases.error_mapping import map_api_error
from bookery.usecases.fetch_table_body import FetchTableBody
from bookery.usecases.fetch_table_head import FetchTableHead

HEAD = "head"
BODY = "body"

CallSoon = Callable[[Callable[[], None]], None]
ErrorHook = Callable[[str, Module, UseCaseError], None]


# ---- Events consumed through ``handle`` ----
@dataclass(frozen=True)
class ModuleSelected:
    module: Any
    form_id: Optional[str] = None


@dataclass(frozen=True)
class SearchSubmitted:
    module: Any = None


DispatcherEvent = Union[ModuleSelected, SearchSubmitted]


@dataclass(frozen=True)
class NavigationState:
    """Which module is active and which form is currently shown."""

    active_module: Optional[Module] = None
    visible_form: Optional[str] = None


class RegionSequencer:
    """Hand out increasing tokens per display region.

    Only the most recently issued token of a region may write to it.
    """

    def __init__(self) -> None:
        self._latest: Dict[str, int] = {HEAD: 0, BODY: 0}

    def issue(self, region: str) -> int:
        self._latest[region] += 1
        return self._latest[region]

    def is_current(self, region: str, token: int) -> bool:
        return self._latest[region] == token

    def invalidate_all(self) -> None:
        for region in self._latest:
            self._latest[region] += 1

    def latest(self, region: str) -> int:
        return self._latest[region]


@dataclass
class SearchHandle:
    """Futures of the backend calls started by one search.

    Either future is ``None`` when its request was never issued.
    """

    module: Optional[Module] = None
    head: Optional[Future] = None
    body: Optional[Future] = None


def _call_inline(callback: Callable[[], None]) -> None:
    callback()


class ModuleDispatcher:
    """Single entry point for module navigation and table rendering."""

    def __init__(
        self,
        *,
        display: DisplayPort,
        command_port: CommandPort,
        registry: Optional[ModuleRegistry] = None,
        executor: Optional[Executor] = None,
        call_soon: Optional[CallSoon] = None,
        on_error: Optional[ErrorHook] = None,
        max_workers: int = 4,
    ) -> None:
        """Wire the dispatcher to its rendering surface and backend.

        Args:
            display: Surface that owns forms, the module label and both
                table regions. Only touched from the UI thread.
            command_port: Backend command bridge.
            registry: Module bindings; defaults to ``ModuleRegistry.default``.
            executor: Pool running backend calls. A ``ThreadPoolExecutor``
                with ``max_workers`` threads is created when omitted.
            call_soon: Schedules a callback on the UI thread. Without it,
                completions are applied on the worker thread that finished.
            on_error: Optional hook receiving ``(region, module, error)`` for
                failures of current (non-superseded) requests.
            max_workers: Pool size used when ``executor`` is omitted.
        """
        self._log = logging.getLogger(__name__)
        self.display = display
        self.registry = registry or ModuleRegistry.default()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="bookery-cmd"
        )
        self._call_soon = call_soon or _call_inline
        self._on_error = on_error
        self._fetch_head = FetchTableHead(command_port)
        self._fetch_body = FetchTableBody(command_port)
        self._sequencer = RegionSequencer()
        self._state = NavigationState()

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def sequencer(self) -> RegionSequencer:
        return self._sequencer

    # ------------------------------------------------------------------
    # Event entry point
    # ------------------------------------------------------------------
    def handle(self, event: DispatcherEvent) -> Optional[SearchHandle]:
        """Route a UI event to the matching operation."""
        if isinstance(event, ModuleSelected):
            binding = self.registry.resolve(event.module)
            if event.form_id and event.form_id != binding.form_id:
                self._log.warning(
                    "Form %s is not bound to %s; showing %s",
                    event.form_id,
                    binding.module.value,
                    binding.form_id,
                )
            self.activate_module(binding.module)
            return None
        if isinstance(event, SearchSubmitted):
            return self.run_search(event.module)
        raise TypeError(f"Unsupported dispatcher event: {type(event).__name__}")

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def activate_module(self, module: Any) -> None:
        """Show only the form of ``module`` and reset both table regions."""
        binding = self.registry.resolve(module)
        # Results still in flight belong to the previous view.
        self._sequencer.invalidate_all()
        self.display.hide_forms()
        self.display.set_table_head("")
        self.display.set_table_body("")
        self.display.show_form(binding.form_id)
        self.display.set_module_name(binding.label)
        self._state = replace(
            self._state, active_module=binding.module, visible_form=binding.form_id
        )
        self._log.debug("Activated module %s (form=%s)", binding.module.value, binding.form_id)

    # ------------------------------------------------------------------
    # Render pipeline
    # ------------------------------------------------------------------
    def load_table_header(self, module: Any) -> Future:
        """Clear the header region and request header markup for ``module``."""
        binding = self.registry.resolve(module)
        token = self._sequencer.issue(HEAD)
        self.display.set_table_head("")
        future = self._executor.submit(self._fetch_head, binding.module)
        future.add_done_callback(
            lambda f: self._call_soon(lambda: self._complete(HEAD, token, binding, f))
        )
        return future

    def load_table_body(self, module: Any) -> Future:
        """Clear the body region and run the search command bound to ``module``.

        Raises:
            UnknownModuleError: ``module`` has no binding; nothing is cleared
                and no backend call is made.
        """
        binding = self.registry.resolve(module)
        token = self._sequencer.issue(BODY)
        self.display.set_table_body("")
        future = self._executor.submit(self._fetch_body, binding)
        future.add_done_callback(
            lambda f: self._call_soon(lambda: self._complete(BODY, token, binding, f))
        )
        return future

    def run_search(self, module: Any = None) -> SearchHandle:
        """Start header and body loads for ``module`` (default: active module).

        Never raises; problems are logged and reflected in the returned handle.
        """
        target = module if module is not None else self._state.active_module
        if target is None:
            self._log.warning("Search ignored: no module selected.")
            return SearchHandle()
        try:
            binding = self.registry.resolve(target)
        except UnknownModuleError as exc:
            self._log.error("Search ignored: %s", exc)
            return SearchHandle()

        handle = SearchHandle(module=binding.module)
        self._log.info("Search requested for %s", binding.module.value)
        try:
            handle.head = self.load_table_header(binding.module)
        except RuntimeError as exc:
            self._log.error("Header request for %s not started: %s", binding.module.value, exc)
        try:
            handle.body = self.load_table_body(binding.module)
        except RuntimeError as exc:
            self._log.error("Body request for %s not started: %s", binding.module.value, exc)
        return handle

    def set_command_port(self, command_port: CommandPort) -> None:
        """Route later requests to ``command_port`` (after a settings change).

        Results still in flight came from the previous backend and are dropped.
        """
        self._fetch_head = FetchTableHead(command_port)
        self._fetch_body = FetchTableBody(command_port)
        self._sequencer.invalidate_all()

    def shutdown(self) -> None:
        """Stop accepting work; running backend calls finish in the background."""
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    # ------------------------------------------------------------------
    # Completion (UI thread)
    # ------------------------------------------------------------------
    def _complete(self, region: str, token: int, binding: ModuleBinding, future: Future) -> None:
        current = self._sequencer.is_current(region, token)
        try:
            markup = future.result()
        except CancelledError:
            self._log.debug("Table %s request for %s cancelled", region, binding.module.value)
            return
        except Exception as exc:
            err = map_api_error(exc, default_code=f"TABLE_{region.upper()}_FAILED")
            self._log.error(
                "Table %s load failed for %s: [%s] %s",
                region,
                binding.module.value,
                err.code,
                err.message,
            )
            if current and self._on_error:
                self._on_error(region, binding.module, err)
            return

        if not current:
            self._log.debug(
                "Discarding superseded table %s for %s (token %d < %d)",
                region,
                binding.module.value,
                token,
                self._sequencer.latest(region),
            )
            return
        if region == HEAD:
            self.display.set_table_head(markup)
        else:
            self.display.set_table_body(markup)


__all__ = [
    "BODY",
    "HEAD",
    "DispatcherEvent",
    "ModuleDispatcher",
    "ModuleSelected",
    "NavigationState",
    "RegionSequencer",
    "SearchHandle",
    "SearchSubmitted",
]
