from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple


class DisplayRecorder:
    """DisplayPort double recording every call in order."""

    def __init__(self, form_ids: List[str]) -> None:
        self.visible: Dict[str, bool] = {form_id: False for form_id in form_ids}
        self.module_name = ""
        self.head = "<stale head>"
        self.body = "<stale body>"
        self.calls: List[Tuple[str, Any]] = []

    def hide_forms(self) -> None:
        self.calls.append(("hide_forms", None))
        for form_id in self.visible:
            self.visible[form_id] = False

    def show_form(self, form_id: str) -> None:
        self.calls.append(("show_form", form_id))
        self.visible[form_id] = True

    def set_module_name(self, text: str) -> None:
        self.calls.append(("set_module_name", text))
        self.module_name = text

    def set_table_head(self, markup: str) -> None:
        self.calls.append(("set_table_head", markup))
        self.head = markup

    def set_table_body(self, markup: str) -> None:
        self.calls.append(("set_table_body", markup))
        self.body = markup

    def visible_forms(self) -> List[str]:
        return [form_id for form_id, shown in self.visible.items() if shown]


class CommandStub:
    """CommandPort double returning canned markup or raising per command."""

    def __init__(
        self,
        responses: Optional[Mapping[str, Any]] = None,
        *,
        on_invoke: Optional[Callable[[str, Mapping[str, Any]], None]] = None,
    ) -> None:
        self.responses = dict(responses or {})
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self._on_invoke = on_invoke

    def invoke(self, command: str, params: Mapping[str, Any]) -> str:
        self.calls.append((command, dict(params)))
        if self._on_invoke:
            self._on_invoke(command, params)
        response = self.responses.get(command, "")
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(params)
        return response

    def commands(self) -> List[str]:
        return [command for command, _ in self.calls]


class ImmediateExecutor(Executor):
    """Run submitted work inline and return an already completed future."""

    def submit(self, fn, /, *args, **kwargs) -> Future:
        future: Future = Future()
        try:
            result = fn(*args, **kwargs)
        except BaseException as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future


class ManualExecutor(Executor):
    """Queue submitted work until the test runs it explicitly."""

    def __init__(self) -> None:
        self.pending: List[Tuple[Future, Callable[[], Any]]] = []

    def submit(self, fn, /, *args, **kwargs) -> Future:
        future: Future = Future()
        self.pending.append((future, lambda: fn(*args, **kwargs)))
        return future

    def run(self, index: int) -> None:
        future, work = self.pending.pop(index)
        try:
            result = work()
        except BaseException as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)

    def run_all(self) -> None:
        while self.pending:
            self.run(0)


__all__ = ["CommandStub", "DisplayRecorder", "ImmediateExecutor", "ManualExecutor"]
