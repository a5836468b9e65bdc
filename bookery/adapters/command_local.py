"""In-process backend command bridge.

Implements the two command families the dispatcher invokes:

- ``create_table_head`` with ``{"module": <name>}`` returns one header row.
- ``create_table_body_search_<module>`` returns one row per catalog record
  found by the catalog port.

Markup is produced with Jinja2 templates; autoescape keeps record text from
being interpreted as markup by the rendering surface.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from jinja2 import BaseLoader, Environment, TemplateError

from bookery.domain.entities import columns_for
from bookery.domain.errors import UnknownModuleError
from bookery.domain.modules import TABLE_HEAD_COMMAND, Module, ModuleRegistry
from bookery.domain.ports import CatalogPort, CommandPort

from .api_errors import CommandError, CommandNotFoundError

_log = logging.getLogger(__name__)

HEAD_TEMPLATE = """<tr>
{%- for title in columns %}
    <th>{{ title }}</th>
{%- endfor %}
</tr>"""

BODY_TEMPLATE = """
{%- for cells in rows -%}
<tr>
{%- for cell in cells %}
    <td>{{ cell }}</td>
{%- endfor %}
</tr>
{% endfor -%}
"""

Handler = Callable[[Mapping[str, Any]], str]


class LocalCommandBridge(CommandPort):
    """Route command names to local handlers backed by a ``CatalogPort``."""

    def __init__(
        self,
        catalog: CatalogPort,
        registry: Optional[ModuleRegistry] = None,
    ) -> None:
        self.catalog = catalog
        self.registry = registry or ModuleRegistry.default()
        self._env = Environment(loader=BaseLoader(), autoescape=True)
        self._head_template = self._env.from_string(HEAD_TEMPLATE)
        self._body_template = self._env.from_string(BODY_TEMPLATE)
        self._handlers: Dict[str, Handler] = {TABLE_HEAD_COMMAND: self._create_table_head}
        for binding in self.registry.bindings():
            self._handlers[binding.body_command] = self._body_handler(binding.module)

    def commands(self) -> list[str]:
        return sorted(self._handlers)

    def invoke(self, command: str, params: Mapping[str, Any]) -> str:
        handler = self._handlers.get(command)
        if handler is None:
            raise CommandNotFoundError(command)
        _log.debug("invoke %s params=%s", command, dict(params or {}))
        try:
            return handler(params or {})
        except TemplateError as exc:
            raise CommandError(f"{command}: render failed: {exc}", command=command) from exc

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def _create_table_head(self, params: Mapping[str, Any]) -> str:
        raw = params.get("module")
        if raw is None:
            raise CommandError(
                "create_table_head: missing 'module' argument",
                command=TABLE_HEAD_COMMAND,
                code="INVALID_ARGS",
            )
        try:
            module = Module.parse(raw)
        except UnknownModuleError as exc:
            raise CommandError(
                f"create_table_head: {exc}",
                command=TABLE_HEAD_COMMAND,
                code="INVALID_ARGS",
            ) from exc
        return self._head_template.render(columns=columns_for(module))

    def _body_handler(self, module: Module) -> Handler:
        def handler(params: Mapping[str, Any]) -> str:
            token = str(params.get("token") or "")
            records = self.catalog.search(module, token)
            _log.debug("search[%s] token=%r -> %d records", module.value, token, len(records))
            return self._body_template.render(rows=[record.cells() for record in records])

        return handler


__all__ = ["BODY_TEMPLATE", "HEAD_TEMPLATE", "LocalCommandBridge"]
