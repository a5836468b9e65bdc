from __future__ import annotations

from dataclasses import dataclass

from bookery.domain.modules import TABLE_HEAD_COMMAND, Module
from bookery.domain.ports import CommandPort, UseCaseError

from .error_mapping import map_api_error


@dataclass
class FetchTableHead:
    """Ask the backend for the column header markup of one module."""

    command_port: CommandPort

    def __call__(self, module: Module) -> str:
        try:
            markup = self.command_port.invoke(TABLE_HEAD_COMMAND, {"module": module.value})
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(exc, default_code="TABLE_HEAD_FAILED") from exc
        return str(markup or "")
