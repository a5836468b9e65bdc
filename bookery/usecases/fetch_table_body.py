from __future__ import annotations

from dataclasses import dataclass

from bookery.domain.modules import ModuleBinding
from bookery.domain.ports import CommandPort, UseCaseError

from .error_mapping import map_api_error


@dataclass
class FetchTableBody:
    """Run the module-specific search command and return the row markup.

    The binding is resolved by the caller so an unknown module never reaches
    the command port.
    """

    command_port: CommandPort

    def __call__(self, binding: ModuleBinding) -> str:
        try:
            markup = self.command_port.invoke(binding.body_command, {})
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(exc, default_code="TABLE_BODY_FAILED") from exc
        return str(markup or "")
