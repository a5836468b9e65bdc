"""Errors raised by the catalog adapters and the command bridge.

The library API answers failed searches with a bare status code. Request
rejections (bad query string, wrong content type) carry a short plain-text
body; a JSON object with ``message``/``detail`` is accepted too in case a
proxy in front of the API rewrites errors.
"""

from __future__ import annotations

from typing import Any, Optional

_DETAIL_KEYS = ("message", "detail", "error")
_DETAIL_LIMIT = 200


class ApiError(RuntimeError):
    """Base class for backend adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        detail: Optional[str] = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.detail = detail
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the library API."""


class ApiServerError(ApiError):
    """HTTP 5xx from the library API."""


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


class CommandError(ApiError):
    """A backend command rejected its arguments or failed while rendering."""

    def __init__(self, message: str, *, command: str, code: str = "COMMAND_FAILED") -> None:
        super().__init__(message, context=command)
        self.command = command
        self.code = code


class CommandNotFoundError(CommandError):
    """No handler is registered for the requested command name."""

    def __init__(self, command: str) -> None:
        super().__init__(
            f"Command not found: {command}",
            command=command,
            code="COMMAND_NOT_FOUND",
        )


def response_detail(resp: Any) -> Optional[str]:
    """Return the human-readable part of an error response, if any.

    Never raises: an unreadable body simply yields ``None``.
    """
    try:
        data = resp.json()
    except ValueError:
        data = getattr(resp, "text", "") or ""
    if isinstance(data, dict):
        data = next(
            (data[key] for key in _DETAIL_KEYS if isinstance(data.get(key), str)),
            "",
        )
    if not isinstance(data, str):
        return None
    # Framework rejections put the useful part on the first line.
    first_line = data.strip().splitlines()[0] if data.strip() else ""
    return first_line[:_DETAIL_LIMIT] or None


def status_message(ctx: str, status: int, detail: Optional[str]) -> str:
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "CommandError",
    "CommandNotFoundError",
    "response_detail",
    "status_message",
]
