"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations


from typing import Optional

from bookery.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    CommandError,
    CommandNotFoundError,
)
from bookery.domain.ports import UseCaseError


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Exception raised by a port implementation.
        default_code: Code used when ``exc`` is not an adapter error.
        default_message: Message used when ``exc`` carries no text.

    Returns:
        UseCaseError: ``exc`` itself when already a use-case error, else a new
        instance with a stable code.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, CommandNotFoundError):
        return UseCaseError("COMMAND_NOT_FOUND", f"Backend command missing: {exc.command}")
    if isinstance(exc, CommandError):
        return UseCaseError(exc.code or "COMMAND_FAILED", str(exc))
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, ApiClientError):
        status = exc.status or 0
        if status == 404:
            return UseCaseError("NOT_FOUND", _compose_error_message("Not found", exc.detail))
        if status == 422:
            return UseCaseError(
                "INVALID_PARAMS",
                _compose_error_message("Invalid parameters", exc.detail),
            )
        if status in (401, 403):
            return UseCaseError("AUTH_FAILED", "Auth failed / API key invalid.")
        label = f"Request failed (HTTP {status})" if status else "Request failed"
        return UseCaseError("REQUEST_FAILED", _compose_error_message(label, exc.detail))
    if isinstance(exc, ApiServerError):
        return UseCaseError("SERVER_ERROR", "Library server error, try again.")
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _compose_error_message(base: str, detail: Optional[str]) -> str:
    detail_text = (detail or "").strip()
    if detail_text:
        return f"{base}: {detail_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_api_error"]
