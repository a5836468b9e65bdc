from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests

from bookery.domain.entities import CatalogRecord, parse_record
from bookery.domain.modules import Module, ModuleRegistry
from bookery.domain.ports import CatalogPort

from .api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    response_detail,
    status_message,
)
from .http_client import HttpConfig, RetryingSession

_log = logging.getLogger(__name__)


class CatalogRestAdapter(CatalogPort):
    """REST adapter for the library API search endpoints.

    Each module is served under its own path segment, for example
    ``GET /author/search?token=ann``; the response is a JSON list of records.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        request_timeout_s: int = 10,
        retries: int = 2,
        registry: Optional[ModuleRegistry] = None,
    ) -> None:
        base = str(base_url or "").strip()
        if not base:
            raise ValueError("CatalogRestAdapter requires a base URL")
        self.base_url = base.rstrip("/")
        self.registry = registry or ModuleRegistry.default()
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = RetryingSession(api_key, self.cfg)

    def search(self, module: Module, token: str = "") -> List[CatalogRecord]:
        binding = self.registry.resolve(module)
        url = self._make_url(f"/{binding.api_segment}/search")
        ctx = f"search[{binding.module.value}]"
        _log.debug("%s GET %s token=%r", ctx, url, token)
        resp = self.session.get(url, params={"token": token or ""})
        self._ensure_ok(resp, ctx)
        data = self._json_any(resp, ctx)
        if not isinstance(data, list):
            raise ApiError(f"{ctx}: expected list response", context=ctx)
        records: List[CatalogRecord] = []
        for entry in data:
            if not isinstance(entry, dict):
                _log.debug("%s: skipping non-object entry %r", ctx, entry)
                continue
            records.append(parse_record(binding.module, entry))
        return records

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _make_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        status = resp.status_code
        if 200 <= status < 300:
            return
        detail = response_detail(resp)
        message = status_message(ctx, status, detail)
        if 400 <= status < 500:
            error_cls = ApiClientError
        elif 500 <= status < 600:
            error_cls = ApiServerError
        else:
            error_cls = ApiError
        raise error_cls(message, status=status, detail=detail, context=ctx)

    @staticmethod
    def _json_any(resp: requests.Response, ctx: str) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            snippet = getattr(resp, "text", "")[:400]
            raise ApiError(f"{ctx}: invalid JSON response: {snippet}", context=ctx) from exc


__all__ = ["CatalogRestAdapter"]
