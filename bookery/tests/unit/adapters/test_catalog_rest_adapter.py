"""CatalogRestAdapter against a canned session (no network)."""

from __future__ import annotations

import json

import pytest
from requests import exceptions as req_exc

from bookery.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
)
from bookery.adapters.catalog_rest import CatalogRestAdapter
from bookery.domain.entities import Book, Rental
from bookery.domain.modules import Module


class _FakeResponse:
    def __init__(self, status_code: int, payload: object = None, text: str | None = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class _FakeSession:
    """requests.Session double recording every GET."""

    def __init__(self, *responses) -> None:
        self._responses = list(responses)
        self.calls = []

    def get(self, url, *, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _adapter(*responses, **kwargs):
    adapter = CatalogRestAdapter("http://library.local/", **kwargs)
    fake = _FakeSession(*responses)
    adapter.session.session = fake
    return adapter, fake


def test_book_search_hits_module_route_and_parses_records():
    adapter, fake = _adapter(
        _FakeResponse(
            200,
            [
                {
                    "id": "b-1",
                    "name": "Dom Casmurro",
                    "author_uuid": "a-1",
                    "editor": "Garnier",
                    "release": "1899-01-01",
                },
                "junk",
            ],
        ),
        api_key="k",
        request_timeout_s=4,
    )
    records = adapter.search(Module.BOOK, "dom")

    assert records == [Book("b-1", "Dom Casmurro", "a-1", "Garnier", "1899-01-01")]
    call = fake.calls[0]
    assert call["url"] == "http://library.local/book/search"
    assert call["params"] == {"token": "dom"}
    assert call["headers"] == {"Accept": "application/json", "X-API-Key": "k"}
    assert call["timeout"] == 4


@pytest.mark.parametrize(
    "module, path",
    [
        (Module.AUTHOR, "/author/search"),
        (Module.CUSTOMER, "/costumer/search"),
        (Module.RENTAL, "/rent/search"),
    ],
)
def test_routes_use_library_spelling(module, path):
    adapter, fake = _adapter(_FakeResponse(200, []))
    assert adapter.search(module) == []
    assert fake.calls[0]["url"] == f"http://library.local{path}"
    assert fake.calls[0]["params"] == {"token": ""}
    assert "X-API-Key" not in fake.calls[0]["headers"]


def test_rental_records_use_uuid_fallbacks():
    adapter, _ = _adapter(
        _FakeResponse(
            200,
            [
                {
                    "id": "r-1",
                    "costumer_uuid": "c-1",
                    "book_uuid": "b-1",
                    "borrowed_at": "2024-01-05",
                    "due_date": "2024-01-19",
                    "returned_at": None,
                }
            ],
        )
    )
    (rental,) = adapter.search(Module.RENTAL)
    assert rental == Rental("r-1", "c-1", "b-1", "2024-01-05", "2024-01-19", None)


def test_client_error_carries_status_and_detail():
    adapter, _ = _adapter(_FakeResponse(422, {"message": "bad token"}))
    with pytest.raises(ApiClientError) as excinfo:
        adapter.search(Module.AUTHOR, "??")
    err = excinfo.value
    assert err.status == 422
    assert err.detail == "bad token"
    assert "search[Author]: bad token (HTTP 422)" in str(err)


def test_plain_text_rejection_keeps_first_line():
    adapter, _ = _adapter(
        _FakeResponse(
            400,
            ValueError("not json"),
            text="Failed to deserialize query string: missing field `token`\nat line 1",
        )
    )
    with pytest.raises(ApiClientError) as excinfo:
        adapter.search(Module.BOOK)
    assert excinfo.value.detail == "Failed to deserialize query string: missing field `token`"


def test_bare_status_has_no_detail():
    adapter, _ = _adapter(_FakeResponse(404, ValueError("empty"), text=""))
    with pytest.raises(ApiClientError) as excinfo:
        adapter.search(Module.RENTAL)
    assert excinfo.value.detail is None
    assert str(excinfo.value) == "search[Rental]: HTTP 404"


def test_server_error_is_typed():
    adapter, _ = _adapter(_FakeResponse(500, {"message": "db down"}))
    with pytest.raises(ApiServerError) as excinfo:
        adapter.search(Module.BOOK)
    assert excinfo.value.status == 500


def test_non_list_body_is_rejected():
    adapter, _ = _adapter(_FakeResponse(200, {"items": []}))
    with pytest.raises(ApiError, match="expected list response"):
        adapter.search(Module.AUTHOR)


def test_invalid_json_is_rejected():
    adapter, _ = _adapter(_FakeResponse(200, ValueError("no json"), text="<html>"))
    with pytest.raises(ApiError, match="invalid JSON response"):
        adapter.search(Module.AUTHOR)


def test_timeouts_are_retried_then_raised():
    adapter, fake = _adapter(
        req_exc.Timeout("slow"),
        req_exc.ConnectionError("refused"),
        retries=1,
    )
    with pytest.raises(ApiTimeoutError):
        adapter.search(Module.AUTHOR)
    assert len(fake.calls) == 2


def test_retry_recovers_after_transient_timeout():
    adapter, fake = _adapter(req_exc.Timeout("slow"), _FakeResponse(200, []), retries=2)
    assert adapter.search(Module.AUTHOR) == []
    assert len(fake.calls) == 2


def test_other_request_errors_are_not_retried():
    adapter, fake = _adapter(req_exc.InvalidURL("bad"), retries=3)
    with pytest.raises(ApiError):
        adapter.search(Module.AUTHOR)
    assert len(fake.calls) == 1


def test_empty_base_url_is_rejected():
    with pytest.raises(ValueError):
        CatalogRestAdapter("  ")
