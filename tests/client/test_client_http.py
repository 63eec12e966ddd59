"""Unit tests for the client HTTP utilities in client/_http.py.

1. Helper functions: error message parsing, status mapping, backoff
2. HTTPClient: requests, error mapping, retry
3. AsyncHTTPClient: same behaviour, awaited

These tests use httpx's MockTransport to avoid real network calls.
"""

import json
from unittest.mock import patch

import httpx
import pytest

from client._http import (
    DEFAULT_RETRY_BACKOFF_BASE,
    DEFAULT_RETRY_BACKOFF_MAX,
    AsyncHTTPClient,
    HTTPClient,
    _calculate_backoff,
    _parse_error_message,
    _raise_for_status,
)
from client.exceptions import (
    APIError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)


def make_client(handler, **kwargs) -> HTTPClient:
    return HTTPClient(base_url="http://kb.test", transport=httpx.MockTransport(handler), **kwargs)


def make_async_client(handler, **kwargs) -> AsyncHTTPClient:
    return AsyncHTTPClient(base_url="http://kb.test", transport=httpx.MockTransport(handler), **kwargs)


# =============================================================================
# Helper Functions
# =============================================================================


class TestParseErrorMessage:
    def test_error_key(self):
        response = httpx.Response(400, json={"error": "missing path parameter"})
        assert _parse_error_message(response) == "missing path parameter"

    def test_detail_key(self):
        response = httpx.Response(405, json={"detail": "Method Not Allowed"})
        assert _parse_error_message(response) == "Method Not Allowed"

    def test_plain_text(self):
        response = httpx.Response(404, text="File not found")
        assert _parse_error_message(response) == "File not found"

    def test_empty_body(self):
        response = httpx.Response(502)
        assert _parse_error_message(response) == "HTTP 502 error"

    def test_unrecognised_json(self):
        response = httpx.Response(500, json=["odd"])
        assert _parse_error_message(response) == "['odd']"


class TestRaiseForStatus:
    def test_success_does_not_raise(self):
        _raise_for_status(httpx.Response(200, json={}))

    def test_400_is_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            _raise_for_status(httpx.Response(400, json={"error": "missing path parameter"}))

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "missing path parameter"
        assert exc_info.value.response_body == {"error": "missing path parameter"}

    def test_404_is_not_found(self):
        with pytest.raises(NotFoundError):
            _raise_for_status(httpx.Response(404, json={"error": "API route not found"}))

    def test_500_is_server_error(self):
        with pytest.raises(ServerError) as exc_info:
            _raise_for_status(httpx.Response(500, json={"error": "failed to read file: nope"}))

        assert exc_info.value.message == "failed to read file: nope"

    def test_503_is_server_error_with_code(self):
        with pytest.raises(ServerError) as exc_info:
            _raise_for_status(httpx.Response(503, text="unavailable"))

        assert exc_info.value.status_code == 503
        assert exc_info.value.response_body == "unavailable"

    def test_other_4xx_is_api_error(self):
        with pytest.raises(APIError) as exc_info:
            _raise_for_status(httpx.Response(418, json={"error": "teapot"}))

        assert type(exc_info.value) is APIError
        assert exc_info.value.status_code == 418


class TestCalculateBackoff:
    def test_exponential(self):
        assert _calculate_backoff(0) == DEFAULT_RETRY_BACKOFF_BASE
        assert _calculate_backoff(1) == DEFAULT_RETRY_BACKOFF_BASE * 2
        assert _calculate_backoff(2) == DEFAULT_RETRY_BACKOFF_BASE * 4

    def test_capped(self):
        assert _calculate_backoff(20) == DEFAULT_RETRY_BACKOFF_MAX


# =============================================================================
# HTTPClient
# =============================================================================


class TestHTTPClient:
    def test_initialization(self):
        client = HTTPClient(base_url="http://localhost:3000/")

        assert client.base_url == "http://localhost:3000"
        assert client.timeout == 30.0
        assert client.retry_enabled is False
        assert client.max_retries == 3

        client.close()

    def test_get_with_params(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == "/api/read-file"
            assert request.url.params["path"] == "/notes/a.md"
            return httpx.Response(200, json={"content": "hi"})

        with make_client(handler) as client:
            assert client.get("/api/read-file", params={"path": "/notes/a.md"}) == {"content": "hi"}

    def test_none_params_dropped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert "path" not in request.url.params
            return httpx.Response(400, json={"error": "missing path parameter"})

        with make_client(handler) as client:
            with pytest.raises(ValidationError):
                client.get("/api/read-directory", params={"path": None})

    def test_post_json_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert json.loads(request.read()) == {"path": "/a.md", "content": ""}
            return httpx.Response(200, json={"success": True, "message": "file saved"})

        with make_client(handler) as client:
            result = client.post("/api/write-file", json={"path": "/a.md", "content": ""})

        assert result["success"] is True

    def test_empty_response_is_none(self):
        with make_client(lambda request: httpx.Response(200)) as client:
            assert client.get("/anything") is None

    def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with make_client(handler) as client:
            with pytest.raises(ConnectionError) as exc_info:
                client.get("/api/read-file")

        assert exc_info.value.url == "http://kb.test/api/read-file"

    def test_timeout_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with make_client(handler, timeout=5.0) as client:
            with pytest.raises(TimeoutError) as exc_info:
                client.get("/api/read-file")

        assert exc_info.value.timeout == 5.0

    def test_retry_on_503_then_success(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) < 3:
                return httpx.Response(503)
            return httpx.Response(200, json={"content": "ok"})

        with patch("client._http.time.sleep") as sleep:
            with make_client(handler, retry_enabled=True, max_retries=3) as client:
                assert client.get("/api/read-file") == {"content": "ok"}

        assert len(calls) == 3
        assert sleep.call_count == 2

    def test_retries_exhausted(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503, text="busy")

        with patch("client._http.time.sleep"):
            with make_client(handler, retry_enabled=True, max_retries=2) as client:
                with pytest.raises(ServerError):
                    client.get("/api/read-file")

        assert len(calls) == 3

    def test_no_retry_on_500(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500, json={"error": "failed to read file: x"})

        with make_client(handler, retry_enabled=True) as client:
            with pytest.raises(ServerError):
                client.get("/api/read-file")

        assert len(calls) == 1

    def test_retry_on_connection_error(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, json=[])

        with patch("client._http.time.sleep"):
            with make_client(handler, retry_enabled=True) as client:
                assert client.get("/api/read-directory") == []

        assert len(calls) == 2


# =============================================================================
# AsyncHTTPClient
# =============================================================================


class TestAsyncHTTPClient:
    async def test_context_manager(self):
        async with AsyncHTTPClient(base_url="http://kb.test") as client:
            assert isinstance(client, AsyncHTTPClient)

    async def test_get(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"content": "async"})

        async with make_async_client(handler) as client:
            assert await client.get("/api/read-file", params={"path": "x"}) == {"content": "async"}

    async def test_post(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            return httpx.Response(200, json={"success": True, "message": "content appended"})

        async with make_async_client(handler) as client:
            result = await client.post("/api/append-file", json={"path": "x", "content": "y"})

        assert result["message"] == "content appended"

    async def test_404_raises_not_found(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"error": "API route not found"})

        async with make_async_client(handler) as client:
            with pytest.raises(NotFoundError):
                await client.get("/api/nope")

    async def test_connection_error(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with make_async_client(handler) as client:
            with pytest.raises(ConnectionError):
                await client.get("/api/read-file")

    async def test_retry_on_503(self):
        calls = []

        async def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) == 1:
                return httpx.Response(503)
            return httpx.Response(200, json={"content": "ok"})

        with patch("client._http._calculate_backoff", return_value=0):
            async with make_async_client(handler, retry_enabled=True) as client:
                assert await client.get("/api/read-file") == {"content": "ok"}

        assert len(calls) == 2
