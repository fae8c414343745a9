"""Tests for the caching HTTP client."""

import base64

import httpx
import pytest

from edidocs.domain.exceptions import FetchError
from edidocs.infrastructure.http.cached_http_client import (
    CachedHttpClient,
    cache_key,
    filename_from_content_disposition,
    filename_from_uri,
)

URI = "https://example.test/index.php?id=38&uid=4711"


class TestFilenames:
    def test_rfc5987_filename_preferred(self) -> None:
        header = "attachment; filename=\"fallback.pdf\"; filename*=UTF-8''Z%C3%A4hlpunkt_AHB.pdf"
        assert filename_from_content_disposition(header) == "Zählpunkt_AHB.pdf"

    def test_plain_filename(self) -> None:
        header = 'attachment; filename="APERAK_MIG_2_1a_2014_04_01.pdf"'
        assert filename_from_content_disposition(header) == "APERAK_MIG_2_1a_2014_04_01.pdf"

    def test_plain_filename_mojibake_fixed(self) -> None:
        mojibake = "Zählpunkt.pdf".encode("utf-8").decode("latin-1")
        assert filename_from_content_disposition(f"attachment; filename={mojibake}") == "Zählpunkt.pdf"

    def test_missing_header(self) -> None:
        assert filename_from_content_disposition(None) is None
        assert filename_from_content_disposition("inline") is None

    def test_filename_from_uri(self) -> None:
        assert filename_from_uri("https://example.test/files/UTILMD%20AHB.pdf") == "UTILMD AHB.pdf"
        assert filename_from_uri("https://example.test/") == "download"

    def test_cache_key_is_stable(self) -> None:
        key = cache_key(URI)
        assert key == cache_key(URI)
        assert key.startswith("edidocs_")
        assert len(key) == len("edidocs_") + 128


def _client(tmp_path, handler, **kwargs) -> CachedHttpClient:
    return CachedHttpClient(tmp_path, transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
async def test_download_uses_content_disposition_and_fills_cache(tmp_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=b"%PDF-1.4",
            headers={"Content-Disposition": 'attachment; filename="UTILMD_AHB.pdf"'},
        )

    client = _client(tmp_path, handler)
    resource = await client.get(URI)
    await client.aclose()

    assert resource.filename == "UTILMD_AHB.pdf"
    assert resource.content == b"%PDF-1.4"
    assert (tmp_path / f"{cache_key(URI)}.cachedata").read_bytes() == b"%PDF-1.4"
    assert (tmp_path / f"{cache_key(URI)}.cachename").read_text(encoding="utf-8") == "UTILMD_AHB.pdf"


@pytest.mark.asyncio
async def test_prefer_cache_skips_network(tmp_path) -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url)
        return httpx.Response(200, content=b"body")

    client = _client(tmp_path, handler)
    await client.get("https://example.test/a.pdf")
    cached = await client.get("https://example.test/a.pdf", prefer_cache=True)
    await client.get("https://example.test/a.pdf")
    await client.aclose()

    assert cached.content == b"body"
    assert cached.filename == "a.pdf"
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_prefer_cache_miss_loads_anyway(tmp_path) -> None:
    client = _client(tmp_path, lambda request: httpx.Response(200, content=b"x"), prefer_cache=True)
    resource = await client.get("https://example.test/b.pdf")
    await client.aclose()
    assert resource.content == b"x"


@pytest.mark.asyncio
async def test_client_error_is_not_retried(tmp_path) -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(404)

    client = _client(tmp_path, handler, max_attempts=3)
    with pytest.raises(FetchError) as exc_info:
        await client.get(URI)
    await client.aclose()

    assert len(calls) == 1
    assert exc_info.value.uri == URI
    assert isinstance(exc_info.value.cause, httpx.HTTPStatusError)
    assert not (tmp_path / f"{cache_key(URI)}.cachedata").exists()


@pytest.mark.asyncio
async def test_server_error_is_retried(tmp_path) -> None:
    responses = iter([httpx.Response(503), httpx.Response(200, content=b"ok")])

    client = _client(tmp_path, lambda request: next(responses), max_attempts=3)
    resource = await client.get(URI)
    await client.aclose()

    assert resource.content == b"ok"


@pytest.mark.asyncio
async def test_transport_error_raises_fetch_error(tmp_path) -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(tmp_path, handler, max_attempts=2)
    with pytest.raises(FetchError):
        await client.get(URI)
    await client.aclose()

    assert len(calls) == 2


@pytest.mark.asyncio
async def test_login_sends_bearer_token(tmp_path) -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/login":
            seen["login"] = request.headers["Authorization"]
            return httpx.Response(200, json={"token": "t0k3n"})
        seen["download"] = request.headers.get("Authorization")
        return httpx.Response(200, content=b"data")

    client = _client(
        tmp_path,
        handler,
        login_url="https://portal.test/api/login",
        username="user",
        password="secret",
    )
    await client.get("https://portal.test/file.pdf")
    await client.aclose()

    assert seen["login"] == "Basic " + base64.b64encode(b"user:secret").decode()
    assert seen["download"] == "Bearer t0k3n"


@pytest.mark.asyncio
async def test_login_without_token_fails(tmp_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={})

    client = _client(
        tmp_path,
        handler,
        login_url="https://portal.test/api/login",
        username="user",
        password="secret",
    )
    with pytest.raises(FetchError):
        await client.get("https://portal.test/file.pdf")
