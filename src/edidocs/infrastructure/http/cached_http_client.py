"""HTTP client with a forcible local cache."""

import asyncio
import hashlib
import re
from pathlib import Path
from urllib.parse import unquote, unquote_to_bytes, urlsplit

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from edidocs.application.dto import FetchedResource
from edidocs.domain.exceptions import FetchError

# RFC 5987: filename*=charset''percent-encoded (two single quotes)
_FILENAME_STAR_RFC5987 = re.compile(r"filename\*\s*=\s*([\w-]+)'[^']*'([^;]+)", re.IGNORECASE)
_FILENAME_PLAIN = re.compile(r'filename\s*=\s*"?([^";]+)"?', re.IGNORECASE)

DEFAULT_FILENAME = "download"


def _decode_filename(raw: str) -> str:
    """Fix mojibake when UTF-8 bytes were read as Latin-1."""
    raw = raw.strip()
    try:
        return raw.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return raw


def filename_from_content_disposition(value: str | None) -> str | None:
    """filename* (RFC 5987) if present, else the plain filename parameter."""
    if not value:
        return None
    star = _FILENAME_STAR_RFC5987.search(value)
    if star:
        charset, encoded = star.groups()
        try:
            return unquote_to_bytes(encoded.strip()).decode(charset)
        except (ValueError, LookupError):
            pass
    plain = _FILENAME_PLAIN.search(value)
    if plain:
        return _decode_filename(plain.group(1)) or None
    return None


def filename_from_uri(uri: str) -> str:
    """Last path segment of the URI, percent-decoded."""
    segment = urlsplit(uri).path.rstrip("/").rsplit("/", 1)[-1]
    return unquote(segment) or DEFAULT_FILENAME


def cache_key(uri: str) -> str:
    return "edidocs_" + hashlib.sha512(uri.encode("utf-8")).hexdigest()


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, httpx.TransportError)


class CachedHttpClient:
    """Fetches resources over HTTP and keeps a copy of every response on disk.

    The cache is keyed by the SHA-512 of the URI. With prefer_cache a cached
    copy is served regardless of its age. All network access goes through one
    lock so the same resource is never downloaded twice concurrently.
    """

    def __init__(
        self,
        cache_dir: Path,
        *,
        prefer_cache: bool = False,
        timeout_seconds: float = 60.0,
        max_attempts: int = 3,
        login_url: str | None = None,
        username: str | None = None,
        password: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._cache_dir = cache_dir
        self._prefer_cache = prefer_cache
        self._timeout = timeout_seconds
        self._max_attempts = max_attempts
        self._login_url = login_url
        self._username = username
        self._password = password
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._lock = asyncio.Lock()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        client = httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
        )
        if self._login_url and self._username and self._password:
            try:
                client.headers["Authorization"] = f"Bearer {await self._login(client)}"
            except BaseException:
                await client.aclose()
                raise
        self._client = client
        return client

    async def _login(self, client: httpx.AsyncClient) -> str:
        """Exchange basic credentials for a bearer token."""
        logger.debug(f"Using credentials for {self._username} to login")
        response = await client.get(self._login_url, auth=(self._username, self._password))
        response.raise_for_status()
        try:
            token = response.json().get("token")
        except ValueError as e:
            raise FetchError(self._login_url, e) from e
        if not token:
            raise FetchError(self._login_url, RuntimeError(f"login failed for {self._username}"))
        return token

    def _cache_paths(self, uri: str) -> tuple[Path, Path]:
        base = self._cache_dir / cache_key(uri)
        return base.with_suffix(".cachedata"), base.with_suffix(".cachename")

    async def _download(self, uri: str) -> FetchedResource:
        client = await self._get_client()
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=0.5, max=10),
            retry=retry_if_exception(_is_retryable),
            reraise=True,
        ):
            with attempt:
                response = await client.get(uri)
                response.raise_for_status()
        filename = filename_from_content_disposition(
            response.headers.get("content-disposition")
        ) or filename_from_uri(uri)
        return FetchedResource(content=response.content, filename=filename)

    async def get(self, uri: str, prefer_cache: bool = False) -> FetchedResource:
        """Cached copy or fresh download. Raises FetchError."""
        prefer_cache = prefer_cache or self._prefer_cache
        data_path, name_path = self._cache_paths(uri)
        if prefer_cache and data_path.exists() and name_path.exists():
            logger.debug(f"Serving {uri} from cache")
            return FetchedResource(
                content=data_path.read_bytes(),
                filename=name_path.read_text(encoding="utf-8"),
            )

        async with self._lock:
            if prefer_cache:
                logger.warning(f"Prefer cache is set but loading {uri} anyway (cache miss)")
            else:
                logger.debug(f"Loading web resource {uri}")
            try:
                resource = await self._download(uri)
            except httpx.HTTPError as e:
                logger.error(f"Failed to load {uri}: {type(e).__name__}: {e}")
                raise FetchError(uri, e) from e

        self._cache_dir.mkdir(parents=True, exist_ok=True)
        data_path.write_bytes(resource.content)
        name_path.write_text(resource.filename, encoding="utf-8")
        logger.debug(f"Received {len(resource.content)} bytes for {uri}")
        return resource

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
