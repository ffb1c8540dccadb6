"""Job-board REST API client and the HTTP-backed search service."""

import asyncio
import logging
from types import TracebackType
from typing import Any, Generic

import aiohttp
from pydantic import ValidationError

from src.core.config import ApiConfig
from src.core.errors import TransportFailure
from src.core.schemas import Page
from src.services.base import E, F, SearchService

logger = logging.getLogger(__name__)


class ApiClient:
    """Async context manager that owns one aiohttp session for the API.

    Usage::

        async with ApiClient(settings.api) as client:
            service = HttpSearchService(client, "/job-posts", JobPost, "jobs")
            page = await service.search(JobFilters())
    """

    def __init__(self, config: ApiConfig) -> None:
        self._config = config
        self._session: aiohttp.ClientSession | None = None

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def session(self) -> aiohttp.ClientSession:
        """The shared session. Raises if not entered."""
        if self._session is None:
            msg = "ApiClient not entered — use 'async with'"
            raise RuntimeError(msg)
        return self._session

    async def __aenter__(self) -> "ApiClient":
        headers = {"Accept": "application/json"}
        token = self._config.resolved_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        else:
            logger.debug("No API token configured, requests are anonymous")
        self._session = aiohttp.ClientSession(
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=self._config.timeout_s),
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None


class HttpSearchService(SearchService[E, F], Generic[E, F]):
    """GETs ``{base_url}{path}`` with the filter-set as query params."""

    def __init__(
        self,
        client: ApiClient,
        path: str,
        entity_type: type[E],
        service_id: str,
    ) -> None:
        self._client = client
        self._path = path
        self._page_type = Page[entity_type]  # type: ignore[valid-type]
        self._service_id = service_id

    @property
    def service_id(self) -> str:
        return self._service_id

    @property
    def url(self) -> str:
        return f"{self._client.base_url}{self._path}"

    async def search(self, filters: F) -> Page[E]:
        params = filters.to_params()
        logger.debug("GET %s %s", self.url, params)
        try:
            async with self._client.session.get(self.url, params=params) as resp:
                body = await _read_json(resp)
                if resp.status >= 400:
                    message = _error_message(body)
                    logger.debug("%s answered %d: %s", self.url, resp.status, message)
                    raise TransportFailure(message, status=resp.status)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug("Request to %s failed: %r", self.url, e)
            raise TransportFailure(None) from e

        try:
            return self._page_type.model_validate(body)  # type: ignore[no-any-return]
        except ValidationError as e:
            logger.warning("Malformed page from %s: %d errors", self.url, e.error_count())
            raise TransportFailure(None, status=200) from e


async def _read_json(resp: aiohttp.ClientResponse) -> Any:
    """Decode a JSON body regardless of content type. None if undecodable."""
    try:
        return await resp.json(content_type=None)
    except ValueError:
        return None


def _error_message(body: Any) -> str | None:
    """Pull the server's human-readable message out of an error body.

    NestJS validation errors carry a list of messages; those are joined.
    """
    if not isinstance(body, dict):
        return None
    message = body.get("message")
    if isinstance(message, list):
        parts = [str(m) for m in message if m]
        return "; ".join(parts) or None
    if isinstance(message, str) and message.strip():
        return message.strip()
    return None
