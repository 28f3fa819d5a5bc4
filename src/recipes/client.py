from __future__ import annotations

import asyncio
import logging
from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .config import EdamamSettings
from .models import RecipeLookup, RecipeRecord, SearchPage

logger = logging.getLogger(__name__)

BODY_PREVIEW_CHARS = 500

ModelT = TypeVar("ModelT", bound=BaseModel)


def redact_url(url: str) -> str:
    """Mask the app_key query value for logging."""
    parsed = httpx.URL(url)
    if "app_key" not in parsed.params:
        return url
    return str(parsed.copy_set_param("app_key", "***"))


class EdamamError(Exception):
    """Base error for a request to the recipe provider that produced no usable page."""

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.url = url


class TransportFailure(EdamamError):
    """No response was received (connection, timeout, protocol error)."""


class DecodeFailure(EdamamError):
    """A response arrived but its body is not a valid payload (HTML page, bad JSON, wrong shape)."""

    def __init__(self, message: str, *, url: str, status_code: Optional[int] = None) -> None:
        super().__init__(message, url=url)
        self.status_code = status_code


class EdamamClient:
    """Thin async GET client for the Edamam v2 endpoints.

    Transient transport errors are retried with exponential backoff. HTTP
    status codes are not treated as errors on their own: an error page simply
    fails to decode.
    """

    def __init__(
        self,
        settings: EdamamSettings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or EdamamSettings()
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.timeout_seconds),
            limits=httpx.Limits(
                max_keepalive_connections=self.settings.max_concurrency,
                max_connections=self.settings.max_concurrency,
            ),
            headers={"Accept": "application/json"},
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "EdamamClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def get_page(self, url: str) -> SearchPage:
        return await self._get_model(url, SearchPage)

    async def get_recipe(self, url: str) -> RecipeRecord:
        lookup = await self._get_model(url, RecipeLookup)
        return lookup.to_record()

    async def _get_model(self, url: str, model: Type[ModelT]) -> ModelT:
        response = await self._get(url)
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(
                "Decode error for %s: %s\nBody preview (first %d chars):\n%s",
                redact_url(url),
                e,
                BODY_PREVIEW_CHARS,
                response.text[:BODY_PREVIEW_CHARS],
            )
            raise DecodeFailure(
                f"Could not decode {model.__name__} (status {response.status_code})",
                url=url,
                status_code=response.status_code,
            ) from e

    async def _get(self, url: str) -> httpx.Response:
        last_error: Optional[httpx.TransportError] = None
        for attempt in range(self.settings.max_retries + 1):
            if attempt:
                delay = self.settings.backoff_seconds * (2 ** (attempt - 1))
                logger.info("Retrying %s in %.2fs (attempt %d)", redact_url(url), delay, attempt + 1)
                await asyncio.sleep(delay)
            try:
                response = await self._http.get(url)
            except httpx.TransportError as e:
                logger.warning("Request error on %s: %r", redact_url(url), e)
                last_error = e
                continue
            except httpx.RequestError as e:
                # Body arrived but could not be read, e.g. a corrupt Content-Encoding.
                logger.error("Unreadable response from %s: %r", redact_url(url), e)
                raise DecodeFailure(f"Unreadable response body: {e!r}", url=url) from e
            self._debug_response(url, response)
            return response

        raise TransportFailure(f"Request failed: {last_error!r}", url=url) from last_error

    @staticmethod
    def _debug_response(url: str, response: httpx.Response) -> None:
        logger.debug(
            "GET %s -> %s (Content-Type: %s)",
            redact_url(url),
            response.status_code,
            response.headers.get("Content-Type"),
        )
