"""Photo provider capability and shared aiohttp plumbing.

A provider turns a search phrase into an ordered list of Candidate photos.
Providers never raise to the caller: missing credentials, non-2xx responses
and network or decoding errors all come back as `ProviderResponse(ok=False)`.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Protocol, runtime_checkable

import aiohttp
from pydantic import ValidationError

from recipe_photos.models.models import Candidate, PhotoSource, ProviderResponse
from recipe_photos.utils.errors import safe_execute_async
from recipe_photos.utils.logger import log_context, logger


@runtime_checkable
class PhotoProvider(Protocol):
    """Search capability consumed by the orchestrator."""

    source: PhotoSource

    @property
    def is_available(self) -> bool: ...

    async def search(self, query: str) -> ProviderResponse: ...


class HttpPhotoProvider(ABC):
    """Base class for JSON photo search APIs reached over aiohttp."""

    source: PhotoSource
    endpoint: str

    def __init__(self, api_key: str, per_page: int = 15, timeout_seconds: float = 10.0) -> None:
        """Initialize provider.

        Args:
            api_key: Provider API key. Empty means the provider is unavailable.
            per_page: Number of photos requested per search.
            timeout_seconds: Total HTTP timeout per search.
        """
        self.api_key = api_key or ""
        self.per_page = per_page
        self.timeout_seconds = timeout_seconds

    @property
    def is_available(self) -> bool:
        return bool(self.api_key)

    @abstractmethod
    def build_params(self, query: str) -> dict:
        """Query-string parameters for a search."""

    @abstractmethod
    def build_headers(self) -> dict:
        """Authentication headers."""

    @abstractmethod
    def parse_item(self, item: dict) -> Candidate:
        """Map one provider result item to a Candidate (may raise on malformed data)."""

    @abstractmethod
    def extract_items(self, data: dict) -> List[Any]:
        """Pull the list of result items out of a decoded response."""

    def parse_results(self, data: Any) -> List[Candidate]:
        """Map a decoded response to candidates, skipping malformed items."""
        if not isinstance(data, dict):
            return []

        candidates = []
        for item in self.extract_items(data) or []:
            try:
                candidates.append(self.parse_item(item))
            except (KeyError, TypeError, AttributeError, ValidationError) as e:
                logger.debug(f"Skipping malformed {self.source.value} result: {e}")
        return candidates

    async def _fetch_json(self, query: str) -> Optional[dict]:
        """GET the search endpoint; None on a non-2xx status."""
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(
                self.endpoint, params=self.build_params(query), headers=self.build_headers()
            ) as response:
                if not 200 <= response.status < 300:
                    logger.warning(
                        f"{self.source.value} API error {response.status} for '{query}'",
                        extra=log_context(provider=self.source.value, query=query),
                    )
                    return None
                return await response.json()

    async def search(self, query: str) -> ProviderResponse:
        """Search photos for a phrase.

        Args:
            query: Search phrase as sent to the provider.

        Returns:
            ProviderResponse with candidates in provider order, or ok=False
            when the provider is unavailable or the call failed.
        """
        if not self.is_available:
            logger.debug(f"{self.source.value} API key not configured, skipping")
            return ProviderResponse(ok=False)

        logger.info(f"🔍 {self.source.value} search: '{query}'", extra=log_context(provider=self.source.value))
        data = await safe_execute_async(
            self._fetch_json(query),
            f"{self.source.value} search failed for '{query}'",
            log_level="warning",
            default_return=None,
            extra=log_context(provider=self.source.value, query=query),
        )
        if data is None:
            return ProviderResponse(ok=False)

        candidates = self.parse_results(data)
        logger.debug(f"{self.source.value} returned {len(candidates)} photos for '{query}'")
        return ProviderResponse(candidates=candidates, ok=True)
