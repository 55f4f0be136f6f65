"""Provider orchestration: sequential, rate-limited photo searches with fallback.

Two strategies are supported:

1. FIRST-MATCH (search_first_match):
   - Providers in priority order; for each, every query in order
   - The first candidate passing the basic filter wins and the search stops
   - The next provider is only tried if the previous one found nothing

2. ALL-CANDIDATES (search_all):
   - Every query against every provider (query-major, provider-minor)
   - At most one filter-passing candidate kept per (provider, query) call
   - Never stops early; results keep discovery order

Provider calls are strictly sequential. Two calls to the same provider are
always separated by at least `delay_ms`; the first call is never delayed.
"""

import asyncio
import time
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from recipe_photos.engine.filters import passes_filter
from recipe_photos.models.models import MatchedCandidate, PlannedQuery, ProviderResponse
from recipe_photos.providers.base import PhotoProvider
from recipe_photos.utils.errors import safe_execute_async
from recipe_photos.utils.logger import log_context, logger

DEFAULT_PROVIDER_DELAY_MS = 1000


class ProviderRateLimiter:
    """Enforce a minimum gap between successive calls to the same provider.

    One limiter covers one search; it keeps no state across recipes.
    """

    def __init__(
        self,
        delay_ms: int = DEFAULT_PROVIDER_DELAY_MS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.delay_seconds = max(delay_ms, 0) / 1000
        self._sleep = sleep
        self._clock = clock
        self._last_call: Dict[str, float] = {}

    async def wait(self, provider_name: str) -> None:
        """Sleep until `provider_name` may be called again, then record the call."""
        last = self._last_call.get(provider_name)
        if last is not None:
            remaining = self.delay_seconds - (self._clock() - last)
            if remaining > 0:
                logger.debug(f"Rate limit: waiting {remaining:.2f}s before next {provider_name} call")
                await self._sleep(remaining)
        self._last_call[provider_name] = self._clock()


class ProviderOrchestrator:
    """Run planned queries against photo providers in priority order."""

    def __init__(
        self,
        providers: Sequence[PhotoProvider],
        delay_ms: int = DEFAULT_PROVIDER_DELAY_MS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize orchestrator.

        Args:
            providers: Providers, highest priority first.
            delay_ms: Minimum gap between two calls to the same provider.
            sleep: Awaitable sleep, injectable for tests.
            clock: Monotonic clock in seconds, injectable for tests.
        """
        self.providers = list(providers)
        self.delay_ms = delay_ms
        self._sleep = sleep
        self._clock = clock

    def _new_limiter(self) -> ProviderRateLimiter:
        return ProviderRateLimiter(self.delay_ms, sleep=self._sleep, clock=self._clock)

    def _available_providers(self) -> List[PhotoProvider]:
        available = []
        for provider in self.providers:
            if provider.is_available:
                available.append(provider)
            else:
                logger.debug(f"{provider.source.value} unavailable (no credentials), skipping")
        return available

    async def _call(
        self, provider: PhotoProvider, planned: PlannedQuery, limiter: ProviderRateLimiter
    ) -> ProviderResponse:
        """One rate-limited provider call; any failure counts as zero candidates."""
        name = provider.source.value
        await limiter.wait(name)
        response = await safe_execute_async(
            provider.search(planned.search_text),
            f"{name} provider raised for '{planned.search_text}'",
            log_level="warning",
            default_return=None,
            extra=log_context(provider=name, query=planned.query),
        )
        if response is None:
            return ProviderResponse(ok=False)
        return response

    async def search_first_match(self, queries: Sequence[PlannedQuery]) -> Optional[MatchedCandidate]:
        """Return the first filter-passing candidate, or None.

        Args:
            queries: Planned queries, most specific first.

        Returns:
            The accepted candidate tagged with its query, or None if no
            provider produced an acceptable photo for any query.
        """
        limiter = self._new_limiter()
        for provider in self._available_providers():
            for planned in queries:
                response = await self._call(provider, planned, limiter)
                if not response.ok:
                    continue
                for candidate in response.candidates:
                    if passes_filter(candidate):
                        logger.info(
                            f"✅ Accepted {provider.source.value} photo for '{planned.query}': "
                            f"'{candidate.description or 'No description'}'"
                        )
                        return MatchedCandidate(**candidate.model_dump(), matched_query=planned.query)
            logger.info(f"{provider.source.value} found nothing usable, trying next provider")
        return None

    async def search_all(self, queries: Sequence[PlannedQuery]) -> List[MatchedCandidate]:
        """Collect one filter-passing candidate per (provider, query) call.

        Args:
            queries: Planned queries, most specific first.

        Returns:
            Candidates in discovery order (query priority, then provider priority).
        """
        limiter = self._new_limiter()
        providers = self._available_providers()
        found: List[MatchedCandidate] = []

        for planned in queries:
            for provider in providers:
                response = await self._call(provider, planned, limiter)
                if not response.ok:
                    continue
                candidate = next((c for c in response.candidates if passes_filter(c)), None)
                if candidate is None:
                    logger.debug(f"No food photo from {provider.source.value} for '{planned.query}'")
                    continue
                found.append(MatchedCandidate(**candidate.model_dump(), matched_query=planned.query))

        logger.info(f"Collected {len(found)} candidate photos from {len(providers)} providers")
        return found
