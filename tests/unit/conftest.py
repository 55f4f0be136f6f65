"""Shared fixtures for unit tests: scripted photo providers, no network."""

from unittest.mock import AsyncMock

import pytest

from recipe_photos.models.models import Candidate, PhotoSource, ProviderResponse


class ScriptedProvider:
    """Photo provider returning canned responses keyed by search text.

    Unknown search texts return an empty successful response. Every call is
    recorded in `calls` as the search text received.
    """

    def __init__(self, source, responses=None, available=True, error=None):
        self.source = PhotoSource(source)
        self.responses = responses or {}
        self.available = available
        self.error = error
        self.calls = []

    @property
    def is_available(self):
        return self.available

    async def search(self, query):
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        response = self.responses.get(query, [])
        if isinstance(response, ProviderResponse):
            return response
        return ProviderResponse(candidates=response, ok=True)


@pytest.fixture
def make_candidate():
    """Factory for candidates with sensible defaults."""

    def _make(description, source="unsplash", url=None, **kwargs):
        return Candidate(
            url=url or f"https://img.example/{source}/{abs(hash(description))}.jpg",
            thumbnail_url="https://img.example/thumb.jpg",
            description=description,
            source=PhotoSource(source),
            attribution_name=kwargs.pop("attribution_name", "Jane Cook"),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_provider():
    """Factory for ScriptedProvider instances."""
    return ScriptedProvider


@pytest.fixture
def fake_sleep():
    """AsyncMock standing in for asyncio.sleep."""
    return AsyncMock()
