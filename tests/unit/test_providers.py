"""Unit tests for the Unsplash and Pexels adapters and the provider registry.

HTTP is never reached: `_fetch_json` is replaced with an AsyncMock, or
aiohttp.ClientSession with an in-memory fake.
"""

from unittest.mock import AsyncMock, patch

import aiohttp
import pytest

from recipe_photos.models.models import PhotoSource
from recipe_photos.providers.base import PhotoProvider
from recipe_photos.providers.pexels import PexelsProvider
from recipe_photos.providers.registry import build_providers
from recipe_photos.providers.unsplash import UnsplashProvider
from recipe_photos.utils.config import Config

UNSPLASH_PAYLOAD = {
    "total": 2,
    "results": [
        {
            "urls": {"regular": "https://images.unsplash.com/a-regular", "small": "https://images.unsplash.com/a-small"},
            "description": None,
            "alt_description": "white sauce in a bowl",
            "user": {"name": "Ana Cook"},
            "width": 4000,
            "height": 3000,
            "likes": 42,
        },
        {"description": "missing urls"},
        {
            "urls": {"regular": "https://images.unsplash.com/b-regular"},
            "description": "Pasta dinner",
            "user": None,
        },
    ],
}

PEXELS_PAYLOAD = {
    "photos": [
        {
            "src": {"large": "https://images.pexels.com/1-large", "medium": "https://images.pexels.com/1-medium"},
            "alt": "Chicken on a plate",
            "photographer": "Ben Baker",
            "width": 1200,
            "height": 800,
        },
        {"alt": "no src"},
    ],
}


class TestUnsplash:
    def test_request_shape(self):
        provider = UnsplashProvider("key-123", per_page=20)

        params = provider.build_params("pesto pasta")
        headers = provider.build_headers()

        assert params["query"] == "pesto pasta"
        assert params["per_page"] == 20
        assert params["orientation"] == "landscape"
        assert headers["Authorization"] == "Client-ID key-123"

    def test_parse_results_maps_fields_and_skips_malformed(self):
        candidates = UnsplashProvider("key").parse_results(UNSPLASH_PAYLOAD)

        assert len(candidates) == 2
        first, second = candidates
        assert first.url == "https://images.unsplash.com/a-regular"
        assert first.thumbnail_url == "https://images.unsplash.com/a-small"
        assert first.description == "white sauce in a bowl"
        assert first.attribution_name == "Ana Cook"
        assert (first.width, first.height, first.likes) == (4000, 3000, 42)
        assert first.source == PhotoSource.UNSPLASH
        assert second.description == "Pasta dinner"
        assert second.attribution_name == ""

    @pytest.mark.parametrize("payload", [None, [], {}, {"results": None}])
    def test_parse_results_tolerates_empty_payloads(self, payload):
        assert UnsplashProvider("key").parse_results(payload) == []


class TestPexels:
    def test_request_shape(self):
        provider = PexelsProvider("px-key")

        assert provider.build_headers() == {"Authorization": "px-key"}
        assert provider.build_params("soup")["per_page"] == 15

    def test_parse_results(self):
        candidates = PexelsProvider("key").parse_results(PEXELS_PAYLOAD)

        assert len(candidates) == 1
        photo = candidates[0]
        assert photo.url == "https://images.pexels.com/1-large"
        assert photo.thumbnail_url == "https://images.pexels.com/1-medium"
        assert photo.description == "Chicken on a plate"
        assert photo.attribution_name == "Ben Baker"
        assert photo.likes == 0
        assert photo.source == PhotoSource.PEXELS


class TestSearch:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("provider_cls", [UnsplashProvider, PexelsProvider])
    async def test_missing_key_is_unavailable_without_network(self, provider_cls, monkeypatch):
        provider = provider_cls("")
        fetch = AsyncMock()
        monkeypatch.setattr(provider, "_fetch_json", fetch)

        response = await provider.search("pasta")

        assert provider.is_available is False
        assert response.ok is False
        assert response.candidates == []
        fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_successful_search(self, monkeypatch):
        provider = UnsplashProvider("key")
        fetch = AsyncMock(return_value=UNSPLASH_PAYLOAD)
        monkeypatch.setattr(provider, "_fetch_json", fetch)

        response = await provider.search("alfredo sauce")

        assert response.ok is True
        assert len(response.candidates) == 2
        fetch.assert_awaited_once_with("alfredo sauce")

    @pytest.mark.asyncio
    async def test_http_error_status_means_failed_call(self, monkeypatch):
        provider = PexelsProvider("key")
        monkeypatch.setattr(provider, "_fetch_json", AsyncMock(return_value=None))

        response = await provider.search("soup")

        assert response.ok is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        aiohttp.ClientError("connection reset"),
        TimeoutError(),
        ValueError("bad json"),
    ])
    async def test_exceptions_never_escape(self, monkeypatch, error):
        provider = UnsplashProvider("key")
        monkeypatch.setattr(provider, "_fetch_json", AsyncMock(side_effect=error))

        response = await provider.search("soup")

        assert response.ok is False

    def test_adapters_satisfy_provider_protocol(self):
        assert isinstance(UnsplashProvider("k"), PhotoProvider)
        assert isinstance(PexelsProvider("k"), PhotoProvider)


class FakeResponse:
    def __init__(self, status, payload=None):
        self.status = status
        self.payload = payload
        self.json = AsyncMock(return_value=payload)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession; records every GET."""

    def __init__(self, response):
        self.response = response
        self.requests = []

    def __call__(self, *args, **kwargs):
        self.session_kwargs = kwargs
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def get(self, url, params=None, headers=None):
        self.requests.append((url, params, headers))
        return self.response


class TestHttpStatus:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 429, 500, 503])
    async def test_non_2xx_status_is_failed_call(self, monkeypatch, status):
        session = FakeSession(FakeResponse(status, {"results": []}))
        monkeypatch.setattr(aiohttp, "ClientSession", session)
        provider = UnsplashProvider("key")

        with patch("recipe_photos.providers.base.logger") as mock_logger:
            response = await provider.search("pesto")

        assert response.ok is False
        assert response.candidates == []
        session.response.json.assert_not_awaited()
        message = mock_logger.warning.call_args.args[0]
        assert f"API error {status}" in message
        assert mock_logger.warning.call_args.kwargs["extra"] == {"provider": "unsplash", "query": "pesto"}

    @pytest.mark.asyncio
    async def test_2xx_status_is_parsed(self, monkeypatch):
        session = FakeSession(FakeResponse(200, PEXELS_PAYLOAD))
        monkeypatch.setattr(aiohttp, "ClientSession", session)
        provider = PexelsProvider("px-key", per_page=5, timeout_seconds=3.0)

        response = await provider.search("chicken dinner")

        assert response.ok is True
        assert [c.attribution_name for c in response.candidates] == ["Ben Baker"]
        url, params, headers = session.requests[0]
        assert url == PexelsProvider.endpoint
        assert params["query"] == "chicken dinner"
        assert params["per_page"] == 5
        assert headers == {"Authorization": "px-key"}
        assert session.session_kwargs["timeout"].total == 3.0


class TestRegistry:
    def make_config(self, order, unsplash_key="u", pexels_key="p"):
        cfg = Config()
        cfg.PROVIDER_ORDER = order
        cfg.UNSPLASH_ACCESS_KEY = unsplash_key
        cfg.PEXELS_API_KEY = pexels_key
        cfg.RESULTS_PER_PAGE = 30
        cfg.REQUEST_TIMEOUT_SECONDS = 5.0
        return cfg

    def test_builds_providers_in_configured_order(self):
        providers = build_providers(self.make_config(["pexels", "unsplash"]))

        assert [p.source for p in providers] == [PhotoSource.PEXELS, PhotoSource.UNSPLASH]
        assert all(p.per_page == 30 for p in providers)
        assert all(p.timeout_seconds == 5.0 for p in providers)

    def test_single_provider(self):
        providers = build_providers(self.make_config(["unsplash"]))
        assert [p.source for p in providers] == [PhotoSource.UNSPLASH]

    def test_providers_without_keys_are_kept_but_unavailable(self):
        providers = build_providers(self.make_config(["unsplash", "pexels"], unsplash_key=""))

        assert [p.is_available for p in providers] == [False, True]
