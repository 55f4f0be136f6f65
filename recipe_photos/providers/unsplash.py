"""Unsplash photo search adapter."""

from typing import Any, List

from recipe_photos.models.models import Candidate, PhotoSource
from recipe_photos.providers.base import HttpPhotoProvider


class UnsplashProvider(HttpPhotoProvider):
    """Search https://unsplash.com via the public search API."""

    source = PhotoSource.UNSPLASH
    endpoint = "https://api.unsplash.com/search/photos"

    def build_params(self, query: str) -> dict:
        return {
            "query": query,
            "per_page": self.per_page,
            "orientation": "landscape",
            "order_by": "relevance",
            "content_filter": "high",
        }

    def build_headers(self) -> dict:
        return {
            "Authorization": f"Client-ID {self.api_key}",
            "Accept-Version": "v1",
        }

    def extract_items(self, data: dict) -> List[Any]:
        return data.get("results") or []

    def parse_item(self, item: dict) -> Candidate:
        urls = item["urls"]
        return Candidate(
            url=urls["regular"],
            thumbnail_url=urls.get("small") or "",
            description=item.get("description") or item.get("alt_description") or "",
            source=self.source,
            attribution_name=(item.get("user") or {}).get("name") or "",
            width=item.get("width") or 0,
            height=item.get("height") or 0,
            likes=item.get("likes") or 0,
        )
