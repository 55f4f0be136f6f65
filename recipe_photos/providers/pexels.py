"""Pexels photo search adapter."""

from typing import Any, List

from recipe_photos.models.models import Candidate, PhotoSource
from recipe_photos.providers.base import HttpPhotoProvider


class PexelsProvider(HttpPhotoProvider):
    """Search https://www.pexels.com via the v1 search API."""

    source = PhotoSource.PEXELS
    endpoint = "https://api.pexels.com/v1/search"

    def build_params(self, query: str) -> dict:
        return {
            "query": query,
            "per_page": self.per_page,
            "orientation": "landscape",
        }

    def build_headers(self) -> dict:
        return {"Authorization": self.api_key}

    def extract_items(self, data: dict) -> List[Any]:
        return data.get("photos") or []

    def parse_item(self, item: dict) -> Candidate:
        src = item["src"]
        return Candidate(
            url=src["large"],
            thumbnail_url=src.get("medium") or "",
            description=item.get("alt") or "",
            source=self.source,
            attribution_name=item.get("photographer") or "",
            width=item.get("width") or 0,
            height=item.get("height") or 0,
            # Pexels does not expose like counts
            likes=0,
        )
