"""Basic description filter applied to every provider candidate."""

from recipe_photos.engine.tables import FILTER_BLOCKED_KEYWORDS, FILTER_FOOD_KEYWORDS
from recipe_photos.models.models import Candidate


def looks_like_food(description: str) -> bool:
    """True if the description mentions food and nothing from the blocklist."""
    text = (description or "").lower()
    has_food = any(keyword in text for keyword in FILTER_FOOD_KEYWORDS)
    has_blocked = any(keyword in text for keyword in FILTER_BLOCKED_KEYWORDS)
    return has_food and not has_blocked


def passes_filter(candidate: Candidate) -> bool:
    return looks_like_food(candidate.description)
