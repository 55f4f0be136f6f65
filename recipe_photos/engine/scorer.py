"""Rule-based relevance scoring of candidate photos.

Every rule inspects the lower-cased photo description (plus the recipe title
and matched query) and contributes an integer delta. The score is the sum of
all deltas; confidence is the score scaled to [0, 1].

    +2   per food keyword in the description
    +5   per matched-query word in the description
    +10  alfredo title and a white sauce description
    +10  lasagna title and a lasagna description
    +8   chicken title and a chicken description
    -20  vegan restricted recipe, non-vegan description
    +8   vegan restricted recipe, vegan-friendly description
    -3   per unrelated keyword (person, logo, ...)
    +2   once for any quality keyword (homemade, fresh, delicious)
"""

from typing import List, Tuple

from recipe_photos.engine.tables import (
    ALFREDO_SAUCE_BONUS,
    CHICKEN_BONUS,
    CONFIDENCE_SCALE,
    FOOD_KEYWORD_WEIGHT,
    LASAGNA_BONUS,
    NON_VEGAN_KEYWORDS,
    NON_VEGAN_PENALTY,
    QUALITY_BONUS,
    QUALITY_KEYWORDS,
    QUERY_WORD_WEIGHT,
    SCORE_FOOD_KEYWORDS,
    UNRELATED_KEYWORD_WEIGHT,
    UNRELATED_KEYWORDS,
    VEGAN_FRIENDLY_BONUS,
    VEGAN_FRIENDLY_KEYWORDS,
)
from recipe_photos.models.models import Candidate, RecipeContext, ScoredCandidate


def _count(text: str, words) -> int:
    return sum(1 for word in words if word in text)


def score_breakdown(
    description: str,
    ctx: RecipeContext,
    matched_query: str,
    is_dietary_restricted: bool,
) -> List[Tuple[str, int]]:
    """Return the non-zero (rule, delta) contributions for a description."""
    text = (description or "").lower()
    title = ctx.title
    query_words = matched_query.lower().split()

    deltas = [
        ("food_keywords", _count(text, SCORE_FOOD_KEYWORDS) * FOOD_KEYWORD_WEIGHT),
        ("query_words", sum(1 for word in query_words if word in text) * QUERY_WORD_WEIGHT),
    ]

    if "alfredo" in title and "sauce" in text and "white" in text:
        deltas.append(("alfredo_white_sauce", ALFREDO_SAUCE_BONUS))
    if "lasagna" in title and "lasagna" in text:
        deltas.append(("lasagna", LASAGNA_BONUS))
    if "chicken" in title and "chicken" in text:
        deltas.append(("chicken", CHICKEN_BONUS))

    if is_dietary_restricted and "vegan" in title:
        if _count(text, NON_VEGAN_KEYWORDS):
            deltas.append(("non_vegan", NON_VEGAN_PENALTY))
        if _count(text, VEGAN_FRIENDLY_KEYWORDS):
            deltas.append(("vegan_friendly", VEGAN_FRIENDLY_BONUS))

    deltas.append(("unrelated", _count(text, UNRELATED_KEYWORDS) * UNRELATED_KEYWORD_WEIGHT))

    if _count(text, QUALITY_KEYWORDS):
        deltas.append(("quality", QUALITY_BONUS))

    return [(rule, delta) for rule, delta in deltas if delta]


def confidence_for(score: int) -> float:
    """Scale a score to [0, 1]; non-positive scores map to 0."""
    return max(0.0, min(score / CONFIDENCE_SCALE, 1.0))


def score_candidate(
    candidate: Candidate,
    ctx: RecipeContext,
    matched_query: str,
    is_dietary_restricted: bool,
) -> ScoredCandidate:
    """Score a candidate photo against a recipe.

    Args:
        candidate: Photo to score.
        ctx: Normalized recipe context (its title drives the dish bonuses).
        matched_query: Unsuffixed query that found the photo.
        is_dietary_restricted: Whether dietary safety rules apply.

    Returns:
        ScoredCandidate carrying score, confidence and matched query.
    """
    score = sum(delta for _, delta in score_breakdown(
        candidate.description, ctx, matched_query, is_dietary_restricted
    ))
    fields = candidate.model_dump(exclude={"matched_query", "score", "confidence"})
    return ScoredCandidate(
        **fields,
        matched_query=matched_query,
        score=score,
        confidence=confidence_for(score),
    )
