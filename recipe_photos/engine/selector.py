"""Pick the winning photo among scored candidates."""

from typing import Optional, Sequence

from recipe_photos.engine.tables import CONFIDENCE_RANK_WEIGHT
from recipe_photos.models.models import ScoredCandidate
from recipe_photos.utils.logger import logger


def rank_key(candidate: ScoredCandidate) -> float:
    return candidate.score + candidate.confidence * CONFIDENCE_RANK_WEIGHT


def select_best(scored: Sequence[ScoredCandidate]) -> Optional[ScoredCandidate]:
    """Return the best candidate, or None if nothing scored above zero.

    Candidates are ranked by score + confidence * 5. The sort is stable, so
    on a tie the first-discovered candidate wins.

    Args:
        scored: Scored candidates in discovery order.

    Returns:
        Winning ScoredCandidate or None.
    """
    positive = [candidate for candidate in scored if candidate.score > 0]
    if not positive:
        logger.info(f"No candidate scored above zero ({len(scored)} considered)")
        return None

    best = sorted(positive, key=rank_key, reverse=True)[0]
    logger.info(
        f"🏆 Selected {best.source.value} photo: score={best.score}, "
        f"confidence={best.confidence:.2f}, query='{best.matched_query}'"
    )
    return best
