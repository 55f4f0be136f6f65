"""Query planning: cap the classifier's queries and shape them for providers."""

from typing import List

from recipe_photos.models.models import DishClassification, PlannedQuery, SearchMode

# Only the most specific queries are ever sent
MAX_QUERIES_LIMIT = 4
DEFAULT_MAX_QUERIES = MAX_QUERIES_LIMIT
DEFAULT_QUERY_SUFFIX = "food recipe cooking"


def plan_queries(
    classification: DishClassification,
    mode: SearchMode = SearchMode.SCORED,
    max_queries: int = DEFAULT_MAX_QUERIES,
    suffix: str = DEFAULT_QUERY_SUFFIX,
) -> List[PlannedQuery]:
    """Plan the provider queries for a classification.

    Keeps the first `max_queries` queries (the most specific ones), never
    more than MAX_QUERIES_LIMIT. In scored mode every query is sent with the
    domain qualifier `suffix` appended; in first-match mode queries are sent
    verbatim.

    Args:
        classification: Classifier output.
        mode: Orchestration mode the plan is for.
        max_queries: Number of queries to keep, 1 to 4.
        suffix: Domain qualifier used in scored mode.

    Returns:
        Ordered list of PlannedQuery.

    Raises:
        ValueError: If max_queries is outside 1 to 4.
    """
    if not (1 <= max_queries <= MAX_QUERIES_LIMIT):
        raise ValueError(f"max_queries must be between 1 and {MAX_QUERIES_LIMIT}, got: {max_queries}")

    planned = []
    for query in classification.queries[:max_queries]:
        if mode == SearchMode.SCORED and suffix.strip():
            search_text = f"{query} {suffix.strip()}"
        else:
            search_text = query
        planned.append(PlannedQuery(query=query, search_text=search_text))
    return planned
