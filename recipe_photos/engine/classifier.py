"""Dish classification from recipe text.

The classifier is an ordered, first-match list of DishRule entries. Order is
part of the behavior: a "Chicken Alfredo Sauce" is a sauce because the sauce
rule runs before the chicken rule, and a "Chicken Alfredo" is a pasta dish
because the chicken rule reassigns it.

Rules (in order):
1. sauce      - "sauce" in title/description, or category "sauces"
2. pasta      - pasta/noodle words in title, or pasta/noodles in ingredients
3. chicken    - "chicken" in title or ingredients
4. breakfast  - category "breakfast" or breakfast words in title
5. dessert    - category "desserts" or dessert words in title
6. soup       - category "soups" or soup words in title
7. fallback   - queries derived from the cleaned title and category
"""

import re
from typing import Callable, NamedTuple, Optional

from recipe_photos.engine.tables import (
    BREAKFAST_TITLE_WORDS,
    DESSERT_TITLE_WORDS,
    FALLBACK_SAFETY_QUERY,
    GENERIC_CATEGORY,
    LASAGNA_WORDS,
    PASTA_INGREDIENT_WORDS,
    PASTA_TITLE_WORDS,
    QUERY_SETS,
    SOUP_TITLE_WORDS,
    VEGAN_MARKERS,
)
from recipe_photos.models.models import Dietary, DishClassification, DishType, RecipeContext
from recipe_photos.utils.logger import logger

# Title clean-up for the fallback branch
_BRAND_PREFIX = re.compile(r"doc bear['’]?s?\s*", re.IGNORECASE)
_TRAILING_SERIAL = re.compile(r"\s+(i{1,3}|\d+)$", re.IGNORECASE)
_QUOTES = re.compile(r"['\"’]")


class DishRule(NamedTuple):
    """One branch of the decision tree."""

    name: str
    matches: Callable[[RecipeContext], bool]
    classify: Callable[[RecipeContext], DishClassification]


def _contains_any(text: str, words) -> bool:
    return any(word in text for word in words)


def _fixed(dish_type: DishType, query_set: str, sub_type: Optional[str] = None,
           dietary: Dietary = Dietary.REGULAR) -> DishClassification:
    return DishClassification(
        dish_type=dish_type,
        sub_type=sub_type,
        dietary=dietary,
        queries=list(QUERY_SETS[query_set]),
    )


# ---------------------------------------------------------------------------
# 1. Sauces
# ---------------------------------------------------------------------------


def _is_sauce(ctx: RecipeContext) -> bool:
    return "sauce" in ctx.title or "sauce" in ctx.description or ctx.category == "sauces"


def _classify_sauce(ctx: RecipeContext) -> DishClassification:
    if "alfredo" in ctx.title or "alfredo" in ctx.description:
        if _contains_any(ctx.all_text, VEGAN_MARKERS):
            return _fixed(DishType.SAUCE, "vegan_alfredo", "alfredo", Dietary.VEGAN)
        return _fixed(DishType.SAUCE, "alfredo", "alfredo")

    if "marinara" in ctx.title or "tomato" in ctx.title or "tomato" in ctx.ingredients_text:
        return _fixed(DishType.SAUCE, "tomato", "tomato")

    if "pesto" in ctx.title:
        return _fixed(DishType.SAUCE, "pesto", "pesto")

    return _fixed(DishType.SAUCE, "generic_sauce", "generic")


# ---------------------------------------------------------------------------
# 2. Pasta & noodles
# ---------------------------------------------------------------------------


def _is_pasta(ctx: RecipeContext) -> bool:
    return _contains_any(ctx.title, PASTA_TITLE_WORDS) or _contains_any(
        ctx.ingredients_text, PASTA_INGREDIENT_WORDS
    )


def _classify_pasta(ctx: RecipeContext) -> DishClassification:
    # Lasagna uses one query set whatever its cheese or meat content
    if _contains_any(ctx.title, LASAGNA_WORDS):
        return _fixed(DishType.PASTA, "lasagna", "lasagna")

    if "drunken" in ctx.title:
        if "italian" in ctx.title:
            return _fixed(DishType.PASTA, "italian_drunken_noodles", "italian_drunken_noodles")
        # Drunken noodles are Thai unless stated otherwise
        return _fixed(DishType.PASTA, "thai_noodles", "thai_noodles")

    if "carbonara" in ctx.title:
        return _fixed(DishType.PASTA, "carbonara", "carbonara")

    return _fixed(DishType.PASTA, "generic_pasta", "generic")


# ---------------------------------------------------------------------------
# 3. Chicken
# ---------------------------------------------------------------------------


def _is_chicken(ctx: RecipeContext) -> bool:
    return "chicken" in ctx.title or "chicken" in ctx.ingredients_text


def _classify_chicken(ctx: RecipeContext) -> DishClassification:
    if "sweet" in ctx.title and "sour" in ctx.title:
        return _fixed(DishType.MEAT, "sweet_sour_chicken", "sweet_sour_chicken")

    if "pineapple" in ctx.title:
        return _fixed(DishType.MEAT, "pineapple_chicken", "pineapple_chicken")

    # Chicken alfredo is photographed as a pasta dish
    if "alfredo" in ctx.title:
        return _fixed(DishType.PASTA, "chicken_alfredo", "chicken_alfredo")

    return _fixed(DishType.MEAT, "chicken", "chicken")


# ---------------------------------------------------------------------------
# 4-6. Meal categories
# ---------------------------------------------------------------------------


def _is_breakfast(ctx: RecipeContext) -> bool:
    return ctx.category == "breakfast" or _contains_any(ctx.title, BREAKFAST_TITLE_WORDS)


def _is_dessert(ctx: RecipeContext) -> bool:
    return ctx.category == "desserts" or _contains_any(ctx.title, DESSERT_TITLE_WORDS)


def _is_soup(ctx: RecipeContext) -> bool:
    return ctx.category == "soups" or _contains_any(ctx.title, SOUP_TITLE_WORDS)


# ---------------------------------------------------------------------------
# 7. Fallback
# ---------------------------------------------------------------------------


def clean_title(title: str) -> str:
    """Strip the brand prefix, a trailing roman numeral (I-III) or number, and quotes.

    Example:
        "Doc Bear's Backyard Surprise III" -> "Backyard Surprise"
    """
    cleaned = _BRAND_PREFIX.sub("", title)
    cleaned = _TRAILING_SERIAL.sub("", cleaned.strip())
    cleaned = _QUOTES.sub("", cleaned)
    return cleaned.strip()


def _classify_fallback(ctx: RecipeContext) -> DishClassification:
    title = clean_title(ctx.display_title or ctx.title)

    candidates = []
    if title:
        candidates.extend([f"{title} food", f"homemade {title}", f"{title} dish"])
    if ctx.category and ctx.category != GENERIC_CATEGORY:
        candidates.append(f"{ctx.category} food")

    queries = []
    for query in candidates:
        query = query.strip()
        if query and query != "food" and query not in queries:
            queries.append(query)

    if not queries:
        logger.debug(f"No usable fallback query for '{ctx.display_title}', using '{FALLBACK_SAFETY_QUERY}'")
        queries = [FALLBACK_SAFETY_QUERY]

    return DishClassification(dish_type=DishType.GENERIC, queries=queries)


DISH_RULES: tuple = (
    DishRule("sauce", _is_sauce, _classify_sauce),
    DishRule("pasta", _is_pasta, _classify_pasta),
    DishRule("chicken", _is_chicken, _classify_chicken),
    DishRule("breakfast", _is_breakfast, lambda ctx: _fixed(DishType.BREAKFAST, "breakfast")),
    DishRule("dessert", _is_dessert, lambda ctx: _fixed(DishType.DESSERT, "dessert")),
    DishRule("soup", _is_soup, lambda ctx: _fixed(DishType.SOUP, "soup")),
)


def classify_dish(ctx: RecipeContext) -> DishClassification:
    """Classify a recipe into a dish type with ordered search queries.

    Evaluates DISH_RULES in order and stops at the first match; recipes no
    rule claims go through the fallback branch. Never raises and always
    returns at least one non-empty query.

    Args:
        ctx: Normalized recipe context.

    Returns:
        DishClassification for the recipe.
    """
    for rule in DISH_RULES:
        if rule.matches(ctx):
            classification = rule.classify(ctx)
            break
    else:
        classification = _classify_fallback(ctx)

    logger.info(
        f"Classified '{ctx.display_title or ctx.title}' as {classification.dish_type.value}"
        + (f" ({classification.sub_type})" if classification.sub_type else "")
        + f", dietary={classification.dietary.value}"
    )
    logger.debug(f"Search queries: {classification.queries}")
    return classification
