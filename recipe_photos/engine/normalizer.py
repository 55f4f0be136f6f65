"""Recipe text normalization.

Builds the lower-cased RecipeContext every downstream rule reads from.
"""

from typing import Union

from recipe_photos.engine.tables import RESTRICTED_TAG_WORDS, RESTRICTED_TITLE_WORDS
from recipe_photos.models.models import Ingredient, Recipe, RecipeContext

# Recipes pointing at this path have no real image
PLACEHOLDER_IMAGE_URL = "/images/recipe-placeholder.jpg"


def _ingredient_name(ingredient: Union[Ingredient, str]) -> str:
    if isinstance(ingredient, str):
        return ingredient.lower()
    return (ingredient.name or "").lower()


def normalize_recipe(recipe: Recipe) -> RecipeContext:
    """Build the normalized text context for a recipe.

    Structured ingredients contribute their name, plain strings pass through.
    Category slugs have their first hyphen replaced by a space
    ("main-dishes" -> "main dishes"). Missing fields become empty strings.

    Args:
        recipe: Recipe record to normalize.

    Returns:
        Immutable RecipeContext with every text field lower-cased.
    """
    title = recipe.title or ""
    return RecipeContext(
        title=title.lower(),
        description=(recipe.description or "").lower(),
        ingredients_text=" ".join(_ingredient_name(ing) for ing in recipe.ingredients),
        tags_text=" ".join(recipe.tags).lower(),
        category=(recipe.category or "").replace("-", " ", 1).lower(),
        display_title=title.strip(),
    )


def is_dietary_restricted(ctx: RecipeContext) -> bool:
    """True when the title or tags declare a dietary restriction."""
    return any(word in ctx.title for word in RESTRICTED_TITLE_WORDS) or any(
        word in ctx.tags_text for word in RESTRICTED_TAG_WORDS
    )


def has_existing_image(recipe: Recipe) -> bool:
    """True when the recipe already carries an uploaded or external image."""
    image_url = (recipe.image_url or "").strip()
    return bool(
        recipe.has_uploaded_image
        or recipe.photos
        or (image_url and image_url != PLACEHOLDER_IMAGE_URL)
    )
