"""Persistence capability for chosen photos.

Storing the photo on the recipe belongs to the host application; the batch
runner only needs something that accepts a PhotoAssignment.
"""

from typing import Protocol, runtime_checkable

from recipe_photos.models.models import PhotoAssignment, Recipe


@runtime_checkable
class RecipePersistence(Protocol):
    """Receives the photo chosen for a recipe."""

    async def save_photo(self, recipe: Recipe, assignment: PhotoAssignment) -> None: ...
