"""End-to-end recipe photo search.

Pipeline per recipe:
    Recipe -> normalize_recipe -> classify_dish -> plan_queries
           -> ProviderOrchestrator -> score_candidate -> select_best

In scored mode every provider is asked for every query and all candidates
are ranked; in first-match mode the first food-looking photo wins and no
scoring happens. The batch runner applies the same pipeline to many recipes,
one at a time, and never lets one recipe's failure stop the batch.
"""

import asyncio
from typing import Awaitable, Callable, Iterable, List, Optional, Sequence, Union

from recipe_photos.engine.classifier import classify_dish
from recipe_photos.engine.normalizer import has_existing_image, is_dietary_restricted, normalize_recipe
from recipe_photos.engine.orchestrator import DEFAULT_PROVIDER_DELAY_MS, ProviderOrchestrator
from recipe_photos.engine.planner import DEFAULT_MAX_QUERIES, DEFAULT_QUERY_SUFFIX, plan_queries
from recipe_photos.engine.scorer import score_candidate
from recipe_photos.engine.selector import select_best
from recipe_photos.models.models import (
    BatchReport,
    MatchedCandidate,
    OutcomeStatus,
    PhotoAssignment,
    PhotoSource,
    Recipe,
    RecipeAnalysis,
    RecipeOutcome,
    ScoredCandidate,
    SearchMode,
)
from recipe_photos.providers.base import PhotoProvider
from recipe_photos.providers.registry import build_providers
from recipe_photos.services.persistence import RecipePersistence
from recipe_photos.utils.config import Config, config as default_config
from recipe_photos.utils.logger import log_context, logger

DEFAULT_DESCRIPTION = "Food photo"

ATTRIBUTION_TEMPLATES = {
    PhotoSource.UNSPLASH: "Photo by {name} on Unsplash",
    PhotoSource.PEXELS: "Photo by {name} from Pexels",
}


def format_attribution(candidate: MatchedCandidate) -> str:
    name = candidate.attribution_name or "Unknown"
    return ATTRIBUTION_TEMPLATES[candidate.source].format(name=name)


def _raw_title(raw) -> str:
    """Best-effort title of a batch item for reporting; never raises."""
    if isinstance(raw, Recipe):
        title = raw.title
    elif isinstance(raw, dict):
        title = raw.get("title")
    else:
        title = None
    return "" if title is None else str(title)


def to_assignment(selection: MatchedCandidate) -> PhotoAssignment:
    """Shape a selected candidate for the persistence collaborator."""
    scored = isinstance(selection, ScoredCandidate)
    return PhotoAssignment(
        url=selection.url,
        attribution=format_attribution(selection),
        source=selection.source,
        search_term=selection.matched_query,
        description=selection.description or DEFAULT_DESCRIPTION,
        score=selection.score if scored else None,
        confidence=selection.confidence if scored else None,
    )


class RecipePhotoFinder:
    """Find a representative photo for a recipe."""

    def __init__(
        self,
        providers: Sequence[PhotoProvider],
        mode: SearchMode = SearchMode.SCORED,
        max_queries: int = DEFAULT_MAX_QUERIES,
        query_suffix: str = DEFAULT_QUERY_SUFFIX,
        provider_delay_ms: int = DEFAULT_PROVIDER_DELAY_MS,
        recipe_delay_ms: int = 1500,
        skip_existing_images: bool = True,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize finder.

        Args:
            providers: Photo providers, highest priority first.
            mode: Orchestration mode (scored or first-match).
            max_queries: Maximum queries per recipe.
            query_suffix: Domain qualifier appended in scored mode.
            provider_delay_ms: Minimum gap between calls to the same provider.
            recipe_delay_ms: Pause between recipes in a batch.
            skip_existing_images: Batch leaves recipes with an image untouched.
            sleep: Awaitable sleep, injectable for tests.
        """
        self.providers = list(providers)
        self.mode = SearchMode(mode)
        self.max_queries = max_queries
        self.query_suffix = query_suffix
        self.recipe_delay_ms = recipe_delay_ms
        self.skip_existing_images = skip_existing_images
        self._sleep = sleep
        self.orchestrator = ProviderOrchestrator(self.providers, delay_ms=provider_delay_ms, sleep=sleep)

    @classmethod
    def from_config(cls, cfg: Optional[Config] = None, **overrides) -> "RecipePhotoFinder":
        """Build a finder wired to the configured providers."""
        cfg = cfg or default_config
        settings = {
            "mode": SearchMode(cfg.SEARCH_MODE),
            "max_queries": cfg.MAX_QUERIES,
            "query_suffix": cfg.QUERY_SUFFIX,
            "provider_delay_ms": cfg.PROVIDER_DELAY_MS,
            "recipe_delay_ms": cfg.RECIPE_DELAY_MS,
            "skip_existing_images": cfg.SKIP_EXISTING_IMAGES,
        }
        settings.update(overrides)
        return cls(build_providers(cfg), **settings)

    def analyze(self, recipe: Union[Recipe, dict]) -> RecipeAnalysis:
        """Classify a recipe and plan its queries without calling any provider."""
        if not isinstance(recipe, Recipe):
            recipe = Recipe.model_validate(recipe)

        context = normalize_recipe(recipe)
        classification = classify_dish(context)
        return RecipeAnalysis(
            context=context,
            classification=classification,
            planned_queries=plan_queries(classification, self.mode, self.max_queries, self.query_suffix),
            is_dietary_restricted=is_dietary_restricted(context),
        )

    async def find_photo(self, recipe: Union[Recipe, dict]) -> Optional[MatchedCandidate]:
        """Search providers and return the chosen photo, or None.

        Scored mode returns a ScoredCandidate; first-match mode returns the
        accepted MatchedCandidate directly.
        """
        analysis = self.analyze(recipe)
        logger.info(f"🍳 Searching photo for '{analysis.context.display_title}' ({self.mode.value} mode)")

        if self.mode == SearchMode.FIRST_MATCH:
            return await self.orchestrator.search_first_match(analysis.planned_queries)

        candidates = await self.orchestrator.search_all(analysis.planned_queries)
        scored = [
            score_candidate(candidate, analysis.context, candidate.matched_query, analysis.is_dietary_restricted)
            for candidate in candidates
        ]
        for item in scored:
            logger.debug(f"   {item.source.value} score={item.score} '{item.description}'")
        return select_best(scored)

    async def process_recipe(
        self,
        recipe: Recipe,
        persistence: Optional[RecipePersistence] = None,
        dry_run: bool = False,
    ) -> RecipeOutcome:
        """Run one recipe and report the outcome; raises on unexpected errors."""
        title = recipe.title or ""

        if self.skip_existing_images and has_existing_image(recipe):
            logger.info(f"⏭️ Skipping '{title}': already has an image", extra=log_context(recipe_id=recipe.id))
            return RecipeOutcome(title=title, recipe_id=recipe.id, status=OutcomeStatus.SKIPPED)

        if dry_run:
            return RecipeOutcome(
                title=title, recipe_id=recipe.id, status=OutcomeStatus.ANALYZED, analysis=self.analyze(recipe)
            )

        selection = await self.find_photo(recipe)
        if selection is None:
            logger.info(f"❌ No suitable photo found for '{title}'", extra=log_context(recipe_id=recipe.id))
            return RecipeOutcome(title=title, recipe_id=recipe.id, status=OutcomeStatus.NO_IMAGE_FOUND)

        assignment = to_assignment(selection)
        if persistence is not None:
            await persistence.save_photo(recipe, assignment)
        return RecipeOutcome(
            title=title, recipe_id=recipe.id, status=OutcomeStatus.SUCCESS, assignment=assignment
        )

    async def process_batch(
        self,
        recipes: Iterable[Union[Recipe, dict]],
        persistence: Optional[RecipePersistence] = None,
        dry_run: bool = False,
    ) -> BatchReport:
        """Process recipes one after another.

        A failure on one recipe is recorded as an `error` outcome and the
        batch continues. Recipes that reach the providers are separated by
        `recipe_delay_ms`.

        Args:
            recipes: Recipe records or dicts.
            persistence: Receives each chosen photo; None reports only.
            dry_run: Analyze recipes without calling providers.

        Returns:
            BatchReport with one outcome per recipe, in input order.
        """
        report = BatchReport()
        searched_before = False

        for raw in recipes:
            report.total += 1
            title = _raw_title(raw)
            try:
                recipe = raw if isinstance(raw, Recipe) else Recipe.model_validate(raw)
                will_search = not dry_run and not (self.skip_existing_images and has_existing_image(recipe))
                if will_search and searched_before and self.recipe_delay_ms > 0:
                    await self._sleep(self.recipe_delay_ms / 1000)
                searched_before = searched_before or will_search

                outcome = await self.process_recipe(recipe, persistence=persistence, dry_run=dry_run)
            except Exception as e:
                logger.error(f"Error processing '{title}': {e}", exc_info=True)
                outcome = RecipeOutcome(title=title, status=OutcomeStatus.ERROR, error=str(e))

            if outcome.status == OutcomeStatus.SUCCESS:
                report.success += 1
            elif outcome.status in (OutcomeStatus.NO_IMAGE_FOUND, OutcomeStatus.ERROR):
                report.failed += 1
            elif outcome.status == OutcomeStatus.SKIPPED:
                report.skipped += 1
            report.outcomes.append(outcome)

        logger.info(
            f"📊 Batch complete: {report.success} success, {report.failed} failed, "
            f"{report.skipped} skipped of {report.total}"
        )
        return report


async def find_recipe_photo(recipe: Union[Recipe, dict], cfg: Optional[Config] = None) -> Optional[PhotoAssignment]:
    """Convenience entry point: configured providers, one recipe, assignment or None."""
    selection = await RecipePhotoFinder.from_config(cfg).find_photo(recipe)
    return to_assignment(selection) if selection is not None else None
