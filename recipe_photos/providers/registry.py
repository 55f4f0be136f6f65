"""Build the ordered provider list from configuration."""

from typing import List, Optional

from recipe_photos.providers.base import HttpPhotoProvider
from recipe_photos.providers.pexels import PexelsProvider
from recipe_photos.providers.unsplash import UnsplashProvider
from recipe_photos.utils.config import Config, config as default_config
from recipe_photos.utils.logger import logger


def build_providers(cfg: Optional[Config] = None) -> List[HttpPhotoProvider]:
    """Create providers in PROVIDER_ORDER priority.

    Providers without credentials are still returned (they report
    themselves unavailable) so the priority order stays visible in logs.

    Args:
        cfg: Configuration to read; defaults to the module-level config.

    Returns:
        Providers, highest priority first.
    """
    cfg = cfg or default_config
    factories = {
        "unsplash": lambda: UnsplashProvider(
            cfg.UNSPLASH_ACCESS_KEY, per_page=cfg.RESULTS_PER_PAGE, timeout_seconds=cfg.REQUEST_TIMEOUT_SECONDS
        ),
        "pexels": lambda: PexelsProvider(
            cfg.PEXELS_API_KEY, per_page=cfg.RESULTS_PER_PAGE, timeout_seconds=cfg.REQUEST_TIMEOUT_SECONDS
        ),
    }

    providers = [factories[name]() for name in cfg.PROVIDER_ORDER]
    available = [p.source.value for p in providers if p.is_available]
    if not available:
        logger.warning("No photo provider has credentials configured; searches will find nothing")
    else:
        logger.debug(f"Photo providers available: {available}")
    return providers
