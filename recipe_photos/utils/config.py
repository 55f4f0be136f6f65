"""Configuration management for the recipe photo finder.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os
from typing import List

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()

# Providers the engine knows how to talk to, in default priority order
KNOWN_PROVIDERS = ("unsplash", "pexels")

SEARCH_MODES = ("scored", "first-match")


def _parse_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Provider credentials: a missing key marks the provider as unavailable, never an error
        self.UNSPLASH_ACCESS_KEY: str = os.getenv("UNSPLASH_ACCESS_KEY", "")
        self.PEXELS_API_KEY: str = os.getenv("PEXELS_API_KEY", "")
        # Provider priority: comma-separated names, earlier names are searched first
        self.PROVIDER_ORDER: List[str] = [
            name.strip().lower()
            for name in os.getenv("PROVIDER_ORDER", ",".join(KNOWN_PROVIDERS)).split(",")
            if name.strip()
        ]
        # Search Mode: "scored" or "first-match"
        # "scored": query every provider for every query, rank all candidates
        # "first-match": accept the first food-looking photo and stop
        self.SEARCH_MODE: str = os.getenv("SEARCH_MODE", "scored").lower()
        # Search queries per recipe, 1 to 4. Default: 4
        self.MAX_QUERIES: int = int(os.getenv("MAX_QUERIES", "4"))
        # Domain qualifier appended to every query in scored mode
        self.QUERY_SUFFIX: str = os.getenv("QUERY_SUFFIX", "food recipe cooking")
        # Delay between two calls to the same provider (milliseconds). Default: 1000
        self.PROVIDER_DELAY_MS: int = int(os.getenv("PROVIDER_DELAY_MS", "1000"))
        # Pause between recipes when processing a batch (milliseconds). Default: 1500
        self.RECIPE_DELAY_MS: int = int(os.getenv("RECIPE_DELAY_MS", "1500"))
        # Photos requested per provider call. Default: 15
        self.RESULTS_PER_PAGE: int = int(os.getenv("RESULTS_PER_PAGE", "15"))
        # HTTP timeout for provider calls (seconds). Default: 10
        self.REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))
        # Batch runs leave recipes that already carry an image untouched
        self.SKIP_EXISTING_IMAGES: bool = _parse_bool(os.getenv("SKIP_EXISTING_IMAGES", "true"))

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If a setting holds an invalid value.
        """
        if not self.PROVIDER_ORDER:
            raise ValueError("PROVIDER_ORDER must name at least one provider")
        unknown = [name for name in self.PROVIDER_ORDER if name not in KNOWN_PROVIDERS]
        if unknown:
            raise ValueError(
                f"PROVIDER_ORDER contains unknown providers {unknown}, expected any of {list(KNOWN_PROVIDERS)}"
            )
        if len(set(self.PROVIDER_ORDER)) != len(self.PROVIDER_ORDER):
            raise ValueError(f"PROVIDER_ORDER must not repeat a provider, got: {self.PROVIDER_ORDER}")
        if self.SEARCH_MODE not in SEARCH_MODES:
            raise ValueError(f"SEARCH_MODE must be 'scored' or 'first-match', got: {self.SEARCH_MODE}")
        if not (1 <= self.MAX_QUERIES <= 4):
            raise ValueError(f"MAX_QUERIES must be between 1 and 4, got: {self.MAX_QUERIES}")
        if self.PROVIDER_DELAY_MS < 0:
            raise ValueError(f"PROVIDER_DELAY_MS must not be negative, got: {self.PROVIDER_DELAY_MS}")
        if self.RECIPE_DELAY_MS < 0:
            raise ValueError(f"RECIPE_DELAY_MS must not be negative, got: {self.RECIPE_DELAY_MS}")
        if not (1 <= self.RESULTS_PER_PAGE <= 80):
            raise ValueError(f"RESULTS_PER_PAGE must be between 1 and 80, got: {self.RESULTS_PER_PAGE}")
        if self.REQUEST_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"REQUEST_TIMEOUT_SECONDS must be positive, got: {self.REQUEST_TIMEOUT_SECONDS}"
            )


# Create module-level config instance and validate immediately
config = Config()
config.validate()
