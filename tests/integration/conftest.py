"""Pytest configuration and fixtures for integration tests.

Integration tests call the live Unsplash and Pexels APIs. They load .env and
skip when neither provider key is configured.
"""

import os
import pytest
from dotenv import load_dotenv
from pathlib import Path


def pytest_configure(config):
    """Load .env before collection so the module-level config sees the keys."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)

    print("\n" + "=" * 70)
    print("Note: These tests call live photo APIs (UNSPLASH_ACCESS_KEY / PEXELS_API_KEY)")
    print(f"Environment loaded from: {env_path}")
    print("=" * 70 + "\n")


@pytest.fixture(scope="session", autouse=True)
def check_api_keys():
    """Skip the session when no provider key is available."""
    if not os.getenv("UNSPLASH_ACCESS_KEY") and not os.getenv("PEXELS_API_KEY"):
        pytest.skip(
            "Integration tests skipped. Missing API keys: UNSPLASH_ACCESS_KEY, PEXELS_API_KEY. "
            "Please set at least one in your .env file.",
            allow_module_level=True,
        )
