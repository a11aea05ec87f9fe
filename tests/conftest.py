"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from recipekit.config import Settings, get_settings
from recipekit.main import app

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "api: marks tests that go through the HTTP layer")


# =============================================================================
# Ingredient Fixtures
# =============================================================================


@pytest.fixture
def pancake_ingredients():
    """Ingredient lines for a recipe written for 4 servings."""
    return [
        "1 1/2 cups all-purpose flour",
        "2 tbsp sugar",
        "1 tsp baking powder",
        "1/2 tsp salt",
        "2 eggs",
        "1 1/4 cups (300 ml) milk",
        "3 tablespoons melted butter",
        "maple syrup, to serve",
    ]


@pytest.fixture
def metric_ingredients():
    """Ingredient lines already written in metric units."""
    return [
        "500 g chicken thighs",
        "250 ml coconut milk",
        "1 kg potatoes",
        "2 l stock",
    ]


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def client():
    """Test client with default settings."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def limited_client():
    """Test client that only accepts two ingredient lines per request."""
    app.dependency_overrides[get_settings] = lambda: Settings(max_ingredient_lines=2)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
