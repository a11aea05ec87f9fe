"""Tests for the HTTP API endpoints."""

import pytest

pytestmark = pytest.mark.api


class TestHealthEndpoint:
    """Tests for the service health and info endpoints."""

    def test_health_check(self, client):
        """Test that the service reports itself healthy."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "recipekit-api"}

    def test_root_endpoint(self, client):
        """Test that the root endpoint points at the docs and the API version."""
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["name"] == "Recipekit API"
        assert data["version"]
        assert data["docs"] == "/docs"

    def test_unknown_route(self, client):
        """Test that routes outside the API are not found."""
        response = client.get("/api/v1/recipes")
        assert response.status_code == 404


class TestParseEndpoint:
    """Tests for POST /api/v1/ingredients/parse."""

    def test_parse_lines(self, client):
        """Test that each line comes back structured, in order."""
        response = client.post(
            "/api/v1/ingredients/parse",
            json={"ingredients": ["1 1/2 cups (360 ml) heavy cream", "3 eggs", "salt to taste"]},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["total"] == 3
        assert data["ingredients"][0] == {
            "original": "1 1/2 cups (360 ml) heavy cream",
            "amount": 360.0,
            "unit": "ml",
            "ingredient": "heavy cream",
        }
        assert data["ingredients"][1]["unit"] is None
        assert data["ingredients"][2]["amount"] is None
        assert data["ingredients"][2]["ingredient"] == "salt to taste"

    def test_missing_body_field(self, client):
        """Test that a request without ingredients is rejected."""
        response = client.post("/api/v1/ingredients/parse", json={})
        assert response.status_code == 422


class TestProcessEndpoint:
    """Tests for POST /api/v1/ingredients/process."""

    def test_double_with_default_servings(self, client):
        """Test that recipes are assumed to serve four."""
        response = client.post(
            "/api/v1/ingredients/process",
            json={"ingredients": ["2 cups flour", "3 eggs"], "servings": 8},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["ingredients"] == ["4 cups flour", "6 eggs"]
        assert data["scale_factor"] == 2.0
        assert data["unit_system"] == "imperial"

    def test_metric(self, client):
        """Test converting to metric."""
        response = client.post(
            "/api/v1/ingredients/process",
            json={
                "ingredients": ["1 cup milk", "2 cloves garlic"],
                "servings": 2,
                "original_servings": 2,
                "use_metric": True,
                "recipe_name": "garlic milk",
            },
        )
        assert response.status_code == 200

        data = response.json()
        assert data["ingredients"] == ["236.59 ml milk", "2 cloves garlic"]
        assert data["scale_factor"] == 1.0
        assert data["unit_system"] == "metric"

    def test_zero_original_servings(self, client):
        """Test that an unknown original serving count skips scaling."""
        response = client.post(
            "/api/v1/ingredients/process",
            json={"ingredients": ["2 cups flour"], "servings": 6, "original_servings": 0},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["ingredients"] == ["2 cups flour"]
        assert data["scale_factor"] is None

    def test_servings_must_be_positive(self, client):
        """Test that zero target servings is a validation error."""
        response = client.post(
            "/api/v1/ingredients/process",
            json={"ingredients": ["2 cups flour"], "servings": 0},
        )
        assert response.status_code == 422

    def test_too_many_lines(self, limited_client):
        """Test that oversized batches are refused."""
        response = limited_client.post(
            "/api/v1/ingredients/process",
            json={"ingredients": ["1 egg", "2 eggs", "3 eggs"], "servings": 4},
        )
        assert response.status_code == 413
        assert "limit 2" in response.json()["detail"]


class TestNormalizeEndpoint:
    """Tests for POST /api/v1/ingredients/normalize."""

    def test_normalize_lines(self, client):
        """Test that imported lines are rewritten with canonical units."""
        response = client.post(
            "/api/v1/ingredients/normalize",
            json={"ingredients": ["2 Tablespoons olive oil", "0.5 teaspoon salt", "pepper"]},
        )
        assert response.status_code == 200
        assert response.json() == {
            "ingredients": ["2 tbsp olive oil", "1/2 tsp salt", "pepper"],
            "total": 3,
        }

    def test_too_many_lines(self, limited_client):
        """Test that the batch limit applies here too."""
        response = limited_client.post(
            "/api/v1/ingredients/normalize",
            json={"ingredients": ["a", "b", "c"]},
        )
        assert response.status_code == 413
