"""Request and response schemas for the ingredient API."""

from pydantic import BaseModel, Field

from recipekit.normalize.units import UnitSystem


class IngredientLinesRequest(BaseModel):
    """A batch of raw ingredient lines."""

    ingredients: list[str] = Field(description="Ingredient lines as typed or scraped")


class ProcessIngredientsRequest(IngredientLinesRequest):
    """Request to rescale and convert a recipe's ingredients."""

    servings: float = Field(gt=0, description="Servings to cook")
    original_servings: float | None = Field(
        None, ge=0, description="Servings the recipe was written for"
    )
    use_metric: bool = False
    recipe_name: str | None = Field(None, description="Recipe name, used for log context")


class ParsedIngredientSchema(BaseModel):
    """Structured reading of one ingredient line."""

    original: str
    amount: float | None = None
    unit: str | None = None
    ingredient: str

    class Config:
        from_attributes = True


class ParsedIngredientsResponse(BaseModel):
    """Parsed ingredient lines, in request order."""

    ingredients: list[ParsedIngredientSchema]
    total: int


class ProcessIngredientsResponse(BaseModel):
    """Display lines after scaling and conversion."""

    ingredients: list[str]
    scale_factor: float | None
    unit_system: UnitSystem


class NormalizedIngredientsResponse(BaseModel):
    """Lines rewritten with canonical units and amounts."""

    ingredients: list[str]
    total: int
