"""API routes for parsing, scaling and converting ingredient lines."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, status

from recipekit.config import Settings, get_settings
from recipekit.logging_config import LoggingContext, get_logger
from recipekit.normalize import (
    UnitSystem,
    normalize_ingredient_line,
    parse_ingredient,
    process_ingredients,
)
from recipekit.schemas import (
    IngredientLinesRequest,
    NormalizedIngredientsResponse,
    ParsedIngredientSchema,
    ParsedIngredientsResponse,
    ProcessIngredientsRequest,
    ProcessIngredientsResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/ingredients", tags=["ingredients"])


def _check_batch_size(lines: list[str], settings: Settings) -> None:
    if len(lines) > settings.max_ingredient_lines:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=(
                f"Too many ingredient lines: {len(lines)} "
                f"(limit {settings.max_ingredient_lines})"
            ),
        )


@router.post("/parse", response_model=ParsedIngredientsResponse)
async def parse_ingredients(
    request: IngredientLinesRequest,
    settings: Settings = Depends(get_settings),
) -> ParsedIngredientsResponse:
    """Split each line into amount, unit and ingredient name."""
    _check_batch_size(request.ingredients, settings)

    parsed = [
        ParsedIngredientSchema.model_validate(parse_ingredient(line))
        for line in request.ingredients
    ]
    return ParsedIngredientsResponse(ingredients=parsed, total=len(parsed))


@router.post("/process", response_model=ProcessIngredientsResponse)
async def process_recipe_ingredients(
    request: ProcessIngredientsRequest,
    settings: Settings = Depends(get_settings),
) -> ProcessIngredientsResponse:
    """
    Rescale a recipe's ingredients to a serving count and unit system.

    Lines that cannot be parsed come back unchanged.
    """
    _check_batch_size(request.ingredients, settings)

    original_servings = request.original_servings
    if original_servings is None:
        original_servings = settings.default_original_servings

    with LoggingContext(request_id=str(uuid.uuid4()), recipe=request.recipe_name):
        lines = process_ingredients(
            request.ingredients,
            target_servings=request.servings,
            original_servings=original_servings,
            use_metric=request.use_metric,
        )
        logger.info(
            f"Processed {len(lines)} ingredient lines: "
            f"servings {original_servings} -> {request.servings}, "
            f"metric={request.use_metric}"
        )

    return ProcessIngredientsResponse(
        ingredients=lines,
        scale_factor=request.servings / original_servings if original_servings > 0 else None,
        unit_system=UnitSystem.METRIC if request.use_metric else UnitSystem.IMPERIAL,
    )


@router.post("/normalize", response_model=NormalizedIngredientsResponse)
async def normalize_ingredients(
    request: IngredientLinesRequest,
    settings: Settings = Depends(get_settings),
) -> NormalizedIngredientsResponse:
    """Rewrite imported lines with canonical units and amounts."""
    _check_batch_size(request.ingredients, settings)

    lines = [normalize_ingredient_line(line) for line in request.ingredients]
    return NormalizedIngredientsResponse(ingredients=lines, total=len(lines))
