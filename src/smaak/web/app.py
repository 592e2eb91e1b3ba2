"""
Smaak Web API - FastAPI application.

JSON endpoints for composition analysis and the ingredient catalog.
"""

import logging

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from smaak import __version__
from smaak.analysis import (
    CompositionAnalyzer,
    EmptyCompositionError,
    UnknownCookingMethodError,
    UnknownIngredientError,
)
from smaak.analysis.sensory import ingredient_sensory_profile
from smaak.catalog import IngredientCatalog, get_catalog
from smaak.config import settings
from smaak.cooking import cooking_guidance
from smaak.models import CompositionAnalysis, CookingMethod, Ingredient, IngredientSuggestion
from smaak.observability import setup_logging

logger = logging.getLogger(__name__)

app = FastAPI(title="Smaak", version=__version__)


@app.on_event("startup")
async def configure_logging():
    setup_logging(settings.log_level)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# =============================================================================
# Dependencies
# =============================================================================


def get_ingredient_catalog() -> IngredientCatalog:
    return get_catalog()


def get_analyzer(catalog: IngredientCatalog = Depends(get_ingredient_catalog)) -> CompositionAnalyzer:
    return CompositionAnalyzer(catalog=catalog)


def require_ingredient(ingredient_id: str, catalog: IngredientCatalog) -> Ingredient:
    ingredient = catalog.get(ingredient_id)
    if ingredient is None:
        raise HTTPException(status_code=404, detail=f"Ingredient not found: {ingredient_id}")
    return ingredient


# =============================================================================
# Models
# =============================================================================


class AnalyzeRequest(BaseModel):
    ingredients: list[str] = Field(..., description="Ingredient names as typed by the user")
    cooking_methods: dict[str, str] | None = Field(
        default=None,
        description="Ingredient name -> cooking method name",
    )
    strict: bool | None = None


class CookingMethodsResponse(BaseModel):
    ingredient_id: str
    methods: list[CookingMethod]
    optimal: CookingMethod | None = None


class GuidanceResponse(BaseModel):
    ingredient_id: str
    method: str
    guidance: str


# =============================================================================
# Analysis Endpoints
# =============================================================================


def _run_analysis(req: AnalyzeRequest, analyzer: CompositionAnalyzer) -> CompositionAnalysis:
    try:
        return analyzer.analyze_composition(req.ingredients, req.cooking_methods, strict=req.strict)
    except UnknownIngredientError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "unknown_ingredients": e.names},
        )
    except (EmptyCompositionError, UnknownCookingMethodError) as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/api/analyze", response_model=CompositionAnalysis)
async def analyze(req: AnalyzeRequest, analyzer: CompositionAnalyzer = Depends(get_analyzer)):
    """Score an ingredient selection and explain what it is missing."""
    analysis = _run_analysis(req, analyzer)
    logger.info(f"Analyzed {len(analysis.ingredients)} ingredients, score {analysis.overall_score}")
    return analysis


@app.post("/api/suggestions", response_model=list[IngredientSuggestion])
async def suggestions(req: AnalyzeRequest, analyzer: CompositionAnalyzer = Depends(get_analyzer)):
    """Ingredient suggestions only."""
    return _run_analysis(req, analyzer).suggestions


# =============================================================================
# Catalog Endpoints
# =============================================================================


@app.get("/api/ingredients", response_model=list[Ingredient])
async def list_ingredients(
    category: str | None = None,
    catalog: IngredientCatalog = Depends(get_ingredient_catalog),
):
    """All ingredients, optionally filtered by category (case-insensitive)."""
    if category is None:
        return catalog.all_ingredients()
    grouped = catalog.ingredients_by_category()
    for name, ingredients in grouped.items():
        if name.lower() == category.lower():
            return ingredients
    return []


@app.get("/api/ingredients/categories")
async def list_categories(catalog: IngredientCatalog = Depends(get_ingredient_catalog)):
    """Category names with ingredient counts."""
    return [
        {"name": name, "count": len(ingredients)}
        for name, ingredients in catalog.ingredients_by_category().items()
    ]


@app.get("/api/ingredients/search", response_model=list[Ingredient])
async def search_ingredients(
    q: str = Query(..., min_length=1),
    limit: int = Query(20, ge=1, le=100),
    catalog: IngredientCatalog = Depends(get_ingredient_catalog),
):
    return catalog.search(q, limit=limit)


@app.get("/api/ingredients/{ingredient_id}")
async def get_ingredient(ingredient_id: str, catalog: IngredientCatalog = Depends(get_ingredient_catalog)):
    """Ingredient details plus its raw sensory profile."""
    ingredient = require_ingredient(ingredient_id, catalog)
    return {
        **ingredient.model_dump(mode="json"),
        "sensory_profile": ingredient_sensory_profile(ingredient).model_dump(mode="json"),
    }


@app.get("/api/ingredients/{ingredient_id}/cooking-methods", response_model=CookingMethodsResponse)
async def ingredient_cooking_methods(
    ingredient_id: str,
    catalog: IngredientCatalog = Depends(get_ingredient_catalog),
):
    require_ingredient(ingredient_id, catalog)
    return CookingMethodsResponse(
        ingredient_id=ingredient_id,
        methods=catalog.cooking_methods_for(ingredient_id),
        optimal=catalog.optimal_cooking_method(ingredient_id),
    )


@app.get("/api/ingredients/{ingredient_id}/guidance", response_model=GuidanceResponse)
async def ingredient_guidance(
    ingredient_id: str,
    method: str = "Raw",
    catalog: IngredientCatalog = Depends(get_ingredient_catalog),
):
    """Preparation notes for an ingredient and cooking method."""
    ingredient = require_ingredient(ingredient_id, catalog)
    if catalog.cooking_method(method) is None:
        raise HTTPException(status_code=404, detail=f"Cooking method not found: {method}")
    return GuidanceResponse(
        ingredient_id=ingredient_id,
        method=method,
        guidance=cooking_guidance(ingredient, method, catalog),
    )


@app.get("/api/cooking-methods", response_model=list[CookingMethod])
async def list_cooking_methods(catalog: IngredientCatalog = Depends(get_ingredient_catalog)):
    return catalog.cooking_methods()
