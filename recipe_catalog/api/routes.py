"""HTTP routes for the recipe catalog.

Routes only translate between HTTP and the RecipeCatalog service; they hold no
matching or validation logic of their own.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import StringConstraints

from recipe_catalog.models.models import (
    AIRecipeRequest,
    AISearchResponse,
    CreatedRecipeResponse,
    ErrorResponse,
    RecipeDraft,
    RecipeRecord,
    RecipeSummary,
)
from recipe_catalog.search.query_builder import intent_from_params
from recipe_catalog.services.catalog import RecipeCatalog

router = APIRouter(tags=["recipes"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
    500: {"model": ErrorResponse, "description": "Language model or database failure"},
}


def get_catalog(request: Request) -> RecipeCatalog:
    return request.app.state.catalog


CatalogDep = Annotated[RecipeCatalog, Depends(get_catalog)]


@router.get("/")
async def root() -> dict[str, str]:
    return {"message": "Recipe catalog API is running"}


@router.get("/recipes", response_model=list[RecipeSummary], responses=ERROR_RESPONSES)
async def list_recipes(
    catalog: CatalogDep,
    tags: Annotated[Optional[str], Query(description="Comma-separated tags (ANY)")] = None,
    cuisines: Annotated[Optional[str], Query(description="Comma-separated cuisines (ANY)")] = None,
    ingredients: Annotated[Optional[str], Query(description="Comma-separated ingredients (ALL)")] = None,
    name: Annotated[Optional[str], Query(description="Substring of the recipe name")] = None,
) -> list[RecipeSummary]:
    """List recipe summaries, optionally filtered."""
    intent = intent_from_params(tags=tags, cuisines=cuisines, ingredients=ingredients, name=name)
    return await catalog.search(intent)


@router.get(
    "/recipes/{recipe_id}",
    response_model=RecipeRecord,
    responses={404: {"model": ErrorResponse, "description": "Recipe not found"}, **ERROR_RESPONSES},
)
async def get_recipe(recipe_id: str, catalog: CatalogDep) -> RecipeRecord:
    return await catalog.get_recipe(recipe_id)


@router.post(
    "/recipes",
    status_code=201,
    response_model=CreatedRecipeResponse,
    responses=ERROR_RESPONSES,
)
async def create_recipe(draft: RecipeDraft, catalog: CatalogDep) -> CreatedRecipeResponse:
    """Create a recipe; cuisine and tags must exactly match vocabulary names."""
    record = await catalog.create_recipe(draft)
    return CreatedRecipeResponse(message="Recipe created", recipe_id=record.id, recipe=record)


@router.get("/ai/recipes", response_model=AISearchResponse, responses=ERROR_RESPONSES)
async def ai_search_recipes(
    catalog: CatalogDep,
    query: Annotated[
        str,
        StringConstraints(strip_whitespace=True, min_length=1, max_length=2000),
        Query(description="Natural language search"),
    ],
) -> AISearchResponse:
    """Search recipes with a natural-language query."""
    return await catalog.ai_search(query)


@router.post(
    "/ai/recipes",
    status_code=201,
    response_model=CreatedRecipeResponse,
    responses=ERROR_RESPONSES,
)
async def ai_create_recipe(payload: AIRecipeRequest, catalog: CatalogDep) -> CreatedRecipeResponse:
    """Create a recipe from a natural-language description."""
    record = await catalog.ai_create_recipe(payload.recipe_text)
    return CreatedRecipeResponse(message="Recipe created", recipe_id=record.id, recipe=record)
