"""Data models and schemas for the Recipe Catalog API.

Defines Pydantic models for request/response validation and domain objects.
All models use Pydantic v2. JSON field names are camelCase (prepTime,
recipeId, ...) while Python attributes stay snake_case.
"""

from typing import Any, List, Optional, Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _unique(values: list[str]) -> list[str]:
    """Remove duplicates while preserving first-seen order."""
    return list(dict.fromkeys(values))


class CatalogModel(BaseModel):
    """Base model: camelCase aliases, population by field name, stripped strings."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# ============================================================================
# Vocabulary
# ============================================================================


class VocabularyRef(CatalogModel):
    """Reference to a vocabulary document, snapshotted into a recipe at creation."""

    id: Annotated[str, Field(description="Identifier of the vocabulary document")]
    name: Annotated[str, Field(description="Canonical vocabulary name at creation time")]


class NamedRef(CatalogModel):
    """Name-only view of a vocabulary reference, used in listing summaries."""

    name: str


class Vocabulary(CatalogModel):
    """Current distinct names of every vocabulary category."""

    tags: List[str] = Field(default_factory=list)
    cuisines: List[str] = Field(default_factory=list)
    ingredients: List[str] = Field(default_factory=list)


# ============================================================================
# Search
# ============================================================================


class SearchIntent(CatalogModel):
    """Structured recipe search, from explicit parameters or the intent resolver.

    Every field is optional; an empty field contributes no constraint. Lists
    behave as sets: duplicates are dropped on construction.
    """

    tags: Annotated[
        List[str], Field(default_factory=list, description="Match recipes having ANY of these tags")
    ]
    cuisines: Annotated[
        List[str], Field(default_factory=list, description="Match recipes whose cuisine contains ANY of these")
    ]
    ingredients: Annotated[
        List[str],
        Field(default_factory=list, description="Match recipes containing ALL of these ingredients"),
    ]
    name: Annotated[
        Optional[str], Field(None, description="Case-insensitive substring of the recipe name")
    ]

    @field_validator("tags", "cuisines", "ingredients")
    @classmethod
    def drop_duplicates(cls, values: list[str]) -> list[str]:
        return _unique([v for v in values if v])

    @field_validator("name")
    @classmethod
    def empty_name_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @property
    def is_empty(self) -> bool:
        return not (self.tags or self.cuisines or self.ingredients or self.name)


class SearchParamsOutput(BaseModel):
    """Shape the language model must return for a search query.

    Absent (or null) fields are treated as empty lists. Anything that is not a
    list of strings fails validation.
    """

    model_config = ConfigDict(extra="ignore")

    cuisines: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    ingredients: List[str] = Field(default_factory=list)

    @field_validator("cuisines", "tags", "ingredients", mode="before")
    @classmethod
    def null_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


# ============================================================================
# Recipes
# ============================================================================


class IngredientLine(CatalogModel):
    """One ingredient of a recipe: name, free-text quantity and unit."""

    # Clients often send quantities as numbers
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: Annotated[str, Field(min_length=1, max_length=200)]
    quantity: Annotated[str, Field("", max_length=100, description='e.g. "400", "to taste"')]
    unit: Annotated[str, Field("", max_length=50, description='e.g. "g", "whole", ""')]


class RecipeBase(CatalogModel):
    """Fields shared by drafts and stored records."""

    name: Annotated[str, Field(min_length=1, max_length=200, description="Recipe title")]
    prep_time: Annotated[
        Optional[int | float], Field(None, ge=0, description="Preparation time in minutes")
    ]
    cook_time: Annotated[
        Optional[int | float], Field(None, ge=0, description="Cooking time in minutes")
    ]
    servings: Annotated[Optional[int | float], Field(None, ge=0)]
    ingredients: Annotated[List[IngredientLine], Field(max_length=100)]
    instructions: Annotated[List[str], Field(max_length=100, description="Step-by-step instructions")]


class RecipeDraft(RecipeBase):
    """Untrusted recipe payload from a client or the language model.

    cuisine and tags are plain names that still have to be resolved against
    the vocabulary by the normalizer, so they are kept exactly as sent:
    " Italian " does not match "Italian".
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    cuisine: Annotated[str, Field(min_length=1, max_length=100)]
    tags: Annotated[List[str], Field(max_length=50)]

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("instructions")
    @classmethod
    def strip_instructions(cls, steps: list[str]) -> list[str]:
        return [step.strip() for step in steps]


class RecipeRecord(RecipeBase):
    """Validated recipe with cuisine and tags resolved to vocabulary references."""

    id: Annotated[Optional[str], Field(None, description="Store identifier, set once persisted")]
    cuisine: VocabularyRef
    tags: List[VocabularyRef]


class RecipeSummary(CatalogModel):
    """Lightweight listing view: name, cuisine name and tag names only."""

    name: str
    cuisine: Optional[NamedRef] = None
    tags: List[NamedRef] = Field(default_factory=list)


# ============================================================================
# API requests and responses
# ============================================================================


class AIRecipeRequest(CatalogModel):
    """Free-text recipe description to be parsed by the language model."""

    recipe_text: Annotated[
        str,
        Field(min_length=1, max_length=5000, description="Natural language recipe (1-5000 chars)"),
    ]


class AISearchResponse(CatalogModel):
    """Result of a natural-language search: the synthesized parameters and matches."""

    search_params: SearchIntent
    recipes: List[RecipeSummary]


class CreatedRecipeResponse(CatalogModel):
    """Response for a successfully created recipe."""

    message: str
    recipe_id: str
    recipe: RecipeRecord


class ErrorDetail(BaseModel):
    type: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Error body shared by every failure response."""

    error: ErrorDetail
