"""Error taxonomy for the Recipe Catalog API.

Every error raised by the core derives from RecipeCatalogError and carries the
HTTP status class it maps to, so the API adapter can translate it without
knowing individual exception types:

- RecipeValidationError (InvalidCuisine, InvalidTags): bad request (400)
- RecipeNotFound: not found (404)
- MalformedOracleOutput, OracleCallFailure, StoreFailure: internal failure (500)
"""

from typing import Any, Optional


class RecipeCatalogError(Exception):
    """Base class for all catalog errors."""

    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize into the error body returned to clients."""
        return {
            "error": {
                "type": self.error_type,
                "message": self.message,
                "details": self.details,
            }
        }


class RecipeValidationError(RecipeCatalogError):
    """A recipe draft references vocabulary entries that do not exist."""

    status_code = 400
    error_type = "bad_request"


class InvalidCuisine(RecipeValidationError):
    """The draft's cuisine has no exact match in the cuisine vocabulary."""

    def __init__(self, cuisine: str, draft: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            f"Invalid cuisine: {cuisine!r}",
            details={"cuisine": cuisine, "recipe": draft},
        )
        self.cuisine = cuisine


class InvalidTags(RecipeValidationError):
    """One or more draft tags could not be resolved against the tag vocabulary."""

    def __init__(
        self,
        tags: list[str],
        unresolved: list[str],
        draft: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            "One or more tags are invalid",
            details={"tags": tags, "unresolved": unresolved, "recipe": draft},
        )
        self.tags = tags
        self.unresolved = unresolved


class RecipeNotFound(RecipeCatalogError):
    """No recipe exists with the requested identifier."""

    status_code = 404
    error_type = "not_found"

    def __init__(self, recipe_id: str) -> None:
        super().__init__(f"Recipe not found: {recipe_id}", details={"id": recipe_id})
        self.recipe_id = recipe_id


class MalformedOracleOutput(RecipeCatalogError):
    """The language model returned something other than the required JSON shape."""

    def __init__(self, message: str, raw_output: Optional[str] = None) -> None:
        # Raw output stays on the exception for logging, not in the client payload
        super().__init__(message)
        self.raw_output = raw_output


class OracleCallFailure(RecipeCatalogError):
    """The language model call itself failed (transport, quota, auth)."""


class StoreFailure(RecipeCatalogError):
    """A database operation failed."""
