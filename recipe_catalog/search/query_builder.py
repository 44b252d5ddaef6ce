"""SearchIntent to MongoDB filter document.

Matching semantics per field (all case-insensitive, combined with AND):
- tags: recipe has ANY of the tags, exact name match
- cuisines: recipe cuisine name contains ANY of the values
- ingredients: for EVERY value, some ingredient name contains it
- name: recipe name contains the value

User input is always regex-escaped; it never reaches the database as a pattern.
"""

import re
from typing import Any, Optional

from recipe_catalog.models.models import SearchIntent

# Listing reads only the fields a summary needs
SUMMARY_PROJECTION: dict[str, int] = {"_id": 0, "name": 1, "cuisine": 1, "tags": 1}


def _contains(field: str, value: str) -> dict[str, Any]:
    return {field: {"$regex": re.escape(value), "$options": "i"}}


def _equals_ignoring_case(field: str, value: str) -> dict[str, Any]:
    return {field: {"$regex": f"^{re.escape(value)}$", "$options": "i"}}


def _any_of(clauses: list[dict[str, Any]]) -> dict[str, Any]:
    return clauses[0] if len(clauses) == 1 else {"$or": clauses}


def build_recipe_filter(intent: SearchIntent) -> dict[str, Any]:
    """Build the MongoDB filter for a search intent.

    Args:
        intent: Search intent; empty fields add no constraint.

    Returns:
        Filter document. An empty intent yields {} (matches every recipe).
    """
    clauses: list[dict[str, Any]] = []

    if intent.tags:
        clauses.append(_any_of([_equals_ignoring_case("tags.name", tag) for tag in intent.tags]))

    if intent.cuisines:
        clauses.append(_any_of([_contains("cuisine.name", cuisine) for cuisine in intent.cuisines]))

    # One clause per ingredient: each must be satisfied by some ingredient
    for ingredient in intent.ingredients:
        clauses.append(_contains("ingredients.name", ingredient))

    if intent.name:
        clauses.append(_contains("name", intent.name))

    if not clauses:
        return {}
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def parse_csv_list(value: Optional[str]) -> list[str]:
    """Split a comma-separated query parameter, dropping blank elements.

    >>> parse_csv_list(" quick, vegan,,")
    ['quick', 'vegan']
    """
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def intent_from_params(
    tags: Optional[str] = None,
    cuisines: Optional[str] = None,
    ingredients: Optional[str] = None,
    name: Optional[str] = None,
) -> SearchIntent:
    """Build a SearchIntent from explicit (comma-separated) search parameters."""
    return SearchIntent(
        tags=parse_csv_list(tags),
        cuisines=parse_csv_list(cuisines),
        ingredients=parse_csv_list(ingredients),
        name=name.strip() if name else None,
    )
