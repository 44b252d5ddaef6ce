"""Recipe draft validation and normalization.

Resolves a draft's cuisine and tags against the vocabulary collections and
produces a RecipeRecord holding {id, name} snapshots of the matched entries.

Lookups are exact and case-sensitive, unlike search which is case-insensitive
substring matching: creating a recipe establishes a reference, so the name
must match the stored canonical spelling.
"""

from typing import Optional, Protocol

from recipe_catalog.errors.errors import InvalidCuisine, InvalidTags
from recipe_catalog.models.models import RecipeDraft, RecipeRecord, VocabularyRef
from recipe_catalog.utils.logger import logger


class VocabularyLookup(Protocol):
    """Exact-name lookups against the cuisine and tag vocabularies."""

    async def find_cuisine(self, name: str) -> Optional[VocabularyRef]: ...

    async def find_tags(self, names: list[str]) -> list[VocabularyRef]: ...


async def normalize_recipe(draft: RecipeDraft, lookup: VocabularyLookup) -> RecipeRecord:
    """Validate a draft's references and build the record to store.

    Checks run in a fixed order so the reported error is deterministic:
    cuisine first, then tags. Duplicate tags in the draft are not collapsed;
    they resolve to fewer entries than requested and are rejected.

    Args:
        draft: Untrusted recipe draft.
        lookup: Vocabulary lookup; queried once per call, nothing cached.

    Returns:
        RecipeRecord (without id) with cuisine and tags resolved.

    Raises:
        InvalidCuisine: If the cuisine has no exact match.
        InvalidTags: If any tag has no exact match or tags are duplicated.
    """
    draft_payload = draft.model_dump(by_alias=True)

    cuisine = await lookup.find_cuisine(draft.cuisine)
    if cuisine is None:
        logger.info(f"Rejected recipe {draft.name!r}: unknown cuisine {draft.cuisine!r}")
        raise InvalidCuisine(draft.cuisine, draft_payload)

    resolved = await lookup.find_tags(draft.tags)
    by_name = {tag.name: tag for tag in resolved}
    unresolved = [name for name in draft.tags if name not in by_name]
    if unresolved or len(resolved) != len(draft.tags):
        logger.info(
            f"Rejected recipe {draft.name!r}: requested {len(draft.tags)} tags, "
            f"resolved {len(resolved)}, unresolved={unresolved}"
        )
        raise InvalidTags(draft.tags, unresolved, draft_payload)

    return RecipeRecord(
        name=draft.name,
        cuisine=cuisine,
        prep_time=draft.prep_time,
        cook_time=draft.cook_time,
        servings=draft.servings,
        ingredients=draft.ingredients,
        instructions=draft.instructions,
        tags=[by_name[name] for name in draft.tags],
    )
