"""Vocabulary reads: distinct tag, cuisine and ingredient names, and exact lookups.

VocabularyProvider satisfies the normalizer's VocabularyLookup protocol.
"""

import asyncio
from typing import Any, Optional

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from recipe_catalog.db.mongo import CUISINES_COLLECTION, INGREDIENTS_COLLECTION, TAGS_COLLECTION
from recipe_catalog.errors.errors import StoreFailure
from recipe_catalog.models.models import Vocabulary, VocabularyRef
from recipe_catalog.utils.logger import logger


def _to_ref(document: dict[str, Any]) -> VocabularyRef:
    return VocabularyRef(id=str(document["_id"]), name=document["name"])


class VocabularyProvider:
    """Reads the tags, cuisines and ingredients collections."""

    def __init__(self, db: AsyncDatabase) -> None:
        self.db = db

    async def _distinct_names(self, collection: str) -> list[str]:
        try:
            names = await self.db[collection].distinct("name")
        except PyMongoError as e:
            logger.error(f"Failed to read {collection} vocabulary: {e}")
            raise StoreFailure(f"Failed to read {collection} vocabulary") from e
        return [name for name in names if isinstance(name, str) and name]

    async def tag_names(self) -> list[str]:
        return await self._distinct_names(TAGS_COLLECTION)

    async def cuisine_names(self) -> list[str]:
        return await self._distinct_names(CUISINES_COLLECTION)

    async def ingredient_names(self) -> list[str]:
        return await self._distinct_names(INGREDIENTS_COLLECTION)

    async def snapshot(self) -> Vocabulary:
        """Read all three vocabularies concurrently."""
        tags, cuisines, ingredients = await asyncio.gather(
            self.tag_names(), self.cuisine_names(), self.ingredient_names()
        )
        logger.debug(
            f"Vocabulary loaded: {len(tags)} tags, {len(cuisines)} cuisines, "
            f"{len(ingredients)} ingredients"
        )
        return Vocabulary(tags=tags, cuisines=cuisines, ingredients=ingredients)

    async def find_cuisine(self, name: str) -> Optional[VocabularyRef]:
        """Exact, case-sensitive cuisine lookup."""
        try:
            document = await self.db[CUISINES_COLLECTION].find_one({"name": name})
        except PyMongoError as e:
            logger.error(f"Cuisine lookup failed: {e}")
            raise StoreFailure("Failed to look up cuisine") from e
        return _to_ref(document) if document else None

    async def find_tags(self, names: list[str]) -> list[VocabularyRef]:
        """Exact, case-sensitive lookup of every tag document named in `names`."""
        if not names:
            return []
        try:
            documents = await self.db[TAGS_COLLECTION].find({"name": {"$in": names}}).to_list(None)
        except PyMongoError as e:
            logger.error(f"Tag lookup failed: {e}")
            raise StoreFailure("Failed to look up tags") from e
        return [_to_ref(document) for document in documents]
