"""Recipe persistence in the `recipes` collection.

Stored documents use the camelCase field names of the API. Vocabulary
references are embedded as {_id, name} snapshots; identifiers that are valid
ObjectIds are stored as ObjectIds.
"""

from typing import Any

from bson import ObjectId
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from recipe_catalog.db.mongo import RECIPES_COLLECTION
from recipe_catalog.errors.errors import RecipeNotFound, StoreFailure
from recipe_catalog.models.models import RecipeRecord, RecipeSummary, VocabularyRef
from recipe_catalog.search.query_builder import SUMMARY_PROJECTION
from recipe_catalog.utils.logger import logger


def _to_object_id(value: str) -> Any:
    return ObjectId(value) if ObjectId.is_valid(value) else value


def _ref_to_document(ref: VocabularyRef) -> dict[str, Any]:
    return {"_id": _to_object_id(ref.id), "name": ref.name}


def _ref_from_document(document: dict[str, Any]) -> VocabularyRef:
    return VocabularyRef(id=str(document["_id"]), name=document["name"])


def record_to_document(record: RecipeRecord) -> dict[str, Any]:
    """Serialize a record for insertion (the store assigns _id)."""
    document = record.model_dump(by_alias=True, exclude={"id", "cuisine", "tags"})
    document["cuisine"] = _ref_to_document(record.cuisine)
    document["tags"] = [_ref_to_document(tag) for tag in record.tags]
    return document


def record_from_document(document: dict[str, Any]) -> RecipeRecord:
    """Deserialize a stored recipe document."""
    payload = {key: value for key, value in document.items() if key not in ("_id", "cuisine", "tags")}
    return RecipeRecord.model_validate(
        {
            **payload,
            "id": str(document["_id"]),
            "cuisine": _ref_from_document(document["cuisine"]),
            "tags": [_ref_from_document(tag) for tag in document.get("tags", [])],
        }
    )


class RecipeStore:
    """Read/write access to recipe documents."""

    def __init__(self, db: AsyncDatabase) -> None:
        self.collection = db[RECIPES_COLLECTION]

    async def find_many(self, query: dict[str, Any]) -> list[RecipeSummary]:
        """Return summaries (name, cuisine name, tag names) of matching recipes."""
        try:
            documents = await self.collection.find(query, SUMMARY_PROJECTION).to_list(None)
        except PyMongoError as e:
            logger.error(f"Recipe search failed: {e}")
            raise StoreFailure("Failed to search recipes") from e
        return [RecipeSummary.model_validate(document) for document in documents]

    async def find_one(self, recipe_id: str) -> RecipeRecord:
        """Fetch a full recipe by identifier.

        Raises:
            RecipeNotFound: If the identifier is not a valid ObjectId or matches nothing.
            StoreFailure: If the read fails.
        """
        if not ObjectId.is_valid(recipe_id):
            raise RecipeNotFound(recipe_id)
        try:
            document = await self.collection.find_one({"_id": ObjectId(recipe_id)})
        except PyMongoError as e:
            logger.error(f"Recipe read failed for {recipe_id}: {e}")
            raise StoreFailure("Failed to read recipe") from e
        if document is None:
            raise RecipeNotFound(recipe_id)
        return record_from_document(document)

    async def insert_one(self, record: RecipeRecord) -> str:
        """Insert a record and return the generated identifier."""
        try:
            result = await self.collection.insert_one(record_to_document(record))
        except PyMongoError as e:
            logger.error(f"Recipe insert failed for {record.name!r}: {e}")
            raise StoreFailure("Failed to create recipe") from e
        return str(result.inserted_id)
