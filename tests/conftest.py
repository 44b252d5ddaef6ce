"""Shared pytest fixtures.

Seeds required environment variables before any project module is imported
(recipe_catalog.utils.config validates on import), and provides:
- an async adapter over mongomock so the real store code runs against an
  in-memory document database with MongoDB filter semantics
- a seeded vocabulary (tags, cuisines, ingredients)
- a fake language-model oracle returning canned responses
"""

import os

os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")

import mongomock
import pytest


class AsyncCursorAdapter:
    """Async view of a mongomock cursor."""

    def __init__(self, cursor) -> None:
        self._cursor = cursor

    async def to_list(self, length=None):
        documents = list(self._cursor)
        return documents if length is None else documents[:length]


class AsyncCollectionAdapter:
    """Async view of the mongomock collection methods the store uses."""

    def __init__(self, collection) -> None:
        self._collection = collection

    def find(self, *args, **kwargs):
        return AsyncCursorAdapter(self._collection.find(*args, **kwargs))

    async def find_one(self, *args, **kwargs):
        return self._collection.find_one(*args, **kwargs)

    async def distinct(self, key, *args, **kwargs):
        return self._collection.distinct(key, *args, **kwargs)

    async def insert_one(self, document):
        return self._collection.insert_one(document)


class AsyncDatabaseAdapter:
    """Async view of a mongomock database: db[name] returns an async collection."""

    def __init__(self, database) -> None:
        self.sync = database

    def __getitem__(self, name: str) -> AsyncCollectionAdapter:
        return AsyncCollectionAdapter(self.sync[name])


class FakeOracle:
    """Language-model stand-in returning queued responses in order.

    A queued Exception is raised instead of returned.
    """

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, dict]] = []

    async def generate(self, prompt: str, response_schema: dict) -> str:
        self.calls.append((prompt, response_schema))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


TAGS = ["quick", "easy", "vegan", "vegetarian", "healthy", "dinner", "light"]
CUISINES = ["Italian", "Thai", "Mexican", "Indian"]
INGREDIENTS = ["chicken", "garlic", "tofu", "spaghetti", "coconut milk", "lemongrass"]


@pytest.fixture
def mongo_db():
    """Empty in-memory database behind the async adapter."""
    client = mongomock.MongoClient()
    return AsyncDatabaseAdapter(client["recipe_book_test"])


@pytest.fixture
def vocab_db(mongo_db):
    """Database seeded with the tag, cuisine and ingredient vocabularies."""
    mongo_db.sync["tags"].insert_many([{"name": name} for name in TAGS])
    mongo_db.sync["cuisines"].insert_many([{"name": name} for name in CUISINES])
    mongo_db.sync["ingredients"].insert_many([{"name": name} for name in INGREDIENTS])
    return mongo_db


def make_recipe_document(name, cuisine, tags, ingredients):
    """Stored recipe document in the shape the store writes."""
    return {
        "name": name,
        "cuisine": {"_id": f"cuisine-{cuisine.lower()}", "name": cuisine},
        "prepTime": 10,
        "cookTime": 20,
        "servings": 2,
        "ingredients": [{"name": item, "quantity": "1", "unit": ""} for item in ingredients],
        "instructions": ["Cook it."],
        "tags": [{"_id": f"tag-{tag}", "name": tag} for tag in tags],
    }


@pytest.fixture
def fake_oracle_factory():
    return FakeOracle


@pytest.fixture
def recipe_document():
    return make_recipe_document
