"""Recipe catalog service: the request flows behind every API operation.

Explicit searches go straight to the query builder; natural-language searches
pass through the intent resolver first. Both creation paths (explicit drafts
and AI-parsed text) converge on the normalizer before reaching the store.
"""

import asyncio

from recipe_catalog.ai.intent_resolver import IntentResolver
from recipe_catalog.ai.recipe_parser import RecipeParser
from recipe_catalog.db.recipe_store import RecipeStore
from recipe_catalog.db.vocabulary import VocabularyProvider
from recipe_catalog.models.models import (
    AISearchResponse,
    RecipeDraft,
    RecipeRecord,
    RecipeSummary,
    SearchIntent,
)
from recipe_catalog.recipes.normalizer import normalize_recipe
from recipe_catalog.search.query_builder import build_recipe_filter
from recipe_catalog.utils.logger import logger


class RecipeCatalog:
    """Orchestrates vocabulary reads, oracle calls, normalization and storage."""

    def __init__(
        self,
        store: RecipeStore,
        vocabulary: VocabularyProvider,
        intent_resolver: IntentResolver,
        recipe_parser: RecipeParser,
    ) -> None:
        self.store = store
        self.vocabulary = vocabulary
        self.intent_resolver = intent_resolver
        self.recipe_parser = recipe_parser

    async def search(self, intent: SearchIntent) -> list[RecipeSummary]:
        """List recipes matching an explicit search intent."""
        recipes = await self.store.find_many(build_recipe_filter(intent))
        logger.info(f"Search matched {len(recipes)} recipe(s)")
        return recipes

    async def ai_search(self, query: str) -> AISearchResponse:
        """Resolve a natural-language query and list the matching recipes."""
        vocabulary = await self.vocabulary.snapshot()
        intent = await self.intent_resolver.resolve(
            query, vocabulary.tags, vocabulary.cuisines, vocabulary.ingredients
        )
        recipes = await self.search(intent)
        return AISearchResponse(search_params=intent, recipes=recipes)

    async def get_recipe(self, recipe_id: str) -> RecipeRecord:
        return await self.store.find_one(recipe_id)

    async def create_recipe(self, draft: RecipeDraft) -> RecipeRecord:
        """Validate, normalize and store a draft.

        Returns:
            The stored record, with its generated id.
        """
        record = await normalize_recipe(draft, self.vocabulary)
        recipe_id = await self.store.insert_one(record)
        logger.info(f"Created recipe {record.name!r} ({recipe_id})")
        return record.model_copy(update={"id": recipe_id})

    async def ai_create_recipe(self, recipe_text: str) -> RecipeRecord:
        """Parse free-text recipe with the oracle, then create it like any draft."""
        draft = await self.parse_recipe(recipe_text)
        return await self.create_recipe(draft)

    async def parse_recipe(self, recipe_text: str) -> RecipeDraft:
        """Parse free-text recipe into an (unvalidated) draft without storing it."""
        cuisines, tags = await asyncio.gather(
            self.vocabulary.cuisine_names(), self.vocabulary.tag_names()
        )
        return await self.recipe_parser.parse(recipe_text, cuisines, tags)
