"""FastAPI application factory.

Builds the dependency graph at startup (MongoDB connection -> vocabulary
provider and recipe store; Gemini oracle -> intent resolver and recipe
parser) and tears the connection down at shutdown. A prebuilt RecipeCatalog
can be passed in instead, in which case no connection is managed.
"""

import contextlib
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from recipe_catalog.ai.gemini import GeminiOracle
from recipe_catalog.ai.intent_resolver import IntentResolver
from recipe_catalog.ai.recipe_parser import RecipeParser
from recipe_catalog.api.handlers import register_handlers
from recipe_catalog.api.routes import router
from recipe_catalog.db.mongo import MongoConnection
from recipe_catalog.db.recipe_store import RecipeStore
from recipe_catalog.db.vocabulary import VocabularyProvider
from recipe_catalog.services.catalog import RecipeCatalog
from recipe_catalog.utils.config import config
from recipe_catalog.utils.logger import logger


def build_catalog(connection: MongoConnection, oracle: GeminiOracle) -> RecipeCatalog:
    """Wire the catalog components around an owned connection and oracle."""
    database = connection.database
    return RecipeCatalog(
        store=RecipeStore(database),
        vocabulary=VocabularyProvider(database),
        intent_resolver=IntentResolver(oracle),
        recipe_parser=RecipeParser(oracle),
    )


def create_app(catalog: Optional[RecipeCatalog] = None) -> FastAPI:
    """Create the API application.

    Args:
        catalog: Prebuilt catalog (tests). When None, one is built from config
            at startup and its MongoDB connection is closed at shutdown.

    Returns:
        FastAPI: Configured application.
    """

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if catalog is not None:
            app.state.catalog = catalog
            yield
            return

        logger.info("Connecting to MongoDB...")
        connection = MongoConnection(config.MONGO_URI, config.MONGO_DB_NAME)
        try:
            await connection.connect()
            oracle = GeminiOracle(
                api_key=config.GEMINI_API_KEY,
                model=config.GEMINI_MODEL,
                temperature=config.TEMPERATURE,
            )
            app.state.catalog = build_catalog(connection, oracle)
            logger.info(f"Recipe catalog ready (model={config.GEMINI_MODEL})")
            yield
        finally:
            await connection.close()

    app = FastAPI(
        title="Recipe Catalog API",
        description="Search, retrieve and create recipes, with natural-language search and recipe parsing",
        lifespan=lifespan,
    )
    register_handlers(app)
    app.include_router(router)
    return app
