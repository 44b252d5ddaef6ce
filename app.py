"""Recipe Catalog API - server entry point.

Serves the catalog REST API:
- GET  /recipes, /recipes/{id}   explicit search and retrieval
- POST /recipes                  create from a structured draft
- GET  /ai/recipes?query=...     natural-language search (Gemini)
- POST /ai/recipes               create from natural-language recipe text (Gemini)

Run with: python app.py
"""

import uvicorn

from recipe_catalog.api.app import create_app
from recipe_catalog.utils.config import config
from recipe_catalog.utils.logger import logger

app = create_app()


if __name__ == "__main__":
    logger.info(f"Starting Recipe Catalog API on port {config.PORT}")
    logger.info(f"API docs available at: http://localhost:{config.PORT}/docs")
    uvicorn.run("app:app", host=config.HOST, port=config.PORT)
