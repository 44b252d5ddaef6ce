"""Gemini language-model oracle and strict parsing of its JSON output.

The oracle is a black box: it takes a rendered prompt plus a response schema
and returns raw text. Everything recipe-specific (prompt wording, output
models, sanitation) lives in the resolver and parser modules, which depend only
on the LanguageModelOracle protocol so tests can substitute canned responses.

Core Functions:
- GeminiOracle.generate(): single Gemini call, JSON response mode (async)
- strip_code_fences(): remove ```json fences some models still emit
- parse_oracle_output(): strict JSON -> Pydantic model, MalformedOracleOutput otherwise
"""

import asyncio
import time
from typing import Optional, Protocol, TypeVar

from google import genai
from google.genai import types
from pydantic import BaseModel, ValidationError

from recipe_catalog.errors.errors import MalformedOracleOutput, OracleCallFailure
from recipe_catalog.utils.logger import logger

ModelT = TypeVar("ModelT", bound=BaseModel)


class LanguageModelOracle(Protocol):
    """Anything that turns a prompt and a response schema into raw JSON text."""

    async def generate(self, prompt: str, response_schema: dict) -> str: ...


class GeminiOracle:
    """Oracle backed by the Gemini API.

    A single attempt per call: transport and API errors are raised as
    OracleCallFailure, an empty response as MalformedOracleOutput.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        temperature: float = 0.2,
        client: Optional[genai.Client] = None,
    ) -> None:
        """Initialize the oracle.

        Args:
            api_key: Gemini API key.
            model: Gemini model id.
            temperature: Sampling temperature.
            client: Optional pre-built client (tests inject a mock).

        Raises:
            ValueError: If api_key is empty and no client is supplied.
        """
        if client is None and not api_key:
            raise ValueError("GEMINI_API_KEY is required")

        self.model = model
        self.temperature = temperature
        self.client = client if client is not None else genai.Client(api_key=api_key)

    async def generate(self, prompt: str, response_schema: dict) -> str:
        """Call Gemini in JSON mode and return the raw response text.

        Args:
            prompt: Fully rendered prompt.
            response_schema: Gemini response schema for the expected JSON object.

        Returns:
            Raw response text (expected to be a JSON object).

        Raises:
            OracleCallFailure: If the API call fails for any reason.
            MalformedOracleOutput: If the response carries no text.
        """
        started = time.perf_counter()
        try:
            # Sync client call runs in a worker thread
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=response_schema,
                    temperature=self.temperature,
                ),
            )
        except Exception as e:
            logger.error(f"Gemini call failed (model={self.model}): {e}")
            raise OracleCallFailure(f"Language model call failed: {e}") from e

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.debug(f"Gemini call completed (model={self.model}, {elapsed_ms}ms)")

        text = response.text
        if not text:
            raise MalformedOracleOutput("Language model returned an empty response")
        return text


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences around a JSON payload."""
    return text.replace("```json", "").replace("```", "").strip()


def parse_oracle_output(raw_output: str, model: type[ModelT]) -> ModelT:
    """Parse oracle text into a validated model, failing hard on anything else.

    There is no lenient fallback: text that is not a single JSON object of the
    required shape raises MalformedOracleOutput.

    Args:
        raw_output: Raw text returned by the oracle.
        model: Pydantic model describing the required shape.

    Returns:
        Validated model instance.

    Raises:
        MalformedOracleOutput: If the text is not valid JSON or does not match the model.
    """
    cleaned = strip_code_fences(raw_output or "")
    try:
        return model.model_validate_json(cleaned)
    except ValidationError as e:
        logger.warning(f"Malformed language model output for {model.__name__}: {e.error_count()} error(s)")
        raise MalformedOracleOutput(
            f"Language model returned malformed {model.__name__} output",
            raw_output=raw_output,
        ) from e
