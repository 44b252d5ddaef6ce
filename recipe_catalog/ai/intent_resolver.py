"""Natural-language search to SearchIntent.

The oracle is instructed to pick tags and cuisines from the supplied lists.
Whatever it returns is lowercased and deduplicated, then passed through to the
query builder as-is: a value outside the vocabulary narrows the search (usually
to nothing) instead of being dropped, so a query never widens to the whole
catalog behind the caller's back. Ingredients are free text.
"""

from recipe_catalog.ai.gemini import LanguageModelOracle, parse_oracle_output
from recipe_catalog.models.models import SearchIntent, SearchParamsOutput
from recipe_catalog.prompts.prompts import SEARCH_PARAMS_SCHEMA, get_search_params_prompt
from recipe_catalog.utils.logger import logger


def clean_terms(values: list[str]) -> list[str]:
    """Strip and lowercase values, dropping empties and duplicates (order kept)."""
    cleaned = (value.strip().lower() for value in values)
    return list(dict.fromkeys(value for value in cleaned if value))


def terms_outside_vocabulary(values: list[str], vocabulary: list[str]) -> list[str]:
    """Return the values that are not vocabulary names (case-insensitive)."""
    allowed = {term.lower() for term in vocabulary}
    return [value for value in values if value not in allowed]


class IntentResolver:
    """Turns free-text search queries into SearchIntents."""

    def __init__(self, oracle: LanguageModelOracle) -> None:
        self.oracle = oracle

    async def resolve(
        self,
        query: str,
        tag_vocab: list[str],
        cuisine_vocab: list[str],
        ingredient_vocab: list[str],
    ) -> SearchIntent:
        """Resolve a natural-language query into a SearchIntent.

        Args:
            query: Free-text search from the user.
            tag_vocab: Current tag names.
            cuisine_vocab: Current cuisine names.
            ingredient_vocab: Current ingredient names (hints for the oracle only).

        Returns:
            SearchIntent with lowercase values exactly as the oracle chose them;
            name always empty.

        Raises:
            MalformedOracleOutput: If the oracle output is not the required JSON shape.
            OracleCallFailure: If the oracle call fails.
        """
        prompt = get_search_params_prompt(query, tag_vocab, cuisine_vocab, ingredient_vocab)
        raw_output = await self.oracle.generate(prompt, SEARCH_PARAMS_SCHEMA)
        params = parse_oracle_output(raw_output, SearchParamsOutput)

        intent = SearchIntent(
            tags=clean_terms(params.tags),
            cuisines=clean_terms(params.cuisines),
            ingredients=clean_terms(params.ingredients),
        )
        for field, values, vocabulary in (
            ("tags", intent.tags, tag_vocab),
            ("cuisines", intent.cuisines, cuisine_vocab),
        ):
            unknown = terms_outside_vocabulary(values, vocabulary)
            if unknown:
                logger.warning(f"Search {field} outside vocabulary kept as given: {unknown}")

        logger.info(
            f"Resolved search query into tags={intent.tags}, "
            f"cuisines={intent.cuisines}, ingredients={intent.ingredients}"
        )
        return intent
