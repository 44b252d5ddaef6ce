"""Natural-language recipe text to RecipeDraft via the language-model oracle."""

from recipe_catalog.ai.gemini import LanguageModelOracle, parse_oracle_output
from recipe_catalog.models.models import RecipeDraft
from recipe_catalog.prompts.prompts import RECIPE_SCHEMA, get_recipe_parser_prompt
from recipe_catalog.utils.logger import logger


class RecipeParser:
    """Parses free-text recipes into drafts.

    The draft is not trusted: its cuisine and tags still go through the
    normalizer, which rejects anything the oracle made up.
    """

    def __init__(self, oracle: LanguageModelOracle) -> None:
        self.oracle = oracle

    async def parse(
        self,
        recipe_text: str,
        cuisine_vocab: list[str],
        tag_vocab: list[str],
    ) -> RecipeDraft:
        """Parse recipe text into a RecipeDraft.

        Raises:
            MalformedOracleOutput: If the output is not a complete recipe object.
            OracleCallFailure: If the oracle call fails.
        """
        prompt = get_recipe_parser_prompt(recipe_text, cuisine_vocab, tag_vocab)
        raw_output = await self.oracle.generate(prompt, RECIPE_SCHEMA)
        draft = parse_oracle_output(raw_output, RecipeDraft)
        logger.info(
            f"Parsed recipe {draft.name!r} (cuisine={draft.cuisine!r}, "
            f"{len(draft.ingredients)} ingredients, tags={draft.tags})"
        )
        return draft
