"""Prompts and response schemas for the language-model oracle.

Provides factory functions that render the search-parameter and recipe-parsing
instructions with the current vocabularies, and the JSON response schemas the
model is asked to conform to. The schemas use the Gemini schema dialect
(upper-case type names).
"""

SEARCH_PARAMS_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "cuisines": {"type": "ARRAY", "items": {"type": "STRING"}},
        "tags": {"type": "ARRAY", "items": {"type": "STRING"}},
        "ingredients": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
}

RECIPE_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "name": {"type": "STRING"},
        "cuisine": {"type": "STRING"},
        "prepTime": {"type": "NUMBER"},
        "cookTime": {"type": "NUMBER"},
        "servings": {"type": "NUMBER"},
        "ingredients": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "quantity": {"type": "STRING"},
                    "unit": {"type": "STRING"},
                },
                "required": ["name", "quantity", "unit"],
            },
        },
        "instructions": {"type": "ARRAY", "items": {"type": "STRING"}},
        "tags": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": [
        "name",
        "cuisine",
        "prepTime",
        "cookTime",
        "servings",
        "ingredients",
        "instructions",
        "tags",
    ],
}


def _join(values: list[str]) -> str:
    return ", ".join(values) if values else "(none)"


def get_search_params_prompt(
    query: str,
    tags: list[str],
    cuisines: list[str],
    ingredients: list[str],
) -> str:
    """Render the search-query conversion instructions.

    Tags and cuisines are restricted to the supplied lists. Ingredients are
    extracted or inferred freely; the known ingredient names are listed only
    as hints for spelling.

    Args:
        query: Natural language search from the user.
        tags: Current tag vocabulary.
        cuisines: Current cuisine vocabulary.
        ingredients: Current ingredient names (hints only).

    Returns:
        str: Complete prompt including the user query.
    """
    return f"""You are a recipe search query converter. Convert the user's natural language query into a structured search format.

Available tags: {_join(tags)}
Available cuisines: {_join(cuisines)}
Known ingredients: {_join(ingredients)}

Output a JSON object with the following fields, using empty arrays or omitting fields when no values apply:
{{
  "cuisines": string[],
  "tags": string[],
  "ingredients": string[]
}}

- tags: matching tags (OR logic - recipe has ANY of these)
- cuisines: matching cuisine names (OR logic - recipe has ANY of these)
- ingredients: ingredients (AND logic - recipe must have ALL of these)

Rules:
- Only use tags from the available tags list, never invent new ones
- Only use cuisines from the available cuisines list, never invent new ones
- For ingredients, extract and infer any food items mentioned; they do not have to appear in the known ingredients list
- Keep all values lowercase
- Omit fields that don't apply to the query
- Return ONLY valid JSON, no explanation and no code fences

Semantic understanding - infer meaning from natural language:
- If the query mentions a cuisine, use it or the closest match from the available cuisines list.
- If the query mentions a region, include the tags and cuisines associated with that region.
- If the query mentions a dietary constraint or an exclusion ("no meat", "dairy free"), include the tags consistent with it.
- If the query mentions a tag, use it or the closest match from the available tags list.

Example input: "italian pasta with chicken and garlic"
Example output: {{"cuisines":["italian"],"ingredients":["chicken","garlic"]}}

Example input: "southeast asian recipes"
Example output: {{"tags":["thai","vietnamese","chinese","indian"]}}

Example input: "quick no meat dinner"
Example output: {{"tags":["quick","easy","vegetarian","vegan","dinner"]}}

Example input: "healthy thai soup with coconut and lemongrass"
Example output: {{"cuisines":["thai"],"ingredients":["coconut","lemongrass"],"tags":["healthy","light"]}}

User query: {query}"""


def get_recipe_parser_prompt(recipe_text: str, cuisines: list[str], tags: list[str]) -> str:
    """Render the recipe-parsing instructions.

    Args:
        recipe_text: Natural language recipe description.
        cuisines: Current cuisine vocabulary (canonical capitalization).
        tags: Current tag vocabulary.

    Returns:
        str: Complete prompt including the recipe text.
    """
    return f"""You are a recipe parser. Convert the user's natural language recipe description into a structured recipe format.

Available cuisines: {_join(cuisines)}
Available tags: {_join(tags)}

Parse the recipe and output a JSON object with the following structure:
{{
  "name": string,
  "cuisine": string (must be from available cuisines list),
  "prepTime": number (in minutes),
  "cookTime": number (in minutes),
  "servings": number,
  "ingredients": array of objects with structure {{ "name": string, "quantity": string, "unit": string }},
  "instructions": array of strings (step-by-step),
  "tags": array of strings (must be from available tags list)
}}

Rules:
- Extract the recipe name from the text (use proper capitalization)
- Choose the most appropriate cuisine from the available list, spelled exactly as listed
- Infer prep time and cook time if not explicitly stated
- Parse ingredients with name, quantity, and unit (ingredient names in lowercase)
- Break down instructions into clear steps (sentence case with a capital first letter and a period)
- Select relevant tags from the available list based on the recipe characteristics, spelled exactly as listed
- Use proper English grammar and capitalization
- Return ONLY valid JSON, no explanation

Example input: "Make a quick Italian pasta carbonara. You'll need 400g spaghetti, 200g bacon, 4 eggs, 100g parmesan, and black pepper. First, cook the pasta. While it cooks, fry the bacon until crispy. Beat the eggs with parmesan. Drain pasta, mix with bacon, then stir in egg mixture off heat. Serves 4, takes about 30 minutes total."

Example output: {{
  "name": "Pasta Carbonara",
  "cuisine": "Italian",
  "prepTime": 10,
  "cookTime": 20,
  "servings": 4,
  "ingredients": [
    {{"name": "spaghetti", "quantity": "400", "unit": "g"}},
    {{"name": "bacon", "quantity": "200", "unit": "g"}},
    {{"name": "eggs", "quantity": "4", "unit": "whole"}},
    {{"name": "parmesan", "quantity": "100", "unit": "g"}},
    {{"name": "black pepper", "quantity": "to taste", "unit": ""}}
  ],
  "instructions": [
    "Cook the pasta according to package directions.",
    "Fry the bacon until crispy.",
    "Beat the eggs with parmesan cheese.",
    "Drain the pasta and mix with bacon.",
    "Remove from heat and stir in egg mixture."
  ],
  "tags": ["quick", "easy"]
}}

Recipe text: {recipe_text}"""
