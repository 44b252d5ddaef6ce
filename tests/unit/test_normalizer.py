"""Unit tests for recipe draft normalization.

Tests cover:
- Exact, case-sensitive cuisine and tag resolution
- Rejection order (cuisine before tags) and error details
- Duplicate tags
- Integration with VocabularyProvider over an in-memory database
"""

from typing import Optional

import pytest

from recipe_catalog.db.vocabulary import VocabularyProvider
from recipe_catalog.errors.errors import InvalidCuisine, InvalidTags, RecipeValidationError
from recipe_catalog.models.models import RecipeDraft, RecipeRecord, VocabularyRef
from recipe_catalog.recipes.normalizer import normalize_recipe


class FakeLookup:
    """In-memory VocabularyLookup recording how often it is queried."""

    def __init__(self, cuisines: list[str], tags: list[str]) -> None:
        self.cuisines = {name: VocabularyRef(id=f"c{i}", name=name) for i, name in enumerate(cuisines)}
        self.tags = {name: VocabularyRef(id=f"t{i}", name=name) for i, name in enumerate(tags)}
        self.cuisine_calls = 0
        self.tag_calls = 0

    async def find_cuisine(self, name: str) -> Optional[VocabularyRef]:
        self.cuisine_calls += 1
        return self.cuisines.get(name)

    async def find_tags(self, names: list[str]) -> list[VocabularyRef]:
        self.tag_calls += 1
        return [self.tags[name] for name in dict.fromkeys(names) if name in self.tags]


def make_draft(**overrides) -> RecipeDraft:
    payload = {
        "name": "Green Curry",
        "cuisine": "Thai",
        "prepTime": 15,
        "cookTime": 25,
        "servings": 4,
        "ingredients": [{"name": "coconut milk", "quantity": "400", "unit": "ml"}],
        "instructions": ["Simmer everything."],
        "tags": ["vegan", "dinner"],
    }
    payload.update(overrides)
    return RecipeDraft.model_validate(payload)


@pytest.fixture
def lookup():
    return FakeLookup(cuisines=["Italian", "Thai"], tags=["quick", "vegan", "dinner"])


class TestNormalizeRecipe:
    """Test normalize_recipe against a fake lookup."""

    @pytest.mark.asyncio
    async def test_valid_draft_resolves_references(self, lookup):
        """Test cuisine and tags resolve to vocabulary references."""
        record = await normalize_recipe(make_draft(), lookup)

        assert isinstance(record, RecipeRecord)
        assert record.id is None
        assert record.cuisine == VocabularyRef(id="c1", name="Thai")
        assert [tag.name for tag in record.tags] == ["vegan", "dinner"]
        assert [tag.id for tag in record.tags] == ["t1", "t2"]

    @pytest.mark.asyncio
    async def test_plain_fields_carried_over(self, lookup):
        """Test non-reference fields are copied to the record."""
        record = await normalize_recipe(make_draft(), lookup)

        assert record.name == "Green Curry"
        assert record.prep_time == 15
        assert record.cook_time == 25
        assert record.servings == 4
        assert record.ingredients[0].unit == "ml"
        assert record.instructions == ["Simmer everything."]

    @pytest.mark.asyncio
    async def test_tag_order_follows_draft(self, lookup):
        """Test record tags keep the draft order."""
        record = await normalize_recipe(make_draft(tags=["dinner", "quick"]), lookup)
        assert [tag.name for tag in record.tags] == ["dinner", "quick"]

    @pytest.mark.asyncio
    async def test_empty_tags_allowed(self, lookup):
        """Test a draft without tags normalizes."""
        record = await normalize_recipe(make_draft(tags=[]), lookup)
        assert record.tags == []

    @pytest.mark.asyncio
    async def test_unknown_tag_rejected(self, lookup):
        """Test an unknown tag raises InvalidTags listing it as unresolved."""
        with pytest.raises(InvalidTags) as exc:
            await normalize_recipe(make_draft(tags=["vegan", "madeupword"]), lookup)

        assert exc.value.unresolved == ["madeupword"]
        assert exc.value.details["tags"] == ["vegan", "madeupword"]
        assert exc.value.status_code == 400

    @pytest.mark.asyncio
    async def test_duplicate_tags_rejected(self, lookup):
        """Test duplicated tags resolve to fewer entries and are rejected."""
        with pytest.raises(InvalidTags) as exc:
            await normalize_recipe(make_draft(tags=["vegan", "vegan"]), lookup)
        assert exc.value.unresolved == []

    @pytest.mark.asyncio
    async def test_tag_match_is_case_sensitive(self, lookup):
        """Test tag lookup does not fold case."""
        with pytest.raises(InvalidTags):
            await normalize_recipe(make_draft(tags=["Vegan"]), lookup)

    @pytest.mark.asyncio
    async def test_cuisine_match_is_case_sensitive(self, lookup):
        """Test cuisine lookup does not fold case."""
        with pytest.raises(InvalidCuisine) as exc:
            await normalize_recipe(make_draft(cuisine="thai"), lookup)
        assert exc.value.cuisine == "thai"

    @pytest.mark.asyncio
    async def test_unknown_cuisine_rejected(self, lookup):
        """Test an unknown cuisine raises InvalidCuisine."""
        with pytest.raises(InvalidCuisine):
            await normalize_recipe(make_draft(cuisine="Atlantean"), lookup)

    @pytest.mark.asyncio
    async def test_padded_cuisine_rejected(self, lookup):
        """Test surrounding whitespace is not trimmed from the cuisine."""
        with pytest.raises(InvalidCuisine) as exc:
            await normalize_recipe(make_draft(cuisine=" Thai "), lookup)
        assert exc.value.cuisine == " Thai "

    @pytest.mark.asyncio
    async def test_padded_tag_rejected(self, lookup):
        """Test surrounding whitespace is not trimmed from tags."""
        with pytest.raises(InvalidTags) as exc:
            await normalize_recipe(make_draft(tags=[" vegan", "dinner"]), lookup)
        assert exc.value.unresolved == [" vegan"]

    @pytest.mark.asyncio
    async def test_cuisine_checked_before_tags(self, lookup):
        """Test the cuisine error wins and tags are not looked up."""
        with pytest.raises(InvalidCuisine):
            await normalize_recipe(make_draft(cuisine="Atlantean", tags=["madeupword"]), lookup)
        assert lookup.tag_calls == 0

    @pytest.mark.asyncio
    async def test_error_details_include_draft(self, lookup):
        """Test validation errors carry the camelCase draft."""
        with pytest.raises(RecipeValidationError) as exc:
            await normalize_recipe(make_draft(cuisine="Atlantean"), lookup)

        recipe = exc.value.details["recipe"]
        assert recipe["name"] == "Green Curry"
        assert recipe["prepTime"] == 15
        assert recipe["cuisine"] == "Atlantean"

    @pytest.mark.asyncio
    async def test_lookup_queried_on_every_call(self, lookup):
        """Test lookups are not cached between calls."""
        await normalize_recipe(make_draft(), lookup)
        await normalize_recipe(make_draft(), lookup)
        assert lookup.cuisine_calls == 2
        assert lookup.tag_calls == 2


class TestNormalizeWithVocabularyProvider:
    """Test normalization against seeded vocabulary collections."""

    @pytest.mark.asyncio
    async def test_resolves_against_collections(self, vocab_db):
        """Test references resolve to the stored vocabulary documents."""
        provider = VocabularyProvider(vocab_db)
        record = await normalize_recipe(make_draft(cuisine="Italian", tags=["quick", "easy"]), provider)

        assert record.cuisine.name == "Italian"
        stored = vocab_db.sync["cuisines"].find_one({"name": "Italian"})
        assert record.cuisine.id == str(stored["_id"])
        assert [tag.name for tag in record.tags] == ["quick", "easy"]

    @pytest.mark.asyncio
    async def test_unknown_tag_against_collections(self, vocab_db):
        """Test an unknown tag is rejected against the tags collection."""
        provider = VocabularyProvider(vocab_db)
        with pytest.raises(InvalidTags) as exc:
            await normalize_recipe(make_draft(tags=["vegan", "madeupword"]), provider)
        assert exc.value.unresolved == ["madeupword"]

    @pytest.mark.asyncio
    async def test_lowercase_cuisine_rejected_against_collections(self, vocab_db):
        """Test a lowercase cuisine is rejected against the cuisines collection."""
        provider = VocabularyProvider(vocab_db)
        with pytest.raises(InvalidCuisine):
            await normalize_recipe(make_draft(cuisine="italian"), provider)
