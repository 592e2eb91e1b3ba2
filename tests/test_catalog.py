"""
Tests for the ingredient catalog.

Tests cover:
- Three-tier name lookup (exact, word, partial)
- Search and category grouping
- Cooking method queries
- Static and Supabase loading
"""

import json

from smaak.catalog import CatalogData, IngredientCatalog, get_catalog, load_static_catalog, load_supabase_catalog
from smaak.catalog.lookup import build_exact_index, lookup_ingredient
from smaak.catalog.sources import (
    catalog_to_rows,
    category_id,
    cooking_effect_from_row,
    ingredient_from_row,
    ingredient_to_row,
    parse_flavor_profile,
    parse_role,
    parse_textures,
)
from smaak.models import CookingMethod, IngredientRole, MoleculeType, MouthfeelCategory, TextureCategory


class TestLookup:
    """Test ingredient name resolution."""

    def test_exact_name(self, catalog):
        match = catalog.lookup("Chicken")
        assert match.ingredient.id == "ing-chicken"
        assert match.match_type == "exact"
        assert match.confidence == 1.0

    def test_exact_alias_and_dutch_name(self, catalog):
        """Aliases and Dutch names match exactly."""
        assert catalog.lookup("chicken breast").ingredient.id == "ing-chicken"
        assert catalog.lookup("kip").ingredient.id == "ing-chicken"
        assert catalog.lookup("Sojasaus").ingredient.id == "ing-soy-sauce"

    def test_word_match(self, catalog):
        """Extra words around a known name still resolve."""
        match = catalog.lookup("grilled chicken")
        assert match.ingredient.id == "ing-chicken"
        assert match.match_type == "word"
        assert match.confidence == 0.8

    def test_word_match_prefers_full_name(self, catalog):
        """'red onion' is an onion, not pickled red onion."""
        assert catalog.lookup("red onion").ingredient.id == "ing-onion"

    def test_partial_match(self, catalog):
        match = catalog.lookup("tomat")
        assert match.ingredient.id == "ing-tomato"
        assert match.match_type == "partial"
        assert match.confidence == 0.6

    def test_no_match(self, catalog):
        assert catalog.lookup("xyzzy") is None
        assert catalog.lookup("   ") is None

    def test_word_tie_breaks_on_shorter_name(self, mini_ingredients):
        """Equal word matches resolve to the shorter name, then alphabetically."""
        match = lookup_ingredient("lime rice bowl", mini_ingredients)
        assert match.ingredient.name == "lime"

    def test_exact_index_keeps_first_by_name(self, mini_ingredients):
        index = build_exact_index(mini_ingredients)
        assert index["shoyu"].id == "t-soy"
        assert index["rice"].id == "t-rice"


class TestCatalogQueries:
    """Test catalog listing and search."""

    def test_all_ingredients_sorted(self, catalog):
        names = [i.name for i in catalog.all_ingredients()]
        assert names == sorted(names, key=str.lower)
        assert len(catalog) == len(names)

    def test_get(self, catalog):
        assert catalog.get("ing-lemon").name == "lemon"
        assert catalog.get("nope") is None

    def test_ingredients_by_category(self, catalog):
        grouped = catalog.ingredients_by_category()
        herbs = [i.name for i in grouped["Herbs"]]
        assert herbs == ["basil", "chives", "cilantro", "dill", "mint", "parsley"]

    def test_uncategorized_goes_to_other(self, mini_catalog):
        assert "Other" in mini_catalog.ingredients_by_category()

    def test_search_prefix_first(self, catalog):
        assert [i.name for i in catalog.search("par")] == ["parmesan", "parsley"]

    def test_search_substring(self, catalog):
        assert [i.name for i in catalog.search("oil")] == ["olive oil"]

    def test_search_limit_and_empty(self, catalog):
        assert len(catalog.search("a", limit=3)) == 3
        assert catalog.search("") == []

    def test_clear_cache_reloads(self):
        calls = []

        def loader():
            calls.append(1)
            return CatalogData()

        catalog = IngredientCatalog(loader)
        catalog.all_ingredients()
        catalog.all_ingredients()
        assert len(calls) == 1
        catalog.clear_cache()
        catalog.all_ingredients()
        assert len(calls) == 2

    def test_default_catalog_is_static(self):
        assert len(get_catalog()) > 0
        assert get_catalog() is get_catalog()


class TestCookingMethodQueries:
    """Test cooking method and effect lookups."""

    def test_cooking_methods_sorted(self, catalog):
        names = [m.name for m in catalog.cooking_methods()]
        assert len(names) == 14
        assert names == sorted(names, key=str.lower)

    def test_method_by_english_or_dutch_name(self, catalog):
        assert catalog.cooking_method("ROAST").id == "cm-roast"
        assert catalog.cooking_method("stoven").id == "cm-braise"
        assert catalog.cooking_method("vaporize") is None

    def test_hyphens_fold_to_spaces(self, catalog):
        """Pan-fry and pan fry name the same method."""
        assert catalog.cooking_method("pan fry").id == "cm-pan-fry"
        assert catalog.cooking_method("Deep Fry").id == "cm-deep-fry"
        assert catalog.cooking_method("deep-fry").id == "cm-deep-fry"

    def test_cooking_effect(self, catalog):
        effect = catalog.cooking_effect("ing-potato", "roast")
        assert effect.confidence_level == "high"
        assert effect.optimal_temperature == 200
        assert catalog.cooking_effect("ing-rice", "Roast") is None

    def test_methods_for_ingredient_highest_confidence_first(self, catalog):
        assert [m.name for m in catalog.cooking_methods_for("ing-potato")] == ["Roast", "Boil"]

    def test_optimal_method_from_effects(self, catalog):
        assert catalog.optimal_cooking_method("ing-beef").name == "Grill"

    def test_optimal_method_by_molecule_type(self, catalog):
        """Without specific effects, the molecule type picks a default."""
        assert catalog.optimal_cooking_method("ing-rice").name == "Roast"
        assert catalog.optimal_cooking_method("ing-basil").name == "Raw"
        assert catalog.optimal_cooking_method("ing-cumin") is None


class TestStaticSource:
    """Test loading the JSON ontology."""

    def test_packaged_catalog_loads(self):
        data = load_static_catalog()
        assert len(data.ingredients) == 56
        assert len(data.cooking_methods) == 14
        assert all(e.ingredient_id for e in data.cooking_effects)

    def test_custom_directory_without_methods(self, tmp_path):
        (tmp_path / "ingredients.json").write_text(json.dumps([
            {"id": "x-1", "name": "kohlrabi", "molecule_type": "water", "textures": ["crunchy"]},
        ]))
        data = load_static_catalog(tmp_path)
        assert [i.name for i in data.ingredients] == ["kohlrabi"]
        assert data.cooking_methods == []
        assert data.cooking_effects == []


class TestSupabaseRows:
    """Test parsing of backend rows."""

    def test_flavor_profile_from_dict(self):
        profile = parse_flavor_profile({"umami": 0.7, "sweetness": "0.2"})
        assert profile.umami == 0.7
        assert profile.sweetness == 0.2

    def test_flavor_profile_from_json_string(self):
        assert parse_flavor_profile('{"sourness": 0.9}').sourness == 0.9

    def test_flavor_profile_from_loose_string(self):
        """Broken JSON still yields the readable pairs."""
        assert parse_flavor_profile('{"umami": 0.6, "saltiness": 0.4').umami == 0.6

    def test_flavor_profile_clamps(self):
        assert parse_flavor_profile({"bitterness": 3}).bitterness == 1.0
        assert parse_flavor_profile(None).umami == 0.0

    def test_textures_by_keyword(self):
        """English and Dutch keywords are recognized."""
        assert parse_textures("Knapperig buiten, romig binnen") == [TextureCategory.CRISPY, TextureCategory.CREAMY]
        assert parse_textures(["firm", "chewy"]) == [TextureCategory.CHEWY, TextureCategory.FIRM]
        assert parse_textures(None) == []

    def test_role_from_column(self):
        assert parse_role("Finishing", "Vlees") == IngredientRole.FINISHING

    def test_role_from_category(self):
        """Without a culinary_role, the category name decides."""
        assert parse_role(None, "Vlees & Gevogelte") == IngredientRole.CARRIER
        assert parse_role("", "Rijst en granen") == IngredientRole.CARRIER
        assert parse_role(None, "Kruiden") == IngredientRole.ACCENT
        assert parse_role(None, "Zuivel") == IngredientRole.SUPPORTING

    def test_ingredient_from_row(self):
        row = {
            "id": 12,
            "name_en": "Halloumi",
            "name_nl": "Halloumi",
            "category_id": 3,
            "flavor_profile": '{"saltiness": 0.7, "umami": 0.3}',
            "texture_en": "Firm and chewy, crispy when grilled",
            "mouthfeel": "RICH",
            "molecule_type": "fat",
            "intensity": 0.4,
            "aroma_categories": ["Dairy"],
            "hero_image_url": "https://example.org/halloumi.jpg",
        }
        ingredient = ingredient_from_row(row, {"3": "Dairy"})
        assert ingredient.id == "12"
        assert ingredient.category == "Dairy"
        assert ingredient.role == IngredientRole.SUPPORTING
        assert ingredient.molecule_type == MoleculeType.FAT
        assert ingredient.mouthfeel == MouthfeelCategory.RICH
        assert ingredient.aroma_intensity == 0.4
        assert ingredient.provides_crunch is True
        assert ingredient.image_url == "https://example.org/halloumi.jpg"

    def test_row_round_trip_keeps_culinary_fields(self, catalog):
        lemon = catalog.get("ing-lemon")
        row = ingredient_to_row(lemon)
        restored = ingredient_from_row(row, {category_id("Fruit"): "Fruit"})
        assert restored.flavor_profile == lemon.flavor_profile
        assert restored.role == lemon.role
        assert restored.aroma_categories == lemon.aroma_categories
        assert restored.category == "Fruit"

    def test_catalog_to_rows(self):
        data = load_static_catalog()
        tables = catalog_to_rows(data)
        assert list(tables) == ["ingredient_categories", "ingredients", "cooking_methods", "ingredient_cooking_effects"]
        assert {"id": "cat-fats-oils", "name_en": "Fats & Oils"} in tables["ingredient_categories"]
        effect = tables["ingredient_cooking_effects"][0]
        assert effect["cooking_method_id"].startswith("cm-")
        assert "cooking_method" not in effect

        braise = next(
            row for row in tables["ingredient_cooking_effects"]
            if row["ingredient_id"] == "ing-beef" and row["cooking_method_id"] == "cm-braise"
        )
        assert braise["mondgevoel_filmend_delta"] == 0.1
        assert braise["smaaktype_delta"] == 0.15
        assert braise["mondgevoel_strak_delta"] == 0.0
        assert "coating_delta" not in braise

    def test_sensory_delta_columns(self):
        method = CookingMethod(id="m1", name="Braise")
        effect = cooking_effect_from_row(
            {
                "ingredient_id": "1",
                "mondgevoel_strak_delta": "0.2",
                "mondgevoel_filmend_delta": None,
                "mondgevoel_droog_delta": "lots",
                "smaaktype_delta": -0.3,
            },
            method,
        )
        assert effect.tight_delta == 0.2
        assert effect.coating_delta == 0.0
        assert effect.dry_delta == 0.0
        assert effect.character_delta == -0.3

    def test_load_supabase_catalog(self, mock_supabase):
        client = mock_supabase({
            "ingredients": [
                {"id": "1", "name_en": "Lamb", "category_id": "c1", "flavor_profile": {"umami": 0.6}},
                {"id": "2", "name_en": "Mint", "category_id": "c2", "culinary_role": "finishing"},
            ],
            "ingredient_categories": [{"id": "c1", "name_en": "Meat"}, {"id": "c2", "name_en": "Herbs"}],
            "cooking_methods": [{"id": "m1", "name_en": "Grill", "heat_type": "dry"}],
            "ingredient_cooking_effects": [
                {"ingredient_id": "1", "cooking_method_id": "m1", "confidence_level": "very high",
                 "flavor_profile_delta": {"umami": 0.2}},
                {"ingredient_id": "1", "cooking_method_id": "m-missing"},
            ],
        })
        data = load_supabase_catalog(client)
        lamb, mint = data.ingredients
        assert lamb.role == IngredientRole.CARRIER
        assert lamb.category == "Meat"
        assert mint.role == IngredientRole.FINISHING
        assert len(data.cooking_effects) == 1
        assert data.cooking_effects[0].confidence_level == "medium"
        assert data.cooking_effects[0].flavor_delta.umami == 0.2

        catalog = IngredientCatalog.from_data(data)
        assert catalog.optimal_cooking_method("1").name == "Grill"
