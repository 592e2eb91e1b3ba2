"""
Tests for Smaak data models.

Tests cover:
- FlavorProfile ranges, dominant taste, balance and averaging
- Ingredient derived flags and label normalization
- Sensory model labels
- Analysis model serialization
"""

import pytest
from pydantic import ValidationError

from smaak.models import (
    CompositionAnalysis,
    ElementType,
    FlavorProfile,
    FlavorRichness,
    Ingredient,
    IngredientRole,
    MissingElement,
    MoleculeType,
    MouthfeelBalance,
    MouthfeelCategory,
    Priority,
    SensoryProfile,
    TextureCategory,
)


class TestFlavorProfile:
    """Test the five-taste flavor vector."""

    def test_defaults_to_zero(self):
        """Should start with all tastes at zero."""
        profile = FlavorProfile()
        assert profile.scores() == {"sweet": 0.0, "salty": 0.0, "sour": 0.0, "bitter": 0.0, "umami": 0.0}

    def test_rejects_out_of_range(self):
        """Should reject values outside 0.0-1.0."""
        with pytest.raises(ValidationError):
            FlavorProfile(sweetness=1.5)
        with pytest.raises(ValidationError):
            FlavorProfile(umami=-0.1)

    def test_dominant_taste(self):
        """Should name the strongest taste."""
        assert FlavorProfile(sourness=0.9, sweetness=0.2).dominant_taste == "sour"

    def test_dominant_taste_tie_uses_taste_order(self):
        """Ties resolve to the first taste in sweet, salty, sour, bitter, umami order."""
        assert FlavorProfile(saltiness=0.5, umami=0.5).dominant_taste == "salty"

    def test_present_tastes_threshold(self):
        """Tastes at 0.1 or more count as present."""
        profile = FlavorProfile(sweetness=0.1, saltiness=0.09, umami=0.5)
        assert profile.present_tastes == ["sweet", "umami"]

    def test_single_taste_is_not_balanced(self):
        """One present taste is never balanced."""
        assert FlavorProfile(sourness=0.3).is_balanced is False

    def test_spread_profile_is_balanced(self):
        """Several moderate tastes are balanced."""
        profile = FlavorProfile(sweetness=0.3, saltiness=0.3, sourness=0.3, umami=0.4)
        assert profile.is_balanced is True

    def test_dominating_taste_is_not_balanced(self):
        """A taste far above the mean breaks balance."""
        profile = FlavorProfile(sweetness=0.1, sourness=0.9)
        # mean 0.2, max 0.9
        assert profile.is_balanced is False

    def test_average(self):
        """Should average each taste and round to 4 decimals."""
        avg = FlavorProfile.average([
            FlavorProfile(sweetness=0.2, umami=0.0),
            FlavorProfile(sweetness=0.0, umami=0.4),
            FlavorProfile(sweetness=0.1, umami=0.1),
        ])
        assert avg.sweetness == 0.1
        assert avg.umami == pytest.approx(0.1667)

    def test_average_of_nothing(self):
        """Empty input gives a zero profile."""
        assert FlavorProfile.average([]) == FlavorProfile()

    def test_is_balanced_serialized(self):
        """is_balanced is part of the JSON output."""
        assert "is_balanced" in FlavorProfile().model_dump()


class TestIngredient:
    """Test ingredient flags and validation."""

    def test_carrier_by_role(self):
        """An explicit carrier role can carry a dish."""
        ing = Ingredient(id="x", name="cauliflower", role=IngredientRole.CARRIER, molecule_type=MoleculeType.WATER)
        assert ing.can_be_carrier is True

    def test_carrier_by_molecule(self):
        """Proteins and starches can carry a dish whatever their role."""
        assert Ingredient(id="x", name="egg", molecule_type=MoleculeType.PROTEIN).can_be_carrier is True
        assert Ingredient(id="x", name="oil", molecule_type=MoleculeType.FAT).can_be_carrier is False

    def test_umami_and_acid_thresholds(self):
        """Umami and acidity count from 0.5."""
        ing = Ingredient(id="x", name="x", flavor_profile=FlavorProfile(umami=0.5, sourness=0.49))
        assert ing.provides_umami is True
        assert ing.provides_acidity is False

    def test_crunch(self):
        """Crispy or crunchy textures provide crunch."""
        assert Ingredient(id="x", name="x", textures=[TextureCategory.CRISPY]).provides_crunch is True
        assert Ingredient(id="x", name="x", textures=[TextureCategory.SOFT]).provides_crunch is False

    def test_freshness(self):
        """Finishing role or a fresh aroma provides freshness."""
        assert Ingredient(id="x", name="x", role=IngredientRole.FINISHING).provides_freshness is True
        assert Ingredient(id="x", name="x", aroma_categories=["Citrus"]).provides_freshness is True
        assert Ingredient(id="x", name="x", aroma_categories=["earthy"]).provides_freshness is False

    def test_richness(self):
        """Fat or a rich/coating mouthfeel provides richness."""
        assert Ingredient(id="x", name="x", molecule_type=MoleculeType.FAT).provides_richness is True
        assert Ingredient(id="x", name="x", mouthfeel=MouthfeelCategory.COATING).provides_richness is True
        assert Ingredient(id="x", name="x").provides_richness is False

    def test_normalizes_labels(self):
        """Aroma categories and aliases are lowercased, stripped and deduplicated."""
        ing = Ingredient(id="x", name="x", aroma_categories=[" Green", "green", "FRESH", ""], aliases=["Shoyu", "shoyu"])
        assert ing.aroma_categories == ["green", "fresh"]
        assert ing.aliases == ["shoyu"]

    def test_dedupes_textures(self):
        """Duplicate textures collapse."""
        ing = Ingredient(id="x", name="x", textures=["soft", "soft", "firm"])
        assert ing.textures == [TextureCategory.SOFT, TextureCategory.FIRM]

    def test_all_names(self):
        """all_names covers name, Dutch name and aliases."""
        ing = Ingredient(id="x", name="Chicken", name_nl="Kip", aliases=["chicken breast"])
        assert ing.all_names() == ["chicken", "kip", "chicken breast"]

    def test_flags_serialized(self):
        """Derived flags appear in JSON output."""
        data = Ingredient(id="x", name="x").model_dump(mode="json")
        for flag in ("can_be_carrier", "provides_umami", "provides_acidity", "provides_crunch"):
            assert flag in data


class TestSensoryModels:
    """Test mouthfeel balance and flavor richness labels."""

    def test_dominant_mouthfeel(self):
        assert MouthfeelBalance(tight=0.2, coating=0.6, dry=0.2).dominant == "coating"
        assert MouthfeelBalance(tight=0.1, coating=0.1, dry=0.5).dominant == "dry"

    def test_mouthfeel_balance(self):
        """Balanced while no component is 0.3 above the mean."""
        assert MouthfeelBalance(tight=0.3, coating=0.4, dry=0.3).is_balanced is True
        assert MouthfeelBalance(tight=0.0, coating=0.9, dry=0.1).is_balanced is False

    def test_empty_mouthfeel_is_balanced(self):
        assert MouthfeelBalance().is_balanced is True

    def test_character_labels(self):
        assert FlavorRichness(character=0.2).character_label == "fresh"
        assert FlavorRichness(character=0.5).character_label == "neutral"
        assert FlavorRichness(character=0.8).character_label == "ripe"

    def test_intensity_labels(self):
        assert FlavorRichness(intensity=0.9).intensity_label == "intense"
        assert FlavorRichness(intensity=0.5).intensity_label == "moderate"
        assert FlavorRichness(intensity=0.2).intensity_label == "light"

    def test_description(self):
        profile = SensoryProfile(
            mouthfeel=MouthfeelBalance(tight=0.7, coating=0.2, dry=0.1),
            richness=FlavorRichness(intensity=0.8, character=0.2),
        )
        assert profile.description == "intense, fresh, tight"


class TestAnalysisModels:
    """Test composition analysis models."""

    def test_priority_rank(self):
        """High sorts before medium before low."""
        ordered = sorted([Priority.LOW, Priority.HIGH, Priority.MEDIUM], key=lambda p: p.rank)
        assert ordered == [Priority.HIGH, Priority.MEDIUM, Priority.LOW]

    def test_score_bounds(self):
        """Scores outside 0-100 are rejected."""
        with pytest.raises(ValidationError):
            CompositionAnalysis(overall_score=101)

    def test_missing_helpers(self):
        analysis = CompositionAnalysis(
            overall_score=40,
            missing_elements=[MissingElement(type=ElementType.UMAMI, reason="r", priority=Priority.HIGH)],
        )
        assert analysis.is_missing(ElementType.UMAMI)
        assert not analysis.is_missing(ElementType.ACID)

    def test_serializes_enum_values(self):
        """Element types serialize as snake_case strings."""
        missing = MissingElement(type=ElementType.COOKING_METHOD, reason="r", priority=Priority.LOW)
        assert missing.model_dump(mode="json") == {"type": "cooking_method", "reason": "r", "priority": "low"}
