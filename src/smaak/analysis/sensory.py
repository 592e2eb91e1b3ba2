"""
Smaak - Sensory Profile.

Mouthfeel balance and flavor richness per ingredient, combined into a
dish profile by a role-weighted average. Main elements dominate the
result; a pinch of herbs barely moves it. The combined profile is then
diagnosed for a tight/coating imbalance and a one-sided character.
"""

from smaak.models.analysis import MissingSensoryElement, Priority, SensoryBalance, SensoryElementType
from smaak.models.cooking import CookingEffect
from smaak.models.entities import (
    Ingredient,
    IngredientRole,
    MoleculeType,
    MouthfeelCategory,
    TextureCategory,
)
from smaak.models.sensory import FlavorRichness, MouthfeelBalance, SensoryProfile

ROLE_WEIGHTS: dict[IngredientRole, int] = {
    IngredientRole.CARRIER: 100,
    IngredientRole.SUPPORTING: 25,
    IngredientRole.ACCENT: 15,
    IngredientRole.FINISHING: 10,
}

DEFAULT_INTENSITY = 0.3

FRESH_CHARACTER_AROMAS = ("green", "fresh", "citrus")
RIPE_CHARACTER_AROMAS = ("roasted", "caramel", "earthy")
TOASTED_CHARACTER_AROMAS = ("toasted", "smoky")


def tightness(ingredient: Ingredient) -> float:
    if ingredient.mouthfeel == MouthfeelCategory.ASTRINGENT:
        return 0.8
    if ingredient.flavor_profile.sourness > 0.5:
        return 0.7
    if ingredient.flavor_profile.sourness > 0.3:
        return 0.5
    if ingredient.flavor_profile.saltiness > 0.5:
        return 0.3
    return 0.1


def coating(ingredient: Ingredient) -> float:
    if ingredient.mouthfeel == MouthfeelCategory.COATING:
        return 0.8
    if ingredient.mouthfeel == MouthfeelCategory.RICH:
        return 0.7
    if ingredient.molecule_type == MoleculeType.FAT:
        return 0.9
    if ingredient.flavor_profile.umami > 0.5:
        return 0.6
    if ingredient.flavor_profile.umami > 0.3:
        return 0.4
    return 0.1


def dryness(ingredient: Ingredient) -> float:
    if ingredient.mouthfeel == MouthfeelCategory.DRY:
        return 0.8
    if ingredient.molecule_type == MoleculeType.CARBOHYDRATE:
        if TextureCategory.CRISPY in ingredient.textures or TextureCategory.CRUNCHY in ingredient.textures:
            return 0.7
        return 0.4
    return 0.1


def character(ingredient: Ingredient) -> float:
    """Fresh (0.0) to ripe (1.0), read from aroma categories."""
    aromas = set(ingredient.aroma_categories)
    if aromas.intersection(FRESH_CHARACTER_AROMAS):
        return 0.2
    if aromas.intersection(RIPE_CHARACTER_AROMAS):
        return 0.8
    if aromas.intersection(TOASTED_CHARACTER_AROMAS):
        return 0.75
    return 0.5


def _clamp(value: float) -> float:
    return round(min(1.0, max(0.0, value)), 4)


def ingredient_sensory_profile(ingredient: Ingredient, effect: CookingEffect | None = None) -> SensoryProfile:
    """
    Sensory profile of a single (possibly cooked) ingredient.

    A cooking effect shifts tight, coating, dry and character by its deltas.
    """
    tight, coat, dry, char = tightness(ingredient), coating(ingredient), dryness(ingredient), character(ingredient)
    if effect is not None:
        tight = _clamp(tight + effect.tight_delta)
        coat = _clamp(coat + effect.coating_delta)
        dry = _clamp(dry + effect.dry_delta)
        char = _clamp(char + effect.character_delta)
    return SensoryProfile(
        mouthfeel=MouthfeelBalance(tight=tight, coating=coat, dry=dry),
        richness=FlavorRichness(
            intensity=ingredient.aroma_intensity if ingredient.aroma_intensity > 0 else DEFAULT_INTENSITY,
            character=char,
        ),
    )


def combined_sensory_profile(
    ingredients: list[Ingredient],
    effects: dict[str, CookingEffect] | None = None,
) -> SensoryProfile:
    """
    Role-weighted average of ingredient profiles.

    Args:
        ingredients: Ingredients of the dish
        effects: Ingredient id -> cooking effect applied to it

    Mouthfeel components are normalized to sum to 1.0 when they exceed it.
    """
    effects = effects or {}
    if not ingredients:
        return SensoryProfile()

    total_weight = sum(ROLE_WEIGHTS[i.role] for i in ingredients)
    tight = coat = dry = intensity = char = 0.0
    for ingredient in ingredients:
        factor = ROLE_WEIGHTS[ingredient.role] / total_weight
        profile = ingredient_sensory_profile(ingredient, effects.get(ingredient.id))
        tight += profile.mouthfeel.tight * factor
        coat += profile.mouthfeel.coating * factor
        dry += profile.mouthfeel.dry * factor
        intensity += profile.richness.intensity * factor
        char += profile.richness.character * factor

    total = tight + coat + dry
    if total > 1.0:
        tight, coat, dry = tight / total, coat / total, dry / total

    return SensoryProfile(
        mouthfeel=MouthfeelBalance(tight=_clamp(tight), coating=_clamp(coat), dry=_clamp(dry)),
        richness=FlavorRichness(intensity=_clamp(intensity), character=_clamp(char)),
    )


# =============================================================================
# Balance diagnosis
# =============================================================================

TIGHT_COATING_MIN_RATIO = 0.3
TIGHT_COATING_MAX_RATIO = 3.0
CHARACTER_MIN = 0.2
CHARACTER_MAX = 0.8
INTENSITY_MIN = 0.3
DRY_MIN = 0.1
DRY_CONTRAST_MAX = 0.3

# Description wording follows the fresh/ripe label bounds
DESCRIBE_FRESH_BELOW = 0.3
DESCRIBE_RIPE_ABOVE = 0.7


def analyze_sensory_balance(profile: SensoryProfile) -> SensoryBalance:
    """
    Diagnose a combined sensory profile.

    Checks the tight/coating ratio, the fresh/ripe character, the overall
    intensity and a lack of dry contrast. Intensity and dryness only add
    hints; they never make the profile unbalanced.
    """
    mouthfeel = profile.mouthfeel
    richness = profile.richness
    ratio = round(mouthfeel.tight_coating_ratio, 4)

    missing: list[MissingSensoryElement] = []
    balanced = True

    def flag(element: SensoryElementType, reason: str, priority: Priority, suggestion: str | None = None) -> None:
        missing.append(MissingSensoryElement(type=element, reason=reason, priority=priority, suggestion=suggestion))

    if ratio < TIGHT_COATING_MIN_RATIO:
        flag(
            SensoryElementType.TIGHT,
            "Too much coating, not enough tightness",
            Priority.HIGH,
            "Add something sour (lemon, vinegar, tomato)",
        )
        balanced = False
    elif ratio > TIGHT_COATING_MAX_RATIO:
        flag(
            SensoryElementType.COATING,
            "Too much tightness, not enough coating",
            Priority.HIGH,
            "Add something creamy (butter, cream, olive oil)",
        )
        balanced = False

    if richness.character < CHARACTER_MIN:
        flag(
            SensoryElementType.RIPE,
            "Very fresh; lacks ripe depth",
            Priority.MEDIUM,
            "Add something ripe (roasted vegetables, aged cheese, soy sauce)",
        )
        balanced = False
    elif richness.character > CHARACTER_MAX:
        flag(
            SensoryElementType.FRESH,
            "Very ripe; lacks freshness",
            Priority.MEDIUM,
            "Add something fresh (herbs, citrus, raw vegetables)",
        )
        balanced = False

    if richness.intensity < INTENSITY_MIN:
        flag(
            SensoryElementType.INTENSITY,
            "Low flavor intensity",
            Priority.LOW,
            "Add a flavor booster (garlic, spices, umami)",
        )

    if mouthfeel.dry < DRY_MIN and mouthfeel.tight < DRY_CONTRAST_MAX and mouthfeel.coating < DRY_CONTRAST_MAX:
        flag(SensoryElementType.DRY, "No dry element for contrast", Priority.LOW)

    return SensoryBalance(
        is_balanced=balanced,
        tight_coating_ratio=ratio,
        character=richness.character,
        missing_elements=missing,
        suggestions=[m.suggestion for m in missing if m.suggestion],
        description=_describe_balance(balanced, ratio, profile.richness),
    )


def _describe_balance(balanced: bool, ratio: float, richness: FlavorRichness) -> str:
    if balanced:
        return (
            f"Well balanced dish with {richness.intensity_label}, "
            f"{richness.character_label} flavor profile."
        )

    issues = []
    if ratio < TIGHT_COATING_MIN_RATIO:
        issues.append("too creamy/coating")
    elif ratio > TIGHT_COATING_MAX_RATIO:
        issues.append("too tight/sour")
    if richness.character < DESCRIBE_FRESH_BELOW:
        issues.append("very fresh")
    elif richness.character > DESCRIBE_RIPE_ABOVE:
        issues.append("very ripe")
    return f"Dish is {' and '.join(issues)}; consider adding contrasting elements."
