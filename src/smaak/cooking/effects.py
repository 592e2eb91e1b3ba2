"""
Smaak - Cooking Effects.

How a cooking method transforms an ingredient before it is scored.

Ingredient-specific effects from the catalog win. Without one, general
rules by molecule type and method family apply:

    protein       + dry/fat heat  -> umami up, crispy, roasted (Maillard)
    protein       + braise/stew   -> tender
    carbohydrate  + dry/fat heat  -> sweetness up, crispy, toasted (caramelization)
    carbohydrate  + boil/steam    -> tender and soft, loses firmness and crunch
    fat           + any heat      -> coating mouthfeel
    water         + dry heat      -> sweetness up, roasted, loses fresh notes
    any           + smoke         -> smoky
    any           + pickle        -> sourness up
"""

import logging

from smaak.models.cooking import CookingEffect, CookingMethod, FlavorDelta
from smaak.models.entities import (
    FlavorProfile,
    Ingredient,
    MoleculeType,
    MouthfeelCategory,
    TextureCategory,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Method families
# =============================================================================

RAW = "raw"
DRY_HEAT = "dry"
FAT_HEAT = "fat"
SLOW_MOIST = "slow"
MOIST = "moist"
SMOKE = "smoke"
PICKLE = "pickle"
OTHER = "other"


def method_family(method: CookingMethod) -> str:
    """
    Classify a cooking method by heat type, falling back to its name.

    Braise and stew are split from other moist methods; they tenderize
    proteins where boiling and steaming do not.
    """
    key = method.key
    heat = (method.heat_type or "").lower()

    if key == "raw" or heat == "none":
        return RAW
    if "smok" in key or heat == "smoke":
        return SMOKE
    if "pickl" in key or heat == "acid":
        return PICKLE
    if "brais" in key or "stew" in key:
        return SLOW_MOIST
    if heat == "moist" or any(w in key for w in ("boil", "steam", "poach", "simmer")):
        return MOIST
    if heat == "fat" or "fry" in key or "saute" in key:
        return FAT_HEAT
    if heat == "dry" or any(w in key for w in ("roast", "grill", "bake", "broil")):
        return DRY_HEAT
    return OTHER


# =============================================================================
# General rules
# =============================================================================


def general_cooking_effect(ingredient: Ingredient, method: CookingMethod) -> CookingEffect | None:
    """Rule-based effect for ingredients without a specific one. None means unchanged."""
    family = method_family(method)
    molecule = ingredient.molecule_type

    if family in (RAW, OTHER):
        return None

    if family == SMOKE:
        return CookingEffect(
            cooking_method=method,
            aroma_intensity_change=0.2,
            aroma_categories_added=["smoky"],
            confidence_level="low",
        )

    if family == PICKLE:
        return CookingEffect(
            cooking_method=method,
            flavor_delta=FlavorDelta(sourness=0.4),
            confidence_level="low",
        )

    if molecule == MoleculeType.FAT:
        return CookingEffect(cooking_method=method, mouthfeel_change="coating", confidence_level="low")

    if molecule == MoleculeType.PROTEIN:
        if family in (DRY_HEAT, FAT_HEAT):
            return CookingEffect(
                cooking_method=method,
                flavor_delta=FlavorDelta(umami=0.15),
                aroma_categories_added=["roasted"],
                texture_categories_added=["crispy"],
                maillard_contribution=0.7,
                confidence_level="low",
            )
        if family == SLOW_MOIST:
            return CookingEffect(
                cooking_method=method,
                texture_categories_added=["tender"],
                confidence_level="low",
            )
        return None

    if molecule == MoleculeType.CARBOHYDRATE:
        if family in (DRY_HEAT, FAT_HEAT):
            return CookingEffect(
                cooking_method=method,
                flavor_delta=FlavorDelta(sweetness=0.1),
                aroma_categories_added=["toasted"],
                texture_categories_added=["crispy"],
                caramelization_contribution=0.6,
                confidence_level="low",
            )
        if family in (MOIST, SLOW_MOIST):
            return CookingEffect(
                cooking_method=method,
                texture_categories_added=["tender", "soft"],
                texture_categories_removed=["firm", "crunchy", "crispy"],
                confidence_level="low",
            )
        return None

    if molecule == MoleculeType.WATER and family == DRY_HEAT:
        return CookingEffect(
            cooking_method=method,
            flavor_delta=FlavorDelta(sweetness=0.1),
            aroma_categories_added=["roasted"],
            aroma_categories_removed=["green", "fresh"],
            caramelization_contribution=0.4,
            confidence_level="low",
        )

    return None


def resolve_cooking_effect(ingredient: Ingredient, method: CookingMethod, catalog) -> CookingEffect | None:
    """
    Effect of cooking an ingredient with a method.

    Args:
        ingredient: Catalog ingredient (untransformed)
        method: Cooking method
        catalog: IngredientCatalog holding specific effects

    Returns:
        The specific effect, the general-rule effect, or None for no change
    """
    if method.is_raw:
        return None
    effect = catalog.cooking_effect(ingredient.id, method)
    if effect is not None:
        return effect
    return general_cooking_effect(ingredient, method)


# =============================================================================
# Application
# =============================================================================


def _clamp(value: float) -> float:
    return round(min(1.0, max(0.0, value)), 4)


def _apply_textures(textures: list[TextureCategory], effect: CookingEffect) -> list[TextureCategory]:
    removed = {t.lower() for t in effect.texture_categories_removed}
    result = [t for t in textures if t.value not in removed]
    for label in effect.texture_categories_added:
        try:
            texture = TextureCategory(label.lower())
        except ValueError:
            logger.debug(f"Ignoring unknown texture in cooking effect: {label!r}")
            continue
        if texture not in result:
            result.append(texture)
    return result


def _apply_aromas(aromas: list[str], effect: CookingEffect) -> list[str]:
    removed = {a.lower() for a in effect.aroma_categories_removed}
    result = [a for a in aromas if a not in removed]
    for label in effect.aroma_categories_added:
        label = label.lower().strip()
        if label and label not in result:
            result.append(label)
    return result


def apply_cooking_effect(ingredient: Ingredient, effect: CookingEffect | None) -> Ingredient:
    """
    Return a transformed copy of an ingredient.

    Flavor and aroma intensity stay within 0.0-1.0. The original
    ingredient is never modified.
    """
    if effect is None:
        return ingredient.model_copy(deep=True)

    flavor = ingredient.flavor_profile
    delta = effect.flavor_delta or FlavorDelta()
    new_flavor = FlavorProfile(
        sweetness=_clamp(flavor.sweetness + delta.sweetness),
        saltiness=_clamp(flavor.saltiness + delta.saltiness),
        sourness=_clamp(flavor.sourness + delta.sourness),
        bitterness=_clamp(flavor.bitterness + delta.bitterness),
        umami=_clamp(flavor.umami + delta.umami),
    )

    mouthfeel = ingredient.mouthfeel
    if effect.mouthfeel_change:
        try:
            mouthfeel = MouthfeelCategory(effect.mouthfeel_change.lower())
        except ValueError:
            logger.debug(f"Ignoring unknown mouthfeel in cooking effect: {effect.mouthfeel_change!r}")

    return ingredient.model_copy(
        deep=True,
        update={
            "flavor_profile": new_flavor,
            "aroma_intensity": _clamp(ingredient.aroma_intensity + effect.aroma_intensity_change),
            "aroma_categories": _apply_aromas(ingredient.aroma_categories, effect),
            "textures": _apply_textures(ingredient.textures, effect),
            "mouthfeel": mouthfeel,
        },
    )
