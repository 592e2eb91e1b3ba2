"""
Smaak - Cooking Guidance.

Plain-text preparation notes for one ingredient and cooking method, used by
the CLI `guidance` command and the /guidance endpoint.
"""

from smaak.cooking.effects import DRY_HEAT, FAT_HEAT, MOIST, SLOW_MOIST, method_family
from smaak.models.cooking import CookingEffect, CookingMethod
from smaak.models.entities import Ingredient, IngredientRole, MoleculeType

# Flavor changes at or below this are not worth mentioning
FLAVOR_CHANGE_THRESHOLD = 0.1
REACTION_THRESHOLD = 0.5

_TASTE_NAMES = ("sweetness", "saltiness", "sourness", "bitterness", "umami")


def format_effect_guidance(ingredient: Ingredient, effect: CookingEffect) -> str:
    """Summarize a specific cooking effect."""
    lines = [f"{ingredient.name} ({effect.cooking_method.name}):"]

    if effect.flavor_delta is not None:
        changes = []
        for taste in _TASTE_NAMES:
            value = getattr(effect.flavor_delta, taste)
            if abs(value) > FLAVOR_CHANGE_THRESHOLD:
                changes.append(f"{value * 100:+.0f}% {taste}")
        if changes:
            lines.append(f"  Flavor: {', '.join(changes)}")

    if effect.aroma_categories_added:
        lines.append(f"  Aroma: adds {', '.join(effect.aroma_categories_added)}")
    if effect.aroma_categories_removed:
        lines.append(f"  Aroma: removes {', '.join(effect.aroma_categories_removed)}")
    if effect.texture_categories_added:
        lines.append(f"  Texture: becomes {', '.join(effect.texture_categories_added)}")

    if effect.maillard_contribution > REACTION_THRESHOLD:
        lines.append("  Maillard reaction: strong browning and savory depth")
    if effect.caramelization_contribution > REACTION_THRESHOLD:
        lines.append("  Caramelization: noticeable sweetness and golden color")

    if effect.optimal_temperature is not None:
        lines.append(f"  Optimal: {effect.optimal_temperature}°C")
    if effect.optimal_time_min is not None:
        lines.append(f"  Time: {effect.optimal_time_min} minutes")

    return "\n".join(lines)


def general_guidance(ingredient: Ingredient, method: CookingMethod) -> str:
    """Molecule-type rules of thumb plus role hints."""
    lines = [f"{ingredient.name} ({method.name}):"]
    family = method_family(method)
    molecule = ingredient.molecule_type

    if molecule == MoleculeType.PROTEIN:
        if family in (DRY_HEAT, FAT_HEAT):
            lines.append("  Use high heat (180-220°C) for browning and the Maillard reaction")
            lines.append("  Develops umami and savory flavors")
            lines.append("  Texture: crispy exterior, tender interior")
        elif family == SLOW_MOIST:
            lines.append("  Use low heat (80-100°C) to break down collagen slowly")
            lines.append("  Results in a very tender, falling-apart texture")
    elif molecule == MoleculeType.CARBOHYDRATE:
        if family in (DRY_HEAT, FAT_HEAT):
            lines.append("  Develops caramelization and a crispy texture")
            lines.append("  Sweetness increases with browning")
        elif family in (MOIST, SLOW_MOIST):
            lines.append("  Gelatinizes starch, becomes tender")
            lines.append("  Steaming keeps the structure better than boiling")
    elif molecule == MoleculeType.FAT:
        lines.append("  Melts and carries flavors")
        lines.append("  Adds richness and a coating mouthfeel")
    elif molecule == MoleculeType.WATER:
        if family == DRY_HEAT:
            lines.append("  Loses moisture, concentrates flavors")
            lines.append("  Can develop browning and caramelization")
        elif family == MOIST:
            lines.append("  Preserves freshness and structure")
            lines.append("  Minimal flavor loss")

    if ingredient.role == IngredientRole.CARRIER:
        lines.append("  Main element: cook until properly done (check doneness)")
    elif ingredient.role == IngredientRole.FINISHING:
        lines.append("  Finishing element: add at the end to preserve freshness")

    return "\n".join(lines)


def cooking_guidance(ingredient: Ingredient, method: str | None, catalog) -> str:
    """
    Preparation notes for an ingredient.

    Args:
        ingredient: Catalog ingredient
        method: Cooking method name (English or Dutch); defaults to "Raw"
        catalog: IngredientCatalog

    Returns:
        Multi-line text. Uses the ingredient-specific effect when the catalog
        has one, otherwise general guidance for the molecule type.
    """
    name = method or "Raw"
    resolved = catalog.cooking_method(name) or CookingMethod(id="", name=name)

    effect = catalog.cooking_effect(ingredient.id, resolved)
    if effect is not None:
        return format_effect_guidance(ingredient, effect)
    return general_guidance(ingredient, resolved)
