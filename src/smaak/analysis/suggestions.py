"""
Smaak - Ingredient Suggestions.

For each missing element, the catalog ingredients that would supply it if
added, strongest first.
"""

import logging

from smaak.analysis.elements import contribution_strength, is_satisfied
from smaak.models.analysis import ElementType, IngredientSuggestion, MissingElement
from smaak.models.entities import Ingredient

logger = logging.getLogger(__name__)


def suggestion_reason(element: ElementType, candidate: Ingredient) -> str:
    flavor = candidate.flavor_profile
    if element == ElementType.CARRIER:
        return f"{candidate.name} can carry the dish as its main element"
    if element == ElementType.UMAMI:
        return f"Adds savory depth (umami {flavor.umami:.0%})"
    if element == ElementType.ACID:
        return f"Adds acidity (sourness {flavor.sourness:.0%})"
    if element == ElementType.TEXTURE:
        textures = ", ".join(t.value for t in candidate.textures)
        return f"Adds texture contrast ({textures})"
    if element == ElementType.CRUNCH:
        return "Adds crunch"
    if element == ElementType.FRESHNESS:
        return "Adds freshness"
    if element == ElementType.RICHNESS:
        return "Adds richness and body"
    if element == ElementType.AROMA:
        aromas = ", ".join(candidate.aroma_categories)
        return f"Broadens the aroma ({aromas})"
    if element == ElementType.MOUTHFEEL:
        return f"Adds a {candidate.mouthfeel.value} mouthfeel"
    return f"Supplies {element.value}"


def rank_candidates(
    element: ElementType,
    ingredients: list[Ingredient],
    candidates: list[Ingredient],
) -> list[Ingredient]:
    """Candidates that, added to the ingredients, satisfy the element."""
    matching = [c for c in candidates if is_satisfied(element, ingredients + [c])]
    return sorted(
        matching,
        key=lambda c: (-contribution_strength(element, c, ingredients), c.name.lower(), c.id),
    )


def build_suggestions(
    missing: list[MissingElement],
    ingredients: list[Ingredient],
    catalog,
    per_element: int = 3,
    max_suggestions: int = 8,
) -> list[IngredientSuggestion]:
    """
    Suggestions for missing elements, in missing-element order.

    Ingredients already in the composition, or already suggested for an
    earlier element, are skipped. cooking_method has no ingredient fix.
    """
    present = {i.id for i in ingredients}
    suggested: set[str] = set()
    suggestions: list[IngredientSuggestion] = []

    for element in missing:
        if element.type == ElementType.COOKING_METHOD:
            continue
        if len(suggestions) >= max_suggestions:
            break

        candidates = [
            c for c in catalog.all_ingredients()
            if c.id not in present and c.id not in suggested
        ]
        for candidate in rank_candidates(element.type, ingredients, candidates)[:per_element]:
            if len(suggestions) >= max_suggestions:
                break
            optimal = catalog.optimal_cooking_method(candidate.id)
            suggestions.append(IngredientSuggestion(
                ingredient=candidate,
                reason=suggestion_reason(element.type, candidate),
                missing_element=element.type,
                priority=element.priority,
                optimal_cooking_method=optimal.name if optimal else None,
            ))
            suggested.add(candidate.id)

    logger.debug(f"Built {len(suggestions)} suggestions for {len(missing)} missing elements")
    return suggestions
