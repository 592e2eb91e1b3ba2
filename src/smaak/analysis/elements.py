"""
Smaak - Composition Elements.

The elements a complete dish needs, when each counts as present, how much
it is worth, and when its absence is worth reporting.

Every element is presence based: once an ingredient supplies it, adding
more ingredients can only keep it satisfied. The score is the sum of the
satisfied elements plus a small balance bonus.
"""

from dataclasses import dataclass

from smaak.models.analysis import ElementType, Priority
from smaak.models.entities import FRESH_AROMAS, Ingredient, IngredientRole, MoleculeType

# Sum thresholds for ingredients that each fall just short of "provides"
UMAMI_SUM_THRESHOLD = 0.8
SOURNESS_SUM_THRESHOLD = 0.6

MIN_TEXTURES = 2
MIN_AROMAS = 2
MIN_MOUTHFEELS = 2

BALANCE_BONUS = 5


@dataclass(frozen=True)
class ElementRule:
    type: ElementType
    priority: Priority
    points: int
    min_ingredients: int = 0  # reported as missing only from this many ingredients
    reason: str = ""


ELEMENT_RULES: tuple[ElementRule, ...] = (
    ElementRule(
        ElementType.CARRIER, Priority.HIGH, 25,
        reason="No main element: add a protein, grain or hearty vegetable to build the dish around",
    ),
    ElementRule(
        ElementType.UMAMI, Priority.HIGH, 15,
        reason="Lacks savory depth (umami)",
    ),
    ElementRule(
        ElementType.ACID, Priority.MEDIUM, 12,
        reason="No acidity to lift the other flavors",
    ),
    ElementRule(
        ElementType.TEXTURE, Priority.MEDIUM, 10,
        reason="Little texture contrast",
    ),
    ElementRule(
        ElementType.CRUNCH, Priority.LOW, 6, min_ingredients=3,
        reason="Nothing crunchy or crispy",
    ),
    ElementRule(
        ElementType.FRESHNESS, Priority.LOW, 6, min_ingredients=2,
        reason="No fresh element such as herbs, citrus or raw greens",
    ),
    ElementRule(
        ElementType.RICHNESS, Priority.MEDIUM, 6, min_ingredients=2,
        reason="No richness from fat or a coating ingredient",
    ),
    ElementRule(
        ElementType.AROMA, Priority.LOW, 5, min_ingredients=2,
        reason="Narrow aroma range",
    ),
    ElementRule(
        ElementType.MOUTHFEEL, Priority.LOW, 5, min_ingredients=2,
        reason="All ingredients share the same mouthfeel",
    ),
    ElementRule(
        ElementType.COOKING_METHOD, Priority.LOW, 5,
        reason="No cooking method chosen for the main element",
    ),
)

RULES_BY_TYPE: dict[ElementType, ElementRule] = {rule.type: rule for rule in ELEMENT_RULES}


# =============================================================================
# Satisfaction
# =============================================================================


def _distinct_textures(ingredients: list[Ingredient]) -> set:
    return {t for i in ingredients for t in i.textures}


def _distinct_aromas(ingredients: list[Ingredient]) -> set[str]:
    return {a for i in ingredients for a in i.aroma_categories}


def _distinct_mouthfeels(ingredients: list[Ingredient]) -> set:
    return {i.mouthfeel for i in ingredients}


def is_satisfied(
    element: ElementType,
    ingredients: list[Ingredient],
    cooking_methods: dict[str, str] | None = None,
) -> bool:
    """
    Whether a set of ingredients supplies an element.

    Args:
        element: Element to check
        ingredients: Ingredients after cooking effects
        cooking_methods: Ingredient id -> assigned method name
    """
    cooking_methods = cooking_methods or {}

    if element == ElementType.CARRIER:
        return any(i.can_be_carrier for i in ingredients)
    if element == ElementType.UMAMI:
        return (
            any(i.provides_umami for i in ingredients)
            or sum(i.flavor_profile.umami for i in ingredients) >= UMAMI_SUM_THRESHOLD
        )
    if element == ElementType.ACID:
        return (
            any(i.provides_acidity for i in ingredients)
            or sum(i.flavor_profile.sourness for i in ingredients) >= SOURNESS_SUM_THRESHOLD
        )
    if element == ElementType.TEXTURE:
        return len(_distinct_textures(ingredients)) >= MIN_TEXTURES
    if element == ElementType.CRUNCH:
        return any(i.provides_crunch for i in ingredients)
    if element == ElementType.FRESHNESS:
        return any(i.provides_freshness for i in ingredients)
    if element == ElementType.RICHNESS:
        return any(i.provides_richness for i in ingredients)
    if element == ElementType.AROMA:
        return len(_distinct_aromas(ingredients)) >= MIN_AROMAS
    if element == ElementType.MOUTHFEEL:
        return len(_distinct_mouthfeels(ingredients)) >= MIN_MOUTHFEELS
    if element == ElementType.COOKING_METHOD:
        return any(i.can_be_carrier and i.id in cooking_methods for i in ingredients)
    raise ValueError(f"Unknown element type: {element}")


def satisfied_elements(ingredients: list[Ingredient], cooking_methods: dict[str, str] | None = None) -> set[ElementType]:
    return {rule.type for rule in ELEMENT_RULES if is_satisfied(rule.type, ingredients, cooking_methods)}


def should_report(rule: ElementRule, ingredients: list[Ingredient], has_carrier: bool) -> bool:
    """Whether an unsatisfied element is worth reporting for this many ingredients."""
    if rule.type == ElementType.COOKING_METHOD:
        return has_carrier
    return len(ingredients) >= rule.min_ingredients


def score_composition(satisfied: set[ElementType], balanced: bool) -> int:
    """Points of satisfied elements plus the balance bonus, within 0-100."""
    points = sum(rule.points for rule in ELEMENT_RULES if rule.type in satisfied)
    if balanced:
        points += BALANCE_BONUS
    return max(0, min(100, points))


# =============================================================================
# Contribution strength (suggestion ranking)
# =============================================================================


def contribution_strength(element: ElementType, candidate: Ingredient, ingredients: list[Ingredient]) -> float:
    """How strongly a candidate supplies an element, given what is already there."""
    if element == ElementType.CARRIER:
        strength = 1.0 if candidate.role == IngredientRole.CARRIER else 0.5
        if candidate.molecule_type == MoleculeType.PROTEIN:
            strength += 0.1
        return strength
    if element == ElementType.UMAMI:
        return candidate.flavor_profile.umami
    if element == ElementType.ACID:
        return candidate.flavor_profile.sourness
    if element == ElementType.TEXTURE:
        return float(len(set(candidate.textures) - _distinct_textures(ingredients)))
    if element == ElementType.CRUNCH:
        return 1.0
    if element == ElementType.FRESHNESS:
        fresh = len(FRESH_AROMAS & set(candidate.aroma_categories))
        return fresh + (1.0 if candidate.role == IngredientRole.FINISHING else 0.0)
    if element == ElementType.RICHNESS:
        return (1.0 if candidate.molecule_type == MoleculeType.FAT else 0.0) + (
            0.5 if candidate.provides_richness else 0.0
        )
    if element == ElementType.AROMA:
        return float(len(set(candidate.aroma_categories) - _distinct_aromas(ingredients)))
    if element == ElementType.MOUTHFEEL:
        return 1.0
    return 0.0
