"""
Smaak - Composition Analyzer.

Scores a selection of ingredients and explains what it is missing.

Pipeline:
1. Resolve names against the catalog (unknown names ignored or rejected)
2. Apply cooking methods to get transformed copies
3. Aggregate flavor, texture and sensory profiles
4. Check elements, score, and suggest ingredients for what is missing

Ingredients are sorted by id before step 3, so input order never changes
the result. Nothing is cached between calls.
"""

import logging
from collections.abc import Sequence

from smaak.analysis.elements import (
    ELEMENT_RULES,
    satisfied_elements,
    score_composition,
    should_report,
)
from smaak.analysis.errors import (
    EmptyCompositionError,
    UnknownCookingMethodError,
    UnknownIngredientError,
)
from smaak.analysis.sensory import analyze_sensory_balance, combined_sensory_profile
from smaak.analysis.suggestions import build_suggestions
from smaak.catalog.store import IngredientCatalog, get_catalog
from smaak.config import settings
from smaak.cooking.effects import apply_cooking_effect, resolve_cooking_effect
from smaak.models.analysis import (
    CompositionAnalysis,
    ElementType,
    IngredientSuggestion,
    MissingElement,
    SensoryBalance,
    TextureAnalysis,
)
from smaak.models.cooking import CookingEffect
from smaak.models.entities import (
    FlavorProfile,
    Ingredient,
    IngredientRole,
    MoleculeType,
    TextureCategory,
)
from smaak.tools.normalize import composition_key, normalize_name

logger = logging.getLogger(__name__)

# Carrier preference after an explicit carrier role
_CARRIER_MOLECULE_ORDER = {
    MoleculeType.PROTEIN: 0,
    MoleculeType.CARBOHYDRATE: 1,
}

TEXTURE_SCORE_TARGET = 4
_CRISP = {TextureCategory.CRISPY, TextureCategory.CRUNCHY}
_CREAMY = {TextureCategory.CREAMY, TextureCategory.SILKY}


def pick_carrier(ingredients: list[Ingredient]) -> Ingredient | None:
    """The main element: explicit carrier role first, then protein, then starch."""
    candidates = [i for i in ingredients if i.can_be_carrier]
    if not candidates:
        return None
    return min(
        candidates,
        key=lambda i: (
            i.role != IngredientRole.CARRIER,
            _CARRIER_MOLECULE_ORDER.get(i.molecule_type, 2),
            i.id,
        ),
    )


def analyze_textures(ingredients: list[Ingredient]) -> TextureAnalysis:
    textures = sorted({t for i in ingredients for t in i.textures}, key=lambda t: t.value)
    mouthfeels = sorted({i.mouthfeel for i in ingredients}, key=lambda m: m.value)
    present = set(textures)
    return TextureAnalysis(
        textures=textures,
        mouthfeels=mouthfeels,
        has_crispy_creamy=bool(present & _CRISP) and bool(present & _CREAMY),
        has_variety=len(textures) >= 2,
        score=round(min(1.0, len(textures) / TEXTURE_SCORE_TARGET), 4),
    )


class CompositionAnalyzer:
    """
    Rule-based composition scorer.

    Usage:
        analyzer = CompositionAnalyzer()
        analysis = analyzer.analyze_composition(["chicken", "lemon", "basil"])
        analysis.overall_score   # 0-100
        analysis.missing_elements
    """

    def __init__(
        self,
        catalog: IngredientCatalog | None = None,
        max_suggestions: int | None = None,
        suggestions_per_element: int | None = None,
        strict: bool | None = None,
    ):
        self.catalog = catalog if catalog is not None else get_catalog()
        self.max_suggestions = max_suggestions if max_suggestions is not None else settings.smaak_max_suggestions
        self.suggestions_per_element = (
            suggestions_per_element if suggestions_per_element is not None
            else settings.smaak_suggestions_per_element
        )
        self.strict = strict if strict is not None else settings.smaak_strict_ingredients

    # =========================================================================
    # Resolution
    # =========================================================================

    def resolve(self, names: Sequence[str], strict: bool | None = None) -> tuple[dict[str, Ingredient], list[str]]:
        """
        Resolve names to catalog ingredients.

        Returns:
            (input name -> ingredient, unknown names). Names resolving to the
            same ingredient are all kept as keys. Unknown names are sorted
            case-insensitively.

        Raises:
            EmptyCompositionError: No non-blank names
            UnknownIngredientError: Unknown names in strict mode
        """
        strict = self.strict if strict is None else strict
        cleaned = [n for n in names if n and n.strip()]
        if not cleaned:
            raise EmptyCompositionError()

        resolved: dict[str, Ingredient] = {}
        unknown: list[str] = []
        for name in cleaned:
            match = self.catalog.lookup(name)
            if match is None:
                if name not in unknown:
                    unknown.append(name)
                continue
            resolved[name] = match.ingredient

        unknown.sort(key=lambda n: (n.lower(), n))
        if unknown:
            if strict:
                raise UnknownIngredientError(unknown)
            logger.warning(f"Ignoring unknown ingredients: {', '.join(unknown)}")

        return resolved, unknown

    def _assign_methods(
        self,
        resolved: dict[str, Ingredient],
        cooking_methods: dict[str, str] | None,
        strict: bool,
    ) -> dict[str, str]:
        """
        Map ingredient id -> canonical method name.

        Method keys match the input name or any name of the resolved
        ingredient, case-insensitively.

        Raises:
            UnknownCookingMethodError: Unknown method name in strict mode
        """
        if not cooking_methods:
            return {}

        # Typed names first, so another ingredient's alias never shadows them
        by_label: dict[str, Ingredient] = {normalize_name(name): i for name, i in resolved.items()}
        for ingredient in sorted(resolved.values(), key=lambda i: i.id):
            for label in ingredient.all_names():
                by_label.setdefault(normalize_name(label), ingredient)

        assigned: dict[str, str] = {}
        for key in sorted(cooking_methods):
            method_name = cooking_methods[key]
            if not method_name or not method_name.strip():
                continue
            ingredient = by_label.get(normalize_name(key))
            if ingredient is None:
                logger.warning(f"Cooking method for {key!r} ignored: not in the composition")
                continue
            method = self.catalog.cooking_method(method_name)
            if method is None:
                if strict:
                    raise UnknownCookingMethodError(method_name)
                logger.warning(f"Ignoring unknown cooking method {method_name!r} for {key!r}")
                continue
            assigned[ingredient.id] = method.name
        return assigned

    # =========================================================================
    # Analysis
    # =========================================================================

    def analyze_composition(
        self,
        ingredient_names: Sequence[str],
        cooking_methods: dict[str, str] | None = None,
        strict: bool | None = None,
    ) -> CompositionAnalysis:
        """
        Analyze an ingredient selection.

        Args:
            ingredient_names: Names as typed by the user
            cooking_methods: Ingredient name -> cooking method name
            strict: Raise on unknown names and methods (defaults to settings)

        Returns:
            CompositionAnalysis
        """
        strict = self.strict if strict is None else strict
        resolved, unknown = self.resolve(ingredient_names, strict=strict)
        methods = self._assign_methods(resolved, cooking_methods, strict)

        base = sorted({i.id: i for i in resolved.values()}.values(), key=lambda i: i.id)
        cooked = [self._cook(ingredient, methods.get(ingredient.id)) for ingredient in base]
        ingredients = [ingredient for ingredient, _ in cooked]
        effects = {ingredient.id: effect for ingredient, effect in cooked if effect is not None}

        flavor = FlavorProfile.average([i.flavor_profile for i in ingredients])
        carrier = pick_carrier(ingredients)
        satisfied = satisfied_elements(ingredients, methods)
        missing = self._missing_elements(ingredients, satisfied, carrier)
        score = score_composition(satisfied, flavor.is_balanced)
        sensory = combined_sensory_profile(ingredients, effects)
        suggestions = build_suggestions(
            missing,
            ingredients,
            self.catalog,
            per_element=self.suggestions_per_element,
            max_suggestions=self.max_suggestions,
        )

        analysis = CompositionAnalysis(
            ingredients=ingredients,
            flavor_profile=flavor,
            overall_score=score,
            carrier=carrier,
            texture_variety=analyze_textures(ingredients),
            missing_elements=missing,
            suggestions=suggestions,
            sensory_profile=sensory,
            sensory_balance=analyze_sensory_balance(sensory) if ingredients else SensoryBalance(),
            unknown_ingredients=unknown,
            cooking_methods=methods,
            cache_key=composition_key(list(ingredient_names), cooking_methods),
        )
        logger.debug(
            f"Analyzed {len(ingredients)} ingredients: score={score}, "
            f"missing={[m.type.value for m in missing]}"
        )
        return analysis

    def get_suggestions(
        self,
        ingredient_names: Sequence[str],
        cooking_methods: dict[str, str] | None = None,
    ) -> list[IngredientSuggestion]:
        """Suggestions only, for callers that do not need the full analysis."""
        return self.analyze_composition(ingredient_names, cooking_methods).suggestions

    def _cook(self, ingredient: Ingredient, method_name: str | None) -> tuple[Ingredient, CookingEffect | None]:
        """Cooked copy of the ingredient and the effect that produced it."""
        if not method_name:
            return ingredient, None
        method = self.catalog.cooking_method(method_name)
        if method is None:
            return ingredient, None
        effect = resolve_cooking_effect(ingredient, method, self.catalog)
        return apply_cooking_effect(ingredient, effect), effect

    def _missing_elements(
        self,
        ingredients: list[Ingredient],
        satisfied: set[ElementType],
        carrier: Ingredient | None,
    ) -> list[MissingElement]:
        missing = []
        for rule in ELEMENT_RULES:
            if rule.type in satisfied or not should_report(rule, ingredients, carrier is not None):
                continue
            missing.append(MissingElement(
                type=rule.type,
                reason=self._reason(rule.type, rule.reason, carrier),
                priority=rule.priority,
            ))
        # Stable sort keeps table order within a priority
        return sorted(missing, key=lambda m: m.priority.rank)

    def _reason(self, element: ElementType, default: str, carrier: Ingredient | None) -> str:
        if element == ElementType.COOKING_METHOD and carrier is not None:
            optimal = self.catalog.optimal_cooking_method(carrier.id)
            if optimal is not None:
                return f"No cooking method chosen for {carrier.name}; try {optimal.name}"
            return f"No cooking method chosen for {carrier.name}"
        return default


def analyze_composition(
    ingredient_names: Sequence[str],
    cooking_methods: dict[str, str] | None = None,
    strict: bool | None = None,
) -> CompositionAnalysis:
    """Analyze with the configured catalog and settings."""
    return CompositionAnalyzer().analyze_composition(ingredient_names, cooking_methods, strict=strict)
