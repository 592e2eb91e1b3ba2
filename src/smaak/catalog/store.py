"""
Smaak - Ingredient Catalog.

In-memory view of the ingredient ontology. Data is loaded lazily from the
configured source on first access and kept until clear_cache().
"""

import logging
from collections.abc import Callable
from pathlib import Path

from smaak.catalog.lookup import IngredientMatch, build_exact_index, lookup_ingredient
from smaak.catalog.sources import CatalogData, load_static_catalog, load_supabase_catalog
from smaak.config import settings
from smaak.models.cooking import CookingEffect, CookingMethod
from smaak.models.entities import Ingredient, MoleculeType
from smaak.tools.normalize import normalize_method_name, normalize_name

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Other"

# Fallback when an ingredient has no specific cooking effects
DEFAULT_METHOD_BY_MOLECULE: dict[MoleculeType, str] = {
    MoleculeType.PROTEIN: "Roast",
    MoleculeType.CARBOHYDRATE: "Roast",
    MoleculeType.WATER: "Raw",
    MoleculeType.FAT: "Raw",
}


class IngredientCatalog:
    """
    Ingredient ontology with lookup, search and cooking-effect queries.

    Usage:
        catalog = IngredientCatalog()                      # packaged JSON
        catalog = IngredientCatalog.from_data(data)        # tests
        catalog = IngredientCatalog(load_supabase_catalog) # backend
    """

    def __init__(self, loader: Callable[[], CatalogData] | None = None):
        self._loader = loader or load_static_catalog
        self._data: CatalogData | None = None
        self._by_id: dict[str, Ingredient] = {}
        self._index: dict[str, Ingredient] = {}
        self._methods_by_key: dict[str, CookingMethod] = {}
        self._effects: dict[tuple[str, str], CookingEffect] = {}

    @classmethod
    def from_data(cls, data: CatalogData) -> "IngredientCatalog":
        """Build a catalog around already-loaded data."""
        return cls(loader=lambda: data)

    # =========================================================================
    # Loading
    # =========================================================================

    def _ensure_loaded(self) -> CatalogData:
        if self._data is None:
            data = self._loader()
            self._by_id = {i.id: i for i in data.ingredients}
            self._index = build_exact_index(data.ingredients)
            self._methods_by_key = {m.key: m for m in data.cooking_methods}
            self._effects = {
                (e.ingredient_id, e.cooking_method.key): e
                for e in data.cooking_effects
                if e.ingredient_id
            }
            self._data = data
            logger.info(f"Ingredient catalog loaded: {len(data.ingredients)} ingredients")
        return self._data

    def clear_cache(self) -> None:
        """Drop loaded data; the next access reloads from the source."""
        self._data = None
        self._by_id = {}
        self._index = {}
        self._methods_by_key = {}
        self._effects = {}

    # =========================================================================
    # Ingredients
    # =========================================================================

    def all_ingredients(self) -> list[Ingredient]:
        """All ingredients sorted by name."""
        data = self._ensure_loaded()
        return sorted(data.ingredients, key=lambda i: (i.name.lower(), i.id))

    def get(self, ingredient_id: str) -> Ingredient | None:
        self._ensure_loaded()
        return self._by_id.get(ingredient_id)

    def lookup(self, name: str) -> IngredientMatch | None:
        """Resolve a user-typed name (exact, word, then partial match)."""
        self._ensure_loaded()
        return lookup_ingredient(name, self.all_ingredients(), self._index)

    def ingredients_by_category(self) -> dict[str, list[Ingredient]]:
        """Category name -> ingredients, both sorted by name."""
        grouped: dict[str, list[Ingredient]] = {}
        for ingredient in self.all_ingredients():
            grouped.setdefault(ingredient.category or UNCATEGORIZED, []).append(ingredient)
        return dict(sorted(grouped.items()))

    def categories(self) -> list[str]:
        return list(self.ingredients_by_category())

    def search(self, query: str, limit: int = 20) -> list[Ingredient]:
        """
        Substring search on name, localized name and aliases.

        Names starting with the query rank before other matches.
        """
        q = normalize_name(query or "")
        if not q:
            return []

        starts: list[Ingredient] = []
        contains: list[Ingredient] = []
        for ingredient in self.all_ingredients():
            names = ingredient.all_names()
            if any(n.startswith(q) for n in names):
                starts.append(ingredient)
            elif any(q in n for n in names):
                contains.append(ingredient)
        return (starts + contains)[:limit]

    # =========================================================================
    # Cooking methods
    # =========================================================================

    def cooking_methods(self) -> list[CookingMethod]:
        """All cooking methods sorted by name."""
        data = self._ensure_loaded()
        return sorted(data.cooking_methods, key=lambda m: m.name.lower())

    def cooking_method(self, name: str) -> CookingMethod | None:
        """Find a cooking method by English or Dutch name (case-insensitive)."""
        self._ensure_loaded()
        key = normalize_method_name(name or "")
        method = self._methods_by_key.get(key)
        if method is None:
            method = next(
                (m for m in self._methods_by_key.values() if m.name_nl and normalize_method_name(m.name_nl) == key),
                None,
            )
        return method

    def cooking_effect(self, ingredient_id: str, method: str | CookingMethod) -> CookingEffect | None:
        """Ingredient-specific effect of a cooking method, if the ontology has one."""
        self._ensure_loaded()
        if isinstance(method, str):
            resolved = self.cooking_method(method)
            key = resolved.key if resolved else normalize_method_name(method)
        else:
            key = method.key
        return self._effects.get((ingredient_id, key))

    def cooking_effects_for(self, ingredient_id: str) -> list[CookingEffect]:
        """Specific effects of an ingredient, highest confidence first."""
        self._ensure_loaded()
        effects = [e for (iid, _), e in self._effects.items() if iid == ingredient_id]
        return sorted(effects, key=lambda e: (-e.confidence_rank, e.cooking_method.name.lower()))

    def cooking_methods_for(self, ingredient_id: str) -> list[CookingMethod]:
        """Cooking methods with a known effect on this ingredient."""
        return [e.cooking_method for e in self.cooking_effects_for(ingredient_id)]

    def optimal_cooking_method(self, ingredient_id: str) -> CookingMethod | None:
        """
        Best cooking method for an ingredient.

        The highest-confidence specific effect wins; otherwise the default
        for the ingredient's molecule type (None for mixed ingredients).
        """
        effects = self.cooking_effects_for(ingredient_id)
        if effects:
            return effects[0].cooking_method

        ingredient = self.get(ingredient_id)
        if ingredient is None:
            return None
        default = DEFAULT_METHOD_BY_MOLECULE.get(ingredient.molecule_type)
        return self.cooking_method(default) if default else None

    def __len__(self) -> int:
        return len(self._ensure_loaded().ingredients)


# =============================================================================
# Default catalog
# =============================================================================

_catalog: IngredientCatalog | None = None


def get_catalog() -> IngredientCatalog:
    """
    Get the configured catalog.

    Uses singleton pattern; SMAAK_CATALOG_SOURCE picks the source.
    """
    global _catalog

    if _catalog is None:
        if settings.smaak_catalog_source == "supabase":
            _catalog = IngredientCatalog(load_supabase_catalog)
        else:
            path: Path | None = settings.smaak_catalog_path
            _catalog = IngredientCatalog(lambda: load_static_catalog(path))
        logger.debug(f"Using {settings.smaak_catalog_source} ingredient catalog")

    return _catalog


def reset_catalog() -> None:
    """Forget the default catalog (settings changes, tests)."""
    global _catalog
    _catalog = None
