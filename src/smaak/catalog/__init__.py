"""
Smaak - Ingredient Catalog.

Loading, lookup and search over the ingredient ontology.
"""

from smaak.catalog.lookup import IngredientMatch, lookup_ingredient
from smaak.catalog.sources import CatalogData, load_static_catalog, load_supabase_catalog
from smaak.catalog.store import IngredientCatalog, get_catalog, reset_catalog

__all__ = [
    "CatalogData",
    "IngredientCatalog",
    "IngredientMatch",
    "get_catalog",
    "load_static_catalog",
    "load_supabase_catalog",
    "lookup_ingredient",
    "reset_catalog",
]
