"""
Smaak - Catalog Sources.

Two ways to load the ingredient ontology:
- Static: JSON files shipped in smaak/catalog/data (or a custom directory)
- Supabase: the ingredients, ingredient_categories, cooking_methods and
  ingredient_cooking_effects tables of the backend

Both produce a CatalogData with the same models, so the analyzer never
knows where its ingredients came from.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from smaak.models.cooking import CookingEffect, CookingMethod, FlavorDelta
from smaak.models.entities import (
    FlavorProfile,
    Ingredient,
    IngredientRole,
    MoleculeType,
    MouthfeelCategory,
    TextureCategory,
)
from smaak.tools.normalize import normalize_method_name

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
INGREDIENTS_FILE = "ingredients.json"
COOKING_METHODS_FILE = "cooking_methods.json"


@dataclass
class CatalogData:
    """Everything the analyzer needs from the ontology."""

    ingredients: list[Ingredient] = field(default_factory=list)
    cooking_methods: list[CookingMethod] = field(default_factory=list)
    cooking_effects: list[CookingEffect] = field(default_factory=list)


# =============================================================================
# Static JSON
# =============================================================================


def load_static_catalog(data_dir: Path | None = None) -> CatalogData:
    """
    Load the catalog from JSON files.

    Args:
        data_dir: Directory holding ingredients.json and cooking_methods.json.
            Defaults to the packaged ontology.
    """
    data_dir = Path(data_dir) if data_dir else DATA_DIR

    ingredients_raw = json.loads((data_dir / INGREDIENTS_FILE).read_text(encoding="utf-8"))
    ingredients = [Ingredient.model_validate(row) for row in ingredients_raw]

    methods: list[CookingMethod] = []
    effects: list[CookingEffect] = []
    methods_path = data_dir / COOKING_METHODS_FILE
    if methods_path.exists():
        raw = json.loads(methods_path.read_text(encoding="utf-8"))
        methods = [CookingMethod.model_validate(row) for row in raw.get("methods", [])]
        by_key = {m.key: m for m in methods}
        for row in raw.get("effects", []):
            method = by_key.get(normalize_method_name(row.get("method", "")))
            if method is None:
                logger.warning(f"Skipping cooking effect with unknown method: {row.get('method')!r}")
                continue
            payload = {k: v for k, v in row.items() if k != "method"}
            effects.append(CookingEffect.model_validate({**payload, "cooking_method": method}))

    logger.debug(
        f"Loaded static catalog from {data_dir}: {len(ingredients)} ingredients, "
        f"{len(methods)} methods, {len(effects)} effects"
    )
    return CatalogData(ingredients=ingredients, cooking_methods=methods, cooking_effects=effects)


# =============================================================================
# Supabase rows
# =============================================================================

# Free-text texture keywords (English and Dutch) -> category
TEXTURE_KEYWORDS: dict[TextureCategory, tuple[str, ...]] = {
    TextureCategory.CRISPY: ("crispy", "knapperig"),
    TextureCategory.CREAMY: ("creamy", "romig"),
    TextureCategory.TENDER: ("tender", "mals"),
    TextureCategory.CHEWY: ("chewy", "taai"),
    TextureCategory.SILKY: ("silky", "zijdezacht"),
    TextureCategory.CRUNCHY: ("crunchy", "krokant"),
    TextureCategory.SOFT: ("soft", "zacht"),
    TextureCategory.FIRM: ("firm", "stevig"),
}

# Category-name fragments used when a row has no culinary_role
CARRIER_CATEGORY_HINTS = (
    "protein", "eiwit", "vlees", "vis", "meat", "fish",
    "grain", "graan", "pasta", "rice", "rijst",
)
ACCENT_CATEGORY_HINTS = ("herb", "kruid", "spice", "specerij")

_FLAVOR_PAIR = re.compile(r'"([^"]+)"\s*:\s*"?(-?[0-9.]+)"?')


def parse_flavor_profile(value: Any) -> FlavorProfile:
    """
    Parse a flavor_profile column.

    Accepts a dict, a JSON string, or a loosely escaped JSON-ish string.
    Values are clamped to 0.0-1.0; anything unreadable yields a neutral profile.
    """
    if value is None or value == "":
        return FlavorProfile()

    data: dict[str, Any] = {}
    if isinstance(value, dict):
        data = value
    elif isinstance(value, str):
        try:
            parsed = json.loads(value)
            if isinstance(parsed, dict):
                data = parsed
        except json.JSONDecodeError:
            data = {k: v for k, v in _FLAVOR_PAIR.findall(value)}

    fields = {}
    for key in ("sweetness", "saltiness", "sourness", "bitterness", "umami"):
        try:
            fields[key] = min(1.0, max(0.0, float(data.get(key, 0.0) or 0.0)))
        except (TypeError, ValueError):
            fields[key] = 0.0
    return FlavorProfile(**fields)


def parse_textures(value: Any) -> list[TextureCategory]:
    """Parse free-text or list texture descriptions by keyword."""
    if not value:
        return []
    text = " ".join(str(v) for v in value) if isinstance(value, list) else str(value)
    text = text.lower()
    return [category for category, keywords in TEXTURE_KEYWORDS.items() if any(k in text for k in keywords)]


def parse_role(culinary_role: Any, category_name: str | None) -> IngredientRole:
    role = str(culinary_role or "").lower().strip()
    try:
        return IngredientRole(role)
    except ValueError:
        pass

    category = (category_name or "").lower()
    if any(hint in category for hint in CARRIER_CATEGORY_HINTS):
        return IngredientRole.CARRIER
    if any(hint in category for hint in ACCENT_CATEGORY_HINTS):
        return IngredientRole.ACCENT
    return IngredientRole.SUPPORTING


def _parse_enum(enum_cls, value: Any, default):
    try:
        return enum_cls(str(value or "").lower().strip())
    except ValueError:
        return default


def _parse_string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(v) for v in value if v is not None]
    if isinstance(value, str) and value.strip():
        return [part.strip() for part in value.split(",") if part.strip()]
    return []


def _parse_float(value: Any, default: float) -> float:
    try:
        return min(1.0, max(0.0, float(value)))
    except (TypeError, ValueError):
        return default


def _parse_delta(value: Any) -> float:
    try:
        return min(1.0, max(-1.0, float(value)))
    except (TypeError, ValueError):
        return 0.0


def ingredient_from_row(row: dict[str, Any], category_names: dict[str, str] | None = None) -> Ingredient:
    """Build an Ingredient from an `ingredients` table row."""
    category_names = category_names or {}
    category_id = str(row["category_id"]) if row.get("category_id") is not None else None
    category = row.get("category_name") or (category_names.get(category_id) if category_id else None)

    return Ingredient(
        id=str(row.get("id") or ""),
        name=str(row.get("name_en") or row.get("name_nl") or row.get("name") or ""),
        name_nl=row.get("name_nl"),
        aliases=_parse_string_list(row.get("aliases")),
        description=row.get("description_en") or row.get("description_nl"),
        category=category,
        image_url=row.get("hero_image_url") or row.get("image_url"),
        role=parse_role(row.get("culinary_role"), category),
        molecule_type=_parse_enum(MoleculeType, row.get("molecule_type"), MoleculeType.MIXED),
        flavor_profile=parse_flavor_profile(row.get("flavor_profile")),
        textures=parse_textures(row.get("texture_en") or row.get("texture")),
        mouthfeel=_parse_enum(MouthfeelCategory, row.get("mouthfeel"), MouthfeelCategory.REFRESHING),
        aroma_intensity=_parse_float(row.get("intensity", row.get("aroma_intensity")), 0.5),
        aroma_categories=_parse_string_list(row.get("aroma_categories")),
        season=row.get("season_en") or row.get("season"),
        pairing_affinities=_parse_string_list(row.get("pairing_affinities")),
        preparation_methods=_parse_string_list(row.get("preparation_methods_en") or row.get("preparation_methods")),
        culinary_uses=_parse_string_list(row.get("culinary_uses_en") or row.get("culinary_uses")),
    )


def cooking_method_from_row(row: dict[str, Any]) -> CookingMethod:
    """Build a CookingMethod from a `cooking_methods` row."""
    return CookingMethod(
        id=str(row.get("id") or ""),
        name=str(row.get("name_en") or row.get("name") or "Unknown"),
        name_nl=row.get("name_nl"),
        description=row.get("description_en"),
        heat_type=row.get("heat_type"),
        temperature_range_min=row.get("temperature_range_min"),
        temperature_range_max=row.get("temperature_range_max"),
    )


# CookingEffect field -> ingredient_cooking_effects column
SENSORY_DELTA_COLUMNS: dict[str, str] = {
    "tight_delta": "mondgevoel_strak_delta",
    "coating_delta": "mondgevoel_filmend_delta",
    "dry_delta": "mondgevoel_droog_delta",
    "character_delta": "smaaktype_delta",
}


def cooking_effect_from_row(row: dict[str, Any], method: CookingMethod) -> CookingEffect:
    """Build a CookingEffect from an `ingredient_cooking_effects` row."""
    delta_raw = row.get("flavor_profile_delta")
    flavor_delta = None
    if isinstance(delta_raw, dict):
        flavor_delta = FlavorDelta(**{
            k: float(delta_raw.get(k) or 0.0)
            for k in ("sweetness", "saltiness", "sourness", "bitterness", "umami")
        })

    confidence = str(row.get("confidence_level") or "medium").lower()
    if confidence not in ("low", "medium", "high"):
        confidence = "medium"

    return CookingEffect(
        ingredient_id=str(row["ingredient_id"]) if row.get("ingredient_id") is not None else None,
        cooking_method=method,
        flavor_delta=flavor_delta,
        aroma_intensity_change=float(row.get("aroma_intensity_change") or 0.0),
        aroma_categories_added=_parse_string_list(row.get("aroma_categories_added")),
        aroma_categories_removed=_parse_string_list(row.get("aroma_categories_removed")),
        texture_categories_added=_parse_string_list(row.get("texture_categories_added")),
        texture_categories_removed=_parse_string_list(row.get("texture_categories_removed")),
        mouthfeel_change=row.get("mouthfeel_change"),
        **{field: _parse_delta(row.get(column)) for field, column in SENSORY_DELTA_COLUMNS.items()},
        maillard_contribution=_parse_float(row.get("maillard_contribution"), 0.0),
        caramelization_contribution=_parse_float(row.get("caramelization_contribution"), 0.0),
        moisture_loss_pct=row.get("moisture_loss_pct"),
        optimal_temperature=row.get("optimal_temperature"),
        optimal_time_min=row.get("optimal_time_min"),
        scientific_source=row.get("scientific_source"),
        confidence_level=confidence,
    )


def load_supabase_catalog(client=None) -> CatalogData:
    """
    Load the catalog from Supabase.

    Args:
        client: Supabase client (defaults to smaak.db.client.get_client())
    """
    if client is None:
        from smaak.db.client import get_client
        client = get_client()

    ingredient_rows = client.table("ingredients").select("*").order("name_en").execute().data or []
    category_rows = client.table("ingredient_categories").select("id, name_en, name_nl").execute().data or []
    method_rows = client.table("cooking_methods").select("*").order("name_en").execute().data or []
    effect_rows = client.table("ingredient_cooking_effects").select("*").execute().data or []

    category_names = {
        str(c["id"]): c.get("name_en") or c.get("name_nl") or ""
        for c in category_rows
        if c.get("id") is not None
    }
    ingredients = [ingredient_from_row(row, category_names) for row in ingredient_rows]
    methods = [cooking_method_from_row(row) for row in method_rows]

    methods_by_id = {m.id: m for m in methods}
    effects = []
    for row in effect_rows:
        method = methods_by_id.get(str(row.get("cooking_method_id")))
        if method is None:
            logger.debug(f"Skipping cooking effect without known method: {row.get('id')}")
            continue
        effects.append(cooking_effect_from_row(row, method))

    logger.info(
        f"Loaded Supabase catalog: {len(ingredients)} ingredients, "
        f"{len(methods)} methods, {len(effects)} effects"
    )
    return CatalogData(ingredients=ingredients, cooking_methods=methods, cooking_effects=effects)


# =============================================================================
# Rows for seeding
# =============================================================================


def category_id(name: str) -> str:
    """Stable id for a category name ("Fats & Oils" -> "cat-fats-oils")."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return f"cat-{slug}"


def ingredient_to_row(ingredient: Ingredient) -> dict[str, Any]:
    """Inverse of ingredient_from_row."""
    return {
        "id": ingredient.id,
        "name_en": ingredient.name,
        "name_nl": ingredient.name_nl,
        "aliases": ingredient.aliases,
        "description_en": ingredient.description,
        "category_id": category_id(ingredient.category) if ingredient.category else None,
        "hero_image_url": ingredient.image_url,
        "culinary_role": ingredient.role.value,
        "molecule_type": ingredient.molecule_type.value,
        "flavor_profile": ingredient.flavor_profile.model_dump(include={
            "sweetness", "saltiness", "sourness", "bitterness", "umami",
        }),
        "texture_en": ", ".join(t.value for t in ingredient.textures),
        "mouthfeel": ingredient.mouthfeel.value,
        "intensity": ingredient.aroma_intensity,
        "aroma_categories": ingredient.aroma_categories,
        "season_en": ingredient.season,
        "pairing_affinities": ingredient.pairing_affinities,
        "preparation_methods_en": ingredient.preparation_methods,
        "culinary_uses_en": ingredient.culinary_uses,
    }


def catalog_to_rows(data: CatalogData) -> dict[str, list[dict[str, Any]]]:
    """
    Table name -> rows, in insertion order (categories before ingredients,
    methods before effects).
    """
    categories = sorted({i.category for i in data.ingredients if i.category})
    methods_rows = [
        {
            "id": m.id,
            "name_en": m.name,
            "name_nl": m.name_nl,
            "description_en": m.description,
            "heat_type": m.heat_type,
            "temperature_range_min": m.temperature_range_min,
            "temperature_range_max": m.temperature_range_max,
        }
        for m in data.cooking_methods
    ]
    effect_rows = []
    for effect in data.cooking_effects:
        row = effect.model_dump(mode="json", exclude={"cooking_method", "flavor_delta", *SENSORY_DELTA_COLUMNS})
        for field, column in SENSORY_DELTA_COLUMNS.items():
            row[column] = getattr(effect, field)
        row["cooking_method_id"] = effect.cooking_method.id
        row["flavor_profile_delta"] = effect.flavor_delta.model_dump() if effect.flavor_delta else None
        effect_rows.append(row)

    return {
        "ingredient_categories": [{"id": category_id(c), "name_en": c} for c in categories],
        "ingredients": [ingredient_to_row(i) for i in data.ingredients],
        "cooking_methods": methods_rows,
        "ingredient_cooking_effects": effect_rows,
    }
