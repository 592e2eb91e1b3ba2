"""
Pytest configuration and fixtures for Smaak tests.
"""

import os
from unittest.mock import MagicMock

import pytest

# Set test environment before importing smaak modules
os.environ["SMAAK_ENV"] = "development"
os.environ["SMAAK_CATALOG_SOURCE"] = "static"
os.environ.pop("SMAAK_CATALOG_PATH", None)
os.environ.pop("SMAAK_STRICT_INGREDIENTS", None)

from smaak.analysis import CompositionAnalyzer  # noqa: E402
from smaak.catalog import CatalogData, IngredientCatalog, reset_catalog  # noqa: E402
from smaak.models import (  # noqa: E402
    FlavorProfile,
    Ingredient,
    IngredientRole,
    MoleculeType,
    MouthfeelCategory,
    TextureCategory,
)


@pytest.fixture(autouse=True)
def _fresh_default_catalog():
    """Each test starts without a cached default catalog."""
    reset_catalog()
    yield
    reset_catalog()


@pytest.fixture(scope="session")
def catalog() -> IngredientCatalog:
    """The packaged static catalog."""
    return IngredientCatalog()


@pytest.fixture
def analyzer(catalog) -> CompositionAnalyzer:
    return CompositionAnalyzer(catalog=catalog, max_suggestions=8, suggestions_per_element=3, strict=False)


@pytest.fixture
def mini_ingredients() -> list[Ingredient]:
    """A handful of hand-built ingredients for isolated tests."""
    return [
        Ingredient(
            id="t-rice",
            name="rice",
            role=IngredientRole.CARRIER,
            molecule_type=MoleculeType.CARBOHYDRATE,
            flavor_profile=FlavorProfile(sweetness=0.1),
            textures=[TextureCategory.SOFT],
            mouthfeel=MouthfeelCategory.DRY,
            aroma_categories=["floral"],
        ),
        Ingredient(
            id="t-soy",
            name="soy sauce",
            aliases=["shoyu"],
            role=IngredientRole.ACCENT,
            molecule_type=MoleculeType.WATER,
            flavor_profile=FlavorProfile(saltiness=0.9, umami=0.8),
            mouthfeel=MouthfeelCategory.ASTRINGENT,
            aroma_categories=["fermented"],
        ),
        Ingredient(
            id="t-lime",
            name="lime",
            role=IngredientRole.FINISHING,
            molecule_type=MoleculeType.WATER,
            flavor_profile=FlavorProfile(sourness=0.9),
            mouthfeel=MouthfeelCategory.ASTRINGENT,
            aroma_categories=["citrus"],
        ),
        Ingredient(
            id="t-peanut",
            name="peanuts",
            role=IngredientRole.FINISHING,
            molecule_type=MoleculeType.FAT,
            flavor_profile=FlavorProfile(umami=0.2),
            textures=[TextureCategory.CRUNCHY],
            mouthfeel=MouthfeelCategory.DRY,
            aroma_categories=["roasted", "nutty"],
        ),
    ]


@pytest.fixture
def mini_catalog(mini_ingredients) -> IngredientCatalog:
    return IngredientCatalog.from_data(CatalogData(ingredients=mini_ingredients))


@pytest.fixture
def mock_supabase():
    """Mock Supabase client returning rows per table."""

    def build(tables: dict[str, list[dict]]):
        client = MagicMock()

        def table(name):
            mock_table = MagicMock()
            mock_table.select.return_value = mock_table
            mock_table.order.return_value = mock_table
            mock_table.eq.return_value = mock_table
            mock_table.upsert.return_value = mock_table
            mock_table.execute.return_value = MagicMock(data=tables.get(name, []))
            return mock_table

        client.table.side_effect = table
        return client

    return build
