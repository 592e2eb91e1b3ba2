"""
Smaak - Data Models.

Pydantic models for ingredients, cooking effects, sensory profiles and
composition analysis results.
"""

from smaak.models.analysis import (
    CompositionAnalysis,
    ElementType,
    IngredientSuggestion,
    MissingElement,
    MissingSensoryElement,
    Priority,
    SensoryBalance,
    SensoryElementType,
    TextureAnalysis,
)
from smaak.models.cooking import CookingEffect, CookingMethod, FlavorDelta
from smaak.models.entities import (
    FlavorProfile,
    Ingredient,
    IngredientRole,
    MoleculeType,
    MouthfeelCategory,
    TextureCategory,
)
from smaak.models.sensory import FlavorRichness, MouthfeelBalance, SensoryProfile

__all__ = [
    "CompositionAnalysis",
    "CookingEffect",
    "CookingMethod",
    "ElementType",
    "FlavorDelta",
    "FlavorProfile",
    "FlavorRichness",
    "Ingredient",
    "IngredientRole",
    "IngredientSuggestion",
    "MissingElement",
    "MissingSensoryElement",
    "MoleculeType",
    "MouthfeelBalance",
    "MouthfeelCategory",
    "Priority",
    "SensoryBalance",
    "SensoryElementType",
    "SensoryProfile",
    "TextureAnalysis",
    "TextureCategory",
]
