"""
Smaak - Cooking Method Models.

A CookingEffect describes how one cooking method transforms one ingredient:
flavor deltas, aroma and texture changes, and the chemistry behind them.
"""

from typing import Literal

from pydantic import BaseModel, Field

from smaak.tools.normalize import normalize_method_name


class CookingMethod(BaseModel):
    """A cooking method from the cooking_methods table."""

    id: str
    name: str
    name_nl: str | None = None
    description: str | None = None
    heat_type: str | None = None  # dry, moist, fat, smoke, acid, none
    temperature_range_min: int | None = None
    temperature_range_max: int | None = None

    @property
    def key(self) -> str:
        """Normalized name used for lookups."""
        return normalize_method_name(self.name)

    @property
    def is_raw(self) -> bool:
        return self.key == "raw"


class FlavorDelta(BaseModel):
    """Change to a flavor profile. Values may be negative."""

    sweetness: float = 0.0
    saltiness: float = 0.0
    sourness: float = 0.0
    bitterness: float = 0.0
    umami: float = 0.0


class CookingEffect(BaseModel):
    """How a cooking method transforms an ingredient."""

    ingredient_id: str | None = None  # None for general molecule-type rules
    cooking_method: CookingMethod
    flavor_delta: FlavorDelta | None = None
    aroma_intensity_change: float = 0.0
    aroma_categories_added: list[str] = Field(default_factory=list)
    aroma_categories_removed: list[str] = Field(default_factory=list)
    texture_categories_added: list[str] = Field(default_factory=list)
    texture_categories_removed: list[str] = Field(default_factory=list)
    mouthfeel_change: str | None = None
    # Shifts of the sensory profile (tight, coating, dry, fresh-to-ripe character)
    tight_delta: float = 0.0
    coating_delta: float = 0.0
    dry_delta: float = 0.0
    character_delta: float = 0.0
    maillard_contribution: float = Field(default=0.0, ge=0.0, le=1.0)
    caramelization_contribution: float = Field(default=0.0, ge=0.0, le=1.0)
    moisture_loss_pct: float | None = None
    optimal_temperature: int | None = None
    optimal_time_min: int | None = None
    scientific_source: str | None = None
    confidence_level: Literal["low", "medium", "high"] = "medium"

    @property
    def confidence_rank(self) -> int:
        return {"low": 0, "medium": 1, "high": 2}[self.confidence_level]
