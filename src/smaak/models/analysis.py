"""
Smaak - Composition Analysis Models.

Output of analyze_composition(). Everything here is rebuilt from scratch on
every call; nothing is carried over between analyses.
"""

from enum import Enum

from pydantic import BaseModel, Field, computed_field

from smaak.models.entities import FlavorProfile, Ingredient, MouthfeelCategory, TextureCategory
from smaak.models.sensory import SensoryProfile


class ElementType(str, Enum):
    """Elements a complete dish needs."""

    CARRIER = "carrier"
    UMAMI = "umami"
    ACID = "acid"
    TEXTURE = "texture"
    CRUNCH = "crunch"
    FRESHNESS = "freshness"
    RICHNESS = "richness"
    AROMA = "aroma"
    MOUTHFEEL = "mouthfeel"
    COOKING_METHOD = "cooking_method"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort key: high first."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


class TextureAnalysis(BaseModel):
    """Texture and mouthfeel diversity of a composition."""

    textures: list[TextureCategory] = Field(default_factory=list)
    mouthfeels: list[MouthfeelCategory] = Field(default_factory=list)
    has_crispy_creamy: bool = False
    has_variety: bool = False
    score: float = Field(default=0.0, ge=0.0, le=1.0)


class MissingElement(BaseModel):
    type: ElementType
    reason: str
    priority: Priority


class SensoryElementType(str, Enum):
    """Sides of the sensory balance a dish can lack."""

    TIGHT = "tight"
    COATING = "coating"
    DRY = "dry"
    FRESH = "fresh"
    RIPE = "ripe"
    INTENSITY = "intensity"


class MissingSensoryElement(BaseModel):
    type: SensoryElementType
    reason: str
    priority: Priority
    suggestion: str | None = None


class SensoryBalance(BaseModel):
    """Diagnosis of a combined sensory profile, with fixes for what is off."""

    is_balanced: bool = True
    tight_coating_ratio: float = Field(default=0.0, ge=0.0)
    character: float = Field(default=0.5, ge=0.0, le=1.0)
    missing_elements: list[MissingSensoryElement] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    description: str = ""


class IngredientSuggestion(BaseModel):
    ingredient: Ingredient
    reason: str
    missing_element: ElementType
    priority: Priority
    optimal_cooking_method: str | None = None


class CompositionAnalysis(BaseModel):
    """Full analysis of an ingredient selection."""

    ingredients: list[Ingredient] = Field(default_factory=list)
    flavor_profile: FlavorProfile = Field(default_factory=FlavorProfile)
    overall_score: int = Field(ge=0, le=100)
    carrier: Ingredient | None = None
    texture_variety: TextureAnalysis = Field(default_factory=TextureAnalysis)
    missing_elements: list[MissingElement] = Field(default_factory=list)
    suggestions: list[IngredientSuggestion] = Field(default_factory=list)
    sensory_profile: SensoryProfile = Field(default_factory=SensoryProfile)
    sensory_balance: SensoryBalance = Field(default_factory=SensoryBalance)
    unknown_ingredients: list[str] = Field(default_factory=list)
    cooking_methods: dict[str, str] = Field(default_factory=dict)  # ingredient id -> method
    cache_key: str = ""

    @computed_field
    @property
    def is_balanced(self) -> bool:
        return self.flavor_profile.is_balanced

    @property
    def missing_types(self) -> set[ElementType]:
        return {m.type for m in self.missing_elements}

    def is_missing(self, element: ElementType) -> bool:
        return element in self.missing_types
