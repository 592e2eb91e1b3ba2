"""
Smaak - Ingredient Models.

Culinary properties used by composition analysis. Values follow the
ingredient ontology shipped in smaak/catalog/data/ingredients.json and the
`ingredients` table of the backend.
"""

from enum import Enum

from pydantic import BaseModel, Field, computed_field, field_validator


# =============================================================================
# Enumerations
# =============================================================================


class IngredientRole(str, Enum):
    """The role an ingredient plays in a dish."""

    CARRIER = "carrier"        # Main element (protein, starch, featured vegetable)
    SUPPORTING = "supporting"  # Complements the carrier
    ACCENT = "accent"          # Small amounts, specific flavor notes
    FINISHING = "finishing"    # Freshness, color or texture at the end


class MoleculeType(str, Enum):
    """Dominant macro-molecule of an ingredient."""

    WATER = "water"
    FAT = "fat"
    CARBOHYDRATE = "carbohydrate"
    PROTEIN = "protein"
    MIXED = "mixed"


class TextureCategory(str, Enum):
    CRISPY = "crispy"
    CREAMY = "creamy"
    TENDER = "tender"
    CHEWY = "chewy"
    SILKY = "silky"
    CRUNCHY = "crunchy"
    SOFT = "soft"
    FIRM = "firm"


class MouthfeelCategory(str, Enum):
    ASTRINGENT = "astringent"  # Drying, puckering
    COATING = "coating"        # Smooth, lingering
    DRY = "dry"                # Absorbs moisture
    REFRESHING = "refreshing"  # Cooling, hydrating
    RICH = "rich"              # Full, satisfying


# Aroma categories that read as "fresh" on the plate
FRESH_AROMAS = frozenset({"green", "fresh", "citrus", "herbal"})

TASTES = ("sweet", "salty", "sour", "bitter", "umami")

# A taste below this intensity does not count as present
TASTE_PRESENCE_THRESHOLD = 0.1
# No single taste may sit this far above the mean
BALANCE_MAX_DEVIATION = 0.4
MIN_PRESENT_TASTES = 2


# =============================================================================
# Flavor Profile
# =============================================================================


class FlavorProfile(BaseModel):
    """Gustatory scores, each 0.0 to 1.0."""

    sweetness: float = Field(default=0.0, ge=0.0, le=1.0)
    saltiness: float = Field(default=0.0, ge=0.0, le=1.0)
    sourness: float = Field(default=0.0, ge=0.0, le=1.0)
    bitterness: float = Field(default=0.0, ge=0.0, le=1.0)
    umami: float = Field(default=0.0, ge=0.0, le=1.0)

    def scores(self) -> dict[str, float]:
        """Taste name -> intensity, in canonical taste order."""
        return dict(zip(TASTES, (
            self.sweetness,
            self.saltiness,
            self.sourness,
            self.bitterness,
            self.umami,
        )))

    @property
    def dominant_taste(self) -> str:
        scores = self.scores()
        # max() keeps the first of equal values, so ties resolve in TASTES order
        return max(scores, key=lambda taste: scores[taste])

    @property
    def present_tastes(self) -> list[str]:
        return [t for t, v in self.scores().items() if v >= TASTE_PRESENCE_THRESHOLD]

    @computed_field
    @property
    def is_balanced(self) -> bool:
        """
        True when the profile has at least two present tastes and no single
        taste more than 0.4 above the average.
        """
        if len(self.present_tastes) < MIN_PRESENT_TASTES:
            return False
        values = list(self.scores().values())
        avg = sum(values) / len(values)
        return max(values) - avg < BALANCE_MAX_DEVIATION

    @classmethod
    def average(cls, profiles: list["FlavorProfile"]) -> "FlavorProfile":
        """Arithmetic mean of profiles, rounded to 4 decimals."""
        if not profiles:
            return cls()
        n = len(profiles)
        return cls(
            sweetness=round(sum(p.sweetness for p in profiles) / n, 4),
            saltiness=round(sum(p.saltiness for p in profiles) / n, 4),
            sourness=round(sum(p.sourness for p in profiles) / n, 4),
            bitterness=round(sum(p.bitterness for p in profiles) / n, 4),
            umami=round(sum(p.umami for p in profiles) / n, 4),
        )


# =============================================================================
# Ingredient
# =============================================================================


class Ingredient(BaseModel):
    """
    Ingredient with culinary intelligence properties.

    The provides_* flags are derived and serialized with the model so API
    clients can badge ingredients without re-implementing the thresholds.
    """

    id: str
    name: str
    name_nl: str | None = None
    aliases: list[str] = Field(default_factory=list)
    description: str | None = None
    category: str | None = None
    image_url: str | None = None

    role: IngredientRole = IngredientRole.SUPPORTING
    molecule_type: MoleculeType = MoleculeType.MIXED
    flavor_profile: FlavorProfile = Field(default_factory=FlavorProfile)
    textures: list[TextureCategory] = Field(default_factory=list)
    mouthfeel: MouthfeelCategory = MouthfeelCategory.REFRESHING
    aroma_intensity: float = Field(default=0.5, ge=0.0, le=1.0)
    aroma_categories: list[str] = Field(default_factory=list)

    season: str | None = None
    pairing_affinities: list[str] = Field(default_factory=list)
    preparation_methods: list[str] = Field(default_factory=list)
    culinary_uses: list[str] = Field(default_factory=list)

    @field_validator("aroma_categories", "aliases", mode="before")
    @classmethod
    def normalize_labels(cls, v: list[str] | None) -> list[str]:
        """Lowercase, strip and de-duplicate while keeping order."""
        if not v:
            return []
        seen: list[str] = []
        for label in v:
            if not label or not str(label).strip():
                continue
            label = str(label).lower().strip()
            if label not in seen:
                seen.append(label)
        return seen

    @field_validator("textures", mode="before")
    @classmethod
    def dedupe_textures(cls, v: list | None) -> list:
        if not v:
            return []
        result = []
        for t in v:
            if t not in result:
                result.append(t)
        return result

    @computed_field
    @property
    def can_be_carrier(self) -> bool:
        return (
            self.role == IngredientRole.CARRIER
            or self.molecule_type in (MoleculeType.PROTEIN, MoleculeType.CARBOHYDRATE)
        )

    @computed_field
    @property
    def provides_umami(self) -> bool:
        return self.flavor_profile.umami >= 0.5

    @computed_field
    @property
    def provides_acidity(self) -> bool:
        return self.flavor_profile.sourness >= 0.5

    @computed_field
    @property
    def provides_crunch(self) -> bool:
        return TextureCategory.CRISPY in self.textures or TextureCategory.CRUNCHY in self.textures

    @computed_field
    @property
    def provides_freshness(self) -> bool:
        return self.role == IngredientRole.FINISHING or bool(FRESH_AROMAS & set(self.aroma_categories))

    @computed_field
    @property
    def provides_richness(self) -> bool:
        return self.molecule_type == MoleculeType.FAT or self.mouthfeel in (
            MouthfeelCategory.RICH,
            MouthfeelCategory.COATING,
        )

    def all_names(self) -> list[str]:
        """Name, localized name and aliases, lowercased."""
        names = [self.name.lower()]
        if self.name_nl:
            names.append(self.name_nl.lower())
        names.extend(self.aliases)
        return names

    def __repr__(self) -> str:
        return f"Ingredient({self.name}, role={self.role.value}, molecule={self.molecule_type.value})"
