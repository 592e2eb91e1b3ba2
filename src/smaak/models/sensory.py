"""
Smaak - Sensory Profile Models.

Two universal flavor factors besides taste:
- Mouthfeel balance: tight (astringent, acid, salt), coating (fat, cream),
  dry (starch, crackers)
- Flavor richness: intensity (volume) and character (fresh 0.0 <-> ripe 1.0)
"""

from pydantic import BaseModel, Field, computed_field

MOUTHFEEL_MAX_DEVIATION = 0.3


class MouthfeelBalance(BaseModel):
    tight: float = Field(default=0.0, ge=0.0, le=1.0)
    coating: float = Field(default=0.0, ge=0.0, le=1.0)
    dry: float = Field(default=0.0, ge=0.0, le=1.0)

    @computed_field
    @property
    def dominant(self) -> str:
        if self.tight >= self.coating and self.tight >= self.dry:
            return "tight"
        if self.coating >= self.dry:
            return "coating"
        return "dry"

    @computed_field
    @property
    def is_balanced(self) -> bool:
        """No single component more than 0.3 above the average."""
        values = [self.tight, self.coating, self.dry]
        total = sum(values)
        if total == 0:
            return True
        return max(values) - total / len(values) < MOUTHFEEL_MAX_DEVIATION

    @property
    def tight_coating_ratio(self) -> float:
        if self.coating == 0:
            return 10.0 if self.tight > 0 else 0.0
        return self.tight / self.coating


class FlavorRichness(BaseModel):
    intensity: float = Field(default=0.0, ge=0.0, le=1.0)
    character: float = Field(default=0.5, ge=0.0, le=1.0)

    @computed_field
    @property
    def character_label(self) -> str:
        if self.character < 0.3:
            return "fresh"
        if self.character < 0.7:
            return "neutral"
        return "ripe"

    @property
    def intensity_label(self) -> str:
        if self.intensity > 0.7:
            return "intense"
        if self.intensity > 0.4:
            return "moderate"
        return "light"


class SensoryProfile(BaseModel):
    """Mouthfeel balance plus flavor richness of one ingredient or a whole dish."""

    mouthfeel: MouthfeelBalance = Field(default_factory=MouthfeelBalance)
    richness: FlavorRichness = Field(default_factory=FlavorRichness)

    @computed_field
    @property
    def description(self) -> str:
        return f"{self.richness.intensity_label}, {self.richness.character_label}, {self.mouthfeel.dominant}"
