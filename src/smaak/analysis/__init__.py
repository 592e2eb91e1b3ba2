"""
Smaak - Composition Analysis.

Usage:
    from smaak.analysis import analyze_composition

    analysis = analyze_composition(["chicken", "lemon", "basil"], {"chicken": "Roast"})
"""

from smaak.analysis.composer import CompositionAnalyzer, analyze_composition
from smaak.analysis.errors import (
    CompositionError,
    EmptyCompositionError,
    UnknownCookingMethodError,
    UnknownIngredientError,
)
from smaak.analysis.sensory import (
    analyze_sensory_balance,
    combined_sensory_profile,
    ingredient_sensory_profile,
)

__all__ = [
    "CompositionAnalyzer",
    "CompositionError",
    "EmptyCompositionError",
    "UnknownCookingMethodError",
    "UnknownIngredientError",
    "analyze_composition",
    "analyze_sensory_balance",
    "combined_sensory_profile",
    "ingredient_sensory_profile",
]
