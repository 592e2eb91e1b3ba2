"""
Smaak - Ingredient composition analysis.

Scores a set of ingredients the way a chef would look at a plate:
- Flavor balance (sweet, salty, sour, bitter, umami)
- Missing elements (carrier, acid, crunch, freshness, ...)
- Ranked ingredient suggestions to complete the dish
"""

__version__ = "0.1.0"
