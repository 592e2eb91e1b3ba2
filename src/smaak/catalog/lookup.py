"""
Smaak - Ingredient Lookup.

Matches user-typed names to catalog ingredients in three tiers:
1. Exact match on name, localized name or alias
2. Word match ("grilled chicken" -> chicken, "smoked paprika powder" -> smoked paprika)
3. Partial substring match in either direction

Every tier is deterministic: ties break on shorter name, then alphabetically.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Literal

from smaak.models.entities import Ingredient
from smaak.tools.normalize import name_words, normalize_name

logger = logging.getLogger(__name__)

CONFIDENCE = {
    "exact": 1.0,
    "word": 0.8,
    "partial": 0.6,
}

# Partial matching on very short strings matches nearly everything
MIN_PARTIAL_LENGTH = 3


@dataclass
class IngredientMatch:
    """Result of an ingredient lookup."""

    ingredient: Ingredient
    match_type: Literal["exact", "word", "partial"]
    confidence: float  # 0.0 to 1.0

    def __repr__(self) -> str:
        return f"IngredientMatch({self.ingredient.name}, type={self.match_type}, conf={self.confidence:.2f})"


def build_exact_index(ingredients: Iterable[Ingredient]) -> dict[str, Ingredient]:
    """
    Map every normalized name, localized name and alias to its ingredient.

    The first ingredient (by name) wins when two share an alias.
    """
    index: dict[str, Ingredient] = {}
    for ingredient in sorted(ingredients, key=lambda i: (i.name.lower(), i.id)):
        for label in ingredient.all_names():
            index.setdefault(normalize_name(label), ingredient)
    return index


def _tie_break(ingredient: Ingredient) -> tuple[int, str]:
    return (len(ingredient.name), ingredient.name.lower())


def lookup_exact(name: str, index: dict[str, Ingredient]) -> IngredientMatch | None:
    ingredient = index.get(normalize_name(name))
    if ingredient is None:
        return None
    return IngredientMatch(ingredient=ingredient, match_type="exact", confidence=CONFIDENCE["exact"])


def lookup_word(name: str, ingredients: Iterable[Ingredient]) -> IngredientMatch | None:
    """
    Word-based match.

    An ingredient whose full name is contained word-for-word in the input
    beats one that only shares some words ("red onion" -> onion, not
    pickled red onion).
    """
    words = set(name_words(name))
    if not words:
        return None

    best: Ingredient | None = None
    best_key: tuple[int, int] = (0, 0)
    for ingredient in ingredients:
        full_len = 0
        overlap = 0
        for label in ingredient.all_names():
            label_words = name_words(label)
            if not label_words:
                continue
            if all(w in words for w in label_words):
                full_len = max(full_len, len(label_words))
            overlap = max(overlap, len(words.intersection(label_words)))
        key = (full_len, overlap)
        if key == (0, 0):
            continue
        if best is None or key > best_key or (key == best_key and _tie_break(ingredient) < _tie_break(best)):
            best, best_key = ingredient, key

    if best is None:
        return None
    return IngredientMatch(ingredient=best, match_type="word", confidence=CONFIDENCE["word"])


def lookup_partial(name: str, ingredients: Iterable[Ingredient]) -> IngredientMatch | None:
    """Substring match in either direction; longest matching label wins."""
    query = normalize_name(name)
    if len(query) < MIN_PARTIAL_LENGTH:
        return None

    best: Ingredient | None = None
    best_len = 0
    for ingredient in ingredients:
        for label in ingredient.all_names():
            if len(label) < MIN_PARTIAL_LENGTH:
                continue
            if label in query or query in label:
                matched = min(len(label), len(query))
                if (
                    best is None
                    or matched > best_len
                    or (matched == best_len and _tie_break(ingredient) < _tie_break(best))
                ):
                    best, best_len = ingredient, matched

    if best is None:
        return None
    return IngredientMatch(ingredient=best, match_type="partial", confidence=CONFIDENCE["partial"])


def lookup_ingredient(
    name: str,
    ingredients: list[Ingredient],
    index: dict[str, Ingredient] | None = None,
) -> IngredientMatch | None:
    """
    Find the best catalog match for a user-typed ingredient name.

    Args:
        name: Raw ingredient name
        ingredients: Catalog ingredients
        index: Prebuilt exact index (built on the fly when omitted)

    Returns:
        IngredientMatch or None if no tier matched
    """
    if not name or not name.strip():
        return None

    if index is None:
        index = build_exact_index(ingredients)

    match = lookup_exact(name, index)
    if match is None:
        match = lookup_word(name, ingredients)
    if match is None:
        match = lookup_partial(name, ingredients)

    if match is None:
        logger.debug(f"No catalog match for ingredient: {name!r}")
    else:
        logger.debug(f"Resolved {name!r} -> {match!r}")
    return match
