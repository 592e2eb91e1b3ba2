"""
Smaak - Name Normalization.

Utilities for normalizing user input for consistent matching.
"""

import re

_WORD_SPLIT = re.compile(r"[\s,\-]+")


def normalize_name(name: str) -> str:
    """
    Normalize a name for consistent matching.

    Operations:
    - Lowercase
    - Strip leading/trailing whitespace
    - Collapse multiple spaces to single space

    Examples:
        normalize_name("  Soy   Sauce ") -> "soy sauce"
        normalize_name("TOMATO") -> "tomato"
    """
    return " ".join(name.lower().strip().split())


def name_words(name: str, min_length: int = 3) -> list[str]:
    """
    Split a name into matchable words.

    Words shorter than min_length are dropped ("of", "a", ...).

    Examples:
        name_words("chicken breast") -> ["chicken", "breast"]
        name_words("red-wine vinegar") -> ["red", "wine", "vinegar"]
    """
    words = _WORD_SPLIT.split(normalize_name(name))
    return [w for w in words if len(w) >= min_length]


def composition_key(names: list[str], cooking_methods: dict[str, str] | None = None) -> str:
    """
    Order-independent key for an ingredient selection.

    Same selection in any order (and any casing) gives the same key.
    """
    key = "|".join(sorted({normalize_name(n) for n in names if n and n.strip()}))
    if cooking_methods:
        methods = sorted(
            f"{normalize_name(k)}={normalize_name(v)}"
            for k, v in cooking_methods.items()
            if v and v.strip()
        )
        if methods:
            key += "#" + ",".join(methods)
    return key


def normalize_method_name(name: str) -> str:
    """
    Normalize a cooking method name; hyphens count as spaces.

    Examples:
        normalize_method_name("Pan-fry") -> "pan fry"
        normalize_method_name("deep  fry") -> "deep fry"
    """
    return normalize_name(name.replace("-", " "))
