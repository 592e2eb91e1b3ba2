"""
Smaak - Cooking.

Cooking-method effects on ingredients and preparation guidance.
"""

from smaak.cooking.effects import (
    apply_cooking_effect,
    general_cooking_effect,
    method_family,
    resolve_cooking_effect,
)
from smaak.cooking.guidance import cooking_guidance

__all__ = [
    "apply_cooking_effect",
    "cooking_guidance",
    "general_cooking_effect",
    "method_family",
    "resolve_cooking_effect",
]
