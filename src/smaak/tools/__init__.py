"""Smaak - Text tools."""

from smaak.tools.normalize import composition_key, name_words, normalize_method_name, normalize_name

__all__ = ["composition_key", "name_words", "normalize_method_name", "normalize_name"]
