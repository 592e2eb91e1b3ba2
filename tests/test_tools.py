"""
Tests for Smaak name utilities.

Tests cover:
- Name normalization
- Word splitting
- Order-independent composition keys
"""

from smaak.tools.normalize import composition_key, name_words, normalize_method_name, normalize_name


class TestNormalization:
    """Test name normalization utilities."""

    def test_normalize_name_lowercase(self):
        """Should lowercase names."""
        assert normalize_name("Chicken Thighs") == "chicken thighs"
        assert normalize_name("TOMATO") == "tomato"

    def test_normalize_name_strips_whitespace(self):
        """Should strip leading/trailing whitespace."""
        assert normalize_name("  milk  ") == "milk"
        assert normalize_name("\tchicken\n") == "chicken"

    def test_normalize_name_collapses_spaces(self):
        """Should collapse multiple spaces."""
        assert normalize_name("soy   sauce") == "soy sauce"

    def test_name_words_drops_short_words(self):
        """Words under three letters are dropped."""
        assert name_words("leg of lamb") == ["leg", "lamb"]

    def test_name_words_splits_on_hyphens_and_commas(self):
        assert name_words("Red-wine vinegar, aged") == ["red", "wine", "vinegar", "aged"]

    def test_method_name_folds_hyphens(self):
        """Hyphenated and spaced method names normalize alike."""
        assert normalize_method_name("Pan-fry") == "pan fry"
        assert normalize_method_name(" deep  Fry ") == "deep fry"
        assert normalize_method_name("Roast") == "roast"


class TestCompositionKey:
    """Test composition cache keys."""

    def test_order_independent(self):
        """Same names in any order and casing give the same key."""
        assert composition_key(["Lemon", "chicken"]) == composition_key(["chicken", " lemon "])

    def test_ignores_blank_names(self):
        assert composition_key(["chicken", "", "  "]) == "chicken"

    def test_includes_methods(self):
        """Cooking methods change the key."""
        plain = composition_key(["chicken", "lemon"])
        roasted = composition_key(["chicken", "lemon"], {"Chicken": "Roast"})
        assert roasted == "chicken|lemon#chicken=roast"
        assert plain != roasted
