"""
Smaak - Analysis errors.

All are ValueErrors: they describe bad input, not a broken service.
"""


class CompositionError(ValueError):
    """Base class for invalid composition input."""


class EmptyCompositionError(CompositionError):
    def __init__(self, message: str = "At least one ingredient name is required"):
        super().__init__(message)


class UnknownIngredientError(CompositionError):
    """Raised in strict mode when names do not resolve to catalog ingredients."""

    def __init__(self, names: list[str]):
        self.names = list(names)
        super().__init__(f"Unknown ingredient(s): {', '.join(self.names)}")


class UnknownCookingMethodError(CompositionError):
    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Unknown cooking method: {method}")
