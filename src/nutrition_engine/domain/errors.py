"""Domain exceptions for the nutrition engine."""


class NutritionEngineError(Exception):
    """Base exception for nutrition engine errors."""


class ValidationError(NutritionEngineError):
    """Raised when caller-supplied data is missing or out of range."""


class InvalidQuantityError(ValidationError):
    """Raised when a gram quantity is zero or negative."""

    def __init__(self, quantity_grams: float):
        super().__init__(f"Quantity must be greater than 0 grams, got {quantity_grams}")
        self.quantity_grams = quantity_grams


class UnsupportedModelError(NutritionEngineError):
    """Raised when a diet model name is not registered."""

    def __init__(self, model_name: str, supported: list[str]):
        super().__init__(
            f"Unsupported diet model: {model_name}. "
            f"Supported models: {', '.join(supported)}"
        )
        self.model_name = model_name
        self.supported = supported


class EmptyRecipeError(NutritionEngineError):
    """Raised when a recipe has no consumable weight."""

    def __init__(self, recipe_id: object | None = None):
        super().__init__(f"Recipe {recipe_id} has a total weight of 0 grams")
        self.recipe_id = recipe_id


class MissingIngredientError(NutritionEngineError):
    """Raised when a recipe ingredient's food cannot be resolved."""

    def __init__(self, food_id: object):
        super().__init__(f"Ingredient food {food_id} not found")
        self.food_id = food_id


class NotFoundError(NutritionEngineError):
    """Raised when a goal, food, recipe or entry lookup finds nothing."""
