"""Macro value records."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroValues:
    """Macronutrient amounts without a weight component."""

    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    kcal: float = 0.0
    fiber: float = 0.0

    def scaled(self, factor: float) -> "MacroValues":
        """Return every macro multiplied by a factor."""
        return MacroValues(
            protein=self.protein * factor,
            carbs=self.carbs * factor,
            fat=self.fat * factor,
            kcal=self.kcal * factor,
            fiber=self.fiber * factor,
        )

    def plus(self, other: "MacroValues") -> "MacroValues":
        """Return the element-wise sum of two macro records."""
        return MacroValues(
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
            kcal=self.kcal + other.kcal,
            fiber=self.fiber + other.fiber,
        )


@dataclass(frozen=True)
class MacroTotals:
    """Absolute macros for an amount of food, including its weight in grams."""

    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    kcal: float = 0.0
    fiber: float = 0.0
    weight: float = 0.0

    @property
    def macros(self) -> MacroValues:
        """Macros without the weight field."""
        return MacroValues(
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            kcal=self.kcal,
            fiber=self.fiber,
        )


@dataclass(frozen=True)
class MacroTargets:
    """Daily macro targets configured by a user."""

    kcal: float
    protein: float
    carbs: float
    fat: float
    fiber: float
