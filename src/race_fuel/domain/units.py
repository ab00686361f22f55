"""Nutrient quantity units."""

from enum import StrEnum

from race_fuel.domain.errors import UnitConversionError

_MASS_IN_MCG = {
    "g": 1_000_000.0,
    "mg": 1_000.0,
    "mcg": 1.0,
}


class Unit(StrEnum):
    """Known units for nutrient quantities."""

    G = "g"
    MG = "mg"
    MCG = "mcg"
    ML = "ml"

    @classmethod
    def parse(cls, raw: str) -> "Unit":
        """Parse a unit string, accepting the common micro-gram spellings."""
        cleaned = raw.strip().lower()
        if cleaned in {"µg", "ug"}:
            cleaned = "mcg"
        return cls(cleaned)

    @property
    def is_mass(self) -> bool:
        return self.value in _MASS_IN_MCG


def convert_quantity(quantity: float, source: Unit, target: Unit) -> float:
    """Convert a quantity between units; only mass units interconvert."""
    if source == target:
        return quantity
    if not (source.is_mass and target.is_mass):
        raise UnitConversionError(f"Cannot convert {source} to {target}")
    return quantity * _MASS_IN_MCG[source.value] / _MASS_IN_MCG[target.value]


def units_compatible(first: Unit, second: Unit) -> bool:
    """Whether quantities in the two units can be summed after conversion."""
    return first == second or (first.is_mass and second.is_mass)
