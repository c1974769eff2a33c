"""Ability scores, modifiers and racial adjustments.

Modifiers follow the d20 rule (score - 10) // 2. Racial adjustments are read
from the rulebook; an unknown race leaves the scores untouched.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from .model import AbilityBlock

if TYPE_CHECKING:
    from d20stats.rules.models import RaceDefinition, Rulebook


class AttributeName(StrEnum):
    """Core character attributes."""

    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    CONSTITUTION = "constitution"
    INTELLIGENCE = "intelligence"
    WISDOM = "wisdom"
    CHARISMA = "charisma"


# Constant attribute names for easy import
ATTRIBUTE_NAMES = [attr.value for attr in AttributeName]

# Age category thresholds in ascending order, as keyed in race data
AGE_CATEGORIES = ["adulthood", "middle_age", "old", "venerable"]


@dataclass(frozen=True)
class AttributeModifiers:
    """Container for all attribute modifiers."""

    strength: int
    dexterity: int
    constitution: int
    intelligence: int
    wisdom: int
    charisma: int

    def get(self, name: str, default: int = 0) -> int:
        """Get a modifier by attribute name."""
        if name in ATTRIBUTE_NAMES:
            return getattr(self, name)
        return default


def get_modifier(value: Any) -> int:
    """Calculate D&D-style attribute modifier.

    Args:
        value: The attribute value (typically 3-18, unbounded at epic levels)

    Returns:
        The modifier: (value - 10) // 2, or 0 for non-numeric values and scores below 1

    Examples:
        >>> get_modifier(10)
        0
        >>> get_modifier(18)
        4
        >>> get_modifier(8)
        -1
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return 0
    return (value - 10) // 2


def apply_racial_adjustments(
    abilities: AbilityBlock, race_name: str, rulebook: "Rulebook"
) -> AbilityBlock:
    """Apply a race's ability adjustments.

    Args:
        abilities: Rolled ability scores
        race_name: Race name, matched exactly (case-sensitive)
        rulebook: Rulebook providing race definitions

    Returns:
        A new AbilityBlock; unchanged scores if the race is unknown
    """
    race = rulebook.race(race_name)
    if race is None or not race.ability_adjustments:
        return abilities.model_copy()

    adjusted = abilities.model_dump()
    for attr_name, adjustment in race.ability_adjustments.items():
        if attr_name in adjusted:
            adjusted[attr_name] += adjustment

    return AbilityBlock(**adjusted)


def calculate_modifiers(abilities: AbilityBlock) -> AttributeModifiers:
    """Calculate all attribute modifiers for a set of scores.

    Args:
        abilities: The ability scores

    Returns:
        AttributeModifiers with all calculated modifiers
    """
    return AttributeModifiers(
        strength=get_modifier(abilities.strength),
        dexterity=get_modifier(abilities.dexterity),
        constitution=get_modifier(abilities.constitution),
        intelligence=get_modifier(abilities.intelligence),
        wisdom=get_modifier(abilities.wisdom),
        charisma=get_modifier(abilities.charisma),
    )


def get_age_category(race: "RaceDefinition | None", age: int | None) -> str | None:
    """Get the age category for a character.

    Args:
        race: Race definition, or None for an unknown race
        age: Age in years

    Returns:
        "young" below adulthood, otherwise the highest reached category
        (adulthood, middle_age, old, venerable); None when age or thresholds are missing
    """
    if race is None or age is None or not race.age_categories:
        return None

    category = "young"
    for name in AGE_CATEGORIES:
        threshold = race.age_categories.get(name)
        if threshold is not None and age >= threshold:
            category = name
    return category
