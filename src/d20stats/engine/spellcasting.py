"""Spells per day, including bonus spells from a high casting ability."""

from collections.abc import Iterable

from d20stats.character.attributes import AttributeModifiers
from d20stats.character.model import ClassLevel
from d20stats.rules.models import Rulebook, SpellcastingDescriptor

from .multiclass import known_classes

MAX_SPELL_LEVEL = 9


def bonus_spells(ability_modifier: int) -> tuple[int, ...]:
    """
    Calculate bonus spells granted by a casting ability modifier.

    Level-0 spells never receive bonus slots. For spell levels 1-9 the bonus is
    max(0, (modifier - spell_level + 4) // 4).

    Args:
        ability_modifier: Modifier of the class's casting ability

    Returns:
        Tuple of 10 entries indexed by spell level

    Examples:
        modifier 4, spell level 1 -> 1
        modifier 4, spell level 5 -> 0
    """
    bonus = [0]
    for spell_level in range(1, MAX_SPELL_LEVEL + 1):
        bonus.append(max(0, (ability_modifier - spell_level + 4) // 4))
    return tuple(bonus)


def spells_per_day(
    descriptor: SpellcastingDescriptor, class_level: int, ability_modifier: int
) -> tuple[int, ...]:
    """
    Calculate spells per day for one class.

    Bonus spells are only added where the base table grants at least one slot.

    Args:
        descriptor: The class's spellcasting descriptor
        class_level: Level in the class
        ability_modifier: Modifier of the casting ability

    Returns:
        Spells per day indexed by spell level (empty when the class has no slots yet)
    """
    base = descriptor.row_for_level(class_level)
    bonus = bonus_spells(ability_modifier)

    total = list(base)
    for spell_level in range(1, min(len(total), len(bonus))):
        if total[spell_level] > 0:
            total[spell_level] += bonus[spell_level]

    return tuple(total)


def calculate_spells_per_day(
    classes: Iterable[ClassLevel], modifiers: AttributeModifiers, rulebook: Rulebook
) -> dict[str, tuple[int, ...]]:
    """
    Calculate spells per day for every spellcasting class.

    Classes without a spellcasting descriptor get no entry.

    Args:
        classes: Class levels held
        modifiers: Ability modifiers
        rulebook: Rulebook with class definitions

    Returns:
        Dictionary mapping class name to spells per day
    """
    result: dict[str, tuple[int, ...]] = {}

    for class_level, class_def in known_classes(classes, rulebook):
        descriptor = class_def.spellcasting
        if descriptor is None:
            continue
        result[class_level.class_name] = spells_per_day(
            descriptor, class_level.level, modifiers.get(descriptor.ability)
        )

    return result
