"""Multiclass aggregation: BAB, saves, hit dice, skill points and XP penalty.

Each class contributes from its own level in its own progression; the
contributions are summed and never interact. Classes missing from the
rulebook contribute nothing.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from d20stats.character.model import ClassLevel
from d20stats.rules.models import ClassDefinition, RaceDefinition, Rulebook

from .progression import base_attack_for_level, save_for_level

# Penalty per class trailing the highest class by more than one level
MULTICLASS_PENALTY_PER_CLASS = 20  # percent


@dataclass(frozen=True)
class BaseSaves:
    """Base saving throw bonuses before ability modifiers."""

    fortitude: int
    reflex: int
    will: int


def known_classes(
    classes: Iterable[ClassLevel], rulebook: Rulebook
) -> list[tuple[ClassLevel, ClassDefinition]]:
    """Pair each class level with its definition, skipping unknown classes."""
    pairs = []
    for class_level in classes:
        class_def = rulebook.class_definition(class_level.class_name)
        if class_def is not None:
            pairs.append((class_level, class_def))
    return pairs


def total_level(classes: Iterable[ClassLevel]) -> int:
    """Total character level: the sum of all class levels."""
    return sum(class_level.level for class_level in classes)


def base_attack_bonus(classes: Iterable[ClassLevel], rulebook: Rulebook) -> int:
    """
    Sum the base attack bonus of every class.

    Args:
        classes: Class levels held
        rulebook: Rulebook with class definitions and tables

    Returns:
        Total base attack bonus (without epic bonus)
    """
    return sum(
        base_attack_for_level(class_def.base_attack, class_level.level, rulebook.tables)
        for class_level, class_def in known_classes(classes, rulebook)
    )


def base_saves(classes: Iterable[ClassLevel], rulebook: Rulebook) -> BaseSaves:
    """
    Sum the base saving throws of every class.

    Args:
        classes: Class levels held
        rulebook: Rulebook with class definitions and tables

    Returns:
        BaseSaves with the class contributions summed
    """
    fortitude = reflex = will = 0
    tables = rulebook.tables

    for class_level, class_def in known_classes(classes, rulebook):
        fortitude += save_for_level(class_def.fortitude, class_level.level, tables)
        reflex += save_for_level(class_def.reflex, class_level.level, tables)
        will += save_for_level(class_def.will, class_level.level, tables)

    return BaseSaves(fortitude=fortitude, reflex=reflex, will=will)


def hit_dice(classes: Iterable[ClassLevel], rulebook: Rulebook) -> dict[str, int]:
    """
    Count hit dice by die size.

    Returns:
        Dictionary like {"d10": 5, "d4": 2}, in order of first appearance
    """
    dice: dict[str, int] = {}
    for class_level, class_def in known_classes(classes, rulebook):
        key = f"d{class_def.hit_die}"
        dice[key] = dice.get(key, 0) + class_level.level
    return dice


def skill_points_for_level(
    class_def: ClassDefinition,
    int_modifier: int,
    race: RaceDefinition | None,
    first_level: bool = False,
) -> int:
    """
    Calculate skill points gained for one level in a class.

    Args:
        class_def: The class the level is taken in
        int_modifier: Intelligence modifier
        race: Race definition (bonus skill points per level), or None
        first_level: Whether this is the character's first level (x4)

    Returns:
        Skill points gained, at least 1 before the race bonus
    """
    skill_points = max(1, class_def.skill_points + int_modifier)

    if race is not None:
        skill_points += race.bonus_skill_points

    if first_level:
        skill_points *= 4

    return skill_points


def total_skill_points(
    classes: Iterable[ClassLevel],
    int_modifier: int,
    race: RaceDefinition | None,
    rulebook: Rulebook,
) -> int:
    """
    Sum skill points over every level; the first listed class holds the first level.

    Args:
        classes: Class levels in the order they were taken
        int_modifier: Intelligence modifier
        race: Race definition, or None
        rulebook: Rulebook with class definitions

    Returns:
        Total skill points
    """
    total = 0
    first_level_taken = False

    for class_level, class_def in known_classes(classes, rulebook):
        levels = class_level.level
        if not first_level_taken:
            total += skill_points_for_level(class_def, int_modifier, race, first_level=True)
            levels -= 1
            first_level_taken = True
        total += levels * skill_points_for_level(class_def, int_modifier, race)

    return total


def multiclass_xp_penalty(classes: list[ClassLevel], favored_class: str | None) -> float:
    """
    Calculate the multiclass experience penalty.

    The highest-level class and the favored class are exempt. Every other class
    more than one level behind the highest class costs 20%.

    Args:
        classes: Class levels held
        favored_class: The race's favored class, if any

    Returns:
        Penalty as a fraction between 0.0 and 1.0

    Example:
        Fighter 1 / Wizard 5 with no favored class match -> 0.2
    """
    if len(classes) <= 1:
        return 0.0

    ordered = sorted(classes, key=lambda class_level: class_level.level, reverse=True)
    highest = ordered[0].level

    offending = 0
    for class_level in ordered[1:]:
        if class_level.class_name == favored_class or class_level.level == highest:
            continue
        if highest - class_level.level > 1:
            offending += 1

    return min(1.0, offending * MULTICLASS_PENALTY_PER_CLASS / 100)
