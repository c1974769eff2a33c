"""Carrying capacity by Strength and size."""

import math

from d20stats.rules.models import ProgressionTables, Size

from .snapshot import CarryingCapacity

TABLE_MAX_STRENGTH = 10


def base_loads(strength: int, tables: ProgressionTables) -> tuple[int, int, int]:
    """
    Light, medium and heavy loads for a Medium creature.

    Strength 1-10 reads the table directly. Above 10 the Strength 10 row is
    doubled for every full 10 points and raised by 25% for each remaining point.

    Args:
        strength: Strength score
        tables: Progression tables (carrying rows)

    Returns:
        Tuple of (light, medium, heavy) in pounds
    """
    if strength <= TABLE_MAX_STRENGTH:
        index = min(max(0, strength - 1), TABLE_MAX_STRENGTH - 1)
        light, medium, heavy = tables.carrying[index]
        return light, medium, heavy

    baseline = tables.carrying[TABLE_MAX_STRENGTH - 1]
    multiplier = 2 ** ((strength - TABLE_MAX_STRENGTH) // 10)
    remainder = (strength - TABLE_MAX_STRENGTH) % 10

    light, medium, heavy = (
        math.floor(load * multiplier * (1 + remainder * 0.25)) for load in baseline
    )
    return light, medium, heavy


def calculate_carrying_capacity(
    strength: int, size: Size | str, tables: ProgressionTables
) -> CarryingCapacity:
    """
    Calculate carrying capacity.

    Args:
        strength: Strength score
        size: Creature size
        tables: Progression tables

    Returns:
        CarryingCapacity with loads and lift/drag limits
    """
    light, medium, heavy = base_loads(strength, tables)
    multiplier = tables.carrying_size_multipliers.get(size, 1)

    return CarryingCapacity(
        light=math.floor(light * multiplier),
        medium=math.floor(medium * multiplier),
        heavy=math.floor(heavy * multiplier),
        max_load=math.floor(heavy * multiplier),
        lift_over_head=math.floor(heavy * multiplier),
        lift_off_ground=math.floor(heavy * multiplier * 2),
        drag_or_push=math.floor(heavy * multiplier * 5),
    )
