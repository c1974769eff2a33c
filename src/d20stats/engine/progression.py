"""Base attack bonus and saving throw progression tables (levels 1-20).

Levels past 20 reuse the 20th-level entry. Epic bonuses are layered on top by
the epic module rather than extending these tables.
"""

import math

from d20stats.rules.models import Progression, ProgressionTables

MAX_TABLE_LEVEL = 20


def table_index(level: int) -> int:
    """Get the table index for a level, clamped to the 1-20 range."""
    return min(max(level, 1), MAX_TABLE_LEVEL) - 1


def build_base_attack_table(rate: float) -> tuple[int, ...]:
    """
    Build a 20-entry BAB table from a per-level rate.

    Args:
        rate: BAB gained per level (1.0 Good, 0.75 Medium, 0.5 Poor)

    Returns:
        Tuple of BAB values for levels 1-20
    """
    return tuple(math.floor(level * rate) for level in range(1, MAX_TABLE_LEVEL + 1))


def base_attack_for_level(category: Progression, level: int, tables: ProgressionTables) -> int:
    """
    Look up the base attack bonus for one class at a class level.

    Args:
        category: BAB progression category of the class
        level: Class level
        tables: Progression tables

    Returns:
        Base attack bonus contributed by the class
    """
    rate = tables.base_attack_rates.get(category)
    if rate is None:
        rate = tables.base_attack_rates[Progression.POOR]
    return build_base_attack_table(rate)[table_index(level)]


def save_for_level(category: Progression, level: int, tables: ProgressionTables) -> int:
    """
    Look up a base saving throw bonus for one class at a class level.

    There is no Medium save table; anything other than Good uses Poor.

    Args:
        category: Save progression category of the class
        level: Class level
        tables: Progression tables

    Returns:
        Base save bonus contributed by the class
    """
    table = tables.saves[Progression.GOOD if category == Progression.GOOD else Progression.POOR]
    return table[table_index(level)]
