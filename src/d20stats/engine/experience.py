"""Experience point thresholds."""

from d20stats.rules.models import ProgressionTables

from .snapshot import ExperienceThresholds


def xp_for_level(level: int, tables: ProgressionTables) -> int:
    """
    Calculate total XP required to reach a specific level.

    Levels 1-20 read the experience table. Past 20 the table's own rule
    continues: reaching level n takes 1000 * n * (n - 1) / 2 XP in total.

    Args:
        level: The target level (1-based)
        tables: Progression tables

    Returns:
        Total XP required to reach that level

    Examples:
        Level 1: 0 XP
        Level 2: 1000 XP
        Level 20: 190000 XP
        Level 21: 210000 XP
    """
    if level <= 1:
        return 0

    if level <= len(tables.experience):
        return tables.experience[level - 1]

    return 1000 * level * (level - 1) // 2


def xp_for_next_level(level: int, tables: ProgressionTables) -> int:
    """
    Calculate XP needed to go from current level to next level.

    Examples:
        Level 1->2: 1000 XP
        Level 2->3: 2000 XP
    """
    return xp_for_level(level + 1, tables) - xp_for_level(level, tables)


def calculate_experience(
    level: int, tables: ProgressionTables, penalty: float = 0.0
) -> ExperienceThresholds:
    """
    Build the XP thresholds for a character level.

    Args:
        level: Total character level
        tables: Progression tables
        penalty: Multiclass XP penalty fraction

    Returns:
        ExperienceThresholds for the current and next level
    """
    current = xp_for_level(level, tables)
    next_level = xp_for_level(level + 1, tables)

    return ExperienceThresholds(
        current=current,
        next=next_level,
        needed=next_level - current,
        penalty=penalty,
    )
