"""Hit point accumulation.

The first level of each class grants the full hit die; every later level
grants the rounded-up average, hit_die // 2 + 1. The Constitution modifier
applies once per level and the total never drops below 1.
"""

from collections.abc import Iterable

from d20stats.character.model import ClassLevel
from d20stats.rules.models import Rulebook

from .multiclass import known_classes

MINIMUM_HIT_POINTS = 1


def average_hit_die(hit_die: int) -> int:
    """Hit points for a non-first level: half the die plus one."""
    return hit_die // 2 + 1


def hit_points_for_level(hit_die: int, con_modifier: int, first_level: bool = False) -> int:
    """
    Hit points gained for a single level.

    Args:
        hit_die: Hit die size of the class
        con_modifier: Constitution modifier
        first_level: Whether this is the first level in the class

    Returns:
        Hit points gained (may be negative with a large Constitution penalty)
    """
    die = hit_die if first_level else average_hit_die(hit_die)
    return die + con_modifier


def calculate_hit_points(
    classes: Iterable[ClassLevel], con_modifier: int, rulebook: Rulebook
) -> int:
    """
    Calculate total hit points across all classes.

    Args:
        classes: Class levels held
        con_modifier: Constitution modifier
        rulebook: Rulebook with class definitions

    Returns:
        Total hit points, at least 1
    """
    total = 0

    for class_level, class_def in known_classes(classes, rulebook):
        for level in range(1, class_level.level + 1):
            total += hit_points_for_level(class_def.hit_die, con_modifier, first_level=level == 1)

    return max(MINIMUM_HIT_POINTS, total)
