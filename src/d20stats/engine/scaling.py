"""Class features that scale with class level.

Each class definition carries its own feature table (see ScalingFeature), so
features are refreshed uniformly with no per-class branching.
"""

from d20stats.character.model import Character
from d20stats.rules.models import ClassDefinition, Rulebook

from .multiclass import known_classes


def scaling_features_for(class_def: ClassDefinition, level: int) -> dict[str, int | str | None]:
    """
    Evaluate every scaling feature of a class at a class level.

    Example:
        Monk 24 -> {"ac_bonus": 4, "speed_bonus": 80, "unarmed_damage": "2d10"}
    """
    return {name: feature.value_at(level) for name, feature in class_def.scaling_features.items()}


def refresh_class_features(
    character: Character, rulebook: Rulebook
) -> dict[str, dict[str, int | str | None]]:
    """
    Evaluate the scaling features of every class the character holds.

    Args:
        character: The character
        rulebook: Rulebook with class definitions

    Returns:
        Class name -> feature name -> value, for classes that have scaling features
    """
    features: dict[str, dict[str, int | str | None]] = {}
    for class_level, class_def in known_classes(character.classes, rulebook):
        if class_def.scaling_features:
            features[class_level.class_name] = scaling_features_for(class_def, class_level.level)
    return features
