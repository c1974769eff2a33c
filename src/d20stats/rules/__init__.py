"""Rule data - races, classes and progression tables."""

from .loader import (
    get_default_rulebook,
    load_classes,
    load_races,
    load_rulebook,
    load_tables,
)
from .models import (
    ClassDefinition,
    Progression,
    ProgressionTables,
    RaceDefinition,
    Rulebook,
    ScalingFeature,
    Size,
    SpellcastingDescriptor,
)

__all__ = [
    "ClassDefinition",
    "Progression",
    "ProgressionTables",
    "RaceDefinition",
    "Rulebook",
    "ScalingFeature",
    "Size",
    "SpellcastingDescriptor",
    "get_default_rulebook",
    "load_classes",
    "load_races",
    "load_rulebook",
    "load_tables",
]
