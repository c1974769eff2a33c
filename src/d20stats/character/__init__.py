"""Character input model and ability score mechanics."""

from .attributes import (
    ATTRIBUTE_NAMES,
    AttributeModifiers,
    AttributeName,
    apply_racial_adjustments,
    calculate_modifiers,
    get_age_category,
    get_modifier,
)
from .model import (
    AbilityBlock,
    Character,
    ClassLevel,
    DivineAscension,
    EpicState,
    EquipmentItem,
)

__all__ = [
    "ATTRIBUTE_NAMES",
    "AbilityBlock",
    "AttributeModifiers",
    "AttributeName",
    "Character",
    "ClassLevel",
    "DivineAscension",
    "EpicState",
    "EquipmentItem",
    "apply_racial_adjustments",
    "calculate_modifiers",
    "get_age_category",
    "get_modifier",
]
