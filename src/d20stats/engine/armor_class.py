"""Armor class resolution.

Total, touch and flat-footed AC are all derived from one set of components:
touch drops armor, shield and natural armor; flat-footed drops Dexterity.
"""

from d20stats.character.model import Character
from d20stats.rules.models import ProgressionTables, Size

from .snapshot import ArmorClass

BASE_ARMOR_CLASS = 10


def size_modifier(size: Size | str, tables: ProgressionTables) -> int:
    """Get the AC/attack modifier for a size (Small +1, Large -1, otherwise 0)."""
    return tables.size_modifiers.get(size, 0)


def calculate_armor_class(
    character: Character, dex_modifier: int, size: Size | str, tables: ProgressionTables
) -> ArmorClass:
    """
    Calculate the armor class breakdown.

    Only the best equipped armor counts and the lowest max Dex bonus among
    equipped armor caps Dexterity. Every equipped shield adds its bonus.
    Deflection and natural armor take the best of the character's own value
    and any equipped item.

    Args:
        character: The character (equipment and AC bonuses)
        dex_modifier: Dexterity modifier
        size: Effective size of the character
        tables: Progression tables (size modifiers)

    Returns:
        ArmorClass with components and total/touch/flat-footed values
    """
    armor = 0
    shield = 0
    dexterity = dex_modifier
    natural = character.natural_armor
    deflection = character.deflection_bonus

    for item in character.equipment:
        if not item.equipped:
            continue

        if item.type == "armor":
            armor = max(armor, item.armor_bonus)
            if item.max_dex_bonus is not None:
                dexterity = min(dexterity, item.max_dex_bonus)

        if item.category == "Shield":
            shield += item.armor_bonus

        natural = max(natural, item.natural_armor_bonus)
        deflection = max(deflection, item.deflection_bonus)

    size_mod = size_modifier(size, tables)
    misc = character.misc_armor_bonus

    total = BASE_ARMOR_CLASS + armor + shield + dexterity + size_mod + natural + deflection + misc
    touch = BASE_ARMOR_CLASS + dexterity + size_mod + deflection + misc
    flat_footed = BASE_ARMOR_CLASS + armor + shield + size_mod + natural + deflection + misc

    return ArmorClass(
        base=BASE_ARMOR_CLASS,
        armor=armor,
        shield=shield,
        dexterity=dexterity,
        size=size_mod,
        natural=natural,
        deflection=deflection,
        misc=misc,
        total=total,
        touch=touch,
        flat_footed=flat_footed,
    )
