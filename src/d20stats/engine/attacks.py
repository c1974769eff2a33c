"""Attack bonuses and saving throw totals."""

from d20stats.character.attributes import AttributeModifiers

from .multiclass import BaseSaves
from .snapshot import AttackBonus, AttackBonuses, SavingThrow, SavingThrows

# Plain BAB needed before a second (iterative) attack is gained
ITERATIVE_ATTACK_THRESHOLD = 6
ITERATIVE_ATTACK_STEP = 5


def iterative_attacks(base_attack: int, modifier: int) -> tuple[int, ...]:
    """
    Calculate the additional attacks of a full attack.

    Each extra attack is five lower than the previous one, while the base
    value stays positive. Epic attack bonus never grants extra attacks.

    Args:
        base_attack: Plain base attack bonus
        modifier: Ability, size and misc modifiers added to every attack

    Returns:
        Tuple of attack bonuses for the extra attacks (empty below BAB 6)
    """
    if base_attack < ITERATIVE_ATTACK_THRESHOLD:
        return ()

    attacks = []
    bab = base_attack - ITERATIVE_ATTACK_STEP
    while bab > 0:
        attacks.append(max(1, bab) + modifier)
        bab -= ITERATIVE_ATTACK_STEP
    return tuple(attacks)


def calculate_attack_bonus(
    base_attack: int, epic_bonus: int, ability_modifier: int, size_mod: int, misc: int = 0
) -> AttackBonus:
    """Build one attack mode from its components."""
    return AttackBonus(
        base=base_attack,
        epic=epic_bonus,
        ability=ability_modifier,
        size=size_mod,
        misc=misc,
        total=base_attack + epic_bonus + ability_modifier + size_mod + misc,
        iterative=iterative_attacks(base_attack, ability_modifier + size_mod + misc),
    )


def calculate_attack_bonuses(
    base_attack: int, epic_bonus: int, modifiers: AttributeModifiers, size_mod: int
) -> AttackBonuses:
    """
    Calculate melee (Strength) and ranged (Dexterity) attack bonuses.

    Args:
        base_attack: Summed class base attack bonus
        epic_bonus: Epic attack bonus
        modifiers: Ability modifiers
        size_mod: Size modifier

    Returns:
        AttackBonuses with melee and ranged breakdowns
    """
    return AttackBonuses(
        melee=calculate_attack_bonus(base_attack, epic_bonus, modifiers.strength, size_mod),
        ranged=calculate_attack_bonus(base_attack, epic_bonus, modifiers.dexterity, size_mod),
    )


def calculate_saving_throws(
    saves: BaseSaves, modifiers: AttributeModifiers, epic_bonus: int
) -> SavingThrows:
    """
    Calculate saving throw totals.

    Fortitude uses Constitution, Reflex uses Dexterity and Will uses Wisdom.
    """

    def build(base: int, ability: int) -> SavingThrow:
        return SavingThrow(base=base, ability=ability, epic=epic_bonus, total=base + ability + epic_bonus)

    return SavingThrows(
        fortitude=build(saves.fortitude, modifiers.constitution),
        reflex=build(saves.reflex, modifiers.dexterity),
        will=build(saves.will, modifiers.wisdom),
    )
