"""Epic level progression (character levels 21-100) and divine ascension.

Epic advancement is the one operation that changes a character: it adds the
gained levels to a class, accrues hit points and skill points level by level,
grants feats and ability increases on their cadence, refreshes scaling class
features and spellcasting, and evaluates divine ascension.
"""

from dataclasses import dataclass

import structlog

from d20stats.character.attributes import apply_racial_adjustments, calculate_modifiers
from d20stats.character.model import Character, DivineAscension
from d20stats.config import get_settings
from d20stats.errors import InvalidTransitionError
from d20stats.rules.models import ProgressionTables, Rulebook

from .hit_points import hit_points_for_level
from .multiclass import known_classes, skill_points_for_level
from .scaling import refresh_class_features

logger = structlog.get_logger(__name__)

EPIC_LEVEL_THRESHOLD = 20
REGULAR_FEAT_EVERY = 3
ABILITY_INCREASE_EVERY = 4


@dataclass(frozen=True)
class EpicStatus:
    """Summary of what an epic character has gained and may still spend."""

    is_epic: bool
    epic_level: int
    regular_feats: int
    epic_feats: int
    total_feats: int
    ability_increases: int
    divine_rank: int | None
    divine_title: str
    recommendations: tuple[str, ...] = ()


def epic_level_for(level: int) -> int:
    """Levels above 20, or 0 for non-epic characters."""
    return max(0, level - EPIC_LEVEL_THRESHOLD)


def epic_attack_bonus(epic_level: int) -> int:
    """Epic attack bonus: +1 at every odd epic level, (epic_level + 1) // 2."""
    if epic_level <= 0:
        return 0
    return (epic_level + 1) // 2


def epic_save_bonus(epic_level: int) -> int:
    """Epic save bonus: +1 at every even epic level, epic_level // 2."""
    if epic_level <= 0:
        return 0
    return epic_level // 2


def epic_spells_known_growth(class_epic_level: int) -> int:
    """Spells known added per known spell level at an epic class level."""
    return (class_epic_level // 2) // 2


def qualifies_for_divine_ascension(character: Character, tables: ProgressionTables) -> bool:
    """
    Check whether a character may begin divine ascension.

    Requires level 21+ and one of: the ascension feat, enough followers,
    or a qualifying achievement.
    """
    if character.level <= EPIC_LEVEL_THRESHOLD:
        return False

    return (
        tables.ascension_feat in character.feats
        or character.followers >= tables.ascension_followers
        or any(achievement in tables.ascension_achievements for achievement in character.achievements)
    )


def calculate_potential_divine_rank(level: int, followers: int, tables: ProgressionTables) -> int:
    """
    Estimate the highest divine rank a character could reach.

    The rank steps up with character level (21 -> 0, 25 -> 1, 35 -> 6,
    45 -> 11, 55 -> 16, 70 -> 21). Each follower threshold reached adds its
    increment. The result is capped at the divine rank cap.

    Args:
        level: Character level
        followers: Number of followers
        tables: Progression tables with the divine thresholds

    Returns:
        Potential divine rank
    """
    rank = 0
    for min_level, step_rank in sorted(tables.divine_rank_steps):
        if level >= min_level:
            rank = step_rank

    for min_followers, increment in sorted(tables.divine_follower_bonuses):
        if followers >= min_followers:
            rank += increment

    return min(rank, tables.divine_rank_cap)


def divine_title(rank: int | None, tables: ProgressionTables) -> str:
    """Get the title for a divine rank ("Mortal" when the character has none)."""
    if rank is None:
        return "Mortal"

    title = "Mortal"
    for min_rank, rank_title in sorted(tables.divine_titles):
        if rank >= min_rank:
            title = rank_title
    return title


def handle_divine_ascension(character: Character, tables: ProgressionTables) -> None:
    """
    Evaluate divine ascension after an advancement.

    A qualifying character without a divine rank becomes a quasi-deity
    (rank 0). The potential rank is refreshed for every qualifying character.
    """
    if not qualifies_for_divine_ascension(character, tables):
        return

    epic = character.epic
    if epic.divine_rank is None:
        epic.divine_rank = 0
        epic.ascension = DivineAscension(type="quasi-deity", followers=0)
        logger.info("divine_ascension_begun", character_name=character.name, level=character.level)

    epic.potential_divine_rank = calculate_potential_divine_rank(
        character.level, character.followers, tables
    )

    if epic.potential_divine_rank > epic.divine_rank:
        logger.info(
            "divine_rank_available",
            character_name=character.name,
            divine_rank=epic.divine_rank,
            potential_divine_rank=epic.potential_divine_rank,
        )


def update_epic_spellcasting(character: Character, rulebook: Rulebook, levels_gained: int) -> None:
    """
    Keep caster level equal to class level and grow spells known.

    Classes whose spellcasting allows spells-known growth add
    ((class_level - 20) // 2) // 2 to every spell level that already has
    known spells, once per advancement that gained levels.
    """
    for class_level, class_def in known_classes(character.classes, rulebook):
        descriptor = class_def.spellcasting
        if descriptor is None:
            continue

        class_level.caster_level = class_level.level

        if not descriptor.spells_known_growth or levels_gained <= 0:
            continue
        if class_level.level <= EPIC_LEVEL_THRESHOLD:
            continue

        growth = epic_spells_known_growth(class_level.level - EPIC_LEVEL_THRESHOLD)
        if growth <= 0:
            continue

        for spell_level, known in class_level.spells_known.items():
            if known:
                class_level.spells_known[spell_level] = known + growth


def advance_to_epic_level(
    character: Character,
    new_level: int,
    rulebook: Rulebook,
    class_name: str | None = None,
    level_cap: int | None = None,
) -> Character:
    """
    Advance a character to an epic level, in place.

    Gained levels are added to one class (the first listed class by default).
    Every argument is checked before anything changes, so a failed call leaves
    the character untouched. Callers must not advance the same character from
    two places at once.

    Args:
        character: The character to advance
        new_level: Target character level (21 up to the level cap)
        rulebook: Rulebook with class and race definitions
        class_name: Class that receives the gained levels
        level_cap: Highest reachable level (defaults to the configured cap)

    Returns:
        The same character, advanced

    Raises:
        InvalidTransitionError: If the target level is 20 or lower, above the cap,
            below the current level, or no valid class can receive the levels
    """
    if level_cap is None:
        level_cap = get_settings().epic_level_cap

    if new_level <= EPIC_LEVEL_THRESHOLD:
        raise InvalidTransitionError(f"Epic levels start at level 21 (requested {new_level})")

    if new_level > level_cap:
        raise InvalidTransitionError(f"Level {new_level} is above the epic level cap of {level_cap}")

    if not character.classes:
        raise InvalidTransitionError(f"Character '{character.name}' has no class to advance")

    current_level = character.level
    if new_level < current_level:
        raise InvalidTransitionError(
            f"Cannot advance '{character.name}' from level {current_level} down to {new_level}"
        )

    target_name = class_name if class_name is not None else character.classes[0].class_name
    target = character.get_class(target_name)
    if target is None:
        raise InvalidTransitionError(f"Character '{character.name}' has no levels in {target_name}")

    class_def = rulebook.class_definition(target_name)
    if class_def is None:
        raise InvalidTransitionError(f"Class '{target_name}' is not in the rulebook")

    race = rulebook.race(character.race)
    modifiers = calculate_modifiers(
        apply_racial_adjustments(character.base_abilities, character.race, rulebook)
    )
    epic = character.epic

    for level in range(current_level + 1, new_level + 1):
        target.level += 1

        epic.hit_points_gained += hit_points_for_level(class_def.hit_die, modifiers.constitution)
        epic.skill_points_gained += skill_points_for_level(class_def, modifiers.intelligence, race)

        if level % REGULAR_FEAT_EVERY == 0:
            epic.available_feats += 1

        if level % ABILITY_INCREASE_EVERY == 0:
            epic.ability_increases += 1

        class_epic_level = target.level - EPIC_LEVEL_THRESHOLD
        if (
            class_def.epic_feat_every > 0
            and class_epic_level > 0
            and class_epic_level % class_def.epic_feat_every == 0
        ):
            epic.available_epic_feats[target_name] = epic.available_epic_feats.get(target_name, 0) + 1

    epic.epic_level = epic_level_for(new_level)
    epic.attack_bonus = epic_attack_bonus(epic.epic_level)
    epic.save_bonus = epic_save_bonus(epic.epic_level)
    epic.class_features = refresh_class_features(character, rulebook)

    update_epic_spellcasting(character, rulebook, new_level - current_level)
    handle_divine_ascension(character, rulebook.tables)

    logger.info(
        "epic_level_advanced",
        character_name=character.name,
        class_name=target_name,
        old_level=current_level,
        new_level=new_level,
        epic_level=epic.epic_level,
        attack_bonus=epic.attack_bonus,
        save_bonus=epic.save_bonus,
    )

    return character


def summarize_epic_status(character: Character, tables: ProgressionTables) -> EpicStatus:
    """
    Summarize unspent epic gains and divine status.

    Args:
        character: The character
        tables: Progression tables (divine titles and ascension rules)

    Returns:
        EpicStatus with counts and recommendations
    """
    epic = character.epic
    epic_feats = sum(epic.available_epic_feats.values())
    recommendations = []

    if epic.available_feats > 0:
        recommendations.append(f"{epic.available_feats} regular feats available")
    if epic_feats > 0:
        recommendations.append(f"{epic_feats} epic feats available")
    if epic.ability_increases > 0:
        recommendations.append(f"{epic.ability_increases} ability score increases available")
    if epic.divine_rank is None and qualifies_for_divine_ascension(character, tables):
        recommendations.append("Qualifies for divine ascension")

    return EpicStatus(
        is_epic=character.level > EPIC_LEVEL_THRESHOLD,
        epic_level=epic_level_for(character.level),
        regular_feats=epic.available_feats,
        epic_feats=epic_feats,
        total_feats=epic.available_feats + epic_feats,
        ability_increases=epic.ability_increases,
        divine_rank=epic.divine_rank,
        divine_title=divine_title(epic.divine_rank, tables),
        recommendations=tuple(recommendations),
    )
