"""Composes every resolver into one derived-statistics snapshot."""

import structlog

from d20stats.character.attributes import (
    apply_racial_adjustments,
    calculate_modifiers,
    get_age_category,
)
from d20stats.character.model import Character
from d20stats.config import Settings, get_settings
from d20stats.rules.loader import get_default_rulebook
from d20stats.rules.models import Rulebook, Size

from . import epic
from .armor_class import calculate_armor_class, size_modifier
from .attacks import calculate_attack_bonuses, calculate_saving_throws
from .carrying import calculate_carrying_capacity
from .experience import calculate_experience
from .hit_points import calculate_hit_points
from .multiclass import (
    base_attack_bonus,
    base_saves,
    hit_dice,
    multiclass_xp_penalty,
    total_level,
    total_skill_points,
)
from .snapshot import AbilityScores, DerivedSnapshot
from .spellcasting import calculate_spells_per_day
from .validation import validate_character

logger = structlog.get_logger(__name__)


class StatsOrchestrator:
    """
    Entry point of the statistics engine.

    calculate_all_stats() never changes the character and never raises for
    bad character data; problems are reported in the snapshot's validation
    result. advance_to_epic_level() is the only operation that changes a
    character.

    The last computed snapshot is kept and returned again while the character
    serializes identically. Discarding it changes nothing but speed.
    """

    def __init__(self, rulebook: Rulebook | None = None, settings: Settings | None = None):
        """
        Initialize the orchestrator.

        Args:
            rulebook: Rule data to compute against (defaults to the cached default rulebook)
            settings: Settings (defaults to the cached settings)
        """
        self.settings = settings if settings is not None else get_settings()
        self.rulebook = rulebook if rulebook is not None else get_default_rulebook()
        self._last_key: str | None = None
        self._last_snapshot: DerivedSnapshot | None = None

    @property
    def last_snapshot(self) -> DerivedSnapshot | None:
        """The most recently computed snapshot, if any."""
        return self._last_snapshot

    def clear_cache(self) -> None:
        """Forget the last computed snapshot."""
        self._last_key = None
        self._last_snapshot = None

    def effective_size(self, character: Character) -> Size:
        """Size override, else the race size, else Medium."""
        if character.size is not None:
            return character.size
        race = self.rulebook.race(character.race)
        if race is not None:
            return race.size
        return Size.MEDIUM

    def calculate_all_stats(self, character: Character) -> DerivedSnapshot:
        """
        Calculate every derived statistic of a character.

        Args:
            character: The character (not modified)

        Returns:
            DerivedSnapshot with all statistics and the validation result
        """
        key = None
        if self.settings.result_cache_enabled:
            key = character.model_dump_json()
            if key == self._last_key and self._last_snapshot is not None:
                return self._last_snapshot

        snapshot = self._compute(character)

        if key is not None:
            self._last_key = key
            self._last_snapshot = snapshot

        logger.debug(
            "stats_calculated",
            character_name=character.name,
            level=snapshot.level,
            valid=snapshot.validation.valid,
        )

        return snapshot

    def advance_to_epic_level(
        self, character: Character, new_level: int, class_name: str | None = None
    ) -> Character:
        """
        Advance a character to an epic level, in place.

        Raises:
            InvalidTransitionError: If the transition is not allowed
        """
        advanced = epic.advance_to_epic_level(
            character,
            new_level,
            self.rulebook,
            class_name=class_name,
            level_cap=self.settings.epic_level_cap,
        )
        self.clear_cache()
        return advanced

    def summarize_epic_status(self, character: Character) -> epic.EpicStatus:
        """Summarize a character's unspent epic gains and divine status."""
        return epic.summarize_epic_status(character, self.rulebook.tables)

    def _compute(self, character: Character) -> DerivedSnapshot:
        rulebook = self.rulebook
        tables = rulebook.tables
        race = rulebook.race(character.race)
        size = self.effective_size(character)

        adjusted = apply_racial_adjustments(character.base_abilities, character.race, rulebook)
        modifiers = calculate_modifiers(adjusted)
        size_mod = size_modifier(size, tables)

        level = total_level(character.classes)
        epic_level = epic.epic_level_for(level)
        bab = base_attack_bonus(character.classes, rulebook)
        favored_class = race.favored_class if race is not None else None

        return DerivedSnapshot(
            name=character.name,
            race=character.race,
            size=str(size),
            age_category=get_age_category(race, character.age),
            abilities=AbilityScores(**adjusted.model_dump()),
            ability_modifiers=modifiers,
            level=level,
            epic_level=epic_level,
            hit_points=calculate_hit_points(character.classes, modifiers.constitution, rulebook),
            hit_dice=hit_dice(character.classes, rulebook),
            skill_points=total_skill_points(
                character.classes, modifiers.intelligence, race, rulebook
            ),
            armor_class=calculate_armor_class(character, modifiers.dexterity, size, tables),
            base_attack_bonus=bab,
            attacks=calculate_attack_bonuses(
                bab, epic.epic_attack_bonus(epic_level), modifiers, size_mod
            ),
            saving_throws=calculate_saving_throws(
                base_saves(character.classes, rulebook),
                modifiers,
                epic.epic_save_bonus(epic_level),
            ),
            carrying_capacity=calculate_carrying_capacity(adjusted.strength, size, tables),
            experience=calculate_experience(
                level, tables, multiclass_xp_penalty(character.classes, favored_class)
            ),
            validation=validate_character(character, rulebook, self.settings),
            spells_per_day=calculate_spells_per_day(character.classes, modifiers, rulebook),
        )


def calculate_all_stats(character: Character, rulebook: Rulebook | None = None) -> DerivedSnapshot:
    """Calculate a snapshot with a throwaway orchestrator."""
    return StatsOrchestrator(rulebook=rulebook).calculate_all_stats(character)
