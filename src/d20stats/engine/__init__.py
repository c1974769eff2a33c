"""Derived-statistics engine: resolvers, epic progression and the orchestrator."""

from .epic import (
    EpicStatus,
    advance_to_epic_level,
    calculate_potential_divine_rank,
    divine_title,
    epic_attack_bonus,
    epic_save_bonus,
    qualifies_for_divine_ascension,
    summarize_epic_status,
)
from .orchestrator import StatsOrchestrator, calculate_all_stats
from .snapshot import (
    AbilityScores,
    ArmorClass,
    AttackBonus,
    AttackBonuses,
    CarryingCapacity,
    DerivedSnapshot,
    ExperienceThresholds,
    SavingThrow,
    SavingThrows,
    ValidationResult,
)
from .validation import validate_alignment, validate_character

__all__ = [
    "AbilityScores",
    "ArmorClass",
    "AttackBonus",
    "AttackBonuses",
    "CarryingCapacity",
    "DerivedSnapshot",
    "EpicStatus",
    "ExperienceThresholds",
    "SavingThrow",
    "SavingThrows",
    "StatsOrchestrator",
    "ValidationResult",
    "advance_to_epic_level",
    "calculate_all_stats",
    "calculate_potential_divine_rank",
    "divine_title",
    "epic_attack_bonus",
    "epic_save_bonus",
    "qualifies_for_divine_ascension",
    "summarize_epic_status",
    "validate_alignment",
    "validate_character",
]
