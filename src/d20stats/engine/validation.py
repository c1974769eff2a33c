"""Rules-compliance checks for a character.

Nothing here raises for bad character data. Problems are collected as
errors (rule violations) or warnings (soft issues) in a ValidationResult.
"""

from d20stats.character.attributes import ATTRIBUTE_NAMES
from d20stats.character.model import Character
from d20stats.config import Settings, get_settings
from d20stats.rules.models import Rulebook

from .multiclass import multiclass_xp_penalty
from .snapshot import ValidationResult

EPIC_LEVEL_THRESHOLD = 20

ALIGNMENT_ABBREVIATIONS = {
    "LG": "Lawful Good",
    "NG": "Neutral Good",
    "CG": "Chaotic Good",
    "LN": "Lawful Neutral",
    "N": "True Neutral",
    "TN": "True Neutral",
    "CN": "Chaotic Neutral",
    "LE": "Lawful Evil",
    "NE": "Neutral Evil",
    "CE": "Chaotic Evil",
}


def normalize_alignment(alignment: str) -> str:
    """Expand an abbreviated alignment ("LG" -> "Lawful Good")."""
    alignment = alignment.strip()
    return ALIGNMENT_ABBREVIATIONS.get(alignment.upper(), alignment)


def validate_alignment(alignment: str, restriction: str) -> bool:
    """
    Check an alignment against a class alignment restriction.

    Recognized restrictions are "Any", "Lawful Good only", "Any nonlawful",
    "Any lawful" and "Any neutral". Any other restriction passes.

    Args:
        alignment: Character alignment, abbreviated or spelled out
        restriction: Restriction string from the class definition

    Returns:
        True if the alignment satisfies the restriction
    """
    full = normalize_alignment(alignment)

    if restriction == "Any":
        return True
    if restriction == "Lawful Good only":
        return full == "Lawful Good"
    if restriction == "Any nonlawful":
        return not full.startswith("Lawful")
    if restriction == "Any lawful":
        return full.startswith("Lawful")
    if restriction == "Any neutral":
        return "Neutral" in full

    return True


def validate_ability_scores(
    character: Character, settings: Settings | None = None
) -> list[str]:
    """
    Check rolled ability scores against the mortal range.

    The upper bound is skipped for epic characters (level above 20).

    Returns:
        Error messages, one per out-of-range score
    """
    if settings is None:
        settings = get_settings()

    low = settings.ability_score_min
    high = settings.ability_score_max
    enforce_max = character.level <= EPIC_LEVEL_THRESHOLD

    errors = []
    for name in ATTRIBUTE_NAMES:
        score = getattr(character.base_abilities, name)
        if score < low or (enforce_max and score > high):
            errors.append(f"{name} score {score} is outside normal range ({low}-{high})")
    return errors


def validate_character(
    character: Character, rulebook: Rulebook, settings: Settings | None = None
) -> ValidationResult:
    """
    Validate a character against the rulebook.

    Args:
        character: The character
        rulebook: Rulebook with race and class definitions
        settings: Settings with the ability score range (defaults to cached settings)

    Returns:
        ValidationResult; valid is False when there are errors
    """
    errors = validate_ability_scores(character, settings)
    warnings = []

    race = rulebook.race(character.race)
    if race is None:
        warnings.append(f"Unknown race '{character.race}', using Human-equivalent defaults")

    for class_level in character.classes:
        class_def = rulebook.class_definition(class_level.class_name)
        if class_def is None:
            warnings.append(f"Unknown class '{class_level.class_name}' contributes nothing")
            continue

        if not validate_alignment(character.alignment, class_def.alignment_restriction):
            errors.append(
                f"{class_level.class_name} alignment restriction violated "
                f"({class_def.alignment_restriction}, is {character.alignment})"
            )

    favored_class = race.favored_class if race is not None else None
    penalty = multiclass_xp_penalty(character.classes, favored_class)
    if penalty > 0:
        warnings.append(f"Multiclass XP penalty: -{round(penalty * 100)}%")

    return ValidationResult(valid=not errors, errors=tuple(errors), warnings=tuple(warnings))
