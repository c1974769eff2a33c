"""Immutable output types of the statistics engine."""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields, is_dataclass
from types import MappingProxyType
from typing import Any

from d20stats.character.attributes import AttributeModifiers


@dataclass(frozen=True)
class AbilityScores:
    """Ability scores after racial adjustments."""

    strength: int
    dexterity: int
    constitution: int
    intelligence: int
    wisdom: int
    charisma: int


@dataclass(frozen=True)
class ArmorClass:
    """Armor class components and the three derived values."""

    base: int
    armor: int
    shield: int
    dexterity: int
    size: int
    natural: int
    deflection: int
    misc: int
    total: int
    touch: int
    flat_footed: int


@dataclass(frozen=True)
class AttackBonus:
    """One attack mode (melee or ranged)."""

    base: int
    epic: int
    ability: int
    size: int
    misc: int
    total: int
    iterative: tuple[int, ...] = ()


@dataclass(frozen=True)
class AttackBonuses:
    """Melee and ranged attack bonuses."""

    melee: AttackBonus
    ranged: AttackBonus


@dataclass(frozen=True)
class SavingThrow:
    """A single saving throw."""

    base: int
    ability: int
    epic: int
    total: int


@dataclass(frozen=True)
class SavingThrows:
    """Fortitude, Reflex and Will saves."""

    fortitude: SavingThrow
    reflex: SavingThrow
    will: SavingThrow


@dataclass(frozen=True)
class CarryingCapacity:
    """Load limits in pounds."""

    light: int
    medium: int
    heavy: int
    max_load: int
    lift_over_head: int
    lift_off_ground: int
    drag_or_push: int


@dataclass(frozen=True)
class ExperienceThresholds:
    """XP totals for the current and next level, plus the multiclass penalty."""

    current: int
    next: int
    needed: int
    penalty: float = 0.0


@dataclass(frozen=True)
class ValidationResult:
    """Rules-compliance findings. Errors and warnings never raise."""

    valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class DerivedSnapshot:
    """Every derived statistic of a character at one point in time."""

    name: str
    race: str
    size: str
    age_category: str | None
    abilities: AbilityScores
    ability_modifiers: AttributeModifiers
    level: int
    epic_level: int
    hit_points: int
    hit_dice: Mapping[str, int]
    skill_points: int
    armor_class: ArmorClass
    base_attack_bonus: int
    attacks: AttackBonuses
    saving_throws: SavingThrows
    carrying_capacity: CarryingCapacity
    experience: ExperienceThresholds
    validation: ValidationResult
    spells_per_day: Mapping[str, tuple[int, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Cached snapshots are shared, so mapping fields are read-only views.
        object.__setattr__(self, "hit_dice", MappingProxyType(dict(self.hit_dice)))
        object.__setattr__(self, "spells_per_day", MappingProxyType(dict(self.spells_per_day)))

    def as_dict(self) -> dict[str, Any]:
        """Render the snapshot as plain nested dictionaries and lists."""
        data: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, Mapping):
                value = dict(value)
            elif is_dataclass(value):
                value = asdict(value)
            data[item.name] = value
        return data
