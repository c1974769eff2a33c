"""
Rule data models for d20stats.

Races, classes and the fixed progression tables are plain reference data. They
are loaded once (see loader.py), frozen, and handed to the resolvers as
parameters so an alternate rule set can be swapped in without touching the engine.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Size(StrEnum):
    """Creature size categories."""

    FINE = "Fine"
    DIMINUTIVE = "Diminutive"
    TINY = "Tiny"
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    HUGE = "Huge"
    GARGANTUAN = "Gargantuan"
    COLOSSAL = "Colossal"


class Progression(StrEnum):
    """Progression categories for base attack bonus and saving throws."""

    GOOD = "Good"
    MEDIUM = "Medium"
    POOR = "Poor"


class ScalingFeature(BaseModel):
    """
    A class feature whose value is a pure function of class level.

    Two shapes are supported:
        interval: base + ((level - offset) // every) * amount
        steps: value of the highest threshold that is <= level

    Attributes:
        kind: "interval" or "steps"
        base: Starting value for interval features
        offset: Level subtracted before dividing
        every: Levels per increment
        amount: Increment size
        steps: List of (threshold, value) pairs for step features
    """

    model_config = ConfigDict(frozen=True)

    kind: str = Field(default="interval", description="interval or steps")
    base: int = Field(default=0)
    offset: int = Field(default=0)
    every: int = Field(default=1, ge=1)
    amount: int = Field(default=1)
    steps: tuple[tuple[int, int | str], ...] = Field(default=())

    @field_validator("kind")
    @classmethod
    def check_kind(cls, value: str) -> str:
        if value not in ("interval", "steps"):
            raise ValueError(f"unknown scaling feature kind '{value}'")
        return value

    def value_at(self, level: int) -> int | str | None:
        """
        Evaluate the feature at a class level.

        Args:
            level: The class level

        Returns:
            The feature value, or None for a step feature below its first threshold
        """
        if self.kind == "interval":
            return self.base + ((level - self.offset) // self.every) * self.amount

        result: int | str | None = None
        for threshold, value in sorted(self.steps, key=lambda step: step[0]):
            if level >= threshold:
                result = value
        return result


class SpellcastingDescriptor(BaseModel):
    """
    How a class casts spells.

    Attributes:
        ability: Ability driving bonus spells (e.g. "intelligence")
        spells_per_day: Class level -> base spells per day indexed by spell level
        spells_known_growth: Whether spells known keep growing at epic levels
    """

    model_config = ConfigDict(frozen=True)

    ability: str = Field(..., description="Ability used for bonus spells")
    spells_per_day: dict[int, tuple[int, ...]] = Field(default_factory=dict)
    spells_known_growth: bool = Field(default=False)

    @field_validator("ability")
    @classmethod
    def lower_ability(cls, value: str) -> str:
        return value.lower()

    def row_for_level(self, level: int) -> tuple[int, ...]:
        """Get the base spells-per-day row, reusing the highest tabulated row past the table."""
        if not self.spells_per_day:
            return ()
        if level in self.spells_per_day:
            return self.spells_per_day[level]
        highest = max(self.spells_per_day)
        if level > highest:
            return self.spells_per_day[highest]
        return ()


class RaceDefinition(BaseModel):
    """
    A playable race.

    Attributes:
        name: Race name, matched exactly
        ability_adjustments: Signed ability deltas
        size: Size category
        favored_class: Class exempt from the multiclass penalty, if any
        bonus_skill_points: Extra skill points per level
        age_categories: Age thresholds (adulthood, middle_age, old, venerable)
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Race name")
    ability_adjustments: dict[str, int] = Field(default_factory=dict)
    size: Size = Field(default=Size.MEDIUM)
    favored_class: str | None = Field(default=None)
    bonus_skill_points: int = Field(default=0)
    age_categories: dict[str, int] = Field(default_factory=dict)


class ClassDefinition(BaseModel):
    """
    A character class.

    Attributes:
        name: Class name, matched exactly
        hit_die: Hit die size (4, 6, 8, 10, 12)
        base_attack: BAB progression category
        fortitude: Fortitude save category
        reflex: Reflex save category
        will: Will save category
        skill_points: Skill points per level before the Int modifier
        alignment_restriction: Alignment requirement text ("Any" = none)
        spellcasting: Spellcasting descriptor, if the class casts spells
        epic_feat_every: Epic class levels per bonus epic feat (0 = never)
        scaling_features: Features that scale with class level
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Class name")
    hit_die: int = Field(..., ge=1, description="Hit die size")
    base_attack: Progression = Field(default=Progression.POOR)
    fortitude: Progression = Field(default=Progression.POOR)
    reflex: Progression = Field(default=Progression.POOR)
    will: Progression = Field(default=Progression.POOR)
    skill_points: int = Field(default=2, ge=0)
    alignment_restriction: str = Field(default="Any")
    spellcasting: SpellcastingDescriptor | None = Field(default=None)
    epic_feat_every: int = Field(default=0, ge=0)
    scaling_features: dict[str, ScalingFeature] = Field(default_factory=dict)


class ProgressionTables(BaseModel):
    """
    Fixed numeric tables of the rule set.

    Attributes:
        base_attack_rates: BAB per level by category (Good 1, Medium 0.75, Poor 0.5)
        saves: 20-entry save tables by category (Good, Poor)
        experience: Total XP required for levels 1-20
        carrying: Light/medium/heavy loads for Strength 1-10
        carrying_size_multipliers: Load multiplier by size
        size_modifiers: AC/attack modifier by size
        divine_rank_steps: (character level, potential rank) thresholds
        divine_follower_bonuses: (followers, rank increment) thresholds, cumulative
        divine_rank_cap: Highest divine rank
        divine_titles: (lowest rank, title) pairs
        ascension_feat: Feat that qualifies a character for ascension
        ascension_followers: Follower count that qualifies a character
        ascension_achievements: Achievement flags that qualify a character
    """

    model_config = ConfigDict(frozen=True)

    base_attack_rates: dict[Progression, float]
    saves: dict[Progression, tuple[int, ...]]
    experience: tuple[int, ...]
    carrying: tuple[tuple[int, int, int], ...]
    carrying_size_multipliers: dict[Size, float]
    size_modifiers: dict[Size, int] = Field(default_factory=dict)
    divine_rank_steps: tuple[tuple[int, int], ...] = Field(default=())
    divine_follower_bonuses: tuple[tuple[int, int], ...] = Field(default=())
    divine_rank_cap: int = Field(default=21)
    divine_titles: tuple[tuple[int, str], ...] = Field(default=())
    ascension_feat: str = Field(default="Epic Leadership")
    ascension_followers: int = Field(default=1000)
    ascension_achievements: tuple[str, ...] = Field(default=())

    @field_validator("saves")
    @classmethod
    def check_save_tables(
        cls, value: dict[Progression, tuple[int, ...]]
    ) -> dict[Progression, tuple[int, ...]]:
        for category in (Progression.GOOD, Progression.POOR):
            if len(value.get(category, ())) != 20:
                raise ValueError(f"save table '{category}' must have 20 entries")
        return value

    @field_validator("experience")
    @classmethod
    def check_experience_table(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        if len(value) != 20:
            raise ValueError("experience table must have 20 entries")
        return value

    @field_validator("carrying")
    @classmethod
    def check_carrying_table(
        cls, value: tuple[tuple[int, int, int], ...]
    ) -> tuple[tuple[int, int, int], ...]:
        if len(value) != 10:
            raise ValueError("carrying table must have 10 rows (Strength 1-10)")
        return value


class Rulebook(BaseModel):
    """Complete rule set: races, classes and progression tables."""

    model_config = ConfigDict(frozen=True)

    races: dict[str, RaceDefinition] = Field(default_factory=dict)
    classes: dict[str, ClassDefinition] = Field(default_factory=dict)
    tables: ProgressionTables

    def race(self, name: str) -> RaceDefinition | None:
        """Get a race by exact name, or None."""
        return self.races.get(name)

    def class_definition(self, name: str) -> ClassDefinition | None:
        """Get a class by exact name, or None."""
        return self.classes.get(name)
