"""
Character draft model for d20stats.

Every field has a defined default, so partially filled character data is
resolved once here instead of being probed field by field in each resolver.
"""

from pydantic import BaseModel, Field

from d20stats.rules.models import Size


class AbilityBlock(BaseModel):
    """The six ability scores. No upper bound; epic characters exceed 25."""

    strength: int = Field(default=10)
    dexterity: int = Field(default=10)
    constitution: int = Field(default=10)
    intelligence: int = Field(default=10)
    wisdom: int = Field(default=10)
    charisma: int = Field(default=10)


class ClassLevel(BaseModel):
    """
    Levels held in one class.

    Attributes:
        class_name: Name of the class in the rulebook
        level: Levels in this class (>= 1)
        caster_level: Caster level, kept equal to class level by epic advancement
        spells_known: Spell level -> number of spells known
    """

    class_name: str = Field(..., description="Class name")
    level: int = Field(default=1, ge=1, description="Levels in this class")
    caster_level: int | None = Field(default=None)
    spells_known: dict[int, int] = Field(default_factory=dict)


class EquipmentItem(BaseModel):
    """
    A piece of equipment carried by the character.

    Armor is recognized by type "armor"; shields by category "Shield".
    """

    name: str = Field(default="")
    equipped: bool = Field(default=False)
    type: str = Field(default="gear")
    category: str = Field(default="")
    armor_bonus: int = Field(default=0)
    max_dex_bonus: int | None = Field(default=None)
    deflection_bonus: int = Field(default=0)
    natural_armor_bonus: int = Field(default=0)


class DivineAscension(BaseModel):
    """Record of a character's ascension to divinity."""

    type: str = Field(default="quasi-deity")
    portfolio: list[str] = Field(default_factory=list)
    domains: list[str] = Field(default_factory=list)
    followers: int = Field(default=0)


class EpicState(BaseModel):
    """
    Epic progression state. Only epic advancement writes to it.

    Attributes:
        epic_level: Character level above 20
        attack_bonus: Epic attack bonus, (epic_level + 1) // 2
        save_bonus: Epic save bonus, epic_level // 2
        available_feats: Regular feats gained and not yet chosen
        available_epic_feats: Class name -> bonus epic feats gained
        ability_increases: Ability score increases gained
        hit_points_gained: Hit points accrued by epic advancement
        skill_points_gained: Skill points accrued by epic advancement
        class_features: Class name -> scaling feature values
        divine_rank: Divine rank, None while mortal
        potential_divine_rank: Highest rank the character could ascend to
        ascension: Ascension record once the character qualifies
    """

    epic_level: int = Field(default=0, ge=0)
    attack_bonus: int = Field(default=0)
    save_bonus: int = Field(default=0)
    available_feats: int = Field(default=0)
    available_epic_feats: dict[str, int] = Field(default_factory=dict)
    ability_increases: int = Field(default=0)
    hit_points_gained: int = Field(default=0)
    skill_points_gained: int = Field(default=0)
    class_features: dict[str, dict[str, int | str | None]] = Field(default_factory=dict)
    divine_rank: int | None = Field(default=None)
    potential_divine_rank: int | None = Field(default=None)
    ascension: DivineAscension | None = Field(default=None)


class Character(BaseModel):
    """
    Input to the statistics engine.

    Attributes:
        name: Character name
        race: Race name, matched exactly against the rulebook
        alignment: Alignment, abbreviated ("LG") or spelled out ("Lawful Good")
        age: Age in years
        size: Size override; None uses the race size
        base_abilities: Rolled ability scores before racial adjustments
        classes: Class levels in the order they were taken
        equipment: Carried equipment
        natural_armor: Natural armor bonus to AC
        deflection_bonus: Deflection bonus to AC
        misc_armor_bonus: Untyped AC bonus
        feats: Feat names
        followers: Number of followers or worshippers
        achievements: Narrative achievement flags
        epic: Epic progression state
    """

    name: str = Field(default="Unnamed")
    race: str = Field(default="Human")
    alignment: str = Field(default="True Neutral")
    age: int | None = Field(default=None)
    size: Size | None = Field(default=None)
    base_abilities: AbilityBlock = Field(default_factory=AbilityBlock)
    classes: list[ClassLevel] = Field(default_factory=list)
    equipment: list[EquipmentItem] = Field(default_factory=list)
    natural_armor: int = Field(default=0)
    deflection_bonus: int = Field(default=0)
    misc_armor_bonus: int = Field(default=0)
    feats: list[str] = Field(default_factory=list)
    followers: int = Field(default=0, ge=0)
    achievements: list[str] = Field(default_factory=list)
    epic: EpicState = Field(default_factory=EpicState)

    @property
    def level(self) -> int:
        """Total character level (sum of class levels)."""
        return sum(class_level.level for class_level in self.classes)

    def get_class(self, class_name: str) -> ClassLevel | None:
        """Get the first class entry with the given name, or None."""
        for class_level in self.classes:
            if class_level.class_name == class_name:
                return class_level
        return None
