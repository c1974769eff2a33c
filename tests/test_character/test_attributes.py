"""Tests for ability modifiers, racial adjustments and age categories."""

from d20stats.character.attributes import (
    ATTRIBUTE_NAMES,
    apply_racial_adjustments,
    calculate_modifiers,
    get_age_category,
    get_modifier,
)
from d20stats.character.model import AbilityBlock


class TestAttributeModifiers:
    """Tests for D&D-style attribute modifier calculations."""

    def test_modifier_average_value(self):
        """Test modifier for average attribute (10-11)."""
        assert get_modifier(10) == 0
        assert get_modifier(11) == 0

    def test_modifier_high_values(self):
        """Test modifiers for high attributes."""
        assert get_modifier(12) == 1
        assert get_modifier(16) == 3
        assert get_modifier(18) == 4

    def test_modifier_low_values(self):
        """Test modifiers for low attributes, rounding down."""
        assert get_modifier(8) == -1
        assert get_modifier(7) == -2
        assert get_modifier(3) == -4
        assert get_modifier(1) == -5

    def test_modifier_epic_values(self):
        """Scores past 25 keep following the formula."""
        assert get_modifier(30) == 10
        assert get_modifier(45) == 17

    def test_modifier_formula(self):
        """Verify modifier follows (value - 10) // 2 formula."""
        for value in range(1, 61):
            assert get_modifier(value) == (value - 10) // 2

    def test_modifier_defaults_to_zero(self):
        """Non-numeric values and scores below 1 resolve to 0."""
        assert get_modifier(0) == 0
        assert get_modifier(-4) == 0
        assert get_modifier(None) == 0
        assert get_modifier("18") == 0
        assert get_modifier(True) == 0

    def test_calculate_modifiers(self):
        """All six modifiers are calculated from a block."""
        modifiers = calculate_modifiers(
            AbilityBlock(strength=18, dexterity=8, constitution=14, intelligence=10, wisdom=12, charisma=3)
        )

        assert modifiers.strength == 4
        assert modifiers.dexterity == -1
        assert modifiers.constitution == 2
        assert modifiers.intelligence == 0
        assert modifiers.wisdom == 1
        assert modifiers.charisma == -4

    def test_modifiers_get_by_name(self):
        """Modifiers can be looked up by attribute name."""
        modifiers = calculate_modifiers(AbilityBlock(wisdom=16))

        assert modifiers.get("wisdom") == 3
        assert modifiers.get("luck") == 0
        assert set(ATTRIBUTE_NAMES) == {
            "strength",
            "dexterity",
            "constitution",
            "intelligence",
            "wisdom",
            "charisma",
        }


class TestRacialAdjustments:
    """Tests for applying race ability adjustments."""

    def test_dwarf_adjustments(self, rulebook):
        """Dwarves gain +2 Constitution and lose 2 Charisma."""
        adjusted = apply_racial_adjustments(AbilityBlock(constitution=13, charisma=8), "Dwarf", rulebook)

        assert adjusted.constitution == 15
        assert adjusted.charisma == 6
        assert adjusted.strength == 10

    def test_half_orc_adjustments(self, rulebook):
        """Half-orcs adjust three abilities."""
        adjusted = apply_racial_adjustments(AbilityBlock(), "Half-Orc", rulebook)

        assert adjusted.strength == 12
        assert adjusted.intelligence == 8
        assert adjusted.charisma == 8

    def test_human_unchanged(self, rulebook):
        """Humans have no ability adjustments."""
        base = AbilityBlock(strength=15, wisdom=9)

        assert apply_racial_adjustments(base, "Human", rulebook) == base

    def test_unknown_race_unchanged(self, rulebook):
        """An unknown race leaves scores untouched."""
        base = AbilityBlock(constitution=13)

        assert apply_racial_adjustments(base, "Tiefling", rulebook) == base

    def test_race_match_is_case_sensitive(self, rulebook):
        """Race names must match exactly."""
        adjusted = apply_racial_adjustments(AbilityBlock(constitution=13), "dwarf", rulebook)

        assert adjusted.constitution == 13

    def test_input_not_modified(self, rulebook):
        """A new block is returned; the input keeps its scores."""
        base = AbilityBlock(constitution=13)
        adjusted = apply_racial_adjustments(base, "Dwarf", rulebook)

        assert base.constitution == 13
        assert adjusted is not base


class TestAgeCategories:
    """Tests for race age category thresholds."""

    def test_human_categories(self, rulebook):
        """Humans move through every category."""
        human = rulebook.race("Human")

        assert get_age_category(human, 12) == "young"
        assert get_age_category(human, 15) == "adulthood"
        assert get_age_category(human, 40) == "middle_age"
        assert get_age_category(human, 53) == "old"
        assert get_age_category(human, 90) == "venerable"

    def test_elf_adult_at_110(self, rulebook):
        """Elves are young until 110."""
        elf = rulebook.race("Elf")

        assert get_age_category(elf, 100) == "young"
        assert get_age_category(elf, 110) == "adulthood"

    def test_missing_age_or_race(self, rulebook):
        """No category without an age or a known race."""
        assert get_age_category(rulebook.race("Human"), None) is None
        assert get_age_category(None, 30) is None
