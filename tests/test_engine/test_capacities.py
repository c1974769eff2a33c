"""Tests for spells per day, carrying capacity and experience thresholds."""

import pytest

from d20stats.character.attributes import calculate_modifiers
from d20stats.character.model import AbilityBlock, ClassLevel
from d20stats.engine.carrying import base_loads, calculate_carrying_capacity
from d20stats.engine.experience import calculate_experience, xp_for_level, xp_for_next_level
from d20stats.engine.spellcasting import bonus_spells, calculate_spells_per_day, spells_per_day
from d20stats.rules.models import Size


class TestBonusSpells:
    """Tests for bonus spells from a high casting ability."""

    def test_modifier_four(self):
        """Modifier +4 grants one bonus spell of levels 1-4."""
        bonus = bonus_spells(4)

        assert len(bonus) == 10
        assert bonus[1] == 1
        assert bonus[4] == 1
        assert bonus[5] == 0

    def test_no_bonus_cantrips(self):
        """Level-0 spells never get bonus slots."""
        assert bonus_spells(10)[0] == 0

    def test_large_modifier(self):
        """Modifier +9 grants three 1st-level bonus spells."""
        assert bonus_spells(9)[1] == 3
        assert bonus_spells(9)[9] == 1

    def test_negative_modifier(self):
        """A penalty grants nothing."""
        assert bonus_spells(-2) == (0,) * 10


class TestSpellsPerDay:
    """Tests for spells-per-day lookups."""

    def test_wizard_first_level(self, rulebook):
        """Wizard 1 with Int 18: base [3, 1] plus one 1st-level bonus spell."""
        descriptor = rulebook.class_definition("Wizard").spellcasting

        assert spells_per_day(descriptor, 1, 4) == (3, 2)

    def test_wizard_fifth_level(self, rulebook):
        """Bonus spells are added to every spell level the table grants."""
        descriptor = rulebook.class_definition("Wizard").spellcasting

        assert spells_per_day(descriptor, 5, 4) == (4, 4, 3, 2)

    def test_bonus_only_where_base_slot(self, rulebook):
        """A zero base slot receives no bonus spells."""
        descriptor = rulebook.class_definition("Paladin").spellcasting

        assert spells_per_day(descriptor, 4, 4) == (0, 0)
        assert spells_per_day(descriptor, 6, 4) == (0, 2)

    def test_below_first_tabulated_level(self, rulebook):
        """Paladins cast nothing before 4th level."""
        descriptor = rulebook.class_definition("Paladin").spellcasting

        assert spells_per_day(descriptor, 2, 3) == ()

    def test_epic_levels_reuse_20th_row(self, rulebook):
        """Levels past 20 use the 20th-level table."""
        descriptor = rulebook.class_definition("Sorcerer").spellcasting

        assert spells_per_day(descriptor, 25, 0) == spells_per_day(descriptor, 20, 0)

    def test_per_class_entries(self, rulebook):
        """Only spellcasting classes get an entry, each with its own ability."""
        modifiers = calculate_modifiers(AbilityBlock(intelligence=16, wisdom=14))
        classes = [
            ClassLevel(class_name="Fighter", level=2),
            ClassLevel(class_name="Wizard", level=3),
            ClassLevel(class_name="Cleric", level=1),
        ]
        result = calculate_spells_per_day(classes, modifiers, rulebook)

        assert set(result) == {"Wizard", "Cleric"}
        assert result["Wizard"] == (4, 3, 2)
        assert result["Cleric"] == (3, 2)


class TestCarryingCapacity:
    """Tests for carrying capacity."""

    def test_table_rows(self, tables):
        """Strength 1-10 reads the table."""
        assert base_loads(1, tables) == (10, 20, 30)
        assert base_loads(10, tables) == (40, 80, 120)

    def test_below_table(self, tables):
        """Strength below 1 uses the first row."""
        assert base_loads(0, tables) == (10, 20, 30)

    def test_extrapolation(self, tables):
        """Above 10: doubled per full ten points, +25% per remaining point."""
        assert base_loads(15, tables) == (90, 180, 270)
        assert base_loads(20, tables) == (80, 160, 240)
        assert base_loads(24, tables) == (160, 320, 480)

    def test_derived_limits(self, tables):
        """Lift and drag limits derive from the heavy load."""
        capacity = calculate_carrying_capacity(10, Size.MEDIUM, tables)

        assert capacity.max_load == 120
        assert capacity.lift_over_head == 120
        assert capacity.lift_off_ground == 240
        assert capacity.drag_or_push == 600

    def test_size_multiplier(self, tables):
        """Small creatures carry three quarters, Large twice as much."""
        small = calculate_carrying_capacity(10, Size.SMALL, tables)
        large = calculate_carrying_capacity(10, Size.LARGE, tables)

        assert (small.light, small.medium, small.heavy) == (30, 60, 90)
        assert large.heavy == 240

    def test_fine_size(self, tables):
        """Fine creatures carry one eighth."""
        assert calculate_carrying_capacity(10, Size.FINE, tables).heavy == 15


class TestExperience:
    """Tests for XP thresholds."""

    def test_table_levels(self, tables):
        """Levels 1-20 read the experience table."""
        assert xp_for_level(1, tables) == 0
        assert xp_for_level(2, tables) == 1000
        assert xp_for_level(5, tables) == 10000
        assert xp_for_level(20, tables) == 190000

    def test_epic_levels(self, tables):
        """The triangular rule continues past 20."""
        assert xp_for_level(21, tables) == 210000
        assert xp_for_level(30, tables) == 435000

    def test_next_level(self, tables):
        """XP from one level to the next."""
        assert xp_for_next_level(1, tables) == 1000
        assert xp_for_next_level(20, tables) == 20000

    def test_thresholds(self, tables):
        """Current, next and needed are reported with the penalty."""
        thresholds = calculate_experience(5, tables, 0.2)

        assert thresholds.current == 10000
        assert thresholds.next == 15000
        assert thresholds.needed == 5000
        assert thresholds.penalty == pytest.approx(0.2)
