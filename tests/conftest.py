"""Shared fixtures for all tests."""

import pytest
import structlog

from d20stats.character.model import AbilityBlock, Character, ClassLevel, EquipmentItem
from d20stats.config import Settings, get_settings
from d20stats.engine.orchestrator import StatsOrchestrator
from d20stats.rules.loader import get_default_rulebook, load_rulebook
from d20stats.rules.models import Rulebook


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep D20STATS_* variables from the environment out of the tests.

    Cached settings and the cached default rulebook are cleared before and
    after every test, and structlog is reset once a test has configured it.
    """
    for name in ("RULES_DIR", "ABILITY_SCORE_MIN", "ABILITY_SCORE_MAX", "EPIC_LEVEL_CAP"):
        monkeypatch.delenv(f"D20STATS_{name}", raising=False)

    get_settings.cache_clear()
    get_default_rulebook.cache_clear()
    yield
    get_settings.cache_clear()
    get_default_rulebook.cache_clear()
    structlog.reset_defaults()


@pytest.fixture(scope="session")
def rulebook() -> Rulebook:
    """The bundled SRD rulebook."""
    return load_rulebook(Settings(_env_file=None).bundled_rules_dir)


@pytest.fixture
def tables(rulebook):
    """Progression tables of the bundled rulebook."""
    return rulebook.tables


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def orchestrator(rulebook, settings) -> StatsOrchestrator:
    """Orchestrator over the bundled rulebook."""
    return StatsOrchestrator(rulebook=rulebook, settings=settings)


@pytest.fixture
def fighter() -> Character:
    """A 5th-level human fighter with average scores."""
    return Character(
        name="Aldric",
        race="Human",
        alignment="Lawful Neutral",
        base_abilities=AbilityBlock(),
        classes=[ClassLevel(class_name="Fighter", level=5)],
    )


@pytest.fixture
def wizard() -> Character:
    """A 5th-level elven wizard with high Intelligence."""
    return Character(
        name="Mirelle",
        race="Elf",
        alignment="Chaotic Good",
        age=120,
        base_abilities=AbilityBlock(intelligence=18, dexterity=14, constitution=12),
        classes=[ClassLevel(class_name="Wizard", level=5)],
    )


@pytest.fixture
def epic_fighter() -> Character:
    """A 20th-level human fighter ready for epic advancement."""
    return Character(
        name="Thorgar",
        race="Human",
        alignment="Lawful Neutral",
        base_abilities=AbilityBlock(strength=18, constitution=14),
        classes=[ClassLevel(class_name="Fighter", level=20)],
        equipment=[
            EquipmentItem(name="Full Plate", equipped=True, type="armor", armor_bonus=8, max_dex_bonus=1),
        ],
    )
