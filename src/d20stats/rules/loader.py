"""
Rulebook loader for d20stats.

Handles loading and validating race, class and table data from YAML files.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from d20stats.config import get_settings
from d20stats.errors import RulesLoadError, RulesValidationError

from .models import ClassDefinition, ProgressionTables, RaceDefinition, Rulebook

logger = structlog.get_logger(__name__)

RACES_FILE = "races.yaml"
CLASSES_FILE = "classes.yaml"
TABLES_FILE = "tables.yaml"


def load_yaml_file(file_path: Path, key: str) -> Any:
    """
    Load a YAML file and return the value stored under a top-level key.

    Args:
        file_path: Path to the YAML file
        key: Top-level key expected in the file (e.g., "races")

    Returns:
        The value stored under the key

    Raises:
        RulesLoadError: If the file cannot be loaded or parsed
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise RulesLoadError(f"YAML parsing error in {file_path}: {e}") from e
    except FileNotFoundError as e:
        raise RulesLoadError(f"File not found: {file_path}") from e
    except OSError as e:
        raise RulesLoadError(f"Error loading {file_path}: {e}") from e

    if not data:
        raise RulesLoadError(f"Empty YAML file: {file_path}")

    if not isinstance(data, dict) or key not in data:
        raise RulesLoadError(f"Missing '{key}' key in {file_path}")

    return data[key]


def load_races(file_path: Path) -> dict[str, RaceDefinition]:
    """
    Load race definitions.

    Args:
        file_path: Path to races.yaml

    Returns:
        Dictionary mapping race name to RaceDefinition

    Raises:
        RulesLoadError: If the file cannot be loaded
        RulesValidationError: If a race entry is invalid or duplicated
    """
    entries = load_yaml_file(file_path, "races")
    if not isinstance(entries, list):
        raise RulesLoadError(f"'races' must be a list in {file_path}")

    races: dict[str, RaceDefinition] = {}
    for entry in entries:
        try:
            race = RaceDefinition.model_validate(entry)
        except ValidationError as e:
            name = entry.get("name", "unknown") if isinstance(entry, dict) else "unknown"
            raise RulesValidationError(f"Invalid race '{name}' in {file_path}: {e}") from e

        if race.name in races:
            raise RulesValidationError(f"Duplicate race '{race.name}' found in {file_path}")
        races[race.name] = race

    return races


def load_classes(file_path: Path) -> dict[str, ClassDefinition]:
    """
    Load class definitions.

    Args:
        file_path: Path to classes.yaml

    Returns:
        Dictionary mapping class name to ClassDefinition

    Raises:
        RulesLoadError: If the file cannot be loaded
        RulesValidationError: If a class entry is invalid or duplicated
    """
    entries = load_yaml_file(file_path, "classes")
    if not isinstance(entries, list):
        raise RulesLoadError(f"'classes' must be a list in {file_path}")

    classes: dict[str, ClassDefinition] = {}
    for entry in entries:
        try:
            class_def = ClassDefinition.model_validate(entry)
        except ValidationError as e:
            name = entry.get("name", "unknown") if isinstance(entry, dict) else "unknown"
            raise RulesValidationError(f"Invalid class '{name}' in {file_path}: {e}") from e

        if class_def.name in classes:
            raise RulesValidationError(f"Duplicate class '{class_def.name}' found in {file_path}")
        classes[class_def.name] = class_def

    return classes


def load_tables(file_path: Path) -> ProgressionTables:
    """
    Load the fixed progression tables.

    Args:
        file_path: Path to tables.yaml

    Returns:
        ProgressionTables instance

    Raises:
        RulesLoadError: If the file cannot be loaded
        RulesValidationError: If the tables are malformed
    """
    data = load_yaml_file(file_path, "tables")
    try:
        return ProgressionTables.model_validate(data)
    except ValidationError as e:
        raise RulesValidationError(f"Invalid progression tables in {file_path}: {e}") from e


def load_rulebook(rules_dir: Path | None = None) -> Rulebook:
    """
    Load a complete rulebook from a directory.

    This is the main entry point for loading rule data.

    Args:
        rules_dir: Directory containing races.yaml, classes.yaml and tables.yaml.
            If None, uses the configured directory (bundled data by default).

    Returns:
        Rulebook instance

    Raises:
        RulesLoadError: If the directory or a file cannot be loaded
        RulesValidationError: If rule data is malformed
    """
    if rules_dir is None:
        rules_dir = get_settings().effective_rules_dir

    if not rules_dir.exists():
        raise RulesLoadError(f"Directory does not exist: {rules_dir}")

    if not rules_dir.is_dir():
        raise RulesLoadError(f"Not a directory: {rules_dir}")

    rulebook = Rulebook(
        races=load_races(rules_dir / RACES_FILE),
        classes=load_classes(rules_dir / CLASSES_FILE),
        tables=load_tables(rules_dir / TABLES_FILE),
    )

    logger.info(
        "rulebook_loaded",
        rules_dir=str(rules_dir),
        races=len(rulebook.races),
        classes=len(rulebook.classes),
    )

    return rulebook


@lru_cache
def get_default_rulebook() -> Rulebook:
    """Get the cached rulebook for the configured rules directory."""
    return load_rulebook()
