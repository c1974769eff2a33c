"""Command-line entry point for d20stats."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from d20stats.character.model import Character
from d20stats.config import get_settings
from d20stats.engine.orchestrator import StatsOrchestrator
from d20stats.errors import D20StatsError
from d20stats.log_config import configure_logging
from d20stats.rules.loader import load_rulebook

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    argparser = argparse.ArgumentParser(
        prog="d20stats", description="Derive d20 3.5 character statistics"
    )
    argparser.add_argument("character_file", type=Path, help="Character file (YAML or JSON)")
    argparser.add_argument("--rules-dir", type=Path, default=None, help="Rule data directory")
    argparser.add_argument("--advance-to", type=int, default=None, help="Advance to this epic level first")
    argparser.add_argument("--class", dest="class_name", default=None, help="Class receiving epic levels")
    argparser.add_argument("--format", choices=["json", "yaml"], default="json", help="Output format")
    return argparser


def load_character(file_path: Path) -> Character:
    """
    Load a character from a YAML or JSON file.

    JSON is valid YAML, so both are read with the YAML loader.

    Raises:
        D20StatsError: If the file cannot be read or does not describe a character
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise D20StatsError(f"Cannot parse character file {file_path}: {e}") from e
    except OSError as e:
        raise D20StatsError(f"Cannot read character file {file_path}: {e}") from e

    try:
        return Character.model_validate(data or {})
    except ValidationError as e:
        raise D20StatsError(f"Invalid character in {file_path}: {e}") from e


def render(data: dict[str, Any], output_format: str) -> str:
    """Render snapshot data as JSON or YAML."""
    if output_format == "yaml":
        return yaml.safe_dump(data, sort_keys=False)
    return json.dumps(data, indent=2)


def main(argv: list[str] | None = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        rulebook = load_rulebook(args.rules_dir)
        character = load_character(args.character_file)
        orchestrator = StatsOrchestrator(rulebook=rulebook, settings=get_settings())

        if args.advance_to is not None:
            orchestrator.advance_to_epic_level(character, args.advance_to, class_name=args.class_name)

        snapshot = orchestrator.calculate_all_stats(character)
    except D20StatsError as e:
        logger.error("stats_failed", error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(render(snapshot.as_dict(), args.format))
    return 0


def run() -> None:
    """Synchronous entry point called from the command line."""
    sys.exit(main())


if __name__ == "__main__":
    run()
