"""End-to-end tests for the d20stats command line."""

import json

import pytest
import yaml

from d20stats.main import main

FIGHTER_YAML = """\
name: Aldric
race: Dwarf
alignment: LN
base_abilities:
  strength: 16
  constitution: 13
classes:
  - class_name: Fighter
    level: 20
"""


@pytest.fixture
def character_file(tmp_path):
    """A 20th-level dwarf fighter on disk."""
    path = tmp_path / "aldric.yaml"
    path.write_text(FIGHTER_YAML)
    return path


class TestCli:
    """Tests for the command-line entry point."""

    def test_json_output(self, character_file, capsys):
        """The snapshot is printed as JSON."""
        assert main([str(character_file)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["name"] == "Aldric"
        assert data["level"] == 20
        assert data["abilities"]["constitution"] == 15
        assert data["hit_dice"] == {"d10": 20}
        assert data["validation"]["valid"] is True

    def test_yaml_output(self, character_file, capsys):
        """--format yaml prints YAML."""
        assert main([str(character_file), "--format", "yaml"]) == 0

        data = yaml.safe_load(capsys.readouterr().out)
        assert data["base_attack_bonus"] == 20
        assert data["attacks"]["melee"]["iterative"] == [18, 13, 8]

    def test_advance_to_epic(self, character_file, capsys):
        """--advance-to applies epic advancement before calculating."""
        assert main([str(character_file), "--advance-to", "24"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["level"] == 24
        assert data["epic_level"] == 4
        assert data["attacks"]["melee"]["epic"] == 2
        assert data["saving_throws"]["will"]["epic"] == 2

    def test_invalid_advance(self, character_file, capsys):
        """An invalid transition exits with status 1."""
        assert main([str(character_file), "--advance-to", "12"]) == 1

        assert "Epic levels start at level 21" in capsys.readouterr().err

    def test_json_character_file(self, tmp_path, capsys):
        """JSON character files are accepted."""
        path = tmp_path / "wizard.json"
        path.write_text(json.dumps({"name": "Mirelle", "classes": [{"class_name": "Wizard", "level": 3}]}))

        assert main([str(path)]) == 0
        assert json.loads(capsys.readouterr().out)["spells_per_day"] == {"Wizard": [4, 2, 1]}

    def test_missing_character_file(self, tmp_path, capsys):
        """A missing file is reported, not raised."""
        assert main([str(tmp_path / "missing.yaml")]) == 1
        assert "Cannot read character file" in capsys.readouterr().err

    def test_invalid_character(self, tmp_path, capsys):
        """Input that is not a character is rejected."""
        path = tmp_path / "bad.yaml"
        path.write_text("classes:\n  - level: 3\n")

        assert main([str(path)]) == 1
        assert "Invalid character" in capsys.readouterr().err

    def test_bad_rules_dir(self, character_file, tmp_path, capsys):
        """An unusable rules directory fails cleanly."""
        assert main([str(character_file), "--rules-dir", str(tmp_path / "nowhere")]) == 1
        assert "does not exist" in capsys.readouterr().err
