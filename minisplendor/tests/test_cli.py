"""
Tests for the command-line front end and its configuration.
"""

import pytest
from pydantic import ValidationError

from ..cli import Command, ParseError, main, parse_command, run_session
from ..config import DEFAULT_SAVE_PATH, Settings
from ..engine_core.processor import ActionProcessor
from ..engine_core.state import ChipColor
from ..presentation import BuyCardRequest, GameService, TakeChipRequest


class TestParseCommand:
    """Tests for parse_command()."""

    def test_blank(self):
        assert parse_command("   ") is None

    def test_take(self):
        parsed = parse_command("take RED")
        assert isinstance(parsed, TakeChipRequest)
        assert parsed.color == ChipColor.RED

    def test_buy(self):
        parsed = parse_command("buy 12")
        assert isinstance(parsed, BuyCardRequest)
        assert parsed.card_id == 12

    @pytest.mark.parametrize("line, hint", [
        ("take", "Usage: take"),
        ("take red blue", "Usage: take"),
        ("take gold", "Unknown color"),
        ("buy", "Usage: buy"),
        ("buy card", "Not a card id"),
        ("buy -3", "Not a card id"),
        ("end now", "takes no arguments"),
        ("save a b", "Usage: save"),
        ("dance", "Unknown command"),
    ])
    def test_malformed(self, line, hint):
        parsed = parse_command(line)
        assert isinstance(parsed, ParseError)
        assert hint in parsed.message

    def test_simple_commands(self):
        assert parse_command("END") == Command(name="end")
        assert parse_command("exit") == Command(name="quit")

    def test_file_commands(self):
        assert parse_command("save") == Command(name="save")
        assert parse_command("load game.sav") == Command(name="load", argument="game.sav")


class TestRunSession:
    """Tests for the interactive loop."""

    def run(self, service, lines, settings=None):
        output = []
        run_session(service, lines, settings or Settings(), out=output.append)
        return output

    def test_three_colors_pass_turn(self, service):
        output = self.run(service, ["take red", "take blue", "take green"])
        assert "Took a Green chip. Turn ended." in output
        assert service.get_state().current_player_number == 2

    def test_rejection_shown(self, service):
        output = self.run(service, ["buy 0"])
        assert "Cannot buy card ID 0. Not enough chips." in output

    def test_quit_without_saving(self, service, tmp_path):
        path = tmp_path / "game.sav"
        output = self.run(service, ["quit", "n", "take red"], Settings(save_path=str(path)))
        assert "Save before quitting? [y/n/cancel]" in output
        assert output[-1] == "Goodbye."
        assert service.get_state().chips_taken["Red"] == 0
        assert not path.exists()

    def test_quit_with_save(self, service, tmp_path):
        path = tmp_path / "game.sav"
        output = self.run(service, ["take blue", "quit", "y", "take red"], Settings(save_path=str(path)))
        assert f"Game saved to {path}" in output
        assert output[-1] == "Goodbye."
        assert service.get_state().chips_taken["Red"] == 0

        restored = GameService()
        restored.load_game(path)
        assert restored.get_state().chips_taken["Blue"] == 1

    def test_quit_cancelled(self, service, tmp_path):
        path = tmp_path / "game.sav"
        output = self.run(service, ["quit", "cancel", "take red"], Settings(save_path=str(path)))
        assert "Quit cancelled." in output
        assert "Goodbye." not in output
        assert service.get_state().chips_taken["Red"] == 1
        assert not path.exists()

    def test_quit_at_end_of_input(self, service):
        output = self.run(service, ["quit"])
        assert output[-1] == "Goodbye."

    def test_save_uses_default_path(self, service, tmp_path):
        path = tmp_path / "default.sav"
        output = self.run(service, ["take white", "save"], Settings(save_path=str(path)))
        assert f"Game saved to {path}" in output
        assert path.exists()

    def test_load_replaces_game(self, tmp_path):
        path = tmp_path / "game.sav"
        saved = GameService()
        saved.new_game()
        saved.handle_request(TakeChipRequest(color="Black"))
        saved.save_game(path)

        service = GameService()
        service.new_game()
        self.run(service, [f"load {path}"])
        assert service.get_state() == saved.get_state()

    def test_help_and_parse_errors(self, service):
        output = self.run(service, ["help", "fly"])
        assert any("take <color>" in line for line in output)
        assert output[-1].startswith("Unknown command")


class TestMain:
    """Tests for main()."""

    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 1
        assert "minisplendor" in capsys.readouterr().out

    def test_show_saved_game(self, rich_state, tmp_path, capsys):
        path = tmp_path / "game.sav"
        ActionProcessor(rich_state).save_game(path)
        main(["show", str(path)])
        assert "Player 2 to move" in capsys.readouterr().out

    def test_show_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["show", str(tmp_path / "missing.sav")])
        assert excinfo.value.code == 1
        assert "Could not load" in capsys.readouterr().err

    def test_bad_log_level(self, monkeypatch, capsys):
        monkeypatch.setenv("MINISPLENDOR_LOG_LEVEL", "LOUD")
        with pytest.raises(SystemExit) as excinfo:
            main(["show", "whatever.sav"])
        assert excinfo.value.code == 2


class TestSettings:
    """Tests for environment settings."""

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.save_path == DEFAULT_SAVE_PATH
        assert settings.log_level == "WARNING"

    def test_from_env(self):
        settings = Settings.from_env({
            "MINISPLENDOR_SAVE_PATH": "/tmp/x.sav",
            "MINISPLENDOR_LOG_LEVEL": "debug",
        })
        assert settings.save_path == "/tmp/x.sav"
        assert settings.log_level == "DEBUG"

    def test_unknown_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")
