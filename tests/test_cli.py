import pytest
from prompt_toolkit.completion import NestedCompleter

from swisspairing.testing.__main__ import (
    COMMANDS,
    create_completer,
    main,
    run_interactive_mode,
)


class ScriptedSession:
    """Stands in for a PromptSession, replaying typed lines."""

    def __init__(self, lines):
        self.lines = list(lines)

    def prompt(self, message):
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


@pytest.fixture
def saved_event(tmp_path):
    path = tmp_path / "event.json"
    main(["generate", "--players", "7", "--rounds", "3", "--seed", "4", "--output", str(path)])
    return path


def test_generate_saves_a_tournament(tmp_path, capsys):
    path = tmp_path / "event.json"
    main(["generate", "--players", "7", "--rounds", "3", "--seed", "4", "--output", str(path)])

    assert path.exists()
    out = capsys.readouterr().out
    assert "Players: 7" in out
    assert "Rounds: 3" in out


def test_standings_command(saved_event, capsys):
    capsys.readouterr()
    assert main(["standings", "--file", str(saved_event), "--tiebreaks", "koya_system"]) == 0
    out = capsys.readouterr().out
    assert "  1. " in out
    assert out.count("\n  ") >= 7


def test_pair_command_pairs_the_next_round(saved_event, capsys):
    capsys.readouterr()
    assert main(["pair", "--file", str(saved_event)]) == 0
    out = capsys.readouterr().out
    assert "Round 4:" in out
    assert "has a bye" in out


def test_missing_file(tmp_path, capsys):
    assert main(["pair", "--file", str(tmp_path / "nope.json")]) == 1
    assert "File not found" in capsys.readouterr().out


def test_benchmark(capsys):
    assert main(["benchmark", "--size", "6", "--rounds", "2", "--iterations", "2"]) == 0
    assert "Average:" in capsys.readouterr().out


def test_completer_knows_every_command():
    completer = create_completer()
    assert isinstance(completer, NestedCompleter)
    for command in COMMANDS:
        assert command in completer.options
        assert f"/{command}" in completer.options


def test_interactive_session(saved_event, capsys):
    session = ScriptedSession(
        [
            "",
            "/help",
            "help standings",
            "shuffle",
            "pair --file",
            f"standings --file {saved_event}",
            "quit",
            "never reached",
        ]
    )
    assert run_interactive_mode(session) == 0
    out = capsys.readouterr().out

    assert "Available Commands" in out
    assert "Command: standings" in out
    assert "Unknown command: shuffle" in out
    assert "Standings (" in out
    assert "Goodbye!" in out
    assert session.lines == ["never reached"]


def test_interactive_session_ends_on_eof(capsys):
    assert run_interactive_mode(ScriptedSession([])) == 0
    assert "Goodbye!" in capsys.readouterr().out
