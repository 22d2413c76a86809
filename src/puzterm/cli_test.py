from dataclasses import replace

import pytest
from click.testing import CliRunner

from puzterm import cli as cli_module
from puzterm.decoder.puz_encoder import encode
from puzterm.session import Session


@pytest.fixture
def played(monkeypatch):
    calls = []
    monkeypatch.setattr(cli_module, "play", lambda session, settings: calls.append((session, settings)))
    return calls


def test_plays_puzzle(tmp_path, small_puzzle_bytes, played):
    path = tmp_path / "tiny.puz"
    path.write_bytes(small_puzzle_bytes)

    result = CliRunner().invoke(cli_module.cli, [str(path)])

    assert result.exit_code == 0, result.output
    session, settings = played[0]
    assert isinstance(session, Session)
    assert session.title == "Tiny"
    assert session.clues_scroll_step == settings.clues_scroll_step


def test_missing_argument(played):
    result = CliRunner().invoke(cli_module.cli, [])
    assert result.exit_code == 2
    assert played == []


def test_missing_file(tmp_path, played):
    result = CliRunner().invoke(cli_module.cli, [str(tmp_path / "nope.puz")])
    assert result.exit_code == 2
    assert played == []


def test_not_a_puzzle(tmp_path, played):
    path = tmp_path / "notes.puz"
    path.write_bytes(b"definitely not a crossword")

    result = CliRunner().invoke(cli_module.cli, [str(path)])

    assert result.exit_code == 1
    assert "Cannot load" in result.output
    assert "ACROSS&DOWN" in result.output
    assert played == []


def test_scrambled(tmp_path, small_puzzle_file, played):
    path = tmp_path / "locked.puz"
    path.write_bytes(encode(replace(small_puzzle_file, scrambled=4)))

    result = CliRunner().invoke(cli_module.cli, [str(path)])

    assert result.exit_code == 1
    assert "scrambled" in result.output
    assert played == []
