"""Tests for the command-line interface and display."""

import pytest
from sheep_battle.cli.main import build_parser, main
from sheep_battle.core import encode
from sheep_battle.utils import render_board


def test_parser_defaults():
    """Test default options."""
    args = build_parser().parse_args(["play"])

    assert args.level == "one"
    assert args.depth == 6
    assert args.log_level == "INFO"


def test_parser_match_options():
    """Test match options."""
    args = build_parser().parse_args(
        ["--log-level", "DEBUG", "match", "--level", "test", "--ai-depth", "3", "--no-progress"]
    )

    assert args.level == "test"
    assert args.ai_depth == 3
    assert args.human_depth == 2
    assert args.no_progress
    assert args.log_level == "DEBUG"


def test_no_command_exits():
    """Test running without a command prints help and fails."""
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1


def test_unknown_level_exits():
    """Test unknown levels are reported."""
    with pytest.raises(SystemExit) as excinfo:
        main(["match", "--level", "nope", "--no-progress"])
    assert excinfo.value.code == 2


def test_levels_command(capsys):
    """Test the level listing."""
    main(["levels"])
    out = capsys.readouterr().out

    assert "Test level" in out
    assert "8x8" in out


def test_match_command(capsys):
    """Test a match on the 1x1 level."""
    main(["match", "--level", "two", "--human-depth", "1", "--ai-depth", "1", "--no-progress"])
    out = capsys.readouterr().out

    assert "Winner is: Human" in out


def test_render_board():
    """Test board rendering shows indices and stacks."""
    assert "0" in render_board((1,), 1, 1).plain
    assert "H16" in render_board((encode(16, 0),), 1, 1).plain

    text = render_board((0, 1, encode(3, 1), 1), 2, 2).plain
    assert "A 3" in text
    assert "3" in text.splitlines()[1]
