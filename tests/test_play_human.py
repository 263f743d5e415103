"""
Tests for the terminal front end's command parsing.
"""

from tools.play_human import parse_command
from pookalam.puzzle_core.ring_ops import Direction


class TestParseCommand:
    """Test input parsing."""

    def test_forward_rotation(self):
        assert parse_command("2") == ("rotate", 2, Direction.FORWARD)
        assert parse_command(" 1f ") == ("rotate", 1, Direction.FORWARD)

    def test_backward_rotation(self):
        assert parse_command("3b") == ("rotate", 3, Direction.BACKWARD)
        assert parse_command("0-") == ("rotate", 0, Direction.BACKWARD)

    def test_letter_commands(self):
        for cmd in ("r", "n", "m", "q"):
            assert parse_command(cmd.upper()) == (cmd, None, None)

    def test_unknown(self):
        assert parse_command("")[0] == "unknown"
        assert parse_command("spin")[0] == "unknown"
        assert parse_command("b")[0] == "unknown"
