"""
Human Play Mode
================

Play the pookalam ring puzzle in a terminal.

Commands:
    <ring>      Rotate ring forward (e.g. "0")
    <ring>b     Rotate ring backward (e.g. "2b")
    r           Reshuffle the current level
    n           New game from level 1
    m           Toggle feedback tones
    q           Quit

Usage:
    python -m tools.play_human [--seed SEED] [--level LEVEL]
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import Optional, Tuple

from pookalam.puzzle_core.config_loader import load_config, GameConfig
from pookalam.puzzle_core.env_gym import format_board
from pookalam.puzzle_core.feedback import FeedbackSignal
from pookalam.puzzle_core.ring_ops import Direction
from pookalam.puzzle_core.session import PuzzleSession


def parse_command(text: str) -> Tuple[str, Optional[int], Optional[Direction]]:
    """
    Parse one line of input.

    Returns:
        (kind, ring_index, direction); kind is "rotate", a single-letter
        command, or "unknown".
    """
    text = text.strip().lower()
    if not text:
        return ("unknown", None, None)
    if text in ("r", "n", "m", "q"):
        return (text, None, None)

    direction = Direction.FORWARD
    if text.endswith("b") or text.endswith("-"):
        direction = Direction.BACKWARD
        text = text[:-1]
    elif text.endswith("f") or text.endswith("+"):
        text = text[:-1]

    if text.isdigit():
        return ("rotate", int(text), direction)
    return ("unknown", None, None)


class HumanPlayer:
    """Terminal front end driving a PuzzleSession."""

    def __init__(self, config: GameConfig, seed: Optional[int] = None, start_level: int = 1):
        self._config = config
        self._session = PuzzleSession(config=config, seed=seed)
        self._session.add_feedback_listener(self._on_feedback)
        while self._session.level < start_level:
            self._session.advance()
        self._last_time = time.monotonic()

    def _on_feedback(self, signal: FeedbackSignal) -> None:
        if signal.is_success:
            print(f"  \a*chime* ({signal.frequency:.0f} Hz)")
        else:
            print(f"  *tick* ({signal.frequency:.0f} Hz)")

    def _sync_clock(self) -> None:
        """Feed wall-clock time into the session."""
        now = time.monotonic()
        self._session.tick(now - self._last_time)
        self._last_time = now

    def _wait_for_advance(self) -> None:
        """Block through the observation delay, then let the session advance."""
        pending = self._session.pending_advance
        if pending is None:
            return
        remaining = pending.due_time - self._session.clock
        if remaining > 0:
            time.sleep(remaining)
        self._sync_clock()
        print(f"\n=== Level {self._session.level} ===")

    def run(self) -> int:
        """Main loop. Returns total moves on the last level played."""
        print(format_board(self._session))

        while True:
            try:
                line = input("> ")
            except EOFError:
                break

            self._sync_clock()
            kind, ring_index, direction = parse_command(line)

            if kind == "q":
                break
            elif kind == "r":
                self._session.restart()
                print("\n=== Level Reshuffled ===")
            elif kind == "n":
                self._session.reset()
                print("\n=== Game Restarted ===")
            elif kind == "m":
                muted = self._session.toggle_muted()
                print("Muted" if muted else "Unmuted")
                continue
            elif kind == "rotate":
                try:
                    self._session.rotate(ring_index, direction)
                except ValueError as e:
                    print(f"Error: {e}")
                    continue
            else:
                print("Commands: <ring>[b], r, n, m, q")
                continue

            print(format_board(self._session))

            if self._session.is_final_success:
                print("\nAll rings aligned! Press n to play again.")
            elif self._session.pending_advance is not None:
                self._wait_for_advance()
                print(format_board(self._session))

        return self._session.moves


def main():
    parser = argparse.ArgumentParser(description="Play the pookalam ring puzzle in a terminal")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--level", type=int, default=1, help="Starting level (default: 1)")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        if not 1 <= args.level <= config.max_level:
            print(f"Error: level must be in [1, {config.max_level}]")
            return 1
        player = HumanPlayer(config=config, seed=args.seed, start_level=args.level)
        moves = player.run()
        print(f"\nMoves: {moves}")
        return 0
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
