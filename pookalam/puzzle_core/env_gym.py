"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the ring puzzle.
Reward is always 0.0 - agents compute their own from info.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from pookalam.puzzle_core.config_loader import GameConfig, load_config
from pookalam.puzzle_core.ring_ops import Direction
from pookalam.puzzle_core.session import PuzzleSession
from pookalam.puzzle_core.state_snapshot import GameSnapshot


class PookalamEnv(gym.Env):
    """
    Pookalam ring puzzle as a Gymnasium environment.

    Action Space:
        Discrete(2 * max_level). Action ``a`` rotates ring ``a // 2``,
        forward when ``a`` is even and backward when odd. Rings beyond the
        current level are invalid; see action_masks().

    Observation Space:
        Dict of fixed-size arrays from GameSnapshot.

    Reward:
        Always 0.0. Agents must compute their own reward from the info dict.

    Episodes:
        One episode runs from level 1 to the final level. Solving an
        intermediate level advances immediately (no observation delay).
        Terminates when the final level is solved; truncates at
        caps.max_moves total rotations.
    """

    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 4,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        debug: bool = False,
    ):
        """
        Initialize ring puzzle environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "ansi" for a text board, None for headless.
            debug: If True, enables verbose debug output for agent development.
        """
        super().__init__()

        self._config = load_config(config_path)
        self.render_mode = render_mode
        self._debug = debug

        self._session = PuzzleSession(config=self._config, auto_advance=False)
        self._episode_moves: int = 0

        self.action_space = spaces.Discrete(2 * self._config.max_level)
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] PookalamEnv initialized")
            print(f"[DEBUG]   Rings: {list(self._config.segment_counts)}")
            print(f"[DEBUG]   Max moves: {self._config.caps.max_moves}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_level = self._config.max_level
        max_seg = self._config.max_segments
        max_color = max(self._config.palette_sizes)
        max_moves = self._config.caps.max_moves

        return spaces.Dict({
            "level": spaces.Box(low=1, high=max_level, shape=(), dtype=np.int32),
            "moves": spaces.Box(low=0, high=max_moves, shape=(), dtype=np.int32),
            "is_complete": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),
            "solved_ring_count": spaces.Box(low=0, high=max_level, shape=(), dtype=np.int32),
            "min_moves_remaining": spaces.Box(low=0, high=max_level * max_seg, shape=(), dtype=np.int32),
            "ring_active": spaces.Box(low=0, high=1, shape=(max_level,), dtype=np.int8),
            "ring_solved": spaces.Box(low=0, high=1, shape=(max_level,), dtype=np.int8),
            "segment_counts": spaces.Box(low=0, high=max_seg, shape=(max_level,), dtype=np.int32),
            "ring_offsets": spaces.Box(low=-1, high=max_seg, shape=(max_level,), dtype=np.int32),
            "rings": spaces.Box(low=-1, high=max_color - 1, shape=(max_level, max_seg), dtype=np.int16),
            "target": spaces.Box(low=-1, high=max_color - 1, shape=(max_level, max_seg), dtype=np.int16),
            "segment_mask": spaces.Box(low=0, high=1, shape=(max_level, max_seg), dtype=np.int8),
        })

    @staticmethod
    def decode_action(action: int) -> Tuple[int, Direction]:
        """Split a discrete action into (ring_index, direction)."""
        action = int(action)
        direction = Direction.FORWARD if action % 2 == 0 else Direction.BACKWARD
        return action // 2, direction

    @staticmethod
    def encode_action(ring_index: int, direction: Direction) -> int:
        """Inverse of decode_action."""
        return ring_index * 2 + (0 if Direction.parse(direction) is Direction.FORWARD else 1)

    def action_masks(self) -> np.ndarray:
        """Boolean mask of actions valid at the current level."""
        mask = np.zeros(self.action_space.n, dtype=bool)
        mask[: 2 * self._session.level] = True
        return mask

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment to level 1.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        if seed is not None:
            self._session.engine.rotation_source.reset(seed)
        self._session.reset()
        self._episode_moves = 0

        obs = self._snapshot_to_obs(self._session.snapshot())
        info = self._get_info()
        info["level_advanced"] = False
        return obs, info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one rotation.

        Args:
            action: Discrete action, see class docstring.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.

        Raises:
            ValueError: If the action rotates a ring not active at this level.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item())

        ring_index, direction = self.decode_action(action)
        result = self._session.rotate(ring_index, direction)
        self._episode_moves += 1

        level_advanced = False
        solved_level = result.state.level
        if result.became_complete and not self._session.is_final_success:
            self._session.advance()
            level_advanced = True

        terminated = self._session.is_final_success
        truncated = not terminated and self._episode_moves >= self._config.caps.max_moves

        obs = self._snapshot_to_obs(self._session.snapshot())
        reward = 0.0

        info = self._get_info()
        info["feedback"] = result.feedback.kind
        info["level_advanced"] = level_advanced
        if level_advanced:
            info["solved_level"] = solved_level

        if self._debug:
            print(f"[DEBUG] Step: ring={ring_index}, dir={direction.value}, "
                  f"level={info['level']}, moves={info['moves']}, feedback={result.feedback.kind}")
            if terminated:
                print(f"[DEBUG] TERMINATED: final level solved in {self._episode_moves} moves")

        return obs, reward, terminated, truncated, info

    def _get_info(self) -> Dict[str, Any]:
        info = self._session.get_info()
        info["episode_moves"] = self._episode_moves
        return info

    def _snapshot_to_obs(self, snapshot: GameSnapshot) -> Dict[str, np.ndarray]:
        """Convert snapshot to observation dict."""
        return snapshot.to_obs_dict()

    def render(self) -> Optional[str]:
        """
        Render the current state as text.

        Returns:
            Board string if render_mode is "ansi", None otherwise.
        """
        if self.render_mode == "ansi":
            return format_board(self._session)
        return None

    def close(self) -> None:
        """Clean up resources."""
        pass

    @property
    def session(self) -> PuzzleSession:
        """Access to underlying session (for debugging/tools)."""
        return self._session

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config


def format_board(session: PuzzleSession) -> str:
    """Plain-text view of every active ring against its target."""
    data = session.get_render_data()
    lines = [f"Level {data['level']}/{session.engine.max_level}  Moves {data['moves']}"]
    for ring in data["rings"]:
        mark = "*" if ring["solved"] else " "
        current = " ".join(f"{c:2d}" for c in ring["color_indices"])
        lines.append(f"{mark} [{ring['ring_index']}] {ring['name']:<13} {current}")
    if data["is_complete"]:
        lines.append("Pookalam complete!" if session.is_final_success else "Ring pattern complete!")
    return "\n".join(lines)
