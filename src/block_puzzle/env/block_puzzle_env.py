from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_puzzle.game import SHAPE_CATALOG, BlockPuzzleGame, GameConfig, catalog_index
from block_puzzle.game.shapes import COLOR_RGB, EMPTY_RGB


def _compute_action_mask(game: BlockPuzzleGame) -> np.ndarray:
    size = game.config.grid_size
    k = game.config.pieces_per_set
    mask = np.zeros((k, size, size), dtype=np.bool_)
    for piece_idx, row, col in game.get_valid_actions():
        if 0 <= piece_idx < k:
            mask[piece_idx, row, col] = True
    return mask


class BlockPuzzleEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 invalid_action_penalty: float = -0.1,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = 0.0,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = BlockPuzzleGame(config)
        self.render_mode = render_mode

        # Reward shaping parameters
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)
        self.reward_weights: Dict[str, float] = {
            "points": 0.01,  # per engine score point
            "lines": 1.0,    # per line cleared
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        size = self.game.config.grid_size
        k = self.game.config.pieces_per_set

        # Observation space: occupancy grid and catalog indices of current pieces (-1 for used)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=len(SHAPE_CATALOG) - 1, shape=(k,), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
                "streak": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(1,), dtype=np.int32),
            }
        )

        # Action: (piece_idx, row, col)
        self.action_space = spaces.MultiDiscrete((k, size, size))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        k = self.game.config.pieces_per_set
        grid = (self.game.grid != 0).astype(np.int8)
        pieces = np.full((k,), -1, dtype=np.int8)
        for i, piece in enumerate(self.game.current_pieces[:k]):
            pieces[i] = catalog_index(piece)
        return {
            "grid": grid,
            "pieces": pieces,
            "pieces_remaining": len(self.game.current_pieces),
            "streak": np.array([self.game.streak], dtype=np.int32),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "valid_actions": self.game.get_valid_actions(),
            "score": self.game.score,
            "streak": self.game.streak,
            "steps": self.game.step_count,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: np.ndarray | Tuple[int, int, int]):
        piece_idx, row, col = map(int, action)

        outcome = self.game.place_piece(piece_idx, row, col)

        reward_components: Dict[str, float] = {}
        if outcome.placed:
            reward_components["points"] = self.reward_weights["points"] * float(outcome.points)
            reward_components["lines"] = self.reward_weights["lines"] * float(outcome.lines_cleared)
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        reward_components["step"] = self.step_penalty
        terminated = bool(self.game.game_over)
        self._steps += 1
        truncated = self._steps >= self.max_episode_steps and not terminated
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = float(outcome.points if outcome.placed else 0.0)
        info["cleared_positions"] = sorted(outcome.cleared_positions)
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self.game.grid
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = COLOR_RGB.get(int(grid[y, x]), EMPTY_RGB)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
