from __future__ import annotations

from typing import Any, Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from abalone.core import (
    DEFAULT_SIZE,
    Board,
    Player,
    action_vector_size,
    decode_action,
    encode_action,
    enumerate_legal_actions,
)
from abalone.features import (
    AUX_VECTOR_SIZE,
    BOARD_CHANNELS,
    build_aux_vector,
    build_board_tensor,
)


class AbaloneEnv(gym.Env):
    """Single-agent view of the game: the agent plays the human side.

    After every agent move the engine answers with its own search until the
    human is to move again or the game is over.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        board_size: int = DEFAULT_SIZE,
        level: int = 1,
        machine_opens: bool = False,
        max_ply: int = 400,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._board_size = board_size
        self._level = level
        self._machine_opens = machine_opens
        self._max_ply = max_ply
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        board_shape = (BOARD_CHANNELS, board_size, board_size)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0.0, high=1.0, shape=board_shape, dtype=np.float32),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(action_vector_size(board_size))

        self._board = Board(board_size, machine_opens, level)
        self._ply = 0

    @property
    def board(self) -> Board:
        return self._board

    @property
    def ply(self) -> int:
        return self._ply

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        options = options or {}
        machine_opens = options.get("machine_opens", self._machine_opens)
        level = options.get("level", self._level)
        self._board = Board(self._board_size, machine_opens, level)
        self._ply = 0
        self._play_machine()
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")

        legal_mask = self.legal_action_mask()
        if not legal_mask[action_index]:
            if self._enforce_legal:
                raise ValueError("Illegal action provided and enforce_legal_actions=True.")
            info = self._build_info()
            info["rejected"] = True
            return self._build_observation(), 0.0, False, False, info

        action = decode_action(int(action_index), self._board_size)
        self._board = self._board.move(*action.as_tuple())
        self._ply += 1
        self._play_machine()

        observation = self._build_observation()
        info = self._build_info()
        terminated = self._board.is_game_over()
        truncated = not terminated and (
            self._ply >= self._max_ply or not info["legal_action_mask"].any()
        )
        return observation, self._compute_reward(), terminated, truncated, info

    def legal_action_mask(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        if self._board.is_game_over() or self._board.next_player() != Player.HUMAN:
            return mask
        for action in enumerate_legal_actions(self._board, Player.HUMAN):
            mask[encode_action(action, self._board_size)] = 1
        return mask

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return str(self._board)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _play_machine(self) -> None:
        while (
            not self._board.is_game_over()
            and self._ply < self._max_ply
            and self._board.next_player() == Player.MACHINE
        ):
            next_board = self._board.machine_move()
            if next_board is self._board:
                break
            self._board = next_board
            self._ply += 1

    def _build_observation(self) -> Dict[str, np.ndarray]:
        return {"board": build_board_tensor(self._board), "aux": build_aux_vector(self._board)}

    def _build_info(self) -> Dict[str, Any]:
        return {"legal_action_mask": self.legal_action_mask(), "ply": self._ply}

    def _compute_reward(self) -> float:
        winner = self._board.winner()
        if winner == Player.HUMAN:
            return 1.0
        if winner == Player.MACHINE:
            return -1.0
        return 0.0
