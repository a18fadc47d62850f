from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from abalone.core import Board, Player, decode_action
from abalone.env import AbaloneEnv

logger = logging.getLogger(__name__)


@dataclass
class EvaluationResult:
    games_played: int
    human_wins: int
    machine_wins: int
    unfinished: int
    average_length: float

    def winrate_human(self) -> float:
        return self.human_wins / max(1, self.games_played)

    def winrate_machine(self) -> float:
        return self.machine_wins / max(1, self.games_played)


class Policy:
    """Policy interface producing move probabilities over the human's legal moves."""

    def act(self, board: Board, legal_mask: np.ndarray) -> np.ndarray:
        raise NotImplementedError


class RandomPolicy(Policy):
    """Uniform over the legal moves; sampling is left to the caller."""

    def act(self, board: Board, legal_mask: np.ndarray) -> np.ndarray:
        logits = legal_mask.astype(np.float64)
        if logits.sum() == 0:
            return logits.astype(np.float32)
        return (logits / logits.sum()).astype(np.float32)


class CentreSeekingPolicy(Policy):
    """Simple heuristic baseline: prefer moves that end far from the edge."""

    def act(self, board: Board, legal_mask: np.ndarray) -> np.ndarray:
        indices = np.flatnonzero(legal_mask)
        result = np.zeros_like(legal_mask, dtype=np.float32)
        if len(indices) == 0:
            return result

        scores = []
        for idx in indices:
            action = decode_action(int(idx), board.size)
            scores.append(float(board.distance_to_edge(action.to_row, action.to_diag)))

        scores = np.array(scores)
        scores -= scores.max()
        probs = np.exp(scores)
        probs /= probs.sum()
        result[indices] = probs
        return result


def evaluate_policies(
    policy: Policy,
    *,
    episodes: int,
    env_factory: Optional[Callable[[], AbaloneEnv]] = None,
    rng: Optional[np.random.Generator] = None,
) -> EvaluationResult:
    """Play ``episodes`` games of ``policy`` (human side) against the engine."""
    env_factory = env_factory or AbaloneEnv
    rng = rng or np.random.default_rng()

    human_wins = 0
    machine_wins = 0
    unfinished = 0
    total_ply = 0

    for _ in range(episodes):
        env = env_factory()
        obs, info = env.reset()
        terminated = env.board.is_game_over()
        truncated = not terminated and not info["legal_action_mask"].any()

        while not (terminated or truncated):
            legal_mask = info["legal_action_mask"]
            probs = policy.act(env.board, legal_mask).astype(np.float64)
            if probs.sum() <= 0:
                probs = legal_mask.astype(np.float64)
            probs /= probs.sum()
            action_index = int(rng.choice(len(probs), p=probs))
            obs, reward, terminated, truncated, info = env.step(action_index)

        total_ply += env.ply
        winner = env.board.winner()
        if winner == Player.HUMAN:
            human_wins += 1
        elif winner == Player.MACHINE:
            machine_wins += 1
        else:
            unfinished += 1

    result = EvaluationResult(
        games_played=episodes,
        human_wins=human_wins,
        machine_wins=machine_wins,
        unfinished=unfinished,
        average_length=total_ply / max(1, episodes),
    )
    logger.info(
        "evaluated %d games: human %d, machine %d, unfinished %d",
        episodes,
        human_wins,
        machine_wins,
        unfinished,
    )
    return result
