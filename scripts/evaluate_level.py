#!/usr/bin/env python3
"""Play a baseline policy (human side) against the engine and report the results."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Dict, Optional

import numpy as np
from tqdm.auto import trange

from abalone.config import GameConfig, build_game_config, load_yaml_config
from abalone.evaluation import CentreSeekingPolicy, EvaluationResult, RandomPolicy, evaluate_policies

POLICIES = {"random": RandomPolicy, "centre": CentreSeekingPolicy}


def run_evaluation(
    game: GameConfig,
    *,
    episodes: int,
    max_ply: int,
    policy_name: str = "centre",
    seed: Optional[int] = None,
    progress: bool = True,
) -> Dict[str, Any]:
    policy = POLICIES[policy_name]()
    rng = np.random.default_rng(seed)
    totals = []
    iterator = trange(episodes, desc="Games") if progress else range(episodes)
    for _ in iterator:
        totals.append(
            evaluate_policies(
                policy,
                episodes=1,
                env_factory=lambda: game.make_env(max_ply=max_ply),
                rng=rng,
            )
        )
    summary = EvaluationResult(
        games_played=sum(r.games_played for r in totals),
        human_wins=sum(r.human_wins for r in totals),
        machine_wins=sum(r.machine_wins for r in totals),
        unfinished=sum(r.unfinished for r in totals),
        average_length=sum(r.average_length for r in totals) / max(1, len(totals)),
    )
    return {
        "board_size": game.board_size,
        "level": game.level,
        "policy": policy_name,
        "games_played": summary.games_played,
        "human_wins": summary.human_wins,
        "machine_wins": summary.machine_wins,
        "unfinished": summary.unfinished,
        "machine_winrate": summary.winrate_machine(),
        "average_length": summary.average_length,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Evaluate the engine against a baseline policy.")
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--board-size", type=int)
    parser.add_argument("--level", type=int)
    parser.add_argument("--machine-opens", action="store_true", default=None)
    parser.add_argument("--episodes", type=int)
    parser.add_argument("--max-ply", type=int)
    parser.add_argument("--policy", choices=sorted(POLICIES))
    parser.add_argument("--seed", type=int)
    parser.add_argument("--quiet", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING if args.quiet else logging.INFO)

    cfg = load_yaml_config(args.config)
    game = build_game_config(
        cfg,
        board_size=args.board_size,
        level=args.level,
        machine_opens=args.machine_opens,
    )
    eval_cfg = cfg.get("evaluation", {})
    result = run_evaluation(
        game,
        episodes=args.episodes if args.episodes is not None else eval_cfg.get("episodes", 4),
        max_ply=args.max_ply if args.max_ply is not None else eval_cfg.get("max_ply", 200),
        policy_name=args.policy or eval_cfg.get("policy", "centre"),
        seed=args.seed if args.seed is not None else eval_cfg.get("seed"),
        progress=not args.quiet,
    )
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
