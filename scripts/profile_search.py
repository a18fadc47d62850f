#!/usr/bin/env python3
"""
Time the machine's move search from the opening position.

Example:
  python scripts/profile_search.py --config configs/default.yaml --levels 1 2 --repeats 3
"""

from __future__ import annotations

import argparse
import json
import logging
import time
from typing import Dict, List

from abalone.config import build_game_config, load_yaml_config
from abalone.search import MinimaxSearch, successor_boards


def profile_levels(board, levels: List[int], repeats: int) -> List[Dict[str, float]]:
    search = MinimaxSearch()
    results = []
    for level in levels:
        timings = []
        outcome = None
        for _ in range(repeats):
            t0 = time.perf_counter()
            outcome = search.run(board.with_level(level))
            timings.append(time.perf_counter() - t0)
        results.append(
            {
                "level": level,
                "nodes": outcome.nodes,
                "candidates": outcome.candidates,
                "best_value": outcome.value,
                "best_time_sec": min(timings),
                "mean_time_sec": sum(timings) / len(timings),
                "nodes_per_sec": outcome.nodes / min(timings) if min(timings) > 0 else 0.0,
            }
        )
    return results


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile the machine move search.")
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--board-size", type=int)
    parser.add_argument("--levels", type=int, nargs="+")
    parser.add_argument("--repeats", type=int)
    parser.add_argument("--machine-opens", action="store_true", default=None)
    parser.add_argument("--verbose", action="store_true", help="Log search details")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    cfg = load_yaml_config(args.config)
    game = build_game_config(cfg, board_size=args.board_size, machine_opens=args.machine_opens)
    profile_cfg = cfg.get("profile", {})
    levels = args.levels if args.levels is not None else profile_cfg.get("levels", [game.level])
    repeats = args.repeats if args.repeats is not None else profile_cfg.get("repeats", 1)

    board = game.new_board()
    if not board.machine_opens:
        # Play the human's first legal opening so the machine is to move.
        board = successor_boards(board)[0]

    print(json.dumps({"board_size": game.board_size, "results": profile_levels(board, levels, repeats)}, indent=2))


if __name__ == "__main__":
    main()
