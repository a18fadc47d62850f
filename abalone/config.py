from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from abalone.core import DEFAULT_LEVEL, DEFAULT_SIZE, Board
from abalone.env import AbaloneEnv


@dataclass
class GameConfig:
    board_size: int = DEFAULT_SIZE
    machine_opens: bool = False
    level: int = DEFAULT_LEVEL

    def new_board(self) -> Board:
        return Board(self.board_size, self.machine_opens, self.level)

    def make_env(self, **kwargs: Any) -> AbaloneEnv:
        return AbaloneEnv(
            board_size=self.board_size,
            level=self.level,
            machine_opens=self.machine_opens,
            **kwargs,
        )


def load_yaml_config(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping, got {type(data).__name__}.")
    return data


def build_game_config(cfg: Dict[str, Any], **overrides: Any) -> GameConfig:
    """Merge non-``None`` overrides (typically CLI flags) over values read from a file."""
    known = {field.name for field in fields(GameConfig)}
    game_cfg = dict(cfg.get("game") or {})
    unknown = set(game_cfg) - known
    if unknown:
        raise ValueError(f"Unknown game settings: {', '.join(sorted(unknown))}")
    for key, value in overrides.items():
        if key not in known:
            raise ValueError(f"Unknown game setting: {key}")
        if value is not None:
            game_cfg[key] = value
    return GameConfig(**game_cfg)
