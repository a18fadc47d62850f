"""Abalone engine core package."""

from . import core, env, evaluation, features, search, validation
from .core import (
    Action,
    Ball,
    Board,
    BoardInvariantError,
    Color,
    Player,
    Position,
    Slot,
    board_from_dict,
    board_to_dict,
)
from .env import AbaloneEnv
from .features import AUX_VECTOR_SIZE, BOARD_CHANNELS, build_aux_vector, build_board_tensor
from .search import BackgroundSearch, MinimaxSearch, SearchCancelled, choose_machine_move, evaluate_board
from .evaluation import CentreSeekingPolicy, EvaluationResult, RandomPolicy, evaluate_policies
from .validation import validate_board
from .config import GameConfig, build_game_config, load_yaml_config

__all__ = [
    "core",
    "env",
    "evaluation",
    "features",
    "search",
    "validation",
    "Action",
    "Ball",
    "Board",
    "BoardInvariantError",
    "Color",
    "Player",
    "Position",
    "Slot",
    "board_from_dict",
    "board_to_dict",
    "AbaloneEnv",
    "AUX_VECTOR_SIZE",
    "BOARD_CHANNELS",
    "build_aux_vector",
    "build_board_tensor",
    "BackgroundSearch",
    "MinimaxSearch",
    "SearchCancelled",
    "choose_machine_move",
    "evaluate_board",
    "CentreSeekingPolicy",
    "EvaluationResult",
    "RandomPolicy",
    "evaluate_policies",
    "validate_board",
    "GameConfig",
    "build_game_config",
    "load_yaml_config",
]
