"""Core game logic for the Abalone engine."""

from .state import Ball, BoardInvariantError, Color, Player, Position, Slot
from .geometry import DIRECTIONS, distance_to_edge, has_slot, is_inside_array, is_on_edge
from .board import DEFAULT_LEVEL, DEFAULT_SIZE, ELIMINATION, MIN_SIZE, Board
from .actions import (
    Action,
    ActionVector,
    action_vector_size,
    decode_action,
    encode_action,
    enumerate_legal_actions,
)
from .serialization import board_from_dict, board_to_dict

__all__ = [
    "Ball",
    "Board",
    "BoardInvariantError",
    "Color",
    "Player",
    "Position",
    "Slot",
    "DIRECTIONS",
    "DEFAULT_LEVEL",
    "DEFAULT_SIZE",
    "ELIMINATION",
    "MIN_SIZE",
    "distance_to_edge",
    "has_slot",
    "is_inside_array",
    "is_on_edge",
    "Action",
    "ActionVector",
    "action_vector_size",
    "decode_action",
    "encode_action",
    "enumerate_legal_actions",
    "board_from_dict",
    "board_to_dict",
]
