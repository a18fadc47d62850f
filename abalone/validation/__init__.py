from .board_checks import validate_board

__all__ = ["validate_board"]
