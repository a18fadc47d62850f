from .gym_env import AbaloneEnv

__all__ = ["AbaloneEnv"]
