"""Evaluation helpers: play policies against the engine."""

from .match import CentreSeekingPolicy, EvaluationResult, Policy, RandomPolicy, evaluate_policies

__all__ = ["CentreSeekingPolicy", "EvaluationResult", "Policy", "RandomPolicy", "evaluate_policies"]
