"""Simulation headless et environnement Gymnasium."""

from .gym_env import VindiniumEnv
from .runner import EpisodeSummary, HeadlessArena, StepResult, run_episode

__all__ = [
    "EpisodeSummary",
    "HeadlessArena",
    "StepResult",
    "VindiniumEnv",
    "run_episode",
]
