"""
Sit & Go Agents - AI seats

This module provides the base agent interface, the heuristic agent used
for computer seats and simple baselines.
"""

from sitngo.agents.base import BaseAgent, Decision
from sitngo.agents.heuristic import HeuristicAgent, preflop_strength, postflop_strength
from sitngo.agents.random_agent import RandomAgent, CallAgent

__all__ = [
    "BaseAgent",
    "Decision",
    "HeuristicAgent",
    "preflop_strength",
    "postflop_strength",
    "RandomAgent",
    "CallAgent",
]
