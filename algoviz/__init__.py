"""
algoviz - Step-by-Step Algorithm Visualizer
============================================
Trace generators record every transition an algorithm makes; a Player
walks the resulting Trace forwards, backwards or on a timer.

    from algoviz import generate, Player
    trace = generate("bfs", graph=g, start="A")
"""

from algoviz.algorithms import REGISTRY, AlgoInfo, ViewMode, generate, get_algorithm, list_algorithms
from algoviz.engine import Kind, Player, PlayerState, Snapshot, Trace, TraceBuilder, record, step_budget
from algoviz.errors import (
    ConfigurationError,
    EmptyTraceError,
    GeneratorError,
    TraceTooLongError,
    VisualizerError,
)
from algoviz.graph import Graph

__version__ = "0.1.0"

__all__ = [
    "REGISTRY",
    "AlgoInfo",
    "ViewMode",
    "generate",
    "get_algorithm",
    "list_algorithms",
    "Kind",
    "Player",
    "PlayerState",
    "Snapshot",
    "Trace",
    "TraceBuilder",
    "record",
    "step_budget",
    "ConfigurationError",
    "EmptyTraceError",
    "GeneratorError",
    "TraceTooLongError",
    "VisualizerError",
    "Graph",
]
