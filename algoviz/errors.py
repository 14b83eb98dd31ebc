"""
errors.py - Exception Taxonomy
===============================
Three families of failure, matching where they are detected:

  • ConfigurationError  user input failed validation before generation
                        (duplicate labels, unknown endpoints, out-of-range
                        values, malformed puzzle grids).
  • GeneratorError      a Trace Generator broke its own contract or was
                        handed inputs it cannot start from (missing source
                        node, empty trace, emitting after a terminal step).
  • EmptyTraceError     the Player was asked to load a zero-length trace.
  • TraceTooLongError   valid input whose trace would outgrow the step
                        budget (e.g. a consistent but unsolvable 9×9
                        Sudoku).  It is a ConfigurationError: the fix is
                        a smaller input.

"No solution" outcomes (cyclic graph, unsatisfiable Sudoku, unreachable
nodes) are NOT errors: generators end those traces with a terminal kind,
provided the search fits inside the step budget.
"""


class VisualizerError(Exception):
    """Base class for everything this package raises on purpose."""


class ConfigurationError(VisualizerError, ValueError):
    """User-supplied configuration is invalid; generation is not attempted."""


class TraceTooLongError(ConfigurationError):
    """The generator hit its step budget before reaching a terminal snapshot."""


class GeneratorError(VisualizerError, RuntimeError):
    """A Trace Generator invariant was violated."""


class EmptyTraceError(GeneratorError):
    """A trace with no snapshots was handed to the Player."""


__all__ = [
    "VisualizerError",
    "ConfigurationError",
    "TraceTooLongError",
    "GeneratorError",
    "EmptyTraceError",
]
