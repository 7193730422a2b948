"""
Error taxonomy shared by the model, the solver and the worker threads.

Configuration problems are raised at construction time, I/O and channel
problems are raised inside the workers and surface on the run object.
Grid coordinates are never an error: they are clamped (see ``utils.idx``).
"""


class EquilibriumError(Exception):
    """Base class for all errors raised by the package."""


class ValidationError(EquilibriumError, ValueError):
    """Invalid configuration value or obstacle geometry."""


class RenderingIOError(EquilibriumError, OSError):
    """The output directory or a frame image could not be written."""


class ChannelClosedError(EquilibriumError):
    """The other side of a frame channel is gone."""
