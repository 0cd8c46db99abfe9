"""stackprobe - heuristic language and framework detection for project trees."""

__version__ = "0.1.0"


class StackprobeError(Exception):
    """Base error for stackprobe."""
