"""
Exception types raised by the model layer.

Views catch these at the boundary, report them to the user and keep the
previous state. File system problems are reported with the built-in
FileNotFoundError / OSError and are not wrapped.
"""


class ConcaveHullError(Exception):
    """Base class for all application errors."""


class FormatConfigError(ConcaveHullError, ValueError):
    """Invalid file format combination (e.g. delimiter equals decimal separator)."""


class HullParameterError(ConcaveHullError, ValueError):
    """Hull sizing parameter out of range or missing."""


class HullComputationError(ConcaveHullError):
    """The geometry library failed to compute a hull."""


class RingEditError(ConcaveHullError, ValueError):
    """A boundary ring edit would violate the ring invariants."""


class NoPointsError(ConcaveHullError, ValueError):
    """A file was read but none of its lines held a coordinate pair."""

    def __init__(self, message: str, skipped=()) -> None:
        super().__init__(message)
        self.skipped = list(skipped)
