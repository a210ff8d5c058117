"""
Exception types raised by the segment distance package.
"""


class SegmentDistanceError(Exception):
    """Base class for errors raised by segmentdistance."""


class DegenerateSegmentError(SegmentDistanceError, ValueError):
    """Raised when a zero-length segment is paired with a proper segment."""

    def __init__(self, message: str = "Segment has zero length (begin and end coincide).") -> None:
        super().__init__(message)


class ParameterOutOfRangeError(SegmentDistanceError, ValueError):
    """Raised when a segment is evaluated at a parameter outside [0, 1]."""

    def __init__(self, t: float) -> None:
        self.t = t
        super().__init__(f"Segment parameter must lie in [0, 1], got {t!r}.")
