"""Edit errors raised by the timeline model.

All subclass ValueError so callers that only care about "bad edit" can
catch that. A failed edit never changes its input.
"""


class TimelineError(ValueError):
    """Base class for rejected timeline edits."""


class InvalidDuration(TimelineError):
    """Clip bounds are empty or reversed, or speed is not positive."""


class SplitOutOfBounds(TimelineError):
    """Split point is not strictly inside the clip's timeline interval."""


class OverlapError(TimelineError):
    """Clip would overlap an existing clip on the same track."""


class LockedTrackError(TimelineError):
    """Track is locked against edits."""
