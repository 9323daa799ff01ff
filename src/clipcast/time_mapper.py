"""Mapping between timeline time and exported output time.

Output windows are the timeline ranges that make it into the exported
video, played back to back. Timeline times inside a window map to a
continuous output time; times in a gap between windows have no output
time and map to None.

Windows must be sorted by start and non-overlapping
(see timeline.set_output_windows).
"""

from .timeline import OutputWindow


def map_timeline_to_output_time(
    timeline_time_ms: float, windows: list[OutputWindow],
) -> float | None:
    """Output time for a timeline time, or None if it falls in a gap."""
    accumulated = 0.0
    for win in windows:
        if win.start_ms <= timeline_time_ms < win.end_ms:
            return accumulated + (timeline_time_ms - win.start_ms)
        if timeline_time_ms < win.start_ms:
            return None
        accumulated += win.end_ms - win.start_ms
    return None


def map_output_to_timeline_time(
    output_time_ms: float, windows: list[OutputWindow],
) -> float | None:
    """Timeline time shown at an output time, or None past the end."""
    if output_time_ms < 0:
        return None
    accumulated = 0.0
    for win in windows:
        win_duration = win.end_ms - win.start_ms
        if output_time_ms < accumulated + win_duration:
            return win.start_ms + (output_time_ms - accumulated)
        accumulated += win_duration
    return None


def map_source_to_output_time(
    source_time_ms: float,
    windows: list[OutputWindow],
    timeline_offset_ms: float,
) -> float | None:
    """Output time for a recording timestamp.

    The recording sits on the timeline at timeline_offset_ms, so the
    recording time plus that offset is a timeline time.
    """
    return map_timeline_to_output_time(source_time_ms + timeline_offset_ms, windows)


def get_output_duration(windows: list[OutputWindow]) -> float:
    """Total length of the exported video."""
    return sum(win.end_ms - win.start_ms for win in windows)
