"""Zoom scheduler — automatic camera framing from captured clicks.

calculate_zoom_schedule turns the interaction log of a recording into
keyframes of a "camera" box in output-video pixels:

  1. Keep click events only, stably sorted by timestamp.
  2. Keyframe 0 at t=0 frames the whole output; the recording stays
     unzoomed until the first click.
  3. Each click gets a keyframe at its timestamp. The box has a fixed
     size (output / zoom_intensity) and is centred on the click, after
     removing scroll offset and projecting into output space. The box is
     then shifted (never resized) back inside the frame.

The schedule is a pure function of its inputs, so reopening a project
recomputes exactly the same keyframes.

zoom_box_at_time replays a schedule at playback time, easing from one
box to the next over the transition duration.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np

from .common import Point, Rect, full_frame
from .events import ClickEvent
from .mapping import InputToOutputMapping

logger = logging.getLogger(__name__)


DEFAULT_ZOOM_INTENSITY = 2.0
DEFAULT_TRANSITION_MS = 750


@dataclass(frozen=True)
class ZoomConfig:
    zoom_intensity: float = DEFAULT_ZOOM_INTENSITY
    transition_ms: float = DEFAULT_TRANSITION_MS

    def __post_init__(self):
        if self.zoom_intensity <= 0:
            raise ValueError(f"zoom_intensity must be > 0, got {self.zoom_intensity}")
        if self.transition_ms < 0:
            raise ValueError(f"transition_ms must be >= 0, got {self.transition_ms}")


@dataclass(frozen=True)
class ZoomKeyframe:
    timestamp: float
    zoom_box: Rect


def calculate_zoom_schedule(
    config: ZoomConfig,
    mapping: InputToOutputMapping,
    events,
) -> list[ZoomKeyframe]:
    """Compute zoom keyframes for a recording.

    Args:
        config: Zoom settings. Intensities below 1 are treated as 1 so
            the box never exceeds the frame.
        mapping: Projects captured-viewport points into output pixels.
        events: Parsed capture events (clipcast.events); non-click events
            are ignored.

    Returns:
        1 + (number of clicks) keyframes, ascending by timestamp.
    """
    out_w, out_h = mapping.output_video_size
    schedule = [ZoomKeyframe(0, full_frame(mapping.output_video_size))]

    clicks = sorted(
        (e for e in events if isinstance(e, ClickEvent)),
        key=lambda e: e.timestamp,
    )
    if not clicks:
        return schedule

    intensity = max(config.zoom_intensity, 1.0)
    box_w = out_w / intensity
    box_h = out_h / intensity

    # Scroll offset removed before projecting into output space.
    centers = np.array(
        [
            mapping.project_input_to_output(Point(c.x - c.scroll_x, c.y - c.scroll_y))
            for c in clicks
        ],
        dtype=float,
    )
    origins = centers - np.array([box_w / 2, box_h / 2])
    origins = np.clip(origins, [0.0, 0.0], [out_w - box_w, out_h - box_h])

    for click, (x, y) in zip(clicks, origins):
        schedule.append(
            ZoomKeyframe(click.timestamp, Rect(float(x), float(y), box_w, box_h))
        )

    logger.debug(
        "Zoom schedule: %d click(s), box %.1fx%.1f", len(clicks), box_w, box_h,
    )
    return schedule


def _ease_in_out(t: float) -> float:
    return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t


def _interpolate(a: Rect, b: Rect, t: float) -> Rect:
    return Rect(*(av + (bv - av) * t for av, bv in zip(a, b)))


def zoom_box_at_time(
    schedule: list[ZoomKeyframe],
    time_ms: float,
    transition_ms: float = DEFAULT_TRANSITION_MS,
) -> Rect:
    """Camera box shown at time_ms when playing back a schedule.

    Each keyframe after the first is a motion that starts transition_ms
    before its timestamp and arrives at its box on the timestamp, with
    ease-in-out. A motion that starts while the previous one is still
    running takes over from wherever the previous one had got to.

    Raises:
        ValueError: empty schedule.
    """
    if not schedule:
        raise ValueError("Zoom schedule is empty")

    current = schedule[0].zoom_box
    motions = schedule[1:]

    for i, motion in enumerate(motions):
        start = motion.timestamp - transition_ms
        if time_ms < start:
            return current

        if i + 1 < len(motions):
            interrupted_at = motions[i + 1].timestamp - transition_ms
        else:
            interrupted_at = math.inf
        limit = min(time_ms, interrupted_at)

        if transition_ms > 0:
            progress = min(max((limit - start) / transition_ms, 0.0), 1.0)
        else:
            progress = 1.0 if limit >= start else 0.0
        box = _interpolate(current, motion.zoom_box, _ease_in_out(progress))

        if time_ms <= interrupted_at:
            return box
        current = box

    return current
