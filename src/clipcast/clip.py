"""Clip operations — trimmed, time-scaled references into a source.

A clip maps the source range [source_in_ms, source_out_ms) onto the
timeline starting at timeline_in_ms. Playback speed scales the mapping:
one timeline millisecond covers `speed` source milliseconds, so the
timeline duration is the source span divided by speed.

Clips are values. Every edit returns new Clip instances with fresh ids;
the original is never modified.
"""

from dataclasses import dataclass, replace

from .common import new_id
from .errors import InvalidDuration, SplitOutOfBounds


@dataclass(frozen=True)
class Clip:
    id: str
    source_id: str
    source_in_ms: float
    source_out_ms: float
    timeline_in_ms: float
    speed: float = 1.0
    audio_volume: float = 1.0
    audio_muted: bool = False
    link_group_id: str | None = None


def create_clip(
    source_id: str,
    source_in_ms: float,
    source_out_ms: float,
    timeline_in_ms: float,
    **options,
) -> Clip:
    """Create a clip with a fresh id.

    Defaults (speed=1.0, audio_volume=1.0, audio_muted=False) are applied
    first, then overridden by keyword options such as link_group_id.

    Raises:
        InvalidDuration: source_in_ms >= source_out_ms, or speed <= 0.
        ValueError: negative audio_volume.
        TypeError: unknown option name.
    """
    if source_in_ms >= source_out_ms:
        raise InvalidDuration(
            f"Invalid clip duration: source_in ({source_in_ms}) "
            f">= source_out ({source_out_ms})"
        )

    clip = Clip(
        id=new_id(),
        source_id=source_id,
        source_in_ms=source_in_ms,
        source_out_ms=source_out_ms,
        timeline_in_ms=timeline_in_ms,
        **options,
    )

    if clip.speed <= 0:
        raise InvalidDuration(f"Clip speed must be > 0, got {clip.speed}")
    if clip.audio_volume < 0:
        raise ValueError(f"Clip audio_volume must be >= 0, got {clip.audio_volume}")
    return clip


def get_duration(clip: Clip) -> float:
    """Timeline duration in ms: source span divided by speed."""
    return (clip.source_out_ms - clip.source_in_ms) / clip.speed


def get_timeline_out(clip: Clip) -> float:
    """Timeline time where the clip stops playing (exclusive)."""
    return clip.timeline_in_ms + get_duration(clip)


def contains_time(clip: Clip, time_ms: float) -> bool:
    """Half-open test: timeline_in <= time_ms < timeline_out."""
    return clip.timeline_in_ms <= time_ms < get_timeline_out(clip)


def source_time_at(clip: Clip, time_ms: float) -> float:
    """Source timestamp played at the given timeline time."""
    return clip.source_in_ms + (time_ms - clip.timeline_in_ms) * clip.speed


def split_clip(clip: Clip, split_time_ms: float) -> tuple[Clip, Clip]:
    """Split a clip at a timeline time into (left, right).

    The timeline delta is converted to a source delta by multiplying by
    speed. Both halves get fresh ids and keep speed, volume, mute and
    link group of the original.

    Raises:
        SplitOutOfBounds: split_time_ms is not strictly inside the clip.
    """
    start = clip.timeline_in_ms
    end = get_timeline_out(clip)

    if split_time_ms <= start or split_time_ms >= end:
        raise SplitOutOfBounds(
            f"Split time {split_time_ms} is outside clip bounds [{start}, {end}]"
        )

    split_source_time = source_time_at(clip, split_time_ms)

    left = replace(clip, id=new_id(), source_out_ms=split_source_time)
    right = replace(
        clip,
        id=new_id(),
        source_in_ms=split_source_time,
        timeline_in_ms=split_time_ms,
    )
    return left, right
