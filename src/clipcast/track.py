"""Track operations: a lane of non-overlapping clips.

Clips on a track never overlap in timeline time, using the same
half-open [timeline_in, timeline_out) convention as clip.contains_time,
so a clip may start exactly where another ends. Clips are found by time,
not by position; the stored order is insertion order.

Every operation returns a new Track. Locked tracks reject edits; locked
or hidden tracks are left alone by splits.
"""

import logging
from dataclasses import dataclass, replace

from .clip import Clip, contains_time, get_timeline_out, split_clip
from .common import new_id
from .errors import LockedTrackError, OverlapError

logger = logging.getLogger(__name__)


VALID_TRACK_KINDS = {"video", "audio", "overlay"}


@dataclass(frozen=True)
class Track:
    id: str
    name: str
    kind: str = "video"
    clips: tuple[Clip, ...] = ()
    muted: bool = False
    locked: bool = False
    visible: bool = True


def create_track(name: str, kind: str = "video", **options) -> Track:
    """Create an empty track with a fresh id."""
    if kind not in VALID_TRACK_KINDS:
        raise ValueError(
            f"Invalid track kind '{kind}'. Valid: {sorted(VALID_TRACK_KINDS)}"
        )
    return Track(id=new_id(), name=name, kind=kind, **options)


def _overlaps(a: Clip, b: Clip) -> bool:
    return a.timeline_in_ms < get_timeline_out(b) and b.timeline_in_ms < get_timeline_out(a)


def add_clip(track: Track, clip: Clip) -> Track:
    """Return a new track with the clip appended.

    Raises:
        LockedTrackError: track is locked.
        OverlapError: clip overlaps an existing clip on this track.
    """
    if track.locked:
        raise LockedTrackError(f"Track '{track.name}' is locked")

    for existing in track.clips:
        if _overlaps(existing, clip):
            raise OverlapError(
                f"Clip {clip.id} [{clip.timeline_in_ms}, {get_timeline_out(clip)}) "
                f"overlaps existing clip {existing.id} on track '{track.name}'"
            )

    return replace(track, clips=track.clips + (clip,))


def update_clip(track: Track, clip: Clip) -> Track:
    """Replace the clip with the same id, re-checking overlaps.

    The replacement keeps the old clip's slot in the clip order.

    Raises:
        KeyError: no clip with that id on the track.
        LockedTrackError: track is locked.
        OverlapError: the updated clip overlaps another clip.
    """
    if track.locked:
        raise LockedTrackError(f"Track '{track.name}' is locked")

    ids = [c.id for c in track.clips]
    if clip.id not in ids:
        raise KeyError(f"Clip {clip.id} not on track '{track.name}'")

    for existing in track.clips:
        if existing.id != clip.id and _overlaps(existing, clip):
            raise OverlapError(
                f"Clip {clip.id} overlaps existing clip {existing.id} "
                f"on track '{track.name}'"
            )

    index = ids.index(clip.id)
    return replace(
        track, clips=track.clips[:index] + (clip,) + track.clips[index + 1:],
    )


def remove_clip(track: Track, clip_id: str) -> Track:
    """Return a new track without the given clip. Unknown ids are a no-op."""
    if track.locked:
        raise LockedTrackError(f"Track '{track.name}' is locked")
    return replace(track, clips=tuple(c for c in track.clips if c.id != clip_id))


def find_clip_at_time(track: Track, time_ms: float) -> Clip | None:
    """Clip whose interval contains time_ms, or None (always None if locked)."""
    if track.locked:
        return None
    for clip in track.clips:
        if contains_time(clip, time_ms):
            return clip
    return None


def split_track_at(track: Track, time_ms: float) -> Track:
    """Split the clip under time_ms into two, leaving other clips alone.

    Returns the track unchanged when it is locked or hidden, or when no
    clip contains time_ms. A clip that starts exactly at time_ms contains
    it but cannot be split there, so that case is also unchanged.
    """
    if track.locked or not track.visible:
        return track

    target = find_clip_at_time(track, time_ms)
    if target is None or target.timeline_in_ms == time_ms:
        return track

    left, right = split_clip(target, time_ms)
    logger.debug(
        "Split clip %s on track '%s' at %sms", target.id, track.name, time_ms,
    )

    clips = []
    for clip in track.clips:
        if clip.id == target.id:
            clips.extend((left, right))
        else:
            clips.append(clip)
    return replace(track, clips=tuple(clips))


def clips_by_time(track: Track) -> list[Clip]:
    """Clips sorted by timeline_in_ms (presentation order in a UI lane)."""
    return sorted(track.clips, key=lambda c: c.timeline_in_ms)


def get_track_end(track: Track) -> float:
    """Timeline time where the last clip ends, 0 for an empty track."""
    return max((get_timeline_out(c) for c in track.clips), default=0.0)
