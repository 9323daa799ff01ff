"""Timeline operations — ordered tracks plus the recording descriptor.

Track order is presentation order (first track is drawn first) and no
edit here reorders tracks or changes how many there are.

The master split (split_at) works in three passes:
  1. Direct hits: every visible, unlocked track (or only the target
     track) that has a clip under the playhead.
  2. Link expansion: for each direct hit with a link group, any clip in
     the same group on any unlocked track that also contains the split
     time. One hop only, by group id equality.
  3. Execution: split_track_at on every track owning a hit.

With no target track this is "razor all": every visible, unlocked
track with a clip under the playhead is split, linked or not.
"""

import logging
from dataclasses import dataclass, field, replace

from .clip import contains_time
from .common import new_id
from .track import Track, find_clip_at_time, get_track_end, split_track_at

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutputWindow:
    """A timeline range [start_ms, end_ms) that is exported."""

    start_ms: float
    end_ms: float


@dataclass(frozen=True)
class Recording:
    """Links the timeline to the captured screen (and camera) sources.

    viewport_motions holds the zoom keyframes (clipcast.zoom.ZoomKeyframe)
    in recording time; timeline_offset_ms shifts recording time onto the
    timeline.
    """

    screen_source_id: str
    timeline_offset_ms: float = 0.0
    camera_source_id: str | None = None
    viewport_motions: tuple = ()


@dataclass(frozen=True)
class Timeline:
    id: str
    tracks: tuple[Track, ...] = ()
    duration_ms: float = 0.0
    output_windows: tuple[OutputWindow, ...] = ()
    recording: Recording | None = field(default=None)


def create_timeline(screen_source_id: str | None = None) -> Timeline:
    """Create an empty timeline, with a recording descriptor if a screen
    source id is given."""
    recording = None
    if screen_source_id is not None:
        recording = Recording(screen_source_id=screen_source_id)
    return Timeline(id=new_id(), recording=recording)


def add_track(timeline: Timeline, track: Track) -> Timeline:
    """Append a track (drawn above the existing ones) and refresh duration."""
    if any(t.id == track.id for t in timeline.tracks):
        raise ValueError(f"Track {track.id} is already on the timeline")
    tracks = timeline.tracks + (track,)
    return replace(timeline, tracks=tracks, duration_ms=_tracks_end(tracks))


def replace_track(timeline: Timeline, track: Track) -> Timeline:
    """Swap in a new version of a track, matched by id, keeping order."""
    if not any(t.id == track.id for t in timeline.tracks):
        raise KeyError(f"Track {track.id} not on timeline")
    tracks = tuple(track if t.id == track.id else t for t in timeline.tracks)
    return replace(timeline, tracks=tracks, duration_ms=_tracks_end(tracks))


def get_track(timeline: Timeline, track_id: str) -> Track:
    for track in timeline.tracks:
        if track.id == track_id:
            return track
    raise KeyError(f"Track {track_id} not on timeline")


def _tracks_end(tracks) -> float:
    return max((get_track_end(t) for t in tracks), default=0.0)


def compute_duration(timeline: Timeline) -> float:
    """Furthest clip end across all tracks."""
    return _tracks_end(timeline.tracks)


def split_at(
    timeline: Timeline,
    time_ms: float,
    target_track_id: str | None = None,
) -> Timeline:
    """Split clips under the playhead, propagating through link groups.

    Args:
        timeline: Timeline to edit.
        time_ms: Playhead position on the timeline.
        target_track_id: If given, only this track is hit directly; other
            tracks are split only through link groups. If None, every
            visible, unlocked track is hit ("razor all").

    Returns:
        A new timeline, or the same one when no clip was actually split
        (nothing under the playhead, or every hit starts exactly there).
    """
    # Pass 1: direct hits.
    hits: dict[str, str] = {}  # clip id -> track id
    direct = []
    for track in timeline.tracks:
        if track.locked or not track.visible:
            continue
        if target_track_id is not None and track.id != target_track_id:
            continue
        clip = find_clip_at_time(track, time_ms)
        if clip is not None:
            hits[clip.id] = track.id
            direct.append(clip)

    if not direct:
        logger.debug("split_at %sms: no clip under playhead", time_ms)
        return timeline

    # Pass 2: link expansion, one hop by group id.
    groups = {c.link_group_id for c in direct if c.link_group_id is not None}
    if groups:
        for track in timeline.tracks:
            if track.locked:
                continue
            for clip in track.clips:
                if clip.id in hits or clip.link_group_id not in groups:
                    continue
                if contains_time(clip, time_ms):
                    hits[clip.id] = track.id

    # Pass 3: split every track that owns a hit.
    hit_tracks = set(hits.values())
    tracks = tuple(
        split_track_at(t, time_ms) if t.id in hit_tracks else t
        for t in timeline.tracks
    )
    if all(new is old for new, old in zip(tracks, timeline.tracks)):
        logger.debug("split_at %sms: hits only at clip starts", time_ms)
        return timeline
    logger.debug(
        "split_at %sms: %d clip(s) on %d track(s)",
        time_ms, len(hits), len(hit_tracks),
    )
    return replace(timeline, tracks=tracks)


def set_output_windows(timeline: Timeline, windows) -> Timeline:
    """Replace the export windows.

    Windows are sorted by start; each must have start < end and they must
    not overlap.
    """
    ordered = sorted(
        (w if isinstance(w, OutputWindow) else OutputWindow(*w) for w in windows),
        key=lambda w: w.start_ms,
    )
    for i, win in enumerate(ordered):
        if win.start_ms >= win.end_ms:
            raise ValueError(
                f"Output window {i}: start ({win.start_ms}) must be < end ({win.end_ms})"
            )
        if i > 0 and win.start_ms < ordered[i - 1].end_ms:
            raise ValueError(f"Output window {i} overlaps the previous window")
    return replace(timeline, output_windows=tuple(ordered))


def with_viewport_motions(timeline: Timeline, keyframes) -> Timeline:
    """Store a zoom schedule on the recording descriptor."""
    if timeline.recording is None:
        raise ValueError("Timeline has no recording to attach viewport motions to")
    recording = replace(timeline.recording, viewport_motions=tuple(keyframes))
    return replace(timeline, recording=recording)
