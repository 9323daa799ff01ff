"""Project assembly — sources, timeline and output settings.

A project is created once per recording session. create_from_source
builds the default edit for a fresh recording: a screen track holding
the whole recording (plus a linked camera overlay track when a camera
stream was captured), one output window covering it, and the automatic
zoom schedule derived from the captured clicks.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

from .clip import contains_time, create_clip, source_time_at
from .common import Size, new_id, parse_hex_color
from .mapping import VideoMappingConfig
from .timeline import (
    OutputWindow,
    Timeline,
    add_track,
    create_timeline,
    set_output_windows,
    with_viewport_motions,
)
from .track import add_clip, create_track
from .zoom import ZoomConfig, calculate_zoom_schedule

logger = logging.getLogger(__name__)


VALID_SOURCE_KINDS = {"video", "audio", "image"}


@dataclass(frozen=True)
class SourceMetadata:
    """A captured media stream. Referenced by id, never owned by clips."""

    id: str
    duration_ms: float
    size: Size
    kind: str = "video"
    url: str = ""
    fps: float | None = None
    has_audio: bool = False


@dataclass(frozen=True)
class OutputSettings:
    size: Size = Size(1920, 1080)
    frame_rate: float = 30
    max_zoom: float = 2.0
    auto_zoom: bool = True
    background_color: str = "#1e1e1e"
    padding: float = 0.0

    def __post_init__(self):
        parse_hex_color(self.background_color)
        if self.frame_rate <= 0:
            raise ValueError(f"frame_rate must be > 0, got {self.frame_rate}")
        if self.max_zoom < 1:
            raise ValueError(f"max_zoom must be >= 1, got {self.max_zoom}")
        if not 0 <= self.padding < 0.5:
            raise ValueError(f"padding must be in [0, 0.5), got {self.padding}")


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    timeline: Timeline
    sources: dict[str, SourceMetadata] = field(default_factory=dict)
    output_settings: OutputSettings = OutputSettings()
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


def create_project(
    name: str = "New Project",
    output_settings: OutputSettings | None = None,
) -> Project:
    """Create an empty project with an empty timeline."""
    return Project(
        id=new_id(),
        name=name,
        timeline=create_timeline(),
        output_settings=output_settings or OutputSettings(),
    )


def touch(project: Project) -> Project:
    """Bump updated_at."""
    return replace(project, updated_at=_now())


def add_source(project: Project, source: SourceMetadata) -> Project:
    """Register a source. Re-adding an id replaces its metadata."""
    if source.kind not in VALID_SOURCE_KINDS:
        raise ValueError(
            f"Invalid source kind '{source.kind}'. Valid: {sorted(VALID_SOURCE_KINDS)}"
        )
    sources = {**project.sources, source.id: source}
    return replace(project, sources=sources)


def update_source(project: Project, source_id: str, **changes) -> Project:
    """Update fields of a registered source; unknown ids are a no-op.

    Raises:
        ValueError: changes include the id, which keys the source map.
    """
    if "id" in changes:
        raise ValueError("Source id cannot be changed; add a new source instead")
    existing = project.sources.get(source_id)
    if existing is None:
        return project
    sources = {**project.sources, source_id: replace(existing, **changes)}
    return replace(project, sources=sources)


def replace_timeline(project: Project, timeline: Timeline) -> Project:
    """Swap in an edited timeline and bump updated_at."""
    return replace(project, timeline=timeline, updated_at=_now())


def build_zoom_schedule(project: Project, events, zoom_intensity: float | None = None):
    """Zoom keyframes for the project's screen recording.

    Uses the recording's screen source as input size and the output
    settings for frame size, padding and intensity (max_zoom unless
    zoom_intensity is given).
    """
    recording = project.timeline.recording
    if recording is None:
        raise ValueError("Project timeline has no recording")
    screen = project.sources[recording.screen_source_id]
    settings = project.output_settings

    mapping = VideoMappingConfig(screen.size, settings.size, settings.padding)
    if zoom_intensity is None:
        zoom_intensity = settings.max_zoom
    config = ZoomConfig(zoom_intensity=zoom_intensity)
    return calculate_zoom_schedule(config, mapping, events)


def create_from_source(
    screen_source: SourceMetadata,
    events,
    output_settings: OutputSettings | None = None,
    camera_source: SourceMetadata | None = None,
    name: str | None = None,
) -> Project:
    """Build a project from a finished recording.

    Args:
        screen_source: Metadata of the captured screen stream.
        events: Parsed capture events for the recording.
        output_settings: Export settings; defaults to OutputSettings().
        camera_source: Optional camera stream, placed on an overlay track
            linked to the screen clip so both split together.
        name: Project name; defaults to a timestamped name.

    Returns:
        A project whose timeline carries the recording descriptor with
        its zoom schedule.
    """
    settings = output_settings or OutputSettings()
    project = create_project(
        name or f"Recording {_now():%Y-%m-%d %H:%M}", settings,
    )
    project = add_source(project, screen_source)
    if camera_source is not None:
        project = add_source(project, camera_source)

    timeline = create_timeline(screen_source.id)
    link_group = new_id() if camera_source is not None else None

    screen_track = create_track("Screen", "video")
    screen_track = add_clip(
        screen_track,
        create_clip(
            screen_source.id, 0, screen_source.duration_ms, 0,
            link_group_id=link_group,
        ),
    )
    timeline = add_track(timeline, screen_track)

    if camera_source is not None:
        camera_track = create_track("Camera", "overlay")
        camera_track = add_clip(
            camera_track,
            create_clip(
                camera_source.id, 0, camera_source.duration_ms, 0,
                link_group_id=link_group,
            ),
        )
        timeline = add_track(timeline, camera_track)
        timeline = replace(
            timeline,
            recording=replace(timeline.recording, camera_source_id=camera_source.id),
        )

    timeline = set_output_windows(
        timeline, [OutputWindow(0, screen_source.duration_ms)],
    )
    project = replace(project, timeline=timeline)

    if settings.auto_zoom:
        schedule = build_zoom_schedule(project, events)
    else:
        # Unzoomed: only the full-frame keyframe.
        schedule = build_zoom_schedule(project, [])
    logger.debug("Created project %s with %d zoom keyframe(s)", project.id, len(schedule))

    return replace(project, timeline=with_viewport_motions(timeline, schedule))


# ── Render state ───────────────────────────────────────────────────


@dataclass(frozen=True)
class TrackFrame:
    """What one track shows at a playhead position."""

    track_id: str
    visible: bool
    clip_id: str | None = None
    source: SourceMetadata | None = None
    source_time_ms: float | None = None
    speed: float = 1.0
    volume: float = 1.0
    muted: bool = False


def get_render_state(project: Project, time_ms: float) -> list[TrackFrame]:
    """Resolve, for every track in presentation order, the source frame
    to draw at time_ms. Track mute overrides clip mute."""
    frames = []
    for track in project.timeline.tracks:
        # Locked tracks still play; only edits skip them.
        clip = next((c for c in track.clips if contains_time(c, time_ms)), None)
        source = project.sources.get(clip.source_id) if clip is not None else None
        if clip is None or source is None:
            frames.append(TrackFrame(track_id=track.id, visible=track.visible))
            continue
        frames.append(TrackFrame(
            track_id=track.id,
            visible=track.visible,
            clip_id=clip.id,
            source=source,
            source_time_ms=source_time_at(clip, time_ms),
            speed=clip.speed,
            volume=clip.audio_volume,
            muted=track.muted or clip.audio_muted,
        ))
    return frames
