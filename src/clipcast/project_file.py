"""Recording manifests and project files.

Recording manifest: describes a finished capture session and how to
export it. Follows the same ${var} path resolution as the other
manifests.

Recording manifest schema:
  name: "Onboarding demo"          # optional
  paths:
    rec: "/data/recordings/2024-05-01"
  screen:
    path: "${rec}/screen.webm"
    duration_ms: 12000             # optional, probed from the file if absent
    width: 1920                    # optional, probed (together with height)
    height: 1080
  camera:                          # optional, same fields as screen
    path: "${rec}/camera.webm"
  events: "${rec}/events.json"     # optional, JSON array from the capture side
  output:                          # optional, every key has a default
    resolution: [1920, 1080]
    fps: 30
    max_zoom: 2.0
    auto_zoom: true
    background: "#1e1e1e"
    padding: 0.05

Project file: YAML dump of a Project (save_project / load_project).
"""

from dataclasses import asdict, replace
from datetime import datetime
from pathlib import Path

import yaml

from .clip import Clip
from .common import Rect, Size, new_id, resolve_path_vars
from .events import load_event_log
from .project import OutputSettings, Project, SourceMetadata, create_from_source
from .timeline import OutputWindow, Recording, Timeline
from .track import Track
from .zoom import ZoomKeyframe


PROJECT_FILE_VERSION = 1

OUTPUT_DEFAULTS = {
    "resolution": [1920, 1080],
    "fps": 30,
    "max_zoom": 2.0,
    "auto_zoom": True,
    "background": "#1e1e1e",
    "padding": 0.0,
}


# ── Recording manifest ────────────────────────────────────────────


def load_recording_manifest(manifest_path: str | Path) -> dict:
    """Load, validate, and normalize a recording manifest.

    Processing pipeline:
      1. Parse YAML.
      2. Resolve ${path} variables in screen/camera/events paths.
      3. Validate stream entries (path required, positive sizes).
      4. Apply output defaults and build OutputSettings.

    Args:
        manifest_path: Path to the YAML recording manifest.

    Returns:
        Normalized config dict: name, screen, camera (or None),
        events (path or None), output (OutputSettings).

    Raises:
        ValueError: Missing/invalid fields.
    """
    with open(manifest_path) as f:
        raw = yaml.safe_load(f) or {}

    if "screen" not in raw:
        raise ValueError("Recording manifest: missing required 'screen' section")

    paths = raw.get("paths", {})

    config = {"name": raw.get("name")}
    config["screen"] = _normalize_stream(raw["screen"], "screen", paths)
    camera = raw.get("camera")
    config["camera"] = _normalize_stream(camera, "camera", paths) if camera else None

    events = raw.get("events")
    config["events"] = resolve_path_vars(str(events), paths) if events else None

    config["output"] = _normalize_output(raw.get("output") or {})
    return config


def _normalize_stream(stream: dict, label: str, paths: dict) -> dict:
    if not isinstance(stream, dict) or "path" not in stream:
        raise ValueError(f"Recording manifest: {label}.path is required")

    result = {"path": resolve_path_vars(str(stream["path"]), paths)}

    duration = stream.get("duration_ms")
    if duration is not None:
        if not isinstance(duration, (int, float)) or duration <= 0:
            raise ValueError(
                f"Recording manifest: {label}.duration_ms must be > 0, got {duration!r}"
            )
    result["duration_ms"] = duration

    width, height = stream.get("width"), stream.get("height")
    if (width is None) != (height is None):
        raise ValueError(
            f"Recording manifest: {label}.width and {label}.height go together"
        )
    if width is not None and (width <= 0 or height <= 0):
        raise ValueError(f"Recording manifest: {label} size must be positive")
    result["size"] = Size(width, height) if width is not None else None
    return result


def _normalize_output(output: dict) -> OutputSettings:
    unknown = set(output) - set(OUTPUT_DEFAULTS)
    if unknown:
        raise ValueError(
            f"Recording manifest: unknown output setting(s) {sorted(unknown)}. "
            f"Valid: {sorted(OUTPUT_DEFAULTS)}"
        )
    merged = {**OUTPUT_DEFAULTS, **output}

    resolution = merged["resolution"]
    if not isinstance(resolution, (list, tuple)) or len(resolution) != 2:
        raise ValueError(
            f"Recording manifest: output.resolution must be [width, height], got {resolution!r}"
        )

    return OutputSettings(
        size=Size(*resolution),
        frame_rate=merged["fps"],
        max_zoom=float(merged["max_zoom"]),
        auto_zoom=bool(merged["auto_zoom"]),
        background_color=str(merged["background"]),
        padding=float(merged["padding"]),
    )


def validate_recording_paths(config: dict) -> None:
    """Check that the recorded streams and event log exist on disk.

    Raises:
        FileNotFoundError: Lists all missing files.
    """
    wanted = [config["screen"]["path"]]
    if config["camera"] is not None:
        wanted.append(config["camera"]["path"])
    if config["events"] is not None:
        wanted.append(config["events"])

    missing = [p for p in wanted if not Path(p).exists()]
    if missing:
        msg = f"Missing {len(missing)} recording file(s):\n"
        for p in missing:
            msg += f"  - {p}\n"
        raise FileNotFoundError(msg)


def _stream_source(stream: dict) -> SourceMetadata:
    if stream["duration_ms"] is not None and stream["size"] is not None:
        return SourceMetadata(
            id=new_id(),
            duration_ms=stream["duration_ms"],
            size=stream["size"],
            url=stream["path"],
        )

    # Lazy: pulls in moviepy.
    from .probe import probe_source

    probed = probe_source(stream["path"])
    if stream["duration_ms"] is not None:
        probed = replace(probed, duration_ms=stream["duration_ms"])
    if stream["size"] is not None:
        probed = replace(probed, size=stream["size"])
    return probed


def project_from_manifest(config: dict) -> Project:
    """Build a project from a normalized recording manifest."""
    screen = _stream_source(config["screen"])
    camera = _stream_source(config["camera"]) if config["camera"] else None
    events = load_event_log(config["events"]) if config["events"] else []
    return create_from_source(
        screen, events,
        output_settings=config["output"],
        camera_source=camera,
        name=config["name"],
    )


# ── Project file ──────────────────────────────────────────────────


def _clip_to_dict(clip: Clip) -> dict:
    return asdict(clip)


def _track_to_dict(track: Track) -> dict:
    return {
        "id": track.id,
        "name": track.name,
        "kind": track.kind,
        "muted": track.muted,
        "locked": track.locked,
        "visible": track.visible,
        "clips": [_clip_to_dict(c) for c in track.clips],
    }


def _keyframe_to_dict(kf: ZoomKeyframe) -> dict:
    return {"timestamp": kf.timestamp, "zoom_box": [float(v) for v in kf.zoom_box]}


def project_to_dict(project: Project) -> dict:
    """Plain-data form of a project, safe for yaml.safe_dump."""
    timeline = project.timeline
    recording = None
    if timeline.recording is not None:
        rec = timeline.recording
        recording = {
            "timeline_offset_ms": rec.timeline_offset_ms,
            "screen_source_id": rec.screen_source_id,
            "camera_source_id": rec.camera_source_id,
            "viewport_motions": [_keyframe_to_dict(k) for k in rec.viewport_motions],
        }

    settings = project.output_settings
    return {
        "version": PROJECT_FILE_VERSION,
        "id": project.id,
        "name": project.name,
        "created_at": project.created_at.isoformat(),
        "updated_at": project.updated_at.isoformat(),
        "output": {
            "resolution": list(settings.size),
            "fps": settings.frame_rate,
            "max_zoom": settings.max_zoom,
            "auto_zoom": settings.auto_zoom,
            "background": settings.background_color,
            "padding": settings.padding,
        },
        "sources": [
            {
                "id": s.id,
                "kind": s.kind,
                "url": s.url,
                "duration_ms": s.duration_ms,
                "size": list(s.size),
                "fps": s.fps,
                "has_audio": s.has_audio,
            }
            for s in project.sources.values()
        ],
        "timeline": {
            "id": timeline.id,
            "duration_ms": timeline.duration_ms,
            "output_windows": [[w.start_ms, w.end_ms] for w in timeline.output_windows],
            "recording": recording,
            "tracks": [_track_to_dict(t) for t in timeline.tracks],
        },
    }


def project_from_dict(data: dict) -> Project:
    """Rebuild a project from project_to_dict output.

    Raises:
        ValueError: Unsupported file version or missing fields.
    """
    version = data.get("version")
    if version != PROJECT_FILE_VERSION:
        raise ValueError(
            f"Unsupported project file version {version!r} "
            f"(expected {PROJECT_FILE_VERSION})"
        )

    try:
        tl = data["timeline"]
        tracks = tuple(
            Track(
                id=t["id"],
                name=t["name"],
                kind=t["kind"],
                muted=t["muted"],
                locked=t["locked"],
                visible=t["visible"],
                clips=tuple(Clip(**c) for c in t["clips"]),
            )
            for t in tl["tracks"]
        )

        recording = None
        rec = tl.get("recording")
        if rec is not None:
            recording = Recording(
                screen_source_id=rec["screen_source_id"],
                timeline_offset_ms=rec["timeline_offset_ms"],
                camera_source_id=rec.get("camera_source_id"),
                viewport_motions=tuple(
                    ZoomKeyframe(k["timestamp"], Rect(*k["zoom_box"]))
                    for k in rec.get("viewport_motions", [])
                ),
            )

        timeline = Timeline(
            id=tl["id"],
            tracks=tracks,
            duration_ms=tl["duration_ms"],
            output_windows=tuple(OutputWindow(*w) for w in tl.get("output_windows", [])),
            recording=recording,
        )

        sources = {}
        for s in data.get("sources", []):
            sources[s["id"]] = SourceMetadata(
                id=s["id"],
                kind=s["kind"],
                url=s["url"],
                duration_ms=s["duration_ms"],
                size=Size(*s["size"]),
                fps=s.get("fps"),
                has_audio=s.get("has_audio", False),
            )

        return Project(
            id=data["id"],
            name=data["name"],
            timeline=timeline,
            sources=sources,
            output_settings=_normalize_output(data.get("output") or {}),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )
    except KeyError as exc:
        raise ValueError(f"Project file: missing field {exc}") from exc


def save_project(project: Project, path: str | Path) -> None:
    """Write a project file, creating parent directories."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w") as f:
        yaml.safe_dump(project_to_dict(project), f, sort_keys=False)


def load_project(path: str | Path) -> Project:
    """Read a project file written by save_project."""
    with open(path) as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Project file {path}: expected a mapping")
    return project_from_dict(data)
