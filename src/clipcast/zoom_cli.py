"""CLI for inspecting and recomputing a project's zoom schedule.

Usage:
    # Print the stored schedule
    clipcast zoom project.yaml

    # Recompute from a capture log at a new intensity, render a storyboard
    clipcast zoom project.yaml --events events.json --intensity 2.5 --preview zoom.png
"""

import argparse

from .events import load_event_log
from .preview import save_zoom_preview
from .project import build_zoom_schedule, replace_timeline
from .project_file import load_project, save_project
from .time_mapper import map_source_to_output_time
from .timeline import with_viewport_motions


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Show or recompute the auto-zoom schedule of a project.",
    )
    parser.add_argument("project", help="Path to project file")
    parser.add_argument(
        "--events", default=None,
        help="Capture event log (JSON); recomputes and stores the schedule",
    )
    parser.add_argument(
        "--intensity", type=float, default=None,
        help="Zoom intensity for recomputation (default: project max_zoom)",
    )
    parser.add_argument(
        "--preview", default=None,
        help="Write a storyboard PNG of the schedule",
    )
    parsed = parser.parse_args(args)

    if parsed.intensity is not None and parsed.events is None:
        parser.error("--intensity requires --events")
    if parsed.intensity is not None and parsed.intensity < 1:
        parser.error("--intensity must be >= 1")

    project = load_project(parsed.project)
    recording = project.timeline.recording
    if recording is None:
        parser.error("Project has no recording")

    if parsed.events is not None:
        events = load_event_log(parsed.events)
        schedule = build_zoom_schedule(project, events, parsed.intensity)
        timeline = with_viewport_motions(project.timeline, schedule)
        project = replace_timeline(project, timeline)
        save_project(project, parsed.project)
        print(f"Recomputed {len(schedule)} keyframe(s) from {len(events)} event(s)")
    else:
        schedule = list(recording.viewport_motions)

    windows = list(project.timeline.output_windows)
    for i, kf in enumerate(schedule):
        x, y, w, h = kf.zoom_box
        out_t = map_source_to_output_time(kf.timestamp, windows, recording.timeline_offset_ms)
        shown = f"{out_t / 1000:7.2f}s" if out_t is not None else "    cut"
        print(f"  #{i:<3} {kf.timestamp / 1000:7.2f}s -> {shown}  "
              f"box=({x:.0f}, {y:.0f}, {w:.0f}x{h:.0f})")

    if parsed.preview:
        settings = project.output_settings
        save_zoom_preview(
            schedule, settings.size, parsed.preview,
            background=settings.background_color,
        )
        print(f"Preview: {parsed.preview}")


if __name__ == "__main__":
    main()
