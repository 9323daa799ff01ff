"""CLI for splitting clips in a project file.

Usage:
    # Razor all tracks at 5s
    clipcast split project.yaml --at 5000

    # Split one track (and anything linked to it), write elsewhere
    clipcast split project.yaml --at 5000 --track TRACK_ID --output edited.yaml
"""

import argparse

from .project import replace_timeline
from .project_file import load_project, save_project
from .timeline import get_track, split_at


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Split clips under the playhead.",
    )
    parser.add_argument("project", help="Path to project file")
    parser.add_argument(
        "--at", type=float, required=True,
        help="Playhead position in timeline milliseconds",
    )
    parser.add_argument(
        "--track", default=None,
        help="Only split this track id and clips linked to it",
    )
    parser.add_argument(
        "--output", default=None,
        help="Write the edited project here instead of in place",
    )
    parsed = parser.parse_args(args)

    if parsed.at < 0:
        parser.error("--at must be >= 0")

    project = load_project(parsed.project)
    if parsed.track is not None:
        try:
            get_track(project.timeline, parsed.track)
        except KeyError:
            parser.error(f"No track with id '{parsed.track}'")

    before = sum(len(t.clips) for t in project.timeline.tracks)
    timeline = split_at(project.timeline, parsed.at, parsed.track)
    after = sum(len(t.clips) for t in timeline.tracks)

    if timeline is project.timeline:
        print(f"Nothing to split at {parsed.at:.0f}ms")
        return

    output = parsed.output or parsed.project
    save_project(replace_timeline(project, timeline), output)
    print(f"Split {after - before} clip(s) at {parsed.at:.0f}ms")
    print(f"Done: {output}")


if __name__ == "__main__":
    main()
