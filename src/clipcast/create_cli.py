"""CLI for creating a project from a finished recording.

Usage:
    clipcast create --manifest recording.yaml --output project.yaml
"""

import argparse

from .project_file import (
    load_recording_manifest,
    project_from_manifest,
    save_project,
    validate_recording_paths,
)


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Create a clipcast project from a recording manifest.",
    )
    parser.add_argument(
        "--manifest", required=True,
        help="Path to recording YAML manifest",
    )
    parser.add_argument(
        "--output", required=True,
        help="Path of the project file to write",
    )
    parser.add_argument(
        "--skip-validation", action="store_true",
        help="Skip checking that recorded files exist",
    )
    parsed = parser.parse_args(args)

    config = load_recording_manifest(parsed.manifest)
    if not parsed.skip_validation:
        validate_recording_paths(config)

    project = project_from_manifest(config)
    save_project(project, parsed.output)

    motions = project.timeline.recording.viewport_motions
    print(f"Project '{project.name}'")
    print(f"  {len(project.timeline.tracks)} track(s), "
          f"{project.timeline.duration_ms / 1000:.1f}s")
    print(f"  {len(motions)} zoom keyframe(s)")
    print(f"Done: {parsed.output}")


if __name__ == "__main__":
    main()
