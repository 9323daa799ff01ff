"""Shared test fixtures for clipcast tests."""

import json
import subprocess

import pytest
import imageio_ffmpeg

_FFMPEG = imageio_ffmpeg.get_ffmpeg_exe()


@pytest.fixture
def source_video(tmp_path):
    """Create a 2-second test video (320x240, 10fps) with audio using ffmpeg."""
    out = tmp_path / "screen.mp4"
    subprocess.run(
        [
            _FFMPEG, "-y",
            "-f", "lavfi", "-i", "color=c=blue:s=320x240:d=2:r=10",
            "-f", "lavfi", "-i", "anullsrc=r=44100:cl=mono",
            "-shortest",
            "-c:v", "libx264", "-crf", "28", "-pix_fmt", "yuv420p",
            "-c:a", "aac", "-b:a", "32k",
            str(out),
        ],
        check=True,
        capture_output=True,
    )
    return out


@pytest.fixture
def event_log(tmp_path):
    """Capture log with two clicks, a keystroke and an unknown record."""
    records = [
        {"type": "mouse", "timestamp": 100, "x": 10, "y": 10,
         "viewportWidth": 1920, "viewportHeight": 1080, "scrollX": 0, "scrollY": 0,
         "isDragging": False},
        {"type": "click", "timestamp": 3000, "x": 1800, "y": 1000,
         "viewportWidth": 1920, "viewportHeight": 1080, "scrollX": 0, "scrollY": 0,
         "tagName": "BUTTON"},
        {"type": "keydown", "timestamp": 3500, "key": "a", "code": "KeyA",
         "ctrlKey": False, "metaKey": False, "shiftKey": True, "altKey": False,
         "viewportWidth": 1920, "viewportHeight": 1080, "scrollX": 0, "scrollY": 0},
        {"type": "click", "timestamp": 1000, "x": 960, "y": 540,
         "viewportWidth": 1920, "viewportHeight": 1080, "scrollX": 0, "scrollY": 0,
         "tagName": "A"},
        {"type": "scroll", "timestamp": 4000},
    ]
    path = tmp_path / "events.json"
    path.write_text(json.dumps(records))
    return path
