#!/usr/bin/env python3
"""Generate a synthetic screen recording for the clipcast demo.

Creates examples/demo-recording/ with:
  - screen.mp4: a 6-second 640x360 "screen" with three buttons that
    light up when clicked.
  - events.json: the matching capture log (mouse moves and clicks).
  - recording.yaml: a recording manifest pointing at both.

Usage:
    python examples/generate_demo_recording.py
    # Then build a project and look at the zoom schedule:
    clipcast create --manifest examples/demo-recording/recording.yaml \
        --output examples/demo-recording/project.yaml
    clipcast zoom examples/demo-recording/project.yaml --preview zoom.png
"""

import json
from pathlib import Path

import numpy as np
import yaml
from moviepy import ImageClip, concatenate_videoclips
from PIL import Image, ImageDraw

OUTPUT_DIR = Path(__file__).resolve().parent / "demo-recording"
SIZE = (640, 360)
FPS = 30
DURATION = 6.0

# Buttons the cursor clicks, in order: (label, box, click time in seconds).
BUTTONS = [
    ("Open",  (40, 40, 160, 90),    1.0),
    ("Save",  (260, 150, 380, 200), 2.5),
    ("Share", (480, 270, 600, 320), 4.0),
]


def _make_frame(active: int | None) -> np.ndarray:
    """Desktop-like frame with the active button highlighted."""
    img = Image.new("RGB", SIZE, (235, 235, 240))
    draw = ImageDraw.Draw(img)
    for i, (label, box, _) in enumerate(BUTTONS):
        fill = (80, 140, 240) if i == active else (200, 200, 210)
        draw.rectangle(box, fill=fill)
        draw.text((box[0] + 10, box[1] + 15), label, fill=(20, 20, 20))
    return np.array(img)


def _events() -> list[dict]:
    base = {"viewportWidth": SIZE[0], "viewportHeight": SIZE[1], "scrollX": 0, "scrollY": 0}
    records = [{"type": "url", "timestamp": 0, "url": "https://example.com/app", **base}]
    for label, (x0, y0, x1, y1), t in BUTTONS:
        cx, cy = (x0 + x1) / 2, (y0 + y1) / 2
        ts = int(t * 1000)
        records.append({"type": "mouse", "timestamp": ts - 300, "x": cx - 20, "y": cy - 10,
                        "isDragging": False, **base})
        records.append({"type": "click", "timestamp": ts, "x": cx, "y": cy,
                        "tagName": "BUTTON", **base})
    return records


def main():
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    video = OUTPUT_DIR / "screen.mp4"
    if video.exists():
        print(f"  skip {video.name} (exists)")
    else:
        # One segment per state: idle, then each button lit from its click on.
        starts = [0.0] + [t for _, _, t in BUTTONS]
        ends = starts[1:] + [DURATION]
        segments = [
            ImageClip(_make_frame(i - 1 if i > 0 else None), duration=end - start)
            for i, (start, end) in enumerate(zip(starts, ends))
        ]
        concatenate_videoclips(segments).write_videofile(str(video), fps=FPS, logger=None)
        print(f"  wrote {video.name} ({DURATION}s)")

    (OUTPUT_DIR / "events.json").write_text(json.dumps(_events(), indent=2))
    print("  wrote events.json")

    manifest = {
        "name": "Demo recording",
        "paths": {"rec": str(OUTPUT_DIR)},
        "screen": {"path": "${rec}/screen.mp4"},
        "events": "${rec}/events.json",
        "output": {"resolution": [1280, 720], "max_zoom": 2.0, "padding": 0.05},
    }
    with open(OUTPUT_DIR / "recording.yaml", "w") as f:
        yaml.safe_dump(manifest, f, sort_keys=False)
    print("  wrote recording.yaml")

    print(f"\nDone. Demo recording in {OUTPUT_DIR}")


if __name__ == "__main__":
    main()
