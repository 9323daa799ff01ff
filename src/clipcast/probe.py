"""Read media metadata from a captured file."""

from pathlib import Path

from moviepy import VideoFileClip

from .common import Size, new_id
from .project import SourceMetadata


def probe_source(path: str | Path, source_id: str | None = None) -> SourceMetadata:
    """Read duration, frame size, fps and audio presence of a video file.

    Args:
        path: Path to the recorded video.
        source_id: Id for the new source; a fresh id when omitted.

    Raises:
        FileNotFoundError: If the file is missing.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Source video not found: {path}")

    with VideoFileClip(str(p)) as clip:
        width, height = clip.size
        return SourceMetadata(
            id=source_id or new_id(),
            duration_ms=clip.duration * 1000,
            size=Size(width, height),
            kind="video",
            url=str(p),
            fps=clip.fps,
            has_audio=clip.audio is not None,
        )
