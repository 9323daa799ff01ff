"""Coordinate mapping from captured-viewport pixels to output pixels.

The recording (input) is letterboxed into the output frame: scaled to
fit inside the frame minus a padding margin on every side, then
centred. The zoom scheduler only needs one capability from this, the
InputToOutputMapping protocol, so hosts can plug in their own scaling.
"""

from typing import Protocol

from .common import Point, Rect, Size


class InputToOutputMapping(Protocol):
    output_video_size: Size

    def project_input_to_output(self, point: Point) -> Point:
        ...


class VideoMappingConfig:
    """Letterbox projection of the input video into the output frame.

    Args:
        input_video_size: Size of the captured video/viewport.
        output_video_size: Size of the exported frame.
        padding_percentage: Margin on each side as a fraction of the
            output dimension, in [0, 0.5).
    """

    def __init__(
        self,
        input_video_size: Size,
        output_video_size: Size,
        padding_percentage: float = 0.0,
    ):
        if not 0 <= padding_percentage < 0.5:
            raise ValueError(
                f"padding_percentage must be in [0, 0.5), got {padding_percentage}"
            )
        if min(input_video_size) <= 0 or min(output_video_size) <= 0:
            raise ValueError("Video sizes must be positive")

        self.input_video_size = Size(*input_video_size)
        self.output_video_size = Size(*output_video_size)
        self.padding_percentage = padding_percentage

        usable = 1 - 2 * padding_percentage
        self.scale = max(
            self.input_video_size.width / (self.output_video_size.width * usable),
            self.input_video_size.height / (self.output_video_size.height * usable),
        )

        projected_w = self.input_video_size.width / self.scale
        projected_h = self.input_video_size.height / self.scale
        self.projected_box = Rect(
            (self.output_video_size.width - projected_w) / 2,
            (self.output_video_size.height - projected_h) / 2,
            projected_w,
            projected_h,
        )

    def project_input_to_output(self, point: Point) -> Point:
        return Point(
            self.projected_box.x + point.x / self.scale,
            self.projected_box.y + point.y / self.scale,
        )

    def project_input_to_output_rect(self, rect: Rect) -> Rect:
        origin = self.project_input_to_output(Point(rect.x, rect.y))
        return Rect(origin.x, origin.y, rect.width / self.scale, rect.height / self.scale)
