"""Tests for the zoom scheduler."""

import pytest

from clipcast.common import Point, Rect, Size
from clipcast.events import ClickEvent, KeydownEvent, MouseEvent, UrlEvent
from clipcast.mapping import VideoMappingConfig
from clipcast.zoom import (
    ZoomConfig,
    ZoomKeyframe,
    calculate_zoom_schedule,
    zoom_box_at_time,
)


HD = Size(1920, 1080)


def _click(timestamp, x, y, scroll_x=0, scroll_y=0):
    return ClickEvent(
        timestamp=timestamp, x=x, y=y,
        viewport_width=1920, viewport_height=1080,
        scroll_x=scroll_x, scroll_y=scroll_y,
    )


def _identity_hd():
    return VideoMappingConfig(HD, HD, 0.0)


class TestCalculateZoomSchedule:
    def test_no_clicks_single_full_frame_keyframe(self):
        schedule = calculate_zoom_schedule(ZoomConfig(), _identity_hd(), [])
        assert schedule == [ZoomKeyframe(0, Rect(0, 0, 1920, 1080))]

    def test_non_click_events_ignored(self):
        events = [
            MouseEvent(timestamp=100, x=5, y=5),
            KeydownEvent(timestamp=200, key="a"),
            UrlEvent(timestamp=300, url="https://example.com"),
        ]
        schedule = calculate_zoom_schedule(ZoomConfig(), _identity_hd(), events)
        assert len(schedule) == 1

    def test_single_click_box_size_and_clamp(self):
        config = ZoomConfig(zoom_intensity=2)
        schedule = calculate_zoom_schedule(config, _identity_hd(), [_click(1500, 100, 100)])

        assert len(schedule) == 2
        kf = schedule[1]
        assert kf.timestamp == 1500
        assert kf.zoom_box.width == 960
        assert kf.zoom_box.height == 540
        assert 0 <= kf.zoom_box.x <= 960
        assert 0 <= kf.zoom_box.y <= 540
        # Click near the top-left corner: centred box shifted back to the edge.
        assert (kf.zoom_box.x, kf.zoom_box.y) == (0, 0)

    def test_centred_on_click(self):
        schedule = calculate_zoom_schedule(
            ZoomConfig(zoom_intensity=2), _identity_hd(), [_click(10, 960, 540)],
        )
        assert schedule[1].zoom_box == Rect(480, 270, 960, 540)

    def test_clamped_at_far_edge(self):
        schedule = calculate_zoom_schedule(
            ZoomConfig(zoom_intensity=2), _identity_hd(), [_click(10, 1919, 1079)],
        )
        assert schedule[1].zoom_box == Rect(960, 540, 960, 540)

    def test_scroll_offset_subtracted(self):
        schedule = calculate_zoom_schedule(
            ZoomConfig(zoom_intensity=2), _identity_hd(),
            [_click(10, 1000, 700, scroll_x=0, scroll_y=200)],
        )
        assert schedule[1].zoom_box == Rect(520, 230, 960, 540)

    def test_clicks_sorted_by_timestamp(self):
        events = [_click(3000, 960, 540), _click(1000, 0, 0), _click(2000, 1919, 1079)]
        schedule = calculate_zoom_schedule(ZoomConfig(), _identity_hd(), events)
        assert [k.timestamp for k in schedule] == [0, 1000, 2000, 3000]

    def test_ties_keep_input_order(self):
        events = [_click(1000, 1919, 1079), _click(1000, 0, 0)]
        schedule = calculate_zoom_schedule(ZoomConfig(), _identity_hd(), events)
        assert schedule[1].zoom_box.x == 960
        assert schedule[2].zoom_box.x == 0

    def test_box_size_constant(self):
        events = [_click(t, t % 1920, t % 1080) for t in range(100, 5000, 700)]
        schedule = calculate_zoom_schedule(ZoomConfig(zoom_intensity=3), _identity_hd(), events)
        assert len(schedule) == 1 + len(events)
        for kf in schedule[1:]:
            assert kf.zoom_box.width == pytest.approx(640)
            assert kf.zoom_box.height == pytest.approx(360)

    def test_deterministic(self):
        events = [_click(500, 300, 200), _click(100, 1500, 900, scroll_y=50)]
        mapping = VideoMappingConfig(Size(2560, 1440), HD, 0.05)
        first = calculate_zoom_schedule(ZoomConfig(), mapping, events)
        second = calculate_zoom_schedule(ZoomConfig(), mapping, events)
        assert first == second

    def test_intensity_below_one_never_exceeds_frame(self):
        schedule = calculate_zoom_schedule(
            ZoomConfig(zoom_intensity=0.5), _identity_hd(), [_click(10, 100, 100)],
        )
        assert schedule[1].zoom_box == Rect(0, 0, 1920, 1080)

    def test_invalid_intensity_raises(self):
        with pytest.raises(ValueError, match="zoom_intensity"):
            ZoomConfig(zoom_intensity=0)

    def test_returns_plain_floats(self):
        schedule = calculate_zoom_schedule(ZoomConfig(), _identity_hd(), [_click(1, 960, 540)])
        assert all(type(v) is float for v in schedule[1].zoom_box)

    def test_custom_mapping(self):
        class HalfScale:
            output_video_size = Size(1000, 1000)

            def project_input_to_output(self, point):
                return Point(point.x / 2, point.y / 2)

        schedule = calculate_zoom_schedule(
            ZoomConfig(zoom_intensity=2), HalfScale(), [_click(10, 1000, 1000)],
        )
        assert schedule[1].zoom_box == Rect(250, 250, 500, 500)


class TestLetterboxedScenario:
    """Square 2000px capture into a 1000px output at 2x zoom."""

    EVENTS = [
        _click(1000, 0, 0),
        _click(3000, 1000, 1000),
        _click(5000, 2000, 2000),
    ]

    @pytest.mark.parametrize("padding", [0.0, 0.1])
    def test_keyframes(self, padding):
        mapping = VideoMappingConfig(Size(2000, 2000), Size(1000, 1000), padding)
        schedule = calculate_zoom_schedule(ZoomConfig(zoom_intensity=2), mapping, self.EVENTS)

        assert len(schedule) == 4
        assert schedule[0] == ZoomKeyframe(0, Rect(0, 0, 1000, 1000))
        assert (schedule[1].zoom_box.x, schedule[1].zoom_box.y) == (0, 0)
        assert (schedule[2].zoom_box.x, schedule[2].zoom_box.y) == (250, 250)
        assert (schedule[3].zoom_box.x, schedule[3].zoom_box.y) == (500, 500)
        for kf in schedule[1:]:
            assert (kf.zoom_box.width, kf.zoom_box.height) == (500, 500)


class TestZoomBoxAtTime:
    FULL = Rect(0, 0, 1000, 1000)
    BOX = Rect(250, 250, 500, 500)

    def _schedule(self):
        return [ZoomKeyframe(0, self.FULL), ZoomKeyframe(2000, self.BOX)]

    def test_before_motion_is_full_frame(self):
        assert zoom_box_at_time(self._schedule(), 500, 1000) == self.FULL

    def test_motion_start(self):
        assert zoom_box_at_time(self._schedule(), 1000, 1000) == self.FULL

    def test_halfway_eased(self):
        box = zoom_box_at_time(self._schedule(), 1500, 1000)
        assert box == pytest.approx((125, 125, 750, 750))

    def test_arrives_on_timestamp(self):
        assert zoom_box_at_time(self._schedule(), 2000, 1000) == pytest.approx(self.BOX)
        assert zoom_box_at_time(self._schedule(), 9000, 1000) == pytest.approx(self.BOX)

    def test_interrupted_motion_continues_from_current_state(self):
        schedule = self._schedule() + [ZoomKeyframe(2500, Rect(500, 500, 500, 500))]
        box = zoom_box_at_time(schedule, 2000, 1000)
        assert box == pytest.approx((312.5, 312.5, 625, 625))

    def test_zero_transition_jumps(self):
        assert zoom_box_at_time(self._schedule(), 1999, 0) == self.FULL
        assert zoom_box_at_time(self._schedule(), 2000, 0) == self.BOX

    def test_empty_schedule_raises(self):
        with pytest.raises(ValueError):
            zoom_box_at_time([], 0)
