"""Tests for clip value operations."""

import pytest

from clipcast.clip import (
    Clip,
    contains_time,
    create_clip,
    get_duration,
    get_timeline_out,
    source_time_at,
    split_clip,
)
from clipcast.errors import InvalidDuration, SplitOutOfBounds


class TestCreateClip:
    def test_applies_defaults(self):
        clip = create_clip("src", 0, 1000, 500)
        assert clip.speed == 1.0
        assert clip.audio_volume == 1.0
        assert clip.audio_muted is False
        assert clip.link_group_id is None

    def test_options_override_defaults(self):
        clip = create_clip("src", 0, 1000, 0, speed=2.0, audio_muted=True, link_group_id="A")
        assert clip.speed == 2.0
        assert clip.audio_muted is True
        assert clip.link_group_id == "A"

    def test_fresh_ids(self):
        a = create_clip("src", 0, 1000, 0)
        b = create_clip("src", 0, 1000, 0)
        assert a.id != b.id

    @pytest.mark.parametrize("source_in,source_out", [(1000, 1000), (2000, 1000)])
    def test_empty_or_reversed_bounds_raise(self, source_in, source_out):
        with pytest.raises(InvalidDuration, match="source_in"):
            create_clip("src", source_in, source_out, 0)

    def test_invalid_duration_is_value_error(self):
        with pytest.raises(ValueError):
            create_clip("src", 5, 1, 0)

    def test_zero_speed_raises(self):
        with pytest.raises(InvalidDuration, match="speed"):
            create_clip("src", 0, 1000, 0, speed=0)

    def test_negative_volume_raises(self):
        with pytest.raises(ValueError, match="audio_volume"):
            create_clip("src", 0, 1000, 0, audio_volume=-0.1)

    def test_unknown_option_raises(self):
        with pytest.raises(TypeError):
            create_clip("src", 0, 1000, 0, colour="red")

    def test_clips_are_frozen(self):
        clip = create_clip("src", 0, 1000, 0)
        with pytest.raises(AttributeError):
            clip.speed = 2.0


class TestDuration:
    def test_normal_speed(self):
        clip = create_clip("src", 1000, 4000, 500)
        assert get_duration(clip) == 3000
        assert get_timeline_out(clip) == 3500

    def test_speed_scales_duration(self):
        clip = create_clip("src", 0, 4000, 0, speed=2.0)
        assert get_duration(clip) == 2000

    def test_slow_motion(self):
        clip = create_clip("src", 0, 1000, 0, speed=0.5)
        assert get_duration(clip) == 2000

    def test_computed_from_current_fields(self):
        clip = Clip(id="x", source_id="src", source_in_ms=0, source_out_ms=900,
                    timeline_in_ms=0, speed=3.0)
        assert get_duration(clip) == pytest.approx(300)


class TestContainsTime:
    def test_half_open_interval(self):
        clip = create_clip("src", 0, 1000, 1000)
        assert contains_time(clip, 1000)
        assert contains_time(clip, 1999)
        assert not contains_time(clip, 2000)
        assert not contains_time(clip, 999)


class TestSplitClip:
    def test_basic_split(self):
        clip = create_clip("source-1", 0, 10000, 0)
        left, right = split_clip(clip, 4000)

        assert left.timeline_in_ms == 0
        assert left.source_in_ms == 0
        assert left.source_out_ms == 4000

        assert right.timeline_in_ms == 4000
        assert right.source_in_ms == 4000
        assert right.source_out_ms == 10000

    def test_pieces_get_fresh_ids(self):
        clip = create_clip("src", 0, 10000, 0)
        left, right = split_clip(clip, 5000)
        assert len({clip.id, left.id, right.id}) == 3

    def test_pieces_keep_attributes(self):
        clip = create_clip(
            "src", 0, 10000, 0,
            speed=1.5, audio_volume=0.3, audio_muted=True, link_group_id="G",
        )
        for piece in split_clip(clip, 2000):
            assert piece.speed == 1.5
            assert piece.audio_volume == 0.3
            assert piece.audio_muted is True
            assert piece.link_group_id == "G"
            assert piece.source_id == "src"

    def test_speed_scaled_split_preserves_end(self):
        clip = create_clip("src", 1000, 7000, 2000, speed=2.0)  # timeline 2000-5000
        left, right = split_clip(clip, 3000)

        # One timeline second at 2x covers two source seconds.
        assert left.source_out_ms == 3000
        assert right.source_in_ms == 3000
        assert left.timeline_in_ms == clip.timeline_in_ms
        assert get_timeline_out(left) == pytest.approx(3000)
        assert get_timeline_out(right) == pytest.approx(get_timeline_out(clip))

    def test_fractional_speed_split_meets_in_the_middle(self):
        clip = create_clip("src", 0, 1000, 100, speed=0.3)
        t = 100 + get_duration(clip) / 3
        left, right = split_clip(clip, t)
        assert left.source_out_ms == right.source_in_ms
        assert get_timeline_out(right) == pytest.approx(get_timeline_out(clip))
        assert get_timeline_out(left) == pytest.approx(right.timeline_in_ms)

    @pytest.mark.parametrize("t", [0, 10000, -1, 12000])
    def test_split_at_or_outside_bounds_raises(self, t):
        clip = create_clip("src", 0, 10000, 0)
        with pytest.raises(SplitOutOfBounds):
            split_clip(clip, t)

    def test_original_untouched(self):
        clip = create_clip("src", 0, 10000, 0)
        split_clip(clip, 5000)
        assert clip.source_out_ms == 10000
        assert clip.timeline_in_ms == 0


class TestSourceTimeAt:
    def test_maps_through_speed(self):
        clip = create_clip("src", 500, 4500, 1000, speed=2.0)
        assert source_time_at(clip, 1000) == 500
        assert source_time_at(clip, 2000) == 2500
