"""Unit tests for Timecode conversions, formatting and serialization."""

from datetime import timedelta
from fractions import Fraction

import pytest

from rationaltc.fraction import Frames, MilliSeconds, TimecodeFrames
from rationaltc.frame_rate import FrameRate
from rationaltc.timecode import (
    Timecode,
    format_timecode,
    from_duration,
    from_frames,
    to_rational,
)


def frame_tc(hours, minutes, seconds, frames, rate=FrameRate.FPS_25,
             drop_frame=False, color_frame=False):
    return Timecode(hours, minutes, seconds, Frames(TimecodeFrames(
        frame_rate=rate,
        number_of_frames=frames,
        drop_frame=drop_frame,
        color_frame=color_frame,
    )))


# ---------------------------------------------------------------------------
# Frame count -> Timecode
# ---------------------------------------------------------------------------

class TestFromFrames:
    def test_ten_hours_at_25(self):
        tc = from_frames(900000, FrameRate.FPS_25)
        assert (tc.hours, tc.minutes, tc.seconds, tc.frame) == (10, 0, 0, 0)

    def test_one_second_at_25(self):
        tc = from_frames(25, FrameRate.FPS_25)
        assert (tc.hours, tc.minutes, tc.seconds, tc.frame) == (0, 0, 1, 0)

    def test_frames_only(self):
        tc = from_frames(10, FrameRate.FPS_25)
        assert (tc.hours, tc.minutes, tc.seconds, tc.frame) == (0, 0, 0, 10)

    def test_zero(self):
        assert from_frames(0, FrameRate.FPS_30) == frame_tc(0, 0, 0, 0, FrameRate.FPS_30)

    def test_flags_are_cleared(self):
        tc = from_frames(1234, FrameRate.FPS_29_97)
        assert tc.drop_frame is False
        assert tc.color_frame is False

    def test_mixed_fields(self):
        # 01:02:03:04 at 24 fps
        n = ((1 * 60 + 2) * 60 + 3) * 24 + 4
        assert from_frames(n, FrameRate.FPS_24) == frame_tc(1, 2, 3, 4, FrameRate.FPS_24)

    @pytest.mark.parametrize("rate", [FrameRate.FPS_24, FrameRate.FPS_25, FrameRate.FPS_60])
    def test_exact_hour_boundaries(self, rate):
        fps = rate.frames_per_second
        assert from_frames(3600 * fps, rate) == frame_tc(1, 0, 0, 0, rate)
        assert from_frames(3600 * fps - 1, rate) == frame_tc(0, 59, 59, fps - 1, rate)
        assert from_frames(60 * fps, rate) == frame_tc(0, 1, 0, 0, rate)

    def test_matches_cascading_decomposition(self):
        rate = FrameRate.FPS_30
        fps = 30
        for n in (0, 29, 30, 1799, 1800, 107999, 108000, 108001, 2591999, 2592000):
            tc = from_frames(n, rate)
            expected = (n // (3600 * fps),
                        n % (3600 * fps) // (60 * fps),
                        n % (60 * fps) // fps,
                        n % fps)
            assert (tc.hours, tc.minutes, tc.seconds, tc.frame) == expected

    def test_hours_wrap_at_256(self):
        tc = from_frames(256 * 3600 * 25 + 25, FrameRate.FPS_25)
        assert tc.hours == 0
        assert tc.seconds == 1

    def test_23_976_decomposes_with_24(self):
        tc = from_frames(24, FrameRate.FPS_23_976)
        assert (tc.hours, tc.minutes, tc.seconds, tc.frame) == (0, 0, 1, 0)
        assert tc.frame_rate is FrameRate.FPS_23_976

        tc = from_frames(23, FrameRate.FPS_23_976)
        assert (tc.seconds, tc.frame) == (0, 23)

    def test_29_97_decomposes_with_30(self):
        tc = from_frames(108000, FrameRate.FPS_29_97)
        assert (tc.hours, tc.minutes, tc.seconds, tc.frame) == (1, 0, 0, 0)


# ---------------------------------------------------------------------------
# Timecode -> exact duration
# ---------------------------------------------------------------------------

class TestToRational:
    @pytest.mark.parametrize("rate", [
        FrameRate.FPS_24, FrameRate.FPS_25, FrameRate.FPS_30,
        FrameRate.FPS_50, FrameRate.FPS_60,
    ])
    @pytest.mark.parametrize("n", [0, 1, 17, 1499, 90000, 899999, 900000, 5_000_000])
    def test_integer_rate_round_trip_is_exact(self, rate, n):
        tc = from_frames(n, rate)
        assert to_rational(tc) == n * rate.frame_duration
        assert tc.frame == n % rate.frames_per_second

    def test_frames_use_true_ntsc_duration(self):
        tc = frame_tc(0, 0, 0, 23, FrameRate.FPS_23_976)
        assert tc.to_rational() == Fraction(23 * 1001, 24000)

    def test_whole_seconds_stay_integer_for_ntsc(self):
        tc = from_frames(24, FrameRate.FPS_23_976)
        assert tc.to_rational() == 1

    def test_mixed_ntsc_timecode(self):
        tc = frame_tc(1, 0, 0, 15, FrameRate.FPS_29_97)
        assert tc.to_rational() == 3600 + Fraction(15 * 1001, 30000)

    def test_milliseconds(self):
        tc = Timecode(0, 2, 5, MilliSeconds(66))
        assert tc.to_rational() == Fraction(125066, 1000)

    def test_result_is_a_fraction(self):
        assert isinstance(from_frames(7, FrameRate.FPS_25).to_rational(), Fraction)
        assert isinstance(Timecode(0, 0, 0, MilliSeconds(0)).to_rational(), Fraction)


# ---------------------------------------------------------------------------
# Duration -> Timecode
# ---------------------------------------------------------------------------

class TestFromDuration:
    def test_two_minutes_five_seconds(self):
        tc = from_duration(timedelta(milliseconds=125066))
        assert tc == Timecode(0, 2, 5, MilliSeconds(66))
        assert str(tc) == "00:02:05.066"

    def test_hours(self):
        tc = from_duration(timedelta(hours=10, minutes=59, seconds=59, milliseconds=999))
        assert tc == Timecode(10, 59, 59, MilliSeconds(999))

    def test_sub_millisecond_is_floored(self):
        tc = from_duration(timedelta(seconds=1, microseconds=1999))
        assert tc == Timecode(0, 0, 1, MilliSeconds(1))

    def test_no_float_drift_at_boundaries(self):
        # 0.29 s and 4.35 s misround with float second-to-millisecond scaling
        assert from_duration(timedelta(milliseconds=290)).fraction == MilliSeconds(290)
        assert from_duration(timedelta(milliseconds=4350)).fraction == MilliSeconds(350)

    def test_from_milliseconds(self):
        assert Timecode.from_milliseconds(3_600_000) == Timecode(1, 0, 0, MilliSeconds(0))

    def test_hours_wrap_at_256(self):
        assert Timecode.from_milliseconds(257 * 3_600_000).hours == 1

    def test_round_trip(self):
        tc = Timecode.from_milliseconds(45_296_789)
        assert tc.to_rational() == Fraction(45_296_789, 1000)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

class TestFormat:
    def test_non_drop_frame(self):
        assert str(frame_tc(10, 0, 0, 0)) == "10:00:00:00"

    def test_drop_frame_separator(self):
        tc = frame_tc(1, 2, 3, 4, FrameRate.FPS_29_97, drop_frame=True)
        assert str(tc) == "01:02:03;04"

    def test_color_frame_does_not_change_output(self):
        assert str(frame_tc(0, 0, 0, 5, color_frame=True)) == "00:00:00:05"

    def test_milliseconds(self):
        assert str(Timecode(0, 0, 1, MilliSeconds(5))) == "00:00:01.005"

    def test_out_of_range_values_are_printed(self):
        assert str(frame_tc(45, 85, 85, 45)) == "45:85:85:45"

    def test_digit_width_is_asked_of_the_fraction(self):
        assert Frames(TimecodeFrames(FrameRate.FPS_25, 3)).number_of_digits == 2
        assert MilliSeconds(3).number_of_digits == 3

    def test_format_timecode(self):
        assert format_timecode(from_frames(25, FrameRate.FPS_25)) == "00:00:01:00"
        assert format_timecode(None) == "--:--:--:--"


# ---------------------------------------------------------------------------
# Value semantics and serialization
# ---------------------------------------------------------------------------

class TestValue:
    def test_structural_equality_and_hash(self):
        a = frame_tc(1, 2, 3, 4)
        b = frame_tc(1, 2, 3, 4)
        assert a == b
        assert hash(a) == hash(b)
        assert a != frame_tc(1, 2, 3, 4, FrameRate.FPS_50)

    def test_immutable(self):
        tc = frame_tc(1, 2, 3, 4)
        with pytest.raises(AttributeError):
            tc.hours = 2

    def test_millisecond_timecode_has_no_frame_fields(self):
        tc = Timecode(0, 0, 0, MilliSeconds(1))
        assert tc.frame is None
        assert tc.frame_rate is None
        assert tc.drop_frame is False


class TestSerialization:
    def test_frames_to_dict(self):
        tc = frame_tc(1, 2, 3, 4, FrameRate.FPS_29_97, drop_frame=True)
        assert tc.to_dict() == {
            "hours": 1,
            "minutes": 2,
            "seconds": 3,
            "fraction": {"frames": {
                "frame_rate": "FPS_29_97",
                "number_of_frames": 4,
                "drop_frame": True,
                "color_frame": False,
            }},
        }

    def test_milliseconds_to_dict(self):
        assert Timecode(0, 0, 1, MilliSeconds(5)).to_dict()["fraction"] == {"milliseconds": 5}

    @pytest.mark.parametrize("tc", [
        frame_tc(10, 0, 0, 0),
        frame_tc(0, 59, 59, 23, FrameRate.FPS_23_976, color_frame=True),
        Timecode(0, 2, 5, MilliSeconds(66)),
    ])
    def test_from_dict_restores(self, tc):
        assert Timecode.from_dict(tc.to_dict()) == tc

    def test_from_dict_accepts_rate_label(self):
        tc = Timecode.from_dict({
            "hours": 0, "minutes": 0, "seconds": 1,
            "fraction": {"frames": {"frame_rate": "25", "number_of_frames": 2}},
        })
        assert tc == frame_tc(0, 0, 1, 2)

    @pytest.mark.parametrize("data", [
        {"hours": 0, "minutes": 0, "seconds": 0},
        {"hours": 0, "minutes": 0, "seconds": 0, "fraction": {"ticks": 3}},
        {"hours": 0, "minutes": 0, "seconds": 0, "fraction": {"frames": {"number_of_frames": 1}}},
        {"hours": 0, "minutes": 0, "seconds": 0, "fraction": {}},
    ])
    def test_from_dict_rejects_malformed(self, data):
        with pytest.raises(ValueError):
            Timecode.from_dict(data)
