"""
Timecode Value and Conversions

A Timecode is hours:minutes:seconds plus a sub-second Fraction (frames or
milliseconds). Conversions:
- frame count + frame rate -> Timecode (from_frames)
- wall-clock duration -> Timecode in milliseconds (from_duration)
- Timecode -> exact duration in seconds as a fractions.Fraction (to_rational)

Hours, minutes and seconds are stored as 8-bit values. Conversions that
produce larger numbers wrap silently (e.g. 256 hours becomes 0). Nothing is
range checked: 00:85:85:45 is a valid Timecode.

Frame count decomposition (F = integer frames per second):
    hours   = N // (3600 * F)
    minutes = N // (60 * F) - hours * 60
    seconds = N // F - minutes * 60 - hours * 3600
    frames  = N - seconds * F - minutes * 60 * F - hours * 3600 * F

Each term is computed from N, not from a running remainder. For 23.976,
29.97 and 59.94, F is the parent integer rate (24, 30, 60) while the exact
duration uses the real 1000/1001 rate.
"""

from dataclasses import dataclass
from datetime import timedelta
from fractions import Fraction as Rational
from typing import Optional

from rationaltc.fraction import (
    Fraction,
    Frames,
    MilliSeconds,
    TimecodeFrames,
    fraction_from_dict,
)
from rationaltc.frame_rate import FrameRate

_ONE_MILLISECOND = timedelta(milliseconds=1)


def _narrow(value: int) -> int:
    """Truncate to an unsigned 8-bit value."""
    return value & 0xFF


@dataclass(frozen=True)
class Timecode:
    """Broadcast timecode: HH:MM:SS followed by frames or milliseconds."""
    hours: int
    minutes: int
    seconds: int
    fraction: Fraction

    @classmethod
    def from_frames(cls, number_of_frames: int, frame_rate: FrameRate) -> "Timecode":
        """
        Create a timecode from a frame count.

        Args:
            number_of_frames: Frames elapsed since 00:00:00:00
            frame_rate: Rate the frames were counted at

        Returns:
            Timecode with a Frames fraction, drop/color flags cleared
        """
        fps = frame_rate.frames_per_second
        n = number_of_frames

        hours = n // (3600 * fps)
        minutes = n // (60 * fps) - hours * 60
        seconds = n // fps - minutes * 60 - hours * 3600
        frames = n - seconds * fps - minutes * 60 * fps - hours * 3600 * fps

        return cls(
            hours=_narrow(hours),
            minutes=_narrow(minutes),
            seconds=_narrow(seconds),
            fraction=Frames(TimecodeFrames(
                frame_rate=frame_rate,
                number_of_frames=_narrow(frames),
            )),
        )

    @classmethod
    def from_milliseconds(cls, total_milliseconds: int) -> "Timecode":
        """Create a millisecond timecode from an integer millisecond count."""
        total_seconds = total_milliseconds // 1000
        milliseconds = total_milliseconds - total_seconds * 1000

        return cls(
            hours=_narrow(total_seconds // 3600),
            minutes=total_seconds % 3600 // 60,
            seconds=total_seconds % 60,
            fraction=MilliSeconds(milliseconds),
        )

    @classmethod
    def from_duration(cls, duration: timedelta) -> "Timecode":
        """
        Create a millisecond timecode from a wall-clock duration.

        Sub-millisecond precision is floored away.
        """
        return cls.from_milliseconds(duration // _ONE_MILLISECOND)

    @classmethod
    def from_dict(cls, data: dict) -> "Timecode":
        """
        Rebuild a timecode from the output of to_dict.

        Raises:
            ValueError: if a field is missing or malformed
        """
        try:
            return cls(
                hours=int(data["hours"]),
                minutes=int(data["minutes"]),
                seconds=int(data["seconds"]),
                fraction=fraction_from_dict(data["fraction"]),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid timecode {data!r}: {e}") from e

    @property
    def frame_rate(self) -> Optional[FrameRate]:
        """Frame rate of a frame timecode, None for millisecond timecodes."""
        if isinstance(self.fraction, Frames):
            return self.fraction.frames.frame_rate
        return None

    @property
    def drop_frame(self) -> bool:
        return isinstance(self.fraction, Frames) and self.fraction.frames.drop_frame

    @property
    def color_frame(self) -> bool:
        return isinstance(self.fraction, Frames) and self.fraction.frames.color_frame

    @property
    def frame(self) -> Optional[int]:
        """Frame field, None for millisecond timecodes."""
        if isinstance(self.fraction, Frames):
            return self.fraction.frames.number_of_frames
        return None

    def to_rational(self) -> Rational:
        """Exact duration since 00:00:00 in seconds."""
        whole_seconds = self.hours * 3600 + self.minutes * 60 + self.seconds
        return whole_seconds + self.fraction.to_rational()

    def to_dict(self) -> dict:
        """JSON-compatible representation."""
        return {
            "hours": self.hours,
            "minutes": self.minutes,
            "seconds": self.seconds,
            "fraction": self.fraction.to_dict(),
        }

    def __str__(self) -> str:
        """Format as HH:MM:SS:FF, HH:MM:SS;FF (drop-frame) or HH:MM:SS.mmm."""
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}{self.fraction}"


def from_frames(number_of_frames: int, frame_rate: FrameRate) -> Timecode:
    return Timecode.from_frames(number_of_frames, frame_rate)


def from_duration(duration: timedelta) -> Timecode:
    return Timecode.from_duration(duration)


def to_rational(tc: Timecode) -> Rational:
    return tc.to_rational()


def format_timecode(tc: Optional[Timecode]) -> str:
    """Format timecode for display (placeholder when no timecode was decoded)."""
    if tc is None:
        return "--:--:--:--"
    return str(tc)
