"""
Sub-second part of a timecode.

A timecode ends either in a frame count (frame-granular, "HH:MM:SS:FF") or in
milliseconds (millisecond-granular, "HH:MM:SS.mmm"):
- Frames wraps a TimecodeFrames value carrying the frame rate and the
  drop-frame / color-frame flags
- MilliSeconds carries an integer 0-999
"""

from dataclasses import dataclass
from fractions import Fraction as Rational
from typing import Union

from rationaltc.frame_rate import FrameRate


@dataclass(frozen=True)
class TimecodeFrames:
    """
    Frame count bound to a frame rate.

    number_of_frames is expected to stay below the rate's frames per second,
    but it is not checked: binary decoders pass malformed values through.
    """
    frame_rate: FrameRate
    number_of_frames: int
    drop_frame: bool = False
    color_frame: bool = False

    @property
    def number_of_digits(self) -> int:
        """Zero-padded width of the frame field."""
        return 2

    @property
    def separator(self) -> str:
        return ";" if self.drop_frame else ":"

    @property
    def duration(self) -> Rational:
        """Exact duration of the counted frames, in seconds."""
        return self.number_of_frames * self.frame_rate.frame_duration

    def __str__(self) -> str:
        return f"{self.separator}{self.number_of_frames:0{self.number_of_digits}d}"


@dataclass(frozen=True)
class Frames:
    frames: TimecodeFrames

    @property
    def number_of_digits(self) -> int:
        return self.frames.number_of_digits

    @property
    def separator(self) -> str:
        return self.frames.separator

    @property
    def value(self) -> int:
        return self.frames.number_of_frames

    def to_rational(self) -> Rational:
        return self.frames.duration

    def to_dict(self) -> dict:
        return {
            "frames": {
                "frame_rate": self.frames.frame_rate.name,
                "number_of_frames": self.frames.number_of_frames,
                "drop_frame": self.frames.drop_frame,
                "color_frame": self.frames.color_frame,
            }
        }

    def __str__(self) -> str:
        return str(self.frames)


@dataclass(frozen=True)
class MilliSeconds:
    milliseconds: int

    @property
    def number_of_digits(self) -> int:
        return 3

    @property
    def separator(self) -> str:
        return "."

    @property
    def value(self) -> int:
        return self.milliseconds

    def to_rational(self) -> Rational:
        return Rational(self.milliseconds, 1000)

    def to_dict(self) -> dict:
        return {"milliseconds": self.milliseconds}

    def __str__(self) -> str:
        return f"{self.separator}{self.milliseconds:0{self.number_of_digits}d}"


Fraction = Union[Frames, MilliSeconds]


def fraction_from_dict(data: dict) -> Fraction:
    """
    Rebuild a Fraction from the output of Frames.to_dict / MilliSeconds.to_dict.

    Raises:
        ValueError: if the tag is unknown or a field is missing
    """
    if not isinstance(data, dict) or len(data) != 1:
        raise ValueError(f"Fraction must have exactly one tag, got {data!r}")

    if "milliseconds" in data:
        return MilliSeconds(int(data["milliseconds"]))

    if "frames" in data:
        fields = data["frames"]
        try:
            frame_rate = fields["frame_rate"]
            if not isinstance(frame_rate, FrameRate):
                frame_rate = FrameRate.from_label(frame_rate)
            return Frames(TimecodeFrames(
                frame_rate=frame_rate,
                number_of_frames=int(fields["number_of_frames"]),
                drop_frame=bool(fields.get("drop_frame", False)),
                color_frame=bool(fields.get("color_frame", False)),
            ))
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid frames fraction {fields!r}: {e}") from e

    raise ValueError(f"Unknown fraction tag: {next(iter(data))!r}")
