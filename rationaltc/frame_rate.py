"""
Broadcast Frame Rates

Every nominal rate maps to an exact frames-per-second ratio:
- 23.976 = 24000/1001 (derived from 24)
- 24     = 24/1
- 25     = 25/1
- 29.97  = 30000/1001 (derived from 30)
- 30     = 30/1
- 50     = 50/1
- 59.94  = 60000/1001 (derived from 60)
- 60     = 60/1

The (numerator, denominator) pair is the source of truth. Float values are
derived from it and only used to pick the integer frame modulus.

NTSC-derived rates count frames with their parent integer rate (23.976 numbers
frames 0-23 like 24 fps) while their real timing uses the 1000/1001 ratio.
"""

import math
from enum import Enum
from fractions import Fraction as Rational


class FrameRate(Enum):
    """Nominal frame rates, valued by their exact (numerator, denominator)."""
    FPS_23_976 = (24000, 1001)
    FPS_24 = (24, 1)
    FPS_25 = (25, 1)
    FPS_29_97 = (30000, 1001)
    FPS_30 = (30, 1)
    FPS_50 = (50, 1)
    FPS_59_94 = (60000, 1001)
    FPS_60 = (60, 1)

    def to_rational(self) -> tuple[int, int]:
        """Exact frames-per-second as (numerator, denominator)."""
        return self.value

    def to_float(self) -> float:
        """Approximate frames-per-second. Never use for durations."""
        numerator, denominator = self.value
        return numerator / denominator

    @property
    def rational(self) -> Rational:
        return Rational(*self.value)

    @property
    def frame_duration(self) -> Rational:
        """Duration of one frame in seconds."""
        numerator, denominator = self.value
        return Rational(denominator, numerator)

    @property
    def is_integer(self) -> bool:
        return self.value[1] == 1

    @property
    def computational_rate(self) -> "FrameRate":
        """
        Rate used to split a frame count into hours/minutes/seconds/frames.

        For 1000/1001 rates this is the integer rate they derive from,
        otherwise the rate itself.
        """
        if self.is_integer:
            return self
        return FrameRate((self.value[0] // 1000, 1))

    @property
    def frames_per_second(self) -> int:
        """Integer frame modulus for decomposition (24 for 23.976)."""
        return math.floor(self.computational_rate.to_float())

    @property
    def nominal(self) -> str:
        """Display label, e.g. "25" or "29.97"."""
        return _LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "FrameRate":
        """
        Look up a frame rate by label ("25", "29.97", "23.976") or enum name.

        Raises:
            ValueError: if the label names no known rate
        """
        text = str(label).strip()
        for rate, rate_label in _LABELS.items():
            if text == rate_label or text.upper() == rate.name:
                return rate
        # Accept common spellings such as "25.0" or "23.98"
        try:
            value = float(text)
        except ValueError:
            raise ValueError(f"Unknown frame rate: {label!r}") from None
        for rate in cls:
            if abs(rate.to_float() - value) < 0.01:
                return rate
        raise ValueError(f"Unknown frame rate: {label!r}")

    def __str__(self) -> str:
        return f"{self.nominal} fps"


_LABELS = {
    FrameRate.FPS_23_976: "23.976",
    FrameRate.FPS_24: "24",
    FrameRate.FPS_25: "25",
    FrameRate.FPS_29_97: "29.97",
    FrameRate.FPS_30: "30",
    FrameRate.FPS_50: "50",
    FrameRate.FPS_59_94: "59.94",
    FrameRate.FPS_60: "60",
}
