"""
rationaltc - Frame-Accurate Broadcast Timecode
Exact rational timecode conversions and SMPTE 12M / SMPTE 331M / EBU STL decoding.
"""

__version__ = "0.1.0"

from .frame_rate import FrameRate
from .fraction import Fraction, Frames, MilliSeconds, TimecodeFrames
from .timecode import Timecode, from_frames, from_duration, to_rational, format_timecode
from .smpte_packet import decode_smpte_12m, decode_smpte_331m, decode_ebu_stl

__all__ = [
    "FrameRate",
    "Fraction",
    "Frames",
    "MilliSeconds",
    "TimecodeFrames",
    "Timecode",
    "from_frames",
    "from_duration",
    "to_rational",
    "format_timecode",
    "decode_smpte_12m",
    "decode_smpte_331m",
    "decode_ebu_stl",
]
