"""
Binary Timecode Packets

SMPTE 12M timecode word (4 bytes, as embedded in SMPTE 331M and similar):
- Byte 0: bit 7 color frame, bit 6 drop frame, bits 4-5 frame tens, bits 0-3 frame units
- Byte 1: bits 4-6 seconds tens, bits 0-3 seconds units
- Byte 2: bits 4-6 minutes tens, bits 0-3 minutes units
- Byte 3: bits 4-5 hours tens, bits 0-3 hours units

Each field decodes as 10 * tens + units. Fields are NOT range checked: a word
with every tens/units bit set decodes to 45:85:85:45. Receivers may want to
inspect malformed words rather than lose them, so pass strict=True to reject
them instead.

SMPTE 331M element (17 bytes):
- Byte 0: 0x81 (SMPTE 12M time code follows)
- Bytes 1-4: SMPTE 12M word
- Bytes 5-16: ignored

EBU Tech 3264 (STL) time code (4 bytes):
- Bytes 0-3: hours, minutes, seconds, frames as plain binary values, no flags

Decoders return None for data they cannot decode and never raise on wire data.
"""

import logging
from typing import Optional

import numpy as np

from rationaltc.fraction import Frames, TimecodeFrames
from rationaltc.frame_rate import FrameRate
from rationaltc.timecode import Timecode

# Module-level logger
_logger = logging.getLogger(__name__)

SMPTE_12M_LENGTH = 4
SMPTE_331M_LENGTH = 17
SMPTE_331M_TIMECODE_MARKER = 0x81
EBU_STL_LENGTH = 4

_MASK_UNITS = 0b0000_1111
_MASK_TENS_2 = 0b0011_0000
_MASK_TENS_3 = 0b0111_0000
_MASK_COLOR_FRAME = 0b1000_0000
_MASK_DROP_FRAME = 0b0100_0000


def _as_bytes(data) -> Optional[np.ndarray]:
    """
    Normalize bytes, bytearray, memoryview, int sequences or arrays to uint8.

    Returns None when a value does not fit in a byte.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(data, dtype=np.uint8)

    values = np.asarray(data).reshape(-1)
    if values.size and (values.min() < 0 or values.max() > 0xFF):
        _logger.debug(f"Payload holds values outside 0-255: {values.tolist()}")
        return None
    return values.astype(np.uint8)


def _bcd_digits(byte: int, mask_tens: int) -> tuple[int, int]:
    """Split a packed byte into (tens, units)."""
    return (byte & mask_tens) >> 4, byte & _MASK_UNITS


def _in_range(hours: int, minutes: int, seconds: int, frames: int,
              frame_rate: FrameRate) -> bool:
    return (
        hours <= 23
        and minutes <= 59
        and seconds <= 59
        and frames < frame_rate.frames_per_second
    )


def decode_smpte_12m(data, frame_rate: FrameRate = FrameRate.FPS_25,
                     strict: bool = False) -> Optional[Timecode]:
    """
    Decode a SMPTE 12M timecode word.

    Args:
        data: At least 4 bytes; anything past the fourth byte is ignored
        frame_rate: Frame rate to attach (the word does not carry one)
        strict: Reject words with invalid BCD digits or out-of-range fields

    Returns:
        Timecode with a Frames fraction, or None if invalid
    """
    raw = _as_bytes(data)
    if raw is None:
        return None
    if len(raw) < SMPTE_12M_LENGTH:
        _logger.debug(f"SMPTE 12M word too short: {len(raw)} bytes")
        return None

    b0, b1, b2, b3 = (int(b) for b in raw[:SMPTE_12M_LENGTH])

    digits = [
        _bcd_digits(b0, _MASK_TENS_2),  # frames
        _bcd_digits(b1, _MASK_TENS_3),  # seconds
        _bcd_digits(b2, _MASK_TENS_3),  # minutes
        _bcd_digits(b3, _MASK_TENS_2),  # hours
    ]
    frames, seconds, minutes, hours = (10 * tens + units for tens, units in digits)

    if strict and (any(units > 9 for _, units in digits)
                   or not _in_range(hours, minutes, seconds, frames, frame_rate)):
        _logger.debug(f"Rejecting out-of-range SMPTE 12M word "
                      f"{hours:02d}:{minutes:02d}:{seconds:02d}:{frames:02d}")
        return None

    return Timecode(
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        fraction=Frames(TimecodeFrames(
            frame_rate=frame_rate,
            number_of_frames=frames,
            drop_frame=(b0 & _MASK_DROP_FRAME) != 0,
            color_frame=(b0 & _MASK_COLOR_FRAME) != 0,
        )),
    )


def decode_smpte_331m(data, frame_rate: FrameRate = FrameRate.FPS_25,
                      strict: bool = False) -> Optional[Timecode]:
    """
    Decode the SMPTE 12M word embedded in a 17-byte SMPTE 331M element.

    Returns:
        Timecode, or None if the length or the marker byte is wrong
    """
    raw = _as_bytes(data)
    if raw is None:
        return None
    if len(raw) != SMPTE_331M_LENGTH:
        _logger.debug(f"SMPTE 331M element must be {SMPTE_331M_LENGTH} bytes, got {len(raw)}")
        return None

    if raw[0] != SMPTE_331M_TIMECODE_MARKER:
        _logger.debug(f"SMPTE 331M element does not carry a SMPTE 12M word (marker 0x{int(raw[0]):02x})")
        return None

    return decode_smpte_12m(raw[1:], frame_rate=frame_rate, strict=strict)


def decode_ebu_stl(data, frame_rate: FrameRate = FrameRate.FPS_25,
                   strict: bool = False) -> Optional[Timecode]:
    """
    Decode an EBU STL (Tech 3264) time code field.

    The four bytes are taken as-is: hours, minutes, seconds, frames.
    Drop frame and color frame are always False.
    """
    raw = _as_bytes(data)
    if raw is None:
        return None
    if len(raw) != EBU_STL_LENGTH:
        _logger.debug(f"EBU STL time code must be {EBU_STL_LENGTH} bytes, got {len(raw)}")
        return None

    hours, minutes, seconds, frames = (int(b) for b in raw)

    if strict and not _in_range(hours, minutes, seconds, frames, frame_rate):
        _logger.debug(f"Rejecting out-of-range EBU STL time code "
                      f"{hours:02d}:{minutes:02d}:{seconds:02d}:{frames:02d}")
        return None

    return Timecode(
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        fraction=Frames(TimecodeFrames(
            frame_rate=frame_rate,
            number_of_frames=frames,
        )),
    )


DECODERS = {
    "12m": decode_smpte_12m,
    "331m": decode_smpte_331m,
    "stl": decode_ebu_stl,
}
