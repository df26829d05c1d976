#!/usr/bin/env python3
"""
rationaltc command line - inspect binary timecodes and run conversions.

Examples:
  rationaltc decode 12m 00000010          # SMPTE 12M word -> 10:00:00:00
  rationaltc decode 331m 8100000010000000000000000000000000
  rationaltc decode stl 0a000000 --rate 25
  rationaltc frames 900000 --rate 25
  rationaltc duration 125066              # milliseconds -> 00:02:05.066
"""

import argparse
import json
import logging
import sys

from rationaltc.frame_rate import FrameRate
from rationaltc.smpte_packet import DECODERS
from rationaltc.timecode import Timecode, format_timecode

# Module-level logger
_logger = logging.getLogger(__name__)


def parse_hex(text: str) -> bytes:
    """
    Parse a hex payload such as "81000000", "81 00 00 00" or "0x81:00:00:00".

    Raises:
        argparse.ArgumentTypeError: if the text is not valid hex
    """
    cleaned = text.strip().lower()
    if cleaned.startswith("0x"):
        cleaned = cleaned[2:]
    for sep in (" ", ":", "-", "_"):
        cleaned = cleaned.replace(sep, "")
    try:
        return bytes.fromhex(cleaned)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid hex payload: {text!r}") from None


def parse_frame_rate(text: str) -> FrameRate:
    try:
        return FrameRate.from_label(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _print_timecode(tc: Timecode, as_json: bool, **extra) -> None:
    if as_json:
        print(json.dumps({**tc.to_dict(), **extra}))
    else:
        suffix = "".join(f"  {key}={value}" for key, value in extra.items())
        print(f"{format_timecode(tc)}{suffix}")


def _cmd_decode(args) -> int:
    decode = DECODERS[args.format]
    status = 0

    for payload in args.payload:
        tc = decode(payload, frame_rate=args.rate, strict=args.strict)
        if tc is None:
            _logger.debug(f"Rejected {args.format} payload {payload.hex()}")
            status = 1
            if args.json:
                print(json.dumps(None))
            else:
                print(format_timecode(None))
            continue

        if args.json:
            _print_timecode(tc, True)
        else:
            flags = []
            if tc.drop_frame:
                flags.append("drop-frame")
            if tc.color_frame:
                flags.append("color-frame")
            print(f"{format_timecode(tc)}" + (f"  ({', '.join(flags)})" if flags else ""))

    return status


def _cmd_frames(args) -> int:
    tc = Timecode.from_frames(args.count, args.rate)
    duration = tc.to_rational()
    _logger.debug(f"{args.count} frames at {args.rate} -> {tc} ({duration} s)")
    _print_timecode(tc, args.json, seconds_exact=f"{duration.numerator}/{duration.denominator}")
    return 0


def _cmd_duration(args) -> int:
    tc = Timecode.from_milliseconds(args.milliseconds)
    _print_timecode(tc, args.json)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rationaltc",
        description="Decode binary timecodes and convert frame counts or durations.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Frame rates: 23.976, 24, 25, 29.97, 30, 50, 59.94, 60
        """,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command")

    decode = sub.add_parser("decode", help="Decode binary timecode payloads given as hex")
    decode.add_argument("format", choices=sorted(DECODERS), help="Wire format")
    decode.add_argument("payload", nargs="+", type=parse_hex, help="Hex payload(s)")
    decode.add_argument(
        "-r", "--rate",
        type=parse_frame_rate,
        default=FrameRate.FPS_25,
        help="Frame rate to attach to decoded timecodes (default: 25)",
    )
    decode.add_argument(
        "--strict",
        action="store_true",
        help="Reject payloads with out-of-range fields",
    )
    decode.add_argument("--json", action="store_true", help="Print JSON instead of text")

    frames = sub.add_parser("frames", help="Convert a frame count to a timecode")
    frames.add_argument("count", type=int, help="Number of frames")
    frames.add_argument(
        "-r", "--rate",
        type=parse_frame_rate,
        required=True,
        help="Frame rate the frames were counted at",
    )
    frames.add_argument("--json", action="store_true", help="Print JSON instead of text")

    duration = sub.add_parser("duration", help="Convert milliseconds to a timecode")
    duration.add_argument("milliseconds", type=int, help="Duration in milliseconds")
    duration.add_argument("--json", action="store_true", help="Print JSON instead of text")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    if args.command is None:
        parser.print_help()
        return 0

    handlers = {
        "decode": _cmd_decode,
        "frames": _cmd_frames,
        "duration": _cmd_duration,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
