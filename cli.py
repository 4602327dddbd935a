#!/usr/bin/env python3
"""
Command-line itinerary converter
Read an itinerary (or a VI* display) from a file or stdin and print the
reservation-system commands.

Examples:
  python cli.py trip.txt
  python cli.py trip.txt --mode availability --detailed
  cat vi.txt | python cli.py --mode vi --auto-cabin
"""

import argparse
import json
import sys

from converter import (
    ConversionError,
    availability_commands,
    build_availability_command,
    convert_text_to_i,
    convert_vi_to_i,
    peek_segments,
    vi_availability_commands,
)

MODES = ("itinerary", "availability", "journeys", "preview", "vi", "vi-journeys")


def build_parser():
    parser = argparse.ArgumentParser(description="Convert itinerary text into *I lines and availability commands")
    parser.add_argument("file", nargs="?", help="input file (stdin when omitted)")
    parser.add_argument("--mode", choices=MODES, default="itinerary")
    parser.add_argument("--class", dest="booking_class", help="default booking class letter")
    parser.add_argument("--status", dest="segment_status", help="segment status code, e.g. SS1")
    parser.add_argument("--direction", choices=("all", "outbound", "inbound"), default="all")
    parser.add_argument("--journey", dest="journey_index", type=int, help="1-based journey to keep")
    parser.add_argument("--range", dest="segment_range", nargs=2, type=int, metavar=("START", "END"),
                        help="0-based inclusive segment range")
    parser.add_argument("--auto-cabin", nargs="?", const=True, default=None,
                        help="resolve booking letters from the cabin (optionally force one)")
    parser.add_argument("--detailed", action="store_true", help="availability with times and layovers")
    parser.add_argument("--year", dest="base_year", type=int, help="year for dates without one")
    return parser


def options_from(args):
    options = {"direction": args.direction, "detailed": args.detailed}
    for key in ("booking_class", "segment_status", "journey_index", "segment_range", "auto_cabin", "base_year"):
        value = getattr(args, key)
        if value is not None:
            options[key] = value
    return options


def run(mode, text, options):
    """Return the printable output for one mode"""
    if mode == "itinerary":
        return convert_text_to_i(text, options)
    if mode == "availability":
        return build_availability_command(text, options)
    if mode == "journeys":
        return "\n".join(f"{e['label']}: {e['command']}" for e in availability_commands(text, options))
    if mode == "preview":
        return json.dumps(peek_segments(text, options), indent=2)
    if mode == "vi":
        return convert_vi_to_i(text, options)["text"]
    return "\n".join(f"{e['label']}: {e['command']}" for e in vi_availability_commands(text, options))


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.file:
        with open(args.file, encoding="utf-8") as handle:
            text = handle.read()
    else:
        text = sys.stdin.read()

    try:
        print(run(args.mode, text, options_from(args)))
    except ConversionError as e:
        print(f"❌ {e.reason}: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
