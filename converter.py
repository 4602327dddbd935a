"""
converter.py
============
Public entry points: itinerary text (or a VI* display) → preview, *I lines,
availability commands.

    raw text → TextSanitizer → SectionSplitter → SegmentCollector
             → JourneyGrouper → selection → gds_formatter

Every function is a pure function of ``(text, options)``.  Failures raise
``ConversionError`` before any output is produced.
"""

from typing import Dict, List, Optional

from config import Logger, normalize_options
from errors import ConversionError
from gds_formatter import (
    availability_per_journey, booking_letter, build_availability, format_itinerary, select_segments,
)
from journeys import build_preview
from mappings import DEFAULT_REFERENCE, ReferenceData
from models import Preview
from rbd import DEFAULT_TABLES, RBDTables
from sanitizer import TextSanitizer
from sections import SectionSplitter
from segment_collector import SegmentCollector
from vi_parser import VIParser

__all__ = [
    "ConversionError",
    "parse_preview",
    "peek_segments",
    "convert_text_to_i",
    "build_availability_command",
    "availability_commands",
    "parse_vi_preview",
    "convert_vi_to_i",
    "vi_availability_commands",
]


def _tables_for(reference: ReferenceData) -> RBDTables:
    if reference is DEFAULT_REFERENCE:
        return DEFAULT_TABLES
    return RBDTables(reference=reference)


def _require_text(text: Optional[str]):
    if not text or not text.strip():
        raise ConversionError("empty_input", "No itinerary text supplied")


def _text_preview(text: str, opts: Dict, reference: ReferenceData) -> Preview:
    _require_text(text)
    lines = TextSanitizer.clean(text)
    sections = SectionSplitter.split(lines, base_year=opts["base_year"])
    collected = SegmentCollector(reference).collect(sections, base_year=opts["base_year"])
    if not collected.segments:
        Logger.warning(f"No segments parsed from {len(lines)} sanitized line(s)")
        raise ConversionError("no_segments", "No segments parsed from itinerary.")
    preview = build_preview(collected.segments, collected.markers)
    Logger.info(f"Parsed {len(preview.segments)} segment(s) in {len(preview.journeys)} journey(s)")
    return preview


def _vi_preview(text: str, opts: Dict) -> Preview:
    _require_text(text)
    segments = VIParser.parse(text, base_year=opts["base_year"])
    if not segments:
        raise ConversionError("no_segments", "No segments found in VI* text.")
    return build_preview(segments)


# ==================== TEXT ====================

def parse_preview(text: str, options: Optional[Dict] = None,
                  reference: ReferenceData = DEFAULT_REFERENCE) -> Preview:
    """Segments + journeys + multi-city flag for the given itinerary text."""
    return _text_preview(text, normalize_options(options), reference)


def peek_segments(text: str, options: Optional[Dict] = None,
                  reference: ReferenceData = DEFAULT_REFERENCE) -> Dict:
    return parse_preview(text, options, reference).to_dict()


def convert_text_to_i(text: str, options: Optional[Dict] = None,
                      reference: ReferenceData = DEFAULT_REFERENCE) -> str:
    opts = normalize_options(options)
    preview = _text_preview(text, opts, reference)
    return format_itinerary(select_segments(preview, opts), opts, _tables_for(reference))


def build_availability_command(text: str, options: Optional[Dict] = None,
                               reference: ReferenceData = DEFAULT_REFERENCE) -> str:
    opts = normalize_options(options)
    preview = _text_preview(text, opts, reference)
    return build_availability(select_segments(preview, opts), opts["detailed"])


def availability_commands(text: str, options: Optional[Dict] = None,
                          reference: ReferenceData = DEFAULT_REFERENCE) -> List[Dict]:
    """One ``{"label", "journey_index", "command"}`` entry per journey."""
    opts = normalize_options(options)
    return availability_per_journey(_text_preview(text, opts, reference), opts)


# ==================== VI* ====================

def parse_vi_preview(text: str, options: Optional[Dict] = None) -> Preview:
    return _vi_preview(text, normalize_options(options))


def convert_vi_to_i(text: str, options: Optional[Dict] = None) -> Dict:
    opts = normalize_options(options)
    preview = _vi_preview(text, opts)
    selected = select_segments(preview, opts)
    output = format_itinerary(selected, opts)
    segments = []
    for segment in selected:
        data = segment.to_dict()
        data["booking_class"] = booking_letter(segment, opts)
        segments.append(data)
    return {
        "text": output,
        "segments": segments,
        "journeys": [j.to_dict() for j in preview.journeys],
    }


def vi_availability_commands(text: str, options: Optional[Dict] = None) -> List[Dict]:
    opts = normalize_options(options)
    return availability_per_journey(_vi_preview(text, opts), opts)
