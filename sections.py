"""Partition sanitized lines into outbound / inbound sections."""

import re
from typing import List, Optional

from dates import FlightDate
from models import INBOUND, OUTBOUND, Section
from sanitizer import SECTION_HEADER, classify_line

_RE_INBOUND = re.compile(r"\b(?:return|inbound)\b", re.I)


class SectionSplitter:
    """
    Each ``Depart``/``Departure``/``Return``/``Outbound``/``Inbound`` header
    opens a section that runs to the next header.  Lines ahead of the first
    header belong to no section and are dropped.  Text without any header
    comes back as a single section of kind None; direction is inferred later
    from route continuity.
    """

    @staticmethod
    def split(lines: List[str], base_year: Optional[int] = None) -> List[Section]:
        header_rows = [i for i, line in enumerate(lines) if classify_line(line) == SECTION_HEADER]
        if not header_rows:
            return [Section(kind=None, header_date=None, lines=list(lines))]

        sections: List[Section] = []
        previous = None
        for n, start in enumerate(header_rows):
            end = header_rows[n + 1] if n + 1 < len(header_rows) else len(lines)
            header = lines[start]
            kind = INBOUND if _RE_INBOUND.search(header) else OUTBOUND
            header_date = FlightDate.parse(header, reference=previous.on if previous else None, base_year=base_year)
            if header_date:
                previous = header_date
            sections.append(Section(kind=kind, header_date=header_date, lines=lines[start + 1:end]))
        return sections
