"""Vessel category from principal dimensions."""

from __future__ import annotations

from typing import Any

from berthwatch.models import Category
from berthwatch.parsing import parse_number

# Known small-tanker profile (~88 x 14.8 m)
TANKER_LOA_M = 88.1
TANKER_BEAM_M = 14.82
TANKER_LOA_TOLERANCE_M = 5.0
TANKER_BEAM_TOLERANCE_M = 1.0


def classify(loa: Any, beam: Any) -> Category:
    """Classify a vessel by length overall and beam (m).

    Rules are checked in order and the first match wins: tanker profile,
    then A, B and C. Anything else, including missing or unparseable
    dimensions, is B.
    """
    length = parse_number(loa, default=None)
    width = parse_number(beam, default=None)
    if length is None or width is None:
        return Category.B

    if (
        abs(length - TANKER_LOA_M) <= TANKER_LOA_TOLERANCE_M
        and abs(width - TANKER_BEAM_M) <= TANKER_BEAM_TOLERANCE_M
    ):
        return Category.TANKER
    if (width >= 22 and length >= 93) or (width < 22 and length >= 95):
        return Category.A
    if 16 <= width < 22 and 73 <= length < 95:
        return Category.B
    if width < 16 and length <= 90:
        return Category.C
    return Category.B
