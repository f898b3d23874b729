"""Length distributions for identifier lengths and line widths."""

from __future__ import annotations

import statistics
from dataclasses import asdict, dataclass
from typing import Iterable, List, Optional, Sequence

# Identifier lengths are counted in Unicode code points, not bytes
LENGTH_METHOD = "unicode_codepoints"

# Minifiers rename to one or two characters
SHORT_IDENTIFIER_MAX = 2


def p75_index(count: int) -> int:
    """Index of the p75 entry in a sorted sequence of ``count`` items.

    Rounds down to a multiple of 3 (``count // 4 * 3``), so fewer than four
    items always give index 0. ``Analysis.shape`` uses the same entry as
    the file width.
    """
    return count // 4 * 3


@dataclass
class LengthDistribution:
    """Summary of a set of lengths (identifier lengths or line widths)."""

    count: int
    min: int
    max: int
    mean: float
    median: float
    p75: int
    # Share of entries no longer than SHORT_IDENTIFIER_MAX
    short_share: float

    def to_dict(self) -> dict:
        return asdict(self)


def length_distribution(lengths: Iterable[int]) -> Optional[LengthDistribution]:
    """Summarise positive lengths.

    Returns ``None`` if no valid (>0) lengths exist. Mean, median and
    ``short_share`` are rounded to 2 places.
    """
    valid: List[int] = sorted(ln for ln in lengths if ln > 0)
    if not valid:
        return None
    short = sum(1 for ln in valid if ln <= SHORT_IDENTIFIER_MAX)
    return LengthDistribution(
        count=len(valid),
        min=valid[0],
        max=valid[-1],
        mean=round(statistics.mean(valid), 2),
        median=round(statistics.median(valid), 2),
        p75=valid[p75_index(len(valid))],
        short_share=round(short / len(valid), 2),
    )


def p75_width(line_widths: Sequence[int]) -> int:
    """The p75 line width of an already sorted sequence, 0 when empty."""
    if not line_widths:
        return 0
    return line_widths[p75_index(len(line_widths))]
