"""Layout scanning: visual line widths and whitespace counts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

# Visual columns taken by a tab, both for line widths and whitespace weight
TAB_WIDTH = 4


@dataclass
class LayoutStats:
    line_widths: List[int] = field(default_factory=list)
    space_count: int = 0
    # Starts at 1 so ratios never divide by zero
    non_space_count: int = 1


def scan_layout(code: str) -> LayoutStats:
    """Walk ``code`` once and collect layout statistics.

    Carriage returns count as whitespace but take no columns. Blank lines
    are never recorded, so every entry in ``line_widths`` is positive.
    The widths are returned in source order.
    """
    stats = LayoutStats()
    line_width = 0

    for c in code:
        if c == "\t":
            stats.space_count += TAB_WIDTH
        elif c.isspace():
            stats.space_count += 1
        else:
            stats.non_space_count += 1

        if c == "\r":
            continue
        if c == "\n":
            if line_width > 0:
                stats.line_widths.append(line_width)
            line_width = 0
        else:
            line_width += TAB_WIDTH if c == "\t" else 1

    if line_width > 0:
        stats.line_widths.append(line_width)

    return stats
