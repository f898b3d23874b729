"""Statistics and scoring for minified JavaScript detection."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Tuple, TypeVar

from .layout import scan_layout
from .length import p75_width
from .tokenizer import identifier_lengths

logger = logging.getLogger(__name__)

T = TypeVar("T", int, float)

# Anything above this is considered likely minified
MINIFIED_THRESHOLD = 0.5

WEIGHT_SPACE = 0.1
WEIGHT_NAME = 0.4
WEIGHT_SHAPE = 0.2
WEIGHT_LINE = 0.3


def clamp(lower: T, upper: T, value: T) -> T:
    """Bound ``value`` to the closed interval ``[lower, upper]``."""
    if value < lower:
        return lower
    if value > upper:
        return upper
    return value


@dataclass(frozen=True)
class ProbabilityComponents:
    """The four sub-scores behind ``Analysis.minified_probability``.

    Each sub-score lies in ``[0, 1]``; higher means "looks more minified".
    """

    space: float
    name: float
    shape: float
    line: float

    @property
    def probability(self) -> float:
        return (
            self.space * WEIGHT_SPACE
            + self.name * WEIGHT_NAME
            + self.shape * WEIGHT_SHAPE
            + self.line * WEIGHT_LINE
        )

    def to_dict(self) -> dict:
        d = asdict(self)
        d["probability"] = self.probability
        return d


@dataclass(frozen=True)
class Analysis:
    """Layout and identifier statistics of one source text.

    Both length sequences are stored sorted ascending whatever order they
    are passed in. Instances are never mutated, so every metric is safe to
    call repeatedly and in any order.
    """

    line_widths: Tuple[int, ...] = field(default_factory=tuple)
    identifier_lengths: Tuple[int, ...] = field(default_factory=tuple)
    space_count: int = 0
    non_space_count: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "line_widths", tuple(sorted(self.line_widths)))
        object.__setattr__(self, "identifier_lengths", tuple(sorted(self.identifier_lengths)))

    def space_to_code_ratio(self) -> float:
        """Whitespace weight per non-whitespace character."""
        return self.space_count / self.non_space_count

    def median_ident_length(self) -> int:
        """The median identifier length.

        Guarded on ``line_widths`` rather than ``identifier_lengths``; text
        with lines but no identifiers falls through to the 0 default.
        """
        if not self.line_widths:
            return 0
        idx = len(self.identifier_lengths) // 2
        if idx < len(self.identifier_lengths):
            return self.identifier_lengths[idx]
        return 0

    def longest_line(self) -> int:
        """Width of the longest line, comments and strings included."""
        if not self.line_widths:
            return 0
        return self.line_widths[-1]

    def shape(self) -> float:
        """``height / width`` where width is the p75 line width.

        Few, long lines give a small shape.
        """
        if not self.line_widths:
            return 0.0
        width = p75_width(self.line_widths)
        height = len(self.line_widths)
        return height / width

    def probability_components(self) -> ProbabilityComponents:
        return ProbabilityComponents(
            space=(0.5 - clamp(0.0, 0.5, self.space_to_code_ratio())) * 2.0,
            name=(5 - (clamp(1, 6, self.median_ident_length()) - 1)) / 5.0,
            shape=(20.0 - clamp(0.0, 20.0, self.shape())) / 20.0,
            line=clamp(0, 1000, self.longest_line()) / 1000.0,
        )

    def minified_probability(self) -> float:
        """The probability of the text being minified.

        1.0 (which is unlikely to be reached) means definitely minified.
        """
        return self.probability_components().probability

    def is_likely_minified(self, threshold: float = MINIFIED_THRESHOLD) -> bool:
        return self.minified_probability() > threshold

    def to_dict(self) -> Dict[str, Any]:
        return {
            "space_to_code_ratio": self.space_to_code_ratio(),
            "median_ident_length": self.median_ident_length(),
            "longest_line": self.longest_line(),
            "shape": self.shape(),
            "p75_width": p75_width(self.line_widths),
            "line_count": len(self.line_widths),
            "identifier_count": len(self.identifier_lengths),
            "minified_probability": self.minified_probability(),
            "is_likely_minified": self.is_likely_minified(),
            "components": self.probability_components().to_dict(),
        }


def analyze(code: str) -> Analysis:
    """Analyze JavaScript source text.

    Total over any string, including the empty one.
    """
    layout = scan_layout(code)
    idents = identifier_lengths(code)
    logger.debug(
        "Analyzed %d chars: %d lines, %d identifiers",
        len(code), len(layout.line_widths), len(idents),
    )
    return Analysis(
        line_widths=tuple(layout.line_widths),
        identifier_lengths=tuple(idents),
        space_count=layout.space_count,
        non_space_count=layout.non_space_count,
    )
