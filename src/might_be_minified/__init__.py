"""might-be-minified - heuristics for spotting minified JavaScript."""

from __future__ import annotations

from pathlib import Path

__version__ = "0.1.0"

from .analysis import Analysis, ProbabilityComponents, analyze  # noqa: E402


def analyze_path(path: str | Path, *, encoding: str = "utf-8") -> Analysis:
    """Read a file and analyze its contents.

    Raises ``SourceReadError`` if the file cannot be read or decoded.
    """
    from .io.files import read_source

    return analyze(read_source(path, encoding=encoding))


__all__ = [
    "Analysis",
    "ProbabilityComponents",
    "__version__",
    "analyze",
    "analyze_path",
]
