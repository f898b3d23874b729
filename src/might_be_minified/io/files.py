from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Iterable, List, Sequence

import pandas as pd

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"
DEFAULT_EXTENSIONS = (".js", ".mjs", ".cjs")
SUPPORTED_TABULAR_EXTS = {".csv", ".tsv", ".xlsx"}


class SourceReadError(Exception):
    """Raised when a source cannot be read into text."""

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")


def read_source(path: str | Path, *, encoding: str = DEFAULT_ENCODING) -> str:
    """Read a whole file into a string.

    A leading UTF-8 BOM is dropped. Missing files, permission problems and
    decode failures all surface as ``SourceReadError``.
    """
    path = Path(path)
    if path.is_dir():
        raise SourceReadError(path, "is a directory")
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SourceReadError(path, e.strerror or str(e)) from e
    return _decode(data, path, encoding)


def read_stream(stream: BinaryIO, *, encoding: str = DEFAULT_ENCODING, name: str = "<stream>") -> str:
    """Read a binary stream to the end and decode it."""
    try:
        data = stream.read()
    except OSError as e:
        raise SourceReadError(name, e.strerror or str(e)) from e
    return _decode(data, name, encoding)


def _decode(data: bytes, name: str | Path, encoding: str) -> str:
    if encoding.lower().replace("_", "-") in ("utf-8", "utf8"):
        encoding = "utf-8-sig"
    try:
        return data.decode(encoding)
    except LookupError as e:
        raise SourceReadError(name, f"unknown encoding {encoding!r}") from e
    except UnicodeDecodeError as e:
        raise SourceReadError(name, f"not valid {e.encoding} at byte {e.start}") from e


def collect_sources(
    paths: Iterable[str | Path],
    *,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> List[Path]:
    """Expand directories into the source files below them.

    Files named explicitly are kept whatever their extension; directories are
    searched recursively for ``extensions``. Order is stable and duplicates
    are dropped.
    """
    exts = {e.lower() if e.startswith(".") else f".{e.lower()}" for e in extensions}
    seen = set()
    out: List[Path] = []
    for p in paths:
        p = Path(p)
        if p.is_dir():
            found = sorted(f for f in p.rglob("*") if f.is_file() and f.suffix.lower() in exts)
            logger.debug("Found %d sources under %s", len(found), p)
        else:
            found = [p]
        for f in found:
            if f not in seen:
                seen.add(f)
                out.append(f)
    return out


def write_table(df: pd.DataFrame, path: str | Path) -> None:
    path = Path(path)
    ext = path.suffix.lower()
    if ext == ".csv":
        df.to_csv(path, index=False, encoding="utf-8-sig")
        return
    if ext == ".tsv":
        df.to_csv(path, index=False, sep="\t", encoding="utf-8-sig")
        return
    if ext == ".xlsx":
        df.to_excel(path, index=False, engine="openpyxl")
        return
    supported = sorted(SUPPORTED_TABULAR_EXTS)
    raise ValueError(f"Unsupported output format: {path} (supported: {supported})")
