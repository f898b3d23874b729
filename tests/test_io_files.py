"""Test source reading, discovery and table writing."""

import io

import pandas as pd
import pytest

from might_be_minified import analyze_path
from might_be_minified.io.files import (
    SourceReadError,
    collect_sources,
    read_source,
    read_stream,
    write_table,
)


class TestReadSource:
    def test_reads_utf8(self, tmp_path):
        p = tmp_path / "a.js"
        p.write_text("var café = 1;", encoding="utf-8")
        assert read_source(p) == "var café = 1;"

    def test_strips_bom(self, tmp_path):
        p = tmp_path / "a.js"
        p.write_bytes(b"\xef\xbb\xbfvar a;")
        assert read_source(p) == "var a;"

    def test_other_encoding(self, tmp_path):
        p = tmp_path / "a.js"
        p.write_bytes("var café;".encode("latin-1"))
        assert read_source(p, encoding="latin-1") == "var café;"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceReadError) as exc:
            read_source(tmp_path / "nope.js")
        assert exc.value.path.endswith("nope.js")
        assert isinstance(exc.value.__cause__, OSError)

    def test_directory(self, tmp_path):
        with pytest.raises(SourceReadError, match="directory"):
            read_source(tmp_path)

    def test_decode_failure(self, tmp_path):
        p = tmp_path / "bad.js"
        p.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(SourceReadError, match="not valid"):
            read_source(p)

    def test_unknown_encoding(self, tmp_path):
        p = tmp_path / "a.js"
        p.write_text("x")
        with pytest.raises(SourceReadError, match="unknown encoding"):
            read_source(p, encoding="no-such-codec")


class TestReadStream:
    def test_reads_bytes(self):
        assert read_stream(io.BytesIO(b"a+b")) == "a+b"

    def test_decode_failure_names_stream(self):
        with pytest.raises(SourceReadError, match="<stream>"):
            read_stream(io.BytesIO(b"\xff"))


class TestAnalyzePath:
    def test_analyze_file(self, tmp_path):
        p = tmp_path / "min.js"
        p.write_text("function foo(a,b){return a+b;}")
        assert analyze_path(p).is_likely_minified()

    def test_missing(self, tmp_path):
        with pytest.raises(SourceReadError):
            analyze_path(tmp_path / "missing.js")


class TestCollectSources:
    def test_directory_recursive(self, tmp_path):
        (tmp_path / "a.js").write_text("a")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "b.mjs").write_text("b")
        (tmp_path / "notes.txt").write_text("c")
        found = collect_sources([tmp_path])
        assert [p.name for p in found] == ["a.js", "b.mjs"]

    def test_explicit_file_kept(self, tmp_path):
        p = tmp_path / "notes.txt"
        p.write_text("c")
        assert collect_sources([p]) == [p]

    def test_custom_extensions(self, tmp_path):
        (tmp_path / "a.js").write_text("a")
        (tmp_path / "b.ts").write_text("b")
        found = collect_sources([tmp_path], extensions=["ts"])
        assert [p.name for p in found] == ["b.ts"]

    def test_duplicates_dropped(self, tmp_path):
        p = tmp_path / "a.js"
        p.write_text("a")
        assert collect_sources([p, tmp_path, p]) == [p]


class TestWriteTable:
    def test_csv(self, tmp_path):
        p = tmp_path / "out.csv"
        write_table(pd.DataFrame({"path": ["a.js"], "p": [0.7]}), p)
        loaded = pd.read_csv(p, encoding="utf-8-sig")
        assert list(loaded.columns) == ["path", "p"]

    def test_tsv(self, tmp_path):
        p = tmp_path / "out.tsv"
        write_table(pd.DataFrame({"path": ["a.js"]}), p)
        loaded = pd.read_csv(p, sep="\t", encoding="utf-8-sig")
        assert loaded["path"].tolist() == ["a.js"]

    def test_xlsx(self, tmp_path):
        p = tmp_path / "out.xlsx"
        write_table(pd.DataFrame({"n": [1, 2]}), p)
        assert pd.read_excel(p)["n"].tolist() == [1, 2]

    def test_unsupported(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported"):
            write_table(pd.DataFrame({"a": [1]}), tmp_path / "out.json")
