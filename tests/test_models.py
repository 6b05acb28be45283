"""Tests for entry and report models."""

from __future__ import annotations

from pathlib import Path

from envlayer.models import Entry, LoadReport, SourceResult


class TestEntry:
    def test_equals_plain_tuple(self):
        assert Entry("K", "v") == ("K", "v")

    def test_unpacks(self):
        key, value = Entry("K", "v")
        assert (key, value) == ("K", "v")


class TestSourceResult:
    def test_ok(self):
        result = SourceResult(path=Path("a.env"), entries=[("K", "v")])
        assert result.ok is True
        assert result.entries == [Entry("K", "v")]
        assert isinstance(result.entries[0], Entry)

    def test_error(self):
        result = SourceResult(path="a.env", error="No such file or directory")
        assert result.ok is False
        assert result.path == Path("a.env")
        assert result.entries == []

    def test_ignores_extra_fields(self):
        result = SourceResult(path="a.env", unknown_field="x")
        assert not hasattr(result, "unknown_field")


class TestLoadReport:
    def _report(self) -> LoadReport:
        return LoadReport(
            sources=[
                SourceResult(path="base.env", entries=[("A", "1"), ("B", "1")]),
                SourceResult(path="missing.env", error="missing"),
                SourceResult(path="local.env", entries=[("B", "2"), ("C", "3")]),
            ]
        )

    def test_entries_in_application_order(self):
        assert self._report().entries == [("A", "1"), ("B", "1"), ("B", "2"), ("C", "3")]

    def test_resolved_last_write_wins(self):
        assert self._report().resolved() == {"A": "1", "B": "2", "C": "3"}

    def test_origins(self):
        assert self._report().origins() == {
            "A": Path("base.env"),
            "B": Path("local.env"),
            "C": Path("local.env"),
        }

    def test_failed(self):
        failed = self._report().failed
        assert [s.path for s in failed] == [Path("missing.env")]

    def test_empty(self):
        report = LoadReport()
        assert report.entries == []
        assert report.resolved() == {}
