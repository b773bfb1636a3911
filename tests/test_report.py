"""Tests for report assembly."""

import io

from linux_context.modules.base import Collector
from linux_context.ui.report import END_TITLE, REPORT_TITLE, WIDTH, ReportGenerator


class StaticCollector(Collector):
    name = "static"
    description = "Static Section"

    def __init__(self, results=None):
        self.results = {"first_part": "alpha", "second_part": "beta"} if results is None else results

    def run(self):
        return self.results


class BrokenCollector(Collector):
    name = "broken"
    description = "Broken Section"

    def run(self):
        raise RuntimeError("boom")


def section_headers(report):
    lines = report.splitlines()
    return [lines[i - 1] for i, line in enumerate(lines) if line == "-" * WIDTH]


class TestReportGenerator:

    def test_banners_surround_sections(self):
        report = ReportGenerator([StaticCollector()]).generate()

        start = report.index(REPORT_TITLE)
        section = report.index("STATIC SECTION")
        end = report.index(END_TITLE)

        assert start < section < end
        assert report.count(REPORT_TITLE) == 1
        assert report.count(END_TITLE) == 1
        assert "Generated: " in report
        assert "Hostname: " in report

    def test_subsections_in_order(self):
        report = ReportGenerator([StaticCollector()]).generate()

        assert "### First Part ###\nalpha\n" in report
        assert report.index("### First Part ###") < report.index("### Second Part ###")

    def test_empty_results(self):
        report = ReportGenerator([StaticCollector(results={})]).generate()

        assert "No results collected for this collector." in report

    def test_failing_collector_does_not_abort(self):
        report = ReportGenerator([BrokenCollector(), StaticCollector()]).generate()

        assert "ERROR: Failed to run this collector: boom" in report
        assert section_headers(report) == ["BROKEN SECTION", "STATIC SECTION"]
        assert report.rstrip().endswith("=" * WIDTH)
        assert END_TITLE in report

    def test_no_collectors(self):
        report = ReportGenerator([]).generate()

        assert section_headers(report) == []
        assert report.index(REPORT_TITLE) < report.index(END_TITLE)

    def test_write_to_stream(self):
        stream = io.StringIO()

        ReportGenerator([StaticCollector()], stream).write()

        assert "STATIC SECTION" in stream.getvalue()
        assert stream.getvalue().endswith(f"{END_TITLE}\n{'=' * WIDTH}\n")
