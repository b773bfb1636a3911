#!/usr/bin/env python3
"""
Report Generator for the Linux context gatherer.
"""

import io
import sys
import datetime
import logging
import platform
from typing import List, Optional, TextIO

from ..modules.base import Collector

logger = logging.getLogger("linux_context.report")

WIDTH = 80
REPORT_TITLE = "LINUX SYSTEM CONTEXT REPORT"
END_TITLE = "END OF SYSTEM INFORMATION"


class ReportGenerator:
    """Writes the report: opening banner, one section per collector, closing banner."""

    def __init__(self, collectors: List[Collector], stream: Optional[TextIO] = None):
        self.collectors = collectors
        self.stream = stream

    def write(self) -> None:
        """Write the report to the stream, flushing after every section."""
        stream = self.stream or sys.stdout

        self._emit(stream, self.banner())
        for collector in self.collectors:
            self._emit(stream, self.render_section(collector))
        self._emit(stream, self.closing_banner())

    def generate(self) -> str:
        """Generate the whole report as a string."""
        buffer = io.StringIO()
        ReportGenerator(self.collectors, buffer).write()
        return buffer.getvalue()

    def banner(self) -> List[str]:
        timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        return [
            "=" * WIDTH,
            REPORT_TITLE,
            f"Generated: {timestamp}",
            f"Hostname: {self.get_hostname()}",
            "=" * WIDTH,
            "",
        ]

    def closing_banner(self) -> List[str]:
        return [
            "=" * WIDTH,
            END_TITLE,
            "=" * WIDTH,
        ]

    def render_section(self, collector: Collector) -> List[str]:
        """Run one collector and format its results."""
        logger.info(f"Running collector: {collector.name}")

        lines = [collector.description.upper(), "-" * WIDTH]

        try:
            results = collector.run()

            if not results:
                lines.append("No results collected for this collector.")

            for section, content in results.items():
                section_title = section.replace("_", " ").title()
                lines.append(f"### {section_title} ###")
                lines.append(content)
                lines.append("")
        except Exception as e:
            logger.error(f"Error running collector {collector.name}: {e}")
            lines.append(f"ERROR: Failed to run this collector: {e}")

        lines.append("")
        return lines

    @staticmethod
    def get_hostname() -> str:
        """Get the system hostname."""
        return platform.node() or "unknown-host"

    @staticmethod
    def _emit(stream: TextIO, lines: List[str]) -> None:
        stream.write("\n".join(lines) + "\n")
        stream.flush()
