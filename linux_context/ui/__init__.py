#!/usr/bin/env python3
"""
UI module initialization for the Linux context gatherer.
"""

from .report import ReportGenerator
