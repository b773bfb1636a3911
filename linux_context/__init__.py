#!/usr/bin/env python3
"""
Linux Context Gatherer

Collects operating-system facts (identity, hardware, storage, network,
packages, processes, logs) into a plain-text report suitable for pasting
into a troubleshooting session with a human or an AI assistant.
"""

__version__ = "1.0.0"
