#!/usr/bin/env python3
"""
Privilege helpers: root detection, optional sudo re-exec and sudo wrapping
for commands whose data source is normally restricted.
"""

import os
import sys
import shutil
import logging
from typing import List, Optional, TextIO

logger = logging.getLogger("linux_context.privilege")

ELEVATION_PROMPT = "Do you want to elevate privileges and re-run the script? (y/n): "


def is_root() -> bool:
    """Check if the effective user is the superuser."""
    return os.geteuid() == 0


def elevated_command(command: List[str]) -> Optional[List[str]]:
    """
    Wrap a command so it runs with elevated privileges.

    Returns the command unchanged when already root, prefixed with a
    non-interactive sudo when sudo is installed, and None when neither
    applies and the command has to be skipped.
    """
    if is_root():
        return list(command)
    if shutil.which("sudo"):
        return ["sudo", "-n"] + list(command)
    return None


def reexec_command(argv: List[str]) -> List[str]:
    """
    Build the sudo command line that re-runs this program.

    sudo resets the environment and root's site-packages differ from the
    user's, so the directory holding this package is passed on as PYTHONPATH.
    """
    package_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return ["sudo", "env", f"PYTHONPATH={package_root}",
            sys.executable, "-m", "linux_context"] + list(argv)


def offer_elevation(argv: List[str], stdin: Optional[TextIO] = None,
                    stderr: Optional[TextIO] = None) -> bool:
    """
    Offer to re-run the whole program under sudo.

    On an affirmative answer the current process is replaced and this
    function does not return. Returns False whenever the run continues
    unprivileged, True when already root.
    """
    stdin = stdin or sys.stdin
    stderr = stderr or sys.stderr

    if is_root():
        return True

    if not stdin.isatty():
        logger.warning("Not running as root and stdin is not a terminal; not prompting for sudo.")
        logger.warning("Proceeding without elevated privileges. Some information may be unavailable.")
        return False

    if not shutil.which("sudo"):
        logger.warning("sudo not available. Proceeding without elevated privileges.")
        return False

    stderr.write("This script should ideally be run as root to collect all possible information.\n")
    stderr.write(ELEVATION_PROMPT)
    stderr.flush()
    answer = stdin.readline().strip().lower()

    if answer not in ("y", "yes"):
        logger.warning("Proceeding without elevated privileges. Some information may be unavailable.")
        return False

    command = reexec_command(argv)
    logger.info(f"Re-running with sudo: {' '.join(command)}")
    stderr.write("Re-running script with sudo...\n")
    stderr.flush()
    os.execvp("sudo", command)
    return True  # pragma: no cover
