#!/usr/bin/env python3
"""
Base class for all collectors.
"""

import shutil
import subprocess
import logging
from typing import Callable, Dict, Iterable, List, Optional

from .. import privilege

logger = logging.getLogger("linux_context.collector")

# Seconds before an external command is abandoned
COMMAND_TIMEOUT = 60

# Leading text of every line safe_run_command returns instead of output
FAILURE_PREFIXES = ("Error (exit", "Command timed out", "Failed to run command")


class Collector:
    """Base class for all collectors.

    Subclasses set ``name`` (dispatch key), ``flag`` (single-letter CLI
    switch), ``long_flag`` and ``description`` (section title), and
    implement :meth:`run`.
    """

    name = ""
    flag = ""
    long_flag = ""
    description = ""
    help = ""

    def run(self) -> Dict[str, str]:
        """Run the collector and return its subsections in display order."""
        raise NotImplementedError("Subclasses must implement this method")

    @staticmethod
    def command_path(name: str) -> Optional[str]:
        return shutil.which(name)

    @staticmethod
    def command_exists(name: str) -> bool:
        return shutil.which(name) is not None

    def safe_run_command(self, command: List[str], trim_lines: int = 0,
                         filter_func: Optional[Callable[[str], bool]] = None,
                         ok_codes: Iterable[int] = (0,),
                         combine_stderr: bool = False) -> str:
        """
        Run a command safely, handling errors and filtering output.

        Args:
            command: Command to run as a list of strings
            trim_lines: Number of last lines to keep (0 for all)
            filter_func: Function to filter lines (should return True to keep line)
            ok_codes: Exit statuses treated as success
            combine_stderr: Capture stderr together with stdout

        Returns:
            Command output, or a single line describing why there is none
        """
        if not self.command_exists(command[0]):
            return f"{command[0]} not available."

        logger.debug(f"Running command: {' '.join(command)}")
        try:
            result = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if combine_stderr else subprocess.PIPE,
                text=True,
                errors="replace",
                check=False,
                timeout=COMMAND_TIMEOUT
            )
        except subprocess.TimeoutExpired:
            return f"Command timed out after {COMMAND_TIMEOUT} seconds: {' '.join(command)}"
        except OSError as e:
            return f"Failed to run command {' '.join(command)}: {e}"

        if result.returncode not in ok_codes:
            detail = (result.stderr or "").strip() or result.stdout.strip()
            return f"Error (exit {result.returncode}): {detail}"

        return self._shape(result.stdout, trim_lines, filter_func)

    def safe_run_privileged(self, command: List[str], trim_lines: int = 0,
                            filter_func: Optional[Callable[[str], bool]] = None) -> str:
        """Run a command with best-effort elevation, skipping it if sudo is missing."""
        elevated = privilege.elevated_command(command)
        if elevated is None:
            return f"sudo not available, skipping: {' '.join(command)}"
        output = self.safe_run_command(elevated, trim_lines=trim_lines, filter_func=filter_func)
        if elevated != command and output.startswith(FAILURE_PREFIXES):
            return f"Elevation failed, skipping: {' '.join(command)}\n{output}"
        return output

    def safe_read_file(self, file_path: str, trim_lines: int = 0,
                       filter_func: Optional[Callable[[str], bool]] = None) -> str:
        """
        Read a file safely, handling errors and filtering output.

        Args:
            file_path: Path to the file
            trim_lines: Number of last lines to keep (0 for all)
            filter_func: Function to filter lines (should return True to keep line)

        Returns:
            File content as string
        """
        try:
            with open(file_path, "r", errors="replace") as f:
                content = f.read()
        except FileNotFoundError:
            return f"File not found: {file_path}"
        except PermissionError:
            return f"Permission denied: {file_path}"
        except OSError as e:
            return f"Failed to read file {file_path}: {e}"

        return self._shape(content, trim_lines, filter_func)

    @staticmethod
    def _shape(text: str, trim_lines: int,
               filter_func: Optional[Callable[[str], bool]]) -> str:
        if filter_func:
            text = "\n".join(line for line in text.splitlines() if filter_func(line))

        # Keep only the last N lines
        if trim_lines > 0:
            lines = text.splitlines()
            if len(lines) > trim_lines:
                text = "\n".join(lines[-trim_lines:])
                text = f"[...showing only last {trim_lines} lines...]\n{text}"

        return text.rstrip("\n")
