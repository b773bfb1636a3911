#!/usr/bin/env python3
"""
Package, interpreter and BusyBox collectors.
"""

import os
import sys
from typing import Dict, Optional

from .base import Collector

# Probed in this order; the first one found wins
PACKAGE_MANAGERS = ["dpkg", "rpm", "pacman", "apk"]

PYTHON_NAMES = ["python", "python2", "python2.7", "python3"] + \
               [f"python3.{minor}" for minor in range(6, 15)] + ["pypy", "pypy3"]

REBOOT_REQUIRED = "/var/run/reboot-required"
REBOOT_REQUIRED_PKGS = "/var/run/reboot-required.pkgs"

NO_PACKAGE_MANAGER = "No known package manager detected or installed."


def detect_package_manager(collector: Collector) -> Optional[str]:
    """Return the first package manager found on PATH, or None."""
    for manager in PACKAGE_MANAGERS:
        if collector.command_exists(manager):
            return manager
    return None


class BusyBoxModule(Collector):
    """BusyBox version and applets."""

    name = "busybox"
    flag = "b"
    long_flag = "busybox"
    description = "BusyBox Version & Commands"
    help = "Collect BusyBox information"

    def run(self) -> Dict[str, str]:
        path = self.command_path("busybox")
        if not path:
            return {"busybox": "BusyBox not found."}

        # Version is the first line of the usage banner
        version = self.safe_run_command(["busybox", "--help"], ok_codes=(0, 1), combine_stderr=True)
        return {
            "path": f"BusyBox absolute path: {path}",
            "version": version.splitlines()[0] if version else "unknown",
            "supported_commands": self.safe_run_command(["busybox", "--list"]),
        }


class PackagesModule(Collector):
    """Installed packages with versions."""

    name = "packages"
    flag = "p"
    long_flag = "packages"
    description = "Installed Packages / Versions"
    help = "Collect installed packages"

    def run(self) -> Dict[str, str]:
        manager = detect_package_manager(self)

        if manager == "dpkg":
            return {"debian_ubuntu_based_dpkg": self.safe_run_command(
                ["dpkg-query", "-W", "-f=${Package} ${Version}\n"])}
        if manager == "rpm":
            return {"redhat_based_rpm": self.safe_run_command(
                ["rpm", "-qa", "--qf", "%{NAME} %{VERSION}-%{RELEASE}\n"])}
        if manager == "pacman":
            return {"arch_based_pacman": self.safe_run_command(["pacman", "-Q"])}
        if manager == "apk":
            return {"alpine_based_apk": self.safe_run_command(["apk", "info", "-v"])}

        return {"packages": NO_PACKAGE_MANAGER}


class PythonRuntimesModule(Collector):
    """Python interpreters on PATH."""

    name = "python_runtimes"
    flag = "y"
    long_flag = "python"
    description = "Python Interpreters"
    help = "Collect installed Python interpreters"

    def run(self) -> Dict[str, str]:
        found = []
        seen = set()
        for name in PYTHON_NAMES:
            path = self.command_path(name)
            if not path:
                found.append(f"{name} -> not found")
                continue
            real = os.path.realpath(path)
            # Python 2 prints its version on stderr
            version = self.safe_run_command([name, "--version"], combine_stderr=True) or "version unknown"
            alias = f" (same as {real})" if real in seen else ""
            seen.add(real)
            found.append(f"{name} -> {path} [{version.strip()}]{alias}")

        current = f"{sys.executable} [Python {sys.version.split()[0]}]"
        return {"interpreters": "\n".join(found), "running_interpreter": current}


class UpdateStatusModule(Collector):
    """Pending package updates and reboot requirement."""

    name = "update_status"
    flag = "g"
    long_flag = "updates"
    description = "Update Status"
    help = "Check for pending updates"

    def run(self) -> Dict[str, str]:
        results = {}
        manager = detect_package_manager(self)

        if manager == "dpkg":
            results["pending_updates"] = self.safe_run_command(
                ["apt", "list", "--upgradable"],
                filter_func=lambda line: line.strip() and not line.startswith(("Listing", "WARNING")))
        elif manager == "rpm":
            tool = next((t for t in ["dnf", "yum", "zypper"] if self.command_exists(t)), None)
            if tool == "zypper":
                results["pending_updates"] = self.safe_run_command(["zypper", "--non-interactive", "list-updates"])
            elif tool:
                # check-update exits 100 when updates are pending
                results["pending_updates"] = self.safe_run_command(
                    [tool, "-q", "check-update"], ok_codes=(0, 100))
            else:
                results["pending_updates"] = "No dnf, yum or zypper available."
        elif manager == "pacman":
            if self.command_exists("checkupdates"):
                # checkupdates exits 2 when there is nothing to update
                results["pending_updates"] = self.safe_run_command(["checkupdates"], ok_codes=(0, 2))
            else:
                results["pending_updates"] = self.safe_run_command(["pacman", "-Qu"], ok_codes=(0, 1))
        elif manager == "apk":
            results["pending_updates"] = self.safe_run_command(["apk", "version", "-l", "<"])
        else:
            results["pending_updates"] = NO_PACKAGE_MANAGER

        if not results["pending_updates"].strip():
            results["pending_updates"] = "No pending updates found."

        if os.path.exists(REBOOT_REQUIRED):
            pkgs = self.safe_read_file(REBOOT_REQUIRED_PKGS) if os.path.exists(REBOOT_REQUIRED_PKGS) else ""
            results["reboot_required"] = f"Reboot required.\n{pkgs}".rstrip()
        else:
            results["reboot_required"] = "No reboot required flag found."

        return results
