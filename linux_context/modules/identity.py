#!/usr/bin/env python3
"""
User identity, tool location and environment collectors.
"""

import os
import grp
import pwd
from typing import Dict

from .base import Collector
from .. import privilege

# Tools whose location is worth knowing when reading the rest of the report
COMMANDS_TO_CHECK = [
    "lsb_release", "hostnamectl", "uname", "lscpu", "lsusb", "lsblk", "lspci",
    "lsmod", "free", "df", "mount", "exportfs", "busybox", "dpkg", "dpkg-query",
    "rpm", "pacman", "apk", "systemctl", "service", "ps", "ip", "ss", "dmesg",
    "journalctl", "last", "systemd-detect-virt", "docker", "podman", "sudo",
]

# Variables considered safe to display; anything else is never printed
ENV_ALLOW_LIST = frozenset([
    "COLORTERM", "CONDA_DEFAULT_ENV", "DESKTOP_SESSION", "DISPLAY", "EDITOR",
    "GOPATH", "GOROOT", "HOME", "HOSTNAME", "HOSTTYPE", "JAVA_HOME", "LANG",
    "LANGUAGE", "LC_ALL", "LC_CTYPE", "LD_LIBRARY_PATH", "LOGNAME", "MAIL",
    "MANPATH", "OLDPWD", "PAGER", "PATH", "PWD", "PYTHONHOME", "PYTHONPATH",
    "SHELL", "SHLVL", "SUDO_GID", "SUDO_UID", "SUDO_USER", "TERM", "TMPDIR",
    "TZ", "USER", "VIRTUAL_ENV", "VISUAL", "WAYLAND_DISPLAY", "XDG_CONFIG_HOME",
    "XDG_CURRENT_DESKTOP", "XDG_DATA_HOME", "XDG_RUNTIME_DIR",
    "XDG_SESSION_TYPE", "container",
])


def _user_name(uid: int) -> str:
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return f"uid {uid} (no passwd entry)"


def _group_name(gid: int) -> str:
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


class IdentityModule(Collector):
    """Current user and group membership."""

    name = "identity"
    flag = "u"
    long_flag = "user"
    description = "Current User Information"
    help = "Collect current user information"

    def run(self) -> Dict[str, str]:
        uid = os.getuid()
        euid = os.geteuid()
        groups = ", ".join(_group_name(gid) for gid in os.getgroups()) or "(none)"

        lines = [
            f"User: {_user_name(euid)}",
            f"Numeric UID: {uid}",
            f"Effective UID: {euid}",
            f"Numeric GID: {os.getgid()}",
            f"Groups (current user): {groups}",
            f"Running as root: {'yes' if privilege.is_root() else 'no'}",
        ]
        return {"identity": "\n".join(lines)}


class CommandPathsModule(Collector):
    """Absolute paths of the tools the other collectors rely on."""

    name = "command_paths"
    flag = "c"
    long_flag = "commands"
    description = "Full Absolute Paths of Selected Commands/Tools"
    help = "Collect full absolute paths of selected commands/tools"

    def run(self) -> Dict[str, str]:
        lines = []
        for cmd in COMMANDS_TO_CHECK:
            path = self.command_path(cmd)
            lines.append(f"{cmd} -> {path if path else 'not found'}")
        return {"command_paths": "\n".join(lines)}


class EnvironmentModule(Collector):
    """Environment variables, filtered through ENV_ALLOW_LIST."""

    name = "environment"
    flag = "e"
    long_flag = "environment"
    description = "Environment Variables"
    help = "Collect allow-listed environment variables"

    def run(self) -> Dict[str, str]:
        shown = sorted(key for key in os.environ if key in ENV_ALLOW_LIST)
        hidden = len(os.environ) - len(shown)

        lines = [f"{key}={os.environ[key]}" for key in shown]
        if not lines:
            lines.append("No allow-listed environment variables are set.")
        if hidden:
            lines.append("")
            lines.append(f"({hidden} other variables not shown)")

        return {"environment": "\n".join(lines)}
