#!/usr/bin/env python3
"""
Storage related collectors.
"""

import os
from typing import Dict

from .base import Collector

NFS_FSTYPES = ("nfs", "nfs4")


class StorageModule(Collector):
    """Filesystem usage and swap."""

    name = "storage"
    flag = "t"
    long_flag = "storage"
    description = "Storage Information"
    help = "Collect storage information"

    def run(self) -> Dict[str, str]:
        results = {}

        results["disk_usage"] = self.safe_run_command(["df", "-h"])

        if self.command_exists("swapon"):
            swap = self.safe_run_command(["swapon", "--show"])
        else:
            swap = self.safe_read_file("/proc/swaps")
        # swapon prints nothing when there is no swap
        results["swap"] = swap or "No swap configured."

        return results


class NFSModule(Collector):
    """NFS exports and mounts."""

    name = "nfs"
    flag = "f"
    long_flag = "nfs"
    description = "NFS Configuration"
    help = "Collect NFS configuration"

    def run(self) -> Dict[str, str]:
        results = {}

        if os.path.exists("/etc/exports"):
            results["exports_file"] = self.safe_read_file("/etc/exports")
        else:
            results["exports_file"] = "/etc/exports not found."

        if self.command_exists("exportfs"):
            results["exportfs"] = self.safe_run_command(["exportfs", "-v"])
        else:
            results["exportfs"] = "exportfs not available."

        mounts = self.safe_read_file("/proc/mounts",
                                     filter_func=lambda line: len(line.split()) > 2 and
                                                              line.split()[2] in NFS_FSTYPES)
        results["nfs_mounts"] = mounts or "No active NFS mounts found."

        return results
