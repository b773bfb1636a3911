#!/usr/bin/env python3
"""
Network related collectors.
"""

import os
from typing import Dict

from .base import Collector


class NetworkConfigModule(Collector):
    """Interfaces, routes, resolver and listening sockets."""

    name = "network"
    flag = "n"
    long_flag = "network"
    description = "Network Configuration"
    help = "Collect network configuration"

    def run(self) -> Dict[str, str]:
        results = {}

        # iproute2 first, net-tools on older or minimal systems
        if self.command_exists("ip"):
            results["ip_addresses"] = self.safe_run_command(["ip", "addr", "show"])
            results["routing_table"] = self.safe_run_command(["ip", "route", "show"])
        elif self.command_exists("ifconfig"):
            results["ip_addresses"] = self.safe_run_command(["ifconfig", "-a"])
            results["routing_table"] = self.safe_run_command(["route", "-n"])
        else:
            results["ip_addresses"] = "Neither ip nor ifconfig available."
            results["routing_table"] = "Neither ip nor route available."

        if os.path.exists("/etc/resolv.conf"):
            results["dns_configuration"] = self.safe_read_file("/etc/resolv.conf")
        else:
            results["dns_configuration"] = "/etc/resolv.conf not found."

        if os.path.exists("/etc/hosts"):
            results["hosts_file"] = self.safe_read_file("/etc/hosts")
        else:
            results["hosts_file"] = "/etc/hosts not found."

        if self.command_exists("ss"):
            results["listening_ports"] = self.safe_run_command(["ss", "-tuln"])
        elif self.command_exists("netstat"):
            results["listening_ports"] = self.safe_run_command(["netstat", "-tuln"])
        else:
            results["listening_ports"] = "Neither ss nor netstat available."

        return results
