#!/usr/bin/env python3
"""
System related collectors.
"""

import os
import datetime
import platform
import logging
from typing import Dict

from .base import Collector

logger = logging.getLogger("linux_context.system")

LOG_TAIL_LINES = 50

LOG_DIR = "/var/log"
SYSLOG_PATHS = ["/var/log/syslog", "/var/log/messages"]
PROC_STAT = "/proc/stat"
PROC_MODULES = "/proc/modules"

# Checked in order; each entry is (name, version command, list command)
CONTAINER_RUNTIMES = [
    ("docker", ["docker", "version", "--format", "{{.Server.Version}}"], ["docker", "ps", "-a"]),
    ("podman", ["podman", "--version"], ["podman", "ps", "-a"]),
    ("nerdctl", ["nerdctl", "--version"], ["nerdctl", "ps", "-a"]),
    ("lxc-ls", ["lxc-ls", "--version"], ["lxc-ls", "--fancy"]),
]


class SystemInfoModule(Collector):
    """Distribution, hostname and kernel."""

    name = "system_info"
    flag = "s"
    long_flag = "system"
    description = "Basic System Information"
    help = "Collect basic system information"

    def run(self) -> Dict[str, str]:
        results = {}

        try:
            overview = self.get_overview()
        except (OSError, ValueError, IndexError) as e:
            logger.error(f"Error getting system overview: {e}")
            overview = {"Error": str(e)}
        results["overview"] = "\n".join(f"{key}: {value}" for key, value in overview.items())

        os_release = []
        if self.command_exists("lsb_release"):
            os_release.append(self.safe_run_command(["lsb_release", "-a"]))
        if os.path.exists("/etc/os-release"):
            os_release.append(self.safe_read_file("/etc/os-release"))
        if os.path.exists("/etc/issue"):
            os_release.append("Issue file:\n" + self.safe_read_file("/etc/issue"))
        results["os_release"] = "\n".join(os_release) or "No OS release information found."

        if self.command_exists("hostnamectl"):
            results["hostname"] = self.safe_run_command(["hostnamectl"])
        else:
            results["hostname"] = f"Hostname: {platform.node()}"

        if self.command_exists("uname"):
            results["kernel_version"] = self.safe_run_command(["uname", "-a"])
        else:
            results["kernel_version"] = " ".join(platform.uname())

        return results

    def get_overview(self) -> Dict[str, str]:
        """Summarise OS, kernel, uptime, CPU and memory from /etc and /proc."""
        info = {}

        if os.path.exists("/etc/os-release"):
            with open("/etc/os-release", "r") as f:
                for line in f:
                    if line.startswith("PRETTY_NAME="):
                        info["OS"] = line.split("=", 1)[1].strip().strip('"')
                        break

        info["Kernel"] = platform.release()
        info["Architecture"] = platform.machine()

        if os.path.exists("/proc/uptime"):
            with open("/proc/uptime", "r") as f:
                uptime_seconds = float(f.read().split()[0])
            days, remainder = divmod(uptime_seconds, 86400)
            hours, remainder = divmod(remainder, 3600)
            minutes, seconds = divmod(remainder, 60)
            info["Uptime"] = f"{int(days)}d {int(hours)}h {int(minutes)}m {int(seconds)}s"

        if os.path.exists("/proc/cpuinfo"):
            cpu_count = 0
            cpu_model = "Unknown"
            with open("/proc/cpuinfo", "r") as f:
                for line in f:
                    if line.startswith("processor"):
                        cpu_count += 1
                    if line.startswith("model name") and cpu_model == "Unknown":
                        cpu_model = line.split(":", 1)[1].strip()
            info["CPU Count"] = str(cpu_count)
            info["CPU Model"] = cpu_model

        if os.path.exists("/proc/meminfo"):
            with open("/proc/meminfo", "r") as f:
                for line in f:
                    if line.startswith("MemTotal"):
                        mem_kb = int(line.split()[1])
                        info["Memory"] = f"{mem_kb / 1024 / 1024:.2f} GB"
                        break

        return info


class BootHistoryModule(Collector):
    """Reboot and shutdown history."""

    name = "boot_history"
    flag = "o"
    long_flag = "boot"
    description = "Boot History"
    help = "Collect boot and reboot history"

    def run(self) -> Dict[str, str]:
        results = {}

        if self.command_exists("uptime"):
            results["booted_at"] = self.safe_run_command(["uptime", "-s"])
        else:
            results["booted_at"] = self.boot_time_from_proc()

        if self.command_exists("last"):
            results["reboots"] = self.safe_run_command(["last", "-x", "reboot", "shutdown"],
                                                       filter_func=lambda line: line.strip(),
                                                       trim_lines=20)
        else:
            results["reboots"] = "last not available."

        if self.command_exists("journalctl"):
            results["journal_boots"] = self.safe_run_command(["journalctl", "--list-boots", "--no-pager"],
                                                             trim_lines=20)
        else:
            results["journal_boots"] = "journalctl not available."

        return results

    def boot_time_from_proc(self) -> str:
        stat = self.safe_read_file(PROC_STAT, filter_func=lambda line: line.startswith("btime"))
        if not stat.startswith("btime"):
            return "Boot time not available."
        return datetime.datetime.fromtimestamp(int(stat.split()[1])).strftime("%Y-%m-%d %H:%M:%S")


class HardwareInfoModule(Collector):
    """CPU, memory and attached devices."""

    name = "hardware"
    flag = "w"
    long_flag = "hardware"
    description = "Hardware Information"
    help = "Collect hardware information"

    def run(self) -> Dict[str, str]:
        results = {}

        if self.command_exists("lscpu"):
            results["cpu_info"] = self.safe_run_command(["lscpu"])
        else:
            results["cpu_info"] = self.safe_read_file("/proc/cpuinfo",
                                                      filter_func=lambda line: line.startswith("model name") or
                                                                               line.startswith("cpu MHz") or
                                                                               line.startswith("processor"))

        if self.command_exists("free"):
            results["memory_info"] = self.safe_run_command(["free", "-h"])
        else:
            results["memory_info"] = self.safe_read_file("/proc/meminfo",
                                                         filter_func=lambda line: line.startswith(
                                                             ("MemTotal", "MemFree", "MemAvailable",
                                                              "SwapTotal", "SwapFree")))

        results["block_devices"] = self.safe_run_command(["lsblk"])
        results["pci_devices"] = self.safe_run_command(["lspci"])
        results["usb_devices"] = self.safe_run_command(["lsusb"])

        return results


class KernelModulesModule(Collector):
    """Loaded kernel modules."""

    name = "kernel_modules"
    flag = "m"
    long_flag = "modules"
    description = "Kernel Modules"
    help = "Collect loaded kernel modules"

    def run(self) -> Dict[str, str]:
        if self.command_exists("lsmod"):
            return {"loaded_modules": self.safe_run_command(["lsmod"])}
        if os.path.exists(PROC_MODULES):
            return {"loaded_modules": self.safe_read_file(PROC_MODULES)}
        return {"loaded_modules": f"lsmod not available and {PROC_MODULES} not found."}


class VirtualizationModule(Collector):
    """Hypervisor and container detection."""

    name = "virtualization"
    flag = "z"
    long_flag = "virtualization"
    description = "Virtualization"
    help = "Detect virtualization and containerization"

    def run(self) -> Dict[str, str]:
        results = {}

        if self.command_exists("systemd-detect-virt"):
            # Exits 1 and prints "none" on bare metal
            results["detect_virt"] = self.safe_run_command(["systemd-detect-virt"], ok_codes=(0, 1))
        else:
            results["detect_virt"] = "systemd-detect-virt not available."

        markers = []
        if os.path.exists("/.dockerenv"):
            markers.append("/.dockerenv present (Docker container)")
        if os.path.exists("/run/.containerenv"):
            markers.append("/run/.containerenv present (Podman container)")
        if os.environ.get("container"):
            markers.append(f"container environment variable: {os.environ['container']}")
        cgroup = self.safe_read_file("/proc/1/cgroup",
                                     filter_func=lambda line: any(
                                         term in line for term in ["docker", "kubepods", "lxc", "containerd"]))
        if cgroup and not cgroup.startswith(("File not found", "Permission denied", "Failed")):
            markers.append(f"PID 1 cgroup:\n{cgroup}")
        results["container_markers"] = "\n".join(markers) or "No container markers found."

        hints = []
        cpu_flags = self.safe_read_file("/proc/cpuinfo", filter_func=lambda line: line.startswith("flags"))
        if " hypervisor" in cpu_flags:
            hints.append("CPU reports the hypervisor flag")
        for path in ["/sys/class/dmi/id/sys_vendor", "/sys/class/dmi/id/product_name"]:
            if os.path.exists(path):
                hints.append(f"{os.path.basename(path)}: {self.safe_read_file(path).strip()}")
        results["hypervisor_hints"] = "\n".join(hints) or "No hypervisor hints found."

        return results


class ProcessesModule(Collector):
    """Running processes, largest memory users first."""

    name = "processes"
    flag = "r"
    long_flag = "processes"
    description = "Running Processes"
    help = "Collect running processes"

    def run(self) -> Dict[str, str]:
        if self.command_exists("ps"):
            output = self.safe_run_command(["ps", "aux", "--sort=-%mem"])
            if output.startswith("Error"):
                # BusyBox ps has no aux or --sort
                output = self.safe_run_command(["ps"])
            return {"processes": output}
        return {"processes": "ps not available. Process list from /proc:\n" + self.scan_proc()}

    def scan_proc(self) -> str:
        lines = ["PID   COMMAND"]
        try:
            pids = sorted(int(entry) for entry in os.listdir("/proc") if entry.isdigit())
        except OSError as e:
            return f"Failed to list /proc: {e}"

        for pid in pids:
            try:
                with open(f"/proc/{pid}/cmdline", "rb") as f:
                    cmdline = f.read().replace(b"\0", b" ").decode(errors="replace").strip()
                if not cmdline:
                    with open(f"/proc/{pid}/comm", "r") as f:
                        cmdline = f"[{f.read().strip()}]"
            except OSError:
                # Process exited while scanning
                continue
            lines.append(f"{pid:<5} {cmdline}")
        return "\n".join(lines)


class ServicesModule(Collector):
    """Service manager status."""

    name = "services"
    flag = "v"
    long_flag = "services"
    description = "Service Status"
    help = "Collect systemd/SysV services status"

    def run(self) -> Dict[str, str]:
        if self.command_exists("systemctl") and os.path.exists("/run/systemd/system"):
            return {"systemd_services": self.safe_run_command(
                ["systemctl", "list-units", "--type=service", "--all", "--no-pager"])}

        if self.command_exists("service"):
            output = self.safe_run_command(["service", "--status-all"])
            return {"sysv_services": "systemd not running. Checking SysV services (service --status-all):\n" + output}

        return {"services": "No SysV init or systemd found."}


class LogsModule(Collector):
    """Tail of the kernel ring buffer, journal and syslog."""

    name = "logs"
    flag = "l"
    long_flag = "logs"
    description = "Recent System Logs"
    help = "Collect recent system logs"

    def run(self) -> Dict[str, str]:
        if not os.path.isdir(LOG_DIR):
            return {"logs": f"{LOG_DIR} not found."}

        results = {}

        results["dmesg"] = self.safe_run_privileged(["dmesg"], trim_lines=LOG_TAIL_LINES)

        if self.command_exists("journalctl"):
            results["journal"] = self.safe_run_command(
                ["journalctl", "-n", str(LOG_TAIL_LINES), "--no-pager"])

        for path in SYSLOG_PATHS:
            if os.path.exists(path):
                results["syslog"] = f"{path}:\n" + self.safe_read_file(path, trim_lines=LOG_TAIL_LINES)
                break
        else:
            results["syslog"] = "No syslog or messages file found."

        return results


class ContainerRuntimeModule(Collector):
    """Installed container runtimes and their containers."""

    name = "containers"
    flag = "d"
    long_flag = "containers"
    description = "Container Runtimes"
    help = "Collect container runtime information"

    def run(self) -> Dict[str, str]:
        results = {}

        for runtime, version_cmd, list_cmd in CONTAINER_RUNTIMES:
            path = self.command_path(runtime)
            if not path:
                continue
            version = self.safe_run_command(version_cmd)
            containers = self.safe_run_command(list_cmd)
            results[runtime] = f"Path: {path}\nVersion: {version}\n\nContainers:\n{containers}"

        if not results:
            results["containers"] = "No container runtime detected."

        return results
