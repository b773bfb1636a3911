#!/usr/bin/env python3
"""
Module initialization - imports all collectors and provides the ordered
dispatch table used by the option parser and the report generator.
"""

from typing import Iterable, List

from .base import Collector

from .identity import IdentityModule, CommandPathsModule, EnvironmentModule
from .system import (
    SystemInfoModule, BootHistoryModule, HardwareInfoModule, KernelModulesModule,
    VirtualizationModule, ProcessesModule, ServicesModule, LogsModule, ContainerRuntimeModule
)
from .storage import StorageModule, NFSModule
from .network import NetworkConfigModule
from .packages import BusyBoxModule, PackagesModule, PythonRuntimesModule, UpdateStatusModule

# Report order
COLLECTORS = [
    IdentityModule,
    CommandPathsModule,
    SystemInfoModule,
    BootHistoryModule,
    HardwareInfoModule,
    KernelModulesModule,
    VirtualizationModule,
    StorageModule,
    NetworkConfigModule,
    NFSModule,
    BusyBoxModule,
    PackagesModule,
    ProcessesModule,
    ServicesModule,
    EnvironmentModule,
    LogsModule,
    ContainerRuntimeModule,
    PythonRuntimesModule,
    UpdateStatusModule,
]

COLLECTOR_NAMES = [collector.name for collector in COLLECTORS]


def get_modules(names: Iterable[str]) -> List[Collector]:
    """Return instances of the named collectors, in report order."""
    wanted = set(names)
    unknown = wanted.difference(COLLECTOR_NAMES)
    if unknown:
        raise KeyError(f"Unknown collectors: {', '.join(sorted(unknown))}")
    return [collector() for collector in COLLECTORS if collector.name in wanted]
