"""Host system probes and the aggregate system profile."""

from .detector import PlatformKind
from .profile import CPUInfo, MemoryInfo, OSInfo, SystemProfile, collect
from .runtimes import RUNTIME_CANDIDATES, RuntimeSpec, RuntimeVersion

__all__ = [
    "CPUInfo",
    "MemoryInfo",
    "OSInfo",
    "PlatformKind",
    "RUNTIME_CANDIDATES",
    "RuntimeSpec",
    "RuntimeVersion",
    "SystemProfile",
    "collect",
]
