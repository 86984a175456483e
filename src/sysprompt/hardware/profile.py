"""System profile assembled from the individual probes."""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Iterable, Optional

from .detector import (
    DEFAULT_TIMEOUT,
    PlatformKind,
    detect_architecture,
    detect_cpu_brand,
    detect_gpus,
    detect_kernel,
    detect_logical_cores,
    detect_memory,
    detect_os_name,
    detect_os_version,
    detect_platform,
)
from .runtimes import RUNTIME_CANDIDATES, RuntimeSpec, RuntimeVersion, detect_runtimes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OSInfo:
    """Operating system details for the host."""

    platform: PlatformKind
    name: Optional[str] = None
    version: Optional[str] = None
    kernel: Optional[str] = None


@dataclass(frozen=True)
class CPUInfo:
    """Processor details for the host."""

    architecture: Optional[str] = None
    brand: Optional[str] = None
    logical_cores: Optional[int] = None


@dataclass(frozen=True)
class MemoryInfo:
    """Total physical memory, already formatted for display."""

    total: Optional[str] = None


@dataclass(frozen=True)
class SystemProfile:
    """Best-effort description of the host.

    A field is None when its probe produced no usable data. Display
    sentinels are applied by the prompt renderer, not here.
    """

    os: OSInfo
    cpu: CPUInfo = field(default_factory=CPUInfo)
    memory: MemoryInfo = field(default_factory=MemoryInfo)
    gpus: tuple[str, ...] = ()
    runtimes: tuple[RuntimeVersion, ...] = ()

    @property
    def is_supported(self) -> bool:
        return self.os.platform != PlatformKind.UNSUPPORTED

    def runtime_versions(self) -> dict[str, str]:
        """Installed runtimes as a label -> version mapping."""
        return {r.label: r.version for r in self.runtimes}

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["os"]["platform"] = self.os.platform.value
        data["gpus"] = list(self.gpus)
        data["runtimes"] = self.runtime_versions()
        return data


def _probe(func: Callable[..., Any], *args: Any, default: Any = None, **kwargs: Any) -> Any:
    """Run one probe, treating any unexpected error as "no data"."""
    try:
        return func(*args, **kwargs)
    except Exception as e:
        logger.debug(f"{getattr(func, '__name__', func)} failed: {e}")
        return default


def collect(
    timeout: float = DEFAULT_TIMEOUT,
    runtime_candidates: Iterable[RuntimeSpec] = RUNTIME_CANDIDATES,
) -> SystemProfile:
    """Probe the host and build a SystemProfile.

    Never raises. On an unsupported platform the OS, CPU, memory and GPU
    fields are left empty; runtimes are still probed.

    Args:
        timeout: Per-command timeout in seconds.
        runtime_candidates: Runtimes to look for, in display order.
    """
    kind = detect_platform()
    if kind == PlatformKind.UNSUPPORTED:
        logger.warning("Unsupported platform; system details will be reported as Unknown")

    cpu_brand = _probe(detect_cpu_brand, kind, timeout)

    profile = SystemProfile(
        os=OSInfo(
            platform=kind,
            name=_probe(detect_os_name, kind, timeout),
            version=_probe(detect_os_version, kind, timeout),
            kernel=_probe(detect_kernel, kind),
        ),
        cpu=CPUInfo(
            architecture=_probe(detect_architecture) if kind != PlatformKind.UNSUPPORTED else None,
            brand=cpu_brand,
            logical_cores=_probe(detect_logical_cores, kind),
        ),
        memory=MemoryInfo(total=_probe(detect_memory, kind, timeout)),
        gpus=_probe(detect_gpus, kind, cpu_brand=cpu_brand, timeout=timeout, default=()),
        runtimes=_probe(detect_runtimes, kind, runtime_candidates, timeout, default=()),
    )

    logger.debug(
        f"Collected profile: platform={kind.value}, "
        f"{len(profile.gpus)} GPU(s), {len(profile.runtimes)} runtime(s)"
    )
    return profile
