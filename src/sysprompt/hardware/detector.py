"""Individual system probes with fallbacks.

Every probe returns ``None`` (or an empty tuple for GPUs) when it cannot
produce a usable value. Probes never raise.
"""

import logging
import os
import platform
import subprocess
from enum import Enum
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0

_GB = 1024**3

_LSPCI_DISPLAY_CLASSES = ("vga", "3d", "display")


class PlatformKind(str, Enum):
    """Host operating system family."""

    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "windows"
    UNSUPPORTED = "unsupported"


def run_command(args: list[str], timeout: float = DEFAULT_TIMEOUT) -> Optional[str]:
    """Run a command and return its stripped stdout.

    Bytes that do not decode in the locale encoding become U+FFFD.
    Returns None if the command is missing, times out, exits non-zero
    or prints nothing.
    """
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except FileNotFoundError:
        logger.debug(f"{args[0]} not found")
        return None
    except subprocess.TimeoutExpired:
        logger.debug(f"{args[0]} timed out after {timeout}s")
        return None
    except OSError as e:
        logger.debug(f"{args[0]} failed: {e}")
        return None

    if result.returncode != 0:
        logger.debug(f"{args[0]} exited with code {result.returncode}")
        return None

    output = (result.stdout or "").strip()
    return output or None


def format_gb(num_bytes: int) -> str:
    """Format a byte count as gigabytes with one decimal place."""
    return f"{num_bytes / _GB:.1f} GB"


def detect_platform() -> PlatformKind:
    """Map the running OS to a PlatformKind."""
    return {
        "Darwin": PlatformKind.MACOS,
        "Linux": PlatformKind.LINUX,
        "Windows": PlatformKind.WINDOWS,
    }.get(platform.system(), PlatformKind.UNSUPPORTED)


# ---------------------------------------------------------------------------
# Operating system
# ---------------------------------------------------------------------------


def detect_os_name(kind: PlatformKind, timeout: float = DEFAULT_TIMEOUT) -> Optional[str]:
    """Detect a human-readable OS name such as "macOS 14.4" or "Ubuntu 22.04.4 LTS"."""
    if kind == PlatformKind.MACOS:
        version = run_command(["sw_vers", "-productVersion"], timeout)
        return f"macOS {version}" if version else None

    if kind == PlatformKind.LINUX:
        pretty = _read_os_release().get("PRETTY_NAME")
        if pretty:
            return pretty
        kernel = detect_kernel(kind)
        return f"Linux {kernel}" if kernel else None

    if kind == PlatformKind.WINDOWS:
        release = platform.release()
        return f"Windows {release}" if release else None

    return None


def detect_os_version(kind: PlatformKind, timeout: float = DEFAULT_TIMEOUT) -> Optional[str]:
    """Detect the OS build string. Linux has none."""
    if kind == PlatformKind.MACOS:
        build = run_command(["sw_vers", "-buildVersion"], timeout)
        return f"Build {build}" if build else None

    if kind == PlatformKind.WINDOWS:
        build = platform.version()
        return f"Build {build}" if build else None

    return None


def detect_kernel(kind: PlatformKind) -> Optional[str]:
    """Detect the kernel release. Only reported on Linux."""
    if kind != PlatformKind.LINUX:
        return None
    return platform.release() or None


def _read_os_release(path: Path = Path("/etc/os-release")) -> dict[str, str]:
    """Parse an os-release file into a dict, empty if unreadable."""
    fields: dict[str, str] = {}
    try:
        content = path.read_text(errors="replace")
    except OSError as e:
        logger.debug(f"Could not read {path}: {e}")
        return fields

    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        fields[key] = value.strip().strip("\"'")
    return fields


# ---------------------------------------------------------------------------
# CPU
# ---------------------------------------------------------------------------


def detect_architecture() -> Optional[str]:
    """Detect the machine architecture (e.g. x86_64, arm64)."""
    return platform.machine() or None


def detect_cpu_brand(kind: PlatformKind, timeout: float = DEFAULT_TIMEOUT) -> Optional[str]:
    """Detect the CPU brand string with a py-cpuinfo fallback."""
    brand: Optional[str] = None

    if kind == PlatformKind.MACOS:
        brand = run_command(["sysctl", "-n", "machdep.cpu.brand_string"], timeout)
    elif kind == PlatformKind.LINUX:
        brand = _read_cpuinfo_model()
    elif kind == PlatformKind.WINDOWS:
        brand = run_command(
            ["powershell", "-NoProfile", "-Command", "(Get-CimInstance Win32_Processor).Name"],
            timeout,
        )
    else:
        return None

    if brand:
        return brand

    try:
        import cpuinfo

        brand = cpuinfo.get_cpu_info().get("brand_raw", "").strip()
        return brand or None
    except Exception as e:
        logger.debug(f"py-cpuinfo detection failed: {e}")
        return None


def _read_cpuinfo_model(path: Path = Path("/proc/cpuinfo")) -> Optional[str]:
    """Return the first "model name" value from /proc/cpuinfo."""
    try:
        content = path.read_text(errors="replace")
    except OSError as e:
        logger.debug(f"Could not read {path}: {e}")
        return None

    for line in content.splitlines():
        if line.startswith("model name") and ":" in line:
            value = line.split(":", 1)[1].strip()
            if value:
                return value
    return None


def detect_logical_cores(kind: PlatformKind) -> Optional[int]:
    """Detect the number of logical CPU cores."""
    if kind == PlatformKind.UNSUPPORTED:
        return None

    try:
        import psutil

        count = psutil.cpu_count(logical=True)
        if count:
            return count
    except Exception as e:
        logger.debug(f"psutil core count failed: {e}")

    return os.cpu_count()


# ---------------------------------------------------------------------------
# Memory
# ---------------------------------------------------------------------------


def detect_memory(kind: PlatformKind, timeout: float = DEFAULT_TIMEOUT) -> Optional[str]:
    """Detect total physical memory as a human-readable string.

    macOS and Linux report gigabytes with one decimal place. Windows
    reports the "Total Physical Memory" value from systeminfo verbatim.
    """
    total: Optional[str] = None

    if kind == PlatformKind.MACOS:
        raw = run_command(["sysctl", "-n", "hw.memsize"], timeout)
        if raw and raw.isdigit() and int(raw) > 0:
            total = format_gb(int(raw))
    elif kind == PlatformKind.LINUX:
        total = _read_meminfo_total()
    elif kind == PlatformKind.WINDOWS:
        total = _systeminfo_total_memory(timeout)
    else:
        return None

    if total:
        return total

    try:
        import psutil

        return format_gb(psutil.virtual_memory().total)
    except Exception as e:
        logger.debug(f"psutil memory detection failed: {e}")
        return None


def _read_meminfo_total(path: Path = Path("/proc/meminfo")) -> Optional[str]:
    """Read MemTotal (kB) from /proc/meminfo and format it in GB."""
    try:
        content = path.read_text(errors="replace")
    except OSError as e:
        logger.debug(f"Could not read {path}: {e}")
        return None

    for line in content.splitlines():
        if line.startswith("MemTotal:"):
            parts = line.split()
            if len(parts) >= 2 and parts[1].isdigit():
                return format_gb(int(parts[1]) * 1024)
    return None


def _systeminfo_total_memory(timeout: float) -> Optional[str]:
    """Extract "Total Physical Memory" from the Windows systeminfo output."""
    output = run_command(["systeminfo"], timeout)
    if not output:
        return None

    for line in output.splitlines():
        if line.startswith("Total Physical Memory:"):
            value = line.split(":", 1)[1].strip()
            return value or None
    return None


# ---------------------------------------------------------------------------
# GPU
# ---------------------------------------------------------------------------


def detect_gpus(
    kind: PlatformKind,
    cpu_brand: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> tuple[str, ...]:
    """Detect GPU names.

    Args:
        kind: Host platform.
        cpu_brand: CPU brand string, used on macOS to recognise Apple
            Silicon where the GPU is part of the SoC.
        timeout: Per-command timeout in seconds.

    Returns:
        GPU names in the order the OS lists them, empty if none found.
    """
    if kind == PlatformKind.MACOS:
        return _detect_gpus_macos(cpu_brand, timeout)
    if kind == PlatformKind.LINUX:
        return _detect_gpus_linux(timeout)
    if kind == PlatformKind.WINDOWS:
        return _detect_gpus_windows(timeout)
    return ()


def _detect_gpus_macos(cpu_brand: Optional[str], timeout: float) -> tuple[str, ...]:
    output = run_command(["system_profiler", "SPDisplaysDataType"], timeout)
    names: list[str] = []
    if output:
        for line in output.splitlines():
            line = line.strip()
            if line.startswith(("Chipset Model:", "Chip Model:")):
                value = line.split(":", 1)[1].strip()
                if value:
                    names.append(value)

    if names:
        return tuple(names)

    # Apple Silicon
    if cpu_brand and "apple" in cpu_brand.lower():
        return ("(Integrated Apple GPU)",)

    logger.debug("system_profiler reported no display chipset")
    return ()


def _detect_gpus_linux(timeout: float) -> tuple[str, ...]:
    output = run_command(["lspci"], timeout)
    if not output:
        return ()

    names = []
    for line in output.splitlines():
        # "00:02.0 VGA compatible controller: Intel Corporation UHD Graphics 620"
        parts = line.split(":", 2)
        if len(parts) < 3:
            continue
        device_class = parts[1].lower()
        if not any(c in device_class for c in _LSPCI_DISPLAY_CLASSES):
            continue
        description = parts[2].strip()
        if description:
            names.append(description)
    return tuple(names)


def _detect_gpus_windows(timeout: float) -> tuple[str, ...]:
    output = run_command(
        [
            "powershell",
            "-NoProfile",
            "-Command",
            "Get-CimInstance Win32_VideoController | Select-Object -ExpandProperty Name",
        ],
        timeout,
    )
    if output:
        names = [line.strip() for line in output.splitlines() if line.strip()]
        if names:
            return tuple(names)

    output = run_command(["wmic", "path", "win32_VideoController", "get", "name"], timeout)
    if not output:
        return ()

    # First line is the "Name" column header
    names = [line.strip() for line in output.splitlines()[1:] if line.strip()]
    return tuple(names)
