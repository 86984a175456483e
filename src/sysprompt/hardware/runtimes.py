"""Language runtime detection."""

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import Iterable, Optional

from .detector import DEFAULT_TIMEOUT, PlatformKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeSpec:
    """How to find a runtime and ask it for its version."""

    label: str
    executable: str
    version_args: tuple[str, ...] = ("--version",)
    unix_only: bool = False


@dataclass(frozen=True)
class RuntimeVersion:
    """A runtime found on this host and its version line."""

    label: str
    version: str


RUNTIME_CANDIDATES: tuple[RuntimeSpec, ...] = (
    RuntimeSpec("Python3", "python3"),
    RuntimeSpec("Python", "python"),
    RuntimeSpec("Node.js", "node"),
    RuntimeSpec(".NET SDK", "dotnet"),
    RuntimeSpec("Java", "java", ("-version",)),
    RuntimeSpec("Go", "go", ("version",)),
    RuntimeSpec("Rust", "rustc"),
    RuntimeSpec("GCC", "gcc", unix_only=True),
    RuntimeSpec("G++", "g++", unix_only=True),
    RuntimeSpec("Clang", "clang", unix_only=True),
    RuntimeSpec("Swift", "swift", unix_only=True),
)


def probe_runtime(spec: RuntimeSpec, timeout: float = DEFAULT_TIMEOUT) -> Optional[str]:
    """Return the first line of a runtime's version output.

    stderr is merged into stdout since some tools (java) print their
    version there. Returns None if the executable is not on PATH, the
    command fails, or it prints nothing.
    """
    path = shutil.which(spec.executable)
    if not path:
        return None

    try:
        result = subprocess.run(
            [path, *spec.version_args],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.debug(f"{spec.executable} version check timed out after {timeout}s")
        return None
    except OSError as e:
        logger.debug(f"{spec.executable} version check failed: {e}")
        return None

    if result.returncode != 0:
        logger.debug(f"{spec.executable} version check exited with code {result.returncode}")
        return None

    lines = (result.stdout or "").splitlines()
    first = lines[0].rstrip() if lines else ""
    return first or None


def detect_runtimes(
    kind: PlatformKind,
    candidates: Iterable[RuntimeSpec] = RUNTIME_CANDIDATES,
    timeout: float = DEFAULT_TIMEOUT,
) -> tuple[RuntimeVersion, ...]:
    """Probe each candidate in order and keep the ones that are installed."""
    found = []
    for spec in candidates:
        if spec.unix_only and kind == PlatformKind.WINDOWS:
            continue
        version = probe_runtime(spec, timeout)
        if version is None:
            continue
        found.append(RuntimeVersion(label=spec.label, version=version))
    return tuple(found)
