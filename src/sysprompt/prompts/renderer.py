"""Render a SystemProfile and a code file into a prompt."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from sysprompt.hardware.detector import PlatformKind
from sysprompt.hardware.profile import SystemProfile

from .templates import CODE_PLACEHOLDER, OUTPUT_FORMAT, TEMPLATES, PromptKind

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"
NO_GPU = "Unable to detect GPU"
NO_RUNTIMES = "No common runtimes detected"


@dataclass(frozen=True)
class CodeSource:
    """Code to place inside the <code> block."""

    text: str
    path: Optional[Path] = None
    injected: bool = False
    missing: bool = False
    error: Optional[str] = None
    encoding: Optional[str] = None


def _decode(data: bytes, path: Path) -> tuple[str, str]:
    """Decode file bytes as UTF-8, or as Latin-1 when that fails.

    Latin-1 maps every byte to one character, so no byte of a legacy
    encoded file is dropped or replaced.
    """
    try:
        return data.decode("utf-8"), "utf-8"
    except UnicodeDecodeError:
        logger.debug(f"{path} is not valid UTF-8; decoding as Latin-1")
        return data.decode("latin-1"), "latin-1"


def load_code_file(path: Optional[Path]) -> CodeSource:
    """Load a code file, falling back to the placeholder.

    A path that does not point to an existing file is not an error: the
    result carries ``missing=True`` and the placeholder text. A single
    trailing newline is removed from the file contents.
    """
    if path is None:
        return CodeSource(text=CODE_PLACEHOLDER)

    if not path.is_file():
        logger.debug(f"Code file not found: {path}")
        return CodeSource(text=CODE_PLACEHOLDER, path=path, missing=True)

    try:
        data = path.read_bytes()
    except OSError as e:
        logger.debug(f"Could not read code file {path}: {e}")
        return CodeSource(text=CODE_PLACEHOLDER, path=path, error=str(e))

    text, encoding = _decode(data, path)
    if text.endswith("\r\n"):
        text = text[:-2]
    elif text.endswith("\n"):
        text = text[:-1]

    return CodeSource(text=text, path=path, injected=True, encoding=encoding)


def _or_unknown(value: object) -> str:
    if value is None or value == "":
        return UNKNOWN
    return str(value)


def render_gpus(profile: SystemProfile) -> str:
    if not profile.gpus:
        return NO_GPU
    return "; ".join(profile.gpus)


def render_specs(profile: SystemProfile) -> str:
    """Render the lines of the <system_specs> block, GPU last."""
    os_name = _or_unknown(profile.os.name)
    if profile.os.version:
        os_name = f"{os_name} ({profile.os.version})"

    lines = [f"OS: {os_name}"]
    if profile.os.platform == PlatformKind.LINUX:
        lines.append(f"Kernel: {_or_unknown(profile.os.kernel)}")
    lines.extend(
        [
            f"Architecture: {_or_unknown(profile.cpu.architecture)}",
            f"Processor: {_or_unknown(profile.cpu.brand)}",
            f"CPU Cores: {_or_unknown(profile.cpu.logical_cores)}",
            f"Total RAM: {_or_unknown(profile.memory.total)}",
            f"GPU: {render_gpus(profile)}",
        ]
    )
    return "\n".join(lines)


def render_runtimes(profile: SystemProfile) -> str:
    if not profile.runtimes:
        return NO_RUNTIMES
    return "\n".join(f"{r.label}: {r.version}" for r in profile.runtimes)


def render_prompt(
    kind: PromptKind,
    code: CodeSource,
    profile: Optional[SystemProfile] = None,
) -> str:
    """Fill the template for ``kind``.

    Raises:
        ValueError: If an optimize prompt is requested without a profile.
    """
    template = TEMPLATES[kind]

    if kind == PromptKind.OPTIMIZE:
        if profile is None:
            raise ValueError("An optimize prompt requires a system profile")
        return template.format(
            specs=render_specs(profile),
            runtimes=render_runtimes(profile),
            output_format=OUTPUT_FORMAT,
            code=code.text,
        )

    return template.format(output_format=OUTPUT_FORMAT, code=code.text)
