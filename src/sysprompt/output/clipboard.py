"""Deliver a prompt to the clipboard, or to a fallback file."""

import logging
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

import pyperclip

from sysprompt.hardware.detector import PlatformKind, detect_platform

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_PATH = Path.home() / "llm-optimize-prompt.txt"

# (executable that must be on PATH, pyperclip mechanism) in order of preference
CLIPBOARD_TOOLS: dict[PlatformKind, list[tuple[Optional[str], str]]] = {
    PlatformKind.MACOS: [("pbcopy", "pbcopy")],
    PlatformKind.LINUX: [
        ("xclip", "xclip"),
        ("xsel", "xsel"),
        ("wl-copy", "wl-clipboard"),
    ],
    PlatformKind.WINDOWS: [(None, "windows")],
}


class OutputError(Exception):
    """Raised when the prompt can be neither copied nor saved."""


class DeliveryMethod(str, Enum):
    CLIPBOARD = "clipboard"
    FILE = "file"


@dataclass(frozen=True)
class DeliveryResult:
    method: DeliveryMethod
    path: Optional[Path] = None
    tool: Optional[str] = None


def copy_to_clipboard(text: str, kind: Optional[PlatformKind] = None) -> Optional[str]:
    """Try each clipboard tool for the platform through pyperclip.

    Returns:
        Name of the tool that accepted the text, or None if none did.
    """
    kind = kind or detect_platform()
    for executable, mechanism in CLIPBOARD_TOOLS.get(kind, []):
        if executable and not shutil.which(executable):
            continue
        name = executable or mechanism
        try:
            pyperclip.set_clipboard(mechanism)
            pyperclip.copy(text)
        except Exception as e:
            logger.debug(f"{name} failed: {e}")
            continue
        return name
    return None


def save_to_file(text: str, path: Path) -> Path:
    """Write the prompt to ``path`` as UTF-8 followed by one newline.

    The prompt bytes are written unchanged; the trailing newline matches
    what ``echo "$PROMPT" > file`` produces.

    Raises:
        OutputError: If the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
            f.write("\n")
    except OSError as e:
        raise OutputError(f"Could not write prompt to {path}: {e}") from e
    return path


def deliver(
    text: str,
    fallback_path: Path = DEFAULT_FALLBACK_PATH,
    use_clipboard: bool = True,
    kind: Optional[PlatformKind] = None,
) -> DeliveryResult:
    """Copy the prompt to the clipboard, saving it to a file if that fails."""
    if use_clipboard:
        tool = copy_to_clipboard(text, kind)
        if tool:
            return DeliveryResult(method=DeliveryMethod.CLIPBOARD, tool=tool)
        logger.info(f"No working clipboard tool found; saving prompt to {fallback_path}")

    path = save_to_file(text, fallback_path)
    return DeliveryResult(method=DeliveryMethod.FILE, path=path)
