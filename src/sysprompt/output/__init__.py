"""Prompt delivery targets."""

from .clipboard import (
    DEFAULT_FALLBACK_PATH,
    DeliveryMethod,
    DeliveryResult,
    OutputError,
    deliver,
)

__all__ = [
    "DEFAULT_FALLBACK_PATH",
    "DeliveryMethod",
    "DeliveryResult",
    "OutputError",
    "deliver",
]
