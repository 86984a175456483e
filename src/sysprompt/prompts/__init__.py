"""Prompt templates and rendering."""

from .renderer import CodeSource, load_code_file, render_prompt, render_runtimes, render_specs
from .templates import CODE_PLACEHOLDER, PromptKind

__all__ = [
    "CODE_PLACEHOLDER",
    "CodeSource",
    "PromptKind",
    "load_code_file",
    "render_prompt",
    "render_runtimes",
    "render_specs",
]
