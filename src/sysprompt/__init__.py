"""sysprompt - system-aware LLM prompt generator."""

__version__ = "1.0.0"
