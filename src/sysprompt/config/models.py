"""Pydantic models for sysprompt configuration."""

from pathlib import Path

from pydantic import BaseModel, Field

from sysprompt.hardware.runtimes import RuntimeSpec
from sysprompt.output.clipboard import DEFAULT_FALLBACK_PATH


class RuntimeSpecConfig(BaseModel):
    """An extra runtime to look for."""

    label: str = Field(min_length=1)
    executable: str = Field(min_length=1)
    version_args: list[str] = Field(default_factory=lambda: ["--version"])
    unix_only: bool = False

    def to_spec(self) -> RuntimeSpec:
        return RuntimeSpec(
            label=self.label,
            executable=self.executable,
            version_args=tuple(self.version_args),
            unix_only=self.unix_only,
        )


class SyspromptConfig(BaseModel):
    """Top-level configuration."""

    probe_timeout: float = Field(default=5.0, gt=0)
    fallback_path: Path = DEFAULT_FALLBACK_PATH
    use_clipboard: bool = True
    extra_runtimes: list[RuntimeSpecConfig] = Field(default_factory=list)
    skip_runtimes: list[str] = Field(default_factory=list)

    def runtime_candidates(self, base: tuple[RuntimeSpec, ...]) -> tuple[RuntimeSpec, ...]:
        """Base candidates plus extras, minus skipped labels."""
        skipped = set(self.skip_runtimes)
        specs = list(base) + [r.to_spec() for r in self.extra_runtimes]
        return tuple(s for s in specs if s.label not in skipped)
