"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from sysprompt.config.models import RuntimeSpecConfig, SyspromptConfig
from sysprompt.hardware.runtimes import RUNTIME_CANDIDATES, RuntimeSpec


class TestRuntimeSpecConfig:
    def test_to_spec(self):
        spec = RuntimeSpecConfig(label="Zig", executable="zig", version_args=["version"]).to_spec()
        assert spec == RuntimeSpec("Zig", "zig", ("version",))

    def test_empty_label_rejected(self):
        with pytest.raises(ValidationError):
            RuntimeSpecConfig(label="", executable="zig")


class TestSyspromptConfig:
    def test_defaults(self):
        config = SyspromptConfig()
        assert config.extra_runtimes == []
        assert config.skip_runtimes == []

    def test_negative_timeout_rejected(self):
        with pytest.raises(ValidationError):
            SyspromptConfig(probe_timeout=-1)

    def test_runtime_candidates_unchanged_by_default(self):
        assert SyspromptConfig().runtime_candidates(RUNTIME_CANDIDATES) == RUNTIME_CANDIDATES

    def test_runtime_candidates_extras_appended(self):
        config = SyspromptConfig(extra_runtimes=[{"label": "Ruby", "executable": "ruby"}])
        candidates = config.runtime_candidates(RUNTIME_CANDIDATES)
        assert candidates[:-1] == RUNTIME_CANDIDATES
        assert candidates[-1] == RuntimeSpec("Ruby", "ruby")

    def test_runtime_candidates_skip(self):
        config = SyspromptConfig(skip_runtimes=["Python", "Swift"])
        labels = [s.label for s in config.runtime_candidates(RUNTIME_CANDIDATES)]
        assert "Python" not in labels
        assert "Swift" not in labels
        assert "Python3" in labels
