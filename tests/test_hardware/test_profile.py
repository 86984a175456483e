"""Tests for SystemProfile and collect()."""

from dataclasses import FrozenInstanceError
from unittest.mock import patch

import pytest

from sysprompt.hardware.detector import PlatformKind
from sysprompt.hardware.profile import (
    CPUInfo,
    MemoryInfo,
    OSInfo,
    SystemProfile,
    collect,
)
from sysprompt.hardware.runtimes import RuntimeSpec, RuntimeVersion


def _profile(**overrides):
    fields = dict(
        os=OSInfo(platform=PlatformKind.LINUX, name="Debian GNU/Linux 12 (bookworm)", kernel="6.1.0-18-amd64"),
        cpu=CPUInfo(architecture="x86_64", brand="AMD Ryzen 7 5800X 8-Core Processor", logical_cores=16),
        memory=MemoryInfo(total="31.3 GB"),
        gpus=("Advanced Micro Devices, Inc. [AMD/ATI] Navi 22",),
        runtimes=(RuntimeVersion("Python3", "Python 3.11.2"),),
    )
    fields.update(overrides)
    return SystemProfile(**fields)


class TestSystemProfile:
    def test_is_immutable(self):
        profile = _profile()
        with pytest.raises(FrozenInstanceError):
            profile.gpus = ()

    def test_runtime_versions(self):
        profile = _profile(
            runtimes=(
                RuntimeVersion("Python3", "Python 3.11.2"),
                RuntimeVersion("Rust", "rustc 1.76.0"),
            )
        )
        assert profile.runtime_versions() == {
            "Python3": "Python 3.11.2",
            "Rust": "rustc 1.76.0",
        }

    def test_to_dict(self):
        data = _profile().to_dict()
        assert data["os"]["platform"] == "linux"
        assert data["cpu"]["logical_cores"] == 16
        assert data["memory"]["total"] == "31.3 GB"
        assert data["gpus"] == ["Advanced Micro Devices, Inc. [AMD/ATI] Navi 22"]
        assert data["runtimes"] == {"Python3": "Python 3.11.2"}

    def test_defaults_are_empty(self):
        profile = SystemProfile(os=OSInfo(platform=PlatformKind.UNSUPPORTED))
        assert profile.cpu.brand is None
        assert profile.memory.total is None
        assert profile.gpus == ()
        assert profile.runtimes == ()
        assert not profile.is_supported


class TestCollect:
    def test_never_raises_on_real_host(self):
        profile = collect()
        assert isinstance(profile, SystemProfile)
        assert isinstance(profile.os.platform, PlatformKind)
        for value in (
            profile.os.name,
            profile.os.version,
            profile.os.kernel,
            profile.cpu.architecture,
            profile.cpu.brand,
            profile.memory.total,
        ):
            assert value is None or value.strip() != ""
        assert profile.cpu.logical_cores is None or profile.cpu.logical_cores >= 0
        assert all(name for name in profile.gpus)
        assert all(r.version for r in profile.runtimes)

    def test_idempotent(self):
        assert collect() == collect()

    @patch("sysprompt.hardware.profile.detect_runtimes", return_value=())
    @patch("sysprompt.hardware.profile.detect_platform", return_value=PlatformKind.UNSUPPORTED)
    def test_unsupported_platform_degrades(self, mock_platform, mock_runtimes):
        profile = collect()
        assert profile.os.platform == PlatformKind.UNSUPPORTED
        assert profile.os.name is None
        assert profile.os.version is None
        assert profile.cpu == CPUInfo()
        assert profile.memory == MemoryInfo()
        assert profile.gpus == ()

    @patch("sysprompt.hardware.profile.detect_runtimes", return_value=())
    @patch("sysprompt.hardware.profile.detect_gpus", return_value=())
    @patch("sysprompt.hardware.profile.detect_memory", return_value="16.0 GB")
    @patch("sysprompt.hardware.profile.detect_cpu_brand", return_value=None)
    @patch("sysprompt.hardware.profile.detect_platform", return_value=PlatformKind.MACOS)
    def test_failed_probe_does_not_block_others(
        self, mock_platform, mock_brand, mock_memory, mock_gpus, mock_runtimes
    ):
        profile = collect(timeout=1.0)
        assert profile.cpu.brand is None
        assert profile.memory.total == "16.0 GB"
        mock_gpus.assert_called_once_with(PlatformKind.MACOS, cpu_brand=None, timeout=1.0)

    @patch("sysprompt.hardware.profile.detect_runtimes", return_value=())
    @patch("sysprompt.hardware.profile.detect_gpus", return_value=())
    @patch("sysprompt.hardware.profile.detect_cpu_brand", return_value="Apple M3")
    @patch("sysprompt.hardware.profile.detect_platform", return_value=PlatformKind.MACOS)
    def test_cpu_brand_passed_to_gpu_probe(self, mock_platform, mock_brand, mock_gpus, mock_runtimes):
        collect()
        assert mock_gpus.call_args.kwargs["cpu_brand"] == "Apple M3"


class TestCollectRobustness:
    def test_runtime_with_invalid_utf8_output(self, non_utf8_tool):
        profile = collect(runtime_candidates=[RuntimeSpec("FakeCC", str(non_utf8_tool))])
        assert [r.label for r in profile.runtimes] == ["FakeCC"]
        assert profile.runtimes[0].version.startswith("fakecc Version 1.0")

    @patch("sysprompt.hardware.profile.detect_runtimes", return_value=())
    @patch("sysprompt.hardware.profile.detect_gpus", return_value=())
    @patch(
        "sysprompt.hardware.profile.detect_memory",
        side_effect=UnicodeDecodeError("cp1252", b"\x81", 0, 1, "character maps to <undefined>"),
    )
    @patch("sysprompt.hardware.profile.detect_cpu_brand", return_value="AMD Ryzen 9 7950X")
    @patch("sysprompt.hardware.profile.detect_platform", return_value=PlatformKind.WINDOWS)
    def test_unexpected_probe_error_is_absorbed(
        self, mock_platform, mock_brand, mock_memory, mock_gpus, mock_runtimes
    ):
        profile = collect(timeout=0.5)
        assert profile.memory.total is None
        assert profile.os.platform == PlatformKind.WINDOWS
