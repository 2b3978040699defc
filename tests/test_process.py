"""Tests for external process execution and the tool wrappers."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest

from concordio.nuget import NuGetService
from concordio.oasdiff import OasDiffRunner
from concordio.process import ExternalToolError, ToolTimeoutError, run_process
from tool_helpers import write_fake_tool


def test_streams_are_captured_separately() -> None:
    """Stdout and stderr are both drained and kept apart."""
    result = run_process(
        [
            sys.executable,
            "-c",
            "import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)",
        ]
    )
    assert result.exit_code == 3
    assert result.stdout.strip() == "out"
    assert result.stderr.strip() == "err"
    assert not result.ok


def test_non_zero_exit_is_raised_on_request() -> None:
    """``raise_for_exit_code`` surfaces the captured output."""
    result = run_process([sys.executable, "-c", "import sys; print('boom'); sys.exit(2)"])
    with pytest.raises(ExternalToolError) as excinfo:
        result.raise_for_exit_code()
    assert excinfo.value.exit_code == 2
    assert "boom" in excinfo.value.stdout
    assert "boom" in str(excinfo.value)


def test_successful_result_does_not_raise() -> None:
    """A zero exit code passes ``raise_for_exit_code``."""
    result = run_process([sys.executable, "-c", "pass"])
    assert result.ok
    result.raise_for_exit_code()


def test_missing_executable(tmp_path: Path) -> None:
    """A tool that cannot start is an external tool error."""
    with pytest.raises(ExternalToolError, match="Failed to execute"):
        run_process([str(tmp_path / "does-not-exist")])


def test_timeout_is_a_distinct_error() -> None:
    """Hung tools are cut off by the timeout."""
    with pytest.raises(ToolTimeoutError, match="did not finish"):
        run_process([sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.5)


def test_oasdiff_breaking_detects_fail_on_exit(tmp_path: Path) -> None:
    """Exit code 1 from ``--fail-on`` means breaking changes."""
    tool = write_fake_tool(tmp_path, "oasdiff", exit_code_expr="1")
    result = OasDiffRunner(str(tool)).breaking("base.yaml", "rev.yaml", ["--format", "text"])

    assert result.breaking
    assert result.exit_code == 1
    assert result.output.strip() == "breaking base.yaml rev.yaml --fail-on ERR --format text"
    assert "stderr from fake tool" in result.error


def test_oasdiff_identical_specs_are_not_breaking(tmp_path: Path) -> None:
    """A clean exit means no breaking changes."""
    tool = write_fake_tool(tmp_path, "oasdiff")
    result = OasDiffRunner(str(tool)).breaking("petstore.yaml", "petstore.yaml")
    assert result.exit_code == 0
    assert not result.breaking


def test_oasdiff_tool_failure_is_not_breaking(tmp_path: Path) -> None:
    """oasdiff's own failures are surfaced by exit code, not as breaking."""
    tool = write_fake_tool(tmp_path, "oasdiff", exit_code_expr="102")
    result = OasDiffRunner(str(tool)).breaking("missing.yaml", "petstore.yaml")
    assert result.exit_code == 102
    assert not result.breaking


def test_oasdiff_run_passes_arguments(tmp_path: Path) -> None:
    """Arbitrary commands are forwarded verbatim."""
    tool = write_fake_tool(tmp_path, "oasdiff")
    result = OasDiffRunner(str(tool)).run(["--version"])
    assert result.output.strip() == "--version"
    assert result.exit_code == 0


def test_nuget_download_command_line(tmp_path: Path) -> None:
    """Version and prerelease flags are appended only when requested."""
    tool = write_fake_tool(tmp_path, "nuget")
    service = NuGetService(str(tool))

    latest = service.download_package("/pkgs", "Acme.PetStore.Contracts")
    pinned = service.download_package(
        "/pkgs", "Acme.PetStore.Contracts", version="2.1.0", prerelease=True
    )

    assert latest.stdout.strip() == "install Acme.PetStore.Contracts -OutputDirectory /pkgs"
    assert pinned.stdout.strip() == (
        "install Acme.PetStore.Contracts -OutputDirectory /pkgs -Version 2.1.0 -Prerelease"
    )


def test_nuget_pack_surfaces_exit_code(tmp_path: Path) -> None:
    """A failing pack is returned to the caller, not masked."""
    tool = write_fake_tool(tmp_path, "nuget", exit_code_expr="1")
    result = NuGetService(str(tool)).pack("/out/Acme.nuspec", "/pkgs")
    assert result.exit_code == 1
    assert result.stdout.strip() == "pack /out/Acme.nuspec -OutputDirectory /pkgs"
    assert result.command[1:] == ("pack", "/out/Acme.nuspec", "-OutputDirectory", "/pkgs")
