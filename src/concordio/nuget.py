"""Wrapper around the ``nuget`` command line client."""

from __future__ import annotations

from typing import Optional

from .process import ProcessResult, run_process


class NuGetService:
    """Fetch and pack NuGet packages by shelling out to ``nuget``."""

    def __init__(self, executable: str = "nuget", *, timeout: Optional[float] = None) -> None:
        self._executable = executable
        self._timeout = timeout

    def download_package(
        self,
        output_dir: str,
        package_id: str,
        version: Optional[str] = None,
        prerelease: bool = False,
    ) -> ProcessResult:
        """Install ``package_id`` into ``output_dir``; latest version when ``version`` is None."""
        command = [self._executable, "install", package_id, "-OutputDirectory", output_dir]
        if version is not None:
            command.extend(["-Version", version])
        if prerelease:
            command.append("-Prerelease")
        return run_process(command, timeout=self._timeout)

    def pack(self, nuspec_path: str, output_dir: str) -> ProcessResult:
        """Pack a generated ``.nuspec`` into ``output_dir``."""
        return run_process(
            [self._executable, "pack", nuspec_path, "-OutputDirectory", output_dir],
            timeout=self._timeout,
        )
