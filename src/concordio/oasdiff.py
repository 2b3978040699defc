"""Breaking-change detection through the ``oasdiff`` binary."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from .process import run_process

# oasdiff exits with 1 when --fail-on matches; its own failures use codes above 100.
BREAKING_EXIT_CODE = 1


@dataclass(frozen=True)
class OasDiffResult:
    """Outcome of one oasdiff run."""

    exit_code: int
    output: str
    error: str
    breaking: bool


class OasDiffRunner:
    """Run ``oasdiff`` commands and interpret their exit codes."""

    def __init__(self, executable: str = "oasdiff", *, timeout: Optional[float] = None) -> None:
        self._executable = executable
        self._timeout = timeout

    def breaking(
        self,
        base_spec: str,
        revision_spec: str,
        arguments: Sequence[str] = (),
    ) -> OasDiffResult:
        """Report breaking changes from ``base_spec`` to ``revision_spec``."""
        command = [
            "breaking",
            base_spec,
            revision_spec,
            "--fail-on",
            "ERR",
            *arguments,
        ]
        result = self.run(command)
        return OasDiffResult(
            exit_code=result.exit_code,
            output=result.output,
            error=result.error,
            breaking=result.exit_code == BREAKING_EXIT_CODE,
        )

    def run(self, arguments: Sequence[str]) -> OasDiffResult:
        """Run an arbitrary oasdiff command; ``breaking`` is always False."""
        result = run_process([self._executable, *arguments], timeout=self._timeout)
        return OasDiffResult(
            exit_code=result.exit_code,
            output=result.stdout,
            error=result.stderr,
            breaking=False,
        )
