"""Execution of external command line tools."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import logging
import subprocess
from typing import Optional, Union

logger = logging.getLogger(__name__)


class ExternalToolError(RuntimeError):
    """Raised when an external tool cannot run or exits unsuccessfully."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


class ToolTimeoutError(ExternalToolError):
    """Raised when an external tool does not finish within its timeout."""


@dataclass(frozen=True)
class ProcessResult:
    """Exit code and captured output of one tool invocation."""

    command: tuple[str, ...]
    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def raise_for_exit_code(self) -> None:
        """Raise ``ExternalToolError`` if the tool exited non-zero."""
        if self.ok:
            return
        details = self.stderr.strip() or self.stdout.strip()
        raise ExternalToolError(
            f"{' '.join(self.command)} exited with code {self.exit_code}: {details}",
            exit_code=self.exit_code,
            stdout=self.stdout,
            stderr=self.stderr,
        )


def run_process(
    command: Sequence[str],
    *,
    cwd: Optional[str] = None,
    timeout: Optional[float] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ProcessResult:
    """Run ``command`` and capture stdout and stderr separately.

    A non-zero exit code is returned, not raised.

    Args:
        command (Sequence[str]): Executable followed by its arguments.
        cwd (Optional[str]): Working directory for the process.
        timeout (Optional[float]): Seconds to wait before giving up.
        env (Optional[Mapping[str, str]]): Replacement environment.

    Returns:
        ProcessResult: Exit code and decoded output streams.
    """
    args = tuple(command)
    command_desc = " ".join(args)
    logger.debug("Running %s", command_desc)
    try:
        completed = subprocess.run(
            args,
            check=False,
            capture_output=True,
            text=True,
            cwd=cwd,
            timeout=timeout,
            env=dict(env) if env is not None else None,
        )
    except subprocess.TimeoutExpired as exc:
        raise ToolTimeoutError(
            f"{command_desc} did not finish within {timeout} seconds",
            stdout=_as_text(exc.stdout),
            stderr=_as_text(exc.stderr),
        ) from exc
    except OSError as exc:
        raise ExternalToolError(f"Failed to execute {command_desc}: {exc}") from exc

    if completed.returncode != 0:
        logger.info("%s exited with code %d", command_desc, completed.returncode)
    return ProcessResult(
        command=args,
        exit_code=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )


def _as_text(value: Optional[Union[str, bytes]]) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
