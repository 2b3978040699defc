"""Filesystem access used to materialize package source trees."""

from __future__ import annotations

from pathlib import Path
import shutil
from typing import Protocol


class WriteError(RuntimeError):
    """Raised when a filesystem operation fails."""


class FileSystem(Protocol):
    """Filesystem primitives needed by the package generator."""

    def create_directory(self, path: str) -> None:
        """Create a directory and its parents; existing directories are fine."""
        ...

    def write_text(self, path: str, contents: str) -> None:
        """Write ``contents`` to ``path``, replacing any existing file."""
        ...

    def copy_file(self, source: str, destination: str) -> None:
        """Copy a file, replacing ``destination`` if present."""
        ...

    def file_exists(self, path: str) -> bool:
        """Return whether ``path`` is an existing file."""
        ...

    def directory_exists(self, path: str) -> bool:
        """Return whether ``path`` is an existing directory."""
        ...

    def delete_directory(self, path: str, recursive: bool = True) -> None:
        """Remove a directory, with its contents when ``recursive``."""
        ...

    def list_files(self, path: str, pattern: str = "*") -> list[str]:
        """Return files directly under ``path`` matching ``pattern``."""
        ...

    def list_directories(self, path: str) -> list[str]:
        """Return directories directly under ``path``."""
        ...


class LocalFileSystem:
    """``FileSystem`` backed by the local disk."""

    def create_directory(self, path: str) -> None:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteError(f"Failed to create directory {path}: {exc}") from exc

    def write_text(self, path: str, contents: str) -> None:
        try:
            Path(path).write_text(contents, encoding="utf-8")
        except OSError as exc:
            raise WriteError(f"Failed to write file {path}: {exc}") from exc

    def copy_file(self, source: str, destination: str) -> None:
        if Path(source).resolve() == Path(destination).resolve():
            return
        try:
            shutil.copyfile(source, destination)
        except OSError as exc:
            raise WriteError(f"Failed to copy {source} to {destination}: {exc}") from exc

    def file_exists(self, path: str) -> bool:
        return Path(path).is_file()

    def directory_exists(self, path: str) -> bool:
        return Path(path).is_dir()

    def delete_directory(self, path: str, recursive: bool = True) -> None:
        try:
            if recursive:
                shutil.rmtree(path)
            else:
                Path(path).rmdir()
        except OSError as exc:
            raise WriteError(f"Failed to delete directory {path}: {exc}") from exc

    def list_files(self, path: str, pattern: str = "*") -> list[str]:
        return sorted(str(item) for item in Path(path).glob(pattern) if item.is_file())

    def list_directories(self, path: str) -> list[str]:
        return sorted(str(item) for item in Path(path).iterdir() if item.is_dir())
