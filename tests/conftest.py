"""Shared fixtures for package generation tests."""

from __future__ import annotations

import pytest

from fs_helpers import InMemoryFileSystem
from concordio.generator import ContractPackageGenerator
from concordio.renderer import JinjaTemplateRenderer


@pytest.fixture
def memory_fs() -> InMemoryFileSystem:
    """An empty in-memory filesystem holding a sample spec at ``/output/petstore.yaml``."""
    return InMemoryFileSystem({"/output/petstore.yaml": "openapi: 3.0.3\n"})


@pytest.fixture
def generator(memory_fs: InMemoryFileSystem) -> ContractPackageGenerator:
    """A generator rendering the packaged templates into ``memory_fs``."""
    return ContractPackageGenerator(JinjaTemplateRenderer(), memory_fs)
