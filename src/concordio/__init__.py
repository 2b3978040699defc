"""Package OpenAPI/AsyncAPI contracts and NSwag clients as NuGet sources."""

from __future__ import annotations

from .cli import main
from .generator import ContractPackageGenerator
from .package_types import ClientPackageOptions, ContractPackageOptions, GenerationResult

__all__ = [
    "ClientPackageOptions",
    "ContractPackageGenerator",
    "ContractPackageOptions",
    "GenerationResult",
    "main",
]
