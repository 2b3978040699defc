"""Option and result datatypes for package generation."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any, TypeAlias

KeyValuePair: TypeAlias = tuple[str, str]
KeyValuePairs: TypeAlias = tuple[KeyValuePair, ...]

# Property keys become nuspec and MSBuild element names.
_ELEMENT_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9._-]*$")


class ConfigurationError(ValueError):
    """Raised when a required package option is missing or invalid."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"Invalid option '{field}': {message}")
        self.field = field


@dataclass(frozen=True)
class ContractPackageOptions:
    """Options for a contract package embedding one spec file."""

    package_id: str
    version: str
    spec_file_name: str
    output_directory: str
    kind: str = "openapi"
    authors: str = ""
    description: str = ""
    package_properties: KeyValuePairs = ()
    spec_source_path: str = ""

    def validate(self) -> None:
        """Check required fields, the spec file name and property element names."""
        _require_non_empty(
            self,
            ("package_id", "version", "spec_file_name", "kind", "output_directory"),
        )
        if "/" in self.spec_file_name or "\\" in self.spec_file_name:
            raise ConfigurationError(
                "spec_file_name",
                f"expected a file name, got a path: {self.spec_file_name!r}",
            )
        if self.spec_file_name.strip() in (".", ".."):
            raise ConfigurationError(
                "spec_file_name",
                f"expected a file name, got {self.spec_file_name!r}",
            )
        _require_element_names("package_properties", self.package_properties)


@dataclass(frozen=True)
class ClientPackageOptions:
    """Options for an NSwag client package depending on a contract package."""

    client_package_id: str
    contract_package_id: str
    contract_version: str
    version: str
    output_directory: str
    kind: str = "openapi"
    authors: str = ""
    description: str = ""
    nswag_client_class_name: str = ""
    nswag_output_path: str = ""
    package_properties: KeyValuePairs = ()
    nswag_options: KeyValuePairs = ()

    def validate(self) -> None:
        """Check required fields and option element names."""
        _require_non_empty(
            self,
            (
                "client_package_id",
                "contract_package_id",
                "contract_version",
                "version",
                "kind",
                "output_directory",
            ),
        )
        _require_element_names("package_properties", self.package_properties)
        _require_element_names("nswag_options", self.nswag_options)


@dataclass(frozen=True)
class GenerationResult:
    """Rendered package documents and where they were written."""

    nuspec_content: str
    targets_content: str
    nuspec_path: str
    targets_path: str


def _require_non_empty(options: Any, names: tuple[str, ...]) -> None:
    for name in names:
        value = getattr(options, name)
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError(name, "value is required")


def _require_element_names(field: str, pairs: KeyValuePairs) -> None:
    for key, _ in pairs:
        if not _ELEMENT_NAME_RE.match(key):
            raise ConfigurationError(field, f"{key!r} is not a valid XML element name")
