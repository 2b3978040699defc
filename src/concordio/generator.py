"""Contract and client package descriptor generation."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Any

from .filesystem import FileSystem, WriteError
from .naming import NSWAG_OPTION_PREFIX, normalize_prefix, sanitize_class_name
from .package_types import (
    ClientPackageOptions,
    ConfigurationError,
    ContractPackageOptions,
    GenerationResult,
    KeyValuePairs,
)
from .renderer import TemplateRenderer

logger = logging.getLogger(__name__)

# MSBuild item name consumers use to discover embedded contracts.
CONTRACT_ITEM_NAME = "ConcordIOContract"
CONTENT_FILES_FOLDER = "contentFiles/any/any"
NSWAG_CLIENT_PACKAGE_ID = "NSwag.ApiDescription.Client"
NSWAG_CLIENT_PACKAGE_VERSION = "14.2.0"


@dataclass(frozen=True)
class RenderedPackage:
    """Rendered package documents and the spec copies still to be made.

    Produced by the ``render_*`` methods without touching the filesystem;
    ``ContractPackageGenerator.write_package`` materializes it.
    """

    output_directory: str
    nuspec_content: str
    targets_content: str
    nuspec_path: str
    targets_path: str
    spec_copies: tuple[tuple[str, str], ...] = ()

    def to_result(self) -> GenerationResult:
        """Return the rendered texts and document paths."""
        return GenerationResult(
            nuspec_content=self.nuspec_content,
            targets_content=self.targets_content,
            nuspec_path=self.nuspec_path,
            targets_path=self.targets_path,
        )


class ContractPackageGenerator:
    """Render and write NuGet package source trees for contracts and clients.

    Rendering is separate from writing: ``render_contract_package`` and
    ``render_client_package`` never touch the filesystem, so callers
    building several packages can render all of them before the first
    write. The ``generate_*`` methods do both for a single package.
    """

    def __init__(self, renderer: TemplateRenderer, file_system: FileSystem) -> None:
        self._renderer = renderer
        self._file_system = file_system

    def generate_contract_package(self, options: ContractPackageOptions) -> GenerationResult:
        """Generate a contract package embedding the spec file.

        Layout under ``options.output_directory``::

            <package_id>.nuspec
            <package_id>.targets
            <kind>/<spec_file_name>
            contentFiles/any/any/<spec_file_name>

        Args:
            options (ContractPackageOptions): Contract package options.

        Returns:
            GenerationResult: Rendered manifest and targets documents.
        """
        return self.write_package(self.render_contract_package(options))

    def generate_client_package(self, options: ClientPackageOptions) -> GenerationResult:
        """Generate an NSwag client package depending on a contract package.

        Args:
            options (ClientPackageOptions): Client package options.

        Returns:
            GenerationResult: Rendered manifest and targets documents.
        """
        return self.write_package(self.render_client_package(options))

    def render_contract_package(self, options: ContractPackageOptions) -> RenderedPackage:
        """Validate options and render the contract documents without writing."""
        options.validate()
        kind_folder = options.kind.lower()
        output_dir = Path(options.output_directory)
        source_path = options.spec_source_path or str(output_dir / options.spec_file_name)
        return self._render_package(
            package_id=options.package_id,
            kind=kind_folder,
            document="contract",
            output_directory=options.output_directory,
            spec_copies=tuple(
                (source_path, str(output_dir / folder / options.spec_file_name))
                for folder in (kind_folder, CONTENT_FILES_FOLDER)
            ),
            model={
                "package_id": options.package_id,
                "version": options.version,
                "authors": options.authors,
                "description": options.description,
                "spec_file_name": options.spec_file_name,
                "kind_folder": kind_folder,
                "targets_file_name": f"{options.package_id}.targets",
                "package_properties": list(options.package_properties),
                "contract_item_name": CONTRACT_ITEM_NAME,
            },
        )

    def render_client_package(self, options: ClientPackageOptions) -> RenderedPackage:
        """Validate options and render the client documents without writing."""
        options.validate()
        if options.client_package_id == options.contract_package_id:
            logger.warning(
                "Client package id %s equals its contract package id",
                options.client_package_id,
            )

        class_name = options.nswag_client_class_name.strip() or _class_name_for(
            options.client_package_id
        )
        output_path = options.nswag_output_path.strip() or f"{class_name}.cs"
        return self._render_package(
            package_id=options.client_package_id,
            kind=options.kind.lower(),
            document="client",
            output_directory=options.output_directory,
            spec_copies=(),
            model={
                "package_id": options.client_package_id,
                "version": options.version,
                "authors": options.authors,
                "description": options.description,
                "contract_package_id": options.contract_package_id,
                "contract_version": options.contract_version,
                "nswag_package_id": NSWAG_CLIENT_PACKAGE_ID,
                "nswag_package_version": NSWAG_CLIENT_PACKAGE_VERSION,
                "targets_file_name": f"{options.client_package_id}.targets",
                "package_properties": list(options.package_properties),
                "nswag_options": normalize_nswag_options(options.nswag_options),
                "class_name": class_name,
                "output_path": output_path,
                "target_name": f"ConcordIOAddOpenApiReference_{class_name}",
                "contract_item_name": CONTRACT_ITEM_NAME,
            },
        )

    def write_package(self, rendered: RenderedPackage) -> GenerationResult:
        """Create directories, copy the spec and write both documents, in that order."""
        self._file_system.create_directory(rendered.output_directory)
        for source, destination in rendered.spec_copies:
            self._file_system.create_directory(str(Path(destination).parent))
            self._file_system.copy_file(source, destination)
        for path, content in (
            (rendered.nuspec_path, rendered.nuspec_content),
            (rendered.targets_path, rendered.targets_content),
        ):
            self._file_system.write_text(path, content)
            logger.debug("Wrote %s", path)
        return rendered.to_result()

    def _render_package(
        self,
        *,
        package_id: str,
        kind: str,
        document: str,
        output_directory: str,
        spec_copies: tuple[tuple[str, str], ...],
        model: dict[str, Any],
    ) -> RenderedPackage:
        nuspec_content = self._renderer.render(f"{kind}/{document}.nuspec", model)
        targets_content = self._renderer.render(f"{kind}/{document}.targets", model)
        output_dir = Path(output_directory)
        return RenderedPackage(
            output_directory=output_directory,
            nuspec_content=nuspec_content,
            targets_content=targets_content,
            nuspec_path=str(output_dir / f"{package_id}.nuspec"),
            targets_path=str(output_dir / f"{package_id}.targets"),
            spec_copies=spec_copies,
        )


def normalize_nswag_options(options: KeyValuePairs) -> list[tuple[str, str]]:
    """Prefix every option key with ``NSwag`` unless it already has it."""
    return [(normalize_prefix(NSWAG_OPTION_PREFIX, key), value) for key, value in options]


def _class_name_for(package_id: str) -> str:
    try:
        return sanitize_class_name(package_id)
    except ValueError as exc:
        raise ConfigurationError("client_package_id", str(exc)) from exc


__all__ = [
    "CONTRACT_ITEM_NAME",
    "NSWAG_CLIENT_PACKAGE_ID",
    "NSWAG_CLIENT_PACKAGE_VERSION",
    "ContractPackageGenerator",
    "RenderedPackage",
    "WriteError",
    "normalize_nswag_options",
]
