"""Command line interface for contract packaging and breaking-change checks."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Optional

from .config import ConfigLoadError, ToolConfig, load_tool_config
from .filesystem import LocalFileSystem, WriteError
from .generator import ContractPackageGenerator, RenderedPackage
from .key_values import KeyValueParseError, parse_key_value_pairs
from .nuget import NuGetService
from .oasdiff import OasDiffRunner
from .package_types import ClientPackageOptions, ConfigurationError, ContractPackageOptions
from .process import ExternalToolError
from .renderer import JinjaTemplateRenderer, TemplateError

_TRUE_VALUES = frozenset({"true", "yes", "on", "1"})
_FALSE_VALUES = frozenset({"false", "no", "off", "0"})


class CLIError(RuntimeError):
    """Raised when CLI execution fails."""


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser."""
    parser = argparse.ArgumentParser(
        prog="concordio",
        description="Package OpenAPI/AsyncAPI contracts as NuGet packages",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", type=Path, help="Path to a concordio YAML config file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate contract and client packages")
    generate.add_argument("--spec", required=True, type=Path, help="Path to the spec file")
    generate.add_argument("--package-id", required=True, help="Contract package id")
    generate.add_argument("--version", required=True, help="Package version")
    generate.add_argument("--output", required=True, help="Output directory for package sources")
    generate.add_argument("--kind", help="Spec kind: openapi (default) or asyncapi")
    generate.add_argument("--authors", help="Package authors")
    generate.add_argument("--description", help="Package description")
    generate.add_argument(
        "--client",
        type=_parse_bool,
        default=None,
        help="Whether to generate the client package (true/false)",
    )
    generate.add_argument("--client-package-id", help="Client package id (default: <id>.Client)")
    generate.add_argument("--client-class-name", help="Generated client class name")
    generate.add_argument("--client-output-path", help="Generated client source file path")
    generate.add_argument(
        "--property",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra nuspec metadata element; repeatable",
    )
    generate.add_argument(
        "--nswag-option",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="NSwag MSBuild property for the client package; repeatable",
    )

    breaking = subparsers.add_parser("breaking", help="Detect breaking changes with oasdiff")
    breaking.add_argument("--base", required=True, help="Base (previous) spec file")
    breaking.add_argument("--revision", required=True, help="Revised spec file")
    breaking.add_argument(
        "--oasdiff-arg",
        action="append",
        default=[],
        metavar="ARG",
        help="Extra oasdiff argument, e.g. --oasdiff-arg=--format=yaml; repeatable",
    )

    fetch = subparsers.add_parser("fetch", help="Download a published contract package")
    fetch.add_argument("--package-id", required=True, help="Package id to download")
    fetch.add_argument("--package-version", help="Version to download (default: latest)")
    fetch.add_argument("--prerelease", action="store_true", help="Allow prerelease versions")
    fetch.add_argument("--output", required=True, help="Download directory")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Run CLI and return process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_tool_config(args.config)
        if args.command == "generate":
            return _run_generate(args, config)
        if args.command == "breaking":
            return _run_breaking(args, config)
        return _run_fetch(args, config)
    except (
        CLIError,
        ConfigLoadError,
        ConfigurationError,
        ExternalToolError,
        KeyValueParseError,
        TemplateError,
        WriteError,
    ) as exc:
        parser.error(str(exc))
        return 2


def _run_generate(args: argparse.Namespace, config: ToolConfig) -> int:
    spec_path: Path = args.spec
    if not spec_path.is_file():
        raise CLIError(f"Spec file not found: {spec_path}")

    kind = (args.kind or config.kind or "openapi").lower()
    authors = args.authors or config.authors or args.package_id
    description = args.description or config.description
    properties = tuple(
        parse_key_value_pairs(config.properties) + parse_key_value_pairs(args.property)
    )
    nswag_options = tuple(
        parse_key_value_pairs(config.nswag_options) + parse_key_value_pairs(args.nswag_option)
    )

    contract_options = ContractPackageOptions(
        package_id=args.package_id,
        version=args.version,
        spec_file_name=spec_path.name,
        output_directory=args.output,
        kind=kind,
        authors=authors,
        description=description or f"{kind} contract {spec_path.name}",
        package_properties=properties,
        spec_source_path=str(spec_path),
    )
    generator = ContractPackageGenerator(JinjaTemplateRenderer(), LocalFileSystem())
    # Nothing is written until both packages have rendered.
    contract = generator.render_contract_package(contract_options)

    client: Optional[RenderedPackage] = None
    if _first_set(args.client, config.client, kind == "openapi"):
        client_options = ClientPackageOptions(
            client_package_id=args.client_package_id or f"{args.package_id}.Client",
            contract_package_id=args.package_id,
            contract_version=args.version,
            version=args.version,
            output_directory=args.output,
            kind=kind,
            authors=authors,
            description=description or f"Generated client for {args.package_id}",
            nswag_client_class_name=args.client_class_name or "",
            nswag_output_path=args.client_output_path or "",
            package_properties=properties,
            nswag_options=nswag_options,
        )
        client = generator.render_client_package(client_options)

    written = generator.write_package(contract)
    print(f"Contract package: {written.nuspec_path}")
    if client is not None:
        written = generator.write_package(client)
        print(f"Client package: {written.nuspec_path}")
    return 0


def _run_breaking(args: argparse.Namespace, config: ToolConfig) -> int:
    runner = OasDiffRunner(config.oasdiff_executable, timeout=config.process_timeout)
    result = runner.breaking(args.base, args.revision, args.oasdiff_arg)
    if result.output:
        print(result.output, end="")
    if result.error:
        print(result.error, end="", file=sys.stderr)
    if result.breaking:
        print("Breaking changes detected", file=sys.stderr)
        return 1
    return result.exit_code


def _run_fetch(args: argparse.Namespace, config: ToolConfig) -> int:
    service = NuGetService(config.nuget_executable, timeout=config.process_timeout)
    result = service.download_package(
        args.output,
        args.package_id,
        version=args.package_version,
        prerelease=args.prerelease,
    )
    if result.stdout:
        print(result.stdout, end="")
    if result.stderr:
        print(result.stderr, end="", file=sys.stderr)
    return result.exit_code


def _parse_bool(text: str) -> bool:
    value = text.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {text!r}")


def _first_set(*values: Optional[bool]) -> bool:
    for value in values:
        if value is not None:
            return value
    return False


if __name__ == "__main__":
    raise SystemExit(main())
