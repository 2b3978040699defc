"""Template rendering for package descriptor documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Protocol

from jinja2 import (
    BaseLoader,
    Environment,
    PackageLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
    select_autoescape,
)


class TemplateError(RuntimeError):
    """Base class for template lookup and rendering failures."""

    def __init__(self, template_name: str, message: str) -> None:
        super().__init__(f"Template {template_name!r}: {message}")
        self.template_name = template_name


class TemplateNotFoundError(TemplateError):
    """Raised when no template exists under a logical name."""


class TemplateRenderError(TemplateError):
    """Raised when a found template fails to parse or render."""


class TemplateRenderer(Protocol):
    """Renders a logical template name with a mapping of placeholder values."""

    def render(self, template_name: str, model: Mapping[str, Any]) -> str:
        """Return the rendered document text."""
        ...


class JinjaTemplateRenderer:
    """Render templates shipped in the ``concordio.templates`` package data.

    Undefined placeholders raise instead of rendering blank, and XML
    escaping applies to ``.nuspec`` and ``.targets`` templates.
    """

    def __init__(self, loader: Optional[BaseLoader] = None) -> None:
        self._environment = Environment(
            loader=loader or PackageLoader("concordio", "templates"),
            autoescape=select_autoescape(["nuspec", "targets", "xml"]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_name: str, model: Mapping[str, Any]) -> str:
        """Render ``template_name`` with ``model``.

        Args:
            template_name (str): Logical name such as ``"openapi/contract.nuspec"``.
            model (Mapping[str, Any]): Placeholder values.

        Returns:
            str: Rendered text.
        """
        try:
            template = self._environment.get_template(template_name)
        except TemplateNotFound as exc:
            raise TemplateNotFoundError(template_name, f"not found ({exc})") from exc
        except TemplateSyntaxError as exc:
            raise TemplateRenderError(
                template_name, f"syntax error at line {exc.lineno}: {exc.message}"
            ) from exc

        try:
            return template.render(dict(model))
        except UndefinedError as exc:
            raise TemplateRenderError(template_name, f"undefined placeholder: {exc}") from exc
        except TemplateSyntaxError as exc:
            raise TemplateRenderError(
                template_name, f"syntax error in {exc.name} at line {exc.lineno}: {exc.message}"
            ) from exc
        except TemplateNotFound as exc:
            raise TemplateNotFoundError(template_name, f"missing base template ({exc})") from exc
