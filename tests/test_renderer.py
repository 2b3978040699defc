"""Tests for template lookup and rendering errors."""

from __future__ import annotations

from jinja2 import DictLoader
import pytest

from concordio.renderer import (
    JinjaTemplateRenderer,
    TemplateError,
    TemplateNotFoundError,
    TemplateRenderError,
)


def _renderer(templates: dict[str, str]) -> JinjaTemplateRenderer:
    return JinjaTemplateRenderer(loader=DictLoader(templates))


def test_renders_placeholders() -> None:
    """Model values fill the placeholders."""
    renderer = _renderer({"demo/doc.nuspec": "<id>{{ package_id }}</id>\n"})
    assert renderer.render("demo/doc.nuspec", {"package_id": "Acme.Api"}) == "<id>Acme.Api</id>\n"


def test_xml_documents_are_escaped() -> None:
    """Values are XML escaped in nuspec and targets templates."""
    renderer = _renderer({"demo/doc.nuspec": "<authors>{{ authors }}</authors>"})
    rendered = renderer.render("demo/doc.nuspec", {"authors": "Acme & <Partners>"})
    assert rendered == "<authors>Acme &amp; &lt;Partners&gt;</authors>"


def test_unknown_template_name() -> None:
    """A missing template is reported as a lookup failure."""
    renderer = _renderer({})
    with pytest.raises(TemplateNotFoundError) as excinfo:
        renderer.render("grpc/contract.nuspec", {})
    assert excinfo.value.template_name == "grpc/contract.nuspec"


def test_missing_placeholder_fails_loudly() -> None:
    """Placeholders absent from the model are not rendered blank."""
    renderer = _renderer({"demo/doc.targets": "<Project>{{ missing }}</Project>"})
    with pytest.raises(TemplateRenderError, match="missing"):
        renderer.render("demo/doc.targets", {})


def test_syntax_error_is_a_render_error() -> None:
    """A broken template is distinct from a missing one."""
    renderer = _renderer({"demo/doc.nuspec": "{% for x in %}"})
    with pytest.raises(TemplateRenderError) as excinfo:
        renderer.render("demo/doc.nuspec", {})
    assert not isinstance(excinfo.value, TemplateNotFoundError)
    assert isinstance(excinfo.value, TemplateError)


def test_packaged_asyncapi_family_has_no_client_templates() -> None:
    """NSwag clients only exist for OpenAPI contracts."""
    renderer = JinjaTemplateRenderer()
    with pytest.raises(TemplateNotFoundError):
        renderer.render("asyncapi/client.nuspec", {})
