from __future__ import annotations

from pathlib import Path

import pytest

from climaker.template import TemplateRenderer, TemplateRenderingError, escape_js_string, find_placeholders


@pytest.fixture()
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


def test_render_string_substitutes_fields(renderer: TemplateRenderer):
    template = "# {{title}}\n{{ description }}\n"
    rendered = renderer.render_string(template, {"title": "Demo", "description": "tool"})
    assert rendered == "# Demo\ntool\n"


def test_render_string_missing_policy_keep(renderer: TemplateRenderer):
    template = "Hello {{missing}}"
    assert renderer.render_string(template, {}) == template


def test_render_string_missing_policy_empty():
    renderer = TemplateRenderer(missing="empty")
    assert renderer.render_string("Hello {{missing}}", {}) == "Hello "


def test_render_string_missing_policy_error():
    renderer = TemplateRenderer(missing="error")
    with pytest.raises(TemplateRenderingError):
        renderer.render_string("{{missing}}", {})


def test_unknown_missing_policy_rejected():
    with pytest.raises(ValueError):
        TemplateRenderer(missing="ignore")


def test_single_braces_are_left_alone(renderer: TemplateRenderer):
    template = "import { input } from 'x'; const a = { b: 1 };"
    assert renderer.render_string(template, {"input": "nope"}) == template


def test_find_placeholders():
    assert find_placeholders("{{name}} and {{ title }} but not {name}") == ["name", "title"]
    assert find_placeholders("nothing here") == []


def test_render_file_writes_target(tmp_path: Path, renderer: TemplateRenderer):
    template_path = tmp_path / "README.md.template"
    template_path.write_text("Name: {{name}}", encoding="utf-8")
    output_path = tmp_path / "README.md"
    rendered = renderer.render_file(template_path, {"name": "Demo"}, target=output_path)
    assert rendered == "Name: Demo"
    assert output_path.read_text(encoding="utf-8") == "Name: Demo"


def test_escape_js_string():
    assert escape_js_string("Ada's") == "Ada\\'s"
    assert escape_js_string('say "hi"') == 'say \\"hi\\"'
    assert escape_js_string("a\\b") == "a\\\\b"
    assert escape_js_string("`${x}`") == "\\`${x}\\`"
    assert escape_js_string("one\ntwo\r") == "one\\ntwo\\r"
    assert escape_js_string("plain text") == "plain text"


def test_render_string_applies_escape(renderer: TemplateRenderer):
    escaping = TemplateRenderer(escape=escape_js_string)
    template = "const d = '{{description}}';"
    assert escaping.render_string(template, {"description": "it's"}) == "const d = 'it\\'s';"
    assert renderer.render_string(template, {"description": "it's"}) == "const d = 'it's';"
