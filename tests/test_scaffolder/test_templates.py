"""Tests for the Jinja2 TemplateRenderer and its custom filters."""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import UndefinedError

from microfed.scaffolder.files import GeneratedFile, render_json, render_yaml
from microfed.scaffolder.templates import TemplateRenderer, env_name, pascal_case

pytestmark = pytest.mark.unit


class TestFilters:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("products", "Products"),
            ("cart_app", "CartApp"),
            ("my-remote", "MyRemote"),
            ("myRemoteApp", "MyRemoteApp"),
        ],
    )
    def test_pascal_case(self, value, expected):
        assert pascal_case(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("products", "PRODUCTS"),
            ("cartApp", "CART_APP"),
            ("cart_app", "CART_APP"),
            ("my-remote", "MY_REMOTE"),
        ],
    )
    def test_env_name(self, value, expected):
        assert env_name(value) == expected

    def test_js_json_filter(self, tmp_path: Path):
        (tmp_path / "list.js.j2").write_text(
            "[{{ items | map('js_json') | join(', ') }}]", encoding="utf-8"
        )
        rendered = TemplateRenderer(tmp_path).render("list.js.j2", {"items": [".ts", ".js"]})
        assert rendered == '[".ts", ".js"]'


class TestTemplateRenderer:
    def test_render_file_returns_generated_file(self, renderer):
        generated = renderer.render_file("app/index.html.j2", "public/index.html", {"app_name": "shell"})
        assert isinstance(generated, GeneratedFile)
        assert generated.path == "public/index.html"
        assert "<title>shell</title>" in generated.content
        assert '<div id="root"></div>' in generated.content

    def test_missing_variable_raises(self, renderer):
        with pytest.raises(UndefinedError):
            renderer.render("app/index.html.j2", {})

    def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "hello.txt.j2").write_text("Hello {{ name | env_name }}!\n", encoding="utf-8")
        renderer = TemplateRenderer(tmp_path)
        assert renderer.render("hello.txt.j2", {"name": "cart_app"}) == "Hello CART_APP!\n"

    def test_entry_template_is_only_the_dynamic_import(self, renderer):
        content = renderer.render("app/entry.js.j2", {})
        code = [line for line in content.splitlines() if line and not line.startswith("//")]
        assert code == ["import('./bootstrap');"]


class TestFormatters:
    def test_render_json_indent_and_newline(self):
        assert render_json({"b": 1, "a": [1, 2]}) == '{\n  "b": 1,\n  "a": [\n    1,\n    2\n  ]\n}\n'

    def test_render_yaml_keeps_order(self):
        assert render_yaml({"packages": ["packages/*"]}) == "packages:\n- packages/*\n"
