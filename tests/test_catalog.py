import json
from pathlib import Path

import pytest

from zackstrap.catalog import TemplateCatalog, default_catalog
from zackstrap.config import ProjectKind
from zackstrap.errors import SerializationError


def test_catalog_lists_every_kind_and_its_templates():
    catalog = default_catalog()

    assert set(catalog.kinds()) == set(ProjectKind)
    assert catalog.templates_for(ProjectKind.basic) == ("default", "google", "airbnb")
    assert catalog.templates_for(ProjectKind.ruby) == ("default", "rails", "sinatra", "gem")
    assert catalog.templates_for(ProjectKind.go) == ("default", "web", "cli")


def test_unknown_template_resolves_to_default():
    catalog = default_catalog()

    assert catalog.resolve_template(ProjectKind.python, "nonexistent") == "default"
    assert catalog.resolve_template(ProjectKind.python, None) == "default"
    assert catalog.resolve_template(ProjectKind.python, "django") == "django"
    assert catalog.content_for(ProjectKind.python, "nonexistent", "pyproject") == catalog.content_for(
        ProjectKind.python, "default", "pyproject"
    )


def test_template_without_variant_uses_default_body():
    catalog = default_catalog()

    assert catalog.content_for(ProjectKind.python, "django", "flake8") == catalog.content_for(
        ProjectKind.python, "default", "flake8"
    )


def test_prettierrc_is_encoded_json():
    catalog = default_catalog()

    payload = json.loads(catalog.content_for(ProjectKind.basic, "default", "prettierrc"))

    assert payload == {
        "semi": True,
        "singleQuote": True,
        "tabWidth": 2,
        "trailingComma": "es5",
        "printWidth": 80,
    }


def test_ruby_package_json_carries_prettier_plugin():
    catalog = default_catalog()

    payload = json.loads(catalog.content_for(ProjectKind.ruby, "rails", "package-json"))

    assert payload["devDependencies"]["prettier"] == "^3.0.0"
    assert payload["devDependencies"]["prettier-plugin-ruby"] == "github:prettier/plugin-ruby"


def test_framework_variants_render_their_specifics():
    catalog = default_catalog()

    django = catalog.content_for(ProjectKind.python, "django", "pyproject")
    flask = catalog.content_for(ProjectKind.python, "flask", "pyproject")
    express = catalog.content_for(ProjectKind.node, "express", "eslintrc")
    react = catalog.content_for(ProjectKind.node, "react", "eslintrc")

    assert 'django_settings_module = "myproject.settings"' in django
    assert "line-length = 88" in django
    assert '[tool.flask]\napp_name = "app"' in flask
    assert "'no-console': 'off'," in express
    assert "plugin:react/recommended" in react
    assert "react/prop-types" in react


def test_rendered_text_ends_with_newline():
    catalog = default_catalog()

    for kind in catalog.kinds():
        for template in catalog.templates_for(kind):
            for artifact in catalog.artifacts_for(kind):
                assert catalog.content_for(kind, template, artifact.artifact_id).endswith("\n")


def test_task_runner_is_declared_for_every_kind_but_basic():
    catalog = default_catalog()

    assert catalog.task_runner_for(ProjectKind.basic) is None
    for kind in set(ProjectKind) - {ProjectKind.basic}:
        assert catalog.task_runner_for(kind).path == "justfile"


def test_unencodable_data_raises_serialization_error(tmp_path: Path):
    catalog_file = tmp_path / "catalog.yml"
    catalog_file.write_text(
        "\n".join(
            [
                "basic:",
                "  templates: [default]",
                "  artifacts:",
                "    - id: prettierrc",
                "      path: .prettierrc",
                "      format: json",
                "      data:",
                "        default:",
                "          released: 2024-01-01",
                "",
            ]
        ),
        encoding="utf-8",
    )
    catalog = TemplateCatalog(catalog_file=catalog_file)

    with pytest.raises(SerializationError) as excinfo:
        catalog.content_for(ProjectKind.basic, "default", "prettierrc")

    assert excinfo.value.artifact_id == "prettierrc"
