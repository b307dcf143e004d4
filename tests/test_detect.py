from pathlib import Path

from zackstrap.config import ProjectKind
from zackstrap.detect import detect_project_kind


def test_empty_directory_is_basic(tmp_path: Path):
    assert detect_project_kind(tmp_path) == ProjectKind.basic


def test_go_mod_detects_go(tmp_path: Path):
    (tmp_path / "go.mod").write_text("module example\n", encoding="utf-8")

    assert detect_project_kind(tmp_path) == ProjectKind.go


def test_python_source_file_detects_python(tmp_path: Path):
    (tmp_path / "script.py").write_text("print('hi')\n", encoding="utf-8")

    assert detect_project_kind(tmp_path) == ProjectKind.python


def test_ruby_wins_over_python(tmp_path: Path):
    (tmp_path / "Gemfile").write_text("source 'https://rubygems.org'\n", encoding="utf-8")
    (tmp_path / "main.py").write_text("", encoding="utf-8")

    assert detect_project_kind(tmp_path) == ProjectKind.ruby


def test_gemspec_pattern_detects_ruby(tmp_path: Path):
    (tmp_path / "widget.gemspec").write_text("", encoding="utf-8")

    assert detect_project_kind(tmp_path) == ProjectKind.ruby


def test_package_json_detects_node(tmp_path: Path):
    (tmp_path / "package.json").write_text("{}\n", encoding="utf-8")

    assert detect_project_kind(tmp_path) == ProjectKind.node


def test_typescript_file_detects_node(tmp_path: Path):
    (tmp_path / "index.ts").write_text("", encoding="utf-8")

    assert detect_project_kind(tmp_path) == ProjectKind.node


def test_cargo_toml_detects_rust(tmp_path: Path):
    (tmp_path / "Cargo.toml").write_text("[package]\n", encoding="utf-8")

    assert detect_project_kind(tmp_path) == ProjectKind.rust


def test_nested_files_are_ignored(tmp_path: Path):
    nested = tmp_path / "docs"
    nested.mkdir()
    (nested / "conf.py").write_text("", encoding="utf-8")

    assert detect_project_kind(tmp_path) == ProjectKind.basic


def test_missing_directory_is_basic(tmp_path: Path):
    assert detect_project_kind(tmp_path / "missing") == ProjectKind.basic
