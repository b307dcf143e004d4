from __future__ import annotations

from enum import Enum
from pathlib import Path


class ProjectKind(str, Enum):
    basic = "basic"
    ruby = "ruby"
    python = "python"
    node = "node"
    go = "go"
    rust = "rust"


KIND_LABELS = {
    ProjectKind.basic: "basic",
    ProjectKind.ruby: "Ruby",
    ProjectKind.python: "Python",
    ProjectKind.node: "Node.js",
    ProjectKind.go: "Go",
    ProjectKind.rust: "Rust",
}

DEFAULT_TEMPLATE = "default"

# Detection order matters: the first kind whose rule matches wins.
DETECTION_RULES = (
    (
        ProjectKind.ruby,
        ("Gemfile", "Gemfile.lock", "Rakefile", "config.ru", "app", "lib", "main.rb"),
        ("*.rb", "*.gemspec"),
    ),
    (
        ProjectKind.python,
        (
            "requirements.txt",
            "pyproject.toml",
            "setup.py",
            "setup.cfg",
            "Pipfile",
            "poetry.lock",
            "__pycache__",
            "main.py",
            "app.py",
        ),
        ("*.py",),
    ),
    (
        ProjectKind.node,
        ("package.json", "package-lock.json", "yarn.lock", "pnpm-lock.yaml", "node_modules", "index.js", "app.js"),
        ("*.js", "*.mjs", "*.cjs", "*.ts"),
    ),
    (
        ProjectKind.go,
        ("go.mod", "go.sum", "main.go", "cmd", "pkg"),
        ("*.go",),
    ),
    (
        ProjectKind.rust,
        ("Cargo.toml", "Cargo.lock", "src", "examples", "tests", "main.rs"),
        ("*.rs",),
    ),
)

HOOK_NAMES = ("pre-commit", "pre-push", "commit-msg")


def templates_root() -> Path:
    return Path(__file__).resolve().parent / "templates"


def catalog_path() -> Path:
    return Path(__file__).resolve().parent / "catalog.yml"
