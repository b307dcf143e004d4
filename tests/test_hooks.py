import os
from pathlib import Path

import pytest

from zackstrap.config import ProjectKind
from zackstrap.errors import FileAlreadyExists, GitNotInitialized
from zackstrap.hooks import install_hooks


def _init_git(root: Path) -> Path:
    hooks_dir = root / ".git" / "hooks"
    hooks_dir.mkdir(parents=True)
    return hooks_dir


def test_install_hooks_writes_executable_scripts(tmp_path: Path):
    hooks_dir = _init_git(tmp_path)

    written = install_hooks(tmp_path, ProjectKind.python, "django")

    assert [path.name for path in written] == ["pre-commit", "pre-push", "commit-msg"]
    for path in written:
        assert path.parent == hooks_dir
        assert path.read_text(encoding="utf-8").startswith("#!/usr/bin/env bash")
        assert os.access(path, os.X_OK)
    assert "python manage.py check" in (hooks_dir / "pre-commit").read_text(encoding="utf-8")


def test_commit_msg_hook_checks_conventional_format(tmp_path: Path):
    hooks_dir = _init_git(tmp_path)

    install_hooks(tmp_path, ProjectKind.basic)

    content = (hooks_dir / "commit-msg").read_text(encoding="utf-8")
    assert "feat|fix|docs" in content


def test_install_hooks_requires_git_repository(tmp_path: Path):
    with pytest.raises(GitNotInitialized):
        install_hooks(tmp_path, ProjectKind.rust)


def test_existing_hook_is_kept_without_force(tmp_path: Path):
    hooks_dir = _init_git(tmp_path)
    (hooks_dir / "pre-commit").write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")

    with pytest.raises(FileAlreadyExists):
        install_hooks(tmp_path, ProjectKind.node)

    assert (hooks_dir / "pre-commit").read_text(encoding="utf-8") == "#!/bin/sh\nexit 0\n"


def test_force_replaces_existing_hooks(tmp_path: Path):
    hooks_dir = _init_git(tmp_path)
    (hooks_dir / "pre-commit").write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")

    install_hooks(tmp_path, ProjectKind.go, force=True)

    assert "Go" in (hooks_dir / "pre-commit").read_text(encoding="utf-8")
