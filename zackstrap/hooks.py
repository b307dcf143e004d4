from __future__ import annotations

import logging
import stat
from pathlib import Path

from .catalog import TemplateCatalog, default_catalog
from .config import DEFAULT_TEMPLATE, HOOK_NAMES, KIND_LABELS, ProjectKind
from .errors import FileAlreadyExists, GitNotInitialized, WriteFileError

logger = logging.getLogger(__name__)


def _hook_template(kind: ProjectKind, hook: str) -> str:
    if hook == "commit-msg":
        return "hooks/commit-msg.j2"
    return f"hooks/{kind.value}/{hook}.j2"


def install_hooks(
    target_dir: Path,
    kind: ProjectKind,
    template: str = DEFAULT_TEMPLATE,
    force: bool = False,
    catalog: TemplateCatalog | None = None,
) -> tuple[Path, ...]:
    """Install the git hooks for ``kind`` into ``target_dir/.git/hooks``.

    Existing hooks are only replaced with ``force``; hooks written before a
    conflicting one stay in place.
    """
    catalog = catalog or default_catalog()
    hooks_dir = target_dir / ".git" / "hooks"
    if not hooks_dir.is_dir():
        raise GitNotInitialized(target_dir)

    resolved = catalog.resolve_template(kind, template)
    written: list[Path] = []
    for hook in HOOK_NAMES:
        path = hooks_dir / hook
        if path.exists() and not force:
            raise FileAlreadyExists(path)

        content = catalog.render(
            _hook_template(kind, hook),
            kind=kind.value,
            label=KIND_LABELS[kind],
            template=resolved,
            hook=hook,
        )
        try:
            path.write_text(content, encoding="utf-8")
            path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as error:
            raise WriteFileError(path, error) from error

        logger.debug("installed %s hook at %s", hook, path)
        written.append(path)

    return tuple(written)
