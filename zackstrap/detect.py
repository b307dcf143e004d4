from __future__ import annotations

import logging
from fnmatch import fnmatchcase
from pathlib import Path

from .config import DETECTION_RULES, ProjectKind

logger = logging.getLogger(__name__)


def _entry_names(directory: Path) -> list[str]:
    try:
        return [entry.name for entry in directory.iterdir()]
    except OSError:
        return []


def _matches(directory: Path, markers: tuple[str, ...], patterns: tuple[str, ...]) -> bool:
    names = _entry_names(directory)
    if any(marker in names for marker in markers):
        return True
    return any(fnmatchcase(name, pattern) for name in names for pattern in patterns)


def detect_project_kind(directory: Path) -> ProjectKind:
    """Classify ``directory`` by its top-level entries.

    Rules are checked in a fixed order (Ruby, Python, Node.js, Go, Rust) and the
    first match wins. Directories matching nothing, including unreadable ones,
    are ``basic``.
    """
    for kind, markers, patterns in DETECTION_RULES:
        if _matches(directory, markers, patterns):
            logger.debug("detected %s project in %s", kind.value, directory)
            return kind

    logger.debug("no project signature in %s, falling back to basic", directory)
    return ProjectKind.basic
