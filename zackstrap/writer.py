from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import FileExists, WriteFileError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WritePolicy:
    """How to treat a target file that already exists.

    ``force`` overwrites unconditionally and takes precedence over
    ``fail_on_exists``. Without either flag an existing file is left alone.
    """

    force: bool = False
    fail_on_exists: bool = False


FORCE = WritePolicy(force=True)


class WriteOutcome(str, Enum):
    created = "created"
    overwritten = "overwritten"
    skipped = "skipped"
    appended = "appended"


def _write(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as error:
        raise WriteFileError(path, error) from error


def write_file(path: Path, content: str, policy: WritePolicy) -> WriteOutcome:
    if path.exists():
        if policy.force:
            _write(path, content)
            logger.debug("overwrote %s", path)
            return WriteOutcome.overwritten
        if policy.fail_on_exists:
            raise FileExists(path)
        logger.debug("skipped existing %s", path)
        return WriteOutcome.skipped

    _write(path, content)
    logger.debug("created %s", path)
    return WriteOutcome.created


def append_file(path: Path, content: str) -> WriteOutcome:
    """Append ``content`` to ``path``, creating it when missing.

    Existing bytes are kept as is, whatever their encoding; repeated calls
    append the fragment again.
    """
    if not path.exists():
        _write(path, content)
        logger.debug("created %s", path)
        return WriteOutcome.created

    try:
        existing = path.read_bytes()
        separator = b"\n" if existing and not existing.endswith(b"\n") else b""
        path.write_bytes(existing + separator + content.encode("utf-8"))
    except OSError as error:
        raise WriteFileError(path, error) from error

    logger.debug("appended to %s", path)
    return WriteOutcome.appended
