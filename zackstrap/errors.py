from __future__ import annotations

from pathlib import Path


class ZackstrapError(RuntimeError):
    """Base class for every error that aborts a zackstrap run."""

    code = "error"


class DirectoryNotFound(ZackstrapError):
    code = "directory_not_found"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Directory not found: {path}")


class NotADirectory(ZackstrapError):
    code = "not_a_directory"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Path is not a directory: {path}")


class FileExists(ZackstrapError):
    code = "file_exists"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File already exists and force flag not set: {path}")


class WriteFileError(ZackstrapError):
    code = "write_failed"

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write file {path}: {cause}")


class SerializationError(ZackstrapError):
    code = "serialization_error"

    def __init__(self, artifact_id: str, cause: Exception) -> None:
        self.artifact_id = artifact_id
        self.cause = cause
        super().__init__(f"Failed to serialize configuration for {artifact_id}: {cause}")


class GitNotInitialized(ZackstrapError):
    code = "git_not_initialized"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Git repository not initialized (missing .git/hooks): {path}")


class FileAlreadyExists(ZackstrapError):
    code = "file_already_exists"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Hook already exists and force flag not set: {path}")
