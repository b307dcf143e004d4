"""Bootstrap editor, formatter, linter and task-runner configuration for a project."""

__version__ = "0.1.0"
