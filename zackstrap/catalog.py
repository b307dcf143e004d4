from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import yaml
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .config import DEFAULT_TEMPLATE, KIND_LABELS, ProjectKind, catalog_path, templates_root
from .errors import SerializationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArtifactSpec:
    artifact_id: str
    path: str
    mode: str = "write"
    format: str = "text"


def _artifact_from_entry(entry: dict) -> ArtifactSpec:
    return ArtifactSpec(
        artifact_id=str(entry["id"]),
        path=str(entry["path"]),
        mode=str(entry.get("mode", "write")),
        format=str(entry.get("format", "text")),
    )


def _with_newline(rendered: str) -> str:
    return rendered + ("\n" if not rendered.endswith("\n") else "")


class TemplateCatalog:
    """Static mapping from (kind, template, artifact) to file content.

    The artifact list comes from ``catalog.yml``; text bodies are Jinja2
    templates under ``templates/`` and structured bodies are encoded from the
    data variants declared in the catalog.
    """

    def __init__(self, catalog_file: Path | None = None, templates_dir: Path | None = None) -> None:
        source = catalog_file or catalog_path()
        raw = yaml.safe_load(source.read_text(encoding="utf-8")) or {}

        self._templates: dict[ProjectKind, tuple[str, ...]] = {}
        self._artifacts: dict[ProjectKind, tuple[ArtifactSpec, ...]] = {}
        self._task_runners: dict[ProjectKind, ArtifactSpec] = {}
        self._data: dict[tuple[ProjectKind, str], dict] = {}

        for name, entry in raw.items():
            kind = ProjectKind(name)
            self._templates[kind] = tuple(str(item) for item in entry.get("templates", [DEFAULT_TEMPLATE]))
            artifacts = []
            for item in entry.get("artifacts", []):
                artifact = _artifact_from_entry(item)
                artifacts.append(artifact)
                if artifact.format == "json":
                    self._data[(kind, artifact.artifact_id)] = item.get("data") or {}
            self._artifacts[kind] = tuple(artifacts)
            if entry.get("task_runner"):
                self._task_runners[kind] = _artifact_from_entry(entry["task_runner"])

        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir or templates_root())),
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def kinds(self) -> tuple[ProjectKind, ...]:
        return tuple(self._artifacts)

    def templates_for(self, kind: ProjectKind) -> tuple[str, ...]:
        return self._templates.get(kind, (DEFAULT_TEMPLATE,))

    def resolve_template(self, kind: ProjectKind, name: str | None) -> str:
        if name and name in self.templates_for(kind):
            return name
        if name and name != DEFAULT_TEMPLATE:
            logger.debug("unknown %s template %r, using %s", kind.value, name, DEFAULT_TEMPLATE)
        return DEFAULT_TEMPLATE

    def artifacts_for(self, kind: ProjectKind) -> tuple[ArtifactSpec, ...]:
        return self._artifacts.get(kind, ())

    def task_runner_for(self, kind: ProjectKind) -> ArtifactSpec | None:
        return self._task_runners.get(kind)

    def _find(self, kind: ProjectKind, artifact_id: str) -> ArtifactSpec:
        for artifact in self.artifacts_for(kind):
            if artifact.artifact_id == artifact_id:
                return artifact
        runner = self.task_runner_for(kind)
        if runner is not None and runner.artifact_id == artifact_id:
            return runner
        raise KeyError(f"No {kind.value} artifact named {artifact_id!r}")

    def content_for(self, kind: ProjectKind, template: str | None, artifact_id: str) -> str:
        artifact = self._find(kind, artifact_id)
        resolved = self.resolve_template(kind, template)
        if artifact.format == "json":
            return self._encode(kind, artifact, resolved)

        candidates = [
            f"{kind.value}/{artifact_id}/{resolved}.j2",
            f"{kind.value}/{artifact_id}/{DEFAULT_TEMPLATE}.j2",
        ]
        rendered = self._env.select_template(candidates).render(
            kind=kind.value,
            label=KIND_LABELS[kind],
            template=resolved,
        )
        return _with_newline(rendered)

    def _encode(self, kind: ProjectKind, artifact: ArtifactSpec, template: str) -> str:
        variants = self._data.get((kind, artifact.artifact_id), {})
        payload = variants.get(template, variants.get(DEFAULT_TEMPLATE, {}))
        try:
            return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
        except (TypeError, ValueError) as error:
            raise SerializationError(artifact.artifact_id, error) from error

    def render(self, name: str, **context) -> str:
        return _with_newline(self._env.get_template(name).render(**context))


@lru_cache(maxsize=None)
def default_catalog() -> TemplateCatalog:
    return TemplateCatalog()
