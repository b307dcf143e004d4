from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .catalog import TemplateCatalog, default_catalog
from .config import DEFAULT_TEMPLATE, ProjectKind
from .detect import detect_project_kind
from .errors import DirectoryNotFound, NotADirectory
from .writer import FORCE, WriteOutcome, WritePolicy, append_file, write_file

logger = logging.getLogger(__name__)

STAGE_BASE = "base"
STAGE_KIND = "kind"
STAGE_OVERRIDE = "override"


@dataclass(frozen=True)
class PlannedArtifact:
    kind: ProjectKind
    artifact_id: str
    path: str
    template: str
    stage: str
    mode: str = "write"


@dataclass(frozen=True)
class ArtifactResult:
    path: str
    outcome: WriteOutcome


@dataclass(frozen=True)
class GenerationReport:
    kind: ProjectKind
    template: str
    target_dir: Path
    results: tuple[ArtifactResult, ...]

    def paths_with(self, outcome: WriteOutcome) -> tuple[str, ...]:
        return tuple(result.path for result in self.results if result.outcome == outcome)


def validate_target(target_dir: Path) -> Path:
    root = target_dir.resolve()
    if not root.exists():
        raise DirectoryNotFound(root)
    if not root.is_dir():
        raise NotADirectory(root)
    return root


def plan(
    kind: ProjectKind,
    template: str = DEFAULT_TEMPLATE,
    catalog: TemplateCatalog | None = None,
) -> tuple[PlannedArtifact, ...]:
    """Return the ordered write steps for ``kind`` and ``template``.

    The basic artifact set always comes first, then the kind's own artifacts,
    then the kind's task-runner file, which replaces the generic one written in
    the first stage.
    """
    catalog = catalog or default_catalog()
    steps: list[PlannedArtifact] = []

    base_template = catalog.resolve_template(ProjectKind.basic, template)
    for artifact in catalog.artifacts_for(ProjectKind.basic):
        steps.append(
            PlannedArtifact(
                kind=ProjectKind.basic,
                artifact_id=artifact.artifact_id,
                path=artifact.path,
                template=base_template,
                stage=STAGE_BASE,
                mode=artifact.mode,
            )
        )

    if kind == ProjectKind.basic:
        return tuple(steps)

    kind_template = catalog.resolve_template(kind, template)
    for artifact in catalog.artifacts_for(kind):
        steps.append(
            PlannedArtifact(
                kind=kind,
                artifact_id=artifact.artifact_id,
                path=artifact.path,
                template=kind_template,
                stage=STAGE_KIND,
                mode=artifact.mode,
            )
        )

    runner = catalog.task_runner_for(kind)
    if runner is not None:
        steps.append(
            PlannedArtifact(
                kind=kind,
                artifact_id=runner.artifact_id,
                path=runner.path,
                template=kind_template,
                stage=STAGE_OVERRIDE,
            )
        )

    return tuple(steps)


def dry_run(
    kind: ProjectKind,
    template: str = DEFAULT_TEMPLATE,
    catalog: TemplateCatalog | None = None,
) -> tuple[PlannedArtifact, ...]:
    steps = plan(kind, template, catalog)
    for step in steps:
        logger.debug("would write %s (%s, template %s)", step.path, step.stage, step.template)
    return steps


def generate(
    target_dir: Path,
    kind: ProjectKind | None = None,
    template: str = DEFAULT_TEMPLATE,
    policy: WritePolicy = WritePolicy(),
    catalog: TemplateCatalog | None = None,
) -> GenerationReport:
    """Write the configuration files for ``kind`` into ``target_dir``.

    When ``kind`` is ``None`` it is detected from the directory contents. The
    first failing write aborts the run; files written before it stay on disk.
    """
    catalog = catalog or default_catalog()
    root = validate_target(target_dir)
    if kind is None:
        kind = detect_project_kind(root)

    steps = plan(kind, template, catalog)
    results: list[ArtifactResult] = []
    for step in steps:
        content = catalog.content_for(step.kind, step.template, step.artifact_id)
        destination = root / step.path
        if step.mode == "append":
            outcome = append_file(destination, content)
        elif step.stage == STAGE_OVERRIDE:
            outcome = write_file(destination, content, FORCE)
        else:
            outcome = write_file(destination, content, policy)
        results.append(ArtifactResult(path=step.path, outcome=outcome))

    logger.debug("generated %d artifacts for %s in %s", len(results), kind.value, root)
    return GenerationReport(
        kind=kind,
        template=catalog.resolve_template(kind, template),
        target_dir=root,
        results=tuple(results),
    )
