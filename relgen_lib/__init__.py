"""
relgen_lib: generate release manifests (BOMs, OBR descriptors, doc bundles) from the
Galasa release metadata file and a Jinja2 template.

Public API:
- load_release_metadata(path: str) -> ReleaseMetadata
- select_artifact_type(requested: Mapping[str, bool]) -> ArtifactType
- resolve_artifacts(metadata: ReleaseMetadata, artifact_type: ArtifactType) -> list[ResolvedArtifact]
- render_template(template_text: str, model: RenderModel) -> str
- generate(release_metadata: str, template: str, output: str | None, artifact_type: ArtifactType) -> str

The generator supports:
- Four artifact groups (framework, api, managers, external), emitted in that order.
- One artifact type per run (obr, bom, mvp, isolated, javadoc, managerdoc); each group
  has its own inclusion rule per type, see selection.SELECTION_RULES.
- Bundles without a group default to dev.galasa.
- Templates see `release` and `artifacts` (each with groupId, artifactId, version, type),
  also available as `Release`/`Artifacts` and `GroupId`/`ArtifactId`/`Version`/`Type`.
"""
from .errors import ConfigurationError, GeneratorError, MetadataError, OutputError, TemplateRenderError
from .generator import RenderModel, generate, render_template, write_output
from .metadata import DEFAULT_GROUP, Bundle, ReleaseMetadata, load_release_metadata, loads_release_metadata
from .selection import (
    GROUP_ORDER,
    SELECTION_RULES,
    ArtifactType,
    ResolvedArtifact,
    is_selected,
    resolve_artifacts,
    select_artifact_type,
)

__all__ = [
    "ArtifactType",
    "Bundle",
    "ConfigurationError",
    "DEFAULT_GROUP",
    "GROUP_ORDER",
    "GeneratorError",
    "MetadataError",
    "OutputError",
    "ReleaseMetadata",
    "RenderModel",
    "ResolvedArtifact",
    "SELECTION_RULES",
    "TemplateRenderError",
    "generate",
    "is_selected",
    "load_release_metadata",
    "loads_release_metadata",
    "render_template",
    "resolve_artifacts",
    "select_artifact_type",
    "write_output",
]
