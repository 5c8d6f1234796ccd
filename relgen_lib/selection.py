"""
Artifact type selection and the per-group inclusion rules.

Every (group, artifact type) pair maps to a rule in SELECTION_RULES: either the
name of a bundle flag (the bundle is included iff that flag is true) or a
constant True/False.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Tuple, Union

from .errors import ConfigurationError
from .metadata import GROUP_NAMES, Bundle, ReleaseMetadata

GROUP_ORDER = GROUP_NAMES

Rule = Union[str, bool]
LogFn = Callable[[str], None]


class ArtifactType(Enum):
    OBR = "obr"
    BOM = "bom"
    MVP = "mvp"
    ISOLATED = "isolated"
    JAVADOC = "javadoc"
    MANAGERDOC = "managerdoc"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    ArtifactType.OBR: "OBR",
    ArtifactType.BOM: "BOM",
    ArtifactType.MVP: "MVP",
    ArtifactType.ISOLATED: "Isolated",
    ArtifactType.JAVADOC: "Javadoc",
    ArtifactType.MANAGERDOC: "Manager Docs",
}

_A = ArtifactType
SELECTION_RULES: Dict[Tuple[str, ArtifactType], Rule] = {
    ("framework", _A.OBR): True,
    ("framework", _A.BOM): "bom",
    ("framework", _A.MVP): "mvp",
    ("framework", _A.ISOLATED): True,
    ("framework", _A.JAVADOC): "javadoc",
    ("framework", _A.MANAGERDOC): "managerdoc",

    ("api", _A.OBR): True,
    ("api", _A.BOM): "bom",
    ("api", _A.MVP): "mvp",
    ("api", _A.ISOLATED): True,
    ("api", _A.JAVADOC): "javadoc",
    ("api", _A.MANAGERDOC): "managerdoc",

    ("managers", _A.OBR): True,
    ("managers", _A.BOM): True,
    ("managers", _A.MVP): "mvp",
    ("managers", _A.ISOLATED): True,
    ("managers", _A.JAVADOC): True,
    ("managers", _A.MANAGERDOC): True,

    ("external", _A.OBR): "obr",
    ("external", _A.BOM): "bom",
    ("external", _A.MVP): "mvp",
    ("external", _A.ISOLATED): "isolated",
    ("external", _A.JAVADOC): False,
    ("external", _A.MANAGERDOC): False,
}
del _A


@dataclass(frozen=True)
class ResolvedArtifact:
    group_id: str
    artifact_id: str
    version: str
    type: str

    # Attribute names seen by templates
    @property
    def groupId(self) -> str:
        return self.group_id

    @property
    def artifactId(self) -> str:
        return self.artifact_id

    @property
    def GroupId(self) -> str:
        return self.group_id

    @property
    def ArtifactId(self) -> str:
        return self.artifact_id

    @property
    def Version(self) -> str:
        return self.version

    @property
    def Type(self) -> str:
        return self.type

    @property
    def coordinates(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    @classmethod
    def from_bundle(cls, bundle: Bundle) -> "ResolvedArtifact":
        return cls(
            group_id=bundle.group_id,
            artifact_id=bundle.artifact,
            version=bundle.version,
            type=bundle.type,
        )


def select_artifact_type(requested: Mapping[str, bool], log: Optional[LogFn] = print) -> ArtifactType:
    """
    Return the single artifact type whose flag is set in ``requested``.

    ``requested`` maps flag names (``"obr"``, ``"bom"``, ...) to booleans; missing
    names count as not requested. Raises ConfigurationError when none or more than
    one is set.
    """
    chosen: List[ArtifactType] = []
    for artifact_type in ArtifactType:
        if requested.get(artifact_type.value):
            chosen.append(artifact_type)
            if log is not None:
                log(f"{artifact_type.label} artifact type requested")

    if not chosen:
        raise ConfigurationError("Artifact type has not been provided")
    if len(chosen) > 1:
        names = ", ".join(f"--{t.value}" for t in chosen)
        raise ConfigurationError(f"Too many artifact types have been requested: {names}")
    return chosen[0]


def is_selected(group: str, bundle: Bundle, artifact_type: ArtifactType) -> bool:
    rule = SELECTION_RULES[(group, artifact_type)]
    if isinstance(rule, bool):
        return rule
    return bool(getattr(bundle, rule))


def resolve_artifacts(
    metadata: ReleaseMetadata,
    artifact_type: ArtifactType,
    log: Optional[LogFn] = print,
) -> List[ResolvedArtifact]:
    """Select the artifacts for ``artifact_type``, group by group in GROUP_ORDER."""
    artifacts: List[ResolvedArtifact] = []
    for group in GROUP_ORDER:
        for bundle in metadata.bundles(group):
            if not is_selected(group, bundle, artifact_type):
                continue
            artifact = ResolvedArtifact.from_bundle(bundle)
            artifacts.append(artifact)
            if log is not None:
                log(f"    Added {group} artifact {artifact.coordinates}")
    return artifacts
