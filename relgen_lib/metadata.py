from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

import yaml

from .errors import MetadataError

DEFAULT_GROUP = "dev.galasa"

FLAG_SPELLINGS = {
    "true": True,
    "yes": True,
    "on": True,
    "false": False,
    "no": False,
    "off": False,
}

GROUP_NAMES = ("framework", "api", "managers", "external")
STRING_FIELDS = ("group", "artifact", "version", "type")
FLAG_FIELDS = ("obr", "bom", "mvp", "isolated", "javadoc", "managerdoc")


_STRING_SCALAR_TAGS = (
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
)


class _StringScalarLoader(yaml.SafeLoader):
    """SafeLoader that leaves plain scalars as the text written in the document.

    Versions such as ``0.10`` or ``1.0`` and types such as ``on`` must survive
    decoding unchanged, so the bool, int, float and timestamp implicit resolvers
    are dropped. Nulls still resolve; flags are interpreted by _flag_value.
    """


_StringScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _STRING_SCALAR_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass(frozen=True)
class Bundle:
    group: str = ""
    artifact: str = ""
    version: str = ""
    type: str = ""
    obr: bool = False
    bom: bool = False
    mvp: bool = False
    isolated: bool = False
    javadoc: bool = False
    managerdoc: bool = False

    @property
    def group_id(self) -> str:
        return self.group or DEFAULT_GROUP


@dataclass(frozen=True)
class ReleaseMetadata:
    version: str = ""
    framework: Tuple[Bundle, ...] = field(default_factory=tuple)
    api: Tuple[Bundle, ...] = field(default_factory=tuple)
    managers: Tuple[Bundle, ...] = field(default_factory=tuple)
    external: Tuple[Bundle, ...] = field(default_factory=tuple)

    def bundles(self, group: str) -> Tuple[Bundle, ...]:
        if group not in GROUP_NAMES:
            raise KeyError(f"Unknown artifact group: {group!r}")
        return getattr(self, group)


def _string_value(value: Any, where: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise MetadataError(f"{where} must be a string, got {type(value).__name__}")
    if isinstance(value, bool):
        # only reachable through an explicit !!bool tag
        return "true" if value else "false"
    return str(value)


def _flag_value(value: Any, where: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in FLAG_SPELLINGS:
        return FLAG_SPELLINGS[value.lower()]
    raise MetadataError(f"{where} must be true or false, got {value!r}")


def _parse_bundle(raw: Any, where: str) -> Bundle:
    if not isinstance(raw, dict):
        raise MetadataError(f"{where} must be a mapping, got {type(raw).__name__}")
    values: Dict[str, Any] = {}
    for name in STRING_FIELDS:
        values[name] = _string_value(raw.get(name), f"{where}.{name}")
    for name in FLAG_FIELDS:
        values[name] = _flag_value(raw.get(name), f"{where}.{name}")
    return Bundle(**values)


def _parse_group(raw: Any, group: str) -> Tuple[Bundle, ...]:
    # Either `group: {bundles: [...]}` or a bare list of bundle records
    if raw is None:
        return ()
    if isinstance(raw, dict):
        items = raw.get("bundles")
        if items is None:
            return ()
        where = f"{group}.bundles"
    else:
        items = raw
        where = group
    if not isinstance(items, list):
        raise MetadataError(f"{where} must be a list of bundles, got {type(items).__name__}")
    return tuple(_parse_bundle(item, f"{where}[{i}]") for i, item in enumerate(items))


def parse_release_metadata(document: Any) -> ReleaseMetadata:
    """Build a ReleaseMetadata from an already decoded YAML document."""
    if document is None:
        document = {}
    if not isinstance(document, Mapping):
        raise MetadataError(
            f"Release metadata must be a mapping at the top level, got {type(document).__name__}"
        )

    release = document.get("release")
    if release is None:
        release = {}
    if not isinstance(release, Mapping):
        raise MetadataError(f"release must be a mapping, got {type(release).__name__}")
    version = _string_value(release.get("version"), "release.version")

    groups = {name: _parse_group(document.get(name), name) for name in GROUP_NAMES}
    return ReleaseMetadata(version=version, **groups)


def loads_release_metadata(text: str) -> ReleaseMetadata:
    try:
        document = yaml.load(text, Loader=_StringScalarLoader)
    except yaml.YAMLError as e:
        raise MetadataError(f"Release metadata is not valid YAML: {e}") from e
    return parse_release_metadata(document)


def load_release_metadata(path: str) -> ReleaseMetadata:
    """Read and decode the release metadata file at ``path``."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise MetadataError(f"Unable to read release metadata file {path}: {e}") from e
    try:
        return loads_release_metadata(text)
    except MetadataError as e:
        raise MetadataError(f"{path}: {e}") from e

