from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

RELEASE_YAML = """\
release:
  version: 0.30.0

framework:
  bundles:
  - artifact: dev.galasa.framework
    version: 0.30.0
    obr: true
    bom: true
    mvp: true
    javadoc: true
  - artifact: dev.galasa.framework.api
    version: 0.30.0
    managerdoc: true

api:
  bundles:
  - artifact: dev.galasa.api.server
    version: 0.30.0
    bom: true
    javadoc: true

managers:
  bundles:
  - artifact: dev.galasa.zos.manager
    version: 0.30.0
    mvp: true
    bom: false
  - group: dev.galasa.managers
    artifact: dev.galasa.http.manager
    version: 0.10
    type: jar

external:
  bundles:
  - group: org.apache.felix
    artifact: org.apache.felix.scr
    version: 2.1.14
    obr: true
    bom: true
    isolated: true
    javadoc: true
    managerdoc: true
  - group: com.google.code.gson
    artifact: gson
    version: 2.8.5
    obr: false
    mvp: true
"""

COORDS_TEMPLATE = (
    "{{ release }}:{% for a in artifacts %} {{ a.groupId }}:{{ a.artifactId }}:{{ a.version }}{% endfor %}\n"
)


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def release_file(write_file: Callable[[str, str], Path]) -> Path:
    return write_file("release.yaml", RELEASE_YAML)


@pytest.fixture
def coords_template(write_file: Callable[[str, str], Path]) -> Path:
    return write_file("coords.j2", COORDS_TEMPLATE)
