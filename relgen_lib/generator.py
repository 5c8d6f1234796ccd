import os
import sys
import tempfile
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from jinja2 import Environment, StrictUndefined, TemplateError, TemplateSyntaxError

from .errors import OutputError, TemplateRenderError
from .metadata import load_release_metadata
from .selection import ArtifactType, LogFn, ResolvedArtifact, resolve_artifacts

OUTPUT_MODE = 0o644


@dataclass
class RenderModel:
    release: str
    artifacts: List[ResolvedArtifact] = field(default_factory=list)

    def context(self) -> Dict[str, Any]:
        return {
            "release": self.release,
            "artifacts": self.artifacts,
            "Release": self.release,
            "Artifacts": self.artifacts,
        }


def _environment(newline_sequence: str = "\n") -> Environment:
    return Environment(
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
        newline_sequence=newline_sequence,
    )


def _load_template_text(template_path: str) -> str:
    try:
        with open(template_path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateRenderError(f"Unable to read template file {template_path}: {e}") from e


def render_template(template_text: str, model: RenderModel, name: str = "<template>") -> str:
    """
    Render ``template_text`` (Jinja2 syntax) against ``model``.

    Undefined variables or attributes are errors rather than empty strings, so a
    template that refers to a field the model does not have fails the run.
    CRLF templates render with CRLF line endings.
    """
    env = _environment("\r\n" if "\r\n" in template_text else "\n")
    try:
        template = env.from_string(template_text)
    except TemplateSyntaxError as e:
        raise TemplateRenderError(f"{name}:{e.lineno}: template syntax error: {e.message}") from e
    try:
        return template.render(**model.context())
    except TemplateError as e:
        raise TemplateRenderError(f"{name}: template rendering failed: {e}") from e
    except Exception as e:
        # errors raised by expressions in the template itself, e.g. {{ 1 // 0 }}
        raise TemplateRenderError(f"{name}: template rendering failed: {type(e).__name__}: {e}") from e


def write_output(path: str, data: str) -> None:
    """Write ``data`` to ``path`` via a temp file so a failure never leaves a partial file."""
    dir_path = os.path.dirname(os.path.abspath(path))
    tmp_name: Optional[str] = None
    try:
        os.makedirs(dir_path, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{os.path.basename(path)}.", suffix=".tmp", dir=dir_path)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, OUTPUT_MODE)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise OutputError(f"Unable to write output file {path}: {e}") from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)


def generate(
    release_metadata: str,
    template: str,
    output: Optional[str],
    artifact_type: ArtifactType,
    log: Optional[LogFn] = print,
) -> str:
    """
    Run one full generation and return the rendered text.

    - release_metadata: path to the release metadata YAML.
    - template: path to the Jinja2 template.
    - output: destination path; when None the result goes to standard output.
    - artifact_type: the single artifact type to select bundles for.

    Nothing is written unless every earlier step succeeded.
    """
    metadata = load_release_metadata(release_metadata)
    model = RenderModel(release=metadata.version, artifacts=resolve_artifacts(metadata, artifact_type, log=log))

    template_text = _load_template_text(template)
    rendered = render_template(template_text, model, name=template)

    if output:
        write_output(output, rendered)
    else:
        sys.stdout.write(rendered)
    return rendered
