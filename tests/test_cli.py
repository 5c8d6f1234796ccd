"""End-to-end tests for the relgen command line."""

from __future__ import annotations

from pathlib import Path

import pytest

import relgen


def _run(*args: str) -> int:
    return relgen.main(list(args))


class TestMain:
    def test_success(self, release_file: Path, coords_template: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        output = tmp_path / "bom.txt"

        code = _run("-r", str(release_file), "-t", str(coords_template), "-o", str(output), "--bom")

        assert code == 0
        assert output.read_text(encoding="utf-8").startswith("0.30.0: dev.galasa:dev.galasa.framework:0.30.0")
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "Galasa Build - Template"
        assert out[1] == "BOM artifact type requested"
        assert "    Added external artifact org.apache.felix:org.apache.felix.scr:2.1.14" in out
        assert out[-1] == f"Generation completed. Output at: {output}"

    def test_long_option_names(self, release_file: Path, coords_template: Path, tmp_path: Path) -> None:
        output = tmp_path / "obr.txt"

        code = _run(
            "--releaseMetadata", str(release_file),
            "--template", str(coords_template),
            "--output", str(output),
            "--obr",
        )

        assert code == 0
        assert output.exists()

    def test_missing_release_metadata(self, coords_template: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = _run("-t", str(coords_template), "-o", str(tmp_path / "o"), "--bom")

        assert code == 2
        assert "Release metadata file has not been provided" in capsys.readouterr().err
        assert not (tmp_path / "o").exists()

    def test_missing_template(self, release_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = _run("-r", str(release_file), "-o", str(tmp_path / "o"), "--bom")

        assert code == 2
        assert "Template file has not been provided" in capsys.readouterr().err

    def test_no_artifact_type(self, release_file: Path, coords_template: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        output = tmp_path / "o"

        code = _run("-r", str(release_file), "-t", str(coords_template), "-o", str(output))

        assert code == 2
        assert "Artifact type has not been provided" in capsys.readouterr().err
        assert not output.exists()

    def test_two_artifact_types(self, release_file: Path, coords_template: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        output = tmp_path / "o"

        code = _run("-r", str(release_file), "-t", str(coords_template), "-o", str(output), "--obr", "--bom")

        assert code == 2
        assert "Too many artifact types have been requested" in capsys.readouterr().err
        assert not output.exists()

    def test_type_checked_before_metadata_is_read(self, coords_template: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = _run("-r", str(tmp_path / "missing.yaml"), "-t", str(coords_template), "-o", str(tmp_path / "o"))

        assert code == 2
        assert "Artifact type has not been provided" in capsys.readouterr().err

    def test_unreadable_metadata(self, coords_template: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = _run("-r", str(tmp_path / "missing.yaml"), "-t", str(coords_template), "-o", str(tmp_path / "o"), "--mvp")

        assert code == 1
        err = capsys.readouterr().err
        assert err.startswith("Generation failed: Unable to read release metadata file")

    def test_undefined_template_field(
        self, release_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        template = tmp_path / "bad.j2"
        template.write_text("{{ Release }} {{ Milestone }}\n", encoding="utf-8")
        output = tmp_path / "out.txt"

        code = _run("-r", str(release_file), "-t", str(template), "-o", str(output), "--isolated")

        assert code == 1
        assert "Milestone" in capsys.readouterr().err
        assert not output.exists()

    @pytest.mark.parametrize("body", ["{{ 1 // 0 }}", '{% include "header.j2" %}'])
    def test_template_runtime_error_reported(
        self, body: str, release_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        template = tmp_path / "bad.j2"
        template.write_text(body, encoding="utf-8")
        output = tmp_path / "out.txt"

        code = _run("-r", str(release_file), "-t", str(template), "-o", str(output), "--obr")

        assert code == 1
        err = capsys.readouterr().err.splitlines()
        assert len(err) == 1
        assert err[0].startswith("Generation failed: ")
        assert not output.exists()

    def test_crlf_template(self, release_file: Path, tmp_path: Path) -> None:
        template = tmp_path / "bom.j2"
        template.write_bytes(b"<v>{{ release }}</v>\r\n")
        output = tmp_path / "bom.xml"

        assert _run("-r", str(release_file), "-t", str(template), "-o", str(output), "--bom") == 0
        assert output.read_bytes() == b"<v>0.30.0</v>\r\n"

    def test_missing_output_renders_to_stdout(
        self, release_file: Path, coords_template: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = _run("-r", str(release_file), "-t", str(coords_template), "--managerdoc")

        assert code == 0
        captured = capsys.readouterr()
        assert captured.out == (
            "0.30.0: dev.galasa:dev.galasa.framework.api:0.30.0"
            " dev.galasa:dev.galasa.zos.manager:0.30.0"
            " dev.galasa.managers:dev.galasa.http.manager:0.10\n"
        )
        assert "Output file has not been provided" in captured.err
        assert "Manager Docs artifact type requested" in captured.err

    def test_unknown_option(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as excinfo:
            _run("--sbom")

        assert excinfo.value.code == 2
