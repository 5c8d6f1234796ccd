#!/usr/bin/env python3
import argparse
import sys
from typing import List

from relgen_lib import ArtifactType, ConfigurationError, GeneratorError, generate, select_artifact_type
from relgen_lib.selection import LogFn


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="relgen",
        description=(
            "Generate a file (BOM, OBR descriptor, doc bundle list, ...) from a Jinja2 template "
            "and the Galasa release metadata, selecting artifacts for one artifact type."
        ),
    )
    parser.add_argument("-t", "--template", help="Template file (required)")
    parser.add_argument("-r", "--releaseMetadata", dest="release_metadata", help="Release metadata file (required)")
    parser.add_argument(
        "-o",
        "--output",
        help="Output file. If omitted the rendered result is written to standard output.",
    )

    # Plain booleans rather than an exclusive group: the count is checked by select_artifact_type
    types = parser.add_argument_group("artifact type (exactly one)")
    types.add_argument("--obr", action="store_true", help="require maven artifacts for OBR")
    types.add_argument("--bom", action="store_true", help="require maven artifacts for BOM")
    types.add_argument("--mvp", action="store_true", help="require maven artifacts for mvp zip")
    types.add_argument("--isolated", action="store_true", help="require maven artifacts for isolated zip")
    types.add_argument("--javadoc", action="store_true", help="require maven artifacts for javadoc")
    types.add_argument("--managerdoc", action="store_true", help="require maven artifacts for manager docs")
    return parser


def _progress_to_stderr(message: str) -> None:
    print(message, file=sys.stderr)


def _check_paths(args: argparse.Namespace, log: LogFn) -> None:
    if not args.release_metadata:
        raise ConfigurationError("Release metadata file has not been provided")
    if not args.template:
        raise ConfigurationError("Template file has not been provided")
    if not args.output:
        log("Output file has not been provided")


def main(argv: List[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # Without --output the document itself goes to stdout, so progress moves to stderr
    log: LogFn = print if args.output else _progress_to_stderr
    log("Galasa Build - Template")

    try:
        _check_paths(args, log)
        artifact_type = select_artifact_type({t.value: getattr(args, t.value) for t in ArtifactType}, log=log)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return e.exit_code

    try:
        generate(args.release_metadata, args.template, args.output, artifact_type, log=log)
    except GeneratorError as e:
        print(f"Generation failed: {e}", file=sys.stderr)
        return e.exit_code

    if args.output:
        print(f"Generation completed. Output at: {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
