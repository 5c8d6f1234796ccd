"""Exceptions raised by the release template generator.

Each error carries the process exit status the CLI reports for it.
"""


class GeneratorError(Exception):
    """Base class for every failure that aborts a generation run."""

    exit_code = 1


class ConfigurationError(GeneratorError):
    """Missing required argument or an invalid artifact type selection."""

    exit_code = 2


class MetadataError(GeneratorError):
    """Release metadata could not be read or decoded."""


class TemplateRenderError(GeneratorError):
    """Template could not be read, parsed or rendered."""


class OutputError(GeneratorError):
    """Rendered output could not be written."""
