"""Pawprint error hierarchy.

All pawprint-specific errors inherit from PawprintError for easy catching.
"""


class PawprintError(Exception):
    """Base error for all pawprint operations."""


class ConfigError(PawprintError):
    """Invalid or missing configuration."""


class ExportError(PawprintError):
    """Error during static export."""


class RenderError(ExportError):
    """A page template failed to render."""


class ExportIOError(ExportError):
    """Copying or writing an output file failed."""


class ResourceResolutionError(PawprintError):
    """A referenced entity id could not be found.

    Not fatal: the export pipeline skips the entity and carries on.
    """
