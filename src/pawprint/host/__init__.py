"""Default collaborators for the export pipeline.

Filesystem-backed implementations of the protocols in
:mod:`pawprint.host.protocols`.  The template renderer lives in
:mod:`pawprint.host.renderer` and is imported on demand.
"""

from pawprint.host.files import read_files, write_files
from pawprint.host.protocols import (
    EntityReferences,
    ImageRequest,
    RenderedPage,
    RenderOutput,
    SourceFile,
    UrlHooks,
)
from pawprint.host.sites import Entity, FileSystemSites, Site, match_query

__all__ = [
    "Entity",
    "EntityReferences",
    "FileSystemSites",
    "ImageRequest",
    "RenderOutput",
    "RenderedPage",
    "Site",
    "SourceFile",
    "UrlHooks",
    "match_query",
    "read_files",
    "write_files",
]
