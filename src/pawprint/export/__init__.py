"""Export layer — content-addressed static output generation.

Renders pages to HTML, rewrites resource references to hashed output
names, and copies exactly the resources the pages use.
"""

from pawprint.export.naming import ContentAddressedNamer
from pawprint.export.pipeline import ExportedFile, ExportPipeline, ExportResult
from pawprint.export.registry import AssetRecord, AssetRegistry
from pawprint.export.settings import ExportSettings, KindPrefixes, TemplateContext

__all__ = [
    "AssetRecord",
    "AssetRegistry",
    "ContentAddressedNamer",
    "ExportPipeline",
    "ExportResult",
    "ExportSettings",
    "ExportedFile",
    "KindPrefixes",
    "TemplateContext",
]
