"""Pawprint — static export with content-addressed assets.

Renders a site's page templates to plain HTML and rewrites every image,
video, svg, stylesheet and script reference to a hashed output path.
Only the resources the pages actually use are copied.

Quick start::

    import pawprint

    pawprint.export_static("my-project/", "base")

Embedding with your own collaborators::

    from pawprint import StaticExportCommand
    from pawprint.export import ExportPipeline

"""

__version__ = "0.1.0"
__all__ = [
    "StaticConfig",
    "StaticExportCommand",
    "__version__",
    "export_static",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import pawprint`` fast.
    """
    if name == "StaticConfig":
        from pawprint.config import StaticConfig

        return StaticConfig

    if name == "StaticExportCommand":
        from pawprint.command import StaticExportCommand

        return StaticExportCommand

    if name == "export_static":
        from pawprint.app import export_static

        return export_static

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
