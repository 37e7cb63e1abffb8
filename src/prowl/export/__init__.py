"""Static generation — render a site snapshot to deployable files.

Public API::

    from prowl.export import SiteGenerator

    result = await SiteGenerator(site, renderer).generate()
"""

from prowl.export.assets import copy_static
from prowl.export.static import (
    Artifact,
    ArtifactWriter,
    Diagnostic,
    GenerationResult,
    SiteGenerator,
)

__all__ = [
    "Artifact",
    "ArtifactWriter",
    "Diagnostic",
    "GenerationResult",
    "SiteGenerator",
    "copy_static",
]
