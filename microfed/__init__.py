"""microfed -- Webpack Module Federation micro-frontend scaffolding.

Derives a mutually consistent set of artifacts (federation config, build
config, manifests, framework sources, type stubs, workspace files) for a
host or remote application from a handful of choices.

Quick usage::

    from microfed import ProjectGenerator, RemoteReference, build_configuration

    config = build_configuration(role="host", name="shell", port=3000)
    remotes = [RemoteReference(name="products", url="http://localhost:3001/remoteEntry.js")]
    project_path = await ProjectGenerator(config, remotes).generate("/tmp/output")
"""

from microfed.config import (
    ProjectConfiguration,
    RemoteReference,
    Settings,
    build_configuration,
)
from microfed.errors import ScaffoldError
from microfed.scaffolder.generator import ArtifactSet, ProjectGenerator

__version__ = "0.1.0"

__all__ = [
    "ArtifactSet",
    "ProjectConfiguration",
    "ProjectGenerator",
    "RemoteReference",
    "ScaffoldError",
    "Settings",
    "build_configuration",
]
