"""microfed scaffolder -- turns a federation descriptor into project files.

Assembly is pure and returns :class:`ArtifactSet` records; writing them is
the job of :class:`ProjectGenerator`.

Quick usage::

    from microfed.scaffolder import assemble, assemble_workspace

    app = assemble(config, remotes)
    print(app.root, app.paths)

    sets = assemble_workspace(monorepo_config, remotes)
"""

from microfed.scaffolder.generator import (
    ArtifactSet,
    ProjectGenerator,
    assemble,
    assemble_workspace,
)
from microfed.scaffolder.templates import TemplateRenderer
from microfed.scaffolder.workspace import WorkspaceDescriptor, compose_workspace

__all__ = [
    "ArtifactSet",
    "ProjectGenerator",
    "TemplateRenderer",
    "WorkspaceDescriptor",
    "assemble",
    "assemble_workspace",
    "compose_workspace",
]
