"""Main scaffolding orchestrator.

Assembly and writing are separate steps:

* :func:`assemble` and :func:`assemble_workspace` are pure.  They turn a
  validated ``ProjectConfiguration`` into one or more :class:`ArtifactSet`
  records (directories plus file contents) without touching the disk.
* :class:`ProjectGenerator` writes artifact sets below an explicit output
  directory.  The process working directory is never changed.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from microfed.config import ProjectConfiguration, RemoteReference, Settings
from microfed.enums import ArtifactKind, Role
from microfed.errors import (
    FileSystemFailure,
    InvalidProjectName,
    TargetNotEmpty,
    UnsupportedMonorepoTool,
)
from microfed.federation.config_file import CONFIG_FILE_NAME, to_config_file
from microfed.federation.descriptor import FederationDescriptor, synthesize

from .files import GeneratedFile, json_file
from .manifest import (
    application_package_json,
    application_tsconfig,
    package_manager_command,
)
from .sources import REQUIRED_DIRECTORIES, build_sources, template_context
from .templates import TemplateRenderer
from .types_gen import (
    TYPES_DIR,
    build_shared_types_package,
    build_type_declarations,
)
from .workspace import (
    PACKAGES_DIR,
    SHARED_TYPES_MEMBER,
    WorkspaceDescriptor,
    compose_workspace,
    root_package_json,
    workspace_dependency_spec,
    workspace_tool_files,
)
from microfed.utils import console, is_directory_empty


# ---------------------------------------------------------------------------
# Artifact set model
# ---------------------------------------------------------------------------


class ArtifactSet(BaseModel):
    """Everything to write below one root directory.

    ``directories`` and file paths are relative to ``root``; ``root`` itself
    is relative to the output directory.
    """

    model_config = ConfigDict(frozen=True)

    root: str
    kind: ArtifactKind
    directories: tuple[str, ...] = ()
    files: tuple[GeneratedFile, ...] = ()
    descriptor: Optional[FederationDescriptor] = None
    workspace: Optional[WorkspaceDescriptor] = None

    @property
    def paths(self) -> list[str]:
        return [generated.path for generated in self.files]

    def file(self, path: str) -> GeneratedFile:
        """Return the generated file at *path*.

        Raises:
            KeyError: If the set holds no such file.
        """
        for generated in self.files:
            if generated.path == path:
                return generated
        raise KeyError(path)


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


def assemble(
    config: ProjectConfiguration,
    remotes: Sequence[RemoteReference] = (),
    exposes: Mapping[str, str] | None = None,
    *,
    base: str = "",
    shared_types_spec: str | None = None,
    renderer: TemplateRenderer | None = None,
) -> ArtifactSet:
    """Assemble the artifact set of one application.

    Args:
        config: Validated application configuration.
        remotes: Remote references (host only), in import order.
        exposes: Extra exposed modules (remote only).
        base: Parent path of the application root, e.g. ``"shop/packages"``.
        shared_types_spec: Version spec of the workspace shared-types
            dependency; ``None`` outside a TypeScript monorepo.
        renderer: Template renderer to reuse across applications.

    Raises:
        InvalidProjectName: The raw name normalises to an empty identifier.
        ScaffoldError: Any error raised by federation synthesis.
    """
    if not config.normalized_name:
        raise InvalidProjectName(config.raw_name)

    renderer = renderer or TemplateRenderer()
    descriptor = synthesize(config, remotes, exposes)
    context = template_context(config, descriptor, remotes)

    files: list[GeneratedFile] = [
        json_file(CONFIG_FILE_NAME, to_config_file(descriptor, config, remotes).to_json_dict()),
        renderer.render_file("app/webpack.config.js.j2", "webpack.config.js", context),
        json_file(
            "package.json",
            application_package_json(config, descriptor.shared_policy, shared_types_spec),
        ),
    ]
    if config.typescript:
        files.append(json_file("tsconfig.json", application_tsconfig(config)))
    files.extend(build_sources(renderer, config, context))
    files.extend(build_type_declarations(renderer, config, descriptor, context))
    files.append(renderer.render_file("app/gitignore.j2", ".gitignore", {"workspace": False}))
    if config.role is Role.HOST:
        files.append(renderer.render_file("app/env.example.j2", ".env.example", context))

    directories = list(REQUIRED_DIRECTORIES)
    if config.typescript and config.role is Role.HOST:
        directories.append(TYPES_DIR)

    # README last: it lists every other path of the set.
    readme_template = "app/README.host.md.j2" if config.is_host else "app/README.remote.md.j2"
    files.append(
        renderer.render_file(
            readme_template,
            "README.md",
            {
                **context,
                "install_command": package_manager_command(config.package_manager, "install"),
                "start_command": f"{package_manager_command(config.package_manager, 'run')} start",
                "tree": _tree(directories, [*(f.path for f in files), "README.md"]),
            },
        )
    )

    return ArtifactSet(
        root=f"{base}/{config.raw_name}" if base else config.raw_name,
        kind=ArtifactKind.APPLICATION,
        directories=tuple(directories),
        files=tuple(files),
        descriptor=descriptor,
    )


def assemble_workspace(
    config: ProjectConfiguration,
    remotes: Sequence[RemoteReference] = (),
    companions: Sequence[ProjectConfiguration] = (),
    exposes: Mapping[str, str] | None = None,
) -> list[ArtifactSet]:
    """Assemble a monorepo named after *config* around its applications.

    The returned list is in write order: the workspace root set, then
    *config*'s application, then each companion application, then the
    ``shared-types`` package when TypeScript is enabled.

    Raises:
        UnsupportedMonorepoTool: *config* is not a monorepo configuration.
        InvalidProjectName: Two applications share a name, or an application
            collides with the ``shared-types`` package.
    """
    if not config.is_monorepo or config.monorepo_tool is None:
        raise UnsupportedMonorepoTool(config.monorepo_tool)

    applications = [config, *companions]
    members: list[str] = []
    for app in applications:
        if app.raw_name in members:
            raise InvalidProjectName(app.raw_name, "name is used by another workspace package")
        if config.typescript and app.raw_name == SHARED_TYPES_MEMBER:
            raise InvalidProjectName(app.raw_name, "name is reserved for the shared types package")
        members.append(app.raw_name)

    renderer = TemplateRenderer()
    manager = config.package_manager
    workspace = compose_workspace(config.monorepo_tool, members, config.typescript)
    dependency_spec = workspace_dependency_spec(manager)
    workspace_name = config.raw_name
    packages_root = f"{workspace_name}/{PACKAGES_DIR}"

    root_files = [
        json_file("package.json", root_package_json(workspace_name, workspace, manager)),
        *workspace_tool_files(workspace),
        renderer.render_file(
            "workspace/README.md.j2",
            "README.md",
            {
                "workspace_name": workspace_name,
                "tool": workspace.tool.value,
                "members": list(workspace.member_paths),
                "install_command": package_manager_command(manager, "install"),
                "run_command": package_manager_command(manager, "run"),
            },
        ),
        renderer.render_file("app/gitignore.j2", ".gitignore", {"workspace": True}),
    ]
    sets = [
        ArtifactSet(
            root=workspace_name,
            kind=ArtifactKind.WORKSPACE,
            directories=(PACKAGES_DIR,),
            files=tuple(root_files),
            workspace=workspace,
        )
    ]

    shared_types_spec = dependency_spec if config.typescript else None
    sets.append(
        assemble(
            config,
            remotes,
            exposes,
            base=packages_root,
            shared_types_spec=shared_types_spec,
            renderer=renderer,
        )
    )
    for companion in companions:
        sets.append(
            assemble(
                companion,
                base=packages_root,
                shared_types_spec=shared_types_spec,
                renderer=renderer,
            )
        )

    if config.typescript:
        sets.append(
            ArtifactSet(
                root=f"{packages_root}/{SHARED_TYPES_MEMBER}",
                kind=ArtifactKind.SHARED_TYPES,
                directories=("src",),
                files=tuple(
                    build_shared_types_package(
                        renderer, workspace_name, config.framework, manager, dependency_spec
                    )
                ),
            )
        )
    return sets


def _tree(directories: Sequence[str], paths: Sequence[str]) -> list[str]:
    entries = {f"{directory}/" for directory in directories}
    entries.update(paths)
    return sorted(entries)


# ---------------------------------------------------------------------------
# Writer
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Assembles and writes one micro-frontend project.

    Handles both a standalone application and a monorepo workspace holding
    the application, its companions and (TypeScript) the shared-types
    package.
    """

    def __init__(
        self,
        config: ProjectConfiguration,
        remotes: Sequence[RemoteReference] = (),
        *,
        exposes: Mapping[str, str] | None = None,
        companions: Sequence[ProjectConfiguration] = (),
        settings: Settings | None = None,
    ) -> None:
        self.config = config
        self.remotes = tuple(remotes)
        self.exposes = dict(exposes) if exposes else None
        self.companions = tuple(companions)
        self.settings = settings or Settings()

    # -- Public API --------------------------------------------------------

    def assemble(self) -> list[ArtifactSet]:
        """Return the artifact sets of the project in write order."""
        if self.config.is_monorepo:
            return assemble_workspace(
                self.config, self.remotes, self.companions, self.exposes
            )
        return [assemble(self.config, self.remotes, self.exposes)]

    async def generate(self, output_dir: str | Path | None = None) -> Path:
        """Assemble the project and write it below *output_dir*.

        Args:
            output_dir: Parent directory of the project.  Defaults to
                ``settings.output_dir``.

        Returns:
            Path to the generated project root.
        """
        target = Path(output_dir) if output_dir is not None else self.settings.output_dir
        sets = self.assemble()
        await self.write(sets, target)
        return target / sets[0].root

    async def write(self, sets: Sequence[ArtifactSet], output_dir: str | Path) -> None:
        """Write *sets* one after another below *output_dir*.

        Within a set every directory exists before any file is written.
        There is no rollback: files written before a failure stay on disk.

        Raises:
            TargetNotEmpty: A set root already holds files and overwrite is off.
            FileSystemFailure: Any ``OSError`` raised while writing.
        """
        output_dir = Path(output_dir)
        if not self.settings.overwrite:
            for root in _top_level_roots(sets):
                target = output_dir / root
                if not is_directory_empty(target):
                    raise TargetNotEmpty(target)

        for artifact_set in sets:
            await self._write_set(artifact_set, output_dir / artifact_set.root)

    # -- Internal helpers --------------------------------------------------

    async def _write_set(self, artifact_set: ArtifactSet, root: Path) -> None:
        directories = [root, *(root / d for d in artifact_set.directories)]
        directories.extend(
            (root / generated.path).parent for generated in artifact_set.files
        )
        await asyncio.gather(
            *(_make_dir(directory) for directory in dict.fromkeys(directories))
        )

        for generated in artifact_set.files:
            destination = root / generated.path
            await _write_file(destination, generated)
            if self.settings.verbose:
                console.print(f"  [dim]wrote[/dim] {destination}")


def _top_level_roots(sets: Sequence[ArtifactSet]) -> list[str]:
    roots: list[str] = []
    for artifact_set in sets:
        if not any(artifact_set.root.startswith(f"{root}/") for root in roots):
            roots.append(artifact_set.root)
    return roots


async def _make_dir(path: Path) -> None:
    try:
        await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
    except OSError as exc:
        raise FileSystemFailure(path, exc.strerror or str(exc)) from exc


async def _write_file(path: Path, generated: GeneratedFile) -> None:
    try:
        await asyncio.to_thread(path.write_text, generated.content, encoding="utf-8")
    except OSError as exc:
        raise FileSystemFailure(path, exc.strerror or str(exc)) from exc
