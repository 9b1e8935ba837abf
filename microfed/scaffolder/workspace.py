"""Workspace composition for monorepo mode.

Given a monorepo tool and the application members, derives the workspace's
member list, its task graph and the workspace-level files (root
``package.json`` plus ``pnpm-workspace.yaml``, ``nx.json`` or ``turbo.json``).
"""

from __future__ import annotations

from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field

from microfed.enums import MonorepoTool, PackageManager
from microfed.errors import UnsupportedMonorepoTool

from .files import GeneratedFile, json_file, yaml_file

PACKAGES_DIR = "packages"
MEMBER_GLOB = f"{PACKAGES_DIR}/*"
SHARED_TYPES_MEMBER = "shared-types"

_TOOL_DEV_DEPENDENCIES: dict[MonorepoTool, dict[str, str]] = {
    MonorepoTool.PNPM: {},
    MonorepoTool.NX: {"nx": "^18.0.0", "@nx/workspace": "^18.0.0"},
    MonorepoTool.TURBOREPO: {"turbo": "^1.12.0"},
}

_TOOL_SCRIPTS: dict[MonorepoTool, dict[str, str]] = {
    MonorepoTool.PNPM: {
        "dev": "pnpm --parallel --stream -r dev",
        "build": "pnpm -r build",
        "clean": "pnpm -r clean",
    },
    MonorepoTool.NX: {
        "dev": "nx run-many --target=dev --all",
        "build": "nx run-many --target=build --all",
        "clean": "nx run-many --target=clean --all && nx reset",
    },
    MonorepoTool.TURBOREPO: {
        "dev": "turbo run dev",
        "build": "turbo run build",
        "clean": "turbo run clean",
    },
}


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class TaskSpec(BaseModel):
    """Scheduling attributes of one workspace task.

    ``depends_on`` uses the ``^task`` convention shared by Nx and Turborepo:
    ``^build`` means "the build task of every upstream member".
    """

    model_config = ConfigDict(frozen=True)

    depends_on: tuple[str, ...] = ()
    cache: bool = True
    persistent: bool = False
    outputs: tuple[str, ...] = ()


class WorkspaceDescriptor(BaseModel):
    """Derived metadata of a monorepo workspace."""

    model_config = ConfigDict(frozen=True)

    tool: MonorepoTool
    member_paths: tuple[str, ...]
    member_globs: tuple[str, ...] = (MEMBER_GLOB,)
    task_graph: dict[str, TaskSpec] = Field(default_factory=dict)

    @property
    def includes_shared_types(self) -> bool:
        return f"{PACKAGES_DIR}/{SHARED_TYPES_MEMBER}" in self.member_paths


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def compose_workspace(
    tool: MonorepoTool | str,
    members: Sequence[str],
    typescript: bool = False,
) -> WorkspaceDescriptor:
    """Compose the workspace descriptor for *tool*.

    Args:
        tool: Monorepo tool.
        members: Application package directory names, in generation order.
        typescript: Whether the ``shared-types`` member is appended.

    Raises:
        UnsupportedMonorepoTool: If *tool* is unknown.
    """
    try:
        tool_value = MonorepoTool(tool)
    except ValueError:
        raise UnsupportedMonorepoTool(tool) from None

    paths: list[str] = []
    for member in members:
        path = f"{PACKAGES_DIR}/{member}"
        if path not in paths:
            paths.append(path)
    shared_path = f"{PACKAGES_DIR}/{SHARED_TYPES_MEMBER}"
    if typescript and shared_path not in paths:
        paths.append(shared_path)

    return WorkspaceDescriptor(
        tool=tool_value,
        member_paths=tuple(paths),
        task_graph=_task_graph(tool_value),
    )


def _task_graph(tool: MonorepoTool) -> dict[str, TaskSpec]:
    # pnpm has no task file; `pnpm -r` already runs builds in topological order.
    build = TaskSpec(depends_on=("^build",), cache=True, outputs=("dist",))
    dev_depends = ("^build",) if tool is MonorepoTool.NX else ()
    return {
        "build": build,
        "dev": TaskSpec(depends_on=dev_depends, cache=False, persistent=True),
        "clean": TaskSpec(cache=False),
    }


def workspace_dependency_spec(manager: PackageManager) -> str:
    """Version spec that links a sibling workspace package.

    Only pnpm gets the ``workspace:`` protocol.  npm has no such protocol and
    yarn classic rejects it; both link the matching workspace package for a
    plain ``*`` range, and so does yarn berry.
    """
    return "workspace:*" if manager is PackageManager.PNPM else "*"


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


def root_package_json(
    workspace_name: str,
    descriptor: WorkspaceDescriptor,
    manager: PackageManager,
) -> dict[str, Any]:
    """Build the workspace root ``package.json``."""
    install = {
        PackageManager.NPM: "npm install",
        PackageManager.YARN: "yarn install",
        PackageManager.PNPM: "pnpm install",
    }[manager]
    document: dict[str, Any] = {
        "name": workspace_name,
        "version": "1.0.0",
        "private": True,
        "description": "Micro-frontend monorepo",
        "scripts": {**_TOOL_SCRIPTS[descriptor.tool], "bootstrap": install},
    }
    if descriptor.tool is not MonorepoTool.PNPM:
        document["workspaces"] = list(descriptor.member_globs)
    document["devDependencies"] = dict(_TOOL_DEV_DEPENDENCIES[descriptor.tool])
    return document


def render_pnpm_workspace(descriptor: WorkspaceDescriptor) -> dict[str, Any]:
    return {"packages": list(descriptor.member_globs)}


def render_nx_json(descriptor: WorkspaceDescriptor) -> dict[str, Any]:
    target_defaults: dict[str, Any] = {}
    for name, task in descriptor.task_graph.items():
        target: dict[str, Any] = {}
        if task.depends_on:
            target["dependsOn"] = list(task.depends_on)
        if task.outputs:
            target["outputs"] = [f"{{projectRoot}}/{output}" for output in task.outputs]
        target["cache"] = task.cache
        target_defaults[name] = target
    return {
        "$schema": "./node_modules/nx/schemas/nx-schema.json",
        "extends": "nx/presets/npm.json",
        "targetDefaults": target_defaults,
    }


def render_turbo_json(descriptor: WorkspaceDescriptor) -> dict[str, Any]:
    pipeline: dict[str, Any] = {}
    for name, task in descriptor.task_graph.items():
        entry: dict[str, Any] = {}
        if task.depends_on:
            entry["dependsOn"] = list(task.depends_on)
        if task.outputs:
            entry["outputs"] = [f"{output}/**" for output in task.outputs]
        if not task.cache:
            entry["cache"] = False
        if task.persistent:
            entry["persistent"] = True
        pipeline[name] = entry
    return {
        "$schema": "https://turbo.build/schema.json",
        "pipeline": pipeline,
    }


def workspace_tool_files(descriptor: WorkspaceDescriptor) -> list[GeneratedFile]:
    """Return the tool-specific workspace file(s)."""
    if descriptor.tool is MonorepoTool.PNPM:
        return [yaml_file("pnpm-workspace.yaml", render_pnpm_workspace(descriptor))]
    if descriptor.tool is MonorepoTool.NX:
        return [json_file("nx.json", render_nx_json(descriptor))]
    return [json_file("turbo.json", render_turbo_json(descriptor))]
