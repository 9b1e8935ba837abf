"""Type-declaration stubs and the shared-types package.

* Hosts (TypeScript) get one ``src/@types/<remote>.d.ts`` per remote so that
  ``import('<remote>/App')`` type-checks.
* Remotes (TypeScript) get ``src/types.ts`` with the prop types of their
  exposed modules and ``src/types.d.ts`` for asset imports.
* Vue + TypeScript applications get ``src/shims-vue.d.ts``.
* TypeScript monorepos get a ``packages/shared-types`` package.
"""

from __future__ import annotations

from typing import Any

from microfed.config import ProjectConfiguration
from microfed.enums import Framework, PackageManager, Role
from microfed.federation.descriptor import DEFAULT_EXPOSED_MODULE, FederationDescriptor

from .files import GeneratedFile, json_file
from .manifest import (
    SHARED_TYPES_PACKAGE,
    package_manager_command,
    shared_types_package_json,
    shared_types_tsconfig,
)
from .templates import TemplateRenderer

TYPES_DIR = "src/@types"


def remote_module_names(exposes: dict[str, str] | None = None) -> list[str]:
    """Module names (``App``, ``Header``...) a host can import from a remote."""
    keys = list(exposes) if exposes else [DEFAULT_EXPOSED_MODULE[0]]
    return [key[2:] if key.startswith("./") else key for key in keys]


def build_type_declarations(
    renderer: TemplateRenderer,
    config: ProjectConfiguration,
    descriptor: FederationDescriptor,
    context: dict[str, Any],
) -> list[GeneratedFile]:
    """Return the ``.d.ts``/``.ts`` stubs of one application (TypeScript only)."""
    if not config.typescript:
        return []

    files: list[GeneratedFile] = []
    if config.role is Role.HOST:
        for remote_name in descriptor.remotes:
            files.append(
                renderer.render_file(
                    "types/remote-module.d.ts.j2",
                    f"{TYPES_DIR}/{remote_name}.d.ts",
                    {**context, "remote_name": remote_name, "modules": remote_module_names()},
                )
            )
    else:
        files.append(renderer.render_file("types/exposed-types.ts.j2", "src/types.ts", context))
        files.append(renderer.render_file("types/assets.d.ts.j2", "src/types.d.ts", context))

    if config.framework is Framework.VUE:
        files.append(renderer.render_file("types/shims-vue.d.ts.j2", "src/shims-vue.d.ts", context))
    return files


def build_shared_types_package(
    renderer: TemplateRenderer,
    workspace_name: str,
    framework: Framework,
    manager: PackageManager,
    dependency_spec: str,
) -> list[GeneratedFile]:
    """Return the files of the ``shared-types`` workspace package."""
    context = {
        "workspace_name": workspace_name,
        "framework": framework.value,
        "package_name": SHARED_TYPES_PACKAGE,
        "dependency_spec": dependency_spec,
        "run_command": package_manager_command(manager, "run"),
    }
    return [
        json_file("package.json", shared_types_package_json(framework)),
        json_file("tsconfig.json", shared_types_tsconfig()),
        renderer.render_file("shared-types/index.ts.j2", "src/index.ts", context),
        renderer.render_file("shared-types/README.md.j2", "README.md", context),
    ]
