"""Framework source files of one application.

Maps (framework, role, TypeScript) onto the templates that produce the
application's sources.  Every application gets the same two-file start-up
sequence: an entry file that only performs ``import('./bootstrap')`` and a
bootstrap file that mounts the framework.  The dynamic import is the async
boundary the federation runtime needs to negotiate shared-dependency
versions before any framework code executes; mounting directly from the
entry file loads a stale or duplicate framework instance.
"""

from __future__ import annotations

from typing import Any, Sequence

from microfed.config import ProjectConfiguration, RemoteReference
from microfed.enums import Framework, Role
from microfed.federation.config_file import CONFIG_FILE_NAME
from microfed.federation.descriptor import REMOTE_ENTRY_FILENAME, FederationDescriptor

from .files import GeneratedFile
from .templates import TemplateRenderer, pascal_case

REQUIRED_DIRECTORIES: tuple[str, ...] = ("src", "public", "src/components")

# Bindings the host App templates declare themselves.
RESERVED_LOCAL_NAMES = frozenset(
    {"App", "React", "Suspense", "ErrorBoundary", "defineAsyncComponent", "defineComponent"}
)


class SourceLayout:
    """File names of one application, derived from framework and TypeScript."""

    def __init__(self, framework: Framework, typescript: bool) -> None:
        self.framework = framework
        self.typescript = typescript

    @property
    def script_ext(self) -> str:
        return "ts" if self.typescript else "js"

    @property
    def component_ext(self) -> str:
        if self.framework is Framework.VUE:
            return "vue"
        return "tsx" if self.typescript else "jsx"

    @property
    def entry(self) -> str:
        return f"src/index.{self.script_ext}"

    @property
    def bootstrap(self) -> str:
        if self.framework is Framework.VUE:
            return f"src/bootstrap.{self.script_ext}"
        return f"src/bootstrap.{self.component_ext}"

    @property
    def app(self) -> str:
        return f"src/App.{self.component_ext}"

    def component(self, name: str) -> str:
        return f"src/components/{name}.{self.component_ext}"

    @property
    def resolve_extensions(self) -> list[str]:
        extensions = [".js", ".jsx"]
        if self.typescript:
            extensions = [".ts", ".tsx", *extensions]
        if self.framework is Framework.VUE:
            extensions.append(".vue")
        return extensions

    @property
    def script_pattern(self) -> str:
        return "js|jsx|ts|tsx" if self.typescript else "js|jsx"


def component_names(remote_names: Sequence[str]) -> list[str]:
    """Return one local component binding per remote, unique within the host App.

    ``products`` becomes ``ProductsRemote``; a second remote mapping to the
    same binding (``Products``) gets a numeric suffix, ``ProductsRemote2``.
    """
    taken = set(RESERVED_LOCAL_NAMES)
    names: list[str] = []
    for remote_name in remote_names:
        base = f"{pascal_case(remote_name)}Remote"
        candidate = base
        counter = 2
        while candidate in taken:
            candidate = f"{base}{counter}"
            counter += 1
        taken.add(candidate)
        names.append(candidate)
    return names


def template_context(
    config: ProjectConfiguration,
    descriptor: FederationDescriptor,
    remotes: Sequence[RemoteReference] = (),
) -> dict[str, Any]:
    """Build the Jinja2 context shared by every template of one application."""
    layout = SourceLayout(config.framework, config.typescript)
    entries = {remote.name: remote.entry for remote in remotes}
    components = component_names(list(descriptor.remotes))
    return {
        "app_name": config.raw_name,
        "identifier": descriptor.identifier,
        "role": descriptor.role.value,
        "framework": config.framework.value,
        "typescript": config.typescript,
        "port": config.port,
        "config_file_name": CONFIG_FILE_NAME,
        "remote_entry": descriptor.filename,
        "remotes": [
            {
                "name": name,
                "url": url,
                "entry": entries.get(name, REMOTE_ENTRY_FILENAME),
                "component": component,
            }
            for (name, url), component in zip(descriptor.remotes.items(), components)
        ],
        "exposes": descriptor.exposed_modules,
        "extensions": layout.resolve_extensions,
        "script_pattern": layout.script_pattern,
        "component_ext": layout.component_ext,
    }


def build_sources(
    renderer: TemplateRenderer,
    config: ProjectConfiguration,
    context: dict[str, Any],
) -> list[GeneratedFile]:
    """Render the start-up sequence, the root component and sample components."""
    layout = SourceLayout(config.framework, config.typescript)
    prefix = config.framework.value
    is_host = config.role is Role.HOST

    bootstrap_template = (
        "vue/bootstrap.js.j2" if config.framework is Framework.VUE else "react/bootstrap.jsx.j2"
    )
    app_template = f"{prefix}/{'HostApp' if is_host else 'RemoteApp'}"
    app_template += ".vue.j2" if config.framework is Framework.VUE else ".jsx.j2"

    files = [
        renderer.render_file("app/entry.js.j2", layout.entry, context),
        renderer.render_file(bootstrap_template, layout.bootstrap, context),
        renderer.render_file(app_template, layout.app, context),
    ]

    if is_host:
        if config.framework is Framework.REACT:
            files.append(
                renderer.render_file(
                    "react/ErrorBoundary.jsx.j2", layout.component("ErrorBoundary"), context
                )
            )
    else:
        counter_template = (
            "vue/Counter.vue.j2" if config.framework is Framework.VUE else "react/Counter.jsx.j2"
        )
        files.append(
            renderer.render_file(counter_template, layout.component("Counter"), context)
        )

    files.append(renderer.render_file("app/index.html.j2", "public/index.html", context))
    return files
