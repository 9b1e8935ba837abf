"""Federation config synthesis.

Combines the application's role, its normalised name, the remote list (host)
or exposed-module map (remote) and the framework's shared policy into one
:class:`FederationDescriptor`.  The role-specific part is a tagged variant
(:class:`HostRole` | :class:`RemoteRole`), so a descriptor can never carry
both remotes and exposed modules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Literal, Mapping, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from microfed.enums import Role
from microfed.errors import (
    DuplicateRemoteName,
    InvalidExposedModule,
    InvalidRemoteName,
    MissingRemoteUrl,
    RoleMismatch,
)

from .naming import is_valid_identifier
from .shared import SharedDependency, resolve_shared_policy

if TYPE_CHECKING:
    from microfed.config import ProjectConfiguration, RemoteReference


REMOTE_ENTRY_FILENAME = "remoteEntry.js"
DEFAULT_EXPOSED_MODULE = ("./App", "./src/App")


# ---------------------------------------------------------------------------
# Descriptor model
# ---------------------------------------------------------------------------


class HostRole(BaseModel):
    """Host side: remote identifier -> entry URL, in declaration order."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["host"] = "host"
    remotes: dict[str, str] = Field(default_factory=dict)


class RemoteRole(BaseModel):
    """Remote side: public module path -> local source path."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["remote"] = "remote"
    exposed_modules: dict[str, str] = Field(
        default_factory=lambda: dict([DEFAULT_EXPOSED_MODULE])
    )


RoleSpec = Annotated[Union[HostRole, RemoteRole], Field(discriminator="kind")]


class BuildOutput(BaseModel):
    model_config = ConfigDict(frozen=True)

    directory: str = "dist"
    public_path_mode: str = "auto"


class DevServerOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    hot_reload: bool = True
    spa_fallback: bool = True
    cors: bool = True


class FederationDescriptor(BaseModel):
    """The resolved runtime contract of one application."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    role_spec: RoleSpec
    shared_policy: dict[str, SharedDependency]
    build_output: BuildOutput = Field(default_factory=BuildOutput)
    dev_server: DevServerOptions = Field(default_factory=DevServerOptions)
    filename: str = REMOTE_ENTRY_FILENAME

    @property
    def role(self) -> Role:
        return Role(self.role_spec.kind)

    @property
    def remotes(self) -> dict[str, str]:
        if isinstance(self.role_spec, HostRole):
            return dict(self.role_spec.remotes)
        return {}

    @property
    def exposed_modules(self) -> dict[str, str]:
        if isinstance(self.role_spec, RemoteRole):
            return dict(self.role_spec.exposed_modules)
        return {}

    def shared_as_federation_dict(self) -> dict[str, dict[str, object]]:
        return {
            package: policy.as_federation_dict()
            for package, policy in self.shared_policy.items()
        }


# ---------------------------------------------------------------------------
# Synthesis
# ---------------------------------------------------------------------------


def synthesize(
    config: ProjectConfiguration,
    remotes: Sequence[RemoteReference] = (),
    exposes: Mapping[str, str] | None = None,
) -> FederationDescriptor:
    """Build the federation descriptor for *config*.

    Args:
        config: Validated project configuration.
        remotes: Remote references (host role only), in import order.
        exposes: Extra exposed modules (remote role only), appended after the
            mandatory ``./App`` entry.

    Raises:
        InvalidRemoteName: A remote name is not a valid identifier.
        DuplicateRemoteName: The same remote name is declared twice.
        MissingRemoteUrl: A remote has an empty URL.
        InvalidExposedModule: An extra exposed module is malformed or tries
            to redirect ``./App``.
        RoleMismatch: Remotes given to a remote, or exposes given to a host.
    """
    if config.role is Role.HOST:
        if exposes:
            raise RoleMismatch("A host application cannot expose modules")
        role_spec: HostRole | RemoteRole = HostRole(remotes=_resolve_remotes(remotes))
    else:
        if remotes:
            raise RoleMismatch("A remote application cannot declare remotes")
        role_spec = RemoteRole(exposed_modules=_resolve_exposes(exposes or {}))

    return FederationDescriptor(
        identifier=config.normalized_name,
        role_spec=role_spec,
        shared_policy=resolve_shared_policy(config.framework),
    )


def _resolve_remotes(remotes: Sequence[RemoteReference]) -> dict[str, str]:
    resolved: dict[str, str] = {}
    for remote in remotes:
        if not is_valid_identifier(remote.name):
            raise InvalidRemoteName(remote.name)
        if remote.name in resolved:
            raise DuplicateRemoteName(remote.name)
        if not remote.url.strip():
            raise MissingRemoteUrl(remote.name)
        resolved[remote.name] = remote.url
    return resolved


def _resolve_exposes(exposes: Mapping[str, str]) -> dict[str, str]:
    default_key, default_path = DEFAULT_EXPOSED_MODULE
    resolved = {default_key: default_path}
    for public_path, local_path in exposes.items():
        if not public_path.startswith("./") or len(public_path) <= 2:
            raise InvalidExposedModule(public_path, "public path must look like './Name'")
        if not local_path.strip():
            raise InvalidExposedModule(public_path, "local path is empty")
        if public_path == default_key:
            if local_path != default_path:
                raise InvalidExposedModule(
                    public_path, f"the default entry always maps to {default_path!r}"
                )
            continue
        resolved[public_path] = local_path
    return resolved


# ---------------------------------------------------------------------------
# Build-tool helpers
# ---------------------------------------------------------------------------


def webpack_remotes(descriptor: FederationDescriptor) -> dict[str, str]:
    """Translate the descriptor's remotes into ``name@url`` references."""
    return {name: f"{name}@{url}" for name, url in descriptor.remotes.items()}
