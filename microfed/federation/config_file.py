"""The ``micro-frontend.config.json`` record.

This file is persisted next to the generated sources and is the single
source of truth for ``webpack.config.js`` at build time.  Field names use the
camelCase spelling the JavaScript side reads; the Python side works with
snake_case attributes through aliases.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from microfed.enums import Role

from .descriptor import FederationDescriptor
from .shared import SharedDependency

if TYPE_CHECKING:
    from microfed.config import ProjectConfiguration, RemoteReference

CONFIG_FILE_NAME = "micro-frontend.config.json"


class RemoteEntry(BaseModel):
    name: str
    url: str
    entry: str = "remoteEntry.js"


class BuildSection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    output_path: str = Field(default="dist", alias="outputPath")
    public_path: str = Field(default="auto", alias="publicPath")


class DevServerSection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    hot: bool = True
    history_api_fallback: bool = Field(default=True, alias="historyApiFallback")
    cors: bool = True


class MicroFrontendConfigFile(BaseModel):
    """Structured content of ``micro-frontend.config.json``."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: Literal["host", "remote"]
    port: int
    framework: Literal["react", "vue"]
    remotes: Optional[list[RemoteEntry]] = None
    exposes: Optional[dict[str, str]] = None
    shared: dict[str, SharedDependency] = Field(default_factory=dict)
    build: BuildSection = Field(default_factory=BuildSection)
    dev_server: DevServerSection = Field(default_factory=DevServerSection, alias="devServer")

    def to_json_dict(self) -> dict[str, object]:
        """Return the camelCase mapping written to disk (unset role fields omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Write the record as pretty-printed JSON and return the path."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            self.model_dump_json(by_alias=True, exclude_none=True, indent=2) + "\n",
            encoding="utf-8",
        )
        return path

    @classmethod
    def load(cls, path: Path) -> "MicroFrontendConfigFile":
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)


def to_config_file(
    descriptor: FederationDescriptor,
    config: ProjectConfiguration,
    remotes: list[RemoteReference] | tuple[RemoteReference, ...] = (),
) -> MicroFrontendConfigFile:
    """Project a descriptor onto the persisted configuration record.

    Remote entries keep the ``entry`` file name of their reference; URLs come
    from the descriptor so the two always agree.
    """
    entries = {remote.name: remote.entry for remote in remotes}
    role_fields: dict[str, object] = {}
    if descriptor.role is Role.HOST:
        role_fields["remotes"] = [
            RemoteEntry(name=name, url=url, entry=entries.get(name, descriptor.filename))
            for name, url in descriptor.remotes.items()
        ]
    else:
        role_fields["exposes"] = descriptor.exposed_modules

    return MicroFrontendConfigFile(
        name=descriptor.identifier,
        type=descriptor.role.value,
        port=config.port,
        framework=config.framework.value,
        shared=dict(descriptor.shared_policy),
        build=BuildSection(
            output_path=descriptor.build_output.directory,
            public_path=descriptor.build_output.public_path_mode,
        ),
        dev_server=DevServerSection(
            hot=descriptor.dev_server.hot_reload,
            history_api_fallback=descriptor.dev_server.spa_fallback,
            cors=descriptor.dev_server.cors,
        ),
        **role_fields,
    )
