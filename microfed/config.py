"""microfed configuration.

Typed records for the user's intent (:class:`ProjectConfiguration`,
:class:`RemoteReference`) and for the tool's own settings (:class:`Settings`).
All of them are Pydantic v2 models so they validate at construction time and
serialise to JSON without boiler-plate.

:func:`build_configuration` is the single entry point that turns raw answers
(from prompts, flags or code) into a validated ``ProjectConfiguration``; it
raises the named errors from :mod:`microfed.errors` instead of a generic
``ValidationError``.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from microfed.enums import Framework, MonorepoTool, PackageManager, Role
from microfed.errors import (
    InvalidPort,
    InvalidProjectName,
    MissingRemoteUrl,
    UnsupportedFramework,
    UnsupportedMonorepoTool,
    UnsupportedPackageManager,
    UnsupportedRole,
)
from microfed.federation.naming import normalize

MIN_PORT = 1024
MAX_PORT = 65535

DEFAULT_REMOTE_ENTRY = "remoteEntry.js"

_PROJECT_NAME = re.compile(r"^[a-z0-9_-]+$")


# ---------------------------------------------------------------------------
# User intent
# ---------------------------------------------------------------------------


class RemoteReference(BaseModel):
    """A host's declared dependency on one remote container."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Federation identifier of the remote")
    url: str = Field(..., description="URL of the remote's federation entry file")
    entry: str = Field(default=DEFAULT_REMOTE_ENTRY, description="Entry file name")

    @classmethod
    def parse(cls, pair: str) -> "RemoteReference":
        """Parse a ``name=url`` pair as accepted by ``--remote-ref``.

        Raises:
            MissingRemoteUrl: If the pair has no ``=`` or an empty URL.
        """
        name, sep, url = pair.partition("=")
        name = name.strip()
        url = url.strip()
        if not sep or not url:
            raise MissingRemoteUrl(name or pair)
        return cls(name=name, url=url)


class ProjectConfiguration(BaseModel):
    """Validated, immutable user intent for one application.

    ``normalized_name`` is derived from ``raw_name`` on access, so the two can
    never disagree.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    raw_name: str
    port: int = Field(..., ge=MIN_PORT, le=MAX_PORT)
    framework: Framework = Framework.REACT
    typescript: bool = True
    is_monorepo: bool = False
    monorepo_tool: Optional[MonorepoTool] = None
    package_manager: PackageManager = PackageManager.PNPM

    @computed_field  # type: ignore[prop-decorator]
    @property
    def normalized_name(self) -> str:
        return normalize(self.raw_name)

    @property
    def is_host(self) -> bool:
        return self.role is Role.HOST

    def with_role(self, role: Role, raw_name: str, port: int) -> "ProjectConfiguration":
        """Return a sibling configuration sharing framework and tooling choices."""
        return build_configuration(
            role=role,
            name=raw_name,
            port=port,
            framework=self.framework,
            typescript=self.typescript,
            is_monorepo=self.is_monorepo,
            monorepo_tool=self.monorepo_tool,
            package_manager=self.package_manager,
        )


def build_configuration(
    *,
    role: Role | str,
    name: str,
    port: Any,
    framework: Framework | str = Framework.REACT,
    typescript: bool = True,
    is_monorepo: bool = False,
    monorepo_tool: MonorepoTool | str | None = None,
    package_manager: PackageManager | str = PackageManager.PNPM,
) -> ProjectConfiguration:
    """Validate raw answers and build a :class:`ProjectConfiguration`.

    Raises:
        UnsupportedRole: Unknown role.
        InvalidProjectName: Empty name, characters outside [a-z0-9_-], or a
            name that normalises to nothing.
        InvalidPort: Non-integer port or a port outside 1024-65535.
        UnsupportedFramework: Framework other than react/vue.
        UnsupportedMonorepoTool: Monorepo requested without a known tool.
        UnsupportedPackageManager: Package manager other than npm/yarn/pnpm.
    """
    role_value = _coerce(Role, role, UnsupportedRole)
    raw_name = validate_project_name(name)
    port_value = _coerce_port(port)
    framework_value = _coerce(Framework, framework, UnsupportedFramework)
    manager_value = _coerce(PackageManager, package_manager, UnsupportedPackageManager)

    tool_value: MonorepoTool | None = None
    if is_monorepo:
        if monorepo_tool is None:
            raise UnsupportedMonorepoTool(None)
        tool_value = _coerce(MonorepoTool, monorepo_tool, UnsupportedMonorepoTool)

    return ProjectConfiguration(
        role=role_value,
        raw_name=raw_name,
        port=port_value,
        framework=framework_value,
        typescript=bool(typescript),
        is_monorepo=bool(is_monorepo),
        monorepo_tool=tool_value,
        package_manager=manager_value,
    )


def validate_project_name(name: str | None) -> str:
    """Return the stripped project name or raise :class:`InvalidProjectName`.

    The raw name doubles as the application's directory and npm package
    name, so it is limited to lowercase letters, digits, ``-`` and ``_``
    and must still normalise to a non-empty identifier.
    """
    raw_name = (name or "").strip()
    if not raw_name:
        raise InvalidProjectName(name or "")
    if not _PROJECT_NAME.match(raw_name):
        raise InvalidProjectName(
            raw_name, "use lowercase letters, digits, '-' and '_' only"
        )
    if not normalize(raw_name):
        raise InvalidProjectName(raw_name)
    return raw_name


def _coerce(enum_cls: type, value: Any, error_cls: type[Exception]) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        raise error_cls(value) from None


def _coerce_port(port: Any) -> int:
    if isinstance(port, bool):
        raise InvalidPort(port)
    try:
        value = int(port)
    except (TypeError, ValueError):
        raise InvalidPort(port) from None
    if value != port and not isinstance(port, str):
        raise InvalidPort(port)
    if not MIN_PORT <= value <= MAX_PORT:
        raise InvalidPort(port)
    return value


# ---------------------------------------------------------------------------
# Tool settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    """Global microfed settings.

    Holds defaults that the CLI falls back to when a value is neither passed
    as a flag nor answered at a prompt.
    """

    output_dir: Path = Field(default=Path("."))
    overwrite: bool = Field(default=False, description="Write into non-empty targets")
    verbose: bool = Field(default=False, description="Report every written file")
    host_port: int = Field(default=3000, ge=MIN_PORT, le=MAX_PORT)
    remote_port: int = Field(default=3001, ge=MIN_PORT, le=MAX_PORT)
    framework: Framework = Field(default=Framework.REACT)
    package_manager: PackageManager = Field(default=PackageManager.PNPM)
    monorepo_tool: MonorepoTool = Field(default=MonorepoTool.PNPM)

    def default_port(self, role: Role) -> int:
        return self.host_port if role is Role.HOST else self.remote_port

    @staticmethod
    def default_name(role: Role) -> str:
        return "host-app" if role is Role.HOST else "remote-app"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the settings to a JSON file and return its path."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "Settings":
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            MFE_OUTPUT_DIR, MFE_OVERWRITE, MFE_VERBOSE, MFE_PACKAGE_MANAGER,
            MFE_FRAMEWORK, MFE_MONOREPO_TOOL.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("MFE_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["MFE_OUTPUT_DIR"])
        if os.environ.get("MFE_OVERWRITE"):
            kwargs["overwrite"] = _env_flag(os.environ["MFE_OVERWRITE"])
        if os.environ.get("MFE_VERBOSE"):
            kwargs["verbose"] = _env_flag(os.environ["MFE_VERBOSE"])
        if os.environ.get("MFE_PACKAGE_MANAGER"):
            kwargs["package_manager"] = _coerce(
                PackageManager, os.environ["MFE_PACKAGE_MANAGER"], UnsupportedPackageManager
            )
        if os.environ.get("MFE_FRAMEWORK"):
            kwargs["framework"] = _coerce(
                Framework, os.environ["MFE_FRAMEWORK"], UnsupportedFramework
            )
        if os.environ.get("MFE_MONOREPO_TOOL"):
            kwargs["monorepo_tool"] = _coerce(
                MonorepoTool, os.environ["MFE_MONOREPO_TOOL"], UnsupportedMonorepoTool
            )
        return cls(**kwargs)


def _env_flag(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}
