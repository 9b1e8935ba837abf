"""Error taxonomy for microfed.

Every recognised invalid input maps to exactly one named exception.  All of
them derive from :class:`ScaffoldError` so the CLI can report any engine
failure with a single ``except`` clause and a non-zero exit code.

None of these classes derive from ``ValueError``: pydantic wraps
``ValueError`` raised inside validators into a ``ValidationError``, and the
named error must reach the caller unchanged.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every fatal scaffolding failure."""


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------


class InvalidProjectName(ScaffoldError):
    """Raised when the raw project name is empty, malformed or normalises to nothing."""

    def __init__(self, raw_name: str, reason: str | None = None) -> None:
        self.raw_name = raw_name
        super().__init__(
            f"Invalid project name {raw_name!r}: "
            + (reason or "it must contain at least one letter or digit")
        )


class InvalidPort(ScaffoldError):
    """Raised when the port is outside 1024-65535."""

    def __init__(self, port: object) -> None:
        self.port = port
        super().__init__(f"Invalid port {port!r}: must be between 1024 and 65535")


class UnsupportedFramework(ScaffoldError):
    def __init__(self, framework: object) -> None:
        self.framework = framework
        super().__init__(f"Unsupported framework {framework!r} (expected react or vue)")


class UnsupportedMonorepoTool(ScaffoldError):
    def __init__(self, tool: object) -> None:
        self.tool = tool
        super().__init__(
            f"Unsupported monorepo tool {tool!r} (expected pnpm, nx or turborepo)"
        )


class UnsupportedPackageManager(ScaffoldError):
    def __init__(self, manager: object) -> None:
        self.manager = manager
        super().__init__(
            f"Unsupported package manager {manager!r} (expected npm, yarn or pnpm)"
        )


class UnsupportedRole(ScaffoldError):
    def __init__(self, role: object) -> None:
        self.role = role
        super().__init__(f"Unsupported application role {role!r} (expected host or remote)")


# ---------------------------------------------------------------------------
# Federation errors
# ---------------------------------------------------------------------------


class InvalidRemoteName(ScaffoldError):
    """Raised when a remote reference name is not a valid identifier."""

    def __init__(self, name: str, reason: str | None = None) -> None:
        self.name = name
        super().__init__(
            reason
            or f"Invalid remote name {name!r}: must match [A-Za-z_$][A-Za-z0-9_$]*"
        )


class DuplicateRemoteName(InvalidRemoteName):
    def __init__(self, name: str) -> None:
        super().__init__(name, f"Remote {name!r} is declared more than once")


class MissingRemoteUrl(ScaffoldError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Remote {name!r} has no URL")


class InvalidExposedModule(ScaffoldError):
    def __init__(self, public_path: str, reason: str) -> None:
        self.public_path = public_path
        super().__init__(f"Invalid exposed module {public_path!r}: {reason}")


class RoleMismatch(ScaffoldError):
    """Raised when host-only input is given to a remote (or vice versa)."""


# ---------------------------------------------------------------------------
# File-system errors
# ---------------------------------------------------------------------------


class FileSystemFailure(ScaffoldError):
    """Wraps an ``OSError`` raised while writing generated artifacts."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


class TargetNotEmpty(FileSystemFailure):
    def __init__(self, path: Path) -> None:
        super().__init__(
            path, "target directory already exists and is not empty (use --force to overwrite)"
        )
