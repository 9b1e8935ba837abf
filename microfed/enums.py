"""Enumerations shared by the configuration, federation and scaffolder layers."""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Which side of a federation an application sits on."""
    HOST = "host"
    REMOTE = "remote"


class Framework(str, Enum):
    REACT = "react"
    VUE = "vue"


class MonorepoTool(str, Enum):
    PNPM = "pnpm"
    NX = "nx"
    TURBOREPO = "turborepo"


class PackageManager(str, Enum):
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


class ArtifactKind(str, Enum):
    """Kind of artifact set produced by the project assembler."""
    APPLICATION = "application"
    WORKSPACE = "workspace"
    SHARED_TYPES = "shared-types"
