"""Shared-dependency policy for federated framework packages.

Every participating bundle declares the framework runtime as a shared
module.  The policy is fixed per framework:

* ``singleton`` -- only one copy of the framework may be loaded per page;
  two copies break shared component state and hook identity.
* ``strictVersion`` off -- minor-version drift between independently
  deployed applications is tolerated instead of failing the composition.
* ``eager`` off -- the shared copy is loaded on first use, which keeps the
  initial chunk small and lets the runtime negotiate the version after every
  bundle has registered its requirement.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

from microfed.enums import Framework
from microfed.errors import UnsupportedFramework


class SharedDependency(BaseModel):
    """Policy attributes of one shared package."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    singleton: bool = True
    required_version: str = Field(..., alias="requiredVersion")
    strict_version: bool = Field(default=False, alias="strictVersion")
    eager: bool = False

    def as_federation_dict(self) -> dict[str, object]:
        """Return the camelCase mapping understood by ``ModuleFederationPlugin``."""
        return {
            "singleton": self.singleton,
            "requiredVersion": self.required_version,
            "strictVersion": self.strict_version,
            "eager": self.eager,
        }


SharedDependencyPolicy = dict[str, SharedDependency]


# Framework -> (runtime packages, required version range)
_FRAMEWORK_RUNTIMES: dict[Framework, tuple[tuple[str, ...], str]] = {
    Framework.REACT: (("react", "react-dom"), "^18.0.0"),
    Framework.VUE: (("vue",), "^3.0.0"),
}

_CARET_MAJOR = re.compile(r"^\^?(\d+)\.")


def resolve_shared_policy(framework: Framework | str) -> SharedDependencyPolicy:
    """Return the shared-dependency policy for *framework*.

    React shares both the framework and its DOM renderer; Vue shares the
    framework package only.

    Raises:
        UnsupportedFramework: If *framework* is not a known framework.
    """
    try:
        packages, version_range = _FRAMEWORK_RUNTIMES[Framework(framework)]
    except ValueError:
        raise UnsupportedFramework(framework) from None

    return {
        package: SharedDependency(
            singleton=True,
            required_version=version_range,
            strict_version=False,
            eager=False,
        )
        for package in packages
    }


def policy_major(version_range: str) -> int:
    """Extract the major version from a ``^X.Y.Z`` (or ``X.Y.Z``) range."""
    match = _CARET_MAJOR.match(version_range)
    if match is None:
        raise ValueError(f"Unsupported version range: {version_range!r}")
    return int(match.group(1))
