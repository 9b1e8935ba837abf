"""Module Federation configuration synthesis.

Turns a validated ``ProjectConfiguration`` into the federation contract of
one application: its container identifier, what it exposes or consumes, and
the shared-dependency policy of its framework.

Usage::

    from microfed.federation import synthesize

    descriptor = synthesize(config, remotes)
    print(descriptor.identifier, descriptor.remotes)
"""

from microfed.federation.config_file import (
    CONFIG_FILE_NAME,
    MicroFrontendConfigFile,
    to_config_file,
)
from microfed.federation.descriptor import (
    FederationDescriptor,
    HostRole,
    RemoteRole,
    synthesize,
    webpack_remotes,
)
from microfed.federation.naming import is_valid_identifier, normalize
from microfed.federation.shared import (
    SharedDependency,
    SharedDependencyPolicy,
    resolve_shared_policy,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "FederationDescriptor",
    "HostRole",
    "MicroFrontendConfigFile",
    "RemoteRole",
    "SharedDependency",
    "SharedDependencyPolicy",
    "is_valid_identifier",
    "normalize",
    "resolve_shared_policy",
    "synthesize",
    "to_config_file",
    "webpack_remotes",
]
