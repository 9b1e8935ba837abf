"""``package.json`` and ``tsconfig.json`` builders.

Manifests are built as plain dictionaries and rendered with
:func:`microfed.scaffolder.files.render_json`.  Framework runtime versions
are derived from the shared-dependency policy so the declared dependency and
the federation ``requiredVersion`` always agree on the major version.
"""

from __future__ import annotations

from typing import Any

from microfed.config import ProjectConfiguration
from microfed.enums import Framework, PackageManager, Role
from microfed.federation.shared import SharedDependencyPolicy, policy_major

# Minor version pinned for each framework runtime package; the major always
# comes from the shared policy.
_RUNTIME_MINOR: dict[str, int] = {
    "react": 2,
    "react-dom": 2,
    "vue": 4,
}

BUILD_TOOL_DEPENDENCIES: dict[str, str] = {
    "webpack": "^5.89.0",
    "webpack-cli": "^5.1.4",
    "webpack-dev-server": "^4.15.1",
    "html-webpack-plugin": "^5.6.0",
    "babel-loader": "^9.1.3",
    "@babel/core": "^7.23.7",
    "@babel/preset-env": "^7.23.7",
    "css-loader": "^6.9.0",
}

_FRAMEWORK_BUILD_DEPENDENCIES: dict[Framework, dict[str, str]] = {
    Framework.REACT: {
        "@babel/preset-react": "^7.23.3",
        "style-loader": "^3.3.4",
    },
    Framework.VUE: {
        "vue-loader": "^17.4.2",
        "vue-style-loader": "^4.1.3",
        "@vue/compiler-sfc": "^3.4.0",
    },
}

TYPESCRIPT_DEPENDENCIES: dict[str, str] = {
    "typescript": "^5.3.3",
    "@babel/preset-typescript": "^7.23.3",
    "fork-ts-checker-webpack-plugin": "^9.0.2",
}

_REACT_TYPE_DEPENDENCIES: dict[str, str] = {
    "@types/react": "^18.2.48",
    "@types/react-dom": "^18.2.18",
}

SHARED_TYPES_PACKAGE = "@micro-frontend/shared-types"


# ---------------------------------------------------------------------------
# Package-manager commands
# ---------------------------------------------------------------------------

_PM_COMMANDS: dict[PackageManager, dict[str, str]] = {
    PackageManager.NPM: {"install": "npm install", "run": "npm run", "exec": "npx"},
    PackageManager.YARN: {"install": "yarn", "run": "yarn", "exec": "yarn"},
    PackageManager.PNPM: {"install": "pnpm install", "run": "pnpm", "exec": "pnpm exec"},
}


def package_manager_command(manager: PackageManager, command: str) -> str:
    """Return the shell spelling of *command* (``install``/``run``/``exec``)."""
    return _PM_COMMANDS[manager].get(command, command)


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def runtime_dependencies(policy: SharedDependencyPolicy) -> dict[str, str]:
    """Pin every shared framework package to the policy's major version."""
    deps: dict[str, str] = {}
    for package, shared in policy.items():
        major = policy_major(shared.required_version)
        minor = _RUNTIME_MINOR.get(package, 0)
        deps[package] = f"^{major}.{minor}.0"
    return deps


def dev_dependencies(config: ProjectConfiguration) -> dict[str, str]:
    deps = dict(BUILD_TOOL_DEPENDENCIES)
    deps.update(_FRAMEWORK_BUILD_DEPENDENCIES[config.framework])
    if config.typescript:
        deps.update(TYPESCRIPT_DEPENDENCIES)
        if config.framework is Framework.REACT:
            deps.update(_REACT_TYPE_DEPENDENCIES)
    return deps


# ---------------------------------------------------------------------------
# package.json
# ---------------------------------------------------------------------------


def application_package_json(
    config: ProjectConfiguration,
    policy: SharedDependencyPolicy,
    shared_types_spec: str | None = None,
) -> dict[str, Any]:
    """Build the ``package.json`` document of one application.

    Args:
        config: Application configuration.
        policy: The shared policy the application's descriptor carries.
        shared_types_spec: Version spec linking the workspace shared-types
            package (``workspace:*`` or ``*``); ``None`` outside a TypeScript
            monorepo.
    """
    label = "Host" if config.role is Role.HOST else "Remote"
    dependencies = runtime_dependencies(policy)
    if shared_types_spec is not None:
        dependencies[SHARED_TYPES_PACKAGE] = shared_types_spec

    return {
        "name": config.raw_name,
        "version": "1.0.0",
        "description": f"{label} application for micro-frontend",
        "private": True,
        "scripts": {
            "start": "webpack serve --open",
            "dev": "webpack serve",
            "build": "webpack --mode production",
            "clean": "rm -rf dist",
        },
        "dependencies": dependencies,
        "devDependencies": dev_dependencies(config),
    }


def shared_types_package_json(framework: Framework) -> dict[str, Any]:
    dev_deps = {"typescript": TYPESCRIPT_DEPENDENCIES["typescript"]}
    if framework is Framework.REACT:
        dev_deps["@types/react"] = _REACT_TYPE_DEPENDENCIES["@types/react"]
    return {
        "name": SHARED_TYPES_PACKAGE,
        "version": "1.0.0",
        "description": "Shared TypeScript types for micro-frontend applications",
        "private": True,
        "main": "dist/index.js",
        "types": "dist/index.d.ts",
        "scripts": {
            "build": "tsc",
            "dev": "tsc --watch",
            "clean": "rm -rf dist",
        },
        "devDependencies": dev_deps,
    }


# ---------------------------------------------------------------------------
# tsconfig.json
# ---------------------------------------------------------------------------


def application_tsconfig(config: ProjectConfiguration) -> dict[str, Any]:
    """Build the ``tsconfig.json`` document of one application."""
    compiler_options: dict[str, Any] = {
        "target": "ES2020",
        "lib": ["ES2020", "DOM", "DOM.Iterable"],
        "module": "ESNext",
        "moduleResolution": "node",
        "jsx": "react-jsx" if config.framework is Framework.REACT else "preserve",
        "strict": True,
        "esModuleInterop": True,
        "skipLibCheck": True,
        "forceConsistentCasingInFileNames": True,
        "resolveJsonModule": True,
        "isolatedModules": True,
        "noEmit": True,
        "allowSyntheticDefaultImports": True,
    }
    if config.role is Role.HOST:
        compiler_options["paths"] = {"*": ["./src/@types/*"]}

    return {
        "compilerOptions": compiler_options,
        "include": ["src/**/*"],
        "exclude": ["node_modules", "dist"],
    }


def shared_types_tsconfig() -> dict[str, Any]:
    return {
        "compilerOptions": {
            "target": "ES2020",
            "module": "commonjs",
            "declaration": True,
            "outDir": "./dist",
            "rootDir": "./src",
            "strict": True,
            "esModuleInterop": True,
            "skipLibCheck": True,
            "forceConsistentCasingInFileNames": True,
        },
        "include": ["src/**/*"],
        "exclude": ["node_modules", "dist"],
    }
