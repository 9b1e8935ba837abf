"""Tests for package.json / tsconfig.json builders (microfed.scaffolder.manifest)."""

from __future__ import annotations

import pytest

from microfed.enums import Framework, PackageManager
from microfed.federation.shared import resolve_shared_policy
from microfed.scaffolder.manifest import (
    BUILD_TOOL_DEPENDENCIES,
    SHARED_TYPES_PACKAGE,
    TYPESCRIPT_DEPENDENCIES,
    application_package_json,
    application_tsconfig,
    dev_dependencies,
    package_manager_command,
    runtime_dependencies,
    shared_types_package_json,
    shared_types_tsconfig,
)

pytestmark = pytest.mark.unit


class TestRuntimeDependencies:
    def test_react_pinned_to_policy_major(self):
        assert runtime_dependencies(resolve_shared_policy("react")) == {
            "react": "^18.2.0",
            "react-dom": "^18.2.0",
        }

    def test_vue_pinned_to_policy_major(self):
        assert runtime_dependencies(resolve_shared_policy("vue")) == {"vue": "^3.4.0"}


class TestDevDependencies:
    def test_build_tools_always_present(self, js_remote_config):
        deps = dev_dependencies(js_remote_config)
        for package in BUILD_TOOL_DEPENDENCIES:
            assert package in deps
        assert "@babel/preset-react" in deps

    def test_no_typescript_packages_without_typescript(self, js_remote_config):
        deps = dev_dependencies(js_remote_config)
        assert not set(TYPESCRIPT_DEPENDENCIES) & set(deps)
        assert "@types/react" not in deps

    def test_react_typescript(self, remote_config):
        deps = dev_dependencies(remote_config)
        assert deps["typescript"] == TYPESCRIPT_DEPENDENCIES["typescript"]
        assert "fork-ts-checker-webpack-plugin" in deps
        assert "@types/react" in deps
        assert "@types/react-dom" in deps

    def test_vue_typescript(self, vue_host_config):
        deps = dev_dependencies(vue_host_config)
        assert "vue-loader" in deps
        assert "@vue/compiler-sfc" in deps
        assert "@babel/preset-react" not in deps
        assert "@types/react" not in deps
        assert "typescript" in deps


class TestApplicationPackageJson:
    def test_document(self, host_config):
        doc = application_package_json(host_config, resolve_shared_policy("react"))
        assert doc["name"] == "shell-app"
        assert doc["private"] is True
        assert doc["description"] == "Host application for micro-frontend"
        assert doc["scripts"]["start"] == "webpack serve --open"
        assert doc["scripts"]["build"] == "webpack --mode production"
        assert doc["dependencies"] == {"react": "^18.2.0", "react-dom": "^18.2.0"}

    def test_remote_description(self, remote_config):
        doc = application_package_json(remote_config, resolve_shared_policy("react"))
        assert doc["description"] == "Remote application for micro-frontend"

    def test_shared_types_link(self, host_config):
        doc = application_package_json(
            host_config, resolve_shared_policy("react"), shared_types_spec="workspace:*"
        )
        assert doc["dependencies"][SHARED_TYPES_PACKAGE] == "workspace:*"

    def test_no_shared_types_by_default(self, host_config):
        doc = application_package_json(host_config, resolve_shared_policy("react"))
        assert SHARED_TYPES_PACKAGE not in doc["dependencies"]


class TestTsconfig:
    def test_react_jsx(self, remote_config):
        options = application_tsconfig(remote_config)["compilerOptions"]
        assert options["jsx"] == "react-jsx"
        assert options["strict"] is True
        assert "paths" not in options

    def test_vue_preserves_jsx(self, vue_host_config):
        assert application_tsconfig(vue_host_config)["compilerOptions"]["jsx"] == "preserve"

    def test_host_resolves_remote_stubs(self, host_config):
        options = application_tsconfig(host_config)["compilerOptions"]
        assert options["paths"] == {"*": ["./src/@types/*"]}

    def test_shared_types_emits_declarations(self):
        options = shared_types_tsconfig()["compilerOptions"]
        assert options["declaration"] is True
        assert options["outDir"] == "./dist"


class TestSharedTypesPackageJson:
    def test_react(self):
        doc = shared_types_package_json(Framework.REACT)
        assert doc["name"] == SHARED_TYPES_PACKAGE
        assert doc["types"] == "dist/index.d.ts"
        assert doc["scripts"]["build"] == "tsc"
        assert "@types/react" in doc["devDependencies"]

    def test_vue(self):
        assert "@types/react" not in shared_types_package_json(Framework.VUE)["devDependencies"]


class TestPackageManagerCommand:
    @pytest.mark.parametrize(
        ("manager", "install", "run"),
        [
            (PackageManager.NPM, "npm install", "npm run"),
            (PackageManager.YARN, "yarn", "yarn"),
            (PackageManager.PNPM, "pnpm install", "pnpm"),
        ],
    )
    def test_commands(self, manager, install, run):
        assert package_manager_command(manager, "install") == install
        assert package_manager_command(manager, "run") == run

    def test_unknown_command_passes_through(self):
        assert package_manager_command(PackageManager.NPM, "audit") == "audit"
