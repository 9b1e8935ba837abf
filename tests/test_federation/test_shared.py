"""Tests for the shared-dependency policy resolver (microfed.federation.shared)."""

from __future__ import annotations

import pytest

from microfed.enums import Framework
from microfed.errors import UnsupportedFramework
from microfed.federation.shared import SharedDependency, policy_major, resolve_shared_policy

pytestmark = pytest.mark.unit


class TestResolveSharedPolicy:
    def test_react_shares_framework_and_dom_renderer(self):
        policy = resolve_shared_policy("react")
        assert list(policy) == ["react", "react-dom"]

    def test_vue_shares_framework_only(self):
        policy = resolve_shared_policy(Framework.VUE)
        assert list(policy) == ["vue"]

    @pytest.mark.parametrize("framework", ["react", "vue"])
    def test_policy_flags(self, framework):
        for shared in resolve_shared_policy(framework).values():
            assert shared.singleton is True
            assert shared.strict_version is False
            assert shared.eager is False

    def test_version_ranges(self):
        assert resolve_shared_policy("react")["react"].required_version == "^18.0.0"
        assert resolve_shared_policy("vue")["vue"].required_version == "^3.0.0"

    @pytest.mark.parametrize("framework", ["angular", "", "React"])
    def test_unknown_framework(self, framework):
        with pytest.raises(UnsupportedFramework):
            resolve_shared_policy(framework)

    def test_fresh_mapping_per_call(self):
        first = resolve_shared_policy("react")
        first.pop("react")
        assert "react" in resolve_shared_policy("react")


class TestSharedDependency:
    def test_as_federation_dict_uses_camel_case(self):
        shared = SharedDependency(required_version="^18.0.0")
        assert shared.as_federation_dict() == {
            "singleton": True,
            "requiredVersion": "^18.0.0",
            "strictVersion": False,
            "eager": False,
        }

    def test_accepts_aliases(self):
        shared = SharedDependency.model_validate(
            {"requiredVersion": "^3.0.0", "strictVersion": True}
        )
        assert shared.required_version == "^3.0.0"
        assert shared.strict_version is True

    def test_dump_by_alias(self):
        dumped = SharedDependency(required_version="^3.0.0").model_dump(by_alias=True)
        assert "requiredVersion" in dumped
        assert "strictVersion" in dumped


class TestPolicyMajor:
    @pytest.mark.parametrize(
        ("version_range", "major"),
        [("^18.0.0", 18), ("^3.0.0", 3), ("5.1.0", 5)],
    )
    def test_major(self, version_range, major):
        assert policy_major(version_range) == major

    def test_rejects_unsupported_range(self):
        with pytest.raises(ValueError):
            policy_major("latest")
