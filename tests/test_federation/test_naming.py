"""Tests for federation identifier normalisation (microfed.federation.naming)."""

from __future__ import annotations

import pytest

from microfed.federation.naming import is_valid_identifier, normalize

pytestmark = pytest.mark.unit


SAMPLE_NAMES = [
    "my-remote-app",
    "user_service",
    "2fast",
    "Products",
    "checkout--flow",
    "a-b-c-d",
    "my app!",
    "-leading-hyphen",
    "trailing-",
    "__dunder__",
    "x_-y",
    "123",
    "ÄpfelApp",
    "mixed-Case-Name",
    "$dollar",
    "shop.v2",
]


class TestNormalize:
    def test_hyphens_are_camel_cased(self):
        assert normalize("my-remote-app") == "myRemoteApp"

    def test_underscore_separators_are_kept(self):
        assert normalize("user_service") == "user_service"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("a_B", "aB"),
            ("user__service", "user_service"),
            ("trailing_", "trailing"),
            ("__dunder__", "_dunder"),
            ("v_2", "v2"),
        ],
    )
    def test_underscore_not_before_lowercase_is_stripped(self, raw, expected):
        assert normalize(raw) == expected

    def test_leading_digit_is_prefixed(self):
        assert normalize("2fast") == "_2fast"

    def test_all_digits(self):
        assert normalize("123") == "_123"

    def test_hyphen_before_uppercase_is_dropped(self):
        assert normalize("mixed-Case-Name") == "mixedCaseName"

    def test_disallowed_characters_are_stripped(self):
        assert normalize("my app!") == "myapp"
        assert normalize("shop.v2") == "shopv2"
        assert normalize("$dollar") == "dollar"

    def test_non_ascii_letters_are_stripped(self):
        assert normalize("ÄpfelApp") == "pfelApp"

    def test_leading_hyphen(self):
        assert normalize("-leading-hyphen") == "LeadingHyphen"

    def test_consecutive_hyphens(self):
        assert normalize("checkout--flow") == "checkoutFlow"

    @pytest.mark.parametrize("raw", ["", "   ", "---", "!!!", "___", "-_-"])
    def test_symbol_only_input_normalises_to_empty(self, raw):
        assert normalize(raw) == ""

    @pytest.mark.parametrize("raw", SAMPLE_NAMES)
    def test_idempotent(self, raw):
        once = normalize(raw)
        assert normalize(once) == once

    @pytest.mark.parametrize("raw", SAMPLE_NAMES)
    def test_output_is_valid_identifier(self, raw):
        assert is_valid_identifier(normalize(raw))

    def test_deterministic(self):
        assert normalize("my-remote-app") == normalize("my-remote-app")


class TestIsValidIdentifier:
    @pytest.mark.parametrize("name", ["products", "cart_app", "_private", "$scope", "App2"])
    def test_valid(self, name):
        assert is_valid_identifier(name)

    @pytest.mark.parametrize("name", ["", "bad-name", "2fast", "has space", "dot.name", "ümlaut"])
    def test_invalid(self, name):
        assert not is_valid_identifier(name)
