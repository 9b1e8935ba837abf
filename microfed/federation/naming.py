"""Module Federation identifier normalisation.

The federation runtime registers every container under a JavaScript
identifier, so project names like ``my-products-app`` have to be turned into
``myProductsApp`` before they can be used as a container name.
"""

from __future__ import annotations

import re

_HYPHEN_BREAK = re.compile(r"-([a-z])")
# An underscore only survives as a word break before a lowercase letter.
_LOOSE_UNDERSCORE = re.compile(r"_(?![a-z])")
_DISALLOWED = re.compile(r"[^A-Za-z0-9_]")
_ALNUM = re.compile(r"[A-Za-z0-9]")
_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def normalize(raw: str) -> str:
    """Convert a free-form name into a federation container identifier.

    Hyphen word breaks are camel-cased, an underscore followed by a lowercase
    letter is kept, every other character outside ``[A-Za-z0-9]`` is dropped
    and a leading digit gets an ``_`` prefix.  A name with no letter or digit
    left normalises to ``""``; callers must treat that as invalid.

    Examples::

        normalize("my-remote-app") -> "myRemoteApp"
        normalize("user_service")  -> "user_service"
        normalize("a_B")           -> "aB"
        normalize("2fast")         -> "_2fast"
    """
    camel = _HYPHEN_BREAK.sub(lambda m: m.group(1).upper(), raw)
    cleaned = _DISALLOWED.sub("", _LOOSE_UNDERSCORE.sub("", camel))
    if not _ALNUM.search(cleaned):
        return ""
    if cleaned[0].isdigit():
        return f"_{cleaned}"
    return cleaned


def is_valid_identifier(name: str) -> bool:
    """Return ``True`` if *name* is a valid JavaScript identifier (ASCII subset)."""
    return bool(_IDENTIFIER.match(name))
