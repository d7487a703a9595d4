"""Name conventions for generated files and types.

A free-form name such as ``"user profile"``, ``"userProfile"`` or
``"UserProfileController"`` is split into words once, then rendered as a
lower-kebab file stem (``user-profile``) and a PascalCase type name
(``UserProfile``).  Role suffixes (``Controller``, ``Service``...) are handled
idempotently: a name that already carries the suffix never receives it twice.

Empty or punctuation-only names produce empty results; callers are expected
to reject them before generating anything.
"""

from __future__ import annotations

import re
from typing import NamedTuple

# Acronym runs ("HTTP" in "HTTPServer"), capitalised words, lowercase runs, digits.
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")


class DerivedName(NamedTuple):
    """The forms of one name used by templates."""

    file_stem: str
    type_name: str
    base_name: str


def split_words(value: str) -> list[str]:
    """Split *value* on separators and camel-case boundaries."""
    words: list[str] = []
    for chunk in re.split(r"[^A-Za-z0-9]+", value.strip()):
        if chunk:
            words.extend(_WORD_RE.findall(chunk))
    return words


def kebab_case(value: str) -> str:
    """``"User Profile"`` -> ``"user-profile"``."""
    return "-".join(word.lower() for word in split_words(value))


def snake_case(value: str) -> str:
    """``"UserProfile"`` -> ``"user_profile"``."""
    return "_".join(word.lower() for word in split_words(value))


def pascal_case(value: str) -> str:
    """``"user-profile"`` -> ``"UserProfile"``; acronyms are kept as written."""
    return "".join(word[:1].upper() + word[1:] for word in split_words(value))


def camel_case(value: str) -> str:
    """``"user-profile"`` -> ``"userProfile"``."""
    pascal = pascal_case(value)
    return pascal[:1].lower() + pascal[1:] if pascal else ""


def has_role_suffix(name: str, role: str) -> bool:
    """Return ``True`` if the last word of *name* is *role* (case-insensitive)."""
    words = split_words(name)
    role_words = [w.lower() for w in split_words(role)]
    if not role_words or len(words) < len(role_words):
        return False
    return [w.lower() for w in words[-len(role_words):]] == role_words


def strip_role_suffix(name: str, role: str) -> str:
    """Drop a trailing *role* word from *name*, if present.

    The name is returned as a space-joined word list so the result can be
    fed straight back into the case helpers.
    """
    words = split_words(name)
    if has_role_suffix(name, role):
        words = words[: len(words) - len(split_words(role))]
    return " ".join(words)


def with_role_suffix(name: str, role: str) -> str:
    """PascalCase *name* ending in *role* exactly once."""
    base = pascal_case(strip_role_suffix(name, role))
    return f"{base}{pascal_case(role)}" if base else ""


def derive_name(name: str, role: str | None = None) -> DerivedName:
    """Derive the file stem and type name for *name*.

    When *role* is given, a trailing role word is removed before deriving, so
    ``derive_name("UserController", "controller")`` yields stem ``user`` and
    type ``User``.  Callers append the role themselves.
    """
    base = strip_role_suffix(name, role) if role else " ".join(split_words(name))
    return DerivedName(
        file_stem=kebab_case(base),
        type_name=pascal_case(base),
        base_name=base,
    )


# Role words a schematic name may already end with.
ROLE_SUFFIXES: tuple[str, ...] = ("controller", "service", "middleware", "route", "model", "interface")


def derive_base_name(name: str, roles: tuple[str, ...] = ROLE_SUFFIXES) -> DerivedName:
    """Like :func:`derive_name`, but removes whichever role in *roles* ends *name*.

    Every file of one schematic request shares this base, so
    ``"OrderService"`` yields stem ``order`` for the controller, service,
    route and test alike.
    """
    for role in roles:
        if has_role_suffix(name, role):
            return derive_name(name, role)
    return derive_name(name)
