"""Naming policies mapping internal field names to wire-names."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping

NamingPolicy = Callable[[str], str]

_SEPARATOR_PATTERN = re.compile(r"[\W_]+")


def split_words(name: str) -> list[str]:
    """Split an identifier on underscores, hyphens, spaces and case boundaries.

    Letters of any script count as word characters; case boundaries use
    ``str.isupper``/``str.islower`` so ``größe`` stays one word.
    """
    words: list[str] = []
    for chunk in _SEPARATOR_PATTERN.split(name):
        start = 0
        for index in range(1, len(chunk)):
            if _is_boundary(chunk, index):
                words.append(chunk[start:index])
                start = index
        if chunk:
            words.append(chunk[start:])
    return words


def _is_boundary(chunk: str, index: int) -> bool:
    previous, current = chunk[index - 1], chunk[index]
    following = chunk[index + 1 : index + 2]
    if previous.isdigit() != current.isdigit():
        return True
    if current.isupper() and not previous.isupper() and not previous.isdigit():
        return True
    # Last capital of an acronym starts the next word: HTTPServer -> HTTP, Server.
    return previous.isupper() and current.isupper() and following.islower()


def identity(name: str) -> str:
    return name


def camel_case(name: str) -> str:
    """Return `name` as lowerCamelCase, e.g. ``first_name`` -> ``firstName``."""
    words = split_words(name)
    if not words:
        return name
    head, *tail = words
    return _leading_underscores(name) + head.lower() + "".join(_capitalize(word) for word in tail)


def pascal_case(name: str) -> str:
    """Return `name` as PascalCase, e.g. ``first_name`` -> ``FirstName``."""
    words = split_words(name)
    if not words:
        return name
    return _leading_underscores(name) + "".join(_capitalize(word) for word in words)


def snake_case(name: str) -> str:
    """Return `name` as snake_case, e.g. ``firstName`` -> ``first_name``."""
    words = split_words(name)
    if not words:
        return name
    return _leading_underscores(name) + "_".join(word.lower() for word in words)


def kebab_case(name: str) -> str:
    """Return `name` as kebab-case, e.g. ``firstName`` -> ``first-name``."""
    words = split_words(name)
    if not words:
        return name
    return _leading_underscores(name) + "-".join(word.lower() for word in words)


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def _leading_underscores(name: str) -> str:
    """Keep a private-member prefix so ``_id`` and ``id`` stay distinct."""
    return name[: len(name) - len(name.lstrip("_"))]


NAMING_POLICIES: Mapping[str, NamingPolicy] = {
    "identity": identity,
    "camel_case": camel_case,
    "pascal_case": pascal_case,
    "snake_case": snake_case,
    "kebab_case": kebab_case,
}


def resolve_naming_policy(policy_name: str) -> NamingPolicy:
    """Return the naming policy registered under `policy_name`.

    Raises:
      ValueError: If no policy is registered under that name.
    """
    try:
        return NAMING_POLICIES[policy_name]
    except KeyError as exc:
        available = ", ".join(sorted(NAMING_POLICIES))
        raise ValueError(
            f"Unknown naming policy '{policy_name}'. Expected one of: {available}."
        ) from exc
