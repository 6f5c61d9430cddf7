"""Naming policy exports."""

from .policy_functions import (
    NAMING_POLICIES,
    NamingPolicy,
    camel_case,
    identity,
    kebab_case,
    pascal_case,
    resolve_naming_policy,
    snake_case,
    split_words,
)

__all__ = [
    "NAMING_POLICIES",
    "NamingPolicy",
    "camel_case",
    "identity",
    "kebab_case",
    "pascal_case",
    "resolve_naming_policy",
    "snake_case",
    "split_words",
]
