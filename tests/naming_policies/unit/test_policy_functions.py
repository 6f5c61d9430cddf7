"""Naming policy tests."""

from __future__ import annotations

import pytest
from simple_record_codec.naming_policies import (
    NAMING_POLICIES,
    camel_case,
    identity,
    kebab_case,
    pascal_case,
    resolve_naming_policy,
    snake_case,
    split_words,
)


def test_split_words_handles_underscores_case_boundaries_and_acronyms() -> None:
    assert split_words("first_name") == ["first", "name"]
    assert split_words("firstName") == ["first", "Name"]
    assert split_words("HTTPServer") == ["HTTP", "Server"]
    assert split_words("address-line-2") == ["address", "line", "2"]


def test_split_words_keeps_non_ascii_letters() -> None:
    assert split_words("größe") == ["größe"]
    assert split_words("straßeNummer") == ["straße", "Nummer"]
    assert split_words("ÉtatCivil") == ["État", "Civil"]
    assert split_words("名前_2") == ["名前", "2"]


@pytest.mark.parametrize(
    ("policy", "name", "expected"),
    [
        (identity, "first_name", "first_name"),
        (camel_case, "first_name", "firstName"),
        (camel_case, "FirstName", "firstName"),
        (camel_case, "HTTPServer", "httpServer"),
        (pascal_case, "first_name", "FirstName"),
        (snake_case, "firstName", "first_name"),
        (kebab_case, "firstName", "first-name"),
        (camel_case, "größe", "größe"),
        (camel_case, "straße_nummer", "straßeNummer"),
        (snake_case, "ÉtatCivil", "état_civil"),
        (camel_case, "_id", "_id"),
        (snake_case, "__privateValue", "__private_value"),
    ],
)
def test_policies_map_names(policy, name: str, expected: str) -> None:
    assert policy(name) == expected


def test_policies_are_deterministic() -> None:
    for policy in NAMING_POLICIES.values():
        assert policy("postal_code") == policy("postal_code")


def test_names_without_words_are_returned_unchanged() -> None:
    assert camel_case("___") == "___"
    assert snake_case("") == ""


def test_distinct_names_can_collapse_under_a_policy() -> None:
    assert camel_case("first_name") == camel_case("firstName")


def test_non_ascii_and_private_names_do_not_collapse() -> None:
    assert camel_case("größe") != camel_case("gr_e")
    assert camel_case("_id") != camel_case("id")


def test_resolve_naming_policy_by_name() -> None:
    assert resolve_naming_policy("camel_case") is camel_case


def test_resolve_unknown_naming_policy_lists_available_policies() -> None:
    with pytest.raises(ValueError, match="Unknown naming policy 'shouting'"):
        resolve_naming_policy("shouting")
