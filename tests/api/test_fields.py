"""Testes para a codificação de field expansion."""

from __future__ import annotations

import pytest

from opengraph.api.fields import encode_fields


class TestEncodeFields:
    """Testes para encode_fields."""

    def test_list_joined_with_commas(self) -> None:
        assert encode_fields(["x", "y"]) == "x,y"

    def test_empty_mapping_is_empty_string(self) -> None:
        assert encode_fields({}) == ""

    def test_selection_set_becomes_parenthesized_list(self) -> None:
        """Chaves marcadas com 1 formam a lista de campos."""
        assert encode_fields({"a": {"b": 1, "c": 1}}) == "a(b,c)"

    def test_nested_mapping_uses_dot(self) -> None:
        assert encode_fields({"a": {"b": {"c": 1}}}) == "a.b(c)"

    def test_mapping_with_list_value(self) -> None:
        assert encode_fields({"friends": ["id", "name"]}) == "friends(id,name)"

    def test_modifiers_chain(self) -> None:
        value = {"friends": {"limit": 2, "fields": ["id", "name"]}}
        assert encode_fields(value) == "friends.limit(2).fields(id,name)"

    def test_list_mixing_scalars_and_expansions(self) -> None:
        value = ["id", {"albums": {"photos": ["picture"]}}]
        assert encode_fields(value) == "id,albums.photos(picture)"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("name", "name"), (10, "10"), (True, "true"), (False, "false")],
    )
    def test_scalars(self, value: object, expected: str) -> None:
        assert encode_fields(value) == expected

    def test_true_marker_is_selection(self) -> None:
        assert encode_fields({"a": {"b": True}}) == "a(b)"

    def test_modifier_equal_to_one_as_selection(self) -> None:
        """Valor 1 marca seleção de campo, não modificador."""
        assert encode_fields({"posts": {"limit": 1}}) == "posts(limit)"

    def test_modifier_equal_to_one_as_string(self) -> None:
        assert encode_fields({"posts": {"limit": "1"}}) == "posts.limit(1)"
