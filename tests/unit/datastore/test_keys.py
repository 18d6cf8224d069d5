"""Tests for hierarchical document keys."""

import pytest

from clientele.datastore.keys import Key, PathElement


class TestKeyConstruction:
    """Tests for building and parsing keys."""

    def test_of_builds_path(self) -> None:
        key = Key.of("Customer", "c1", "Membership", "c2")

        assert key.path == (PathElement("Customer", "c1"), PathElement("Membership", "c2"))
        assert key.kind == "Membership"
        assert key.id == "c2"

    def test_string_form(self) -> None:
        key = Key.of("Customer", "c1", "Membership", "c2")
        assert str(key) == "Customer/c1/Membership/c2"

    def test_parse_inverts_str(self) -> None:
        key = Key.of("Customer", "c1", "Membership", "c2", "CustomerProductPriceAdjustment", "c3")
        assert Key.parse(str(key)) == key

    @pytest.mark.parametrize("parts", [(), ("Customer",), ("Customer", "c1", "Membership")])
    def test_of_rejects_unpaired_parts(self, parts: tuple[str, ...]) -> None:
        with pytest.raises(ValueError):
            Key.of(*parts)

    def test_rejects_empty_id(self) -> None:
        with pytest.raises(ValueError):
            Key.of("Customer", "")

    def test_rejects_separator_in_id(self) -> None:
        with pytest.raises(ValueError):
            Key.of("Customer", "a/b")

    def test_keys_are_hashable(self) -> None:
        assert {Key.of("Customer", "c1"), Key.of("Customer", "c1")} == {
            Key.of("Customer", "c1")
        }


class TestKeyNavigation:
    """Tests for parent, child and ancestry."""

    def test_parent(self) -> None:
        key = Key.of("Customer", "c1", "Membership", "c2")

        assert key.parent == Key.of("Customer", "c1")
        assert Key.of("Customer", "c1").parent is None

    def test_child(self) -> None:
        assert Key.of("Customer", "c1").child("Membership", "c2") == Key.of(
            "Customer", "c1", "Membership", "c2"
        )

    def test_is_ancestor_of(self) -> None:
        customer = Key.of("Customer", "c1")
        adjustment = Key.of("Customer", "c1", "Membership", "m1", "Adj", "a1")

        assert customer.is_ancestor_of(adjustment)
        assert not adjustment.is_ancestor_of(customer)
        assert not customer.is_ancestor_of(customer)

    def test_prefix_of_id_is_not_ancestor(self) -> None:
        """Ancestry compares whole path elements, not string prefixes."""
        assert not Key.of("Customer", "c1").is_ancestor_of(
            Key.of("Customer", "c10", "Membership", "m1")
        )

    def test_ancestor_id(self) -> None:
        key = Key.of("Customer", "c1", "Membership", "m1", "Adj", "a1")

        assert key.ancestor_id("Membership") == "m1"
        assert key.ancestor_id("Customer") == "c1"
        assert key.ancestor_id("Adj") is None
        assert key.ancestor_id("Supplier") is None
