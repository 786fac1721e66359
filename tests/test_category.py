"""Tests for the Category model."""

import pytest

from mcc_registry.models.category import Category, normalize_category_id
from mcc_registry.models.code import Code


@pytest.fixture
def airlines() -> Category:
    return Category("airlines", name="Airlines", codes=("3000-3350", "4511"))


class TestConstruction:
    def test_id_is_normalized(self) -> None:
        assert Category("  Gambling ").id == "gambling"

    def test_codes_none_becomes_empty(self) -> None:
        assert Category("empty", codes=None).codes == ()

    def test_single_entry_is_wrapped(self) -> None:
        assert Category("crypto", codes="6051").codes == ("6051",)

    def test_integer_entries_are_padded(self) -> None:
        assert Category("vets", codes=[742, "5411"]).codes == ("0742", "5411")

    def test_entries_keep_stored_order(self) -> None:
        category = Category("mixed", codes=["7995", "3000-3350", "4511"])
        assert category.codes == ("7995", "3000-3350", "4511")

    def test_from_record(self) -> None:
        category = Category.from_record(
            "Gambling",
            {"name": "Gambling", "description": "Betting", "codes": ["7995"]},
        )
        assert category.id == "gambling"
        assert category.description == "Betting"
        assert category.codes == ("7995",)

    def test_normalize_category_id(self) -> None:
        assert normalize_category_id(" Airlines ") == "airlines"
        assert normalize_category_id(Category("Lodging")) == "lodging"


class TestIncludes:
    def test_single_entry(self, airlines: Category) -> None:
        assert airlines.includes("4511")
        assert not airlines.includes("4512")

    def test_range_entry_is_inclusive(self, airlines: Category) -> None:
        assert airlines.includes("3000")
        assert airlines.includes("3200")
        assert airlines.includes("3350")
        assert not airlines.includes("3351")
        assert not airlines.includes("2999")

    def test_accepts_int_and_code(self, airlines: Category) -> None:
        assert airlines.includes(3100)
        assert airlines.includes(Code("4511"))

    def test_short_entries_are_padded(self) -> None:
        category = Category("short", codes=("742", "700-799"))
        assert category.includes("0742")
        assert category.includes(750)

    def test_malformed_values_are_excluded(self, airlines: Category) -> None:
        assert not airlines.includes("abc")
        assert not airlines.includes("12345")

    def test_empty_category_includes_nothing(self) -> None:
        assert not Category("empty").includes("5411")

    def test_in_operator(self, airlines: Category) -> None:
        assert "4511" in airlines
        assert "5411" not in airlines


class TestIdentity:
    def test_equality_by_id(self) -> None:
        assert Category("gambling", name="A") == Category("Gambling", name="B")
        assert Category("gambling") != Category("adult")

    def test_hashable(self) -> None:
        assert len({Category("gambling"), Category("GAMBLING"), Category("adult")}) == 2

    def test_str_is_name(self, airlines: Category) -> None:
        assert str(airlines) == "Airlines"
        assert "codes_count=2" in repr(airlines)

    def test_to_record(self, airlines: Category) -> None:
        assert airlines.to_record() == {
            "id": "airlines",
            "name": "Airlines",
            "description": "",
            "codes": ["3000-3350", "4511"],
        }
