"""Tests for the Code model."""

import pytest

from mcc_registry.config import DescriptionSource, Settings
from mcc_registry.errors import InvalidFormat
from mcc_registry.models.category import Category
from mcc_registry.models.code import RECORD_FIELDS, Code
from mcc_registry.services.collection import Collection


@pytest.fixture
def grocery() -> Code:
    return Code(
        mcc="5411",
        iso_description="Grocery Stores, Supermarkets",
        stripe_description="Grocery Stores, Supermarkets",
        stripe_code="grocery_stores_supermarkets",
        visa_description="Grocery Stores and Supermarkets",
        irs_reportable=True,
    )


class TestConstruction:
    def test_mcc_is_normalized(self) -> None:
        assert Code(742).mcc == "0742"
        assert Code(" 5411 ").mcc == "5411"

    def test_malformed_mcc_raises(self) -> None:
        with pytest.raises(InvalidFormat):
            Code("54AB")

    def test_blank_text_fields_become_none(self) -> None:
        code = Code("5411", iso_description="   ", stripe_code="")
        assert code.iso_description is None
        assert code.stripe_code is None

    def test_text_fields_are_trimmed(self) -> None:
        code = Code("5411", iso_description="  Grocery  ")
        assert code.iso_description == "Grocery"

    def test_irs_reportable_must_be_bool_or_none(self) -> None:
        with pytest.raises(TypeError):
            Code("5411", irs_reportable="yes")

    def test_is_immutable(self, grocery: Code) -> None:
        with pytest.raises(AttributeError):
            grocery.mcc = "5499"  # type: ignore[misc]

    def test_from_record_ignores_unknown_keys(self) -> None:
        code = Code.from_record({"mcc": 742, "iso_description": "Vets", "extra": "x"})
        assert code.mcc == "0742"
        assert code.iso_description == "Vets"
        assert code.irs_reportable is None


class TestDescription:
    def test_default_source_is_iso(self, grocery: Code) -> None:
        assert grocery.description(settings=Settings()) == "Grocery Stores, Supermarkets"

    def test_explicit_source(self, grocery: Code) -> None:
        assert grocery.description("visa") == "Grocery Stores and Supermarkets"
        assert grocery.description(DescriptionSource.VISA) == "Grocery Stores and Supermarkets"

    def test_configured_default_source(self, grocery: Code) -> None:
        settings = Settings(default_description_source="visa")
        assert grocery.description(settings=settings) == "Grocery Stores and Supermarkets"

    def test_falls_back_in_source_order(self) -> None:
        """A missing preferred source falls back to the first present one."""
        code = Code("9406", stripe_description="Stripe text", irs_description="IRS text")
        assert code.description("iso") == "Stripe text"
        assert code.description("irs") == "IRS text"
        assert code.description("amex") == "Stripe text"

    def test_unknown_source_falls_back(self, grocery: Code) -> None:
        assert grocery.description("nonexistent") == "Grocery Stores, Supermarkets"

    def test_no_descriptions_returns_none(self) -> None:
        assert Code("9999").description("iso") is None

    def test_stripe_code_is_not_a_description(self) -> None:
        code = Code("5411", stripe_code="grocery_stores_supermarkets")
        assert code.description("stripe") is None


class TestIrsReportable:
    def test_true_only_when_explicitly_true(self) -> None:
        assert Code("5411", irs_reportable=True).is_irs_reportable() is True
        assert Code("5411", irs_reportable=False).is_irs_reportable() is False
        assert Code("5411").is_irs_reportable() is False


class TestIdentity:
    def test_equal_to_same_code(self) -> None:
        assert Code("5411") == Code(5411, iso_description="Other text")

    def test_equal_to_string_and_int(self) -> None:
        code = Code("0742")
        assert code == "0742"
        assert code == "742"
        assert code == 742

    def test_not_equal_to_other_values(self) -> None:
        code = Code("5411")
        assert code != "5499"
        assert code != "abc"
        assert code != 5411.0
        assert code != True  # noqa: E712

    def test_hash_matches_mcc(self) -> None:
        assert len({Code("5411"), Code(5411), Code("5499")}) == 2

    def test_conversions(self, grocery: Code) -> None:
        assert str(grocery) == "5411"
        assert int(Code("0742")) == 742
        assert "5411" in repr(grocery)

    def test_to_record_has_every_field(self, grocery: Code) -> None:
        record = grocery.to_record()
        assert tuple(record) == RECORD_FIELDS
        assert record["mcc"] == "5411"
        assert record["amex_description"] is None


class TestMembership:
    def test_range(self, collection: Collection) -> None:
        assert Code("5411").range(collection).name == "Retail Outlet Services"

    def test_range_none_when_uncovered(self, collection: Collection) -> None:
        assert Code("6011").range(collection) is None

    def test_categories(self, collection: Collection) -> None:
        assert [c.id for c in Code("7995").categories(collection)] == ["gambling"]
        assert Code("5411").categories(collection) == ()

    def test_in_category_by_id(self, collection: Collection) -> None:
        assert Code("3100").in_category("airlines", collection)
        assert Code("7995").in_category(" Gambling ", collection)
        assert not Code("5411").in_category("gambling", collection)

    def test_in_category_by_instance(self, collection: Collection) -> None:
        gambling = collection.get_category("gambling")
        assert Code("9406").in_category(gambling, collection)

    def test_in_unknown_category_is_false(self, collection: Collection) -> None:
        assert not Code("7995").in_category("nope", collection)

    def test_in_category_uses_loaded_definition(self, collection: Collection) -> None:
        """A Category not in the collection is looked up by id."""
        stray = Category("gambling", codes=("5411",))
        assert not Code("5411").in_category(stray, collection)

    def test_uses_registry_without_collection(self, configured_registry: Collection) -> None:
        assert Code("7995").in_category("gambling")
        assert Code("3000").range().name == "Airlines"

    def test_public_view(self, collection: Collection) -> None:
        view = Code("7995", iso_description="Betting").to_public_view(collection)
        assert view["mcc"] == "7995"
        assert view["description"] == "Betting"
        assert view["categories"] == ["gambling"]
        assert view["range"] == "Business Services"
