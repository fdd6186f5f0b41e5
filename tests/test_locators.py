import pytest

from card_order_qa.actions.locators import DEFAULT_LOCATORS, LocatorContract
from card_order_qa.data.structures import FieldKey


def test_default_selectors_follow_the_page_contract():
    assert DEFAULT_LOCATORS.container(FieldKey.CITY) == "[data-test-id=city]"
    assert DEFAULT_LOCATORS.input(FieldKey.PHONE) == "[data-test-id=phone] input"
    assert DEFAULT_LOCATORS.invalid_container(FieldKey.AGREEMENT) == "[data-test-id=agreement].input_invalid"
    assert DEFAULT_LOCATORS.error_message(FieldKey.NAME) == "[data-test-id=name].input_invalid .input__sub"
    assert DEFAULT_LOCATORS.container(FieldKey.SUBMIT) == "button"


def test_every_field_has_exactly_one_container():
    containers = {DEFAULT_LOCATORS.container(key) for key in FieldKey}
    assert len(containers) == len(FieldKey)


def test_overrides_accept_field_names():
    contract = LocatorContract.from_overrides({"test_ids": {"city": "town"}, "submit": "form button"})
    assert contract.container(FieldKey.CITY) == "[data-test-id=town]"
    assert contract.container(FieldKey.DATE) == "[data-test-id=date]"
    assert contract.submit == "form button"


def test_unknown_field_name_in_overrides_is_rejected():
    with pytest.raises(ValueError):
        LocatorContract.from_overrides({"test_ids": {"surname": "surname"}})


def test_contract_is_immutable():
    with pytest.raises(Exception):
        DEFAULT_LOCATORS.submit = "input[type=submit]"
