from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

from card_order_qa.data.structures import FieldKey

DEFAULT_TEST_IDS: Dict[FieldKey, str] = {
    FieldKey.CITY: "city",
    FieldKey.DATE: "date",
    FieldKey.NAME: "name",
    FieldKey.PHONE: "phone",
    FieldKey.AGREEMENT: "agreement",
}


class LocatorContract(BaseModel):
    """Selectors for every element of the order form the harness touches.

    Field containers are identified by their ``data-test-id`` attribute. A container carries
    ``invalid_class`` after failed client-side validation, and its inline error text lives in
    the ``error_text`` sub-element.
    """

    model_config = ConfigDict(frozen=True)

    test_id_attribute: str = "data-test-id"
    test_ids: Dict[FieldKey, str] = Field(default_factory=lambda: dict(DEFAULT_TEST_IDS))
    input_control: str = "input"
    invalid_class: str = "input_invalid"
    error_text: str = ".input__sub"
    submit: str = "button"
    success: str = "[data-test-id=order-success]"

    def container(self, field: FieldKey) -> str:
        if field == FieldKey.SUBMIT:
            return self.submit
        try:
            test_id = self.test_ids[field]
        except KeyError:
            raise KeyError(f"No test id bound for field '{field}'") from None
        return f"[{self.test_id_attribute}={test_id}]"

    def input(self, field: FieldKey) -> str:
        """The interactive control nested under the field's container."""
        return f"{self.container(field)} {self.input_control}"

    def invalid_container(self, field: FieldKey) -> str:
        """The field's container, matched only while it carries the invalid marker."""
        return f"{self.container(field)}.{self.invalid_class}"

    def error_message(self, field: FieldKey) -> str:
        return f"{self.invalid_container(field)} {self.error_text}"

    @classmethod
    def from_overrides(cls, overrides: Dict = None) -> "LocatorContract":
        """Build a contract from config, where ``test_ids`` may be keyed by field name."""
        overrides = dict(overrides or {})
        if "test_ids" in overrides:
            test_ids = dict(DEFAULT_TEST_IDS)
            test_ids.update({FieldKey(k): v for k, v in overrides["test_ids"].items()})
            overrides["test_ids"] = test_ids
        return cls(**overrides)


DEFAULT_LOCATORS = LocatorContract()
