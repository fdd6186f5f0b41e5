from .generator import VALID_PHONE, generate_date, generate_invalid_phone
from .structures import (
    FILL_ORDER,
    AssertionResult,
    FailureKind,
    FieldError,
    FieldKey,
    FormInput,
    Scenario,
    ScenarioResult,
    ScenarioRunSession,
    ScenarioStatus,
    Success,
    ValidationOutcome,
)

__all__ = [
    "FieldKey",
    "FILL_ORDER",
    "FormInput",
    "Success",
    "FieldError",
    "ValidationOutcome",
    "AssertionResult",
    "Scenario",
    "ScenarioStatus",
    "FailureKind",
    "ScenarioResult",
    "ScenarioRunSession",
    "VALID_PHONE",
    "generate_date",
    "generate_invalid_phone",
]
