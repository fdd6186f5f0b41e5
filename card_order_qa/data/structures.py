import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from card_order_qa.exceptions import AssertionMismatch


class FieldKey(str, Enum):
    """Semantic fields of the order form."""

    CITY = "city"
    DATE = "date"
    NAME = "name"
    PHONE = "phone"
    AGREEMENT = "agreement"
    SUBMIT = "submit"

    def __str__(self) -> str:
        return self.value


# Order in which FormSession fills the form
FILL_ORDER = (FieldKey.CITY, FieldKey.DATE, FieldKey.NAME, FieldKey.PHONE)


class FormInput(BaseModel):
    """Values to enter into the form.

    ``None`` leaves a text field untouched; an empty string clears it explicitly so the
    required-field validation fires.
    """

    model_config = ConfigDict(frozen=True)

    city: Optional[str] = None
    date: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    agree: bool = False

    def text_value(self, field: FieldKey) -> Optional[str]:
        return getattr(self, field.value)


class Success(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    message: str


class FieldError(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["field_error"] = "field_error"
    field: FieldKey
    message: str = ""


ValidationOutcome = Union[Success, FieldError]


class AssertionResult(BaseModel):
    """Outcome of comparing an observed form state against an expected literal."""

    passed: bool
    expected: Any = None
    actual: Any = None
    field: Optional[FieldKey] = None
    observed: Optional[Union[Success, FieldError]] = None

    @property
    def message(self) -> str:
        where = f" [{self.field.value}]" if self.field else ""
        verdict = "OK" if self.passed else "MISMATCH"
        return f"{verdict}{where}: expected {self.expected!r}, actual {self.actual!r}"

    def raise_for_mismatch(self) -> "AssertionResult":
        if not self.passed:
            raise AssertionMismatch(
                expected=self.expected,
                actual=self.actual,
                field=self.field.value if self.field else None,
            )
        return self


class ScenarioStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"


class FailureKind(str, Enum):
    TIMEOUT = "timeout"
    ASSERTION_MISMATCH = "assertion_mismatch"
    ELEMENT_NOT_FOUND = "element_not_found"
    ERROR = "error"


class Scenario(BaseModel):
    """One independent input/outcome pair of the acceptance suite."""

    model_config = ConfigDict(frozen=True)

    name: str
    title: str
    build_input: Callable[[], FormInput]
    expected: Union[Success, FieldError]


class ScenarioResult(BaseModel):
    scenario_name: str
    title: str = ""
    status: ScenarioStatus = ScenarioStatus.PENDING
    failure_kind: Optional[FailureKind] = None
    expected: Any = None
    actual: Any = None
    error_message: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def duration(self) -> Optional[float]:
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json")
        data["duration"] = self.duration
        return data


class ScenarioRunSession(BaseModel):
    """A batch of scenario executions and their results."""

    session_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    base_url: str
    scenario_names: List[str] = Field(default_factory=list)
    results: Dict[str, ScenarioResult] = Field(default_factory=dict)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    report_path: Optional[str] = None

    def start_session(self):
        self.start_time = datetime.now()

    def complete_session(self):
        self.end_time = datetime.now()

    def update_result(self, result: ScenarioResult):
        self.results[result.scenario_name] = result

    def get_summary_stats(self) -> Dict[str, Any]:
        results = list(self.results.values())
        by_kind = {kind.value: 0 for kind in FailureKind}
        for result in results:
            if result.failure_kind is not None:
                by_kind[result.failure_kind.value] += 1
        passed = sum(1 for r in results if r.status == ScenarioStatus.PASSED)
        return {
            "total": len(results),
            "passed": passed,
            "failed": len(results) - passed,
            "failures_by_kind": by_kind,
            "duration": (self.end_time - self.start_time).total_seconds()
            if self.start_time and self.end_time
            else None,
        }

    @property
    def all_passed(self) -> bool:
        return bool(self.results) and all(r.status == ScenarioStatus.PASSED for r in self.results.values())
