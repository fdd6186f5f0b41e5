import asyncio
import json

import pytest

from card_order_qa.config import build_config
from card_order_qa.data.structures import FailureKind, FieldError, FieldKey, FormInput, Scenario, ScenarioStatus, Success
from card_order_qa.executor import test_runners as runners_module
from card_order_qa.executor.parallel_executor import ParallelScenarioExecutor
from card_order_qa.executor.test_runners import ScenarioRunner
from card_order_qa.testers.messages import NAME_FORMAT_ERROR, SUCCESS_MESSAGE
from card_order_qa.testers.scenarios import SCENARIOS, select_scenarios
from tests.fakes import FakePage, make_form


class FakeSession:
    def __init__(self, session_id, page):
        self.session_id = session_id
        self.page = page
        self.driver = None


class FakeSessionManager:
    def __init__(self, page_factory=FakePage):
        self.page_factory = page_factory
        self.created = []
        self.closed = []
        self.live = 0
        self.max_live = 0

    async def create_session(self, browser_config=None):
        session = FakeSession(f"s{len(self.created)}", self.page_factory())
        self.created.append(session)
        self.live += 1
        self.max_live = max(self.max_live, self.live)
        return session

    async def close_session(self, session_id):
        self.closed.append(session_id)
        self.live -= 1

    async def close_all_sessions(self):
        pass


class FakeFormSession:
    @classmethod
    async def open(cls, browser_session, config):
        # give sibling scenarios a chance to start concurrently
        await asyncio.sleep(0.01)
        return make_form(browser_session.page)


@pytest.fixture
def config(tmp_path):
    return build_config({"report_dir": str(tmp_path), "poll_interval_ms": 10, "wait_timeout_ms": 1000})


@pytest.fixture(autouse=True)
def fake_form_session(monkeypatch):
    monkeypatch.setattr(runners_module, "FormSession", FakeFormSession)


def scenario(name, expected, /, **values):
    form_input = FormInput(**values)
    return Scenario(name=name, title=name, build_input=lambda: form_input, expected=expected)


VALID = dict(city="Москва", name="Иванов Иван", phone="+79270000000", agree=True)


@pytest.mark.asyncio
async def test_passing_scenario_records_actual_and_closes_session(config):
    manager = FakeSessionManager()
    runner = ScenarioRunner(config, session_manager=manager)

    result = await runner.run(scenario("ok", Success(message=SUCCESS_MESSAGE), **VALID))

    assert result.status == ScenarioStatus.PASSED
    assert result.actual == SUCCESS_MESSAGE
    assert result.duration is not None
    assert manager.closed == ["s0"]


@pytest.mark.asyncio
async def test_text_mismatch_is_reported_with_both_values(config):
    manager = FakeSessionManager()
    runner = ScenarioRunner(config, session_manager=manager)

    result = await runner.run(
        scenario("name", FieldError(field=FieldKey.NAME, message="Другой текст"), **{**VALID, "name": "John Smith"})
    )

    assert result.status == ScenarioStatus.FAILED
    assert result.failure_kind == FailureKind.ASSERTION_MISMATCH
    assert result.expected == "Другой текст"
    assert result.actual == NAME_FORMAT_ERROR
    assert manager.closed == ["s0"]


@pytest.mark.asyncio
async def test_timeout_is_a_distinct_failure_and_session_is_closed(config):
    manager = FakeSessionManager(page_factory=lambda: FakePage(settles=False))
    runner = ScenarioRunner(config.model_copy(update={"wait_timeout_ms": 50}), session_manager=manager)

    result = await runner.run(scenario("slow", Success(message=SUCCESS_MESSAGE), **VALID))

    assert result.failure_kind == FailureKind.TIMEOUT
    assert manager.closed == ["s0"]


@pytest.mark.asyncio
async def test_missing_element_is_a_distinct_failure(config):
    manager = FakeSessionManager(page_factory=lambda: FakePage(missing=("submit",)))
    runner = ScenarioRunner(config, session_manager=manager)

    result = await runner.run(scenario("broken", Success(message=SUCCESS_MESSAGE), **VALID))

    assert result.failure_kind == FailureKind.ELEMENT_NOT_FOUND
    assert manager.closed == ["s0"]


@pytest.mark.asyncio
async def test_parallel_run_isolates_failures_and_writes_report(config):
    executor = ParallelScenarioExecutor(config)
    manager = FakeSessionManager()
    executor.session_manager = manager
    executor.runner.session_manager = manager

    scenarios = [
        scenario("first", Success(message=SUCCESS_MESSAGE), **VALID),
        scenario("second", Success(message="не тот текст"), **VALID),
        scenario("third", FieldError(field=FieldKey.AGREEMENT), **{**VALID, "agree": False}),
    ]
    run_session = await executor.execute(scenarios)

    stats = run_session.get_summary_stats()
    assert stats["total"] == 3
    assert stats["passed"] == 2
    assert stats["failures_by_kind"]["assertion_mismatch"] == 1
    assert not run_session.all_passed
    assert sorted(manager.closed) == ["s0", "s1", "s2"]
    assert manager.max_live <= config.max_concurrent_sessions

    with open(run_session.report_path, encoding="utf-8") as f:
        report = json.load(f)
    assert [r["scenario_name"] for r in report["results"]] == ["first", "second", "third"]
    assert report["failures"][0]["scenario"] == "second"


@pytest.mark.asyncio
async def test_crash_outside_runner_does_not_abort_siblings(config, monkeypatch):
    executor = ParallelScenarioExecutor(config, write_report=False)
    manager = FakeSessionManager()
    executor.session_manager = manager
    executor.runner.session_manager = manager

    original_run = executor.runner.run

    async def flaky_run(s):
        if s.name == "boom":
            raise RuntimeError("runner crashed")
        return await original_run(s)

    monkeypatch.setattr(executor.runner, "run", flaky_run)

    run_session = await executor.execute(
        [scenario("boom", Success(message=SUCCESS_MESSAGE), **VALID), scenario("ok", Success(message=SUCCESS_MESSAGE), **VALID)]
    )

    assert run_session.results["boom"].failure_kind == FailureKind.ERROR
    assert run_session.results["ok"].status == ScenarioStatus.PASSED
    assert run_session.report_path is None


@pytest.mark.asyncio
async def test_canonical_suite_passes_against_conforming_page(config):
    executor = ParallelScenarioExecutor(config, write_report=False)
    manager = FakeSessionManager()
    executor.session_manager = manager
    executor.runner.session_manager = manager

    run_session = await executor.execute(SCENARIOS)

    failures = {name: r.error_message for name, r in run_session.results.items() if r.status != ScenarioStatus.PASSED}
    assert failures == {}
    assert run_session.all_passed


def test_scenario_names_are_unique():
    names = [s.name for s in SCENARIOS]
    assert len(names) == len(set(names))


def test_select_scenarios_filters_by_substring():
    assert [s.name for s in select_scenarios(["empty"])] == ["empty_city", "empty_name", "empty_phone"]
    assert select_scenarios() == SCENARIOS