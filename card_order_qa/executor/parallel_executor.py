import asyncio
import logging
from typing import List

from card_order_qa.browser.session import BrowserSessionManager
from card_order_qa.config import HarnessConfig
from card_order_qa.data.structures import (
    FailureKind,
    Scenario,
    ScenarioResult,
    ScenarioRunSession,
    ScenarioStatus,
)
from card_order_qa.executor.result_aggregator import ResultAggregator
from card_order_qa.executor.test_runners import ScenarioRunner, expected_value


class ParallelScenarioExecutor:
    """Runs scenarios concurrently, each in an isolated browser session."""

    def __init__(self, config: HarnessConfig, write_report: bool = True):
        self.config = config
        self.max_concurrent_sessions = config.max_concurrent_sessions
        self.session_manager = BrowserSessionManager()
        self.runner = ScenarioRunner(config, session_manager=self.session_manager)
        self.result_aggregator = ResultAggregator()
        self.write_report = write_report

    async def execute(self, scenarios: List[Scenario]) -> ScenarioRunSession:
        run_session = ScenarioRunSession(
            base_url=self.config.base_url,
            scenario_names=[s.name for s in scenarios],
        )
        logging.info(f"Starting scenario run {run_session.session_id} with {len(scenarios)} scenarios")
        run_session.start_session()

        if not scenarios:
            logging.warning("No scenarios selected")
            run_session.complete_session()
            return run_session

        semaphore = asyncio.Semaphore(min(self.max_concurrent_sessions, len(scenarios)))

        async def run_one(scenario: Scenario) -> ScenarioResult:
            async with semaphore:
                return await self.runner.run(scenario)

        try:
            results = await asyncio.gather(*[run_one(s) for s in scenarios], return_exceptions=True)
            for scenario, result in zip(scenarios, results):
                if isinstance(result, BaseException):
                    # ScenarioRunner records its own failures; this covers errors outside it
                    logging.error(f"Scenario {scenario.name} crashed: {result}")
                    result = ScenarioResult(
                        scenario_name=scenario.name,
                        title=scenario.title,
                        status=ScenarioStatus.FAILED,
                        failure_kind=FailureKind.ERROR,
                        expected=expected_value(scenario),
                        error_message=str(result),
                    )
                run_session.update_result(result)
        finally:
            run_session.complete_session()
            await self.session_manager.close_all_sessions()

        if self.write_report:
            run_session.report_path = self.result_aggregator.generate_json_report(
                run_session, report_dir=self.config.report_dir
            )

        stats = run_session.get_summary_stats()
        logging.info(f"Scenario run completed: {stats['passed']}/{stats['total']} passed")
        return run_session
