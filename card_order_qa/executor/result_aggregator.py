import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, List

from card_order_qa.data.structures import ScenarioRunSession, ScenarioStatus


class ResultAggregator:
    """Summarizes a scenario run and writes it to disk."""

    def aggregate_results(self, run_session: ScenarioRunSession) -> Dict[str, Any]:
        failures: List[Dict[str, Any]] = []
        for result in run_session.results.values():
            if result.status != ScenarioStatus.PASSED:
                failures.append(
                    {
                        "scenario": result.scenario_name,
                        "title": result.title,
                        "kind": result.failure_kind.value if result.failure_kind else None,
                        "expected": result.expected,
                        "actual": result.actual,
                        "message": result.error_message,
                    }
                )

        return {
            "session_id": run_session.session_id,
            "base_url": run_session.base_url,
            "summary": run_session.get_summary_stats(),
            "failures": failures,
            "results": [run_session.results[name].to_dict() for name in run_session.scenario_names
                        if name in run_session.results],
        }

    def generate_json_report(self, run_session: ScenarioRunSession, report_dir: str = "./reports") -> str:
        """Write ``report.json`` into a timestamped folder under ``report_dir``.

        Returns:
            Path of the written report.
        """
        timestamp = (run_session.start_time or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")
        folder = os.path.join(report_dir, f"{timestamp}_{run_session.session_id[:8]}")
        os.makedirs(folder, exist_ok=True)

        report_path = os.path.join(folder, "report.json")
        with open(report_path, "w", encoding="utf-8") as f:
            json.dump(self.aggregate_results(run_session), f, ensure_ascii=False, indent=2, default=str)

        logging.info(f"JSON report written to {report_path}")
        return report_path
