from .parallel_executor import ParallelScenarioExecutor
from .result_aggregator import ResultAggregator
from .test_runners import ScenarioRunner, execute_scenario

__all__ = ["ParallelScenarioExecutor", "ResultAggregator", "ScenarioRunner", "execute_scenario"]
