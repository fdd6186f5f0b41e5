#!/usr/bin/env python3
import argparse
import asyncio
import sys
import traceback

import requests
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from card_order_qa.config import load_config
from card_order_qa.data.structures import ScenarioStatus
from card_order_qa.exceptions import ConfigError
from card_order_qa.executor import ParallelScenarioExecutor
from card_order_qa.testers.scenarios import SCENARIOS, select_scenarios
from card_order_qa.utils.get_log import GetLog


def check_target_available(url, timeout=10.0):
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        print(f"❌ Target {url} is not reachable: {e}")
        return False
    if response.status_code >= 400:
        print(f"❌ Target {url} responded with status {response.status_code}")
        return False
    print(f"✅ Target {url} is up (status {response.status_code})")
    return True


async def check_playwright_browsers_async():
    try:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True)
            await browser.close()
        print("✅ Playwright browsers available")
        return True
    except PlaywrightError as e:
        print(f"⚠️ Playwright browsers unavailable: {e}")
        return False


def print_results(run_session):
    for name in run_session.scenario_names:
        result = run_session.results.get(name)
        if result is None:
            continue
        if result.status == ScenarioStatus.PASSED:
            print(f"✅ PASS  {name}  ({result.title})")
            continue
        print(f"❌ FAIL  {name}  ({result.title}) [{result.failure_kind.value}]")
        print(f"      expected: {result.expected!r}")
        print(f"      actual:   {result.actual!r}")
        if result.error_message:
            print(f"      error:    {result.error_message}")

    stats = run_session.get_summary_stats()
    print(f"🔢 Total scenarios: {stats['total']}")
    print(f"✅ Passed: {stats['passed']}")
    print(f"❌ Failed: {stats['failed']}")
    if run_session.report_path:
        print(f"JSON report path: {run_session.report_path}")


async def run_scenarios(config, scenarios):
    print("🔍 Checking target and Playwright browsers...")
    if not check_target_available(config.base_url):
        return 1
    if not await check_playwright_browsers_async():
        print("Please manually run: `playwright install chromium`, then retry.", file=sys.stderr)
        return 1

    print(f"⚙️ Concurrency: {config.max_concurrent_sessions}")
    executor = ParallelScenarioExecutor(config)
    run_session = await executor.execute(scenarios)
    print_results(run_session)
    return 0 if run_session.all_passed else 1


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Card order form acceptance scenarios")
    parser.add_argument("--config", "-c", help="YAML configuration file path (default: auto-search config/config.yaml)")
    parser.add_argument("--url", help="Base URL of the order form (overrides config and environment)")
    headless = parser.add_mutually_exclusive_group()
    headless.add_argument("--headless", dest="headless", action="store_true", default=None, help="Run browsers headless")
    headless.add_argument("--headed", dest="headless", action="store_false", help="Show browser windows")
    parser.add_argument(
        "--scenario", "-k", action="append", default=[], help="Run scenarios whose name contains this text (repeatable)"
    )
    parser.add_argument("--list", action="store_true", help="List scenarios and exit")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    if args.list:
        for scenario in SCENARIOS:
            print(f"{scenario.name:<22} {scenario.title}")
        return 0

    try:
        config = load_config(args.config, base_url=args.url, headless=args.headless)
    except (ConfigError, FileNotFoundError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    GetLog.get_log(level=config.log_level)

    scenarios = select_scenarios(args.scenario)
    if not scenarios:
        print(f"⚠️  No scenarios match: {', '.join(args.scenario)}")
        return 2

    try:
        return asyncio.run(run_scenarios(config, scenarios))
    except Exception:
        print("Scenario execution failed, stack trace:", file=sys.stderr)
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
