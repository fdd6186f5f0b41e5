import os

import pytest


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        '--url',
        action='store',
        default=None,
        help='Base URL of a running order form for e2e tests (overrides the bundled fixture page)',
    )


@pytest.fixture
def target_url(request: pytest.FixtureRequest):
    # Priority: CLI --url > env CARD_ORDER_BASE_URL > None (use the bundled fixture page)
    return request.config.getoption('--url') or os.getenv('CARD_ORDER_BASE_URL')
