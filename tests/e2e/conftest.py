import functools
import os
import threading
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import pytest
import pytest_asyncio
from playwright.async_api import async_playwright

from card_order_qa.browser.session import BrowserSession
from card_order_qa.config import build_config
from card_order_qa.testers.form_session import FormSession

FIXTURES_DIR = Path(__file__).resolve().parent.parent / "fixtures"


class QuietHandler(SimpleHTTPRequestHandler):
    def log_message(self, format, *args):
        pass


@pytest.fixture(scope="session")
def fixture_server():
    handler = functools.partial(QuietHandler, directory=str(FIXTURES_DIR))
    server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}/order_form.html"
    server.shutdown()
    server.server_close()


@pytest.fixture
def harness_config(request, target_url, tmp_path):
    base_url = target_url or request.getfixturevalue("fixture_server")
    return build_config({"base_url": base_url, "report_dir": str(tmp_path)}, headless=True)


@pytest_asyncio.fixture
async def chromium_installed():
    async with async_playwright() as p:
        executable = p.chromium.executable_path
    if not os.path.exists(executable):
        pytest.skip(f"Chromium is not installed at {executable}")


@pytest_asyncio.fixture
async def browser_session(harness_config):
    session = BrowserSession(browser_config=harness_config.browser_config)
    try:
        await session.initialize()
    except Exception as e:
        pytest.skip(f"Chromium could not be launched: {e}")
    try:
        yield session
    finally:
        await session.close()


@pytest_asyncio.fixture
async def form(browser_session, harness_config):
    return await FormSession.open(browser_session, harness_config)
