import asyncio
import logging
import uuid
from typing import Any, Dict, Optional

from playwright.async_api import Page

from card_order_qa.browser.config import DEFAULT_CONFIG
from card_order_qa.browser.driver import Driver
from card_order_qa.exceptions import SessionError


class BrowserSession:
    """One browser exclusively owned by one scenario for its lifetime."""

    def __init__(self, session_id: str = None, browser_config: Dict[str, Any] = None):
        self.session_id = session_id or str(uuid.uuid4())
        self.browser_config = {**DEFAULT_CONFIG, **(browser_config or {})}
        self.driver: Optional[Driver] = None
        self._is_closed = False
        self._lock = asyncio.Lock()

    async def initialize(self):
        """Initialize browser session."""
        async with self._lock:
            if self._is_closed:
                raise SessionError("Browser session is closed")

            logging.debug(f"Initializing browser session {self.session_id} with config: {self.browser_config}")
            try:
                self.driver = await Driver.getInstance(browser_config=self.browser_config)
                logging.debug(f"Browser session {self.session_id} initialized successfully via Driver")
            except Exception as e:
                logging.error(f"Failed to initialize browser session {self.session_id}: {e}")
                await self._cleanup()
                raise

    async def navigate_to(self, url: str, **kwargs) -> Page:
        """Navigate to URL and wait until the network settles."""
        page = self.get_page()

        logging.info(f"Session {self.session_id} navigating to: {url}")
        kwargs.setdefault("wait_until", "domcontentloaded")
        await page.goto(url, **kwargs)
        await page.wait_for_load_state("networkidle", timeout=self.browser_config["navigation_timeout_ms"])
        return page

    def get_page(self) -> Page:
        """Return current page via Driver."""
        if self._is_closed or not self.driver:
            raise SessionError("Browser session not initialized or closed")
        return self.driver.get_page()

    def is_closed(self) -> bool:
        return self._is_closed

    async def _cleanup(self):
        try:
            if self.driver and not self.driver.is_closed():
                await self.driver.close_browser()
        except Exception as e:
            logging.error(f"Error during cleanup of session {self.session_id}: {e}")
        finally:
            self.driver = None

    async def close(self):
        """Close browser session."""
        async with self._lock:
            if self._is_closed:
                return

            logging.debug(f"Closing browser session {self.session_id}")
            self._is_closed = True
            await self._cleanup()
            logging.debug(f"Browser session {self.session_id} closed")

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class BrowserSessionManager:
    """Tracks live sessions so a cancelled run can still close every browser."""

    def __init__(self):
        self.sessions: Dict[str, BrowserSession] = {}
        self._lock = asyncio.Lock()

    async def create_session(self, browser_config: Dict[str, Any] = None) -> BrowserSession:
        session = BrowserSession(browser_config=browser_config)
        await session.initialize()

        async with self._lock:
            self.sessions[session.session_id] = session

        logging.debug(f"Created browser session: {session.session_id}")
        return session

    async def close_session(self, session_id: str):
        """Close and remove session."""
        async with self._lock:
            session = self.sessions.pop(session_id, None)
        if session:
            await session.close()

    async def close_all_sessions(self):
        async with self._lock:
            sessions = list(self.sessions.values())
            self.sessions.clear()

        if sessions:
            await asyncio.gather(*[session.close() for session in sessions], return_exceptions=True)
            logging.info(f"Closed {len(sessions)} browser sessions")
