import logging
from typing import Optional

from playwright.async_api import Locator, Page

from card_order_qa.actions.locators import DEFAULT_LOCATORS, LocatorContract
from card_order_qa.actions.waits import WaitPredicate
from card_order_qa.data.structures import FieldKey
from card_order_qa.exceptions import ElementNotFound, SessionError

DEFAULT_WAIT_TIMEOUT_MS = 8000
DEFAULT_POLL_INTERVAL_MS = 200


class ActionHandler:
    """Drives the order form and synchronizes every read with the page's async validation.

    Writes locate their element immediately and fail with ``ElementNotFound`` when the
    locator contract no longer matches the page. Reads whose value depends on client-side
    validation are always preceded by a bounded ``WaitPredicate``.
    """

    def __init__(
        self,
        locators: Optional[LocatorContract] = None,
        wait_timeout_ms: int = DEFAULT_WAIT_TIMEOUT_MS,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    ):
        self.locators = locators or DEFAULT_LOCATORS
        self.wait_timeout_ms = wait_timeout_ms
        self.poll_interval_ms = poll_interval_ms
        self.page: Optional[Page] = None
        self.driver = None

    async def initialize(self, page: Page, driver=None):
        self.page = page
        if driver is not None:
            self.driver = driver
        return self

    def _page(self) -> Page:
        if self.page is None:
            raise SessionError("ActionHandler is not bound to a page")
        return self.page

    async def _require(self, selector: str, purpose: str) -> Locator:
        locator = self._page().locator(selector)
        if await locator.count() == 0:
            logging.error(f"Element not found for {purpose}: {selector}")
            raise ElementNotFound(selector, purpose)
        return locator.first

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def clear(self, field: FieldKey) -> bool:
        """Remove whatever the field's input control currently holds."""
        selector = self.locators.input(field)
        control = await self._require(selector, f"clear {field}")
        logging.debug(f"Clearing field '{field}' using selector: {selector}")

        await control.click()
        await control.press("ControlOrMeta+a")
        await control.press("Backspace")
        if await control.input_value():
            # masked inputs may ignore the keyboard selection
            await control.fill("")
        return True

    async def type(self, field: FieldKey, text: Optional[str]) -> bool:
        """Clear the field and type ``text`` one keystroke at a time.

        Does nothing when ``text`` is None or empty; use ``set_empty`` to clear a field on
        purpose.
        """
        if not text:
            logging.debug(f"No text for field '{field}', leaving it untouched")
            return False

        await self.clear(field)
        control = await self._require(self.locators.input(field), f"type into {field}")
        await control.press_sequentially(text)
        logging.debug(f"Typed '{text}' into field '{field}'")
        await self.dismiss_overlays()
        return True

    async def set_empty(self, field: FieldKey) -> bool:
        """Clear the field and leave it blank so required-field validation fires on submit."""
        await self.clear(field)
        logging.debug(f"Field '{field}' explicitly left empty")
        await self.dismiss_overlays()
        return True

    async def is_checked(self, field: FieldKey) -> bool:
        control = await self._require(self.locators.input(field), f"read checked state of {field}")
        return await control.is_checked()

    async def set_checkbox(self, field: FieldKey, desired: bool) -> bool:
        """Bring the checkbox to ``desired``. Returns True if a click was needed."""
        current = await self.is_checked(field)
        if current == desired:
            logging.debug(f"Checkbox '{field}' already {'checked' if desired else 'unchecked'}")
            return False

        container = await self._require(self.locators.container(field), f"toggle {field}")
        await container.click()
        logging.debug(f"Checkbox '{field}' toggled to {'checked' if desired else 'unchecked'}")
        return True

    async def submit(self) -> bool:
        button = await self._require(self.locators.submit, "submit the form")
        await button.click()
        logging.debug("Form submitted")
        return True

    async def dismiss_overlays(self) -> bool:
        """Close popups (such as the date picker) left open by the previous interaction."""
        await self._page().keyboard.press("Escape")
        return True

    # ------------------------------------------------------------------
    # Synchronized reads
    # ------------------------------------------------------------------

    async def has_invalid_marker(self, field: FieldKey) -> bool:
        container = await self._require(self.locators.container(field), f"read state of {field}")
        classes = await container.get_attribute("class") or ""
        return self.locators.invalid_class in classes.split()

    async def wait_for_error_state(self, field: FieldKey, timeout_ms: Optional[int] = None) -> bool:
        """Block until the field's container carries the invalid marker."""
        # the container is static, so a stale selector fails here rather than timing out
        await self._require(self.locators.container(field), f"wait for error on {field}")
        predicate = WaitPredicate(
            description=f"invalid marker on '{field}' ({self.locators.invalid_container(field)})",
            condition=lambda: self.has_invalid_marker(field),
            timeout_ms=self.wait_timeout_ms if timeout_ms is None else timeout_ms,
            poll_interval_ms=self.poll_interval_ms,
        )
        await predicate.wait()
        return True

    async def _success_shown(self) -> bool:
        locator = self._page().locator(self.locators.success)
        if await locator.count() == 0:
            return False
        return bool((await locator.first.inner_text()).strip())

    async def wait_for_success_state(self, timeout_ms: Optional[int] = None) -> bool:
        """Block until the success confirmation is present and populated."""
        predicate = WaitPredicate(
            description=f"success confirmation ({self.locators.success})",
            condition=self._success_shown,
            timeout_ms=self.wait_timeout_ms if timeout_ms is None else timeout_ms,
            poll_interval_ms=self.poll_interval_ms,
        )
        await predicate.wait()
        return True

    async def read_error_text(self, field: FieldKey) -> str:
        await self.wait_for_error_state(field)
        message = await self._require(self.locators.error_message(field), f"read error text of {field}")
        text = (await message.inner_text()).strip()
        logging.debug(f"Error text for '{field}': {text}")
        return text

    async def read_success_text(self) -> str:
        await self.wait_for_success_state()
        text = (await self._page().locator(self.locators.success).first.inner_text()).strip()
        logging.debug(f"Success text: {text}")
        return text
