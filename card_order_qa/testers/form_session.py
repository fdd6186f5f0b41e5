import logging
from typing import Optional

from card_order_qa.actions.action_handler import ActionHandler
from card_order_qa.actions.waits import WaitPredicate
from card_order_qa.browser.session import BrowserSession
from card_order_qa.config import HarnessConfig
from card_order_qa.data.structures import (
    FILL_ORDER,
    AssertionResult,
    FieldError,
    FieldKey,
    FormInput,
    Success,
    ValidationOutcome,
)


class FormSession:
    """One complete interaction with the order form: fill, submit, then observe."""

    def __init__(self, handler: ActionHandler):
        self.handler = handler

    @classmethod
    async def open(cls, browser_session: BrowserSession, config: HarnessConfig) -> "FormSession":
        """Load the form in ``browser_session`` and wait until it can be driven."""
        page = await browser_session.navigate_to(config.base_url)
        handler = ActionHandler(
            locators=config.locators,
            wait_timeout_ms=config.wait_timeout_ms,
            poll_interval_ms=config.poll_interval_ms,
        )
        await handler.initialize(page, driver=browser_session.driver)
        form = cls(handler)
        await form.wait_until_ready()
        return form

    async def wait_until_ready(self, timeout_ms: Optional[int] = None):
        submit_selector = self.handler.locators.submit

        async def submit_rendered() -> bool:
            return await self.handler.page.locator(submit_selector).count() > 0

        await WaitPredicate(
            description=f"form rendered ({submit_selector})",
            condition=submit_rendered,
            timeout_ms=self.handler.wait_timeout_ms if timeout_ms is None else timeout_ms,
            poll_interval_ms=self.handler.poll_interval_ms,
        ).wait()

    async def fill_and_submit(self, form_input: FormInput):
        logging.info(f"Filling form with: {form_input.model_dump()}")
        for field in FILL_ORDER:
            value = form_input.text_value(field)
            if value is None:
                continue
            if value == "":
                await self.handler.set_empty(field)
            else:
                await self.handler.type(field, value)

        await self.handler.set_checkbox(FieldKey.AGREEMENT, form_input.agree)
        await self.handler.submit()

    async def expect_success(self, expected_text: str) -> AssertionResult:
        actual = await self.handler.read_success_text()
        return AssertionResult(
            passed=actual == expected_text,
            expected=expected_text,
            actual=actual,
            observed=Success(message=actual),
        )

    async def expect_field_error(self, field: FieldKey, expected_text: str) -> AssertionResult:
        actual = await self.handler.read_error_text(field)
        return AssertionResult(
            passed=actual == expected_text,
            expected=expected_text,
            actual=actual,
            field=field,
            observed=FieldError(field=field, message=actual),
        )

    async def expect_agreement_invalid(self) -> AssertionResult:
        # the agreement control has no inline text, only the marker
        await self.handler.wait_for_error_state(FieldKey.AGREEMENT)
        marked = await self.handler.has_invalid_marker(FieldKey.AGREEMENT)
        return AssertionResult(
            passed=marked,
            expected=True,
            actual=marked,
            field=FieldKey.AGREEMENT,
            observed=FieldError(field=FieldKey.AGREEMENT) if marked else None,
        )

    async def expect(self, outcome: ValidationOutcome) -> AssertionResult:
        """Dispatch to the ``expect_*`` check matching an expected outcome."""
        if isinstance(outcome, Success):
            return await self.expect_success(outcome.message)
        if outcome.field == FieldKey.AGREEMENT:
            return await self.expect_agreement_invalid()
        return await self.expect_field_error(outcome.field, outcome.message)
