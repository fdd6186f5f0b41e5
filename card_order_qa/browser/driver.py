import logging

from playwright.async_api import async_playwright


class Driver:
    @staticmethod
    async def getInstance(browser_config, *args, **kwargs):
        """Launch a new, independent browser and return its Driver.

        Args:
            browser_config (dict): Browser configuration options.
        """
        logging.debug(f"Driver.getInstance called with browser_config: {browser_config}")
        driver = Driver(browser_config=browser_config)
        await driver.create_browser(browser_config=browser_config)
        return driver

    def __init__(self, browser_config=None, *args, **kwargs):
        self._is_closed = False
        self.page = None
        self.browser = None
        self.context = None
        self.playwright = None
        self.config = browser_config

    def is_closed(self):
        """Check if the browser instance is closed."""
        return getattr(self, "_is_closed", True)

    async def create_browser(self, browser_config):
        """Creates a new browser instance and sets up the page.

        Args:
            browser_config (dict): Browser configuration containing:
                - headless (bool): Whether to run browser in headless mode
                - viewport (dict): Browser viewport width and height
                - language (str): Browser locale
                - action_timeout_ms (int): Default timeout for element actions
                - navigation_timeout_ms (int): Default timeout for navigation

        Returns:
            Page: the page the session will drive.
        """
        try:
            self.playwright = await async_playwright().start()
            self.browser = await self.playwright.chromium.launch(
                headless=browser_config["headless"],
                args=[
                    "--disable-dev-shm-usage",  # Mitigate shared memory issues in Docker
                    "--no-sandbox",
                    "--disable-setuid-sandbox",
                    "--disable-gpu",
                    f'--window-size={browser_config["viewport"]["width"]},{browser_config["viewport"]["height"]}',
                ],
            )

            self.context = await self.browser.new_context(
                viewport={"width": browser_config["viewport"]["width"], "height": browser_config["viewport"]["height"]},
                device_scale_factor=1,
                is_mobile=False,
                locale=browser_config["language"],
            )
            self.page = await self.context.new_page()
            self.page.set_default_timeout(browser_config["action_timeout_ms"])
            self.page.set_default_navigation_timeout(browser_config["navigation_timeout_ms"])
            self.config = browser_config

            logging.debug(f"Browser instance created successfully with config: {browser_config}")
            return self.page

        except Exception:
            logging.error("Failed to create browser instance.", exc_info=True)
            await self.close_browser()
            raise

    def get_page(self):
        """Returns the current page instance."""
        return self.page

    async def close_browser(self):
        """Closes the browser instance and stops Playwright."""
        if self.is_closed():
            return
        try:
            if self.browser is not None:
                await self.browser.close()
            if self.playwright is not None:
                await self.playwright.stop()
            logging.debug("Browser instance closed successfully.")
        except Exception:
            logging.error("Failed to close browser instance.", exc_info=True)
            raise
        finally:
            self._is_closed = True
