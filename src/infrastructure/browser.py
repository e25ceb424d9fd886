"""Authenticated browser session for reading Codeforces submission sources."""

import asyncio
from collections.abc import Callable, Sequence
from typing import Any

from loguru import logger
from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from domain.parsers.url_parser import URLParser
from infrastructure.errors import BrowserUnavailableError
from infrastructure.parsers.interfaces import SourceBrowserProtocol

SAME_SITE_VALUES = {"Strict", "Lax", "None"}


def build_driver(headless: bool = True) -> webdriver.Chrome:
    """Initialize Chrome WebDriver suited to containers and CI runners."""
    opts = Options()
    if headless:
        opts.add_argument("--headless=new")
    opts.add_argument("--no-sandbox")
    opts.add_argument("--disable-setuid-sandbox")
    opts.add_argument("--disable-dev-shm-usage")
    opts.add_argument("--disable-gpu")
    opts.add_argument("--window-size=1280,800")
    return webdriver.Chrome(options=opts)


def normalize_cookie(cookie: dict[str, Any]) -> dict[str, Any] | None:
    """Convert an exported browser cookie to what ``add_cookie`` accepts."""
    if not cookie.get("name") or "value" not in cookie:
        return None

    normalized: dict[str, Any] = {"name": cookie["name"], "value": str(cookie["value"])}
    for key in ("domain", "path", "secure", "httpOnly"):
        if key in cookie:
            normalized[key] = cookie[key]

    expiry = cookie.get("expiry", cookie.get("expires"))
    if isinstance(expiry, (int, float)) and expiry > 0:
        normalized["expiry"] = int(expiry)

    if cookie.get("sameSite") in SAME_SITE_VALUES:
        normalized["sameSite"] = cookie["sameSite"]

    return normalized


class CodeforcesSourceBrowser(SourceBrowserProtocol):
    """
    Loads submission pages in a real browser with the user's session cookies.

    The driver is started lazily on first use and reused for the whole run.
    Every step is bounded by its own timeout; a page that cannot be read
    yields ``None`` instead of an exception.
    """

    SOURCE_SELECTOR = "#program-source-text"
    CHALLENGE_SELECTOR = "div[data-translate='checking_browser']"

    def __init__(
        self,
        cookies: Sequence[dict[str, Any]] = (),
        *,
        headless: bool = True,
        page_load_timeout: float = 60,
        challenge_timeout: float = 30,
        selector_timeout: float = 5,
        driver_factory: Callable[[bool], Any] = build_driver,
    ):
        self.cookies = [c for c in (normalize_cookie(c) for c in cookies) if c]
        self.headless = headless
        self.page_load_timeout = page_load_timeout
        self.challenge_timeout = challenge_timeout
        self.selector_timeout = selector_timeout
        self.driver_factory = driver_factory
        self._driver = None

    async def fetch_source(self, submission_url: str) -> str | None:
        return await asyncio.to_thread(self._fetch_source_sync, submission_url)

    def close(self) -> None:
        if self._driver is not None:
            try:
                self._driver.quit()
            except WebDriverException as e:
                logger.warning(f"Failed to quit browser cleanly: {e}")
            self._driver = None

    def _ensure_driver(self):
        if self._driver is not None:
            return self._driver

        try:
            driver = self.driver_factory(self.headless)
            driver.set_page_load_timeout(self.page_load_timeout)

            if self.cookies:
                driver.get(URLParser.CODEFORCES_BASE)
                for cookie in self.cookies:
                    driver.add_cookie(cookie)
                logger.debug(f"Loaded {len(self.cookies)} cookie(s) into browser session")
        except Exception as e:
            raise BrowserUnavailableError(f"Failed to start browser: {e}") from e

        self._driver = driver
        return driver

    def _fetch_source_sync(self, submission_url: str) -> str | None:
        try:
            driver = self._ensure_driver()
        except BrowserUnavailableError as e:
            logger.warning(str(e))
            return None

        try:
            driver.get(submission_url)
        except TimeoutException:
            logger.warning(f"Navigation to {submission_url} timed out, reading what loaded")
        except WebDriverException as e:
            logger.warning(f"Navigation to {submission_url} failed: {e}")
            return None

        try:
            WebDriverWait(driver, self.challenge_timeout).until_not(
                EC.presence_of_element_located((By.CSS_SELECTOR, self.CHALLENGE_SELECTOR))
            )
        except TimeoutException:
            logger.debug("Cloudflare check skipped or timed out")

        try:
            element = WebDriverWait(driver, self.selector_timeout).until(
                EC.presence_of_element_located((By.CSS_SELECTOR, self.SOURCE_SELECTOR))
            )
            code = element.text
        except (TimeoutException, WebDriverException):
            logger.warning(f"Source element not found on {submission_url}")
            return None

        return code or None
