"""Async Playwright session that owns the single browser page of a command."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from playwright.async_api import (  # type: ignore[import]
    Dialog,
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from utils.logging import get_logger

logger = get_logger(__name__)

CSRF_SELECTOR = "head > meta[name=csrf-token]"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; WOW64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/108.0.0.0 Safari/537.36"
)

# Runs inside the page so requests carry the Greenhouse session cookies
# and referrer. Non-2xx answers come back as a structured error object.
_FETCH_SCRIPT = """
async ({ url, init }) => {
    try {
        const response = await fetch(url, init);
        if (!response.ok) {
            return {
                isError: true,
                status: response.status,
                url: response.url,
                statusText: response.statusText,
            };
        }
        return await response.json();
    } catch (error) {
        return { isError: true, status: 0, url, statusText: String(error) };
    }
}
"""


class BrowserSessionError(RuntimeError):
    """Raised when a Playwright browser interaction fails."""


@dataclass(slots=True)
class BrowserSessionConfig:
    headless: bool = True
    browser: str = "chromium"
    navigation_timeout_ms: int = 10 * 60 * 1000
    action_timeout_ms: int = 30_000
    slow_mo: Optional[int] = None
    user_agent: Optional[str] = DEFAULT_USER_AGENT
    navigation_attempts: int = 3

    @classmethod
    def for_development(cls) -> "BrowserSessionConfig":
        return cls(headless=False, slow_mo=20)


class BrowserSession:
    """Context manager that owns a Playwright browser, context and page."""

    def __init__(self, config: BrowserSessionConfig | None = None) -> None:
        self.config = config or BrowserSessionConfig()
        self._playwright = None
        self._browser = None
        self._context = None
        self.page = None

    async def __aenter__(self) -> "BrowserSession":
        self._playwright = await async_playwright().start()
        try:
            browser_factory = getattr(self._playwright, self.config.browser)
            self._browser = await browser_factory.launch(
                headless=self.config.headless,
                slow_mo=self.config.slow_mo,
                args=["--no-sandbox"],
            )
            self._context = await self._browser.new_context(user_agent=self.config.user_agent)
            self.page = await self._context.new_page()
        except Exception:
            await self._close()
            raise
        self.page.set_default_navigation_timeout(self.config.navigation_timeout_ms)
        self.page.set_default_timeout(self.config.action_timeout_ms)
        # The post edit page installs a beforeunload handler; nothing is
        # edited there, so leaving is always safe.
        self.page.on("dialog", self._accept_beforeunload)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - cleanup path
        await self._close()

    @staticmethod
    async def _accept_beforeunload(dialog: Dialog) -> None:  # pragma: no cover - runtime interaction
        if dialog.type == "beforeunload":
            await dialog.accept()
        else:
            await dialog.dismiss()

    # -------------------- navigation --------------------
    @property
    def url(self) -> str:
        self._ensure_page()
        return self.page.url

    async def goto(self, url: str, wait_until: str = "domcontentloaded") -> None:
        self._ensure_page()
        logger.debug("Navigating to %s", url)
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(PlaywrightTimeoutError),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=4.0),
            stop=stop_after_attempt(self.config.navigation_attempts),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    await self.page.goto(url, wait_until=wait_until)
        except (PlaywrightTimeoutError, PlaywrightError) as exc:  # pragma: no cover - network dependent
            raise BrowserSessionError(f"Navigation failed for {url}: {exc}") from exc

    async def reload(self) -> None:
        self._ensure_page()
        try:
            await self.page.reload(wait_until="domcontentloaded")
        except PlaywrightError as exc:  # pragma: no cover - network dependent
            raise BrowserSessionError(f"Reload failed for {self.page.url}: {exc}") from exc

    # -------------------- DOM access --------------------
    async def get_dom(self) -> str:
        self._ensure_page()
        try:
            return await self.page.content()
        except PlaywrightError as exc:  # pragma: no cover - network dependent
            raise BrowserSessionError(f"Unable to read DOM: {exc}") from exc

    async def get_attribute(self, selector: str, name: str) -> Optional[str]:
        """Attribute of the first element matching ``selector``, None when absent."""
        self._ensure_page()
        try:
            element = await self.page.query_selector(selector)
            if element is None:
                return None
            return await element.get_attribute(name)
        except PlaywrightError as exc:  # pragma: no cover - runtime interaction
            raise BrowserSessionError(f"Unable to read {name} of {selector}: {exc}") from exc

    async def fill(self, selector: str, value: str) -> None:
        self._ensure_page()
        try:
            await self.page.fill(selector, value)
        except PlaywrightError as exc:  # pragma: no cover - runtime interaction
            raise BrowserSessionError(f"Fill failed for {selector}: {exc}") from exc

    async def click(self, selector: str, *, wait_for_navigation: bool = False) -> None:
        self._ensure_page()
        try:
            if wait_for_navigation:
                async with self.page.expect_navigation(wait_until="domcontentloaded"):
                    await self.page.click(selector)
            else:
                await self.page.click(selector)
        except PlaywrightError as exc:  # pragma: no cover - runtime interaction
            raise BrowserSessionError(f"Click failed for {selector}: {exc}") from exc

    async def wait_for_selector(self, selector: str, timeout: Optional[float] = None) -> bool:
        """Wait until ``selector`` is visible; False on timeout."""
        self._ensure_page()
        ms = int((timeout or (self.config.action_timeout_ms / 1000)) * 1000)
        try:
            await self.page.wait_for_selector(selector, timeout=ms, state="visible")
            return True
        except PlaywrightTimeoutError:
            return False

    # -------------------- cookies --------------------
    async def cookies(self) -> List[Dict[str, Any]]:
        self._ensure_page()
        return await self._context.cookies()

    async def add_cookies(self, cookies: List[Dict[str, Any]]) -> None:
        self._ensure_page()
        await self._context.add_cookies([{**cookie, "path": cookie.get("path", "/")} for cookie in cookies])

    # -------------------- in-page requests --------------------
    async def evaluate(self, script: str, arg: Any = None) -> Any:
        self._ensure_page()
        return await self.page.evaluate(script, arg)

    async def csrf_token(self) -> Optional[str]:
        return await self.get_attribute(CSRF_SELECTOR, "content")

    async def send_request(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
        referrer: Optional[str] = None,
        credentials: str = "include",
    ) -> Any:
        """Replay an XHR from inside the current page and return its JSON body.

        Same-origin calls carry the page's CSRF token. HTTP errors come back
        as ``{"isError": True, "status", "url", "statusText"}``.
        """
        self._ensure_page()
        request_headers = {
            "accept": "application/json, text/javascript, */*; q=0.01",
            "accept-language": "en-US,en;q=0.9",
        }
        if credentials == "include":
            token = await self.csrf_token()
            if token:
                request_headers["x-csrf-token"] = token
        request_headers.update(headers or {})

        init: Dict[str, Any] = {
            "method": method,
            "headers": request_headers,
            "body": body,
            "mode": "cors",
            "credentials": credentials,
            "referrerPolicy": "strict-origin-when-cross-origin",
        }
        if referrer:
            init["referrer"] = referrer
        logger.debug("%s %s", method, url)
        try:
            return await self.evaluate(_FETCH_SCRIPT, {"url": url, "init": init})
        except PlaywrightError as exc:
            raise BrowserSessionError(f"{method} {url} could not be sent: {exc}") from exc

    def _ensure_page(self) -> None:
        if not self.page:
            raise BrowserSessionError("Browser session is not initialized.")

    async def _close(self) -> None:
        if self.page:
            await self.page.close()
        if self._context:
            await self._context.close()
        if self._browser:
            await self._browser.close()
        if self._playwright:
            await self._playwright.stop()
