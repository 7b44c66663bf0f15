"""Shared login/logout flow of the Greenhouse authenticators."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol
from urllib.parse import urlparse

from auth.session_store import LoginCookie, SessionStore
from config.settings import Config
from core.errors import UserError
from core.progress import ProgressReporter
from utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PromptField:
    name: str
    message: str
    secret: bool = False


CredentialPrompt = Callable[[List[PromptField]], Mapping[str, str]]


class LoginSession(Protocol):
    @property
    def url(self) -> str:
        ...

    async def goto(self, url: str) -> None:
        ...

    async def get_dom(self) -> str:
        ...

    async def fill(self, selector: str, value: str) -> None:
        ...

    async def click(self, selector: str, *, wait_for_navigation: bool = False) -> None:
        ...

    async def wait_for_selector(self, selector: str, timeout: Optional[float] = None) -> bool:
        ...

    async def cookies(self) -> List[Dict[str, Any]]:
        ...

    async def add_cookies(self, cookies: List[Dict[str, Any]]) -> None:
        ...


class Authenticator(ABC):
    """Login through the browser, persist the session cookie and reuse it.

    Subclasses provide ``session_name``, ``fields``, ``is_logged_in`` and
    ``submit_credentials``.
    """

    session_name = ""
    fields: List[PromptField] = []

    def __init__(
        self,
        config: Config,
        prompt: CredentialPrompt,
        progress: ProgressReporter | None = None,
        store: SessionStore | None = None,
    ) -> None:
        self.config = config
        self.prompt = prompt
        self.progress = progress or ProgressReporter()
        self.store = store or SessionStore(config.user_settings_path)

    @abstractmethod
    async def is_logged_in(self, session: LoginSession) -> bool:
        ...

    @abstractmethod
    async def submit_credentials(self, session: LoginSession, credentials: Mapping[str, str]) -> None:
        ...

    async def session_id(self, session: LoginSession) -> Optional[str]:
        for cookie in await session.cookies():
            if cookie.get("name") == self.session_name:
                return cookie.get("value")
        return None

    def ask_credentials(self) -> Mapping[str, str]:
        try:
            return self.prompt(list(self.fields))
        except (KeyboardInterrupt, EOFError) as exc:
            raise UserError("Interrupted") from exc

    async def login(self, session: LoginSession) -> LoginCookie:
        self.progress.start("Checking authentication...")
        self.progress.info(f"Greenhouse instance: {self.config.greenhouse_url}")
        saved = self.store.load()
        if saved:
            await session.add_cookies([dict(saved)])
            if await self.is_logged_in(session):
                self.progress.succeed("Using the saved credentials.")
                return saved
            logger.info("Saved session in %s has expired", self.store.path)
        self.progress.stop()

        credentials = self.ask_credentials()
        self.progress.start("Logging in...")
        await self.submit_credentials(session, credentials)

        session_id = await self.session_id(session)
        if not session_id:
            self.progress.fail("Login failed.")
            raise UserError("Failed to login.")
        cookie = LoginCookie(
            name=self.session_name,
            value=session_id,
            domain=urlparse(self.config.login_url).hostname or "",
        )
        self.store.save(cookie)
        self.progress.succeed("Login completed.")
        return cookie

    async def authenticate(self, session: LoginSession) -> None:
        cookie = await self.login(session)
        self.progress.start("Setting up...")
        await session.add_cookies([dict(cookie)])
        self.progress.succeed("Setup is completed.")

    def logout(self) -> None:
        self.progress.start("Logging out...")
        if self.store.clear():
            self.progress.succeed("Logout completed.")
        else:
            self.progress.succeed("Already logged out.")
