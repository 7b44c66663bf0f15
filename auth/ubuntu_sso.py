"""Ubuntu One single sign-on with a two-factor code."""
from __future__ import annotations

import re
from typing import Mapping

from auth.base import Authenticator, LoginSession, PromptField
from core.errors import UserError

COOKIE_POLICY_BUTTON = "#cookie-policy-button-accept"
EMAIL_INPUT = "input[type='email']"
PASSWORD_INPUT = "input[type='password']"
SUBMIT_BUTTON = "button[type='submit']"
TWO_FACTOR_INPUT = "input[name='oath_token']"
ACCOUNT_PAGE_PATTERN = re.compile(r"personal details", re.IGNORECASE)


class UbuntuSSOAuthenticator(Authenticator):
    session_name = "sessionid"
    fields = [
        PromptField("email", "Your Ubuntu One email:"),
        PromptField("password", "Your password:", secret=True),
        PromptField("auth_code", "2FA authentication code:"),
    ]

    async def is_logged_in(self, session: LoginSession) -> bool:
        # Logged-in users land on their account page.
        await session.goto(self.config.login_url)
        return bool(ACCOUNT_PAGE_PATTERN.search(await session.get_dom()))

    async def submit_credentials(self, session: LoginSession, credentials: Mapping[str, str]) -> None:
        await session.goto(self.config.login_url)
        # The cookie banner covers the login button.
        if await session.wait_for_selector(COOKIE_POLICY_BUTTON, timeout=5):
            await session.click(COOKIE_POLICY_BUTTON)

        if not await session.wait_for_selector(EMAIL_INPUT):
            raise UserError("Failed to login: the email field did not show up.")
        await session.fill(EMAIL_INPUT, credentials.get("email", ""))
        await session.fill(PASSWORD_INPUT, credentials.get("password", ""))
        await session.click(SUBMIT_BUTTON)

        if not await session.wait_for_selector(TWO_FACTOR_INPUT):
            self.progress.stop()
            raise UserError("Authorization failed. Please check your e-mail and password.")
        await session.fill(TWO_FACTOR_INPUT, credentials.get("auth_code", ""))
        await session.click(SUBMIT_BUTTON, wait_for_navigation=True)

        if not await self.is_logged_in(session):
            self.progress.stop()
            raise UserError("Invalid 2FA")
