"""Greenhouse's own email/password login."""
from __future__ import annotations

from typing import Mapping

from auth.base import Authenticator, LoginSession, PromptField
from core.errors import UserError


class GreenhouseAuthenticator(Authenticator):
    session_name = "_session_id"
    fields = [
        PromptField("email", "Your email:"),
        PromptField("password", "Your password:", secret=True),
    ]

    async def is_logged_in(self, session: LoginSession) -> bool:
        # A valid session is redirected from the login page to the dashboard.
        await session.goto(self.config.login_url)
        return session.url == self.config.url("/dashboard")

    async def submit_credentials(self, session: LoginSession, credentials: Mapping[str, str]) -> None:
        await session.goto(self.config.login_url)
        if not await session.wait_for_selector("#user_email"):
            raise UserError("Failed to login: the email field did not show up.")
        await session.fill("#user_email", credentials.get("email", ""))
        await session.click("#submit_email_button")

        if not await session.wait_for_selector("#user_password"):
            self.progress.stop()
            raise UserError("Failed to login")
        await session.fill("#user_password", credentials.get("password", ""))
        await session.click("#submit_password_button", wait_for_navigation=True)
