"""Authentication against Greenhouse or Ubuntu One."""
from __future__ import annotations

from auth.base import Authenticator, CredentialPrompt, PromptField
from auth.greenhouse import GreenhouseAuthenticator
from auth.session_store import LoginCookie, SessionStore
from auth.ubuntu_sso import UbuntuSSOAuthenticator
from config.settings import Config
from core.progress import ProgressReporter


def select_authenticator(
    config: Config,
    prompt: CredentialPrompt,
    progress: ProgressReporter | None = None,
    *,
    sso: bool = False,
) -> Authenticator:
    """Ubuntu SSO for the Canonical instance (or when ``sso`` is set), Greenhouse login otherwise."""
    if sso or config.is_canonical():
        return UbuntuSSOAuthenticator(config, prompt, progress)
    return GreenhouseAuthenticator(config, prompt, progress)


__all__ = [
    "Authenticator",
    "CredentialPrompt",
    "GreenhouseAuthenticator",
    "LoginCookie",
    "PromptField",
    "SessionStore",
    "UbuntuSSOAuthenticator",
    "select_authenticator",
]
