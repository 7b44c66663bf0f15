"""CLI entry point for the Greenhouse job post tooling."""
from __future__ import annotations

import argparse
import asyncio
import getpass
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, NoReturn, Optional, Sequence

from dotenv import load_dotenv

from auth import PromptField, select_authenticator
from config.settings import Config, load_config
from core.errors import (
    ErrorReporter,
    GreenhouseToolError,
    LoggingErrorReporter,
    NullErrorReporter,
    ScrapeError,
    UserError,
)
from core.job import JobOrchestrator
from core.progress import ProgressReporter
from core.regions import parse_region_param
from core.types import PostInfo
from tools.browser_session import BrowserSession, BrowserSessionConfig, BrowserSessionError
from utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_USER_ERROR = 2
EXIT_SCRAPE_ERROR = 3
EXIT_BROWSER_ERROR = 4


def _post_id(value: str) -> int:
    try:
        post_id = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Job post ID must be a number, got {value!r}") from None
    if post_id <= 0:
        raise argparse.ArgumentTypeError("Job post ID must be positive")
    return post_id


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ght",
        description="Bulk-manage Greenhouse job posts: replicate, reset and repost.",
    )
    parser.add_argument("--config", help="YAML file overriding the default configuration (or GHT_CONFIG).")
    parser.add_argument(
        "--sso",
        action="store_true",
        help="Log in through Ubuntu One even when the instance is not Canonical's.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("login", help="Log in and save the session for later commands.")
    subparsers.add_parser("logout", help="Forget the saved session.")

    replicate = subparsers.add_parser("replicate", help="Copy a job post to every location of the given regions.")
    replicate.add_argument("post_id", type=_post_id, help="ID of the job post to copy.")
    replicate.add_argument("--regions", required=True, help="Comma-separated region names, e.g. emea,apac.")
    replicate.add_argument(
        "--reset-first",
        action="store_true",
        help="Delete the existing posts of the same name in those regions before copying.",
    )

    reset = subparsers.add_parser("reset", help="Delete the posts named like a job post.")
    reset.add_argument("post_id", type=_post_id, help="ID of a job post with the name to delete.")
    reset.add_argument("--regions", help="Only delete posts in these comma-separated regions.")

    repost = subparsers.add_parser("repost", help="Replace a job post with a fresh copy.")
    repost.add_argument("post_id", type=_post_id, help="ID of the job post to repost.")
    return parser.parse_args(argv)


def prompt_credentials(fields: List[PromptField]) -> Dict[str, str]:
    answers: Dict[str, str] = {}
    for field in fields:
        if field.secret:
            answers[field.name] = getpass.getpass(f"{field.message} ")
        else:
            answers[field.name] = input(f"{field.message} ").strip()
    return answers


async def confirm_unknown_locations(posts: List[PostInfo]) -> bool:
    answer = await asyncio.to_thread(input, f"Delete these {len(posts)} job posts as well? [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def build_config(args: argparse.Namespace) -> Config:
    development = os.getenv("GHT_ENV", "").lower() == "development"
    return load_config(args.config or os.getenv("GHT_CONFIG") or None, development=development)


async def run_command(
    args: argparse.Namespace,
    config: Config,
    progress: ProgressReporter,
    reporter: ErrorReporter,
) -> Optional[Mapping[str, Any]]:
    authenticator = select_authenticator(config, prompt_credentials, progress, sso=args.sso)
    if args.command == "logout":
        authenticator.logout()
        return None

    regions = None
    if getattr(args, "regions", None):
        regions = parse_region_param(args.regions, config.region_table)

    session_config = BrowserSessionConfig.for_development() if config.development else BrowserSessionConfig()
    async with BrowserSession(session_config) as session:
        if args.command == "login":
            await authenticator.login(session)
            return None

        await authenticator.authenticate(session)
        orchestrator = JobOrchestrator(
            session,
            config,
            progress,
            reporter=reporter,
            confirm=confirm_unknown_locations,
        )
        if args.command == "replicate":
            return await orchestrator.replicate(args.post_id, regions or [], reset_first=args.reset_first)
        if args.command == "reset":
            return await orchestrator.reset(args.post_id, regions)
        if args.command == "repost":
            return await orchestrator.repost(args.post_id)
    raise UserError(f"Unknown command {args.command!r}")


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    dotenv_path = Path.cwd() / ".env"
    if dotenv_path.exists():
        load_dotenv(dotenv_path)
    configure_logging()

    args = parse_args(argv)
    progress = ProgressReporter()
    try:
        config = build_config(args)
        reporter: ErrorReporter = NullErrorReporter() if config.development else LoggingErrorReporter()
    except UserError as exc:
        logger.error("%s", exc)
        sys.exit(EXIT_USER_ERROR)

    try:
        result = asyncio.run(run_command(args, config, progress, reporter))
    except UserError as exc:
        progress.fail(str(exc))
        sys.exit(EXIT_USER_ERROR)
    except ScrapeError as exc:
        reporter.report(exc, command=args.command)
        progress.fail(f"Greenhouse page did not look as expected: {exc}")
        sys.exit(EXIT_SCRAPE_ERROR)
    except BrowserSessionError as exc:
        reporter.report(exc, command=args.command)
        progress.fail(f"Browser failure: {exc}")
        sys.exit(EXIT_BROWSER_ERROR)
    except GreenhouseToolError as exc:
        reporter.report(exc, command=args.command)
        progress.fail(str(exc))
        sys.exit(1)
    except KeyboardInterrupt:
        progress.fail("Interrupted")
        sys.exit(130)

    if result is not None:
        print(json.dumps(result, indent=2))
    print("Happy hiring!")
    sys.exit(0)


if __name__ == "__main__":
    main()
