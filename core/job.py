"""Job-level workflows: scrape a job's posts, then clone, publish, repost or delete them."""
from __future__ import annotations

import re
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup

from config.settings import Config
from core.errors import ErrorReporter, NullErrorReporter, ScrapeError, UserError
from core.job_post import JobPostClient, PageSession, parse_post_row
from core.progress import ProgressReporter
from core.types import JobBoard, JobInfo, PostInfo
from tools.page_scanner import id_from_href, iter_job_list_pages, scan_paginated_listing
from utils.logging import get_logger

logger = get_logger(__name__)

ConfirmCallback = Callable[[List[PostInfo]], Awaitable[bool]]

JOB_NAME_SELECTOR = ".job-name a"
POST_ROW_SELECTOR = ".job-application"


class JobOrchestrator:
    """Drive multi-post workflows for Greenhouse jobs through one browser session.

    ``confirm`` is awaited with the posts whose location matches no known
    region; returning True deletes them as well. Without it they are only
    listed.
    """

    def __init__(
        self,
        session: PageSession,
        config: Config,
        progress: ProgressReporter | None = None,
        post_client: JobPostClient | None = None,
        reporter: ErrorReporter | None = None,
        confirm: ConfirmCallback | None = None,
    ) -> None:
        self.session = session
        self.config = config
        self.progress = progress or ProgressReporter()
        self.reporter = reporter or NullErrorReporter()
        self.post_client = post_client or JobPostClient(session, config, self.reporter)
        self.confirm = confirm
        self.regions = config.region_table

    # -------------------- scraping --------------------
    async def get_job_name(self, job_id: int) -> str:
        url = self.config.url(f"/plans/{job_id}")
        await self.session.goto(url)
        soup = BeautifulSoup(await self.session.get_dom(), "html.parser")
        anchor = soup.select_one(JOB_NAME_SELECTOR)
        if anchor is None:
            raise ScrapeError(f"Job name cannot be found in {url} ({JOB_NAME_SELECTOR})")
        return anchor.get_text(strip=True)

    async def get_job_data(self, job_id: int) -> JobInfo:
        """Scrape every post of ``job_id`` across all pages of its job app listing."""
        job = JobInfo(id=job_id, name=await self.get_job_name(job_id))

        def extract(html: str, page_url: str) -> List[PostInfo]:
            soup = BeautifulSoup(html, "html.parser")
            return [parse_post_row(row, job, page_url) for row in soup.select(POST_ROW_SELECTOR)]

        job.posts.extend(
            await scan_paginated_listing(self.session, self.config.url(f"/plans/{job_id}/jobapp"), extract)
        )
        logger.debug("Job %s has %d post(s)", job.name, len(job.posts))
        return job

    async def get_jobs(self) -> Dict[str, int]:
        """Jobs the user is a recruiter for, keyed ``"[<req id>] <job name>"``."""
        jobs: Dict[str, int] = {}
        async for page_jobs in iter_job_list_pages(self.session, self.config.url("/alljobs/list")):
            jobs.update(page_jobs)
        return jobs

    async def get_job_id_from_post(self, post_id: int) -> int:
        url = self.config.url(f"/jobapps/{post_id}/edit")
        await self.session.goto(url)
        soup = BeautifulSoup(await self.session.get_dom(), "html.parser")
        anchor = soup.select_one(JOB_NAME_SELECTOR)
        if anchor is None or not anchor.get("href"):
            raise ScrapeError(f"Job of post {post_id} cannot be found in {url}")
        return id_from_href(anchor["href"])

    async def get_board_to_post(self) -> JobBoard:
        """The board new posts are created on, with its publish/unpublish status ids."""
        board_name = self.config.board_to_post_name
        response = await self.post_client.send(
            self.config.url("/jobboard/get_boards"),
            context="get job boards",
            referrer=self.config.url("/jobboard"),
            success=lambda answer: isinstance(answer, dict),
        )
        try:
            boards = [
                JobBoard(
                    id=board["id"],
                    name=board["company_name"],
                    publish_status_id=board["publish_status_id"],
                    unpublish_status_id=board["unpublish_status_id"],
                )
                for board in response["job_boards"]
            ]
        except (KeyError, TypeError) as exc:
            raise ScrapeError(f"Unexpected job board listing: {exc}") from exc

        for board in boards:
            if board.name == board_name:
                return board
        raise UserError(f"Cannot find {board_name} board")

    # -------------------- cloning --------------------
    async def clone_posts(
        self,
        posts: Sequence[PostInfo],
        regions: Sequence[str],
        source_post_id: Optional[int],
        board: JobBoard,
    ) -> List[PostInfo]:
        """Duplicate every source post into every location of ``regions``.

        The source is the post ``source_post_id`` on the copy-from board, or
        every post of that board when no id is given. Regions are validated
        before the first request.
        """
        self.progress.start("Starting to create job posts.")
        try:
            locations = self.regions.cities_for_regions(regions)
        except UserError as exc:
            self.progress.fail(str(exc))
            raise

        copy_from = self.config.copy_from_board
        sources = [
            post
            for post in posts
            if post.board_info.name == copy_from and (source_post_id is None or post.id == source_post_id)
        ]
        if not sources:
            if source_post_id is not None:
                message = f"Job post with {source_post_id} ID cannot be found in the {copy_from} board."
            else:
                message = f"No post found to clone in the {copy_from} board."
            self.progress.fail(message)
            raise UserError(message)

        total = len(sources) * len(locations)
        count = 0
        for post in sources:
            for location in locations:
                await self.post_client.duplicate(post, location, board)
                count += 1
                self.progress.update(f"{count} of {total} job posts are created.")
        self.progress.succeed(f"{count} of {total} job posts are created.")
        return sources

    async def mark_as_live(self, job_id: int, old_posts: Sequence[PostInfo], board: JobBoard) -> int:
        """Publish the posts created since ``old_posts`` was scraped.

        When no new post shows up, every post that is not live is published
        instead.
        """
        self.progress.start("Starting to set job posts as live.")
        job = await self.get_job_data(job_id)
        old_ids = {post.id for post in old_posts}
        to_publish = [post for post in job.posts if post.id not in old_ids]
        if not to_publish:
            to_publish = [post for post in job.posts if not post.is_live]

        total = len(to_publish)
        for count, post in enumerate(to_publish, start=1):
            await self.post_client.set_status(post, "live", board)
            self.progress.update(f"{count} of {total} job posts are set live.")
        self.progress.succeed(f"{total} of {total} job posts are set live.")
        return total

    # -------------------- deleting --------------------
    def is_protected(self, post: PostInfo) -> bool:
        pattern = re.escape(post.board_info.name)
        return any(re.search(pattern, board, re.IGNORECASE) for board in self.config.protected_job_boards)

    def filter_posts_to_delete(
        self,
        posts: Sequence[PostInfo],
        similar_post_id: Optional[int] = None,
        regions: Optional[Sequence[str]] = None,
    ) -> Tuple[List[PostInfo], List[PostInfo]]:
        """Split deletable posts into (matching ``regions``, in no known region).

        Posts on protected boards are never returned. ``similar_post_id``
        restricts both lists to posts named like that post. ``regions=None``
        means every region of the table, so locations outside it still end
        up in the second list.
        """
        regions = self.regions.names if regions is None else self.regions.validate(regions)

        similar_name = None
        if similar_post_id is not None:
            similar = next((post for post in posts if post.id == similar_post_id), None)
            if similar is None:
                raise UserError(f"Post with {similar_post_id} ID cannot be found")
            similar_name = similar.name

        to_delete: List[PostInfo] = []
        unknown: List[PostInfo] = []
        for post in posts:
            if self.is_protected(post):
                continue
            if similar_name is not None and post.name != similar_name:
                continue
            if any(self.regions.matches_region(post.location, region) for region in regions):
                to_delete.append(post)
            elif not self.regions.is_known_location(post.location):
                unknown.append(post)
        return to_delete, unknown

    async def delete_job_posts(self, posts: Sequence[PostInfo], board: JobBoard, job: JobInfo) -> int:
        """Unpublish (when live) and delete ``posts``; returns how many were deleted."""
        total = len(posts)
        self.progress.update(f"0 of {total} job posts were deleted.")
        for count, post in enumerate(posts, start=1):
            if post.is_live:
                await self.post_client.set_status(post, "offline", board)
            await self.post_client.delete_post(post, job)
            await self.session.reload()
            self.progress.update(f"{count} of {total} job posts were deleted.")
        return total

    async def delete_posts(
        self,
        job: JobInfo,
        regions: Optional[Sequence[str]] = None,
        similar_post_id: Optional[int] = None,
        board: JobBoard | None = None,
    ) -> int:
        self.progress.start("Starting to delete job posts.")
        to_delete, unknown = self.filter_posts_to_delete(job.posts, similar_post_id, regions)
        if board is None:
            board = await self.get_board_to_post()

        deleted = await self.delete_job_posts(to_delete, board, job)
        if unknown:
            self.progress.warn(f"{len(unknown)} job posts are in locations that match no region:")
            for post in unknown:
                self.progress.info(f"- {post.log_name}")
            if self.confirm is not None and await self.confirm(unknown):
                deleted += await self.delete_job_posts(unknown, board, job)
        self.progress.succeed(f"{deleted} job posts of {job.name} were deleted.")
        return deleted

    # -------------------- workflows --------------------
    async def replicate(self, post_id: int, regions: Sequence[str], *, reset_first: bool = False) -> Dict[str, Any]:
        """Clone the posts named like ``post_id`` into ``regions`` and publish the copies."""
        regions = self.regions.validate(regions)
        job_id = await self.get_job_id_from_post(post_id)
        job = await self.get_job_data(job_id)
        board = await self.get_board_to_post()

        deleted = 0
        if reset_first:
            deleted = await self.delete_posts(job, regions, similar_post_id=post_id, board=board)
            job = await self.get_job_data(job_id)

        sources = await self.clone_posts(job.posts, regions, post_id, board)
        published = await self.mark_as_live(job_id, job.posts, board)
        return {
            "job": job.name,
            "regions": list(regions),
            "sources": [post.log_name for post in sources],
            "deleted": deleted,
            "published": published,
        }

    async def reset(self, post_id: int, regions: Optional[Sequence[str]] = None) -> Dict[str, Any]:
        """Delete the posts named like ``post_id`` (optionally only in ``regions``)."""
        if regions is not None:
            regions = self.regions.validate(regions)
        job_id = await self.get_job_id_from_post(post_id)
        job = await self.get_job_data(job_id)
        deleted = await self.delete_posts(job, regions, similar_post_id=post_id)
        return {"job": job.name, "deleted": deleted}

    async def repost(self, post_id: int) -> Dict[str, Any]:
        """Replace a post with a fresh copy so it shows up as newly published."""
        job_id = await self.get_job_id_from_post(post_id)
        job = await self.get_job_data(job_id)
        post = next((candidate for candidate in job.posts if candidate.id == post_id), None)
        if post is None:
            raise UserError(f"Post with {post_id} ID cannot be found")
        board = await self.get_board_to_post()

        self.progress.start(f"Reposting {post.log_name}.")
        await self.post_client.duplicate(post, post.location, board)
        await self.mark_as_live(job_id, job.posts, board)
        await self.post_client.set_status(post, "offline", board)
        await self.post_client.delete_post(post, job)
        await self.session.reload()
        self.progress.succeed(f"{post.log_name} was reposted.")
        return {"job": job.name, "post": post.log_name}
