"""Walk paginated Greenhouse listings and pull records out of each page."""
from __future__ import annotations

import json
import re
from typing import AsyncIterator, Callable, Dict, List, Protocol, Tuple, TypeVar
from urllib.parse import unquote

from bs4 import BeautifulSoup

from core.errors import NotFoundError, ScrapeError
from utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

PAGINATION_SELECTOR = '[aria-label*="Page"]'
RECRUITER_TAG = "RECRUITER"
REQUISITION_PATTERN = re.compile(r"\((\d+)\)")
# ``pagination`` holds this literal on the last page of /alljobs/list.
LAST_PAGE_MARKER = "\n"


class ListingSession(Protocol):
    async def goto(self, url: str) -> None:
        ...

    async def get_dom(self) -> str:
        ...


PageExtractor = Callable[[str, str], List[T]]
PageCountDetector = Callable[[str], int]


def detect_page_count(html: str) -> int:
    """Number of pages announced by the pagination widget, 1 without one."""
    soup = BeautifulSoup(html, "html.parser")
    markers = soup.select(PAGINATION_SELECTOR)
    for marker in reversed(markers):
        text = marker.get_text(strip=True)
        if text.isdigit():
            return int(text)
    return 1


async def scan_paginated_listing(
    session: ListingSession,
    base_url: str,
    extract_page: PageExtractor[T],
    detect_pages: PageCountDetector = detect_page_count,
) -> List[T]:
    """Visit ``base_url?page=1..N`` in order and concatenate the extracted records.

    ``extract_page`` receives the page HTML and the page URL. An empty first
    page means the listing selectors no longer match and raises
    :class:`NotFoundError`.
    """
    await session.goto(base_url)
    page_count = detect_pages(await session.get_dom())
    logger.debug("%s has %d page(s)", base_url, page_count)

    records: List[T] = []
    for page_number in range(1, page_count + 1):
        page_url = f"{base_url}?page={page_number}"
        await session.goto(page_url)
        page_records = extract_page(await session.get_dom(), page_url)
        if page_number == 1 and not page_records:
            raise NotFoundError(f"No listing rows found in {page_url}")
        records.extend(page_records)
    return records


# -------------------- /alljobs/list --------------------
def parse_job_list_envelope(page_html: str, url: str) -> Dict[str, str]:
    """Decode the JSON envelope the browser renders for ``/alljobs/list``."""
    soup = BeautifulSoup(page_html, "html.parser")
    text = (soup.body or soup).get_text().strip()
    if not text:
        raise ScrapeError(f"Jobs cannot be found from {url}")
    try:
        content = json.loads(unquote(text))
    except ValueError as exc:
        raise ScrapeError(f"Jobs listing at {url} is not valid JSON") from exc
    if not isinstance(content, dict) or "html" not in content:
        raise ScrapeError(f"Jobs listing at {url} has no 'html' key")
    return content


def parse_recruiter_jobs(fragment: str, recruiter_tag: str = RECRUITER_TAG) -> Dict[str, int]:
    """Map ``"[<req id>] <job name>"`` to job id for jobs the user recruits for."""
    soup = BeautifulSoup(fragment, "html.parser")
    tag_pattern = re.compile(recruiter_tag, re.IGNORECASE)
    jobs: Dict[str, int] = {}
    for anchor in soup.select("a.target"):
        title = anchor.get("title")
        if not title:
            continue
        tags = anchor.select(".job-tag.role")
        if not any(tag_pattern.search(tag.decode_contents()) for tag in tags):
            continue

        href = anchor.get("href")
        if not href:
            raise ScrapeError(f"Cannot get ID of job {title!r}: anchor has no href.")
        job_id = id_from_href(href)

        match = REQUISITION_PATTERN.search(title)
        if not match:
            raise ScrapeError(f"Cannot get req ID: {title}")
        job_name = REQUISITION_PATTERN.split(title, maxsplit=1)[0].strip()
        jobs[f"[{match.group(1)}] {job_name}"] = job_id
    return jobs


def parse_job_list_page(page_html: str, url: str) -> Tuple[Dict[str, int], bool]:
    content = parse_job_list_envelope(page_html, url)
    jobs = parse_recruiter_jobs(content["html"])
    has_more = content.get("pagination") != LAST_PAGE_MARKER
    return jobs, has_more


async def iter_job_list_pages(session: ListingSession, list_url: str) -> AsyncIterator[Dict[str, int]]:
    """Yield the recruiter jobs of each ``/alljobs/list`` page until the last one."""
    page_number = 1
    has_more = True
    while has_more:
        url = f"{list_url}?page={page_number}"
        await session.goto(url)
        jobs, has_more = parse_job_list_page(await session.get_dom(), url)
        yield jobs
        page_number += 1


def id_from_href(href: str) -> int:
    last_segment = href.rstrip("/").split("/")[-1]
    try:
        return int(last_segment)
    except ValueError as exc:
        raise ScrapeError(f"Cannot get ID from {href}.") from exc


