from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from config.settings import Config
from core.progress import ProgressReporter
from core.types import BaseInfo, JobBoard, JobInfo, PostInfo

BASE_URL = "https://canonical.greenhouse.io"


class FakeSession:
    """In-memory stand-in for BrowserSession: HTML by URL, canned XHR answers."""

    def __init__(self, pages: Optional[Dict[str, str]] = None) -> None:
        self.pages = dict(pages or {})
        self.responses: List[Tuple[str, str, Any]] = []
        self.attributes: Dict[Tuple[str, str], Optional[str]] = {}
        self.csrf: Optional[str] = "tok+en/=="
        self.current_url = ""
        self.visited: List[str] = []
        self.requests: List[Dict[str, Any]] = []
        self.reloads = 0
        self.cookie_jar: List[Dict[str, Any]] = []
        self.filled: Dict[str, str] = {}
        self.clicked: List[str] = []
        self.visible: set[str] = set()
        self.redirects: Dict[str, str] = {}

    def respond(self, method: str, url_prefix: str, response: Any) -> None:
        """Answer requests whose URL starts with ``url_prefix``; ``response`` may be a callable."""
        self.responses.append((method, url_prefix, response))

    @property
    def url(self) -> str:
        return self.current_url

    async def goto(self, url: str) -> None:
        self.visited.append(url)
        self.current_url = self.redirects.get(url, url)

    async def get_dom(self) -> str:
        return self.pages.get(self.current_url, "<html><body></body></html>")

    async def reload(self) -> None:
        self.reloads += 1

    async def get_attribute(self, selector: str, name: str) -> Optional[str]:
        return self.attributes.get((selector, name))

    async def csrf_token(self) -> Optional[str]:
        return self.csrf

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
        request = {
            "url": url,
            "method": method,
            "headers": headers or {},
            "body": body,
            "referrer": referrer,
            "credentials": credentials,
        }
        self.requests.append(request)
        for expected_method, prefix, response in self.responses:
            if expected_method == method and url.startswith(prefix):
                return response(request) if callable(response) else response
        return {"status": "success"}

    async def fill(self, selector: str, value: str) -> None:
        self.filled[selector] = value

    async def click(self, selector: str, *, wait_for_navigation: bool = False) -> None:
        self.clicked.append(selector)

    async def wait_for_selector(self, selector: str, timeout: Optional[float] = None) -> bool:
        return selector in self.visible

    async def cookies(self) -> List[Dict[str, Any]]:
        return list(self.cookie_jar)

    async def add_cookies(self, cookies: List[Dict[str, Any]]) -> None:
        self.cookie_jar.extend(cookies)


class FakePostClient:
    """Records lifecycle calls instead of talking to Greenhouse."""

    def __init__(self, boards: Optional[List[Dict[str, Any]]] = None, fail_on: Optional[str] = None) -> None:
        self.calls: List[Tuple[Any, ...]] = []
        self.boards = boards if boards is not None else [board_entry(7, "Canonical - Jobs")]
        self.fail_on = fail_on

    def _record(self, *call: Any) -> None:
        self.calls.append(call)
        if self.fail_on == call[0]:
            raise RuntimeError(f"{call[0]} failed")

    async def duplicate(self, post: PostInfo, location: str, board: JobBoard) -> None:
        self._record("duplicate", post.id, location)

    async def set_status(self, post: PostInfo, status: str, board: JobBoard) -> None:
        self._record("set_status", post.id, status)

    async def delete_post(self, post: PostInfo, job: JobInfo) -> None:
        self._record("delete", post.id)

    async def send(self, url: str, **kwargs: Any) -> Any:
        self.calls.append(("send", url))
        success: Callable[[Any], bool] = kwargs.get("success", bool)
        response = {"job_boards": self.boards}
        assert success(response)
        return response


def board_entry(board_id: int, name: str) -> Dict[str, Any]:
    return {
        "id": board_id,
        "company_name": name,
        "publish_status_id": 3,
        "unpublish_status_id": 4,
    }


def post_row(post_id: int, name: str, location: str, board_name: str, board_id: int = 1, live: bool = False) -> str:
    classes = "job-application live" if live else "job-application"
    return (
        f'<div class="{classes}">'
        f'<div class="job-application__name"><span>{name}</span>\n<span>({location})</span></div>'
        f'<div class="js-trigger-box" data-job-id="{post_id}"></div>'
        f'<div class="board-column"><a href="/jobboard/{board_id}">{board_name}</a></div>'
        "</div>"
    )


def listing_page(rows: List[str], page_count: int = 1) -> str:
    pagination = "".join(
        f'<a aria-label="Page {number}">{number}</a>' for number in range(1, page_count + 1)
    ) if page_count > 1 else ""
    return f"<html><body><div class='pagination'>{pagination}</div>{''.join(rows)}</body></html>"


def job_page(job_id: int, name: str) -> str:
    return f'<html><body><div class="job-name"><a href="/plans/{job_id}">{name}</a></div></body></html>'


def make_post(
    post_id: int,
    location: str,
    *,
    name: str = "Software Engineer",
    board: str = "Canonical - Jobs",
    live: bool = False,
    job: Optional[JobInfo] = None,
) -> PostInfo:
    job = job or JobInfo(id=10, name="Engineering")
    return PostInfo(
        id=post_id,
        name=name,
        location=location,
        board_info=BaseInfo(id=1, name=board),
        job=job,
        is_live=live,
    )


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def progress() -> ProgressReporter:
    return ProgressReporter("test")


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def post_client() -> FakePostClient:
    return FakePostClient()


@pytest.fixture
def board() -> JobBoard:
    return JobBoard(id=7, name="Canonical - Jobs", publish_status_id=3, unpublish_status_id=4)
