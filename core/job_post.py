"""Single job post operations replayed against Greenhouse's XHR endpoints."""
from __future__ import annotations

import json
import re
from typing import Any, Callable, Dict, Mapping, Optional, Protocol
from urllib.parse import quote, urlencode

from bs4 import Tag

from config.settings import Config
from core.errors import (
    ErrorReporter,
    GeocodingError,
    NullErrorReporter,
    RemoteCallError,
    ScrapeError,
    describe_http_error,
)
from core.post_transformer import build_creation_payload, geocoding_query, normalize_geocoding_result
from core.types import BaseInfo, JobBoard, JobInfo, PostInfo, PostStatus
from tools.page_scanner import id_from_href
from utils.logging import get_logger

logger = get_logger(__name__)

JOB_POSTS_FORM_SELECTOR = "*[data-react-class='JobPostsForm']"
MAPBOX_TOKEN_SELECTOR = "*[data-key='LocationControl.Providers.Mapbox.apiKey']"
MAPBOX_GEOCODING_URL = "https://api.mapbox.com/geocoding/v5/mapbox.places/{query}.json"


class PageSession(Protocol):
    async def goto(self, url: str) -> None:
        ...

    async def get_dom(self) -> str:
        ...

    async def reload(self) -> None:
        ...

    async def get_attribute(self, selector: str, name: str) -> Optional[str]:
        ...

    async def csrf_token(self) -> Optional[str]:
        ...

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
        ...


def is_successful(response: Any) -> bool:
    return isinstance(response, Mapping) and (
        response.get("status") == "success" or bool(response.get("success"))
    )


def parse_post_row(row: Tag, job: JobInfo, page_url: str) -> PostInfo:
    """Build a :class:`PostInfo` from one ``.job-application`` row of the job app listing."""
    title = row.select_one(".job-application__name")
    if title is None:
        raise ScrapeError(f"Post title cannot be found in {page_url}")
    lines = [line.strip() for line in title.get_text("\n").split("\n") if line.strip()]
    if len(lines) < 2:
        raise ScrapeError(f"Post name and location cannot be read in {page_url}: {lines}")

    trigger_box = row.select_one(".js-trigger-box")
    post_id = trigger_box.get("data-job-id") if trigger_box is not None else None
    if not post_id:
        raise ScrapeError(f"Post information cannot be found in {page_url}.")

    board_column = row.select_one(".board-column")
    board_anchor = board_column.select_one("a") if board_column is not None else None
    if board_column is None or board_anchor is None or not board_anchor.get("href"):
        raise ScrapeError(f"Post board cannot be found in {page_url}")

    return PostInfo(
        id=int(post_id),
        name=lines[0],
        location=re.sub(r"[()]", "", lines[1]),
        board_info=BaseInfo(id=id_from_href(board_anchor["href"]), name=board_column.get_text(strip=True)),
        job=job,
        is_live="live" in " ".join(row.get("class", [])),
    )


class JobPostClient:
    """Duplicate, publish, unpublish and delete job posts through the browser session."""

    def __init__(self, session: PageSession, config: Config, reporter: ErrorReporter | None = None) -> None:
        self.session = session
        self.config = config
        self.reporter = reporter or NullErrorReporter()

    async def send(
        self,
        url: str,
        *,
        context: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
        referrer: Optional[str] = None,
        success: Callable[[Any], bool] = is_successful,
    ) -> Any:
        """Send an XHR and raise :class:`RemoteCallError` unless ``success`` accepts the answer."""
        response = await self.session.send_request(
            url, method=method, headers=headers, body=body, referrer=referrer
        )
        if not response or (isinstance(response, Mapping) and response.get("isError")) or not success(response):
            if isinstance(response, Mapping) and response.get("isError"):
                detail = describe_http_error(response)
            else:
                detail = f"Unexpected response to {method} {url}: {response!r}"
            logger.debug("Remote call failed (%s): %s", context, detail)
            self.reporter.report(detail, url=url, method=method)
            raise RemoteCallError(context, detail)
        return response

    async def get_location_info(self, location: str) -> Dict[str, Any]:
        """Geocode ``location`` with the Mapbox key embedded in the current edit page."""
        query = geocoding_query(location)
        if not query:
            raise GeocodingError(f"Location {location!r} has no city to geocode.")

        access_token = await self.session.get_attribute(MAPBOX_TOKEN_SELECTOR, "data-value")
        if not access_token:
            raise ScrapeError("Data key to retrieve location information cannot be found.")

        params = urlencode(
            {
                "access_token": access_token,
                "language": "en",
                "autocomplete": "true",
                "types": "place,locality",
                "limit": 10,
            }
        )
        url = f"{MAPBOX_GEOCODING_URL.format(query=quote(query))}?{params}"
        response = await self.session.send_request(
            url,
            headers={"accept": "*/*"},
            referrer=self.config.greenhouse_url,
            credentials="omit",
        )
        if isinstance(response, Mapping) and response.get("isError"):
            logger.warning("Geocoding %s failed: %s", query, describe_http_error(response))
            response = None
        return normalize_geocoding_result(response, query)

    async def duplicate(self, post: PostInfo, location: str, board: JobBoard) -> None:
        """Create a copy of ``post`` at ``location`` on ``board``.

        Nothing local changes; re-scrape the job to see the new post.
        """
        log_name = f"{post.name} | {location}"
        edit_url = self.config.url(f"/jobapps/{post.id}/edit")
        await self.session.goto(edit_url)

        raw_props = await self.session.get_attribute(JOB_POSTS_FORM_SELECTOR, "data-react-props")
        if not raw_props:
            raise ScrapeError(f"Failed to retrieve job post form data of {log_name} ({JOB_POSTS_FORM_SELECTOR})")
        try:
            form = json.loads(raw_props)
        except ValueError as exc:
            raise ScrapeError(f"Job post form data of {log_name} is not valid JSON") from exc

        location_info = await self.get_location_info(location)
        payload = build_creation_payload(
            form,
            target_location=location,
            target_board_id=board.id,
            source_post_id=post.id,
            source_post_name=post.name,
            filtered_attributes=self.config.filtered_attributes,
            location_info=location_info,
            usa_cities=self.config.usa_cities,
        )
        await self.send(
            self.config.url(f"/plans/{post.job.id}/jobapps"),
            context=f"create {log_name}",
            method="POST",
            headers={"content-type": "application/json;charset=UTF-8"},
            body=json.dumps(payload),
            referrer=edit_url,
        )
        logger.info("Created %s", log_name)

    async def set_status(self, post: PostInfo, status: PostStatus, board: JobBoard) -> None:
        jobapp_url = self.config.url(f"/plans/{post.job.id}/jobapp")
        await self.session.goto(jobapp_url)
        # Tokens are per page; read it after landing on the job app listing.
        token = await self.session.csrf_token()
        if not token:
            raise ScrapeError(f"CSRF token cannot be found in {jobapp_url}")
        body = urlencode(
            {
                "utf8": "✓",
                "authenticity_token": token,
                "job_application_status_id": board.status_id(status),
            }
        )
        await self.send(
            self.config.url(f"/jobapps/{post.id}/status"),
            context=f"update the status of {post.log_name} to {status}",
            method="POST",
            headers={
                "content-type": "application/x-www-form-urlencoded; charset=UTF-8",
                "x-requested-with": "XMLHttpRequest",
            },
            body=body,
            referrer=jobapp_url,
        )
        logger.info("Set %s %s", post.log_name, status)

    async def delete_post(self, post: PostInfo, job: JobInfo) -> None:
        await self.send(
            self.config.url(f"/jobapps/{post.id}"),
            context=f"delete {post.log_name}",
            method="DELETE",
            headers={"x-requested-with": "XMLHttpRequest"},
            referrer=self.config.url(f"/plans/{job.id}/jobapp"),
        )
        logger.info("Deleted %s", post.log_name)
