from __future__ import annotations

import asyncio
import json
from urllib.parse import parse_qs

import pytest
from bs4 import BeautifulSoup

from conftest import BASE_URL, FakeSession, make_post, post_row
from core.errors import GeocodingError, LoggingErrorReporter, RemoteCallError, ScrapeError
from core.job_post import (
    JOB_POSTS_FORM_SELECTOR,
    MAPBOX_TOKEN_SELECTOR,
    JobPostClient,
    is_successful,
    parse_post_row,
)
from core.types import JobInfo

MAPBOX_RESPONSE = {
    "features": [
        {
            "text": "London",
            "place_name": "London, England, United Kingdom",
            "center": [-0.12, 51.5],
            "context": [{"id": "country.8", "text": "United Kingdom", "short_code": "gb"}],
        }
    ]
}

FORM = {
    "job_application": {
        "id": 555,
        "job_board_feed_settings": [],
        "job_board_feed_location": {},
        "job_post_education_config": {"id": 3},
        "questions": [],
        "job_post_locations": [{"id": 1, "text_value": "Home based - Americas, Boston, MA"}],
    }
}


def first_row(html: str):
    return BeautifulSoup(html, "html.parser").select_one(".job-application")


def test_parse_post_row() -> None:
    job = JobInfo(id=10, name="Engineering")
    row = first_row(post_row(501, "Software Engineer", "Home based - EMEA, London, United Kingdom", "Canonical", 4, live=True))
    post = parse_post_row(row, job, "page-url")
    assert post.id == 501
    assert post.name == "Software Engineer"
    assert post.location == "Home based - EMEA, London, United Kingdom"
    assert post.board_info.id == 4
    assert post.board_info.name == "Canonical"
    assert post.is_live is True
    assert post.job is job


def test_parse_post_row_reports_missing_elements() -> None:
    job = JobInfo(id=10, name="Engineering")
    with pytest.raises(ScrapeError, match="page-url"):
        parse_post_row(first_row('<div class="job-application"></div>'), job, "page-url")
    broken = post_row(501, "Software Engineer", "Somewhere", "Canonical").replace('data-job-id="501"', "")
    with pytest.raises(ScrapeError):
        parse_post_row(first_row(broken), job, "page-url")


def test_is_successful() -> None:
    assert is_successful({"status": "success"})
    assert is_successful({"success": True})
    assert not is_successful({"status": "failure"})
    assert not is_successful({"success": False})
    assert not is_successful(None)


def test_duplicate_posts_transformed_form(config, board) -> None:
    session = FakeSession()
    session.attributes[(JOB_POSTS_FORM_SELECTOR, "data-react-props")] = json.dumps(FORM)
    session.attributes[(MAPBOX_TOKEN_SELECTOR, "data-value")] = "pk.token"
    session.respond("GET", "https://api.mapbox.com/", MAPBOX_RESPONSE)
    post = make_post(555, "Home based - Americas, Boston, MA")

    asyncio.run(JobPostClient(session, config).duplicate(post, "Home based - EMEA, London, United Kingdom", board))

    assert session.visited == [f"{BASE_URL}/jobapps/555/edit"]
    geocode, create = session.requests
    assert geocode["url"].startswith("https://api.mapbox.com/geocoding/v5/mapbox.places/London%2C%20United%20Kingdom.json?")
    assert "access_token=pk.token" in geocode["url"]
    assert "types=place%2Clocality" in geocode["url"]
    assert geocode["credentials"] == "omit"

    assert create["method"] == "POST"
    assert create["url"] == f"{BASE_URL}/plans/10/jobapps"
    assert create["referrer"] == f"{BASE_URL}/jobapps/555/edit"
    payload = json.loads(create["body"])
    assert payload["external_or_internal_greenhouse_job_board_id"] == board.id
    assert payload["template_application_id"] == 555
    application = payload["greenhouse_job_application"]
    assert application["job_post_locations"][0]["text_value"] == "Home based - EMEA, London, United Kingdom"
    assert application["job_board_feed_location_attributes"]["country_short_name"] == "GB"
    assert application["enable_eeoc"] is False


def test_duplicate_without_form_data(config, board) -> None:
    session = FakeSession()
    with pytest.raises(ScrapeError):
        asyncio.run(JobPostClient(session, config).duplicate(make_post(1, "x, London"), "x, London", board))
    assert session.requests == []


def test_duplicate_geocoding_failure_sends_nothing_to_greenhouse(config, board) -> None:
    session = FakeSession()
    session.attributes[(JOB_POSTS_FORM_SELECTOR, "data-react-props")] = json.dumps(FORM)
    session.attributes[(MAPBOX_TOKEN_SELECTOR, "data-value")] = "pk.token"
    session.respond("GET", "https://api.mapbox.com/", {"isError": True, "status": 401, "url": "u", "statusText": "Unauthorized"})
    with pytest.raises(GeocodingError):
        asyncio.run(
            JobPostClient(session, config).duplicate(make_post(1, "x"), "Home based - EMEA, London, United Kingdom", board)
        )
    assert [request["method"] for request in session.requests] == ["GET"]


def test_duplicate_rejected_by_greenhouse_is_reported(config, board) -> None:
    session = FakeSession()
    session.attributes[(JOB_POSTS_FORM_SELECTOR, "data-react-props")] = json.dumps(FORM)
    session.attributes[(MAPBOX_TOKEN_SELECTOR, "data-value")] = "pk.token"
    session.respond("GET", "https://api.mapbox.com/", MAPBOX_RESPONSE)
    session.respond(
        "POST",
        f"{BASE_URL}/plans/10/jobapps",
        {"isError": True, "status": 500, "url": f"{BASE_URL}/plans/10/jobapps", "statusText": "Internal Server Error"},
    )
    reporter = LoggingErrorReporter()
    client = JobPostClient(session, config, reporter)
    with pytest.raises(RemoteCallError, match="Operation failed: create Software Engineer"):
        asyncio.run(client.duplicate(make_post(1, "x"), "Home based - EMEA, London, United Kingdom", board))
    assert "status of 500 (Internal Server Error)" in reporter.reported[0]["error"]


def test_set_status_posts_form_with_fresh_token(config, board) -> None:
    session = FakeSession()
    post = make_post(501, "Home based - EMEA, London, United Kingdom")

    asyncio.run(JobPostClient(session, config).set_status(post, "offline", board))

    assert session.visited == [f"{BASE_URL}/plans/10/jobapp"]
    (request,) = session.requests
    assert request["url"] == f"{BASE_URL}/jobapps/501/status"
    assert request["method"] == "POST"
    assert request["headers"]["x-requested-with"] == "XMLHttpRequest"
    assert request["body"].startswith("utf8=%E2%9C%93&")
    fields = parse_qs(request["body"])
    assert fields["authenticity_token"] == ["tok+en/=="]
    assert fields["job_application_status_id"] == [str(board.unpublish_status_id)]


def test_set_status_live_uses_publish_id(config, board) -> None:
    session = FakeSession()
    asyncio.run(JobPostClient(session, config).set_status(make_post(501, "x"), "live", board))
    assert parse_qs(session.requests[0]["body"])["job_application_status_id"] == [str(board.publish_status_id)]


def test_set_status_without_csrf_token(config, board) -> None:
    session = FakeSession()
    session.csrf = None
    with pytest.raises(ScrapeError):
        asyncio.run(JobPostClient(session, config).set_status(make_post(501, "x"), "live", board))
    assert session.requests == []


def test_delete_post(config) -> None:
    session = FakeSession()
    post = make_post(501, "x")
    asyncio.run(JobPostClient(session, config).delete_post(post, post.job))
    (request,) = session.requests
    assert request["method"] == "DELETE"
    assert request["url"] == f"{BASE_URL}/jobapps/501"
    assert request["referrer"] == f"{BASE_URL}/plans/10/jobapp"
    assert request["headers"] == {"x-requested-with": "XMLHttpRequest"}


def test_delete_post_requires_success_flag(config) -> None:
    session = FakeSession()
    session.respond("DELETE", f"{BASE_URL}/jobapps/501", {"status": "failure"})
    post = make_post(501, "x")
    with pytest.raises(RemoteCallError):
        asyncio.run(JobPostClient(session, config).delete_post(post, post.job))
