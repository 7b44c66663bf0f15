"""Browser driving and page scanning helpers."""

from tools.browser_session import BrowserSession, BrowserSessionConfig, BrowserSessionError
from tools.page_scanner import iter_job_list_pages, scan_paginated_listing

__all__ = [
    "BrowserSession",
    "BrowserSessionConfig",
    "BrowserSessionError",
    "iter_job_list_pages",
    "scan_paginated_listing",
]
