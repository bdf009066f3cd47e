"""HTTP session factories for the catalog and video platform APIs.

Creates requests.Session objects pre-configured with:
- Honest User-Agent header (not browser impersonation)
- Bearer authentication and JSON Accept header for the catalog API
- A single attempt per request: no automatic retries or backoff
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from topseries.config import CatalogConfig, YouTubeConfig


def _mount_single_attempt(session: requests.Session) -> None:
    retry_strategy = Retry(total=0, read=False, raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("https://", adapter)
    session.mount("http://", adapter)


def create_session(config: CatalogConfig) -> requests.Session:
    """Create an authenticated session for the catalog API.

    Every request issued through the session carries the bearer token
    and asks for JSON. Failed requests are not retried; a retry is a
    manual re-run of the whole fetch cycle.

    Args:
        config: Catalog configuration with bearer_token and user_agent.

    Returns:
        A requests.Session ready to use for all catalog calls.
    """
    session = requests.Session()
    session.headers["User-Agent"] = config.user_agent
    session.headers["Accept"] = "application/json"
    session.headers["Authorization"] = f"Bearer {config.bearer_token}"
    _mount_single_attempt(session)
    return session


def create_video_session(config: YouTubeConfig) -> requests.Session:
    """Create an unauthenticated session for the video platform.

    The video platform API authenticates with a query parameter, so no
    credentials are attached to the session itself.
    """
    session = requests.Session()
    session.headers["User-Agent"] = config.user_agent
    _mount_single_attempt(session)
    return session
