import logging
from typing import NamedTuple, Optional

import requests

from codestats_readme import __version__

logger = logging.getLogger(__name__)

TIMEOUT = 30


class FetchResult(NamedTuple):
    error: Optional[Exception]
    status: Optional[int]
    body: Optional[str]

    @property
    def ok(self) -> bool:
        return self.error is None and self.status is not None and 200 <= self.status < 300


def make_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({
        "Accept": "application/json",
        "User-Agent": f"codestats-readme/{__version__}",
    })
    return session


def fetch_stats(url: str, session: Optional[requests.Session] = None, timeout: int = TIMEOUT) -> FetchResult:
    """
    GET the Code::Stats user endpoint. Never raises for network trouble:
    transport failures and non-2xx answers come back as (error, status, body).
    """
    session = session or make_session()
    logger.info("Fetching %s", url)
    try:
        resp = session.get(url, timeout=timeout)
    except requests.RequestException as e:
        return FetchResult(e, None, None)
    if not 200 <= resp.status_code < 300:
        err = requests.HTTPError(f"HTTP {resp.status_code}: {resp.reason}", response=resp)
        return FetchResult(err, resp.status_code, None)
    return FetchResult(None, resp.status_code, resp.text)
