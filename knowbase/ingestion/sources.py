"""Source resolution collaborators: local file reads and URL fetches."""

import logging
from pathlib import Path

import requests

from knowbase.errors import SourceFetchError, SourceReadError
from knowbase.ingestion.cleaner import clean_html_text, looks_like_html

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 20.0
DEFAULT_USER_AGENT = "knowbase/0.1"


def read_file(path: str) -> str:
    """Read a local text file as UTF-8."""
    try:
        return Path(path).expanduser().read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read %s: %s", path, e)
        raise SourceReadError(path, str(e)) from e


def fetch_url(
    url: str,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    clean_html: bool = True,
    user_agent: str = DEFAULT_USER_AGENT,
) -> str:
    """Fetch a URL and return its body, reduced to text when it is HTML.

    ``timeout`` is in seconds and bounds both connect and read. Nothing is
    retried here.
    """
    try:
        resp = requests.get(url, timeout=timeout, headers={"User-Agent": user_agent})
        resp.raise_for_status()
    except requests.Timeout as e:
        logger.warning("Timed out fetching %s after %ss", url, timeout)
        raise SourceFetchError(url, f"timed out after {timeout}s") from e
    except requests.RequestException as e:
        logger.warning("Failed to fetch %s: %s", url, e)
        raise SourceFetchError(url, str(e)) from e

    body = resp.text or ""
    content_type = resp.headers.get("Content-Type", "") if resp.headers else ""
    if clean_html and looks_like_html(body, content_type):
        body = clean_html_text(body)
    logger.debug("Fetched %s (%d characters)", url, len(body))
    return body
