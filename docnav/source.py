"""Load document markdown from a local path or an HTTP(S) URL.

Where documents live is up to the caller; this module only covers the two
locations the CLI accepts. Remote fetches reuse a retrying ``requests``
session and record the ``Last-Modified`` header so pages can show when the
source last changed.

Example
-------
>>> from docnav.source import load_source
>>> source = load_source("docs/guide.md")  # doctest: +SKIP
>>> source.name  # doctest: +SKIP
'guide'
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import logging
from email.utils import parsedate_to_datetime
from pathlib import Path, PurePosixPath
from urllib.parse import urlsplit

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)

REMOTE_SCHEMES = ("http://", "https://")


@dc.dataclass(frozen=True, slots=True)
class SourceDocument:
    """Markdown text plus where it came from.

    Attributes
    ----------
    text : str
        Raw UTF-8 markdown.
    name : str
        File stem used for default output names and page titles.
    location : str
        The path or URL the text was read from.
    updated_at : datetime | None
        Modification time of the file or ``Last-Modified`` of the response.
    """

    text: str
    name: str
    location: str
    updated_at: dt.datetime | None = None


def load_source(location: str) -> SourceDocument:
    """Read markdown from ``location``.

    Parameters
    ----------
    location : str
        Filesystem path or ``http(s)://`` URL.

    Returns
    -------
    SourceDocument
        The text and its metadata.

    Raises
    ------
    FileNotFoundError
        If a local path does not exist.
    requests.HTTPError
        If the remote server answers with an error status.
    """
    if location.startswith(REMOTE_SCHEMES):
        return _fetch_remote(location)
    path = Path(location)
    if not path.exists():
        msg = f"Source file '{path}' not found."
        raise FileNotFoundError(msg)
    modified = dt.datetime.fromtimestamp(path.stat().st_mtime, tz=dt.UTC)
    return SourceDocument(
        text=path.read_text(encoding="utf-8"),
        name=path.stem,
        location=str(path),
        updated_at=modified,
    )


def _fetch_remote(url: str) -> SourceDocument:
    """Download markdown with retries, keeping the Last-Modified timestamp."""
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    try:
        logger.info("Fetching %s", url)
        resp = session.get(url, timeout=30)
        resp.raise_for_status()
        if not _declares_charset(resp.headers.get("Content-Type")):
            resp.encoding = "utf-8"
        return SourceDocument(
            text=resp.text,
            name=PurePosixPath(urlsplit(url).path).stem or "document",
            location=url,
            updated_at=_parse_last_modified(resp.headers.get("Last-Modified")),
        )
    finally:
        session.close()


def _declares_charset(content_type: str | None) -> bool:
    """Return whether a Content-Type header names a charset explicitly."""
    return "charset=" in (content_type or "").lower()


def _parse_last_modified(header_value: str | None) -> dt.datetime | None:
    """Parse an HTTP Last-Modified header into a timezone-aware UTC datetime."""
    if not header_value:
        return None
    try:
        parsed = parsedate_to_datetime(header_value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


__all__ = ["SourceDocument", "load_source"]
