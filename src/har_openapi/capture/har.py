"""HTTP Archive (HAR) reader.

Parses HAR 1.1/1.2 files exported from browser DevTools or proxies into
Sample models.
"""

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl, unquote, urlsplit

from har_openapi.capture.base import Header, Query, Request, RequestBody, Response, Sample
from har_openapi.errors import CaptureFormatError

logger = logging.getLogger(__name__)

SUPPORTED_VERSIONS = ("1.1", "1.2")

IGNORED_HEADERS = {
    "content-length",
    "content-type",
    "accept",
    "user-agent",
    "authorization",
    "accept-encoding",
    "accept-language",
    "access-control-allow-methods",
    "access-control-allow-origin",
    "access-control-allow-headers",
    "access-control-allow-credentials",
    "access-control-expose-headers",
    "server",
    "date",
    ":authority",
    ":method",
    ":path",
    ":scheme",
    "cookie",
    "dnt",
    "referer",
    "sec-ch-ua",
    "sec-ch-ua-mobile",
    "sec-ch-ua-platform",
    "sec-fetch-dest",
    "sec-fetch-mode",
    "sec-fetch-site",
}


def read_har(file_path: Path) -> dict:
    """Load a HAR file and check that it carries a supported log."""
    text = file_path.read_text(encoding="utf-8")
    try:
        har = json.loads(text)
    except json.JSONDecodeError as e:
        raise CaptureFormatError(f"{file_path}: not valid JSON ({e})") from e

    log = har.get("log") if isinstance(har, dict) else None
    if not isinstance(log, dict) or not isinstance(log.get("entries"), list):
        raise CaptureFormatError(f"{file_path}: missing log.entries")

    version = str(log.get("version", "1.2"))
    if version not in SUPPORTED_VERSIONS:
        raise CaptureFormatError(f"{file_path}: unsupported HAR version {version}")
    return har


def har_entries(har: dict) -> list[dict]:
    return har["log"]["entries"]


def load_samples(file_path: Path) -> list[Sample]:
    """Parse a HAR file into a list of Sample, in capture order."""
    entries = har_entries(read_har(file_path))
    samples = [parse_entry(entry) for entry in entries]
    logger.debug("Read %d har entries from %s", len(samples), file_path)
    return samples


def parse_entry(entry: dict) -> Sample:
    req = entry.get("request", {})
    res = entry.get("response", {})
    url = req.get("url", "")

    request = Request(
        url=url,
        method=req.get("method", "GET").upper(),
        headers=_parse_headers(req.get("headers", [])),
        query=_parse_query(req.get("queryString"), url),
        body=_parse_post_data(req.get("postData")),
    )
    response = Response(
        data=_parse_text(res.get("content", {}).get("text")),
        headers=_parse_headers(res.get("headers", [])),
    )
    return Sample(request=request, response=response)


def _parse_headers(headers: list[dict]) -> list[Header]:
    parsed = []
    for h in headers:
        name = h.get("name", "")
        if name.lower() not in IGNORED_HEADERS:
            parsed.append((name, h.get("value", "")))
    return parsed


def _parse_query(query: list[dict] | None, url: str) -> list[Query]:
    # Some exporters leave queryString out; fall back to the URL itself.
    if query is None:
        try:
            return parse_qsl(urlsplit(url).query, keep_blank_values=True)
        except ValueError:
            return []
    return [(unquote(q["name"]), q.get("value", "")) for q in query]


def _parse_post_data(post_data: dict | None) -> RequestBody | None:
    if not post_data:
        return None
    return RequestBody(
        mime=post_data.get("mimeType", ""),
        content=_parse_text(post_data.get("text")),
    )


def _parse_text(text: str | None) -> Any:
    """Parse body text as JSON, keeping the raw text when it is not JSON."""
    if text is None:
        return None
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        # Bodies nested deeper than the recursion limit stay as text
        return text
