"""HAR housekeeping run before generation: path filtering and log merging."""

import copy
import logging
from pathlib import Path
from urllib.parse import urlsplit

from har_openapi.capture.har import har_entries, read_har

logger = logging.getLogger(__name__)


def _url_path(entry: dict) -> str:
    return urlsplit(entry.get("request", {}).get("url", "")).path


def filter_entries(entries: list[dict], only_path: str, excludes: tuple[str, ...] = ()) -> list[dict]:
    """Keep entries whose URL path starts with ``only_path`` and no exclusion.

    Entries whose URL path was already kept are dropped, so the result holds
    one representative entry per path (the first one captured).
    """
    seen: set[str] = set()
    result = []
    for entry in entries:
        path = _url_path(entry)
        if any(path.startswith(e) for e in excludes):
            continue
        if not path.startswith(only_path):
            continue
        if path in seen:
            continue
        seen.add(path)
        result.append(entry)
    logger.debug("Kept %d of %d entries under %s", len(result), len(entries), only_path)
    return result


def filter_har(har: dict, only_path: str, excludes: tuple[str, ...] = ()) -> dict:
    filtered = copy.deepcopy(har)
    filtered["log"]["entries"] = filter_entries(har_entries(har), only_path, excludes)
    return filtered


def merge_har_files(file_paths: list[Path]) -> dict:
    """Append the entries of every following archive to the first one."""
    first, *rest = file_paths
    merged = read_har(first)
    entries = har_entries(merged)
    for file_path in rest:
        entries.extend(har_entries(read_har(file_path)))
        logger.info("Added %s to archive", file_path)
    return merged
