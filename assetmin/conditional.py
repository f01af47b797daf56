"""Conditional GET support: Last-Modified/ETag validators and 304 decisions."""

from __future__ import annotations

import hashlib
from email.utils import formatdate, parsedate_to_datetime
from typing import Mapping, MutableMapping, Optional, Set


class ConditionalHeaders:
    """Emit validators for a resource and decide whether the client copy is current."""

    def apply(
        self,
        response_headers: MutableMapping[str, str],
        last_modified: float,
        request_headers: Mapping[str, str],
        *,
        timestamp: Optional[float] = None,
        etag_seed: str = "",
    ) -> bool:
        """Write ``Last-Modified``/``ETag`` and return ``True`` for a 304.

        ``timestamp`` overrides ``last_modified`` when the caller wants to
        advertise a different generation time. ``If-None-Match`` takes
        precedence over ``If-Modified-Since`` when both are sent.
        """
        modified = int(timestamp if timestamp is not None else last_modified)
        etag = self.etag_for(etag_seed, modified)
        response_headers["Last-Modified"] = formatdate(modified, usegmt=True)
        response_headers["ETag"] = etag

        lowered = {name.lower(): value for name, value in request_headers.items()}
        if_none_match = lowered.get("if-none-match")
        if if_none_match is not None:
            candidates = _parse_etags(if_none_match)
            return "*" in candidates or etag in candidates

        if_modified_since = lowered.get("if-modified-since")
        if if_modified_since is not None:
            since = _parse_http_date(if_modified_since)
            return since is not None and since >= modified
        return False

    @staticmethod
    def etag_for(seed: str, modified: int) -> str:
        digest = hashlib.md5(f"{seed}:{modified}".encode("utf-8")).hexdigest()
        return f'"{digest}"'


def _parse_etags(value: str) -> Set[str]:
    tags: Set[str] = set()
    for part in value.split(","):
        tag = part.strip()
        if tag.startswith("W/"):
            tag = tag[2:]
        if tag:
            tags.add(tag)
    return tags


def _parse_http_date(value: str) -> Optional[int]:
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed is None or parsed.tzinfo is None:
        return None
    return int(parsed.timestamp())


__all__ = ["ConditionalHeaders"]
