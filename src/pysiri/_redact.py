"""Helpers for safe debug logging.

SIRI endpoints frequently carry API keys in the query string, and feed
payloads can run to several megabytes. These helpers keep both out of the
logs.
"""

from __future__ import annotations

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pysiri._constants import SENSITIVE_QUERY_KEYS


def redact_url(url: str) -> str:
    """Return *url* with credential-like query values and userinfo masked."""
    parts = urlsplit(url)
    netloc = parts.netloc
    if "@" in netloc:
        netloc = "<redacted>@" + netloc.rsplit("@", 1)[1]

    if not parts.query:
        return urlunsplit(parts._replace(netloc=netloc))

    query = [
        (key, "<redacted>" if key.lower() in SENSITIVE_QUERY_KEYS else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(netloc=netloc, query=urlencode(query, safe="<>")))


def preview_payload(raw: bytes | str, *, max_bytes: int = 256) -> str:
    """Return a short, printable preview of a raw feed body."""
    if isinstance(raw, str):
        raw = raw.encode("utf-8", errors="replace")
    head = raw[:max_bytes].decode("utf-8", errors="replace")
    if len(raw) > max_bytes:
        return f"{head}…<truncated {len(raw)}b>"
    return head
