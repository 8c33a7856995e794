"""Shareable schedule links carrying ``start`` and ``pattern`` query parameters."""

from __future__ import annotations

from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from rotacal.core.errors import RotacalValueError
from rotacal.scheduling.rotation.models import ScheduleConfig

__all__ = ["SHARE_PARAMS", "config_from_query", "share_query", "share_url"]

SHARE_PARAMS = ("start", "pattern")


def share_query(config: ScheduleConfig) -> str:
    """Return the ``start=...&pattern=...`` query string for ``config``."""
    return urlencode({"start": config.anchor_date.isoformat(), "pattern": str(config.pattern)})


def share_url(config: ScheduleConfig, base_url: str) -> str:
    """Return ``base_url`` with its query replaced by :func:`share_query`.

    Any existing query parameters on ``base_url`` are dropped; the path and fragment are kept.
    """
    parts = urlsplit(base_url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, share_query(config), parts.fragment))


def config_from_query(query: str) -> ScheduleConfig:
    """Rebuild a :class:`ScheduleConfig` from a shared link or its bare query string.

    Raises
    ------
    RotacalValueError
        If ``start`` or ``pattern`` is missing, repeated, or blank, or the start date is invalid.
    InvalidPatternError
        If the pattern is malformed.
    """
    text = query.strip()
    if "?" in text:
        text = urlsplit(text).query
    params = parse_qs(text, keep_blank_values=True)
    values: dict[str, str] = {}
    for key in SHARE_PARAMS:
        found = params.get(key, [])
        if len(found) != 1 or not found[0].strip():
            raise RotacalValueError(f"Shared link needs exactly one non-empty '{key}' parameter")
        values[key] = found[0]
    return ScheduleConfig.from_strings(values["start"], values["pattern"])
