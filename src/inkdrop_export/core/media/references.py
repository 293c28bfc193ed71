"""Rewrite internal attachment links in note bodies."""

import re
from collections.abc import Mapping
from functools import lru_cache

from loguru import logger

from inkdrop_export.config import LINK_SCHEME


@lru_cache
def _link_pattern(scheme: str) -> re.Pattern[str]:
    # The id runs until a markdown/html delimiter: ")", space, or a quote.
    return re.compile(re.escape(scheme) + r"://(file:[^) \"']*)")


def find_file_references(body: str, *, scheme: str = LINK_SCHEME) -> list[str]:
    """Return the distinct file ids linked from ``body``, in order of appearance."""
    seen: dict[str, None] = {}
    for match in _link_pattern(scheme).finditer(body):
        seen.setdefault(match.group(1), None)
    return list(seen)


def rewrite_file_references(
    body: str,
    file_paths: Mapping[str, str],
    *,
    scheme: str = LINK_SCHEME,
) -> str:
    """Replace every ``<scheme>://file:<id>`` link with ``/<materialized path>``.

    Links to ids missing from ``file_paths`` are left unchanged.
    """

    def replace(match: re.Match[str]) -> str:
        file_id = match.group(1)
        path = file_paths.get(file_id)
        if path is None:
            logger.warning("Note links to unknown file {}", file_id)
            return match.group(0)
        return f"/{path}"

    return _link_pattern(scheme).sub(replace, body)
