"""
Deduplication of fetched candidates against already-stored intelligence.

A candidate is dropped when its url is already known, or when its title exactly
matches a known title. Title matching is the fallback for sources that don't
yield stable urls; it can drop distinct items that happen to share a title.
"""
from typing import Iterable, List, Tuple, Set

from prospect_intel.refresh.base import CandidateItem


def _key_fields(item) -> Tuple[str, str]:
    """(url, title) from an ORM row, a CandidateItem, or a {url, title} dict."""
    if isinstance(item, dict):
        return item.get('url') or '', item.get('title') or ''
    return getattr(item, 'url', None) or '', getattr(item, 'title', None) or ''


def build_index(existing: Iterable) -> Tuple[Set[str], Set[str]]:
    """Return (known_urls, known_titles). Empty urls are never indexed."""
    urls, titles = set(), set()
    for item in existing:
        url, title = _key_fields(item)
        if url:
            urls.add(url)
        titles.add(title)
    return urls, titles


def dedup_candidates(candidates: List[CandidateItem], existing: Iterable) -> List[CandidateItem]:
    """
    Return the candidates not already present in `existing`, in input order.

    Only stored items count: two candidates from the same fetch that share a
    url or title both survive.
    """
    known_urls, known_titles = build_index(existing)

    fresh = []
    for item in candidates:
        url, title = _key_fields(item)
        if url and url in known_urls:
            continue
        if title in known_titles:
            continue
        fresh.append(item)
    return fresh
