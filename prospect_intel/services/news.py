"""
News fetchers — Google News RSS for the prospect itself and for its industry.

These are the production CandidateFetcher implementations wired by create_app().
Provider errors from the primary fetcher propagate to the scheduler, which logs
them against the prospect.
"""
import logging
import random
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import feedparser
from bs4 import BeautifulSoup
import requests

from prospect_intel.refresh.base import CandidateFetcher, CandidateItem, ProspectIdentity

logger = logging.getLogger('services.news')

GOOGLE_NEWS_RSS_URL = 'https://news.google.com/rss/search'

REQUEST_HEADERS = {
    'User-Agent': ('Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
                   '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'),
    'Accept': 'application/rss+xml, application/xml, text/xml, */*',
}

COMMON_NAMES = {
    'NIN', 'MAX', 'ONE', 'SPORT', 'NEWS', 'MEDIA', 'NET', 'GO', 'PRO',
    'TOP', 'BIG', 'RED', 'BLUE', 'STAR', 'PLUS', 'LIVE', 'NOW',
}

DEFAULT_LOCALE = {'hl': 'en', 'gl': 'US', 'ceid': 'US:en'}

LOCALES = {
    'Serbia': {'hl': 'sr', 'gl': 'RS', 'ceid': 'RS:sr'},
    'Croatia': {'hl': 'hr', 'gl': 'HR', 'ceid': 'HR:hr'},
    'Slovenia': {'hl': 'sl', 'gl': 'SI', 'ceid': 'SI:sl'},
    'Bosnia and Herzegovina': {'hl': 'bs', 'gl': 'BA', 'ceid': 'BA:bs'},
    'Montenegro': {'hl': 'sr', 'gl': 'ME', 'ceid': 'ME:sr'},
    'North Macedonia': {'hl': 'mk', 'gl': 'MK', 'ceid': 'MK:mk'},
    'Greece': {'hl': 'el', 'gl': 'GR', 'ceid': 'GR:el'},
    'Belgium': {'hl': 'nl', 'gl': 'BE', 'ceid': 'BE:nl'},
    'Georgia': {'hl': 'ka', 'gl': 'GE', 'ceid': 'GE:ka'},
    'Germany': {'hl': 'de', 'gl': 'DE', 'ceid': 'DE:de'},
    'France': {'hl': 'fr', 'gl': 'FR', 'ceid': 'FR:fr'},
    'Italy': {'hl': 'it', 'gl': 'IT', 'ceid': 'IT:it'},
    'Spain': {'hl': 'es', 'gl': 'ES', 'ceid': 'ES:es'},
    'UK': {'hl': 'en', 'gl': 'GB', 'ceid': 'GB:en'},
    'United Kingdom': {'hl': 'en', 'gl': 'GB', 'ceid': 'GB:en'},
}

TYPE_QUERY_HINTS = {
    'Media': 'media company news',
    'Sports Club': 'club',
    'Sports League': 'league',
}

INDUSTRY_SOURCES = {
    'Media': {
        'search_terms': [
            'digital media industry news',
            'publishing industry trends',
            'media company acquisitions mergers',
        ],
        'publications': ['Digiday', 'Press Gazette', 'Adweek', 'NiemanLab'],
    },
    'Sports Club': {
        'search_terms': [
            'sports business news sponsorship',
            'sports technology deals',
            'stadium naming rights partnership',
        ],
        'publications': ['SportsPro', 'SportBusiness', 'The Athletic'],
    },
    'Sports League': {
        'search_terms': [
            'sports league broadcasting rights',
            'sports governance business',
            'league sponsorship deals',
        ],
        'publications': ['SportsPro', 'SportBusiness'],
    },
}


# ── Query helpers ────────────────────────────────────────────────────────────

def clean_html(text: Optional[str]) -> str:
    if not text:
        return ''
    return BeautifulSoup(text, 'html.parser').get_text(' ', strip=True).replace('\xa0', ' ')


def is_common_name(name: str) -> bool:
    """Short or generic names need extra context to find the right company."""
    return len(name) <= 4 or name.upper() in COMMON_NAMES


def website_domain(website: Optional[str]) -> Optional[str]:
    if not website:
        return None
    host = urlparse(website).hostname
    if not host:
        return None
    return host[4:] if host.startswith('www.') else host


def get_locale_for_country(country: Optional[str]) -> Dict[str, str]:
    return LOCALES.get(country or '', DEFAULT_LOCALE)


def build_search_query(company: str, country: Optional[str] = None,
                       prospect_type: Optional[str] = None, website: Optional[str] = None) -> str:
    parts = [company]

    if website and is_common_name(company):
        domain = website_domain(website)
        if domain:
            parts.append(domain)

    if country:
        parts.append(country)

    hint = TYPE_QUERY_HINTS.get(prospect_type or '')
    if hint:
        parts.append(hint)

    return ' '.join(parts)


def _published_at(entry) -> Optional[datetime]:
    parsed = entry.get('published_parsed')
    if parsed and len(parsed) >= 6:
        return datetime(*parsed[:6], tzinfo=timezone.utc)
    return None


def fetch_google_news(query: str, country: Optional[str] = None, limit: int = 5,
                      timeout: int = 15, http=requests) -> List[Dict[str, Any]]:
    """
    Search Google News RSS and return up to `limit` article dicts:
    {title, link, published_at, source, snippet}.

    Raises requests.HTTPError / requests.RequestException on provider failure.
    """
    locale = get_locale_for_country(country)
    params = {'q': query, **locale}

    logger.debug("Fetching Google News RSS: q=%r locale=%s", query, locale['ceid'])
    response = http.get(GOOGLE_NEWS_RSS_URL, params=params, headers=REQUEST_HEADERS, timeout=timeout)
    response.raise_for_status()

    feed = feedparser.parse(response.text)
    articles = []
    for entry in feed.entries:
        link = entry.get('link', '')
        title = clean_html(entry.get('title', ''))
        if not link or not title:
            continue
        source = entry.get('source') or {}
        articles.append({
            'title': title,
            'link': link,
            'published_at': _published_at(entry),
            'source': clean_html(source.get('title', '')) or 'News',
            'snippet': clean_html(entry.get('summary', ''))[:200],
        })
        if len(articles) >= limit:
            break

    logger.info("Parsed %d articles for %r", len(articles), query)
    return articles


# ── Fetchers ─────────────────────────────────────────────────────────────────

class GoogleNewsFetcher(CandidateFetcher):
    """Company news from Google News RSS, optionally scored by RelevanceScorer."""
    name = 'google_news'

    def __init__(self, scorer=None, limit: int = 5, timeout: int = 15, http=requests):
        self.scorer = scorer
        self.limit = limit
        self.timeout = timeout
        self.http = http

    def fetch(self, identity: ProspectIdentity) -> List[CandidateItem]:
        query = build_search_query(identity.company, identity.country,
                                   identity.prospect_type, identity.website)
        articles = fetch_google_news(query, identity.country, limit=self.limit,
                                     timeout=self.timeout, http=self.http)

        items = []
        for article in articles:
            item = CandidateItem(
                title=article['title'],
                description=article['snippet'] or None,
                source_type='news',
                intelligence_type='news',
                url=article['link'],
                published_at=article['published_at'],
                company_name=identity.company,
                source_name=article['source'],
            )
            if self.scorer is not None:
                analysis = self.scorer.score(article, identity)
                item.relevance_score = analysis['relevance_score']
                item.ai_tip = analysis['ai_tip']
            items.append(item)
        return items


class IndustryNewsFetcher(CandidateFetcher):
    """
    Industry-level headlines for prospect types with a configured source list.

    One search term is picked per call to keep provider traffic low.
    """
    name = 'industry_news'

    def __init__(self, scorer=None, limit: int = 3, min_score: float = 50,
                 timeout: int = 15, http=requests, rng=None):
        self.scorer = scorer
        self.limit = limit
        self.min_score = min_score
        self.timeout = timeout
        self.http = http
        self.rng = rng or random.Random()

    def fetch(self, identity: ProspectIdentity) -> List[CandidateItem]:
        config = INDUSTRY_SOURCES.get(identity.prospect_type or '')
        if not config:
            return []

        term = self.rng.choice(config['search_terms'])
        query = f'{term} {identity.country}' if identity.country else term
        articles = fetch_google_news(query, identity.country, limit=self.limit,
                                     timeout=self.timeout, http=self.http)

        items = []
        for article in articles:
            item = CandidateItem(
                title=article['title'],
                description=article['snippet'] or None,
                source_type='news',
                intelligence_type='news',
                url=article['link'],
                published_at=article['published_at'],
                company_name=f'{identity.prospect_type} Industry',
                source_name=article['source'],
            )
            if self.scorer is not None:
                analysis = self.scorer.score(article, identity)
                if analysis['relevance_score'] < self.min_score:
                    continue
                item.relevance_score = analysis['relevance_score']
                item.ai_tip = analysis['ai_tip']
            items.append(item)
        return items


class CompositeFetcher(CandidateFetcher):
    """
    Primary fetcher plus optional secondary sources.

    Primary errors propagate (the prospect is logged as failed); a failing
    secondary source is logged and its results are skipped.
    """
    name = 'composite'

    def __init__(self, primary: CandidateFetcher, secondary: Optional[List[CandidateFetcher]] = None):
        self.primary = primary
        self.secondary = secondary or []

    def fetch(self, identity: ProspectIdentity) -> List[CandidateItem]:
        results = list(self.primary.fetch(identity) or [])
        for fetcher in self.secondary:
            try:
                results.extend(fetcher.fetch(identity) or [])
            except Exception as e:
                logger.warning("%s fetch failed for %s: %s",
                               fetcher.name or fetcher.__class__.__name__, identity.company, e)
        return results
