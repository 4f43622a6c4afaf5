"""
Mock fetcher — canned intelligence for local development.

Activated with MOCK_FETCHER=1. Results are derived from the company name so
repeated runs return the same items and exercise dedup end to end.
"""
import hashlib
import logging
import time
from datetime import datetime, timedelta, timezone
from typing import List

from prospect_intel.refresh.base import CandidateFetcher, CandidateItem, ProspectIdentity

logger = logging.getLogger('services.mock_fetcher')

MOCK_TEMPLATES = [
    {'title': '{company} announces expansion into new markets', 'source_type': 'news',
     'intelligence_type': 'news', 'source_name': 'Business Wire'},
    {'title': '{company} appoints new Chief Digital Officer', 'source_type': 'job-change',
     'intelligence_type': 'job_change', 'source_name': 'LinkedIn',
     'person_name': 'Jordan Blake', 'person_position': 'Chief Digital Officer'},
    {'title': '{company} closes Series B funding round', 'source_type': 'funding',
     'intelligence_type': 'funding', 'source_name': 'TechCrunch'},
    {'title': '{company} shares behind-the-scenes look at product launch', 'source_type': 'linkedin',
     'intelligence_type': 'linkedin_post', 'source_name': 'LinkedIn'},
]


class MockFetcher(CandidateFetcher):
    name = 'mock'

    def __init__(self, latency: float = 0.0):
        self.latency = latency

    def fetch(self, identity: ProspectIdentity) -> List[CandidateItem]:
        if self.latency:
            time.sleep(self.latency)

        digest = hashlib.md5(identity.company.encode()).hexdigest()
        slug = identity.company.lower().replace(' ', '-')
        count = 1 + int(digest[0], 16) % len(MOCK_TEMPLATES)
        published = datetime.now(timezone.utc) - timedelta(days=int(digest[1], 16))

        items = []
        for i, template in enumerate(MOCK_TEMPLATES[:count]):
            fields = {k: v for k, v in template.items() if k != 'title'}
            items.append(CandidateItem(
                title=template['title'].format(company=identity.company),
                url=f'https://example.com/{slug}/{i}',
                published_at=published,
                relevance_score=float(40 + int(digest[2 + i], 16) * 4),
                company_name=identity.company,
                **fields,
            ))
        logger.info("[MOCK] %d items for %s", len(items), identity.company)
        return items
