"""Tests for prospect_intel.services.mock_fetcher."""
from prospect_intel.refresh.base import ProspectIdentity
from prospect_intel.services.mock_fetcher import MOCK_TEMPLATES, MockFetcher


def test_same_company_same_items():
    fetcher = MockFetcher()
    first = fetcher.fetch(ProspectIdentity(company='Acme Media'))
    second = fetcher.fetch(ProspectIdentity(company='Acme Media'))
    assert [i.url for i in first] == [i.url for i in second]
    assert [i.title for i in first] == [i.title for i in second]


def test_items_are_tagged_with_company():
    items = MockFetcher().fetch(ProspectIdentity(company='Acme Media'))
    assert 1 <= len(items) <= len(MOCK_TEMPLATES)
    for item in items:
        assert 'Acme Media' in item.title
        assert item.url.startswith('https://example.com/acme-media/')
        assert 40 <= item.relevance_score <= 100
        assert item.company_name == 'Acme Media'


def test_template_fields_carried_over():
    items = MockFetcher().fetch(ProspectIdentity(company='Acme Media'))
    assert items[0].source_type == MOCK_TEMPLATES[0]['source_type']
    assert items[0].source_name == MOCK_TEMPLATES[0]['source_name']
