"""Tests for prospect_intel.refresh.dedup — candidate deduplication."""
from prospect_intel.refresh.base import CandidateItem
from prospect_intel.refresh.dedup import dedup_candidates, build_index


def _item(title, url=None, score=None):
    return CandidateItem(title=title, url=url, relevance_score=score)


class TestBuildIndex:

    def test_indexes_urls_and_titles(self):
        urls, titles = build_index([{'url': 'https://a', 'title': 'A'}, {'url': None, 'title': 'B'}])
        assert urls == {'https://a'}
        assert titles == {'A', 'B'}

    def test_empty_url_not_indexed(self):
        urls, _ = build_index([{'url': '', 'title': 'A'}])
        assert urls == set()

    def test_accepts_objects_with_attributes(self):
        urls, titles = build_index([_item('A', 'https://a')])
        assert urls == {'https://a'}
        assert titles == {'A'}


class TestDedupCandidates:

    def test_no_existing_keeps_everything(self):
        candidates = [_item('A', 'https://a'), _item('B', 'https://b')]
        assert dedup_candidates(candidates, []) == candidates

    def test_drops_known_url(self):
        existing = [{'url': 'https://a', 'title': 'Old headline'}]
        result = dedup_candidates([_item('New headline', 'https://a')], existing)
        assert result == []

    def test_drops_known_title_even_when_urls_differ(self):
        existing = [{'url': 'https://a', 'title': 'Same'}]
        result = dedup_candidates([_item('Same', 'https://b')], existing)
        assert result == []

    def test_title_fallback_when_candidate_has_no_url(self):
        existing = [{'url': None, 'title': 'Club wins derby'}]
        result = dedup_candidates([_item('Club wins derby')], existing)
        assert result == []

    def test_url_less_candidate_with_new_title_survives(self):
        existing = [{'url': None, 'title': 'Something else'}]
        result = dedup_candidates([_item('Brand new')], existing)
        assert [c.title for c in result] == ['Brand new']

    def test_missing_url_does_not_match_missing_url(self):
        existing = [{'url': None, 'title': 'X'}]
        result = dedup_candidates([_item('Y', None)], existing)
        assert len(result) == 1

    def test_title_match_is_exact(self):
        existing = [{'url': None, 'title': 'Club Wins Derby'}]
        result = dedup_candidates([_item('Club wins derby')], existing)
        assert len(result) == 1

    def test_preserves_input_order(self):
        candidates = [_item('C', 'https://c'), _item('A', 'https://a'), _item('B', 'https://b')]
        existing = [{'url': 'https://a', 'title': 'A'}]
        result = dedup_candidates(candidates, existing)
        assert [c.title for c in result] == ['C', 'B']

    def test_duplicates_within_batch_both_survive(self):
        candidates = [
            _item('Same', 'https://a/1'),
            _item('Same', 'https://b/2'),
            _item('Other', 'https://a/1'),
        ]
        result = dedup_candidates(candidates, [])
        assert result == candidates

    def test_within_batch_duplicates_only_dropped_by_stored_items(self):
        candidates = [_item('Same', 'https://a/1'), _item('Same', 'https://b/2')]
        existing = [{'url': None, 'title': 'Same'}]
        assert dedup_candidates(candidates, existing) == []

    def test_does_not_mutate_inputs(self):
        candidates = [_item('A', 'https://a')]
        existing = [{'url': 'https://z', 'title': 'Z'}]
        dedup_candidates(candidates, existing)
        assert len(candidates) == 1
        assert existing == [{'url': 'https://z', 'title': 'Z'}]

    def test_idempotent(self):
        candidates = [
            _item('A', 'https://a'),
            _item('B'),
            _item('A', 'https://a2'),
            _item('C', 'https://c'),
            _item('D', 'https://known'),
        ]
        existing = [{'url': 'https://known', 'title': 'K'}, {'url': None, 'title': 'C'}]
        once = dedup_candidates(candidates, existing)
        twice = dedup_candidates(once, existing)
        assert twice == once
        assert [c.title for c in once] == ['A', 'B', 'A']

    def test_candidates_deduped_against_themselves_once_stored(self):
        """Storing the survivors and re-running yields nothing new."""
        candidates = [_item('A', 'https://a'), _item('B')]
        survivors = dedup_candidates(candidates, [])
        stored = [{'url': c.url, 'title': c.title} for c in survivors]
        assert dedup_candidates(candidates, stored) == []
