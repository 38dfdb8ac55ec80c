"""
Tests for ordering and pagination.
"""

from datetime import timedelta

from ranking.logic.ranker import rank_candidates, rank_by_created_at, paginate

from factories import scored, NOW


def test_rank_by_composite_descending():
    ranked = rank_candidates([scored(1, 40.0), scored(2, 90.0), scored(3, 65.0)])
    assert [s.id for s in ranked] == [2, 3, 1]


def test_ties_break_on_ascending_id():
    ranked = rank_candidates([scored(3, 50.0), scored(1, 50.0), scored(2, 50.0)])
    assert [s.id for s in ranked] == [1, 2, 3]


def test_rank_by_sort_value_key():
    ranked = rank_candidates(
        [scored(1, followers=10), scored(2, followers=300), scored(3, followers=20)],
        key="followers",
    )
    assert [s.id for s in ranked] == [2, 3, 1]


def test_sort_value_overrides_rounded_composite():
    # Both display 70.0; the unrounded value carried in sort_values decides
    first = scored(1, 70.0)
    first.sort_values["composite"] = 70.001
    second = scored(2, 70.0)
    second.sort_values["composite"] = 70.004

    ranked = rank_candidates([first, second])
    assert [s.id for s in ranked] == [2, 1]


def test_rank_ascending():
    ranked = rank_candidates([scored(1, 40.0), scored(2, 90.0)], descending=False)
    assert [s.id for s in ranked] == [1, 2]


def test_rank_by_created_at_oldest_first():
    entries = [
        scored(1, created_at=NOW - timedelta(days=1)),
        scored(2, created_at=NOW - timedelta(days=30)),
        scored(3, created_at=NOW - timedelta(days=7)),
    ]
    assert [s.id for s in rank_by_created_at(entries)] == [2, 3, 1]


class TestPaginate:
    def _items(self, count):
        return [scored(i) for i in range(1, count + 1)]

    def test_first_page(self):
        page = paginate(self._items(25), page=1, limit=10)

        assert [s.id for s in page.items] == list(range(1, 11))
        assert page.total == 25
        assert page.total_pages == 3
        assert page.has_next is True
        assert page.has_previous is False

    def test_last_partial_page(self):
        page = paginate(self._items(25), page=3, limit=10)

        assert len(page.items) == 5
        assert page.has_next is False
        assert page.has_previous is True

    def test_page_past_end_is_empty(self):
        page = paginate(self._items(25), page=4, limit=10)

        assert page.items == []
        assert page.total == 25
        assert page.total_pages == 3

    def test_empty_list(self):
        page = paginate([], page=1, limit=10)

        assert page.total == 0
        assert page.total_pages == 0
        assert page.has_next is False
        assert page.has_previous is False
