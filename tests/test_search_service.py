import asyncio

import pytest

from fakes import FakePageProvider, QueryPageProvider, make_result
from tools.web.contracts import SearchErrorCategory, SearchPage, SearchProviderError
from tools.web.search_service import SourceSearchService

pytestmark = pytest.mark.unit


def _page(start: int, count: int) -> list:
    return [make_result(i) for i in range(start, start + count)]


def test_single_page_for_ten_results():
    provider = FakePageProvider({1: _page(1, 10)})
    results = SourceSearchService(provider).search("query", 10)

    assert len(results) == 10
    assert provider.calls == [("query", 1, 10)]


def test_paginates_ceil_k_over_ten_calls():
    provider = FakePageProvider({1: _page(1, 10), 11: _page(11, 10), 21: _page(21, 10)})
    results = SourceSearchService(provider).search("query", 25)

    assert len(results) == 25
    assert [call[1] for call in provider.calls] == [1, 11, 21]
    assert [call[2] for call in provider.calls] == [10, 10, 5]
    assert results[0].link == make_result(1).link
    assert results[-1].link == make_result(25).link


def test_page_size_capped_for_small_requests():
    provider = FakePageProvider({1: _page(1, 10)})
    results = SourceSearchService(provider).search("query", 3)

    assert len(results) == 3
    assert provider.calls == [("query", 1, 3)]


def test_result_truncated_when_provider_overdelivers():
    class Overdelivering(FakePageProvider):
        def fetch_page(self, query, start, num):
            self.calls.append((query, start, num))
            return SearchPage(items=_page(1, 10), has_next=True)

    results = SourceSearchService(Overdelivering()).search("query", 4)
    assert len(results) == 4


def test_first_page_error_propagates(search_error):
    provider = FakePageProvider({1: search_error(SearchErrorCategory.QUOTA, "daily limit", 429)})

    with pytest.raises(SearchProviderError) as exc_info:
        SourceSearchService(provider).search("query", 10)

    assert exc_info.value.category == SearchErrorCategory.QUOTA
    assert exc_info.value.status_code == 429


def test_first_page_unexpected_exception_wrapped_as_unknown():
    provider = FakePageProvider({1: RuntimeError("socket closed")})

    with pytest.raises(SearchProviderError) as exc_info:
        SourceSearchService(provider).search("query", 10)

    assert exc_info.value.category == SearchErrorCategory.UNKNOWN


def test_later_page_error_keeps_collected_results(search_error):
    provider = FakePageProvider(
        {1: _page(1, 10), 11: search_error(SearchErrorCategory.TRANSIENT, "503", 503)}
    )
    results = SourceSearchService(provider).search("query", 30)

    assert len(results) == 10
    assert len(provider.calls) == 2


def test_empty_page_stops_pagination():
    provider = FakePageProvider({1: _page(1, 10)})
    results = SourceSearchService(provider).search("query", 30)

    assert len(results) == 10
    assert [call[1] for call in provider.calls] == [1, 11]


def test_no_next_page_stops_pagination():
    provider = FakePageProvider({1: SearchPage(items=_page(1, 7), has_next=False)})
    results = SourceSearchService(provider).search("query", 20)

    assert len(results) == 7
    assert len(provider.calls) == 1


def test_no_results_is_empty_list():
    provider = FakePageProvider({})
    assert SourceSearchService(provider).search("query", 10) == []


def test_zero_desired_count_makes_no_calls():
    provider = FakePageProvider({1: _page(1, 10)})
    assert SourceSearchService(provider).search("query", 0) == []
    assert provider.calls == []


def test_search_multiple_merges_in_query_order_and_dedupes():
    shared = make_result(99, "shared.org")
    provider = QueryPageProvider(
        {
            "first": [make_result(1), shared],
            "second": [shared, make_result(2, "other.net")],
        }
    )
    results = asyncio.run(SourceSearchService(provider).search_multiple(["first", "second"], 5))

    assert [r.link for r in results] == [
        make_result(1).link,
        shared.link,
        make_result(2, "other.net").link,
    ]


def test_search_multiple_skips_failed_queries(search_error):
    provider = QueryPageProvider(
        {
            "good": [make_result(1)],
            "bad": search_error(SearchErrorCategory.TRANSIENT),
        }
    )
    results = asyncio.run(SourceSearchService(provider).search_multiple(["bad", "good"], 5))

    assert [r.link for r in results] == [make_result(1).link]


def test_search_multiple_raises_when_all_queries_fail(search_error):
    provider = QueryPageProvider(
        {
            "a": search_error(SearchErrorCategory.AUTHENTICATION, "bad key", 401),
            "b": search_error(SearchErrorCategory.AUTHENTICATION, "bad key", 401),
        }
    )

    with pytest.raises(SearchProviderError) as exc_info:
        asyncio.run(SourceSearchService(provider).search_multiple(["a", "b"], 5))

    assert exc_info.value.category == SearchErrorCategory.AUTHENTICATION


def test_search_multiple_timeout_counts_as_failure():
    provider = FakePageProvider({1: _page(1, 3)}, delay_s=0.3)
    service = SourceSearchService(provider, query_timeout_s=0.05)

    with pytest.raises(SearchProviderError) as exc_info:
        asyncio.run(service.search_multiple(["slow"], 3))

    assert exc_info.value.category == SearchErrorCategory.TRANSIENT
