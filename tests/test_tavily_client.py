import pytest

from config.config import Config
from tools.web.contracts import SearchErrorCategory, SearchProviderError
from tools.web.factory import create_search_service
from tools.web.google_search_client import GoogleSearchClient
from tools.web.tavily_client import TavilySearchClient

pytestmark = pytest.mark.unit


class UsageLimitExceededError(Exception):
    pass


class FakeTavily:
    def __init__(self, response=None, error=None):
        self.response = response or {"results": []}
        self.error = error
        self.kwargs = None

    def search(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        return self.response


def test_first_page_maps_results():
    fake = FakeTavily(
        {
            "results": [
                {"title": "Press release", "url": "https://www.gov.example/press", "content": "Full text"},
                {"title": "No url"},
                {"url": "https://example.org/x"},
            ]
        }
    )
    page = TavilySearchClient(api_key="tvly", client=fake).fetch_page("query", start=1, num=20)

    assert fake.kwargs["query"] == "query"
    assert fake.kwargs["max_results"] == 10
    assert page.has_next is False
    assert [item.link for item in page.items] == ["https://www.gov.example/press", "https://example.org/x"]
    assert page.items[0].display_link == "www.gov.example"
    assert page.items[0].snippet == "Full text"
    assert page.items[1].title == "Untitled"


def test_later_pages_are_empty_without_calling_provider():
    fake = FakeTavily()
    page = TavilySearchClient(api_key="tvly", client=fake).fetch_page("query", start=11, num=10)

    assert page.items == []
    assert page.has_next is False
    assert fake.kwargs is None


def test_errors_categorized_by_class_name():
    fake = FakeTavily(error=UsageLimitExceededError("plan limit"))

    with pytest.raises(SearchProviderError) as exc_info:
        TavilySearchClient(api_key="tvly", client=fake).fetch_page("query", start=1, num=10)

    assert exc_info.value.category == SearchErrorCategory.QUOTA


def test_unknown_errors_are_unknown():
    fake = FakeTavily(error=RuntimeError("?"))

    with pytest.raises(SearchProviderError) as exc_info:
        TavilySearchClient(api_key="tvly", client=fake).fetch_page("query", start=1, num=10)

    assert exc_info.value.category == SearchErrorCategory.UNKNOWN


def test_missing_key_is_configuration_error():
    with pytest.raises(SearchProviderError) as exc_info:
        TavilySearchClient(api_key=None).fetch_page("query", start=1, num=10)

    assert exc_info.value.category == SearchErrorCategory.CONFIGURATION


def test_factory_selects_provider(clean_env, tmp_path):
    clean_env.setenv("SEARCH_PROVIDER", "tavily")
    clean_env.setenv("SEARCH_RESULT_COUNT", "25")
    clean_env.setenv("PROVIDER_TIMEOUT_S", "10")
    service = create_search_service(Config(env_file=tmp_path / "missing.env"))

    assert isinstance(service.provider, TavilySearchClient)
    assert service.query_timeout_s == 30.0


def test_factory_falls_back_to_google_for_unknown_provider(clean_env, tmp_path):
    clean_env.setenv("SEARCH_PROVIDER", "bing")
    service = create_search_service(Config(env_file=tmp_path / "missing.env"))

    assert isinstance(service.provider, GoogleSearchClient)
