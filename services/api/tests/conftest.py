import httpx
import pytest
from bestsellers.api.deps import get_bestsellers_client
from bestsellers.core.config import Settings
from bestsellers.main import create_app
from bestsellers.services.nyt.client import BestSellersClient
from fastapi.testclient import TestClient

TEST_API_KEY = "test-key"
TEST_BASE_URL = "https://nyt.test/svc/books/v3"


class FakeUpstream:
    """Stands in for the NYT API behind an httpx.MockTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.payload = {
            "status": "OK",
            "copyright": "Copyright (c) 2024 The New York Times Company.",
            "num_results": 1,
            "results": [sample_best_seller()],
        }
        self.content: bytes | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.payload)

    def respond(self, status_code: int, payload=None, content: bytes | None = None):
        self.status_code = status_code
        self.payload = payload
        self.content = content

    @property
    def last_query(self) -> str:
        assert self.requests, "upstream was never called"
        return self.requests[-1].url.query.decode("ascii")

    @property
    def last_params(self) -> dict[str, str]:
        assert self.requests, "upstream was never called"
        return dict(self.requests[-1].url.params)


def sample_best_seller() -> dict:
    return {
        "title": "THE TEST NOVEL",
        "description": "A compelling story about software testing.",
        "author": "Jane Developer",
        "contributor": "by Jane Developer",
        "publisher": "Tech Publishing",
        "isbns": [{"isbn10": "1234567890", "isbn13": "1234567890123"}],
        "ranks_history": [
            {
                "rank": 1,
                "list_name": "Hardcover Fiction",
                "published_date": "2024-01-01",
                "weeks_on_list": 5,
            }
        ],
    }


@pytest.fixture()
def upstream():
    return FakeUpstream()


@pytest.fixture()
def nyt_client(upstream):
    http = httpx.Client(transport=httpx.MockTransport(upstream.handler))
    try:
        yield BestSellersClient(api_key=TEST_API_KEY, base_url=TEST_BASE_URL, http=http)
    finally:
        http.close()


@pytest.fixture()
def settings():
    return Settings(_env_file=None, NYT_API_KEY=TEST_API_KEY, NYT_BASE_URL=TEST_BASE_URL)


@pytest.fixture()
def client(settings, nyt_client):
    app = create_app(settings)
    app.dependency_overrides[get_bestsellers_client] = lambda: nyt_client
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
