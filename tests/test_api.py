import httpx
import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.recipes import EdamamClient

from conftest import FakeProvider, make_page, make_recipe

NEXT = "https://api.example.test/api/recipes/v2?type=public&_cont=2"


@pytest.fixture
def api_provider():
    provider = FakeProvider()
    provider.route(
        lambda r: r.url.params.get("q") == "chicken",
        httpx.Response(200, json=make_page("c1", "c2", next_href=NEXT)),
    )
    provider.route(lambda r: str(r.url) == NEXT, httpx.Response(200, json=make_page("c3")))
    provider.route(
        lambda r: r.url.params.get("dishType") == "desserts",
        httpx.Response(200, json=make_page("d1")),
    )
    provider.route(
        lambda r: r.url.path.endswith("/abc"),
        httpx.Response(200, json={"recipe": make_recipe("abc", "Looked up")}),
    )
    return provider


@pytest.fixture
def api(settings, api_provider, tmp_path, monkeypatch):
    monkeypatch.setenv("EDAMAM_CREDENTIALS_FILE", str(tmp_path / "API.env"))
    monkeypatch.setenv("PREFERENCES_FILE", str(tmp_path / "prefs.json"))
    http = httpx.AsyncClient(transport=httpx.MockTransport(api_provider))
    app = create_app(EdamamClient(settings, http_client=http))
    with TestClient(app) as client:
        yield client


def labels(body):
    return [item["recipe"]["label"] for item in body["results"]]


def test_health(api):
    assert api.get("/health").json() == {"status": "ok"}


def test_search_then_next_page(api):
    r = api.post("/recipes/search", json={"query": "  chicken "})
    assert r.status_code == 200
    body = r.json()
    assert body["outcome"]["status"] == "applied"
    assert labels(body) == ["Recipe c1", "Recipe c2"]
    assert body["has_more"] is True

    body = api.post("/recipes/next").json()
    assert labels(body) == ["Recipe c1", "Recipe c2", "Recipe c3"]
    assert body["has_more"] is False

    body = api.post("/recipes/next").json()
    assert body["outcome"]["status"] == "skipped"


def test_blank_search_is_skipped(api):
    body = api.post("/recipes/search", json={"query": "   "}).json()
    assert body["outcome"]["status"] == "skipped"
    assert body["results"] == []


def test_failed_search_reports_failure_and_keeps_state(api):
    api.post("/recipes/search", json={"query": "chicken"})

    body = api.post("/recipes/search", json={"query": "unrouted"}).json()

    assert body["outcome"]["status"] == "failed"
    assert body["outcome"]["error"]
    assert labels(body) == ["Recipe c1", "Recipe c2"]


def test_category_and_terms(api, api_provider):
    body = api.post("/recipes/category", json={"category": "dessert", "health": ["Vegan"]}).json()
    assert labels(body) == ["Recipe d1"]
    assert api_provider.requests[-1].url.params.get_list("health") == ["vegan"]

    body = api.post("/recipes/terms", json={"terms": ["chicken", " "]}).json()
    assert labels(body) == ["Recipe d1", "Recipe c1", "Recipe c2"]


def test_unknown_category_is_rejected(api):
    assert api.post("/recipes/category", json={"category": "soup"}).status_code == 422


def test_lookup_and_clear(api):
    body = api.post("/recipes/lookup", json={"uris": ["bad", "#recipe_abc"]}).json()
    assert [o["status"] for o in body["outcomes"]] == ["skipped", "applied"]
    assert labels(body) == ["Looked up"]

    body = api.delete("/recipes").json()
    assert body == {"results": [], "has_more": False}
    assert api.get("/recipes").json() == {"results": [], "has_more": False}
