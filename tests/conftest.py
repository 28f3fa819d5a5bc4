"""Pytest configuration and shared fixtures."""

import inspect

import httpx
import pytest
import pytest_asyncio

from src.recipes import Credentials, EdamamClient, EdamamSettings, SearchSession

BASE_URL = "https://api.example.test/api/recipes/v2"


def make_recipe(recipe_id: str, label: str | None = None, **extra) -> dict:
    recipe = {
        "uri": f"http://www.edamam.com/ontologies/edamam.owl#recipe_{recipe_id}",
        "label": label or f"Recipe {recipe_id}",
        "image": f"https://img.example.test/{recipe_id}.jpg",
    }
    recipe.update(extra)
    return recipe


def make_page(*recipe_ids: str, next_href: str | None = None) -> dict:
    payload = {"hits": [{"recipe": make_recipe(rid)} for rid in recipe_ids]}
    if next_href is not None:
        payload["_links"] = {"next": {"href": next_href, "title": "Next page"}}
    return payload


def labels(session: SearchSession) -> list:
    return [record.recipe.label for record in session.results]


def _fresh(response: httpx.Response) -> httpx.Response:
    # Canned responses may be served more than once.
    return httpx.Response(response.status_code, headers=response.headers, content=response.content)


class FakeProvider:
    """Routes requests to canned responses and records every request made."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes = {}
        self.default = None

    def route(self, predicate, response):
        self.routes[predicate] = response

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for predicate, response in self.routes.items():
            if predicate(request):
                if callable(response):
                    response = response(request)
                    if inspect.isawaitable(response):
                        response = await response
                    return response
                return _fresh(response)
        if self.default is not None:
            return _fresh(self.default)
        return httpx.Response(404, text="<html>Not found</html>", headers={"Content-Type": "text/html"})


@pytest.fixture
def settings():
    return EdamamSettings(base_url=BASE_URL, max_retries=0, backoff_seconds=0.0, max_concurrency=4)


@pytest.fixture
def credentials():
    return Credentials(app_id="test-id", app_key="test-key")


@pytest.fixture
def provider():
    return FakeProvider()


@pytest_asyncio.fixture
async def client(settings, provider):
    http = httpx.AsyncClient(transport=httpx.MockTransport(provider))
    yield EdamamClient(settings, http_client=http)
    await http.aclose()


@pytest.fixture
def session(client, credentials):
    return SearchSession(client, credentials)
