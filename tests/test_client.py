import httpx
import pytest

from src.recipes import EdamamClient, EdamamSettings
from src.recipes.client import DecodeFailure, TransportFailure, redact_url

from conftest import BASE_URL, make_page


def make_client(handler, **overrides):
    settings = EdamamSettings(base_url=BASE_URL, backoff_seconds=0.0, **overrides)
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return EdamamClient(settings, http_client=http), http


@pytest.mark.asyncio
async def test_transient_transport_errors_are_retried():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) < 3:
            raise httpx.ReadTimeout("timed out", request=request)
        return httpx.Response(200, json=make_page("a"))

    client, http = make_client(handler, max_retries=2)
    async with http:
        page = await client.get_page(f"{BASE_URL}?q=x")

    assert len(calls) == 3
    assert [hit.recipe.label for hit in page.hits] == ["Recipe a"]


@pytest.mark.asyncio
async def test_gives_up_after_max_retries():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("refused", request=request)

    client, http = make_client(handler, max_retries=1)
    async with http:
        with pytest.raises(TransportFailure) as exc_info:
            await client.get_page(f"{BASE_URL}?q=x")

    assert len(calls) == 2
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_error_status_is_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503, text="<html>Service Unavailable</html>")

    client, http = make_client(handler, max_retries=3)
    async with http:
        with pytest.raises(DecodeFailure) as exc_info:
            await client.get_page(f"{BASE_URL}?q=x")

    assert len(calls) == 1
    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_injected_http_client_is_left_open():
    client, http = make_client(lambda request: httpx.Response(200, json=make_page()))
    await client.aclose()

    assert not http.is_closed
    await http.aclose()


def test_redact_url_masks_app_key():
    url = f"{BASE_URL}?type=public&app_id=id&app_key=secret&q=soup"
    redacted = redact_url(url)

    assert "secret" not in redacted
    assert httpx.URL(redacted).params["app_id"] == "id"
    assert httpx.URL(redacted).params["q"] == "soup"


def test_redact_url_without_key_is_unchanged():
    url = f"{BASE_URL}?_cont=abc"
    assert redact_url(url) == url


@pytest.mark.asyncio
async def test_corrupt_content_encoding_is_a_decode_failure():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(
            200, headers={"Content-Encoding": "gzip"}, stream=httpx.ByteStream(b"not-gzip")
        )

    client, http = make_client(handler, max_retries=2)
    async with http:
        with pytest.raises(DecodeFailure) as exc_info:
            await client.get_page(f"{BASE_URL}?q=x")

    assert len(calls) == 1
    assert isinstance(exc_info.value.__cause__, httpx.DecodingError)
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_owned_client_uses_configured_timeout():
    client = EdamamClient(EdamamSettings(timeout_seconds=3.0))

    assert client._http.timeout == httpx.Timeout(3.0)
    assert not client._http.is_closed

    await client.aclose()

    assert client._http.is_closed
