"""Unit tests for client/notion.py"""

import httpx
import pytest

from notionmd.client.notion import NotionClient
from notionmd.config import Settings
from notionmd.exceptions import InvalidArgument


def _client(handler, **kwargs) -> NotionClient:
    return NotionClient("secret", transport=httpx.MockTransport(handler), **kwargs)


def test_fetch_children_parses_results(raw_block):
    """fetch_children returns ContentBlocks built from the response results, in order."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["headers"] = request.headers
        return httpx.Response(200, json={
            "object": "list",
            "results": [raw_block("paragraph", "a", block_id="1"), raw_block("divider", block_id="2")],
            "has_more": False,
        })

    with _client(handler, page_size=50) as client:
        blocks = client.fetch_children("page-1")

    assert [(b.id, b.type) for b in blocks] == [("1", "paragraph"), ("2", "divider")]
    assert seen["url"].path == "/v1/blocks/page-1/children"
    assert seen["url"].params["page_size"] == "50"
    assert seen["headers"]["Authorization"] == "Bearer secret"
    assert seen["headers"]["Notion-Version"] == "2022-06-28"


def test_fetch_children_first_page_only(raw_block):
    """Only one request is made even when the API reports more children."""
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"results": [raw_block("paragraph", "a")], "has_more": True, "next_cursor": "c"})

    with _client(handler) as client:
        assert len(client.fetch_children("page-1")) == 1
    assert len(calls) == 1


def test_fetch_page_properties(rich):
    """fetch_page_properties maps property names to PageProperty models."""
    def handler(request):
        assert request.url.path == "/v1/pages/page-1"
        return httpx.Response(200, json={"object": "page", "properties": {
            "title": {"id": "title", "type": "title", "title": [rich("Hello")]},
        }})

    with _client(handler) as client:
        props = client.fetch_page_properties("page-1")
    assert props["title"].title[0].plain_text == "Hello"


def test_http_error_propagates():
    """HTTP errors surface as httpx.HTTPStatusError, unchanged."""
    handler = lambda request: httpx.Response(404, json={"object": "error", "code": "object_not_found"})
    with _client(handler) as client:
        with pytest.raises(httpx.HTTPStatusError) as exc:
            client.fetch_children("missing")
    assert exc.value.response.status_code == 404


@pytest.mark.parametrize("block_id", ["", "   ", None])
def test_empty_id_is_invalid(block_id):
    """Empty or missing ids raise InvalidArgument before any request."""
    def handler(request):
        raise AssertionError("no request expected")

    with _client(handler) as client:
        with pytest.raises(InvalidArgument):
            client.fetch_children(block_id)
        with pytest.raises(InvalidArgument):
            client.fetch_page_properties(block_id)


def test_empty_token_is_invalid():
    """A client cannot be built without an API secret."""
    with pytest.raises(InvalidArgument):
        NotionClient("")


def test_from_settings_uses_base_url():
    """from_settings applies token, base URL, and version from Settings."""
    seen = {}

    def handler(request):
        seen["request"] = request
        return httpx.Response(200, json={"results": []})

    settings = Settings(notion_token="tok", base_url="https://proxy.local/notion/", notion_version="2025-09-03")
    with NotionClient.from_settings(settings, transport=httpx.MockTransport(handler)) as client:
        assert client.fetch_children("b") == []
    request = seen["request"]
    assert request.url.host == "proxy.local"
    assert request.url.path == "/notion/blocks/b/children"
    assert request.headers["Notion-Version"] == "2025-09-03"
