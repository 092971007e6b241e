"""Unit tests for converter.py"""

import httpx
import pytest

from notionmd.client.notion import NotionClient
from notionmd.converter import MarkdownConverter
from notionmd.exceptions import InvalidArgument, UnsupportedBlockType


@pytest.fixture(name="page_handler")
def page_handler_fixture(raw_block, rich):
    """Serve a small page: a title, a numbered list, and one unsupported block."""
    children = [
        raw_block("numbered_list_item", "first", block_id="1"),
        raw_block("numbered_list_item", "second", block_id="2"),
        raw_block("toggle", "folded", block_id="3"),
        raw_block("code", "print(1)", block_id="4", language="python"),
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/children"):
            return httpx.Response(200, json={"results": children, "has_more": False})
        return httpx.Response(200, json={"properties": {
            "title": {"id": "title", "type": "title", "title": [rich("Notes", bold=True)]},
        }})

    return handler


def _converter(handler, strict=False) -> MarkdownConverter:
    client = NotionClient("secret", transport=httpx.MockTransport(handler))
    return MarkdownConverter(client, strict=strict)


def test_page_to_markdown(page_handler):
    """A page converts to a titled document with the unsupported block dropped."""
    with _converter(page_handler) as converter:
        markdown = converter.page_to_markdown("page-1")
    assert markdown == "# **Notes**\n\n1. first\n2. second\n\n```python\nprint(1)\n```\n\n"


def test_page_to_markdown_blocks_strict(page_handler):
    """A strict converter rejects the unsupported block."""
    with _converter(page_handler, strict=True) as converter:
        with pytest.raises(UnsupportedBlockType):
            converter.page_to_markdown_blocks("page-1")


@pytest.mark.parametrize("page_id", ["", " ", None])
def test_empty_page_id(page_handler, page_id):
    """An empty page id raises InvalidArgument."""
    with _converter(page_handler) as converter:
        with pytest.raises(InvalidArgument):
            converter.page_to_markdown_blocks(page_id)


def test_to_markdown_string_none(page_handler):
    """to_markdown_string(None) raises InvalidArgument."""
    with _converter(page_handler) as converter:
        with pytest.raises(InvalidArgument):
            converter.to_markdown_string(None)


def test_close_closes_client(page_handler):
    """Leaving the context closes the owned HTTP client."""
    converter = _converter(page_handler)
    with converter:
        pass
    assert converter.client.client.is_closed
