"""Facade: convert a Notion page to Markdown through an owned NotionClient"""

from typing import Optional, Sequence

from notionmd.client.notion import NotionClient
from notionmd.config import Settings
from notionmd.core.models import MarkdownBlock
from notionmd.core.pipeline import convert, render
from notionmd.exceptions import InvalidArgument


class MarkdownConverter:
    """Converts Notion pages to Markdown using the client it is given."""

    def __init__(self, client: NotionClient, strict: bool = False):
        if client is None:
            raise InvalidArgument("NotionClient cannot be None")
        self.client = client
        self.strict = strict

    @classmethod
    def from_settings(cls, settings: Settings) -> "MarkdownConverter":
        return cls(NotionClient.from_settings(settings), strict=settings.strict)

    def __enter__(self) -> "MarkdownConverter":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def page_to_markdown_blocks(self, page_id: Optional[str]) -> list[MarkdownBlock]:
        """Fetch a page's top-level blocks and title, and convert them to MarkdownBlocks."""
        if page_id is None or not page_id.strip():
            raise InvalidArgument("Page ID cannot be null or empty")
        blocks = self.client.fetch_children(page_id)
        properties = self.client.fetch_page_properties(page_id)
        return convert(blocks, properties, strict=self.strict)

    def to_markdown_string(self, md_blocks: Optional[Sequence[MarkdownBlock]]) -> str:
        return render(md_blocks)

    def page_to_markdown(self, page_id: str) -> str:
        return self.to_markdown_string(self.page_to_markdown_blocks(page_id))
