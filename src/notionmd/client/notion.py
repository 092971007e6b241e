"""Minimal Notion REST client: fetch block children and page properties"""

from typing import Any, Optional

import httpx
from loguru import logger

from notionmd.config import Settings
from notionmd.core.models import ContentBlock, PageProperty
from notionmd.exceptions import InvalidArgument


def _require(value: Optional[str], name: str) -> str:
    if value is None or not value.strip():
        logger.error("{} cannot be null or empty", name)
        raise InvalidArgument(f"{name} cannot be null or empty")
    return value.strip()


class NotionClient:
    """Explicitly owned HTTP handle for the Notion API.

    HTTP and transport errors are raised as httpx exceptions and never
    retried or reinterpreted here.
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.notion.com/v1",
        notion_version: str = "2022-06-28",
        timeout: float = 30.0,
        page_size: int = 100,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        token = _require(token, "API secret")
        self.page_size = page_size
        self.client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {token}",
                "Notion-Version": notion_version,
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> "NotionClient":
        return cls(
            token=settings.notion_token,
            base_url=settings.base_url,
            notion_version=settings.notion_version,
            timeout=settings.timeout,
            page_size=settings.page_size,
            transport=transport,
        )

    def __enter__(self) -> "NotionClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        if not self._closed:
            self.client.close()
            self._closed = True

    def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        response = self.client.get(path, params=params)
        response.raise_for_status()
        return response.json()

    def fetch_children(self, block_id: str) -> list[ContentBlock]:
        """Return the first page of children under block_id, in order."""
        block_id = _require(block_id, "Block ID")
        try:
            data = self._get(f"/blocks/{block_id}/children", params={"page_size": self.page_size})
        except httpx.HTTPError as e:
            logger.error("Failed to retrieve blocks for blockId: {} ({})", block_id, e)
            raise
        if data.get("has_more"):
            logger.debug("Block {} has more children than one page; only the first page is used", block_id)
        return [ContentBlock.from_api(raw) for raw in data.get("results") or []]

    def fetch_page_properties(self, page_id: str) -> dict[str, PageProperty]:
        """Return the page's properties keyed by property name (may be empty)."""
        page_id = _require(page_id, "Page ID")
        logger.info("Retrieving Notion page info for pageId: {}", page_id)
        try:
            data = self._get(f"/pages/{page_id}")
        except httpx.HTTPError as e:
            logger.error("Failed to retrieve page info for pageId: {} ({})", page_id, e)
            raise
        properties = data.get("properties") or {}
        logger.debug("Page properties: {}", list(properties))
        return {name: PageProperty.from_api(raw) for name, raw in properties.items()}
