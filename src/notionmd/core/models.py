"""Data models for Notion content blocks, rich text, and Markdown output"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BlockType(str, Enum):
    """Closed set of block kinds the converter distinguishes (Notion wire tags)"""
    paragraph = "paragraph"
    heading_1 = "heading_1"
    heading_2 = "heading_2"
    heading_3 = "heading_3"
    quote = "quote"
    bulleted_list_item = "bulleted_list_item"
    numbered_list_item = "numbered_list_item"
    code = "code"
    bookmark = "bookmark"
    divider = "divider"
    image = "image"
    other = "other"

    @classmethod
    def from_tag(cls, tag: str) -> "BlockType":
        """Map a raw Notion type tag to a BlockType; unknown tags become other."""
        try:
            return cls(tag)
        except ValueError:
            return cls.other


class Annotations(BaseModel):
    """Style flags of a rich-text run (underline and color are ignored)."""
    model_config = ConfigDict(frozen=True, extra="ignore")
    bold:          bool = False
    italic:        bool = False
    strikethrough: bool = False
    code:          bool = False

    @field_validator("bold", "italic", "strikethrough", "code", mode="before")
    @classmethod
    def _null_is_false(cls, value: Any) -> Any:
        return False if value is None else value


def _first_str(*values: Any) -> str:
    """Return the first non-None value, or '' when all are None."""
    return next((v for v in values if v is not None), "")


class RichTextRun(BaseModel):
    """A span of text with uniform annotations and an optional link."""
    model_config = ConfigDict(frozen=True)
    plain_text:  str = ""
    annotations: Annotations = Field(default_factory=Annotations)
    link:        Optional[str] = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "RichTextRun":
        """Build a run from a Notion rich_text object.

        The link is read from ``text.link.url``; mention and equation runs carry
        no ``text`` object, so ``href`` is used for those.
        """
        text = raw.get("text") or {}
        link = (text.get("link") or {}).get("url") or raw.get("href")
        return cls(
            plain_text=_first_str(raw.get("plain_text"), text.get("content")),
            annotations=Annotations.model_validate(raw.get("annotations") or {}),
            link=link,
        )


class ContentBlock(BaseModel):
    """One Notion block as received; immutable for the whole conversion."""
    model_config = ConfigDict(frozen=True)
    id:           str
    type:         str                              # raw Notion type tag
    payload:      Optional[dict[str, Any]] = None  # object stored under the type key
    has_children: bool = False

    @property
    def kind(self) -> BlockType:
        return BlockType.from_tag(self.type)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "ContentBlock":
        """Build a ContentBlock from a Notion block object."""
        block_type = raw.get("type") or ""
        return cls(
            id=raw.get("id") or "",
            type=block_type,
            payload=raw.get(block_type),
            has_children=bool(raw.get("has_children", False)),
        )


@dataclass(frozen=True)
class AnnotatedBlock:
    """A ContentBlock paired with its numbered-list ordinal (None outside a list run)."""
    block:   ContentBlock
    ordinal: Optional[int] = None


def _title_runs(runs: Any) -> Optional[list[Optional[RichTextRun]]]:
    """Parse title runs; entries that are not objects become None and are skipped on render."""
    if not isinstance(runs, list):
        return None
    return [RichTextRun.from_api(r) if isinstance(r, dict) else None for r in runs]


class PageProperty(BaseModel):
    """A page property; only title properties carry rich text we render."""
    id:    Optional[str] = None
    type:  str = ""
    title: Optional[list[Optional[RichTextRun]]] = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "PageProperty":
        runs = raw.get("title") if raw.get("type") == "title" else None
        return cls(
            id=raw.get("id"),
            type=raw.get("type") or "",
            title=_title_runs(runs),
        )


class MarkdownBlock(BaseModel):
    """Flat output record: one per formatted ContentBlock plus an optional title."""
    block_id: str
    type:     str
    content:  str
    children: list["MarkdownBlock"] = Field(default_factory=list)   # never populated; no recursion
