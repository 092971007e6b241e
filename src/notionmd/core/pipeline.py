"""Conversion pipeline: number, format, filter, and title a block sequence"""

from typing import Mapping, Optional, Sequence

from loguru import logger

from notionmd.core.assemble import assemble
from notionmd.core.behaviors import format_block
from notionmd.core.models import ContentBlock, MarkdownBlock, PageProperty
from notionmd.core.numbering import annotate
from notionmd.core.rich_text import render_rich_text
from notionmd.exceptions import InvalidArgument, UnsupportedBlockType


TITLE_BLOCK_ID = "0"
TITLE_BLOCK_TYPE = "pageTitle"


def find_title(page_properties: Optional[Mapping[str, PageProperty]]) -> Optional[PageProperty]:
    """Return the 'title' property, else the first property typed 'title', else None."""
    if not page_properties:
        return None
    title = page_properties.get("title")
    if title is not None:
        return title
    return next((p for p in page_properties.values() if p is not None and p.type == "title"), None)


def title_block(page_properties: Optional[Mapping[str, PageProperty]]) -> Optional[MarkdownBlock]:
    """Build the synthetic page-title block, or None when the page has no title."""
    prop = find_title(page_properties)
    if prop is None:
        logger.warning("No title found in page properties")
        return None
    content = "# " + render_rich_text(prop.title)
    logger.debug("Added page title: {}", content)
    return MarkdownBlock(block_id=TITLE_BLOCK_ID, type=TITLE_BLOCK_TYPE, content=content)


def convert(
    blocks: Optional[Sequence[ContentBlock]],
    page_properties: Optional[Mapping[str, PageProperty]] = None,
    strict: bool = False,
    ) -> list[MarkdownBlock]:
    """Convert an ordered block sequence into MarkdownBlocks, one per non-empty fragment.

    Unsupported block types are logged and dropped; with strict=True the
    UnsupportedBlockType error propagates instead.
    """
    if blocks is None:
        raise InvalidArgument("Notion blocks cannot be None")

    md_blocks: list[MarkdownBlock] = []
    if page_properties is not None:
        title = title_block(page_properties)
        if title is not None:
            md_blocks.append(title)

    for annotated in annotate(blocks):
        block = annotated.block
        try:
            content = format_block(annotated)
        except UnsupportedBlockType as e:
            if strict:
                raise
            logger.warning("Unsupported block type: {}, block ID: {}", e.block_type, block.id)
            content = ""

        if content:
            md_blocks.append(MarkdownBlock(block_id=block.id, type=block.type, content=content))
        else:
            logger.debug("Skipped empty block - Type: {}, ID: {}", block.type, block.id)

    logger.info("Converted {} Notion blocks to {} markdown blocks", len(blocks), len(md_blocks))
    return md_blocks


def render(md_blocks: Optional[Sequence[MarkdownBlock]]) -> str:
    """Assemble MarkdownBlocks into one Markdown document string."""
    if md_blocks is None:
        raise InvalidArgument("MarkdownBlocks cannot be None")
    return assemble(md_blocks)
