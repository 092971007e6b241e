"""Join Markdown blocks into a document, keeping list items together"""

from typing import Optional, Sequence

from notionmd.core.models import BlockType, MarkdownBlock
from notionmd.exceptions import InvalidArgument


LIST_TYPES = {BlockType.bulleted_list_item.value, BlockType.numbered_list_item.value}


def is_consecutive_list_item(current: MarkdownBlock, following: MarkdownBlock) -> bool:
    """True when both blocks are list items of the same kind (bulleted or numbered)."""
    return current.type in LIST_TYPES and current.type == following.type


def assemble(md_blocks: Optional[Sequence[MarkdownBlock]]) -> str:
    """Render blocks as 'content\\n' each, separated by a blank line except inside a list.

    The last block is always followed by a blank line; callers that want a
    single trailing newline strip it themselves.
    """
    if md_blocks is None:
        raise InvalidArgument("md_blocks cannot be None")

    parts = []
    for i, block in enumerate(md_blocks):
        parts.append(block.content + "\n")
        is_last = i + 1 == len(md_blocks)
        if is_last or not is_consecutive_list_item(block, md_blocks[i + 1]):
            parts.append("\n")
    return "".join(parts)
