"""Ordinal assignment for runs of consecutive numbered list items"""

from typing import Optional, Sequence

from loguru import logger

from notionmd.core.models import AnnotatedBlock, BlockType, ContentBlock
from notionmd.exceptions import InvalidArgument, InvalidBlock


def annotate(blocks: Optional[Sequence[ContentBlock]]) -> list[AnnotatedBlock]:
    """Pair each block with its ordinal in the current numbered-list run.

    The counter restarts at 1 after any block that is not a numbered list item,
    so two lists separated by a divider or heading are numbered independently.
    """
    if blocks is None:
        raise InvalidArgument("blocks cannot be None")

    annotated: list[AnnotatedBlock] = []
    counter = 1
    for block in blocks:
        if block.kind is BlockType.numbered_list_item:
            if not isinstance(block.payload, dict):
                logger.error("Block {} marked numbered_list_item carries no list payload", block.id)
                raise InvalidBlock(f"Block {block.id} is marked numbered_list_item but has no list payload", block.id)
            annotated.append(AnnotatedBlock(block, counter))
            counter += 1
        else:
            annotated.append(AnnotatedBlock(block))
            counter = 1
    return annotated
