"""Block formatting behaviors keyed by block type, and the per-block formatter"""

from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import ValidationError

from notionmd.core.models import AnnotatedBlock, BlockType, ContentBlock, RichTextRun
from notionmd.core.rich_text import render_rich_text
from notionmd.exceptions import InvalidBlock, MissingOrdinal, UnsupportedBlockType


Behavior = Callable[[ContentBlock, Optional[int]], str]


def _payload(block: ContentBlock) -> dict[str, Any]:
    """Return the type-specific payload or raise InvalidBlock if it is missing."""
    if not isinstance(block.payload, dict):
        raise InvalidBlock(f"Block {block.id} is typed {block.type} but has no {block.type} payload", block.id)
    return block.payload


def _rich_text(block: ContentBlock) -> list[Optional[RichTextRun]]:
    """Parse the payload's rich_text runs; malformed runs raise InvalidBlock."""
    runs: list[Optional[RichTextRun]] = []
    for raw in _payload(block).get("rich_text") or []:
        if raw is None:
            runs.append(None)
            continue
        if not isinstance(raw, dict):
            raise InvalidBlock(f"Block {block.id} has a rich_text run that is not an object", block.id)
        try:
            runs.append(RichTextRun.from_api(raw))
        except ValidationError as e:
            raise InvalidBlock(f"Block {block.id} has a malformed rich_text run: {e}", block.id) from e
    return runs


def _content(block: ContentBlock) -> str:
    return render_rich_text(_rich_text(block))


def code_language(block: ContentBlock) -> Optional[str]:
    """Return the language of a code block; None for other blocks or no language."""
    if block.kind is not BlockType.code:
        return None
    return _payload(block).get("language") or None


def _url(block: ContentBlock, *keys: str) -> str:
    """Resolve a URL from the payload, trying each nested hosting object in turn."""
    payload = _payload(block)
    if payload.get("url"):
        return payload["url"]
    for key in keys:
        url = (payload.get(key) or {}).get("url")
        if url:
            return url
    raise InvalidBlock(f"Block {block.id} of type {block.type} has no url", block.id)


def _heading(prefix: str) -> Behavior:
    return lambda block, _ordinal: prefix + _content(block)


def _paragraph(block: ContentBlock, _ordinal: Optional[int]) -> str:
    return _content(block)


def _quote(block: ContentBlock, _ordinal: Optional[int]) -> str:
    return "> " + _content(block)


def _bulleted(block: ContentBlock, _ordinal: Optional[int]) -> str:
    return "- " + _content(block)


def _numbered(block: ContentBlock, ordinal: Optional[int]) -> str:
    if ordinal is None:
        raise MissingOrdinal(block.id)
    return f"{ordinal}. " + _content(block)


def _code(block: ContentBlock, _ordinal: Optional[int]) -> str:
    return "```" + (code_language(block) or "") + "\n" + _content(block) + "\n```"


def _bookmark(block: ContentBlock, _ordinal: Optional[int]) -> str:
    return f"[Bookmark]({_url(block)})"


def _image(block: ContentBlock, _ordinal: Optional[int]) -> str:
    return f"![Image]({_url(block, 'file', 'external')})"


def _divider(block: ContentBlock, _ordinal: Optional[int]) -> str:
    return "---"


# Built once at import; read-only afterwards.
BEHAVIORS: Mapping[BlockType, Behavior] = MappingProxyType({
    BlockType.paragraph:          _paragraph,
    BlockType.heading_1:          _heading("# "),
    BlockType.heading_2:          _heading("## "),
    BlockType.heading_3:          _heading("### "),
    BlockType.quote:              _quote,
    BlockType.bulleted_list_item: _bulleted,
    BlockType.numbered_list_item: _numbered,
    BlockType.code:               _code,
    BlockType.bookmark:           _bookmark,
    BlockType.divider:            _divider,
    BlockType.image:              _image,
})


def resolve_behavior(kind: BlockType, block_id: Optional[str] = None, raw_type: Optional[str] = None) -> Behavior:
    """Look up the formatting behavior for kind, raising UnsupportedBlockType if none."""
    behavior = BEHAVIORS.get(kind)
    if behavior is None:
        raise UnsupportedBlockType(raw_type or kind.value, block_id)
    return behavior


def format_block(block: Union[ContentBlock, AnnotatedBlock]) -> str:
    """Format a single block to a Markdown fragment.

    Accepts either a bare ContentBlock or the AnnotatedBlock produced by the
    numbering pass; numbered list items need the latter.
    """
    ordinal = None
    if isinstance(block, AnnotatedBlock):
        block, ordinal = block.block, block.ordinal
    behavior = resolve_behavior(block.kind, block.id, block.type)
    return behavior(block, ordinal)
