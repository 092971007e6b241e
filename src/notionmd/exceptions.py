"""Exception hierarchy for Notion-to-Markdown conversion"""


class NotionMdError(Exception):
    """Base exception for all notionmd errors"""


class InvalidArgument(NotionMdError, ValueError):
    """A required input (id, token, block list) was None or empty"""


class UnsupportedBlockType(NotionMdError):
    """No formatting behavior is registered for a block type."""

    def __init__(self, block_type: str, block_id: str | None = None):
        super().__init__(f"No behavior found for block type: {block_type}")
        self.block_type = block_type
        self.block_id = block_id


class InvalidBlock(NotionMdError):
    """A block's declared type does not match its payload shape."""

    def __init__(self, message: str, block_id: str | None = None):
        super().__init__(message)
        self.block_id = block_id


class MissingOrdinal(NotionMdError):
    """A numbered list item was formatted before the numbering pass ran."""

    def __init__(self, block_id: str):
        super().__init__(f"Numbered list item {block_id} has no ordinal; run annotate() first")
        self.block_id = block_id
