"""Root test configuration: raw Notion payload builders and loguru capture"""

import sys

import pytest
from loguru import logger


def _rich(text: str, link: str = None, **annotations) -> dict:
    """A Notion rich_text object of type 'text'."""
    return {
        "type": "text",
        "text": {"content": text, "link": {"url": link} if link else None},
        "annotations": {
            "bold": False, "italic": False, "strikethrough": False,
            "underline": False, "code": False, "color": "default",
            **annotations,
        },
        "plain_text": text,
        "href": link,
    }


def _block(block_type: str, text: str = None, block_id: str = None, **payload) -> dict:
    """A Notion block object; text becomes a single plain rich_text run."""
    body = dict(payload)
    if text is not None:
        body["rich_text"] = [_rich(text)]
    return {
        "object": "block",
        "id": block_id or f"{block_type}-{text or 'x'}",
        "type": block_type,
        "has_children": False,
        block_type: body,
    }


@pytest.fixture(name="rich")
def rich_fixture():
    return _rich


@pytest.fixture(name="raw_block")
def raw_block_fixture():
    return _block


@pytest.fixture(name="log_messages")
def log_messages_fixture():
    """Collect loguru messages emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def reset_logger():
    """Restore loguru's default stderr handler after CLI tests reconfigure it."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
