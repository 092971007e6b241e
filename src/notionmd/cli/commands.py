"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import httpx
import typer
from pydantic import TypeAdapter, ValidationError

from notionmd.config import Settings, load_config
from notionmd.converter import MarkdownConverter
from notionmd.core.models import ContentBlock, MarkdownBlock, PageProperty
from notionmd.core.pipeline import convert, render
from notionmd.exceptions import NotionMdError
from notionmd.logger import setup_logger


_md_blocks_adapter = TypeAdapter(list[MarkdownBlock])


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config and configure logging, with standard CLI error handling."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    setup_logger(settings.log_level, settings.log_file)
    return settings


def _page_blocks(settings: Settings, page_id: str) -> list[MarkdownBlock]:
    """Fetch and convert a page, mapping library and HTTP errors to CLI failures."""
    try:
        with MarkdownConverter.from_settings(settings) as converter:
            return converter.page_to_markdown_blocks(page_id)
    except NotionMdError as e:
        _fail(str(e))
    except httpx.HTTPStatusError as e:
        _fail(f"Notion API returned {e.response.status_code}", e)
    except httpx.HTTPError as e:
        _fail("Request to Notion failed", e)
    except ValueError as e:
        _fail("Notion returned a response that could not be read", e)


def convert_cmd(
    page_id: Annotated[str, typer.Argument(help="Notion page ID")],
    token: Annotated[Optional[str], typer.Option("--token", help="Notion integration secret")] = None,
    out: Annotated[Optional[Path], typer.Option("--out", "-o", help="Write Markdown to this file")] = None,
    strict: Annotated[Optional[bool], typer.Option("--strict/--lenient", help="Fail on unsupported block types")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="Log level")] = None,
    ):
    """Fetch a page and print it as Markdown."""
    settings = _settings(overrides={"notion_token": token, "strict": strict, "log_level": log_level})
    markdown = render(_page_blocks(settings, page_id))
    if out is None:
        typer.echo(markdown, nl=False)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(markdown, encoding="utf-8")
    typer.echo(f"  {page_id} -> {out}")


def blocks_cmd(
    page_id: Annotated[str, typer.Argument(help="Notion page ID")],
    token: Annotated[Optional[str], typer.Option("--token", help="Notion integration secret")] = None,
    strict: Annotated[Optional[bool], typer.Option("--strict/--lenient", help="Fail on unsupported block types")] = None,
    ):
    """Fetch a page and print its Markdown blocks as JSON."""
    settings = _settings(overrides={"notion_token": token, "strict": strict})
    md_blocks = _page_blocks(settings, page_id)
    typer.echo(_md_blocks_adapter.dump_json(md_blocks, indent=2).decode())


def render_cmd(
    path: Annotated[Path, typer.Argument(help="JSON file of raw Notion blocks")],
    strict: Annotated[Optional[bool], typer.Option("--strict/--lenient", help="Fail on unsupported block types")] = None,
    ):
    """Render a saved block-children response (or plain block list) to Markdown offline.

    The file holds either a JSON list of block objects, or an object with a
    'results' list and an optional 'properties' mapping.
    """
    settings = _settings(overrides={"strict": strict})
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        _fail(f"Cannot read {path}", e)

    raw_blocks, raw_props = data, None
    if isinstance(data, dict):
        raw_blocks, raw_props = data.get("results"), data.get("properties")
    if not isinstance(raw_blocks, list):
        _fail(f"{path} does not contain a list of blocks")

    if not all(isinstance(b, dict) for b in raw_blocks):
        _fail(f"{path} contains a block that is not a JSON object")
    if raw_props is not None and not (
        isinstance(raw_props, dict) and all(isinstance(p, dict) for p in raw_props.values())
    ):
        _fail(f"{path} has properties that are not a mapping of JSON objects")

    try:
        properties = {k: PageProperty.from_api(v) for k, v in raw_props.items()} if raw_props else None
        md_blocks = convert([ContentBlock.from_api(b) for b in raw_blocks], properties, strict=settings.strict)
    except NotionMdError as e:
        _fail(str(e))
    except ValidationError as e:
        _fail(f"{path} contains malformed Notion data", e)
    typer.echo(render(md_blocks), nl=False)
