"""Inline rendering of Notion rich-text runs to Markdown"""

from typing import Optional, Sequence

from loguru import logger

from notionmd.core.models import RichTextRun


# Applied in order, so the first entry ends up innermost.
_MARKERS: tuple[tuple[str, str], ...] = (
    ('code',          '`'),
    ('strikethrough', '~~'),
    ('italic',        '*'),
    ('bold',          '**'),
)


def render_run(run: RichTextRun) -> str:
    """Wrap one run's text in its annotation markers, then its link."""
    text = run.plain_text
    for flag, marker in _MARKERS:
        if getattr(run.annotations, flag):
            text = f"{marker}{text}{marker}"
    if run.link:
        text = f"[{text}]({run.link})"
    return text


def render_rich_text(runs: Optional[Sequence[Optional[RichTextRun]]]) -> str:
    """Concatenate rendered runs in order; None or empty input renders as ''."""
    if not runs:
        return ""
    parts = []
    for run in runs:
        if run is None:
            logger.debug("Skipping null rich text run")
            continue
        parts.append(render_run(run))
    return "".join(parts)
