"""Render notes to the text printed on stdout.

No file I/O is performed here — the caller (``cli.py``) is responsible for
writing the returned string to disk.
"""

import json
from typing import Sequence

from papernotes.models import ArxivPaperNote, OutputFormat

_CATEGORY_LABELS: dict[str, str] = {
    "method": "new method",
    "dataset": "dataset",
    "benchmark": "benchmark",
    "survey": "survey/review",
    "position": "position paper",
    "application": "application",
    "other": "other",
}


def render_notes(notes: Sequence[ArxivPaperNote], fmt: OutputFormat = "markdown") -> str:
    """Convert *notes* to a markdown document or a pretty-printed JSON array."""
    if fmt == "json":
        return json.dumps(
            [note.model_dump() for note in notes], indent=2, ensure_ascii=False
        )
    if fmt != "markdown":
        raise ValueError(f"Unknown output format: {fmt!r}")
    return "\n\n---\n\n".join(_render_note(note) for note in notes) + "\n"


def _render_note(note: ArxivPaperNote) -> str:
    lines = [
        f"# {note.title}",
        "",
        f"**Authors:** {', '.join(note.authors) or 'not reported'}",
        f"**Category:** {_CATEGORY_LABELS[note.category]}",
        f"**Novelty:** {_novelty_label(note)}",
    ]
    if note.page_numbers:
        lines.append(f"**Pages:** {', '.join(str(p) for p in note.page_numbers)}")
    lines += ["", "## Summary", "", note.summary]
    return "\n".join(lines)


def _novelty_label(note: ArxivPaperNote) -> str:
    flags = [
        label
        for label, flag in (
            ("method", note.novel_method),
            ("dataset", note.novel_dataset),
            ("results", note.novel_results),
        )
        if flag
    ]
    return ", ".join(flags) if flags else "none claimed"
