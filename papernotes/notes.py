"""Turn extracted documents into validated paper notes with one tool call."""

import logging
from collections.abc import Sequence

from pydantic import ValidationError

from papernotes.documents import format_documents_as_string
from papernotes.llm import ChatClient
from papernotes.models import ArxivPaperNote, ExtractedDocument, NoteParseError, NotesToolCall
from papernotes.prompts import NOTES_TOOL_CHOICE, NOTES_TOOL_SCHEMA, build_note_messages

logger = logging.getLogger(__name__)


def generate_notes(
    documents: Sequence[ExtractedDocument], client: ChatClient
) -> list[ArxivPaperNote]:
    """Ask the model for notes on the paper made up of *documents*.

    Raises:
        LLMError: if the model does not call the notes tool.
        NoteParseError: if the tool arguments do not match the note schema.
    """
    paper = format_documents_as_string(documents)
    messages = build_note_messages(paper)
    logger.info(
        "Built notes prompt from %d documents (%s chars, ~%s tokens)",
        len(documents),
        f"{len(paper):,}",
        f"{len(paper) // 4:,}",
    )

    arguments = client.call_tool(messages, NOTES_TOOL_SCHEMA, NOTES_TOOL_CHOICE)
    return parse_notes(arguments)


def parse_notes(arguments: str) -> list[ArxivPaperNote]:
    """Validate a ``format_notes`` argument string into a list of notes."""
    try:
        call = NotesToolCall.model_validate_json(arguments)
    except ValidationError as exc:
        compact = _compact_validation_errors(exc)
        raise NoteParseError(
            "Tool arguments do not match the notes schema: " + "; ".join(compact)
        ) from exc
    logger.debug("Parsed %d note(s)", len(call.notes))
    return call.notes


def _compact_validation_errors(exc: ValidationError) -> list[str]:
    """Convert pydantic errors into concise 'path: message' strings."""
    compact: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        msg = err.get("msg", "validation error")
        compact.append(f"{loc}: {msg}" if loc else msg)
    return compact
