"""Prompt template and tool schema for the notes call.

``build_note_messages`` returns a self-contained chat transcript; the paper
text is its only variable.  ``NOTES_TOOL_SCHEMA`` is the single function the
model is allowed to call, generated from ``NotesToolCall`` so that the schema
sent to the model and the parser that validates its reply stay in sync.
"""

from papernotes.models import NotesToolCall

NOTES_TOOL_NAME = "format_notes"

NOTES_TOOL_SCHEMA: dict = {
    "type": "function",
    "function": {
        "name": NOTES_TOOL_NAME,
        "description": "Format the notes taken on a research paper.",
        "parameters": NotesToolCall.model_json_schema(),
    },
}

NOTES_TOOL_CHOICE: dict = {
    "type": "function",
    "function": {"name": NOTES_TOOL_NAME},
}

NOTE_SYSTEM_PROMPT = """\
Take a deep breath, and take your time.
You are an expert reader of machine-learning research papers.
Read the paper below and take notes on it so that a researcher can decide in
a minute whether the paper is worth reading in full.

Rules:
- Record the exact title and the authors in byline order.
- Write a concise, technical summary of three to five sentences.
- Pick the single category that best describes the main contribution.
- Set each novelty flag only if the paper itself supports it.
- Return exactly one note for the whole paper unless it clearly bundles
  several independent papers.
- Respond only by calling the `format_notes` function."""


def build_note_messages(paper: str) -> list[dict]:
    """Build the chat messages for the notes call.

    Args:
        paper: The full paper text, as produced by
            ``documents.format_documents_as_string``.

    Returns:
        A system + user message list ready for the chat-completion API.
    """
    return [
        {"role": "system", "content": NOTE_SYSTEM_PROMPT},
        {"role": "user", "content": f"Paper:\n\n{paper}"},
    ]
