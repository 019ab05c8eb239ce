"""Pydantic models, dataclass Config, and exceptions for the notes pipeline.

The prompt wording lives in ``prompts.py``. This module only defines the
*schema* of the data that flows between the pipeline steps: extracted
document units, the structured note the model must emit, and runtime
configuration.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

PaperCategory = Literal[
    "method",
    "dataset",
    "benchmark",
    "survey",
    "position",
    "application",
    "other",
]
"""Coarse classification of what kind of contribution a paper makes."""

OffsetMode = Literal["cumulative", "fixed"]
"""How repeated page deletions account for pages that were already removed."""

OutputFormat = Literal["markdown", "json"]

# ---------------------------------------------------------------------------
# Extracted documents
# ---------------------------------------------------------------------------


class ExtractedDocument(BaseModel):
    """One unit of extracted text plus its source metadata.

    Serialised with LangChain's ``pageContent``/``metadata`` key names so
    that document dumps produced by other tooling load unchanged.
    """

    model_config = ConfigDict(populate_by_name=True)

    page_content: str = Field(alias="pageContent")
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def page_number(self) -> int | None:
        value = self.metadata.get("page_number")
        return value if isinstance(value, int) else None

    @property
    def category(self) -> str | None:
        return self.metadata.get("category")


# ---------------------------------------------------------------------------
# Paper notes (tool-call contract)
# ---------------------------------------------------------------------------


class ArxivPaperNote(BaseModel):
    """Structured notes on a paper, as emitted by the ``format_notes`` tool.

    The JSON schema of this model *is* the tool schema sent to the model, so
    any field added here is automatically requested and validated.
    """

    title: str = Field(description="Full title of the paper.")
    authors: list[str] = Field(description="Author names in byline order.")
    summary: str = Field(
        description="Three to five sentence summary of the paper's contribution."
    )
    category: PaperCategory = Field(
        description="The main kind of contribution the paper makes."
    )
    novel_method: bool = Field(
        description="True if the paper introduces a new method, model or algorithm."
    )
    novel_dataset: bool = Field(
        description="True if the paper releases a new dataset or benchmark."
    )
    novel_results: bool = Field(
        description="True if the paper reports new state-of-the-art or surprising results."
    )
    page_numbers: list[int] = Field(
        default_factory=list,
        description="Pages the summary mostly draws on, if identifiable.",
    )

    @field_validator("summary")
    @classmethod
    def _summary_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("summary must not be empty")
        return value


class NotesToolCall(BaseModel):
    """Arguments of one ``format_notes`` tool invocation."""

    notes: list[ArxivPaperNote] = Field(
        min_length=1,
        description="Notes on the paper; normally exactly one entry for the whole paper.",
    )


# ---------------------------------------------------------------------------
# Config (dataclass — not pydantic; holds runtime settings)
# ---------------------------------------------------------------------------

DEFAULT_UNSTRUCTURED_URL = "https://api.unstructuredapp.io/general/v0/general"


@dataclass
class Config:
    """Runtime configuration for one pipeline run.

    Every field corresponds to a CLI flag or an environment variable read by
    ``cli.main()``. Library code never reads the environment itself;
    credentials are passed in here and handed to each client at construction.

    Attributes:
        url:                   PDF URL; must end in ``.pdf``.
        name:                  Label used to name the saved documents file.
        pages_to_delete:       1-based page numbers to strip before extraction.
        page_offset_mode:      ``cumulative`` (numbers refer to the original
                               document) or ``fixed`` (each number is applied
                               to the document as it is after the previous
                               removal).
        pdf_dir:               Directory for scratch PDFs handed to the
                               extraction service.
        documents_in:          Load pre-extracted documents from this JSON file
                               instead of fetching and extracting.
        documents_out:         Save extracted documents to this JSON file.
        output_path:           Also write the rendered notes to this file.
        output_format:         ``markdown`` or ``json``.
        unstructured_api_key:  Credential for the extraction service.
        unstructured_url:      Partition endpoint of the extraction service.
        unstructured_strategy: Layout-analysis strategy (``hi_res``).
        llm_api_key:           Credential for the chat-completion backend.
        base_url:              OpenAI-compatible API base URL.
        model:                 Chat model identifier.
        temperature:           Sampling temperature for the notes call.
        timeout_s:             Seconds before a network call is abandoned;
                               ``None`` leaves each library's default.
        max_output_tokens:     Optional cap on generated tokens.
        verbose:               DEBUG-level logging.
    """

    url: str = ""
    name: str = "paper"
    pages_to_delete: list[int] = field(default_factory=list)
    page_offset_mode: OffsetMode = "cumulative"
    pdf_dir: Path = Path("pdfs")
    documents_in: Path | None = None
    documents_out: Path | None = None
    output_path: Path | None = None
    output_format: OutputFormat = "markdown"
    unstructured_api_key: str | None = None
    unstructured_url: str = DEFAULT_UNSTRUCTURED_URL
    unstructured_strategy: str = "hi_res"
    llm_api_key: str | None = None
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4"
    temperature: float = 0.0
    timeout_s: int | None = None
    max_output_tokens: int | None = None
    verbose: bool = False


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PaperNotesError(Exception):
    """Base class for failures raised by this package."""


class InvalidURLError(PaperNotesError, ValueError):
    """Raised when the input URL does not point at a ``.pdf`` file."""


class ConfigError(PaperNotesError):
    """Raised when a required credential or setting is missing."""


class PageRangeError(PaperNotesError, IndexError):
    """Raised when a requested page number is outside the current document."""


class ExtractionError(PaperNotesError):
    """Raised when the extraction service returns a body we cannot interpret."""


class DocumentsFormatError(PaperNotesError):
    """Raised when a saved documents file does not have the expected shape."""


class LLMError(PaperNotesError):
    """Raised when the chat model does not answer with the expected tool call."""


class NoteParseError(LLMError):
    """Raised when tool-call arguments do not validate against the note schema."""
