"""Command-line interface for paper-notes.

Entry point: ``paper-notes`` (configured in ``pyproject.toml``).

Usage:
    paper-notes URL [options]

Key options:
    --name, --delete-pages, --offset-mode, --documents-in,
    --documents-out / --save-documents, --output, --format,
    --model, --base-url, --temperature, --unstructured-url, --strategy,
    --pdf-dir, --timeout, --max-output-tokens,
    --verbose/--no-verbose, --log-file.

Credentials are read once here, from the environment (after loading a
``.env`` file): ``UNSTRUCTURED_API_KEY`` for extraction and
``OPENAI_API_KEY`` (or ``LLM_API_KEY``) for the chat model.  Rendered notes
go to stdout; logs go to stderr.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

import openai
import requests
from dotenv import load_dotenv

from papernotes.log import setup_logging
from papernotes.models import DEFAULT_UNSTRUCTURED_URL, Config, PaperNotesError
from papernotes.pipeline import default_documents_path, run_pipeline
from papernotes.renderer import render_notes

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return parsed


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, resolve credentials, and run the pipeline."""
    load_dotenv()

    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        verbose=args.verbose,
        log_file=Path(args.log_file) if args.log_file else None,
    )

    config = build_config(args, os.environ)

    try:
        notes = run_pipeline(config)
    except (PaperNotesError, requests.RequestException, openai.OpenAIError) as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        sys.exit(1)

    rendered = render_notes(notes, config.output_format)
    print(rendered)

    if config.output_path is not None:
        config.output_path.parent.mkdir(parents=True, exist_ok=True)
        config.output_path.write_text(rendered, encoding="utf-8")
        logger.info("Written: %s", config.output_path)


def build_config(args: argparse.Namespace, environ) -> Config:
    """Combine parsed arguments and environment variables into a ``Config``."""
    if args.save_documents:
        documents_out = default_documents_path(args.name)
    elif args.documents_out:
        documents_out = Path(args.documents_out)
    else:
        documents_out = None

    return Config(
        url=args.url,
        name=args.name,
        pages_to_delete=list(args.delete_pages),
        page_offset_mode=args.offset_mode,
        pdf_dir=Path(args.pdf_dir),
        documents_in=Path(args.documents_in) if args.documents_in else None,
        documents_out=documents_out,
        output_path=Path(args.output) if args.output else None,
        output_format=args.format,
        unstructured_api_key=environ.get("UNSTRUCTURED_API_KEY"),
        unstructured_url=args.unstructured_url,
        unstructured_strategy=args.strategy,
        llm_api_key=environ.get("OPENAI_API_KEY") or environ.get("LLM_API_KEY"),
        base_url=args.base_url,
        model=args.model,
        temperature=args.temperature,
        timeout_s=args.timeout,
        max_output_tokens=args.max_output_tokens,
        verbose=args.verbose,
    )


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paper-notes",
        description=(
            "Download a research-paper PDF, extract its text with the "
            "Unstructured API, and print structured notes written by an LLM."
        ),
    )

    parser.add_argument("url", metavar="URL", help="URL of the paper; must end in .pdf.")
    parser.add_argument(
        "--name",
        default="paper",
        help="Label used to name saved documents (default: paper).",
    )
    parser.add_argument(
        "--delete-pages",
        metavar="N",
        type=_positive_int,
        nargs="+",
        default=[],
        help="1-based page numbers to remove before extraction.",
    )
    parser.add_argument(
        "--offset-mode",
        choices=["cumulative", "fixed"],
        default="cumulative",
        help=(
            "How --delete-pages numbers are interpreted: 'cumulative' refers to "
            "the original document, 'fixed' to the document after each removal "
            "(default: cumulative)."
        ),
    )

    documents_group = parser.add_mutually_exclusive_group()
    documents_group.add_argument(
        "--documents-out",
        metavar="FILE",
        default=None,
        help="Save extracted documents to FILE as JSON.",
    )
    documents_group.add_argument(
        "--save-documents",
        action="store_true",
        default=False,
        help="Save extracted documents to documents/<name>.json.",
    )
    parser.add_argument(
        "--documents-in",
        metavar="FILE",
        default=None,
        help="Skip download and extraction; read documents from FILE instead.",
    )

    parser.add_argument(
        "--output",
        metavar="FILE",
        default=None,
        help="Also write the rendered notes to FILE.",
    )
    parser.add_argument(
        "--format",
        choices=["markdown", "json"],
        default="markdown",
        help="Output format for the notes (default: markdown).",
    )

    _default_model = os.environ.get("LLM_MODEL", "gpt-4")
    parser.add_argument(
        "--model",
        metavar="MODEL",
        default=_default_model,
        help=f"LLM model identifier (default: LLM_MODEL env var, currently {_default_model!r}).",
    )
    parser.add_argument(
        "--base-url",
        metavar="URL",
        default="https://api.openai.com/v1",
        help="OpenAI-compatible API base URL (default: https://api.openai.com/v1).",
    )
    parser.add_argument(
        "--temperature",
        metavar="T",
        type=float,
        default=0.0,
        help="Sampling temperature for the notes call (default: 0.0).",
    )
    parser.add_argument(
        "--unstructured-url",
        metavar="URL",
        default=DEFAULT_UNSTRUCTURED_URL,
        help="Unstructured partition endpoint.",
    )
    parser.add_argument(
        "--strategy",
        default="hi_res",
        help="Unstructured partition strategy (default: hi_res).",
    )
    parser.add_argument(
        "--pdf-dir",
        metavar="DIR",
        default="pdfs",
        help="Directory for scratch PDFs during extraction (default: pdfs).",
    )
    parser.add_argument(
        "--timeout",
        metavar="S",
        type=_positive_int,
        default=None,
        help="Timeout in seconds for network calls (default: library defaults).",
    )
    parser.add_argument(
        "--max-output-tokens",
        metavar="N",
        type=_positive_int,
        default=None,
        help="Maximum tokens the LLM may generate (default: no limit).",
    )
    parser.add_argument(
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Enable DEBUG-level logging (default: off).",
    )
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        default=None,
        help="Also write log output to FILE.",
    )

    return parser


if __name__ == "__main__":
    main()
