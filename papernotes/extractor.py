"""PDF to structured text via the Unstructured partition API.

The service only accepts files, so the PDF bytes are written to a scratch
file under ``pdf_dir`` for the duration of one upload.  ``scratch_pdf``
removes that file on every exit path, including a failed upload.
"""

import logging
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

import requests

from papernotes.models import (
    DEFAULT_UNSTRUCTURED_URL,
    Config,
    ConfigError,
    ExtractedDocument,
    ExtractionError,
)

logger = logging.getLogger(__name__)


@contextmanager
def scratch_pdf(pdf_bytes: bytes, directory: Path) -> Generator[Path, None, None]:
    """Write *pdf_bytes* to a randomly named file in *directory* and yield its path.

    The file is deleted when the block exits, whether or not it raised.
    """
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{uuid.uuid4().hex[:12]}.pdf"
    path.write_bytes(pdf_bytes)
    logger.debug("Wrote scratch PDF %s (%s bytes)", path, f"{len(pdf_bytes):,}")
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)
        logger.debug("Removed scratch PDF %s", path)


class UnstructuredExtractor:
    """Client for the Unstructured ``general`` partition endpoint.

    Attributes:
        url:      Partition endpoint.
        strategy: Layout-analysis strategy sent with every request.
        pdf_dir:  Directory that holds scratch PDFs while they are uploaded.
    """

    def __init__(
        self,
        api_key: str | None,
        url: str = DEFAULT_UNSTRUCTURED_URL,
        strategy: str = "hi_res",
        pdf_dir: Path = Path("pdfs"),
        timeout_s: int | None = None,
    ) -> None:
        if not api_key:
            raise ConfigError(
                "UNSTRUCTURED_API_KEY is not set; the extraction service needs a key"
            )
        self.url = url
        self.strategy = strategy
        self.pdf_dir = pdf_dir
        self.timeout_s = timeout_s
        self._api_key = api_key

    def extract(self, pdf_bytes: bytes) -> list[ExtractedDocument]:
        """Upload *pdf_bytes* and return the extracted elements in order.

        Raises:
            requests.RequestException: on connection failure or non-2xx status.
            ExtractionError: if the response body is not a list of elements.
        """
        with scratch_pdf(pdf_bytes, self.pdf_dir) as path:
            logger.info(
                "Running %s extraction on %s (%s bytes)",
                self.strategy,
                path.name,
                f"{len(pdf_bytes):,}",
            )
            with path.open("rb") as fh:
                response = requests.post(
                    self.url,
                    headers={
                        "accept": "application/json",
                        "unstructured-api-key": self._api_key,
                    },
                    files={"files": (path.name, fh, "application/pdf")},
                    data={"strategy": self.strategy},
                    timeout=self.timeout_s,
                )
            response.raise_for_status()
            elements = response.json()

        documents = elements_to_documents(elements)
        logger.info("Extraction complete: %d elements", len(documents))
        return documents


def elements_to_documents(elements: object) -> list[ExtractedDocument]:
    """Map raw Unstructured elements to ``ExtractedDocument`` objects.

    The element ``type`` becomes ``metadata["category"]`` and ``element_id``
    is carried along, matching how LangChain's loader shapes its documents.
    """
    if not isinstance(elements, list):
        raise ExtractionError(
            f"Expected a list of elements from the extraction service, "
            f"got {type(elements).__name__}"
        )

    documents: list[ExtractedDocument] = []
    for element in elements:
        if not isinstance(element, dict):
            raise ExtractionError(f"Malformed element in extraction response: {element!r}")
        metadata = dict(element.get("metadata") or {})
        if "type" in element:
            metadata["category"] = element["type"]
        if "element_id" in element:
            metadata["element_id"] = element["element_id"]
        documents.append(
            ExtractedDocument(page_content=element.get("text") or "", metadata=metadata)
        )
    return documents


def create_extractor(config: Config) -> UnstructuredExtractor:
    """Build an extractor from configuration.

    Raises:
        ConfigError: if ``config.unstructured_api_key`` is missing.
    """
    return UnstructuredExtractor(
        api_key=config.unstructured_api_key,
        url=config.unstructured_url,
        strategy=config.unstructured_strategy,
        pdf_dir=config.pdf_dir,
        timeout_s=config.timeout_s,
    )


def convert_pdf_to_documents(pdf_bytes: bytes, config: Config) -> list[ExtractedDocument]:
    """Extract *pdf_bytes* with an extractor built from *config*."""
    return create_extractor(config).extract(pdf_bytes)
