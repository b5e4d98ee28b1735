import fitz  # PyMuPDF
import logging

from errors import ExtractionFailure

logger = logging.getLogger(__name__)


def pdf_to_text(data: bytes) -> str:
    """
    Extract the text layer of an in-memory PDF.

    Scanned PDFs without a text layer are not OCR'd; they raise
    ExtractionFailure instead of returning an empty string.
    """
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise ExtractionFailure("application/pdf", f"Invalid PDF: {e}") from e

    try:
        text = "\n".join(page.get_text("text") for page in doc)
    except Exception as e:
        raise ExtractionFailure("application/pdf", str(e)) from e
    finally:
        doc.close()

    if not text.strip():
        logger.warning("PDF has no extractable text layer")
        raise ExtractionFailure(
            "application/pdf",
            "PDF has no extractable text layer (scanned PDFs are not supported)",
        )
    return text
