import logging
from typing import Callable, Dict

from config import MIN_TEXT_LENGTH
from errors import ExtractionFailure, InsufficientText, ResumePipelineError
from parsers.formats import DocumentFormat, detect_format, normalize_media_type
from parsers.ocr import image_to_text
from parsers.pdf import pdf_to_text
from parsers.word import word_to_text

logger = logging.getLogger(__name__)

# Each extractor takes (bytes, normalized media type) and returns plain text
EXTRACTORS: Dict[DocumentFormat, Callable[[bytes, str], str]] = {
    DocumentFormat.PDF: lambda data, media_type: pdf_to_text(data),
    DocumentFormat.WORD: word_to_text,
    DocumentFormat.IMAGE: image_to_text,
}


def extract_text(data: bytes, media_type: str, filename: str = "") -> str:
    """
    Convert an uploaded document into a single plain-text string.

    Raises UnsupportedFormat for media types with no extractor and
    ExtractionFailure when the underlying engine fails. Never retried.
    """
    mt = normalize_media_type(media_type)
    fmt = detect_format(mt)
    logger.info(f"Extracting text from: {filename} ({mt}, {len(data)} bytes)")

    extractor = EXTRACTORS[fmt]
    try:
        text = extractor(data, mt)
    except ResumePipelineError:
        raise
    except Exception as e:
        logger.error(f"Text extraction error: {e}")
        raise ExtractionFailure(mt, str(e)) from e

    text = text or ""
    logger.info(f"Text extracted: {len(text)} characters")
    if text:
        logger.debug(f"Text preview: {text[:200]}...")
    return text


def validate_text(text: str, minimum: int = MIN_TEXT_LENGTH) -> str:
    """Reject text too short for the heuristics to mean anything."""
    length = len((text or "").strip())
    if length < minimum:
        logger.warning(f"Very little text extracted: {length} characters")
        raise InsufficientText(len(text or ""), minimum)
    return text


def extract_document_text(data: bytes, media_type: str, filename: str = "") -> str:
    """Extract and validate in one step; the result is always usable text."""
    return validate_text(extract_text(data, media_type, filename))
