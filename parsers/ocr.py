import io
import logging
import time

import pytesseract
from PIL import Image

from config import OCR_LANGUAGE, TESSERACT_CMD
from errors import ExtractionFailure

logger = logging.getLogger(__name__)

if TESSERACT_CMD:
    pytesseract.pytesseract.tesseract_cmd = TESSERACT_CMD


def image_to_text(data: bytes, media_type: str, lang: str = OCR_LANGUAGE) -> str:
    """
    Run OCR over a raster image.

    This is slow (tens of seconds for a full page) and blocks the caller until
    Tesseract finishes; there is no progress reporting or cancellation.
    """
    logger.info("Starting OCR text extraction from image...")
    started = time.monotonic()
    try:
        with Image.open(io.BytesIO(data)) as img:
            text = pytesseract.image_to_string(img, lang=lang)
    except Exception as e:
        logger.error(f"OCR error: {e}")
        raise ExtractionFailure(media_type, "Failed to extract text from image using OCR") from e

    logger.info(f"OCR completed in {time.monotonic() - started:.1f}s")
    return text or ""
