import io
import logging

import docx

from errors import ExtractionFailure

logger = logging.getLogger(__name__)


def word_to_text(data: bytes, media_type: str) -> str:
    """Extract raw text from a Word document, paragraphs first, then table cells."""
    try:
        document = docx.Document(io.BytesIO(data))
    except Exception as e:
        # python-docx only reads the XML format; legacy binary .doc ends up here
        logger.error(f"Error reading Word document: {e}")
        raise ExtractionFailure(media_type, "Failed to extract text from Word document") from e

    lines = [para.text for para in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            lines.append(" ".join(cell.text for cell in row.cells))
    return "\n".join(lines)
