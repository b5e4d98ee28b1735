from enum import Enum

from errors import UnsupportedFormat

WORD_MEDIA_TYPES = (
    "application/msword",  # .doc
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",  # .docx
)


class DocumentFormat(str, Enum):
    PDF = "pdf"
    WORD = "word"
    IMAGE = "image"


def normalize_media_type(media_type: str | None) -> str:
    """Lowercase a declared media type and drop parameters such as charset."""
    return (media_type or "").split(";", 1)[0].strip().lower()


def detect_format(media_type: str | None) -> DocumentFormat:
    mt = normalize_media_type(media_type)
    if mt == "application/pdf":
        return DocumentFormat.PDF
    if mt in WORD_MEDIA_TYPES:
        return DocumentFormat.WORD
    if mt.startswith("image/"):
        return DocumentFormat.IMAGE
    raise UnsupportedFormat(mt)
