"""Error kinds raised by the extraction pipeline."""

OCR_HINT = (
    "OCR text extraction failed. Please ensure:\n"
    "1. Image is clear and readable\n"
    "2. Text is not too small\n"
    "3. Image is not rotated\n"
    "Or try uploading a PDF or Word document instead."
)

INSUFFICIENT_TEXT_TIPS = (
    "Tips:\n"
    "• Use text-based PDF (not scanned)\n"
    "• Ensure Word document contains text\n"
    "• For images, ensure text is clear and readable"
)


class ResumePipelineError(Exception):
    """Base class for errors that abort an intake request."""


class UnsupportedFormat(ResumePipelineError):
    def __init__(self, media_type: str):
        self.media_type = media_type
        super().__init__(
            f"Unsupported file type: {media_type or 'unknown'}. "
            "Only PDF, DOC, DOCX, and image files (JPG, PNG, TIFF, BMP) are allowed"
        )


class ExtractionFailure(ResumePipelineError):
    """The underlying PDF/Word/OCR engine could not produce text."""

    def __init__(self, media_type: str, reason: str):
        self.media_type = media_type
        self.reason = reason
        if (media_type or "").startswith("image/"):
            message = OCR_HINT
        else:
            message = f"Failed to extract text: {reason}"
        super().__init__(message)


class InsufficientText(ResumePipelineError):
    def __init__(self, length: int, minimum: int, message: str | None = None):
        self.length = length
        self.minimum = minimum
        if message is None:
            message = (
                "Could not extract sufficient text from file.\n"
                f"Extracted: {length} characters\n\n" + INSUFFICIENT_TEXT_TIPS
            )
        super().__init__(message)
