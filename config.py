import os
from dotenv import load_dotenv

load_dotenv()

IS_HF = os.environ.get("SPACE_ID") is not None
DEFAULT_BASE_DIR = "/tmp/data" if IS_HF else "data"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Upload limits
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(16 * 1024 * 1024)))  # 16MB
ALLOWED_MEDIA_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/tiff",
    "image/bmp",
)

# Text floors
MIN_TEXT_LENGTH = 50
MIN_ANALYSIS_LENGTH = 100

# OCR
OCR_LANGUAGE = os.getenv("OCR_LANGUAGE", "eng")
TESSERACT_CMD = os.getenv("TESSERACT_CMD")

# Dashboard
API_URL = os.getenv("API_URL", "http://localhost:8000")

# uvicorn bind address for `python app.py`
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))


def get_base_dir() -> str:
    return os.getenv("BASE_DIR", DEFAULT_BASE_DIR)


def get_database_url(base_dir: str) -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    return f"sqlite:///{os.path.join(base_dir, 'app.db')}"
