from __future__ import annotations
import logging
import base64
import os, re, uuid
from typing import List, Optional
from contextlib import asynccontextmanager
from fastapi import FastAPI, UploadFile, File, Form, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from config import ALLOWED_MEDIA_TYPES, HOST, LOG_LEVEL, MAX_UPLOAD_BYTES, MIN_ANALYSIS_LENGTH, PORT, get_base_dir, get_database_url
from errors import ExtractionFailure, InsufficientText, UnsupportedFormat
from models import Base, Resume
from schemas import AnalysisOut, HealthOut, RankIn, RankedResumeOut, RankingOut, ResumeOut, ResumeViewOut, UploadOut
from parsers.basic_extract import extract_contact_info, extract_skills
from parsers.extract import extract_document_text
from parsers.formats import normalize_media_type
from matching.ats import analyze_resume
from matching.scorer import rank_candidates

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

BASE_DIR = get_base_dir()
engine = None
Session = sessionmaker(autoflush=False, autocommit=False, future=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Resolve storage locations and bind the database at startup."""
    global BASE_DIR, engine

    BASE_DIR = get_base_dir()
    os.makedirs(os.path.join(BASE_DIR, "resumes"), exist_ok=True)

    db_url = get_database_url(BASE_DIR)
    logger.info(f"Using base directory: {BASE_DIR}")
    logger.info(f"Database: {db_url}")
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
    engine = create_engine(db_url, future=True, connect_args=connect_args)
    Session.configure(bind=engine)

    Base.metadata.create_all(engine)

    yield
    engine.dispose()
    logger.info("Application shutting down.")


app = FastAPI(title="Resume Intake & Matcher", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _safe_filename(prefix: str, original: str) -> str:
    base = re.sub(r"[^A-Za-z0-9._-]", "_", original)
    unique = uuid.uuid4().hex[:8]
    return f"{prefix}_{unique}_{base}"


def _get_resume(s, resume_id: int) -> Resume:
    resume = s.get(Resume, resume_id)
    if not resume:
        raise HTTPException(status_code=404, detail="Resume not found")
    return resume


# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------
@app.post("/resumes/upload", response_model=UploadOut, status_code=201)
def upload_resume(
    resume: UploadFile = File(...),
    job_title: Optional[str] = Form(None),
    candidate_name: Optional[str] = Form(None),
):
    """Extract text from an uploaded resume and store it. OCR uploads can take a minute."""
    media_type = normalize_media_type(resume.content_type)
    filename = resume.filename or "resume"
    if media_type not in ALLOWED_MEDIA_TYPES:
        raise HTTPException(status_code=415, detail=str(UnsupportedFormat(media_type)))

    data = resume.file.read()
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"File exceeds {MAX_UPLOAD_BYTES // (1024 * 1024)}MB limit")

    logger.info(f"File upload started: {filename} ({len(data)} bytes, {media_type})")
    try:
        extracted = extract_document_text(data, media_type, filename)
    except UnsupportedFormat as e:
        raise HTTPException(status_code=415, detail=str(e))
    except (ExtractionFailure, InsufficientText) as e:
        logger.warning(f"Rejected {filename}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    save_path = os.path.join(BASE_DIR, "resumes", _safe_filename("resume", filename))
    with open(save_path, "wb") as f:
        f.write(data)

    with Session() as s:
        r = Resume(
            filename=filename,
            content_type=media_type,
            candidate_name=(candidate_name or "").strip() or None,
            job_title=(job_title or "").strip() or "Not Specified",
            extracted_text=extracted,
            resume_path=save_path,
        )
        try:
            s.add(r)
            s.commit()
        except Exception:
            logger.error(f"Could not store {filename}, removing {save_path}")
            os.remove(save_path)
            raise
        s.refresh(r)
        logger.info(f"Resume saved with ID: {r.id}")
        return UploadOut(
            message="Resume uploaded successfully",
            resume_id=r.id,
            filename=r.filename,
            file_type=media_type,
            text_length=len(extracted),
        )


@app.get("/resumes", response_model=List[ResumeOut])
def list_resumes():
    """All stored resumes, newest first, with contact details and skills."""
    with Session() as s:
        resumes = s.query(Resume).order_by(Resume.uploaded_at.desc(), Resume.id.desc()).all()
        out = []
        for r in resumes:
            contact = extract_contact_info(r.extracted_text)
            out.append(ResumeOut(
                id=r.id,
                filename=r.filename,
                candidate_name=r.candidate_name,
                job_title=r.job_title,
                uploaded_at=r.uploaded_at,
                email=contact.email,
                phone=contact.phone,
                skills=extract_skills(r.extracted_text),
            ))
        return out


@app.get("/resumes/{resume_id}/analyze", response_model=AnalysisOut)
def analyze(resume_id: int):
    with Session() as s:
        resume_text = _get_resume(s, resume_id).extracted_text

    if not resume_text or len(resume_text) < MIN_ANALYSIS_LENGTH:
        err = InsufficientText(
            len(resume_text or ""), MIN_ANALYSIS_LENGTH,
            "Cannot analyze: Resume text not extracted properly",
        )
        raise HTTPException(status_code=400, detail=str(err))

    return AnalysisOut(analysis=analyze_resume(resume_text))


@app.get("/resumes/{resume_id}/download")
def download_resume(resume_id: int):
    with Session() as s:
        r = _get_resume(s, resume_id)
        path, filename, media_type = r.resume_path, r.filename, r.content_type
    if not path or not os.path.exists(path):
        raise HTTPException(status_code=404, detail="Stored file not found")
    return FileResponse(path, media_type=media_type, filename=filename)


@app.get("/resumes/{resume_id}/view", response_model=ResumeViewOut)
def view_resume(resume_id: int):
    """The stored file as base64 so the browser can render it inline."""
    with Session() as s:
        r = _get_resume(s, resume_id)
        path, filename, media_type = r.resume_path, r.filename, r.content_type
    if not path or not os.path.exists(path):
        raise HTTPException(status_code=404, detail="Stored file not found")
    with open(path, "rb") as f:
        encoded = base64.b64encode(f.read()).decode("ascii")
    return ResumeViewOut(filename=filename, file_type=media_type, file_data=encoded)


@app.delete("/resumes/{resume_id}", response_model=dict)
def delete_resume(resume_id: int):
    with Session() as s:
        r = _get_resume(s, resume_id)
        path = r.resume_path
        s.delete(r)
        s.commit()
    if path and os.path.exists(path):
        os.remove(path)
    return {"message": "Resume deleted successfully"}


@app.post("/rank", response_model=RankingOut)
def rank_resumes(body: RankIn):
    """Rank every stored resume against a job description by TF-IDF similarity."""
    if not body.job_description or not body.job_description.strip():
        raise HTTPException(status_code=400, detail="Job description is required")

    with Session() as s:
        resumes = s.query(Resume).order_by(Resume.id).all()
        by_ref = {str(r.id): r for r in resumes}
        ranked = rank_candidates(
            [(ref, r.extracted_text) for ref, r in by_ref.items()],
            body.job_description,
        )
        rows = []
        for c in ranked:
            r = by_ref[c.resume_ref]
            rows.append(RankedResumeOut(
                **c.model_dump(),
                filename=r.filename,
                candidate_name=r.candidate_name,
                job_title=r.job_title,
                uploaded_at=r.uploaded_at,
            ))

    logger.info(f"Ranked {len(rows)} resumes")
    return RankingOut(ranked_resumes=rows, total_resumes=len(rows))


@app.get("/health", response_model=HealthOut)
def health():
    database = "Disconnected"
    if engine is not None:
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            database = "Connected"
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
    return HealthOut(status="OK", message="Server is running", database=database)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)
