from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc)


class Resume(Base):
    __tablename__ = "resumes"
    id = Column(Integer, primary_key=True)
    filename = Column(String, nullable=False)
    content_type = Column(String, nullable=False)
    candidate_name = Column(String, nullable=True)
    job_title = Column(String, nullable=False, default="Not Specified")
    extracted_text = Column(Text, nullable=False)
    resume_path = Column(String, nullable=True)  # uploaded bytes on disk
    uploaded_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
