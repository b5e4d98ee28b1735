from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Contact details pulled from resume text (first match only)
class ContactInfo(CamelModel):
    email: str = "N/A"
    phone: str = "N/A"


# Candidate-facing heuristic analysis
class AnalysisResult(CamelModel):
    ats_score: int = Field(ge=0, le=100)
    strengths: List[str] = Field(default_factory=list, max_length=5)
    improvements: List[str] = Field(default_factory=list, max_length=5)
    skills: List[str] = Field(default_factory=list, max_length=12)
    keywords: List[str] = Field(default_factory=list, max_length=8)


class AnalysisOut(CamelModel):
    analysis: AnalysisResult


# One resume scored against a job description
class RankedCandidate(CamelModel):
    resume_ref: str
    match_score: float = Field(ge=0, le=100)
    contact_info: ContactInfo
    skills: List[str] = []


# Ranking row enriched with stored resume metadata
class RankedResumeOut(RankedCandidate):
    filename: Optional[str] = None
    candidate_name: Optional[str] = None
    job_title: Optional[str] = None
    uploaded_at: Optional[datetime] = None


class RankIn(CamelModel):
    job_description: str


class RankingOut(CamelModel):
    ranked_resumes: List[RankedResumeOut]
    total_resumes: int


class ResumeOut(CamelModel):
    id: int
    filename: str
    candidate_name: Optional[str] = None
    job_title: str
    uploaded_at: Optional[datetime] = None
    email: str = "N/A"
    phone: str = "N/A"
    skills: List[str] = []


class UploadOut(CamelModel):
    message: str
    resume_id: int
    filename: str
    file_type: str
    text_length: int
    success: bool = True


class ResumeViewOut(CamelModel):
    """Stored file as base64, for rendering in the browser."""
    filename: str
    file_type: str
    file_data: str


class HealthOut(CamelModel):
    status: str
    message: str
    database: str
