import logging
from typing import Iterable, List, Tuple

from parsers.basic_extract import extract_contact_info, extract_skills
from schemas import ContactInfo, RankedCandidate
from .similarity import calculate_match_score

logger = logging.getLogger(__name__)


def score_candidate(resume_ref: str, resume_text: str, job_description: str) -> RankedCandidate:
    return RankedCandidate(
        resume_ref=resume_ref,
        match_score=calculate_match_score(resume_text, job_description),
        contact_info=extract_contact_info(resume_text),
        skills=extract_skills(resume_text),
    )


def rank_candidates(candidates: Iterable[Tuple[str, str]], job_description: str) -> List[RankedCandidate]:
    """
    Score every (resume_ref, resume_text) pair against one job description.

    Resumes are processed one after another; a resume that fails to score is
    kept with a 0 match instead of aborting the batch. The result is sorted by
    match_score descending, ties in input order.
    """
    ranked: List[RankedCandidate] = []
    for ref, text in candidates:
        try:
            ranked.append(score_candidate(ref, text, job_description))
        except Exception as e:
            logger.warning(f"Scoring failed for resume {ref}: {e}")
            ranked.append(RankedCandidate(resume_ref=ref, match_score=0.0, contact_info=ContactInfo()))
    ranked.sort(key=lambda c: c.match_score, reverse=True)
    return ranked
