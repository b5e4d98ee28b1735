import logging

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer
from sklearn.metrics.pairwise import cosine_similarity

logger = logging.getLogger(__name__)

# Word runs of ASCII letters, digits and underscore, single characters included
TOKEN_PATTERN = r"[A-Za-z0-9_]+"


def idf_weights(counts) -> np.ndarray:
    """idf = 1 + ln(N / (1 + df)) per column of a document-term count matrix."""
    n_docs = counts.shape[0]
    df = (counts > 0).sum(axis=0)
    return 1.0 + np.log(n_docs / (1.0 + df))


def tfidf_cosine(text_a: str, text_b: str) -> float:
    """
    Cosine similarity (0..1) of two texts weighted by TF-IDF.

    Raw term counts are weighted by an IDF computed over exactly these two
    documents, so a term in both gets 1 + ln(2/3) and a term in one gets 1.
    A fresh vectorizer is built on every call.
    """
    vectorizer = CountVectorizer(lowercase=True, stop_words="english", token_pattern=TOKEN_PATTERN)
    counts = vectorizer.fit_transform([text_a, text_b]).toarray()
    weighted = counts * idf_weights(counts)
    # all-zero rows (no surviving terms) come back as 0 similarity
    return float(cosine_similarity(weighted[0:1], weighted[1:2])[0][0])


def calculate_match_score(resume_text: str, job_description: str) -> float:
    """Percentage match of a resume against a job description, rounded to 2 dp."""
    if not (resume_text or "").strip() or not (job_description or "").strip():
        return 0.0
    try:
        sim = tfidf_cosine(resume_text, job_description)
    except Exception as e:
        # e.g. "empty vocabulary" when both texts are only stop words
        logger.warning(f"Error calculating match score: {e}")
        return 0.0
    return round(max(0.0, min(1.0, sim)) * 100, 2)
