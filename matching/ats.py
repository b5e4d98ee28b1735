"""
Rule-based ATS (applicant tracking system) readability score.

Every rule is plain data: a regex presence test with a weight, or a boolean
predicate over the detected signals with a note. The scorer walks the tables
once; nothing here depends on state outside the input text.
"""
import re
from collections import Counter
from dataclasses import dataclass
from typing import Callable, List, Pattern, Tuple

from parsers.basic_extract import EMAIL_PATTERN, PHONE_PATTERN, extract_skills
from schemas import AnalysisResult

BASE_SCORE = 50
MAX_SCORE = 100
MAX_NOTES = 5
MAX_KEYWORDS = 8


@dataclass(frozen=True)
class SignalRule:
    name: str
    pattern: Pattern[str]
    weight: int


SIGNAL_RULES: Tuple[SignalRule, ...] = (
    SignalRule("has_email", re.compile(EMAIL_PATTERN.pattern, re.IGNORECASE | re.ASCII), 5),
    SignalRule("has_phone", PHONE_PATTERN, 5),
    SignalRule("has_summary", re.compile(r"summary|objective|about|profile", re.IGNORECASE), 5),
    SignalRule("has_experience", re.compile(r"experience|employment|work history", re.IGNORECASE), 10),
    SignalRule("has_education", re.compile(r"education|degree|university|college", re.IGNORECASE), 5),
    SignalRule("has_skills", re.compile(r"skills|technical|technologies|tools", re.IGNORECASE), 10),
    SignalRule("has_numbers", re.compile(r"\d+%|\d+\+|\$\d+|[0-9]+", re.ASCII), 5),
)

ACTION_VERBS = (
    "developed", "created", "managed", "led", "implemented",
    "designed", "built", "improved", "increased", "reduced",
)
ACTION_VERB_POINTS = 2
ACTION_VERB_CAP = 10

STOP_WORDS = frozenset(
    ["this", "that", "with", "from", "have", "been", "were", "they", "your", "will"]
)


@dataclass(frozen=True)
class ResumeSignals:
    has_email: bool = False
    has_phone: bool = False
    has_summary: bool = False
    has_experience: bool = False
    has_education: bool = False
    has_skills: bool = False
    has_numbers: bool = False
    action_verb_count: int = 0
    skill_count: int = 0


NoteRule = Tuple[Callable[[ResumeSignals], bool], Callable[[ResumeSignals], str]]

STRENGTH_RULES: Tuple[NoteRule, ...] = (
    (lambda s: s.has_email and s.has_phone, lambda s: "Complete contact information provided"),
    (lambda s: s.has_experience, lambda s: "Work experience section is present"),
    (lambda s: s.has_skills, lambda s: "Technical skills are clearly listed"),
    (lambda s: s.skill_count >= 5,
     lambda s: f"Strong technical profile with {s.skill_count} identified skills"),
    (lambda s: s.action_verb_count >= 3, lambda s: "Uses strong action verbs"),
    (lambda s: s.has_numbers, lambda s: "Includes quantifiable achievements"),
)

IMPROVEMENT_RULES: Tuple[NoteRule, ...] = (
    (lambda s: not (s.has_email and s.has_phone), lambda s: "Add complete contact information"),
    (lambda s: not s.has_summary, lambda s: "Include a professional summary"),
    (lambda s: not s.has_experience, lambda s: "Add work experience section"),
    (lambda s: not s.has_education, lambda s: "Include education background"),
    (lambda s: not s.has_skills, lambda s: "Create a dedicated skills section"),
    (lambda s: s.skill_count < 5, lambda s: "List more relevant technical skills"),
    (lambda s: s.action_verb_count < 3, lambda s: "Use more action verbs"),
    (lambda s: not s.has_numbers, lambda s: "Add quantifiable achievements"),
)

FILLER_IMPROVEMENTS = (
    "Tailor resume for specific job descriptions",
    "Keep skills section updated",
)


def count_action_verbs(text: str) -> int:
    """Number of distinct action verbs that appear anywhere in the text."""
    lowered = (text or "").lower()
    return sum(1 for verb in ACTION_VERBS if verb in lowered)


def detect_signals(text: str, skills: List[str] | None = None) -> ResumeSignals:
    text = text or ""
    if skills is None:
        skills = extract_skills(text)
    return ResumeSignals(
        **{rule.name: bool(rule.pattern.search(text)) for rule in SIGNAL_RULES},
        action_verb_count=count_action_verbs(text),
        skill_count=len(skills),
    )


def score_signals(signals: ResumeSignals) -> int:
    score = BASE_SCORE
    score += sum(rule.weight for rule in SIGNAL_RULES if getattr(signals, rule.name))
    score += min(signals.action_verb_count * ACTION_VERB_POINTS, ACTION_VERB_CAP)
    return min(score, MAX_SCORE)


def calculate_ats_score(text: str) -> int:
    return score_signals(detect_signals(text))


def _apply_notes(rules: Tuple[NoteRule, ...], signals: ResumeSignals) -> List[str]:
    return [message(signals) for applies, message in rules if applies(signals)]


def generate_feedback(signals: ResumeSignals) -> Tuple[List[str], List[str]]:
    """Return (strengths, improvements), each capped at five entries."""
    strengths = _apply_notes(STRENGTH_RULES, signals)
    improvements = _apply_notes(IMPROVEMENT_RULES, signals)
    if not improvements:
        improvements = list(FILLER_IMPROVEMENTS)
    return strengths[:MAX_NOTES], improvements[:MAX_NOTES]


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> List[str]:
    """
    Most frequent words longer than three letters, stop words removed.

    Ties keep the order in which the words first appear: Counter preserves
    insertion order and sorted() is stable.
    """
    words = re.sub(r"[^a-z\s]", " ", (text or "").lower()).split()
    freq = Counter(w for w in words if len(w) > 3 and w not in STOP_WORDS)
    ranked = sorted(freq.items(), key=lambda kv: kv[1], reverse=True)
    return [word for word, _ in ranked[:limit]]


def analyze_resume(text: str) -> AnalysisResult:
    skills = extract_skills(text)
    signals = detect_signals(text, skills)
    strengths, improvements = generate_feedback(signals)
    return AnalysisResult(
        ats_score=score_signals(signals),
        strengths=strengths,
        improvements=improvements,
        skills=skills,
        keywords=extract_keywords(text),
    )
