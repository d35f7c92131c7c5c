import logging
import math
from typing import Iterable, List, Optional, Sequence

from models.coverage import analyze_coverage
from models.job import GapReport, JobPosting, MatchResult
from models.text import normalize, term_frequency, tokenize
from models.vectors import Vocabulary, build_vocabulary, cosine, job_terms, vectorize

log = logging.getLogger(__name__)

# Bag-of-words similarity blended with rule-based coverage. Weights sum to 1.
COSINE_WEIGHT = 0.35
SKILL_WEIGHT = 0.35
CERT_WEIGHT = 0.15
EXPERIENCE_WEIGHT = 0.15


def job_bag(job: JobPosting) -> str:
    return ' '.join(job_terms(job))


def display_score(score: float) -> int:
    # round half up, clamped to 0..100
    return max(0, min(100, int(math.floor(score * 100 + 0.5))))


def score_resume(resume_text: Optional[str], job: JobPosting, vocabulary: Vocabulary) -> MatchResult:
    """Score one résumé against one job using a vocabulary built from the job's catalog."""
    cv = normalize(resume_text)
    cv_vec = vectorize(term_frequency(tokenize(cv)), vocabulary)
    job_vec = vectorize(term_frequency(tokenize(job_bag(job))), vocabulary)
    sim = cosine(cv_vec, job_vec)

    cov = analyze_coverage(cv, job)
    score = (
        COSINE_WEIGHT * sim
        + SKILL_WEIGHT * cov.skill_coverage
        + CERT_WEIGHT * cov.cert_coverage
        + EXPERIENCE_WEIGHT * cov.exp_factor
    )
    gaps = GapReport(
        missing_skills=cov.missing_skills,
        missing_certs=cov.missing_certs,
        exp_gap_years=max(0, job.min_years - cov.years),
    )
    return MatchResult(
        job_id=job.id,
        company=job.company,
        title=job.title,
        date=job.date,
        score=display_score(score),
        gaps=gaps,
        raw_score=score,
    )


class ResumeMatcher:
    """Ranks every job of a catalog snapshot against one résumé."""

    def rank(self, resume_text: str, jobs: Sequence[JobPosting]) -> List[MatchResult]:
        if not jobs:
            return []
        vocabulary = build_vocabulary(jobs)
        results = [score_resume(resume_text, job, vocabulary) for job in jobs]
        # stable: equal scores keep catalog order
        results.sort(key=lambda r: -r.score)
        log.debug("Ranked %d jobs over a %d-term vocabulary", len(jobs), len(vocabulary))
        return results

    def self_similarity(self, jobs: Iterable[JobPosting]) -> List[float]:
        """Cosine of each job's own bag against itself; 1.0 for any job with vocabulary terms."""
        jobs = list(jobs)
        vocabulary = build_vocabulary(jobs)
        sims = []
        for job in jobs:
            vec = vectorize(term_frequency(tokenize(job_bag(job))), vocabulary)
            sims.append(cosine(vec, vec))
        return sims


matcher = ResumeMatcher()
