import re
from dataclasses import dataclass, field
from typing import List

from models.job import JobPosting

# Fixed pattern set: English "yrs"/"years" plus the Russian forms.
YEARS_RE = re.compile(r'(\d+)\+?\s*(?:yrs|years|лет|года|г\.?)|experience\s*(\d+)', re.IGNORECASE)
ROLE_WORDS_RE = re.compile(r'developer|engineer|analyst|manager', re.IGNORECASE)
MAX_ROLE_YEARS = 10


@dataclass
class Coverage:
    have_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    have_certs: List[str] = field(default_factory=list)
    missing_certs: List[str] = field(default_factory=list)
    skill_coverage: float = 0.0
    cert_coverage: float = 1.0
    years: int = 0
    exp_factor: float = 0.0


def estimate_years(text: str) -> int:
    """Years of experience from an explicit count, else from role-word mentions.

    "5 years", "7+ yrs" and "experience 3" are read literally. Without any of
    those, every two occurrences of developer/engineer/analyst/manager count as
    one year, capped at MAX_ROLE_YEARS.
    """
    match = YEARS_RE.search(text)
    if match:
        try:
            return int(match.group(1) or match.group(2) or '0')
        except ValueError:
            return 0
    role_hits = len(ROLE_WORDS_RE.findall(text))
    return min(MAX_ROLE_YEARS, role_hits // 2)


def analyze_coverage(text: str, job: JobPosting) -> Coverage:
    """Plain substring containment of each skill and cert in already normalized text."""
    have_skills = [s for s in job.skills if s in text]
    missing_skills = [s for s in job.skills if s not in text]
    have_certs = [c for c in job.certs if c in text]
    missing_certs = [c for c in job.certs if c not in text]

    skill_coverage = len(have_skills) / max(1, len(job.skills))
    # a job without certifications is vacuously satisfied
    cert_coverage = len(have_certs) / len(job.certs) if job.certs else 1.0

    years = estimate_years(text)
    exp_factor = min(1.0, years / max(1, job.min_years))

    return Coverage(
        have_skills=have_skills,
        missing_skills=missing_skills,
        have_certs=have_certs,
        missing_certs=missing_certs,
        skill_coverage=skill_coverage,
        cert_coverage=cert_coverage,
        years=years,
        exp_factor=exp_factor,
    )
