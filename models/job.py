from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class MalformedJobError(ValueError):
    pass


REQUIRED_FIELDS = ('id', 'company', 'title', 'skills', 'certs', 'minYears', 'keywords')


@dataclass(frozen=True)
class JobPosting:
    id: int
    company: str
    title: str
    date: str = ''
    skills: List[str] = field(default_factory=list)
    certs: List[str] = field(default_factory=list)
    min_years: int = 0
    keywords: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'JobPosting':
        """Validate a catalog record (wire form) and build a JobPosting.

        Raises MalformedJobError when a required field is missing or has the
        wrong type; scoring must never see an incomplete job.
        """
        if not isinstance(data, dict):
            raise MalformedJobError(f"Job record must be an object, got {type(data).__name__}")
        missing = [k for k in REQUIRED_FIELDS if k not in data]
        if missing:
            raise MalformedJobError(f"Job {data.get('id', '?')} is missing fields: {', '.join(missing)}")
        for key in ('skills', 'certs', 'keywords'):
            values = data[key]
            if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                raise MalformedJobError(f"Job {data['id']}: '{key}' must be a list of strings")
        for key in ('company', 'title'):
            if not isinstance(data[key], str):
                raise MalformedJobError(f"Job {data['id']}: '{key}' must be a string")
        try:
            job_id = int(data['id'])
            min_years = int(data['minYears'])
        except (TypeError, ValueError):
            raise MalformedJobError(f"Job {data['id']}: 'id' and 'minYears' must be integers")
        if min_years < 0:
            raise MalformedJobError(f"Job {job_id}: 'minYears' must be non-negative")
        return cls(
            id=job_id,
            company=data['company'],
            title=data['title'],
            date=str(data.get('date') or ''),
            skills=list(data['skills']),
            certs=list(data['certs']),
            min_years=min_years,
            keywords=list(data['keywords']),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'company': self.company,
            'title': self.title,
            'date': self.date,
            'skills': list(self.skills),
            'certs': list(self.certs),
            'minYears': self.min_years,
            'keywords': list(self.keywords),
        }


@dataclass
class GapReport:
    missing_skills: List[str] = field(default_factory=list)
    missing_certs: List[str] = field(default_factory=list)
    exp_gap_years: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'missingSkills': list(self.missing_skills),
            'missingCerts': list(self.missing_certs),
            'expGapYears': self.exp_gap_years,
        }


@dataclass
class MatchResult:
    job_id: int
    company: str
    title: str
    date: str
    score: int
    gaps: GapReport
    # weighted composite in [0, 1] before display rounding
    raw_score: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.job_id,
            'company': self.company,
            'title': self.title,
            'date': self.date,
            'score': self.score,
            'gaps': self.gaps.to_dict(),
        }
