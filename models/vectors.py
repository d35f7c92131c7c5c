from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity

from models.job import JobPosting
from models.text import tokenize

Vocabulary = Tuple[str, ...]


def job_terms(job: JobPosting) -> List[str]:
    """Terms a job contributes, in field order: skills, keywords, title tokens, company."""
    return [*job.skills, *job.keywords, *tokenize(job.title), job.company.lower()]


def build_vocabulary(jobs: Iterable[JobPosting]) -> Vocabulary:
    """Deduplicated, first-seen ordered vocabulary for one catalog snapshot.

    Certifications are deliberately not vocabulary terms. The result is a
    tuple so a snapshot can be handed to concurrent scorers without copying.
    """
    terms = (term.lower() for job in jobs for term in job_terms(job))
    return tuple(dict.fromkeys(terms))


def vectorize(tf: Dict[str, float], vocabulary: Sequence[str]) -> np.ndarray:
    return np.array([tf.get(term, 0.0) for term in vocabulary], dtype=float)


def cosine(a: np.ndarray, b: np.ndarray) -> float:
    # all-zero (or zero-length) vectors have no direction; treat as no similarity
    if not np.any(a) or not np.any(b):
        return 0.0
    sim = cosine_similarity(np.asarray(a).reshape(1, -1), np.asarray(b).reshape(1, -1))
    return float(min(1.0, max(0.0, sim[0][0])))
