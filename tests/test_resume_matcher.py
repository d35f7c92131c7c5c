import pytest

from models.job import JobPosting
from models.resume_matcher import (
    CERT_WEIGHT,
    COSINE_WEIGHT,
    EXPERIENCE_WEIGHT,
    SKILL_WEIGHT,
    display_score,
    matcher,
    score_resume,
)
from models.vectors import build_vocabulary

SCENARIO_A = "I have 5 years experience as a python developer with aws and docker"


def _by_id(jobs, job_id):
    return next(j for j in jobs if j.id == job_id)


def test_weights_sum_to_one():
    assert COSINE_WEIGHT + SKILL_WEIGHT + CERT_WEIGHT + EXPERIENCE_WEIGHT == pytest.approx(1.0)


def test_display_score_rounds_half_up():
    assert display_score(0.125) == 13
    assert display_score(0.0) == 0
    assert display_score(1.0) == 100


def test_python_developer_scenario(jobs):
    vocab = build_vocabulary(jobs)
    result = score_resume(SCENARIO_A, _by_id(jobs, 1), vocab)
    assert result.job_id == 1
    assert result.title == "Senior Python Developer"
    assert set(result.gaps.missing_skills) == {"microservices", "kubernetes", "sql"}
    assert result.gaps.missing_certs == ["aws solutions architect"]
    assert result.gaps.exp_gap_years == 0
    # skills 0.5 and experience 1.0 alone contribute 0.325
    assert result.raw_score > 0.325
    assert 33 <= result.score <= 100


def test_empty_resume_scores_coverage_only(jobs):
    vocab = build_vocabulary(jobs)
    for job in jobs:
        result = score_resume("", job, vocab)
        expected = CERT_WEIGHT * (0.0 if job.certs else 1.0)
        assert result.raw_score == pytest.approx(expected)
        assert result.gaps.exp_gap_years == job.min_years
        assert result.gaps.missing_skills == job.skills


def test_absent_resume_text_is_treated_as_empty(jobs):
    vocab = build_vocabulary(jobs)
    assert score_resume(None, jobs[1], vocab).score == score_resume("", jobs[1], vocab).score


def test_experience_gap_never_negative(jobs):
    vocab = build_vocabulary(jobs)
    result = score_resume("10 years experience", _by_id(jobs, 2), vocab)
    assert result.gaps.exp_gap_years == 0


def test_role_word_estimate_drives_gap(jobs):
    vocab = build_vocabulary(jobs)
    result = score_resume("engineer engineer engineer engineer", _by_id(jobs, 3), vocab)
    assert result.gaps.exp_gap_years == 4 - 2


@pytest.mark.parametrize("text", [
    "",
    SCENARIO_A,
    "python " * 500,
    "python microservices aws docker kubernetes sql aws solutions architect 20 years backend",
    "!!! ??? ###",
])
def test_score_always_in_range(jobs, text):
    vocab = build_vocabulary(jobs)
    for job in jobs:
        assert 0 <= score_resume(text, job, vocab).score <= 100


def test_perfect_candidate_scores_high(jobs):
    job = _by_id(jobs, 1)
    vocab = build_vocabulary(jobs)
    text = " ".join(job.skills + job.keywords + job.certs) + " senior python developer tech corp 6 years"
    assert score_resume(text, job, vocab).score >= 90


def test_rank_orders_by_descending_score(jobs):
    results = matcher.rank(SCENARIO_A, jobs)
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)
    assert {r.job_id for r in results} == {1, 2, 3, 4}


def test_rank_is_stable_for_ties():
    twins = [
        JobPosting.from_dict({"id": i, "company": "Same", "title": "Same Role", "skills": ["go"],
                              "certs": [], "minYears": 1, "keywords": []})
        for i in (7, 3, 5)
    ]
    assert [r.job_id for r in matcher.rank("go 1 years", twins)] == [7, 3, 5]


def test_rank_empty_catalog():
    assert matcher.rank(SCENARIO_A, []) == []


def test_match_result_wire_form(jobs):
    result = matcher.rank(SCENARIO_A, jobs)[0]
    body = result.to_dict()
    assert set(body) == {"id", "company", "title", "date", "score", "gaps"}
    assert set(body["gaps"]) == {"missingSkills", "missingCerts", "expGapYears"}
    assert isinstance(body["score"], int)
