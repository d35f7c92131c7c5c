from typing import Optional

from models.job import JobPosting

DEFAULT_NAME = '[Your Name]'
EXPERIENCE_PLACEHOLDER = '# EXPERIENCE\n- Describe your most relevant accomplishments with metrics.'


def align_cv(cv_text: Optional[str], job: JobPosting) -> str:
    """Prefix a CV with a role summary and the job's ATS keywords."""
    base = (cv_text or '').strip()
    injected = '\n'.join(f"• {w}" for w in [*job.skills, *job.keywords, *job.certs])
    return (
        f"# PROFESSIONAL SUMMARY\n"
        f"Results-driven {job.title} with hands-on experience in {', '.join(job.skills[:3])}.\n\n"
        f"# KEYWORDS TO SURFACE (ATS)\n{injected}\n\n"
        f"{base or EXPERIENCE_PLACEHOLDER}"
    )


def cover_letter(name: Optional[str], job: JobPosting) -> str:
    name = name or DEFAULT_NAME
    highlights = '\n'.join(f"- {s}" for s in job.skills[:5])
    return f"""{name}
[Address]
[City, State, ZIP]
[Email] · [Phone]
[Date]

Hiring Manager
{job.company}
[Company Address]

Dear Hiring Manager,

I am excited to apply for the {job.title} role at {job.company}. My background spans {', '.join(job.skills[:3])} and building scalable, cloud-native systems.

Highlights:
{highlights}

Thank you for your time.

Sincerely,
{name}"""
