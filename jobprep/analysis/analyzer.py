"""Analysis pipeline: one JobPosting in, one complete JobAnalysis out.

Data flow:
  1. Validate the posting (the only step that can fail)
  2. Skills (required / preferred) and technical stack
  3. Role and experience classification
  4. Responsibilities and company info
  5. Interview questions and coding challenges
  6. Simulated compatibility score
  7. Stamp id and analysis date

Pure apart from the id and timestamp: nothing is persisted here, saving is
the caller's job (see jobprep.storage.repository).
"""

import logging
import random
import string
from collections.abc import Callable
from datetime import datetime, timezone

from jobprep.analysis.extractor import (
    classify_experience,
    classify_role,
    extract_company_info,
    extract_responsibilities,
    extract_skills,
    extract_technical_stack,
)
from jobprep.analysis.questions import generate_interview_questions
from jobprep.analysis.scorer import calculate_compatibility_score
from jobprep.core.config import Settings
from jobprep.core.errors import ValidationError
from jobprep.core.schemas import AnalysisResult, JobAnalysis, JobPosting

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 9


def generate_analysis_id(now: datetime | None = None) -> str:
    """Opaque id: ``job_<epoch millis>_<9 random base36 chars>``. No collision check."""
    now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    millis = int(now.timestamp() * 1000)
    suffix = "".join(random.choices(_ID_ALPHABET, k=_ID_SUFFIX_LENGTH))
    return f"job_{millis}_{suffix}"


def validate_posting(posting: JobPosting, min_description_length: int = 50) -> None:
    """Raise ValidationError for the first missing or too-short field."""
    if not posting.job_title.strip():
        msg = "job title required"
        raise ValidationError(msg)
    if len(posting.job_description.strip()) < min_description_length:
        msg = "description too short"
        raise ValidationError(msg)
    if not posting.company.strip():
        msg = "company required"
        raise ValidationError(msg)


def build_analysis(posting: JobPosting, settings: Settings | None = None) -> AnalysisResult:
    """Run every extraction step. Deterministic for a given posting and settings."""
    settings = settings or Settings()
    title = posting.job_title
    description = posting.job_description

    required_skills = extract_skills(title, description, required=True)
    preferred_skills = extract_skills(title, description, required=False)
    technical_stack = extract_technical_stack(description)
    role_type = classify_role(title, description)
    experience_level = classify_experience(title, description)
    responsibilities = extract_responsibilities(description, settings.analysis.max_responsibilities)
    company_info = extract_company_info(description)

    logger.debug(
        "Extracted %d required / %d preferred skills, role=%s, level=%s, stack=%s",
        len(required_skills), len(preferred_skills), role_type, experience_level, technical_stack,
    )

    return AnalysisResult(
        required_skills=required_skills,
        preferred_skills=preferred_skills,
        experience_level=experience_level,
        technical_stack=technical_stack,
        role_type=role_type,
        key_responsibilities=responsibilities,
        company_info=company_info,
        interview_questions=generate_interview_questions(role_type, settings.analysis),
        compatibility_score=calculate_compatibility_score(
            required_skills, preferred_skills, experience_level, settings.scoring,
        ),
    )


def analyze(
    posting: JobPosting,
    settings: Settings | None = None,
    *,
    now: Callable[[], datetime] | None = None,
    id_factory: Callable[[datetime], str] | None = None,
) -> JobAnalysis:
    """Analyze a job posting.

    Args:
        posting: The submitted posting.
        settings: Limits and scoring constants; defaults to Settings().
        now: Clock override. Naive values are taken as UTC. Defaults to UTC now.
        id_factory: Id override, called with the analysis timestamp.

    Returns:
        A complete JobAnalysis. Title, description and company are copied verbatim.

    Raises:
        ValidationError: Title or company empty, or description too short.
    """
    settings = settings or Settings()
    validate_posting(posting, settings.analysis.min_description_length)

    result = build_analysis(posting, settings)

    timestamp = _as_utc(now() if now is not None else datetime.now(timezone.utc))
    analysis_id = (id_factory or generate_analysis_id)(timestamp)

    analysis = JobAnalysis(
        id=analysis_id,
        job_title=posting.job_title,
        job_description=posting.job_description,
        company=posting.company,
        analysis_date=_iso_timestamp(timestamp),
        analysis=result,
    )
    logger.info(
        "Analyzed '%s' at %s: %s/%s, %d required skills, score %d",
        posting.job_title, posting.company, result.role_type, result.experience_level,
        len(result.required_skills), result.compatibility_score.overall,
    )
    return analysis


def _as_utc(value: datetime) -> datetime:
    """Aware UTC datetime; a naive value is taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _iso_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing Z."""
    return _as_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")
