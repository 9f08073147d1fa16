"""Turn a stored analysis into a study plan grouped by interview area."""

from collections.abc import Iterable

from jobprep.core.schemas import (
    BehavioralArea,
    CodingArea,
    InterviewPreparation,
    JobAnalysis,
    PreparationAreas,
    SystemDesignArea,
    TechnicalArea,
)

_MAX_TIPS = 6
_MAX_STUDY_TOPICS = 8


def _unique(items: Iterable[str], limit: int | None = None) -> list[str]:
    """Drop blanks and case-insensitive duplicates, keeping the first spelling."""
    seen: dict[str, str] = {}
    for item in items:
        if item:
            seen.setdefault(item.lower(), item)
    result = list(seen.values())
    return result if limit is None else result[:limit]


def build_preparation(analysis: JobAnalysis) -> InterviewPreparation:
    """Regroup an analysis into behavioral, technical, coding and system design areas.

    Pure: reads only the analysis, nothing is generated beyond regrouping.
    """
    result = analysis.analysis
    questions = result.interview_questions

    behavioral = BehavioralArea(
        questions=[q.question for q in questions.behavioral],
        tips=_unique((tip for q in questions.behavioral for tip in q.tips), _MAX_TIPS),
    )
    technical = TechnicalArea(
        questions=[q.question for q in questions.technical],
        study_topics=_unique([*result.required_skills, *result.technical_stack], _MAX_STUDY_TOPICS),
    )
    coding = CodingArea(
        challenges=list(questions.coding),
        practice_topics=_unique(
            [*(q.category for q in questions.coding), *(tag for q in questions.coding for tag in q.tags)],
        ),
    )
    system_design = SystemDesignArea(
        questions=[q.question for q in questions.system_design],
        concepts=_unique((tip for q in questions.system_design for tip in q.tips), _MAX_TIPS),
    )

    return InterviewPreparation(
        job_analysis_id=analysis.id,
        preparation_areas=PreparationAreas(
            behavioral=behavioral,
            technical=technical,
            coding=coding,
            system_design=system_design,
        ),
    )
