"""Core data models: job postings, analyses, and the records nested in them.

Stored JSON uses camelCase keys (``jobTitle``, ``analysisDate`` ...) so that
records written by the browser app stay readable. Python code uses the
snake_case attribute names; both spellings are accepted on input.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

RoleType = Literal["frontend", "backend", "fullstack", "devops", "data", "mobile", "other"]
ExperienceLevel = Literal["entry", "mid", "senior", "lead"]
Difficulty = Literal["easy", "medium", "hard"]


class _Record(BaseModel):
    """Frozen model with camelCase aliases."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class JobPosting(_Record):
    """A job listing as submitted by the user. Validated by the analyzer, not here."""

    job_title: str
    job_description: str
    company: str
    job_url: str | None = None
    location: str | None = None


class CodingQuestion(_Record):
    """One entry of the static coding-challenge catalog."""

    id: str
    question: str
    difficulty: Difficulty
    category: str
    tags: list[str] = Field(default_factory=list)
    solution: str
    code_example: str | None = None
    time_complexity: str | None = None
    space_complexity: str | None = None
    explanation: str | None = None
    hints: list[str] = Field(default_factory=list)


class InterviewQuestion(_Record):
    """A question with a model answer and delivery tips."""

    question: str
    answer: str = ""
    tips: list[str] = Field(default_factory=list)


class InterviewQuestions(_Record):
    behavioral: list[InterviewQuestion] = Field(default_factory=list)
    technical: list[InterviewQuestion] = Field(default_factory=list)
    coding: list[CodingQuestion] = Field(default_factory=list)
    system_design: list[InterviewQuestion] = Field(default_factory=list)


class CompanyInfo(_Record):
    size: str = "medium"
    industry: str = "Technology"
    culture: list[str] = Field(default_factory=list)


class ScoreBreakdown(_Record):
    required_skills_matched: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    additional_skills: list[str] = Field(default_factory=list)


class CompatibilityScore(_Record):
    """Simulated 0-100 match metric. Not computed against any candidate profile."""

    overall: int = Field(ge=0, le=100)
    skills_match: int = Field(ge=0, le=100)
    experience_level: int = Field(ge=0, le=100)
    technical_stack: int = Field(ge=0, le=100)
    culture_fit: int = Field(ge=0, le=100)
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    recommendations: list[str] = Field(default_factory=list)


class AnalysisResult(_Record):
    """Everything derived from the posting text."""

    required_skills: list[str] = Field(default_factory=list)
    preferred_skills: list[str] = Field(default_factory=list)
    experience_level: ExperienceLevel = "mid"
    technical_stack: list[str] = Field(default_factory=list)
    role_type: RoleType = "other"
    key_responsibilities: list[str] = Field(default_factory=list)
    company_info: CompanyInfo = Field(default_factory=CompanyInfo)
    interview_questions: InterviewQuestions = Field(default_factory=InterviewQuestions)
    compatibility_score: CompatibilityScore


class JobAnalysis(_Record):
    """The persisted analysis record. Created once, never edited in place."""

    id: str
    job_title: str
    job_description: str
    company: str
    analysis_date: str
    analysis: AnalysisResult


class BehavioralArea(_Record):
    questions: list[str] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)


class TechnicalArea(_Record):
    questions: list[str] = Field(default_factory=list)
    study_topics: list[str] = Field(default_factory=list)


class CodingArea(_Record):
    challenges: list[CodingQuestion] = Field(default_factory=list)
    practice_topics: list[str] = Field(default_factory=list)


class SystemDesignArea(_Record):
    questions: list[str] = Field(default_factory=list)
    concepts: list[str] = Field(default_factory=list)


class PreparationAreas(_Record):
    behavioral: BehavioralArea = Field(default_factory=BehavioralArea)
    technical: TechnicalArea = Field(default_factory=TechnicalArea)
    coding: CodingArea = Field(default_factory=CodingArea)
    system_design: SystemDesignArea = Field(default_factory=SystemDesignArea)


class InterviewPreparation(_Record):
    """A study plan regrouped from an existing analysis."""

    job_analysis_id: str
    preparation_areas: PreparationAreas = Field(default_factory=PreparationAreas)


class KVItem(BaseModel):
    """A key with its stored value, as returned by list(..., return_values=True)."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str
