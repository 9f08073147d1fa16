"""Static reference tables loaded from the YAML files in ``jobprep/data``.

Tables are read once per process and validated into frozen models; treat
the returned objects as read-only.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from jobprep.core.schemas import CodingQuestion, ExperienceLevel, InterviewQuestion, RoleType

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class _Table(BaseModel):
    model_config = ConfigDict(frozen=True)


class PatternRule(_Table):
    value: str
    pattern: str


class ExperienceRule(_Table):
    level: ExperienceLevel
    pattern: str


class ChoiceRules(_Table):
    """A single-valued attribute: default plus rules where a later hit overrides an earlier one."""

    default: str
    rules: list[PatternRule] = Field(default_factory=list)


class CompanyInfoRules(_Table):
    size: ChoiceRules
    industry: ChoiceRules
    culture: list[PatternRule] = Field(default_factory=list)


class SectionHeadings(_Table):
    required: list[str]
    preferred: list[str]
    responsibilities: list[str]


class Patterns(_Table):
    technical_stacks: dict[str, list[str]]
    role_indicators: dict[RoleType, list[str]]
    experience_levels: list[ExperienceRule]
    section_headings: SectionHeadings
    fallback_responsibilities: list[str]
    company_info: CompanyInfoRules


class QuestionBank(_Table):
    base: list[InterviewQuestion] = Field(default_factory=list)
    roles: dict[str, list[InterviewQuestion]] = Field(default_factory=dict)
    fallback_role: str | None = None
    role_limit: int | None = None


class RecommendationTemplates(_Table):
    missing_skills: str
    preferred_skills: str
    missing_limit: int = 3
    preferred_limit: int = 2
    tiers: dict[str, list[str]]


class QuestionBanks(_Table):
    behavioral: QuestionBank
    technical: QuestionBank
    system_design: QuestionBank
    recommendations: RecommendationTemplates


def _read_yaml(name: str) -> Any:
    path = DATA_DIR / name
    if not path.exists():
        msg = f"Reference data file not found: {path}"
        raise FileNotFoundError(msg)
    logger.debug("Loading reference data from %s", path)
    return yaml.safe_load(path.read_text(encoding="utf-8"))


@lru_cache(maxsize=1)
def load_skill_table() -> dict[str, tuple[str, ...]]:
    """Skill keywords by category, in declaration order."""
    raw: dict[str, list[str]] = _read_yaml("skills.yaml") or {}
    return {category: tuple(str(kw).lower() for kw in keywords) for category, keywords in raw.items()}


@lru_cache(maxsize=1)
def load_patterns() -> Patterns:
    return Patterns.model_validate(_read_yaml("patterns.yaml"))


@lru_cache(maxsize=1)
def load_question_banks() -> QuestionBanks:
    return QuestionBanks.model_validate(_read_yaml("question_banks.yaml"))


@lru_cache(maxsize=1)
def load_coding_catalog() -> tuple[CodingQuestion, ...]:
    """The coding-challenge catalog in file order. Ids must be unique."""
    entries = [CodingQuestion.model_validate(item) for item in _read_yaml("coding_questions.yaml") or []]
    ids = [q.id for q in entries]
    if len(ids) != len(set(ids)):
        msg = f"Duplicate ids in coding catalog: {sorted(i for i in set(ids) if ids.count(i) > 1)}"
        raise ValueError(msg)
    return tuple(entries)
