"""Interview question generation from the static question banks.

Concatenation order per category:
  - behavioral:    base questions, then role-specific
  - technical:     role-specific (first ``role_limit``), then base
  - system design: role-specific (base if role has no bank), then base

Coding challenges are selected from the catalog, never generated.
"""

import logging

from jobprep.analysis.catalog import get_coding_questions_by_difficulty, get_question
from jobprep.analysis.reference import QuestionBank, load_question_banks
from jobprep.core.config import AnalysisConfig
from jobprep.core.schemas import CodingQuestion, InterviewQuestion, InterviewQuestions

logger = logging.getLogger(__name__)

# Catalog ids of the role-dependent challenges.
_SERVER_SIDE_CHALLENGES = ("2", "6")  # rate limiter, BST
_CLIENT_SIDE_CHALLENGES = ("4", "5")  # debounce, find pairs
_SERVER_SIDE_ROLES = ("backend", "fullstack")


def generate_behavioral_questions(role_type: str, limit: int = 7) -> list[InterviewQuestion]:
    bank = load_question_banks().behavioral
    return [*bank.base, *bank.roles.get(role_type, [])][:limit]


def generate_technical_questions(role_type: str, limit: int = 7) -> list[InterviewQuestion]:
    bank = load_question_banks().technical
    role_questions = _role_bank(bank, role_type)
    if bank.role_limit is not None:
        role_questions = role_questions[: bank.role_limit]
    return [*role_questions, *bank.base][:limit]


def generate_system_design_questions(role_type: str, limit: int = 2) -> list[InterviewQuestion]:
    bank = load_question_banks().system_design
    role_questions = bank.roles.get(role_type) or bank.base
    return [*role_questions, *bank.base][:limit]


def select_coding_questions(role_type: str, limit: int = 3) -> list[CodingQuestion]:
    """Pick challenges: one easy, two role-dependent, one hard if room, capped at ``limit``."""
    selected: list[CodingQuestion] = []

    easy = get_coding_questions_by_difficulty("easy")
    if easy:
        selected.append(easy[0])

    role_ids = _SERVER_SIDE_CHALLENGES if role_type in _SERVER_SIDE_ROLES else _CLIENT_SIDE_CHALLENGES
    selected.extend(get_question(question_id) for question_id in role_ids)

    hard = get_coding_questions_by_difficulty("hard")
    if len(selected) < 4 and hard:
        selected.append(hard[0])

    return selected[:limit]


def generate_interview_questions(role_type: str, config: AnalysisConfig | None = None) -> InterviewQuestions:
    """Assemble all four question categories for a role."""
    config = config or AnalysisConfig()
    questions = InterviewQuestions(
        behavioral=generate_behavioral_questions(role_type, config.max_behavioral),
        technical=generate_technical_questions(role_type, config.max_technical),
        coding=select_coding_questions(role_type, config.max_coding),
        system_design=generate_system_design_questions(role_type, config.max_system_design),
    )
    logger.debug(
        "Generated questions for role '%s': %d behavioral, %d technical, %d coding, %d system design",
        role_type,
        len(questions.behavioral),
        len(questions.technical),
        len(questions.coding),
        len(questions.system_design),
    )
    return questions


def _role_bank(bank: QuestionBank, role_type: str) -> list[InterviewQuestion]:
    if role_type in bank.roles:
        return list(bank.roles[role_type])
    if bank.fallback_role is not None:
        return list(bank.roles.get(bank.fallback_role, []))
    return []
