"""Simulated compatibility scoring for a job analysis.

There is no candidate profile anywhere in the system, so this is not a real
match. A fixed ratio (ScoringConfig.match_ratio) splits the required skills
positionally: the first floor(n * ratio) count as matched, the rest as
missing. Sub-scores come from ScoringConfig constants. Score range: 0-100.
"""

import logging
import math

from jobprep.analysis.reference import load_question_banks
from jobprep.core.config import ScoringConfig
from jobprep.core.schemas import CompatibilityScore, ScoreBreakdown

logger = logging.getLogger(__name__)


def calculate_compatibility_score(
    required_skills: list[str],
    preferred_skills: list[str],
    experience_level: str,
    config: ScoringConfig | None = None,
) -> CompatibilityScore:
    """Build the placeholder score and its breakdown.

    Args:
        required_skills: Required skills in extraction order.
        preferred_skills: Preferred skills, reported as additional skills.
        experience_level: Classified level of the posting.
        config: Scoring constants; defaults to ScoringConfig().

    Returns:
        CompatibilityScore with matched + missing == required_skills.
    """
    config = config or ScoringConfig()

    matched_count = math.floor(len(required_skills) * config.match_ratio)
    matched = required_skills[:matched_count]
    missing = required_skills[matched_count:]

    # No required skills means nothing to match against.
    skills_match = _round_half_up(matched_count / len(required_skills) * 100) if required_skills else 0
    experience_score = config.experience_scores.get(experience_level, config.default_experience_score)
    overall = _round_half_up((skills_match + experience_score + config.baseline_score) / 3)

    recommendations = generate_recommendations(missing, experience_level, preferred_skills, config)

    logger.debug(
        "Compatibility score: overall=%d skills=%d experience=%d (%d/%d skills matched)",
        overall, skills_match, experience_score, len(matched), len(required_skills),
    )

    return CompatibilityScore(
        overall=_clamp(overall),
        skills_match=_clamp(skills_match),
        experience_level=experience_score,
        technical_stack=config.technical_stack_score,
        culture_fit=config.culture_fit_score,
        breakdown=ScoreBreakdown(
            required_skills_matched=matched,
            missing_skills=missing,
            additional_skills=list(preferred_skills),
        ),
        recommendations=recommendations,
    )


def generate_recommendations(
    missing_skills: list[str],
    experience_level: str,
    preferred_skills: list[str],
    config: ScoringConfig | None = None,
) -> list[str]:
    """Template advice: missing skills, preferred skills, then experience-tier boilerplate."""
    config = config or ScoringConfig()
    templates = load_question_banks().recommendations
    recommendations: list[str] = []

    if missing_skills:
        skills = ", ".join(missing_skills[: templates.missing_limit])
        recommendations.append(templates.missing_skills.format(skills=skills))

    if preferred_skills:
        skills = ", ".join(preferred_skills[: templates.preferred_limit])
        recommendations.append(templates.preferred_skills.format(skills=skills))

    tier = experience_level if experience_level in ("entry", "mid") else "default"
    recommendations.extend(templates.tiers.get(tier, []))

    return recommendations[: config.max_recommendations]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _clamp(value: int) -> int:
    return max(0, min(100, value))
