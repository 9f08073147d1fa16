"""Tests for the simulated compatibility score and recommendations."""

import pytest

from jobprep.analysis.scorer import calculate_compatibility_score, generate_recommendations
from jobprep.core.config import ScoringConfig

SKILLS = ["Python", "Django", "Postgresql", "Docker"]


class TestSkillSplit:
    def test_three_quarters_matched(self) -> None:
        score = calculate_compatibility_score(SKILLS, [], "mid")
        assert score.breakdown.required_skills_matched == ["Python", "Django", "Postgresql"]
        assert score.breakdown.missing_skills == ["Docker"]
        assert score.skills_match == 75

    def test_partition_is_exact(self) -> None:
        for n in range(0, 9):
            skills = [f"Skill{i}" for i in range(n)]
            b = calculate_compatibility_score(skills, [], "mid").breakdown
            assert b.required_skills_matched + b.missing_skills == skills

    def test_single_skill_is_missing(self) -> None:
        score = calculate_compatibility_score(["Go"], [], "mid")
        assert score.breakdown.required_skills_matched == []
        assert score.breakdown.missing_skills == ["Go"]
        assert score.skills_match == 0

    def test_no_required_skills(self) -> None:
        score = calculate_compatibility_score([], [], "senior")
        assert score.skills_match == 0
        assert score.overall == 53

    def test_preferred_reported_as_additional(self) -> None:
        score = calculate_compatibility_score(SKILLS, ["Redis"], "mid")
        assert score.breakdown.additional_skills == ["Redis"]

    def test_custom_ratio(self) -> None:
        score = calculate_compatibility_score(SKILLS, [], "mid", ScoringConfig(match_ratio=0.5))
        assert score.breakdown.missing_skills == ["Postgresql", "Docker"]
        assert score.skills_match == 50


class TestSubScores:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [("senior", 85), ("mid", 75), ("entry", 65), ("lead", 65)],
    )
    def test_experience_score(self, level: str, expected: int) -> None:
        assert calculate_compatibility_score(SKILLS, [], level).experience_level == expected

    def test_overall_is_mean_of_three(self) -> None:
        assert calculate_compatibility_score(SKILLS, [], "mid").overall == 75

    def test_overall_rounds_half_up(self) -> None:
        # (67 + 85 + 75) / 3 = 75.67
        score = calculate_compatibility_score(["Node.js", "Postgresql", "Docker"], [], "senior")
        assert score.skills_match == 67
        assert score.overall == 76

    def test_two_skills_mid(self) -> None:
        score = calculate_compatibility_score(["Go", "Rust"], [], "mid")
        assert score.skills_match == 50
        assert score.overall == 67

    def test_fixed_components(self) -> None:
        score = calculate_compatibility_score(SKILLS, [], "mid")
        assert score.technical_stack == 75
        assert score.culture_fit == 75

    @pytest.mark.parametrize("level", ["entry", "mid", "senior", "lead"])
    @pytest.mark.parametrize("n", [0, 1, 2, 3, 5, 12])
    def test_all_scores_in_range(self, level: str, n: int) -> None:
        score = calculate_compatibility_score([f"S{i}" for i in range(n)], [], level)
        for value in (score.overall, score.skills_match, score.experience_level,
                      score.technical_stack, score.culture_fit):
            assert 0 <= value <= 100


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------


class TestRecommendations:
    def test_missing_then_preferred_then_tier(self) -> None:
        recs = generate_recommendations(["Docker"], "senior", ["Node.js", "Postgresql"])
        assert recs == [
            "Focus on learning: Docker",
            "Consider gaining experience with: Node.js, Postgresql",
            "Prepare to discuss past technical leadership experiences",
            "Review high-level system architecture patterns",
        ]

    def test_missing_capped_at_three_names(self) -> None:
        recs = generate_recommendations(["A", "B", "C", "D"], "mid", [])
        assert recs[0] == "Focus on learning: A, B, C"

    def test_preferred_capped_at_two_names(self) -> None:
        recs = generate_recommendations([], "mid", ["A", "B", "C"])
        assert recs[0] == "Consider gaining experience with: A, B"

    def test_entry_tier(self) -> None:
        recs = generate_recommendations([], "entry", [])
        assert recs == [
            "Work on building a strong portfolio of personal projects",
            "Practice coding challenges on platforms like LeetCode",
        ]

    def test_mid_tier(self) -> None:
        recs = generate_recommendations([], "mid", [])
        assert recs == [
            "Focus on system design and architectural concepts",
            "Develop leadership and mentoring skills",
        ]

    def test_lead_uses_default_tier(self) -> None:
        assert generate_recommendations([], "lead", []) == generate_recommendations([], "senior", [])

    def test_capped_by_config(self) -> None:
        recs = generate_recommendations(["A"], "mid", ["B"], ScoringConfig(max_recommendations=1))
        assert recs == ["Focus on learning: A"]

    def test_never_more_than_five(self) -> None:
        assert len(generate_recommendations(["A"], "entry", ["B"])) <= 5
